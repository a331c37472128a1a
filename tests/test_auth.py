"""인증 API 테스트, 로그인, 로그아웃, /me, 비밀번호 변경.

Auth API tests: login sets the session cookie, the cookie or a Bearer
header authenticates, logout clears it, and password change.
"""

from httpx import AsyncClient

from tests.conftest import auth_header

AUTH = "/api/v1/auth"


class TestLogin:
    """로그인 테스트."""

    async def test_login_success_sets_cookie(self, client: AsyncClient, operator_user, company):
        """로그인 성공 시 세션 쿠키와 주체 정보 반환."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "Admin@Test.com",
            "password": "admin123!",
        })
        assert res.status_code == 200
        data = res.json()
        assert data["token"]
        assert data["user"]["role"] == "operator"
        assert data["user"]["company_name"] == "테스트 회사"
        assert data["user"]["department"] is None
        assert "auth-token" in res.cookies

        set_cookie = res.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "samesite=lax" in set_cookie

    async def test_login_wrong_password(self, client: AsyncClient, operator_user):
        """잘못된 비밀번호로 로그인 실패."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "admin@test.com",
            "password": "wrong_password",
        })
        assert res.status_code == 401

    async def test_login_unknown_email(self, client: AsyncClient, operator_user):
        res = await client.post(f"{AUTH}/login", json={
            "email": "nobody@test.com",
            "password": "admin123!",
        })
        assert res.status_code == 401

    async def test_login_without_password_set(self, client: AsyncClient, db, dev_user):
        """비밀번호가 없는 직원은 로그인 불가."""
        dev_user.email = "dev@test.com"
        await db.flush()
        res = await client.post(f"{AUTH}/login", json={
            "email": "dev@test.com",
            "password": "anything",
        })
        assert res.status_code == 401


class TestSession:
    """세션 인증 테스트."""

    async def test_cookie_session(self, client: AsyncClient, operator_user):
        """로그인 후 쿠키만으로 /me 접근."""
        await client.post(f"{AUTH}/login", json={"email": "admin@test.com", "password": "admin123!"})
        res = await client.get(f"{AUTH}/me")
        assert res.status_code == 200
        assert res.json()["employee_name"] == "운영자"

    async def test_bearer_session(self, client: AsyncClient, manager_token):
        res = await client.get(f"{AUTH}/me", headers=auth_header(manager_token))
        assert res.status_code == 200
        data = res.json()
        assert data["role"] == "manager"
        assert data["department"] == "개발팀"

    async def test_no_token(self, client: AsyncClient):
        """토큰 없이 접근 시 401."""
        res = await client.get(f"{AUTH}/me")
        assert res.status_code == 401

    async def test_invalid_token(self, client: AsyncClient):
        res = await client.get(f"{AUTH}/me", headers=auth_header("not-a-token"))
        assert res.status_code == 401

    async def test_logout_clears_cookie(self, client: AsyncClient, operator_user):
        await client.post(f"{AUTH}/login", json={"email": "admin@test.com", "password": "admin123!"})
        res = await client.post(f"{AUTH}/logout")
        assert res.status_code == 200
        assert "auth-token" not in client.cookies

        res = await client.get(f"{AUTH}/me")
        assert res.status_code == 401


class TestChangePassword:
    """비밀번호 변경 테스트."""

    async def test_change_password(self, client: AsyncClient, operator_user, operator_token):
        res = await client.post(
            f"{AUTH}/change-password",
            json={"current_password": "admin123!", "new_password": "newpass123"},
            headers=auth_header(operator_token),
        )
        assert res.status_code == 200

        res = await client.post(f"{AUTH}/login", json={"email": "admin@test.com", "password": "newpass123"})
        assert res.status_code == 200

    async def test_wrong_current_password(self, client: AsyncClient, operator_token):
        res = await client.post(
            f"{AUTH}/change-password",
            json={"current_password": "wrong", "new_password": "newpass123"},
            headers=auth_header(operator_token),
        )
        assert res.status_code == 400

    async def test_new_password_too_short(self, client: AsyncClient, operator_token):
        """6자 미만 비밀번호는 422."""
        res = await client.post(
            f"{AUTH}/change-password",
            json={"current_password": "admin123!", "new_password": "abc"},
            headers=auth_header(operator_token),
        )
        assert res.status_code == 422


class TestHealth:
    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}
