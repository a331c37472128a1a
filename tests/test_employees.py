"""직원 관리 API 및 디렉터리 테스트.

Employee administration inside the caller's write scope, role
assignment rules and the read-only directory.
"""

import uuid

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.employee import Employee
from tests.conftest import auth_header, make_token

EMPLOYEES = "/api/v1/admin/employees"
DIRECTORY = "/api/v1/app"


class TestEmployeeCreate:
    """직원 생성 테스트."""

    async def test_manager_department_forced(self, client: AsyncClient, manager_token, company, other_company):
        """부서 관리자가 만든 직원은 본인 회사, 본인 부서로 고정."""
        res = await client.post(EMPLOYEES, json={
            "employee_code": "1003",
            "name": "정신입",
            "department": "영업팀",
            "company_id": str(other_company.id),
        }, headers=auth_header(manager_token))
        assert res.status_code == 201
        data = res.json()
        assert data["department"] == "개발팀"
        assert data["company_id"] == str(company.id)
        assert data["role"] == "user"
        assert data["has_password"] is False

    async def test_operator_picks_company(self, client: AsyncClient, operator_token, other_company):
        res = await client.post(EMPLOYEES, json={
            "employee_code": "5001",
            "name": "외부신입",
            "department": "영업팀",
            "company_id": str(other_company.id),
            "email": "New@Other.com",
            "password": "secret1",
        }, headers=auth_header(operator_token))
        assert res.status_code == 201
        data = res.json()
        assert data["company_id"] == str(other_company.id)
        assert data["company_name"] == "다른 회사"
        assert data["email"] == "new@other.com"
        assert data["has_password"] is True

    async def test_duplicate_code_in_company(self, client: AsyncClient, company_manager_token, dev_user):
        """같은 회사 안에서 사번 중복은 409."""
        res = await client.post(EMPLOYEES, json={
            "employee_code": "1002",
            "name": "중복",
        }, headers=auth_header(company_manager_token))
        assert res.status_code == 409

    async def test_same_code_other_company(self, client: AsyncClient, operator_token, other_company, dev_user):
        res = await client.post(EMPLOYEES, json={
            "employee_code": "1002",
            "name": "다른회사직원",
            "company_id": str(other_company.id),
        }, headers=auth_header(operator_token))
        assert res.status_code == 201

    async def test_manager_cannot_assign_manager(self, client: AsyncClient, manager_token):
        """같은 역할 부여는 403."""
        res = await client.post(EMPLOYEES, json={
            "employee_code": "1004",
            "name": "팀장후보",
            "role": "manager",
        }, headers=auth_header(manager_token))
        assert res.status_code == 403

    async def test_company_manager_assigns_manager(self, client: AsyncClient, company_manager_token):
        res = await client.post(EMPLOYEES, json={
            "employee_code": "3001",
            "name": "신임팀장",
            "department": "영업팀",
            "role": "manager",
        }, headers=auth_header(company_manager_token))
        assert res.status_code == 201
        assert res.json()["department"] == "영업팀"

    async def test_user_forbidden(self, client: AsyncClient, dev_token):
        res = await client.post(EMPLOYEES, json={"employee_code": "1", "name": "x"}, headers=auth_header(dev_token))
        assert res.status_code == 403


class TestEmployeeScope:
    """쓰기 범위 테스트."""

    async def test_manager_lists_own_department(self, client: AsyncClient, manager_token, dev_user, sales_user):
        res = await client.get(EMPLOYEES, headers=auth_header(manager_token))
        assert res.status_code == 200
        names = {e["name"] for e in res.json()}
        assert "이개발" in names
        assert "박영업" not in names

    async def test_manager_other_department_not_found(self, client: AsyncClient, manager_token, sales_user):
        """범위 밖 직원 수정은 404."""
        res = await client.put(
            f"{EMPLOYEES}/{sales_user.id}", json={"name": "변경"}, headers=auth_header(manager_token)
        )
        assert res.status_code == 404

    async def test_other_company_not_found(self, client: AsyncClient, company_manager_token, outsider):
        res = await client.delete(f"{EMPLOYEES}/{outsider.id}", headers=auth_header(company_manager_token))
        assert res.status_code == 404

    async def test_manager_cannot_move_employee(self, client: AsyncClient, manager_token, dev_user):
        """부서를 바꿔도 부서 관리자의 부서로 고정."""
        res = await client.put(
            f"{EMPLOYEES}/{dev_user.id}",
            json={"department": "영업팀", "position": "주임"},
            headers=auth_header(manager_token),
        )
        assert res.status_code == 200
        data = res.json()
        assert data["department"] == "개발팀"
        assert data["position"] == "주임"

    async def test_company_manager_cannot_edit_operator(self, client: AsyncClient, company_manager_token, operator_user):
        """같거나 높은 역할의 직원은 수정 불가."""
        res = await client.put(
            f"{EMPLOYEES}/{operator_user.id}", json={"name": "변경"}, headers=auth_header(company_manager_token)
        )
        assert res.status_code == 403

    async def test_cannot_promote_above_self(self, client: AsyncClient, company_manager_token, dev_user):
        res = await client.put(
            f"{EMPLOYEES}/{dev_user.id}", json={"role": "company_manager"}, headers=auth_header(company_manager_token)
        )
        assert res.status_code == 403

    async def test_manager_without_department_rejected(self, client: AsyncClient, db: AsyncSession, company, dev_user):
        """소속 부서가 없는 부서 관리자는 직원 관리 불가."""
        floating = Employee(
            company_id=company.id, employee_code="1999", name="무소속", position="팀장", department="", role="manager"
        )
        db.add(floating)
        await db.flush()
        token = make_token(floating, company)

        res = await client.post(EMPLOYEES, json={"employee_code": "1005", "name": "신입"}, headers=auth_header(token))
        assert res.status_code == 403
        res = await client.put(f"{EMPLOYEES}/{dev_user.id}", json={"name": "변경"}, headers=auth_header(token))
        assert res.status_code == 403
        res = await client.get(EMPLOYEES, headers=auth_header(token))
        assert res.status_code == 403


class TestEmployeeDelete:
    """직원 삭제 테스트."""

    async def test_delete(self, client: AsyncClient, company_manager_token, dev_user):
        res = await client.delete(f"{EMPLOYEES}/{dev_user.id}", headers=auth_header(company_manager_token))
        assert res.status_code == 204

        res = await client.get(EMPLOYEES, headers=auth_header(company_manager_token))
        assert "이개발" not in {e["name"] for e in res.json()}

    async def test_delete_self(self, client: AsyncClient, operator_user, operator_token):
        """본인 삭제는 400."""
        res = await client.delete(f"{EMPLOYEES}/{operator_user.id}", headers=auth_header(operator_token))
        assert res.status_code == 400

    async def test_delete_missing(self, client: AsyncClient, operator_token):
        res = await client.delete(f"{EMPLOYEES}/{uuid.uuid4()}", headers=auth_header(operator_token))
        assert res.status_code == 404


class TestResetPassword:
    async def test_reset_password(self, client: AsyncClient, manager_token, dev_user):
        """부서 관리자가 부서원 비밀번호 초기화."""
        res = await client.post(
            f"{EMPLOYEES}/{dev_user.id}/reset-password",
            json={"new_password": "reset123"},
            headers=auth_header(manager_token),
        )
        assert res.status_code == 200

        res = await client.get(EMPLOYEES, headers=auth_header(manager_token))
        dev = next(e for e in res.json() if e["name"] == "이개발")
        assert dev["has_password"] is True

    async def test_reset_out_of_scope(self, client: AsyncClient, manager_token, sales_user):
        res = await client.post(
            f"{EMPLOYEES}/{sales_user.id}/reset-password",
            json={"new_password": "reset123"},
            headers=auth_header(manager_token),
        )
        assert res.status_code == 404


class TestDirectory:
    """읽기 전용 디렉터리 테스트."""

    async def test_user_sees_own_department(self, client: AsyncClient, dev_token, manager_user, sales_user):
        res = await client.get(f"{DIRECTORY}/employees", headers=auth_header(dev_token))
        assert res.status_code == 200
        names = {e["name"] for e in res.json()}
        assert names == {"김팀장", "이개발"}

    async def test_user_cannot_widen(self, client: AsyncClient, dev_token, sales_user):
        """다른 부서를 요청하면 빈 목록."""
        res = await client.get(
            f"{DIRECTORY}/employees", params={"department": "영업팀"}, headers=auth_header(dev_token)
        )
        assert res.json() == []

    async def test_manager_sees_company(self, client: AsyncClient, manager_token, dev_user, sales_user, outsider):
        res = await client.get(f"{DIRECTORY}/employees", headers=auth_header(manager_token))
        names = {e["name"] for e in res.json()}
        assert {"이개발", "박영업"} <= names
        assert "최외부" not in names

    async def test_department_names(self, client: AsyncClient, company_manager_token, dev_user, sales_user):
        res = await client.get(f"{DIRECTORY}/departments", headers=auth_header(company_manager_token))
        assert res.status_code == 200
        assert {"개발팀", "영업팀", "경영지원팀"} <= set(res.json())
