"""회사 및 부서 관리 API 테스트.

Company and department administration: operator-only writes, name
uniqueness and delete blocking while employees remain.
"""

import uuid

from httpx import AsyncClient

from tests.conftest import auth_header

COMPANIES = "/api/v1/admin/companies"
DEPARTMENTS = "/api/v1/admin/departments"


class TestCompanies:
    """회사 CRUD 테스트."""

    async def test_create_and_list(self, client: AsyncClient, operator_token):
        res = await client.post(COMPANIES, json={"name": "새 회사"}, headers=auth_header(operator_token))
        assert res.status_code == 201
        assert res.json()["name"] == "새 회사"

        res = await client.get(COMPANIES, headers=auth_header(operator_token))
        assert res.status_code == 200
        names = [c["name"] for c in res.json()]
        assert "새 회사" in names
        assert "테스트 회사" in names

    async def test_duplicate_name(self, client: AsyncClient, operator_token):
        """같은 이름의 회사는 409."""
        res = await client.post(COMPANIES, json={"name": "테스트 회사"}, headers=auth_header(operator_token))
        assert res.status_code == 409

    async def test_rename(self, client: AsyncClient, operator_token, other_company):
        res = await client.put(
            f"{COMPANIES}/{other_company.id}", json={"name": "변경된 회사"}, headers=auth_header(operator_token)
        )
        assert res.status_code == 200
        assert res.json()["name"] == "변경된 회사"

    async def test_update_missing(self, client: AsyncClient, operator_token):
        res = await client.put(f"{COMPANIES}/{uuid.uuid4()}", json={"name": "X"}, headers=auth_header(operator_token))
        assert res.status_code == 404

    async def test_delete_blocked_by_employees(self, client: AsyncClient, operator_token, company):
        """직원이 있는 회사는 삭제 불가."""
        res = await client.delete(f"{COMPANIES}/{company.id}", headers=auth_header(operator_token))
        assert res.status_code == 409

    async def test_delete_empty_company(self, client: AsyncClient, operator_token, other_company):
        res = await client.delete(f"{COMPANIES}/{other_company.id}", headers=auth_header(operator_token))
        assert res.status_code == 204

    async def test_manager_forbidden(self, client: AsyncClient, company_manager_token):
        """운영자가 아니면 403."""
        res = await client.get(COMPANIES, headers=auth_header(company_manager_token))
        assert res.status_code == 403


class TestDepartments:
    """부서 CRUD 테스트."""

    async def test_create(self, client: AsyncClient, operator_token, company):
        res = await client.post(
            DEPARTMENTS,
            json={"company_id": str(company.id), "name": "품질팀"},
            headers=auth_header(operator_token),
        )
        assert res.status_code == 201
        data = res.json()
        assert data["name"] == "품질팀"
        assert data["company_name"] == "테스트 회사"

    async def test_duplicate_within_company(self, client: AsyncClient, operator_token, company):
        """같은 회사 안에서 부서명 중복은 409."""
        body = {"company_id": str(company.id), "name": "품질팀"}
        await client.post(DEPARTMENTS, json=body, headers=auth_header(operator_token))
        res = await client.post(DEPARTMENTS, json=body, headers=auth_header(operator_token))
        assert res.status_code == 409

    async def test_same_name_other_company(self, client: AsyncClient, operator_token, company, other_company):
        """다른 회사라면 같은 부서명 허용."""
        await client.post(
            DEPARTMENTS, json={"company_id": str(company.id), "name": "품질팀"}, headers=auth_header(operator_token)
        )
        res = await client.post(
            DEPARTMENTS,
            json={"company_id": str(other_company.id), "name": "품질팀"},
            headers=auth_header(operator_token),
        )
        assert res.status_code == 201

    async def test_unknown_company(self, client: AsyncClient, operator_token):
        res = await client.post(
            DEPARTMENTS, json={"company_id": str(uuid.uuid4()), "name": "품질팀"}, headers=auth_header(operator_token)
        )
        assert res.status_code == 404

    async def test_malformed_company_id(self, client: AsyncClient, operator_token):
        res = await client.post(
            DEPARTMENTS, json={"company_id": "abc", "name": "품질팀"}, headers=auth_header(operator_token)
        )
        assert res.status_code == 400

    async def test_delete_blocked_by_members(self, client: AsyncClient, operator_token, company, dev_user):
        """소속 직원이 있는 부서는 삭제 불가."""
        res = await client.post(
            DEPARTMENTS, json={"company_id": str(company.id), "name": "개발팀"}, headers=auth_header(operator_token)
        )
        department_id = res.json()["id"]
        res = await client.delete(f"{DEPARTMENTS}/{department_id}", headers=auth_header(operator_token))
        assert res.status_code == 409

    async def test_delete_empty(self, client: AsyncClient, operator_token, company):
        res = await client.post(
            DEPARTMENTS, json={"company_id": str(company.id), "name": "품질팀"}, headers=auth_header(operator_token)
        )
        res = await client.delete(f"{DEPARTMENTS}/{res.json()['id']}", headers=auth_header(operator_token))
        assert res.status_code == 204

    async def test_manager_lists_own_company_only(
        self, client: AsyncClient, operator_token, manager_token, company, other_company
    ):
        """관리자는 본인 회사 부서만 조회."""
        for target in (company, other_company):
            await client.post(
                DEPARTMENTS, json={"company_id": str(target.id), "name": "품질팀"}, headers=auth_header(operator_token)
            )
        res = await client.get(
            DEPARTMENTS, params={"company_id": str(other_company.id)}, headers=auth_header(manager_token)
        )
        assert res.status_code == 200
        assert [d["company_id"] for d in res.json()] == [str(company.id)]

    async def test_manager_cannot_create(self, client: AsyncClient, manager_token, company):
        res = await client.post(
            DEPARTMENTS, json={"company_id": str(company.id), "name": "품질팀"}, headers=auth_header(manager_token)
        )
        assert res.status_code == 403

    async def test_user_cannot_list(self, client: AsyncClient, dev_token):
        res = await client.get(DEPARTMENTS, headers=auth_header(dev_token))
        assert res.status_code == 403
