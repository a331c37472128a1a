"""미션, KPI, 프로젝트 API 테스트."""

import uuid

from httpx import AsyncClient

from tests.conftest import auth_header

MISSIONS = "/api/v1/app/missions"
PROJECTS = "/api/v1/app/projects"


def mission_body(**kwargs) -> dict:
    body = {
        "mission_name": "상반기 매출 확대",
        "assignee": "김팀장",
        "department": "개발팀",
        "start_date": "2025-01-01",
        "end_date": "2025-06-30",
        "status": "진행중",
        "progress_rate": 40,
        "kpis": [
            {"kpi_name": "신규 고객", "target_value": 100, "current_value": 150, "unit": "명"},
            {"kpi_name": "매출", "target_value": 3, "current_value": 1, "unit": "억"},
        ],
    }
    body.update(kwargs)
    return body


class TestMissions:
    """미션 CRUD 테스트."""

    async def test_create_with_kpis(self, client: AsyncClient, manager_token, company):
        res = await client.post(MISSIONS, json=mission_body(), headers=auth_header(manager_token))
        assert res.status_code == 201
        data = res.json()
        assert data["company_id"] == str(company.id)
        kpis = {k["kpi_name"]: k for k in data["kpis"]}
        assert kpis["신규 고객"]["achievement_rate"] == 150.0
        assert kpis["신규 고객"]["bar_width"] == 100.0
        assert kpis["매출"]["achievement_rate"] == 33.3

    async def test_end_before_start(self, client: AsyncClient, manager_token):
        res = await client.post(
            MISSIONS, json=mission_body(start_date="2025-06-30", end_date="2025-01-01"), headers=auth_header(manager_token)
        )
        assert res.status_code == 400

    async def test_invalid_status(self, client: AsyncClient, manager_token):
        res = await client.post(MISSIONS, json=mission_body(status="보류"), headers=auth_header(manager_token))
        assert res.status_code == 422

    async def test_user_cannot_create(self, client: AsyncClient, dev_token):
        """일반 직원은 미션 생성 불가."""
        res = await client.post(MISSIONS, json=mission_body(), headers=auth_header(dev_token))
        assert res.status_code == 403

    async def test_list_filters(self, client: AsyncClient, manager_token, dev_token):
        await client.post(MISSIONS, json=mission_body(), headers=auth_header(manager_token))
        await client.post(
            MISSIONS,
            json=mission_body(mission_name="영업 미션", department="영업팀", assignee="박영업", status="완료", kpis=[]),
            headers=auth_header(manager_token),
        )

        res = await client.get(MISSIONS, params={"status": "완료"}, headers=auth_header(manager_token))
        assert [m["mission_name"] for m in res.json()] == ["영업 미션"]

        # 일반 직원은 본인 부서 미션만
        res = await client.get(MISSIONS, headers=auth_header(dev_token))
        assert [m["mission_name"] for m in res.json()] == ["상반기 매출 확대"]

    async def test_other_company_not_found(self, client: AsyncClient, operator_token, manager_token, other_company):
        res = await client.post(
            MISSIONS, json=mission_body(company_id=str(other_company.id)), headers=auth_header(operator_token)
        )
        mission_id = res.json()["id"]
        res = await client.get(f"{MISSIONS}/{mission_id}", headers=auth_header(manager_token))
        assert res.status_code == 404

    async def test_update(self, client: AsyncClient, manager_token):
        res = await client.post(MISSIONS, json=mission_body(), headers=auth_header(manager_token))
        mission_id = res.json()["id"]
        res = await client.put(
            f"{MISSIONS}/{mission_id}", json={"progress_rate": 80, "status": "완료"}, headers=auth_header(manager_token)
        )
        assert res.status_code == 200
        assert res.json()["progress_rate"] == 80
        assert len(res.json()["kpis"]) == 2

    async def test_delete_removes_kpis(self, client: AsyncClient, manager_token):
        """미션 삭제 시 KPI도 삭제."""
        res = await client.post(MISSIONS, json=mission_body(), headers=auth_header(manager_token))
        mission = res.json()
        res = await client.delete(f"{MISSIONS}/{mission['id']}", headers=auth_header(manager_token))
        assert res.status_code == 204

        res = await client.get(f"{MISSIONS}/{mission['id']}", headers=auth_header(manager_token))
        assert res.status_code == 404
        kpi_id = mission["kpis"][0]["id"]
        res = await client.put(f"{MISSIONS}/kpis/{kpi_id}", json={"current_value": 1}, headers=auth_header(manager_token))
        assert res.status_code == 404


class TestKpis:
    """KPI 테스트."""

    async def test_add_update_delete(self, client: AsyncClient, manager_token):
        res = await client.post(MISSIONS, json=mission_body(kpis=[]), headers=auth_header(manager_token))
        mission_id = res.json()["id"]

        res = await client.post(
            f"{MISSIONS}/{mission_id}/kpis",
            json={"kpi_name": "계약", "target_value": 10, "unit": "건"},
            headers=auth_header(manager_token),
        )
        assert res.status_code == 201
        kpi = res.json()
        assert kpi["achievement_rate"] == 0.0

        res = await client.put(
            f"{MISSIONS}/kpis/{kpi['id']}", json={"current_value": 5}, headers=auth_header(manager_token)
        )
        assert res.status_code == 200
        assert res.json()["achievement_rate"] == 50.0

        res = await client.delete(f"{MISSIONS}/kpis/{kpi['id']}", headers=auth_header(manager_token))
        assert res.status_code == 204

        res = await client.get(f"{MISSIONS}/{mission_id}", headers=auth_header(manager_token))
        assert res.json()["kpis"] == []

    async def test_zero_target(self, client: AsyncClient, manager_token):
        res = await client.post(
            MISSIONS,
            json=mission_body(kpis=[{"kpi_name": "기타", "target_value": 0, "current_value": 3, "unit": "건"}]),
            headers=auth_header(manager_token),
        )
        assert res.json()["kpis"][0]["achievement_rate"] == 0.0

    async def test_missing_kpi(self, client: AsyncClient, manager_token):
        res = await client.delete(f"{MISSIONS}/kpis/{uuid.uuid4()}", headers=auth_header(manager_token))
        assert res.status_code == 404


def project_body(**kwargs) -> dict:
    body = {
        "project_name": "ERP Migration",
        "department": "개발팀",
        "manager": "김팀장",
        "target_end_date": "2025-09-30",
        "progress_rate": 30,
    }
    body.update(kwargs)
    return body


class TestProjects:
    """프로젝트 테스트."""

    async def test_create_and_search(self, client: AsyncClient, manager_token):
        await client.post(PROJECTS, json=project_body(), headers=auth_header(manager_token))
        await client.post(
            PROJECTS, json=project_body(project_name="홈페이지 개편", status="완료"), headers=auth_header(manager_token)
        )

        res = await client.get(PROJECTS, params={"q": "erp"}, headers=auth_header(manager_token))
        assert [p["project_name"] for p in res.json()] == ["ERP Migration"]

        res = await client.get(PROJECTS, params={"status": "완료"}, headers=auth_header(manager_token))
        assert [p["project_name"] for p in res.json()] == ["홈페이지 개편"]

    async def test_revised_end_date_clearable(self, client: AsyncClient, manager_token):
        res = await client.post(
            PROJECTS, json=project_body(revised_end_date="2025-12-31"), headers=auth_header(manager_token)
        )
        project_id = res.json()["id"]
        assert res.json()["revised_end_date"] == "2025-12-31"

        res = await client.put(
            f"{PROJECTS}/{project_id}", json={"revised_end_date": None}, headers=auth_header(manager_token)
        )
        assert res.status_code == 200
        assert res.json()["revised_end_date"] is None

    async def test_progress_out_of_range(self, client: AsyncClient, manager_token):
        res = await client.post(PROJECTS, json=project_body(progress_rate=120), headers=auth_header(manager_token))
        assert res.status_code == 422

    async def test_user_reads_but_cannot_write(self, client: AsyncClient, manager_token, dev_token):
        res = await client.post(PROJECTS, json=project_body(), headers=auth_header(manager_token))
        project_id = res.json()["id"]

        res = await client.get(PROJECTS, headers=auth_header(dev_token))
        assert len(res.json()) == 1
        res = await client.delete(f"{PROJECTS}/{project_id}", headers=auth_header(dev_token))
        assert res.status_code == 403

    async def test_delete(self, client: AsyncClient, manager_token):
        res = await client.post(PROJECTS, json=project_body(), headers=auth_header(manager_token))
        res = await client.delete(f"{PROJECTS}/{res.json()['id']}", headers=auth_header(manager_token))
        assert res.status_code == 204
        res = await client.get(PROJECTS, headers=auth_header(manager_token))
        assert res.json() == []
