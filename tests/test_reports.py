"""일일 보고서 API 테스트.

Daily report API tests: batch submission and replacement, leave
exclusivity, identity fallback, scope enforcement, the complete list
with placeholders, single-row edits, the legacy delete and export.
"""

from httpx import AsyncClient

from tests.conftest import auth_header

REPORTS = "/api/v1/app/reports"
DAY = "2025-03-14"


def entry(name: str, overview: str, rate: int = 80, **kwargs) -> dict:
    values = {
        "report_date": DAY,
        "employee_name": name,
        "department": "개발팀",
        "work_overview": overview,
        "progress_goal": "목표",
        "achievement_rate": rate,
    }
    values.update(kwargs)
    return values


async def submit(client: AsyncClient, token: str, reports: list[dict], is_update: bool = False):
    return await client.post(
        REPORTS, json={"reports": reports, "is_update": is_update}, headers=auth_header(token)
    )


async def stored(client: AsyncClient, token: str, **params) -> list[dict]:
    params.setdefault("start_date", DAY)
    params.setdefault("end_date", DAY)
    res = await client.get(REPORTS, params=params, headers=auth_header(token))
    assert res.status_code == 200
    return res.json()


class TestSubmit:
    """보고서 제출 테스트."""

    async def test_submit_batch(self, client: AsyncClient, dev_token):
        res = await submit(client, dev_token, [entry("이개발", "API 개발"), entry("이개발", "코드 리뷰", 60)])
        assert res.status_code == 201
        data = res.json()
        assert data["saved_count"] == 2
        assert data["report_date"] == DAY
        assert "등록" in data["message"]

        rows = await stored(client, dev_token)
        assert sorted(r["work_overview"] for r in rows) == ["API 개발", "코드 리뷰"]

    async def test_empty_batch_rejected(self, client: AsyncClient, dev_token):
        """내용이 없는 배치는 400, 아무것도 저장되지 않음."""
        res = await submit(client, dev_token, [entry("이개발", "", 0, progress_goal="")])
        assert res.status_code == 400
        assert "저장할 내용이 없습니다" in res.json()["detail"]
        assert await stored(client, dev_token) == []

    async def test_placeholder_only_rejected(self, client: AsyncClient, dev_token):
        res = await submit(client, dev_token, [entry("이개발", "작성 안됨", 0, remarks="작성 안됨")])
        assert res.status_code == 400

    async def test_negative_rate(self, client: AsyncClient, dev_token):
        """음수 달성률은 스키마 검증에서 422."""
        res = await submit(client, dev_token, [entry("이개발", "API 개발", -5)])
        assert res.status_code == 422

    async def test_mixed_dates(self, client: AsyncClient, dev_token):
        res = await submit(
            client, dev_token, [entry("이개발", "API 개발"), entry("이개발", "배포", report_date="2025-03-15")]
        )
        assert res.status_code == 400

    async def test_leave_is_exclusive(self, client: AsyncClient, dev_token):
        """연차가 있으면 그 직원은 연차 한 건만 저장."""
        res = await submit(client, dev_token, [entry("이개발", "API 개발"), entry("이개발", "연차")])
        assert res.status_code == 201
        assert res.json()["saved_count"] == 1

        [row] = await stored(client, dev_token)
        assert row["work_overview"] == "연차"
        assert row["achievement_rate"] == 0
        assert row["progress_goal"] == "-"
        assert row["remarks"] == "연차"

    async def test_user_department_forced(self, client: AsyncClient, dev_token):
        """일반 직원은 본인 부서로만 작성."""
        await submit(client, dev_token, [entry("이개발", "API 개발", department="영업팀")])
        [row] = await stored(client, dev_token)
        assert row["department"] == "개발팀"

    async def test_employee_row_overrides_name(self, client: AsyncClient, manager_token, dev_user):
        """employee_id가 있으면 이름과 부서는 직원 정보 기준."""
        await submit(client, manager_token, [
            entry("잘못된이름", "API 개발", employee_id=str(dev_user.id), department="영업팀"),
        ])
        [row] = await stored(client, manager_token)
        assert row["employee_name"] == "이개발"
        assert row["department"] == "개발팀"
        assert row["employee_id"] == str(dev_user.id)

    async def test_employee_out_of_scope(self, client: AsyncClient, dev_token, sales_user):
        """범위 밖 직원 ID는 404, 저장 없음."""
        res = await submit(client, dev_token, [entry("박영업", "미팅", employee_id=str(sales_user.id))])
        assert res.status_code == 404
        assert await stored(client, dev_token) == []

    async def test_operator_picks_company(
        self, client: AsyncClient, operator_token, company_manager_token, other_company
    ):
        res = await submit(client, operator_token, [
            entry("최외부", "지원 업무", company_id=str(other_company.id)),
        ])
        assert res.status_code == 201
        assert await stored(client, company_manager_token) == []
        rows = await stored(client, operator_token, company_id=str(other_company.id))
        assert [r["company_id"] for r in rows] == [str(other_company.id)]


class TestReplace:
    """is_update 교체 테스트."""

    async def test_replace_is_idempotent(self, client: AsyncClient, manager_token):
        """같은 교체를 두 번 해도 결과는 제출한 항목 그대로."""
        await submit(client, manager_token, [entry("이개발", "API 개발"), entry("이개발", "코드 리뷰")])
        for _ in range(2):
            res = await submit(client, manager_token, [entry("이개발", "배포 준비", 90)], is_update=True)
            assert res.status_code == 201
            assert "수정" in res.json()["message"]

        rows = await stored(client, manager_token)
        assert [(r["work_overview"], r["achievement_rate"]) for r in rows] == [("배포 준비", 90)]

    async def test_replace_leaves_other_employees(self, client: AsyncClient, manager_token):
        await submit(client, manager_token, [
            entry("이개발", "API 개발"),
            entry("박영업", "미팅", department="영업팀"),
        ])
        await submit(client, manager_token, [entry("이개발", "연차")], is_update=True)

        rows = await stored(client, manager_token)
        assert sorted((r["employee_name"], r["work_overview"]) for r in rows) == [
            ("박영업", "미팅"),
            ("이개발", "연차"),
        ]

    async def test_mixed_batch_matches_by_name(self, client: AsyncClient, manager_token, dev_user):
        """ID 없는 항목이 섞이면 배치 전체가 이름으로 매칭."""
        await submit(client, manager_token, [entry("이개발", "API 개발", employee_id=str(dev_user.id))])
        await submit(client, manager_token, [
            entry("이개발", "버그 수정", employee_id=str(dev_user.id)),
            entry("박영업", "미팅", department="영업팀"),
        ], is_update=True)

        rows = await stored(client, manager_token)
        assert sorted(r["work_overview"] for r in rows) == ["미팅", "버그 수정"]

    async def test_user_replace_stays_in_department(self, client: AsyncClient, manager_token, dev_token):
        """일반 직원의 교체는 다른 부서의 같은 이름 행을 지우지 않음."""
        await submit(client, manager_token, [entry("김철수", "영업 지원", department="영업팀")])
        await submit(client, dev_token, [entry("김철수", "개발 지원")], is_update=True)

        rows = await stored(client, manager_token)
        assert sorted((r["department"], r["work_overview"]) for r in rows) == [
            ("개발팀", "개발 지원"),
            ("영업팀", "영업 지원"),
        ]


class TestReadScope:
    """읽기 범위 테스트."""

    async def test_user_cannot_widen(self, client: AsyncClient, dev_token, sales_token):
        await submit(client, sales_token, [entry("박영업", "미팅")])
        await submit(client, dev_token, [entry("이개발", "API 개발")])

        assert [r["employee_name"] for r in await stored(client, dev_token)] == ["이개발"]
        assert await stored(client, dev_token, department="영업팀") == []

    async def test_manager_reads_company(self, client: AsyncClient, manager_token, sales_token):
        await submit(client, sales_token, [entry("박영업", "미팅")])
        rows = await stored(client, manager_token, department="영업팀")
        assert [r["employee_name"] for r in rows] == ["박영업"]

    async def test_unauthenticated(self, client: AsyncClient):
        res = await client.get(REPORTS)
        assert res.status_code == 401


class TestCompleteList:
    """미제출 자리표시 목록 테스트."""

    async def test_placeholders(self, client: AsyncClient, manager_token, dev_token, sales_user):
        await submit(client, dev_token, [entry("이개발", "API 개발")])

        res = await client.get(
            f"{REPORTS}/complete", params={"report_date": DAY}, headers=auth_header(manager_token)
        )
        assert res.status_code == 200
        rows = res.json()
        by_name = {r["employee_name"]: r for r in rows}
        assert set(by_name) == {"김팀장", "이개발", "박영업"}
        assert by_name["이개발"]["is_placeholder"] is False
        assert by_name["이개발"]["employee_code"] == "1002"

        missing = by_name["박영업"]
        assert missing["is_placeholder"] is True
        assert missing["id"] is None
        assert missing["work_overview"] == "작성 안됨"
        assert missing["remarks"] == "작성 안됨"
        assert missing["achievement_rate"] == 0

        # 자리표시 행은 저장되지 않음
        assert len(await stored(client, manager_token)) == 1

    async def test_sorted_by_department_then_code(self, client: AsyncClient, manager_token, dev_user, sales_user):
        res = await client.get(
            f"{REPORTS}/complete", params={"report_date": DAY}, headers=auth_header(manager_token)
        )
        assert [r["employee_code"] for r in res.json()] == ["1001", "1002", "2001"]

    async def test_name_filter(self, client: AsyncClient, manager_token, dev_user, sales_user):
        res = await client.get(
            f"{REPORTS}/complete",
            params={"report_date": DAY, "employee_name": "이개발"},
            headers=auth_header(manager_token),
        )
        assert [r["employee_name"] for r in res.json()] == ["이개발"]

        # 이름 필터는 목록 API 전체에서 완전 일치
        res = await client.get(
            f"{REPORTS}/complete",
            params={"report_date": DAY, "employee_name": "개발"},
            headers=auth_header(manager_token),
        )
        assert res.json() == []

    async def test_user_sees_department_only(self, client: AsyncClient, dev_token, manager_user, sales_user):
        res = await client.get(f"{REPORTS}/complete", params={"report_date": DAY}, headers=auth_header(dev_token))
        assert {r["employee_name"] for r in res.json()} == {"김팀장", "이개발"}

    async def test_export_excel(self, client: AsyncClient, manager_token, dev_token, sales_user):
        """엑셀 다운로드."""
        await submit(client, dev_token, [entry("이개발", "API 개발")])
        res = await client.get(f"{REPORTS}/export", params={"report_date": DAY}, headers=auth_header(manager_token))
        assert res.status_code == 200
        assert "spreadsheetml" in res.headers["content-type"]
        assert f"daily_reports_{DAY}.xlsx" in res.headers["content-disposition"]
        assert res.content[:2] == b"PK"


class TestAttendance:
    async def test_attendance(self, client: AsyncClient, dev_token):
        await submit(client, dev_token, [entry("이개발", "API 개발", 80), entry("이개발", "리뷰", 60)])
        await submit(client, dev_token, [entry("이개발", "연차", report_date="2025-03-15")])
        await submit(client, dev_token, [entry("이개발", "배포", 100, report_date="2025-03-17")])

        res = await client.get(
            f"{REPORTS}/attendance",
            params={"start_date": "2025-03-01", "end_date": "2025-03-31"},
            headers=auth_header(dev_token),
        )
        assert res.status_code == 200
        [stats] = res.json()
        assert stats["working_days"] == 2
        assert stats["annual_leave_days"] == 1
        assert stats["total_days"] == 3
        assert stats["average_achievement"] == 80


class TestEditDelete:
    """단건 수정/삭제 테스트."""

    async def _one(self, client: AsyncClient, token: str) -> dict:
        await submit(client, token, [entry("이개발", "API 개발")])
        [row] = await stored(client, token)
        return row

    async def test_edit(self, client: AsyncClient, dev_token):
        row = await self._one(client, dev_token)
        res = await client.put(
            f"{REPORTS}/{row['id']}",
            json={"work_overview": "API 개발 완료", "achievement_rate": 100},
            headers=auth_header(dev_token),
        )
        assert res.status_code == 200
        data = res.json()
        assert data["work_overview"] == "API 개발 완료"
        assert data["achievement_rate"] == 100
        assert data["progress_goal"] == "목표"

    async def test_edit_to_leave_is_canonical(self, client: AsyncClient, dev_token):
        row = await self._one(client, dev_token)
        res = await client.put(f"{REPORTS}/{row['id']}", json={"work_overview": "연차"}, headers=auth_header(dev_token))
        assert res.status_code == 200
        assert res.json()["achievement_rate"] == 0
        assert res.json()["remarks"] == "연차"

    async def test_edit_placeholder_rejected(self, client: AsyncClient, dev_token):
        row = await self._one(client, dev_token)
        res = await client.put(
            f"{REPORTS}/{row['id']}", json={"work_overview": "작성 안됨"}, headers=auth_header(dev_token)
        )
        assert res.status_code == 400

    async def test_edit_blank_rejected(self, client: AsyncClient, dev_token):
        row = await self._one(client, dev_token)
        res = await client.put(f"{REPORTS}/{row['id']}", json={"work_overview": "  "}, headers=auth_header(dev_token))
        assert res.status_code == 400

    async def test_out_of_scope_not_found(self, client: AsyncClient, dev_token, sales_token):
        """다른 부서 직원의 수정/삭제는 404."""
        row = await self._one(client, dev_token)
        res = await client.put(f"{REPORTS}/{row['id']}", json={"remarks": "x"}, headers=auth_header(sales_token))
        assert res.status_code == 404
        res = await client.delete(f"{REPORTS}/{row['id']}", headers=auth_header(sales_token))
        assert res.status_code == 404

    async def test_delete(self, client: AsyncClient, dev_token):
        row = await self._one(client, dev_token)
        res = await client.delete(f"{REPORTS}/{row['id']}", headers=auth_header(dev_token))
        assert res.status_code == 204
        assert await stored(client, dev_token) == []


class TestLegacyDelete:
    """내용 기준 레거시 삭제 테스트."""

    async def test_removes_matching_rows(self, client: AsyncClient, dev_token):
        await submit(client, dev_token, [
            entry("이개발", "API 개발"),
            entry("이개발", "코드 리뷰"),
            entry("이개발", "API 개발"),
        ])
        res = await client.post(f"{REPORTS}/delete-legacy", json={
            "report_date": DAY,
            "employee_name": "이개발",
            "work_overview": "API 개발",
        }, headers=auth_header(dev_token))
        assert res.status_code == 200
        assert res.json()["message"].startswith("2건")

        rows = await stored(client, dev_token)
        assert [r["work_overview"] for r in rows] == ["코드 리뷰"]

    async def test_nothing_matched(self, client: AsyncClient, dev_token):
        await submit(client, dev_token, [entry("이개발", "API 개발")])
        res = await client.post(f"{REPORTS}/delete-legacy", json={
            "report_date": DAY,
            "employee_name": "이개발",
            "work_overview": "없는 업무",
        }, headers=auth_header(dev_token))
        assert res.status_code == 404
        assert len(await stored(client, dev_token)) == 1

    async def test_stays_in_one_company(self, client: AsyncClient, operator_token, company, other_company):
        """같은 이름의 다른 회사 직원 보고서는 삭제되지 않음."""
        await submit(client, operator_token, [entry("김동명", "회의")])
        await submit(client, operator_token, [entry("김동명", "회의", company_id=str(other_company.id))])

        res = await client.post(f"{REPORTS}/delete-legacy", json={
            "report_date": DAY,
            "employee_name": "김동명",
            "work_overview": "회의",
        }, headers=auth_header(operator_token))
        assert res.status_code == 200
        assert res.json()["message"].startswith("1건")

        assert await stored(client, operator_token, company_id=str(company.id)) == []
        rows = await stored(client, operator_token, company_id=str(other_company.id))
        assert [r["employee_name"] for r in rows] == ["김동명"]

    async def test_operator_names_company(self, client: AsyncClient, operator_token, company, other_company):
        await submit(client, operator_token, [entry("김동명", "회의")])
        await submit(client, operator_token, [entry("김동명", "회의", company_id=str(other_company.id))])

        res = await client.post(f"{REPORTS}/delete-legacy", json={
            "report_date": DAY,
            "employee_name": "김동명",
            "work_overview": "회의",
            "company_id": str(other_company.id),
        }, headers=auth_header(operator_token))
        assert res.status_code == 200

        assert await stored(client, operator_token, company_id=str(other_company.id)) == []
        assert len(await stored(client, operator_token, company_id=str(company.id))) == 1

    async def test_department_narrows(self, client: AsyncClient, manager_token):
        await submit(client, manager_token, [
            entry("김동명", "회의"),
            entry("김동명", "회의", department="영업팀"),
        ])
        res = await client.post(f"{REPORTS}/delete-legacy", json={
            "report_date": DAY,
            "employee_name": "김동명",
            "work_overview": "회의",
            "department": "영업팀",
        }, headers=auth_header(manager_token))
        assert res.status_code == 200

        rows = await stored(client, manager_token)
        assert [r["department"] for r in rows] == ["개발팀"]

    async def test_user_cannot_widen_department(self, client: AsyncClient, manager_token, dev_token):
        await submit(client, manager_token, [entry("박영업", "미팅", department="영업팀")])
        res = await client.post(f"{REPORTS}/delete-legacy", json={
            "report_date": DAY,
            "employee_name": "박영업",
            "work_overview": "미팅",
            "department": "영업팀",
        }, headers=auth_header(dev_token))
        assert res.status_code == 404
        assert len(await stored(client, manager_token)) == 1
