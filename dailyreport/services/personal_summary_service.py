"""기간별 업무 요약 서비스 (규칙 기반 / AI).

Personal Summary Service. Both endpoints share the same report selection;
the AI variant falls back to the locally computed structure whenever the
LLM is not configured or fails.
"""

import calendar
import json
import logging
from datetime import date
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.prompt import Prompt
from dailyreport.models.report import DailyReport
from dailyreport.repositories.prompt_repository import prompt_repository
from dailyreport.repositories.report_repository import report_repository
from dailyreport.schemas.stats import (
    PersonalSummaryRequest,
    PersonalSummaryResponse,
    StructuredSummaryResponse,
)
from dailyreport.services.llm_service import llm_service
from dailyreport.utils.aggregation import is_regular
from dailyreport.utils.exceptions import BadRequestError, ServiceUnavailableError
from dailyreport.utils.personal_summary import SummaryFilter, build_structured_summary, render_markdown
from dailyreport.utils.reconciliation import ANNUAL_LEAVE, NOT_SUBMITTED
from dailyreport.utils.scope import Principal, Scope, narrow_scope, resolve_scope

logger = logging.getLogger(__name__)

PERSONAL_SUMMARY_PROMPT_KEY: str = "personal_summary"

DEFAULT_SYSTEM_PROMPT: str = """당신은 업무 보고서를 분석하여 구조화된 JSON 형식으로 요약하는 전문가입니다.
주어진 보고서들을 분석하여 프로젝트/업무 단위로 그룹화하고, 인원별 성과를 정리해주세요.

반드시 다음 키를 가진 JSON 객체로 답해주세요:
title, period, target, overall_achievement_rate, total_reports,
projects[{project_name, order, tasks[{title, description, assignees, frequency, date_range, achievement_rate}],
          results{period, participants, avg_achievement_rate, total_tasks, status}}],
employees[{name, department, total_reports, avg_achievement_rate, main_projects, project_count, performance}],
summary_table[{project_name, task_count, achievement_rate, status}],
special_notes[{type, content}], recommendation

프로젝트는 업무 개요의 주요 키워드나 주제로 그룹화하세요.
달성률 90% 이상은 "우수/완료", 70-89%는 "양호/진행중", 70% 미만은 "개선필요/지연"으로 분류하세요."""


def _report_dict(report: DailyReport) -> dict[str, Any]:
    return {
        "date": report.report_date.isoformat(),
        "employee_name": report.employee_name,
        "department": report.department,
        "work_overview": report.work_overview,
        "progress_goal": report.progress_goal,
        "achievement_rate": report.achievement_rate,
        "remarks": report.remarks,
    }


class PersonalSummaryService:
    """기간 요약 비즈니스 로직을 처리하는 서비스."""

    def _period(self, data: PersonalSummaryRequest) -> tuple[date, date, str]:
        """필터에서 조회 기간을 계산합니다 (Inclusive date range and its label).

        Raises:
            BadRequestError: 월 또는 기간 누락, 역순 기간 (Missing or inverted period)
        """
        if data.filter_type == "month":
            if not data.month:
                raise BadRequestError("조회할 월을 선택해주세요.")
            year, month = (int(part) for part in data.month.split("-"))
            if not 1 <= month <= 12:
                raise BadRequestError("올바른 월 형식이 아닙니다.")
            last_day: int = calendar.monthrange(year, month)[1]
            return date(year, month, 1), date(year, month, last_day), data.month

        if data.start_date is None or data.end_date is None:
            raise BadRequestError("시작일과 종료일을 모두 선택해주세요.")
        if data.end_date < data.start_date:
            raise BadRequestError("종료일은 시작일보다 빠를 수 없습니다.")
        return data.start_date, data.end_date, f"{data.start_date.isoformat()} ~ {data.end_date.isoformat()}"

    async def _collect(
        self,
        db: AsyncSession,
        principal: Principal,
        data: PersonalSummaryRequest,
    ) -> tuple[list[DailyReport], SummaryFilter]:
        start, end, label = self._period(data)
        filters = SummaryFilter(period=label, department=data.department, employee_name=data.employee_name)
        scope: Scope | None = narrow_scope(resolve_scope(principal), None, data.department)
        reports: list[DailyReport] = []
        if scope is not None:
            reports = await report_repository.list_scoped(
                db, scope, start_date=start, end_date=end, employee_name=data.employee_name
            )
        if not any(is_regular(r) for r in reports):
            raise BadRequestError("선택한 조건에 해당하는 보고서가 없습니다.")
        return reports, filters

    async def generate(
        self,
        db: AsyncSession,
        principal: Principal,
        data: PersonalSummaryRequest,
    ) -> PersonalSummaryResponse:
        """규칙 기반 Markdown 요약을 생성합니다 (Deterministic Markdown report)."""
        reports, filters = await self._collect(db, principal, data)
        return PersonalSummaryResponse(summary=render_markdown(build_structured_summary(reports, filters)))

    async def generate_ai(
        self,
        db: AsyncSession,
        principal: Principal,
        data: PersonalSummaryRequest,
    ) -> StructuredSummaryResponse:
        """LLM으로 구조화 요약을 생성하고, 실패하면 규칙 기반 요약을 반환합니다.

        Ask the LLM for the structured JSON summary. When no key is set or
        the call fails, the same structure is computed locally and returned
        with generated_by="rule".

        Raises:
            BadRequestError: 업무 내용이 있는 보고서 없음 (No regular report)
        """
        reports, filters = await self._collect(db, principal, data)
        fallback: dict[str, Any] = build_structured_summary(reports, filters)
        if not llm_service.is_configured:
            return StructuredSummaryResponse(summary=fallback, generated_by="rule")

        prompt: Prompt | None = await prompt_repository.get_by_key(db, PERSONAL_SUMMARY_PROMPT_KEY)
        system_prompt: str = prompt.system_prompt if prompt else DEFAULT_SYSTEM_PROMPT

        regular: list[dict[str, Any]] = [_report_dict(r) for r in reports if is_regular(r)]
        sentinel: list[dict[str, Any]] = [
            _report_dict(r) for r in reports if r.work_overview in (ANNUAL_LEAVE, NOT_SUBMITTED)
        ]
        user_prompt: str = (
            "다음 업무 보고서들을 분석하여 JSON 형식으로 요약해주세요:\n\n"
            f"필터 조건:\n- 기간: {filters.period}\n- 부서: {filters.target}\n"
            f"- 사원: {filters.employee_name or '전체'}\n\n"
            f"보고서 데이터:\n{json.dumps(regular, ensure_ascii=False, indent=2)}\n\n"
            f"연차 및 미작성 보고서:\n{json.dumps(sentinel, ensure_ascii=False, indent=2)}"
        )

        try:
            summary: dict[str, Any] = await llm_service.complete_json(system_prompt, user_prompt)
        except ServiceUnavailableError as exc:
            logger.warning("AI 요약 실패, 규칙 기반 요약으로 대체: %s", exc.detail)
            return StructuredSummaryResponse(summary=fallback, generated_by="rule")
        return StructuredSummaryResponse(summary=summary, generated_by="ai")


# 싱글턴 인스턴스 (Singleton instance)
personal_summary_service: PersonalSummaryService = PersonalSummaryService()
