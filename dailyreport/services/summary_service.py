"""일일 요약 서비스, 요약 저장(upsert) 및 LLM 생성.

Daily Summary Service. A summary is keyed by (company, date, department);
saving updates the row with that key and inserts only when nothing was
updated. Generated summaries are returned even when saving fails.
"""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.prompt import Prompt
from dailyreport.models.report import DailyReport, DailySummary
from dailyreport.repositories.prompt_repository import prompt_repository
from dailyreport.repositories.report_repository import report_repository, summary_repository
from dailyreport.schemas.report import (
    SummaryGenerateRequest,
    SummaryGenerateResponse,
    SummaryResponse,
    SummaryUpsertRequest,
)
from dailyreport.services.llm_service import llm_service
from dailyreport.services.organization_service import parse_uuid
from dailyreport.utils.aggregation import is_regular, render_daily_report_text
from dailyreport.utils.exceptions import NotFoundError
from dailyreport.utils.scope import OPERATOR, USER, Principal, Scope, narrow_scope, resolve_scope

logger = logging.getLogger(__name__)

DAILY_SUMMARY_PROMPT_KEY: str = "daily_summary"
REPORTS_PLACEHOLDER: str = "{{reports}}"

DEFAULT_SYSTEM_PROMPT: str = (
    "당신은 기업의 일일업무보고를 요약하는 전문가입니다. "
    "간결하고 명확하게 핵심 내용을 전달하는 요약문을 작성합니다."
)

DEFAULT_USER_TEMPLATE: str = """다음은 회사의 일일업무보고 내용입니다. 이를 바탕으로 간결하고 명확한 일일보고 요약을 작성해주세요.

요약 작성 시 다음 사항을 준수해주세요:
1. 중요한 프로젝트나 업무를 중심으로 작성
2. 부서별 주요 업무 진행 상황을 포함
3. 완료된 업무와 진행 중인 업무를 구분하여 작성
4. 특이사항이나 이슈가 있다면 명시
5. 3-5개의 문장으로 구성

{{reports}}

위 내용을 바탕으로 일일보고 요약을 작성해주세요:"""


class SummaryService:
    """일일 요약 비즈니스 로직을 처리하는 서비스."""

    def _to_response(self, summary: DailySummary) -> SummaryResponse:
        return SummaryResponse(
            id=str(summary.id),
            company_id=str(summary.company_id),
            summary_date=summary.summary_date,
            department=summary.department,
            summary=summary.summary,
            updated_at=summary.updated_at,
        )

    def _target(
        self,
        principal: Principal,
        company_id: str | None,
        department: str | None,
    ) -> tuple[UUID, str | None]:
        """요약 자연키의 회사/부서를 결정합니다.

        Non-operators always write into their own company; plain users into
        their own department.
        """
        company: UUID = principal.company_id
        if principal.role == OPERATOR and company_id:
            company = parse_uuid(company_id, "회사 ID")
        if principal.role == USER:
            department = principal.department
        return company, department or None

    async def _upsert(
        self,
        db: AsyncSession,
        company_id: UUID,
        summary_date: date,
        department: str | None,
        text: str,
    ) -> DailySummary:
        updated: int = await summary_repository.update_by_key(db, company_id, summary_date, department, text)
        if updated == 0:
            return await summary_repository.create(
                db,
                {
                    "company_id": company_id,
                    "summary_date": summary_date,
                    "department": department,
                    "summary": text,
                },
            )
        rows: list[DailySummary] = await summary_repository.list_by_key(db, company_id, summary_date, department)
        return rows[0]

    async def upsert(
        self,
        db: AsyncSession,
        principal: Principal,
        data: SummaryUpsertRequest,
    ) -> SummaryResponse:
        """요약을 저장합니다. 같은 키가 있으면 갱신, 없으면 생성.

        Update the row with the natural key, or insert when no row was
        updated. Saving twice leaves one row holding the latest text.
        """
        company_id, department = self._target(principal, data.company_id, data.department)
        summary: DailySummary = await self._upsert(db, company_id, data.summary_date, department, data.summary)
        return self._to_response(summary)

    async def list_summaries(
        self,
        db: AsyncSession,
        principal: Principal,
        summary_date: date | None = None,
        company_id: UUID | None = None,
    ) -> list[SummaryResponse]:
        scope: Scope | None = narrow_scope(resolve_scope(principal), company_id)
        if scope is None:
            return []
        rows: list[DailySummary] = await summary_repository.list_scoped(db, scope, summary_date)
        return [self._to_response(s) for s in rows]

    async def _prompts(self, db: AsyncSession) -> tuple[str, str]:
        prompt: Prompt | None = await prompt_repository.get_by_key(db, DAILY_SUMMARY_PROMPT_KEY)
        if prompt is None:
            return DEFAULT_SYSTEM_PROMPT, DEFAULT_USER_TEMPLATE
        return prompt.system_prompt, prompt.user_prompt_template

    async def generate(
        self,
        db: AsyncSession,
        principal: Principal,
        data: SummaryGenerateRequest,
    ) -> SummaryGenerateResponse:
        """해당 날짜 보고서로 요약을 생성하고 저장합니다.

        Generate a summary of one date's scoped reports with the LLM, then
        upsert it. A failed save is logged and reported through saved=False
        while the generated text is still returned.

        Raises:
            NotFoundError: 해당 날짜 보고서 없음 (No reports on that date)
            ServiceUnavailableError: LLM 미설정 또는 실패 (LLM unavailable)
        """
        company_id, department = self._target(principal, data.company_id, data.department)
        scope: Scope | None = narrow_scope(resolve_scope(principal), company_id, department)
        reports: list[DailyReport] = []
        if scope is not None:
            reports = await report_repository.list_scoped(
                db, scope, start_date=data.summary_date, end_date=data.summary_date
            )
        if not any(is_regular(r) for r in reports):
            raise NotFoundError("해당 날짜의 보고서가 없습니다.")

        system_prompt, template = await self._prompts(db)
        report_text: str = render_daily_report_text(data.summary_date, reports)
        if REPORTS_PLACEHOLDER in template:
            user_prompt: str = template.replace(REPORTS_PLACEHOLDER, report_text)
        else:
            user_prompt = f"{template}\n\n{report_text}"

        text: str = await llm_service.complete_text(system_prompt, user_prompt)

        try:
            async with db.begin_nested():
                await self._upsert(db, company_id, data.summary_date, department, text)
        except Exception as exc:
            logger.error("요약 저장 실패 (%s, %s): %s", data.summary_date, department, exc)
            return SummaryGenerateResponse(
                summary_date=data.summary_date,
                department=department,
                summary=text,
                saved=False,
                message="요약은 생성되었지만 저장에 실패했습니다.",
            )

        return SummaryGenerateResponse(
            summary_date=data.summary_date,
            department=department,
            summary=text,
            saved=True,
            message="요약이 생성되어 저장되었습니다.",
        )


# 싱글턴 인스턴스 (Singleton instance)
summary_service: SummaryService = SummaryService()
