"""앱 통계 및 기간 요약 라우터.

App Stats Router. Dashboard averages and the period (personal) summary,
rule based or AI generated.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.api.deps import get_current_principal
from dailyreport.database import get_db
from dailyreport.schemas.stats import (
    PersonalSummaryRequest,
    PersonalSummaryResponse,
    StatsResponse,
    StructuredSummaryResponse,
)
from dailyreport.services.personal_summary_service import personal_summary_service
from dailyreport.services.stats_service import stats_service
from dailyreport.utils.scope import Principal

router: APIRouter = APIRouter()


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
    company_id: Annotated[UUID | None, Query()] = None,
) -> StatsResponse:
    """이번 달, 최근 7일, 부서별 평균 달성률."""
    return await stats_service.get_stats(db, principal, company_id=company_id)


@router.post("/personal-summary/generate", response_model=PersonalSummaryResponse)
async def generate_personal_summary(
    data: PersonalSummaryRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> PersonalSummaryResponse:
    """규칙 기반 Markdown 기간 요약 (Deterministic Markdown summary)."""
    return await personal_summary_service.generate(db, principal, data)


@router.post("/personal-summary/generate-ai", response_model=StructuredSummaryResponse)
async def generate_personal_summary_ai(
    data: PersonalSummaryRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> StructuredSummaryResponse:
    """AI 구조화 요약, LLM을 쓸 수 없으면 규칙 기반 결과로 대체.

    Structured summary from the LLM, falling back to the local computation.
    """
    return await personal_summary_service.generate_ai(db, principal, data)
