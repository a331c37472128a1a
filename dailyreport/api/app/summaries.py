"""앱 일일 요약 라우터 (Daily summary list, upsert and LLM generation)."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.api.deps import get_current_principal
from dailyreport.database import get_db
from dailyreport.schemas.report import (
    SummaryGenerateRequest,
    SummaryGenerateResponse,
    SummaryResponse,
    SummaryUpsertRequest,
)
from dailyreport.services.summary_service import summary_service
from dailyreport.utils.scope import Principal

router: APIRouter = APIRouter()


@router.get("", response_model=list[SummaryResponse])
async def list_summaries(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
    summary_date: Annotated[date | None, Query()] = None,
    company_id: Annotated[UUID | None, Query()] = None,
) -> list[SummaryResponse]:
    return await summary_service.list_summaries(db, principal, summary_date, company_id)


@router.post("", response_model=SummaryResponse)
async def upsert_summary(
    data: SummaryUpsertRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> SummaryResponse:
    """요약 저장. (회사, 날짜, 부서)가 같으면 덮어씀.

    Save a summary; an existing row with the same key is overwritten.
    """
    result: SummaryResponse = await summary_service.upsert(db, principal, data)
    await db.commit()
    return result


@router.post("/generate", response_model=SummaryGenerateResponse)
async def generate_summary(
    data: SummaryGenerateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> SummaryGenerateResponse:
    """LLM으로 요약을 생성하고 저장합니다. 저장 실패 시에도 요약 반환."""
    result: SummaryGenerateResponse = await summary_service.generate(db, principal, data)
    await db.commit()
    return result
