"""앱 일일 보고서 라우터.

App Daily Report Router. Submission, edits and deletes run inside the
request's session and are committed once here, so a replace either fully
happens or not at all.
"""

from datetime import date
from io import BytesIO
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.api.deps import get_current_principal
from dailyreport.database import get_db
from dailyreport.schemas.common import MessageResponse
from dailyreport.schemas.report import (
    AttendanceResponse,
    DailyReportResponse,
    DailyReportUpdate,
    LegacyDeleteRequest,
    ReportBatchRequest,
    ReportBatchResponse,
)
from dailyreport.services.report_service import report_service
from dailyreport.utils.scope import Principal

router: APIRouter = APIRouter()


@router.get("", response_model=list[DailyReportResponse])
async def list_reports(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
    start_date: Annotated[date | None, Query()] = None,
    end_date: Annotated[date | None, Query()] = None,
    department: Annotated[str | None, Query()] = None,
    employee_name: Annotated[str | None, Query()] = None,
    company_id: Annotated[UUID | None, Query()] = None,
) -> list[DailyReportResponse]:
    """범위 안의 저장된 보고서 목록 (Stored reports in scope)."""
    return await report_service.list_reports(
        db, principal, start_date, end_date, department, employee_name, company_id
    )


@router.post("", response_model=ReportBatchResponse, status_code=201)
async def submit_reports(
    data: ReportBatchRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> ReportBatchResponse:
    """하루치 보고서 배치를 저장합니다. is_update면 기존 항목을 교체.

    Save one date's batch; with is_update the stored rows of the same
    employees on that date are replaced.
    """
    result: ReportBatchResponse = await report_service.submit_batch(db, principal, data)
    await db.commit()
    return result


@router.get("/complete", response_model=list[DailyReportResponse])
async def complete_reports(
    report_date: date,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
    department: Annotated[str | None, Query()] = None,
    employee_name: Annotated[str | None, Query()] = None,
    company_id: Annotated[UUID | None, Query()] = None,
) -> list[DailyReportResponse]:
    """날짜별 전체 목록, 미제출 직원은 "작성 안됨" 행 포함."""
    return await report_service.complete_list_responses(
        db,
        principal,
        report_date=report_date,
        department=department,
        employee_name=employee_name,
        company_id=company_id,
    )


@router.get("/attendance", response_model=list[AttendanceResponse])
async def attendance(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
    start_date: Annotated[date | None, Query()] = None,
    end_date: Annotated[date | None, Query()] = None,
    department: Annotated[str | None, Query()] = None,
    employee_name: Annotated[str | None, Query()] = None,
    company_id: Annotated[UUID | None, Query()] = None,
) -> list[AttendanceResponse]:
    return await report_service.attendance(
        db, principal, start_date, end_date, department, employee_name, company_id
    )


@router.get("/export")
async def export_reports(
    report_date: date,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
    department: Annotated[str | None, Query()] = None,
    company_id: Annotated[UUID | None, Query()] = None,
) -> StreamingResponse:
    """날짜별 전체 목록을 Excel 파일로 내보냅니다."""
    excel_bytes: bytes = await report_service.export_excel(
        db, principal, report_date, department=department, company_id=company_id
    )
    return StreamingResponse(
        BytesIO(excel_bytes),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename=daily_reports_{report_date.isoformat()}.xlsx"},
    )


@router.post("/delete-legacy", response_model=MessageResponse)
async def delete_legacy(
    data: LegacyDeleteRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> MessageResponse:
    """ID 없는 레거시 보고서를 내용으로 찾아 삭제합니다.

    Delete rows matched by (date, employee name, work overview).
    """
    removed: int = await report_service.delete_legacy(db, principal, data)
    await db.commit()
    return MessageResponse(message=f"{removed}건의 보고서가 삭제되었습니다.")


@router.put("/{report_id}", response_model=DailyReportResponse)
async def update_report(
    report_id: UUID,
    data: DailyReportUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> DailyReportResponse:
    result: DailyReportResponse = await report_service.update_report(db, principal, report_id, data)
    await db.commit()
    return result


@router.delete("/{report_id}", status_code=204)
async def delete_report(
    report_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> None:
    await report_service.delete_report(db, principal, report_id)
    await db.commit()
