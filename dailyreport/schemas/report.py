"""일일 보고서 및 요약 Pydantic 요청/응답 스키마 정의.

Daily report and summary request/response schemas.
Input models validate shape once at the boundary; business rules
(empty batch, single date, scope) are applied by the report service.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


# === 일일 보고서 (Daily report) 스키마 ===

class DailyReportEntry(BaseModel):
    """제출되는 보고서 항목 하나.

    One submitted work item. employee_id is optional for rows identified by
    name only; company_id and department may be overwritten by scope.
    """

    report_date: date
    employee_name: str
    employee_id: str | None = None
    company_id: str | None = None
    department: str = ""
    work_overview: str = ""
    progress_goal: str = ""
    achievement_rate: int = Field(default=0, ge=0)
    manager_evaluation: str = ""
    remarks: str = ""


class ReportBatchRequest(BaseModel):
    """보고서 일괄 제출 요청.

    Attributes:
        reports: 항목 목록 (Work items of one date)
        is_update: True면 기존 항목 전체 교체 (Replace existing rows when True)
    """

    reports: list[DailyReportEntry]
    is_update: bool = False


class ReportBatchResponse(BaseModel):
    message: str
    saved_count: int
    report_date: date


class DailyReportUpdate(BaseModel):
    """저장된 보고서 항목 하나 수정 (Edit of a single stored row)."""

    work_overview: str | None = None
    progress_goal: str | None = None
    achievement_rate: int | None = Field(default=None, ge=0)
    manager_evaluation: str | None = None
    remarks: str | None = None


class LegacyDeleteRequest(BaseModel):
    """ID 없는 레거시 보고서 삭제 요청 (Delete matched by content).

    company_id is honoured for operators only; department narrows the
    caller's scope and cannot widen it.
    """

    report_date: date
    employee_name: str
    work_overview: str
    company_id: str | None = None
    department: str | None = None



class DailyReportResponse(BaseModel):
    """보고서 응답. 자리표시 행은 id가 없고 is_placeholder가 True."""

    id: str | None = None
    report_date: date
    company_id: str | None = None
    employee_id: str | None = None
    employee_name: str
    employee_code: str | None = None
    department: str
    work_overview: str
    progress_goal: str
    achievement_rate: int
    manager_evaluation: str
    remarks: str
    is_placeholder: bool = False
    created_at: datetime | None = None


class AttendanceResponse(BaseModel):
    """직원별 근태 통계 응답."""

    employee_id: str | None = None
    employee_name: str
    department: str
    total_days: int
    working_days: int
    annual_leave_days: int
    average_achievement: int


# === 일일 요약 (Daily summary) 스키마 ===

class SummaryUpsertRequest(BaseModel):
    """요약 저장 요청. department가 없으면 회사 전체 요약.

    Attributes:
        summary_date: 요약 날짜 (Summary date)
        department: 부서명, 없으면 전체 (Department, None for company-wide)
        summary: 요약 본문 (Summary text)
        company_id: 운영자가 다른 회사를 지정할 때 (Operators only)
    """

    summary_date: date
    department: str | None = None
    summary: str = Field(min_length=1)
    company_id: str | None = None


class SummaryResponse(BaseModel):
    id: str
    company_id: str
    summary_date: date
    department: str | None = None
    summary: str
    updated_at: datetime


class SummaryGenerateRequest(BaseModel):
    summary_date: date
    department: str | None = None
    company_id: str | None = None


class SummaryGenerateResponse(BaseModel):
    """생성 요약 응답. 저장 실패 시에도 요약은 반환되고 saved가 False."""

    summary_date: date
    department: str | None = None
    summary: str
    saved: bool
    message: str
