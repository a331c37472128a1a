"""통계 및 기간 요약 Pydantic 스키마 정의.

Dashboard statistics and period (personal) summary schemas.
"""

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, Field


class StatsResponse(BaseModel):
    """대시보드 평균 달성률 (Dashboard average achievement rates)."""

    monthly_average_rate: int
    weekly_average_rate: int
    department_stats: dict[str, int]


class PersonalSummaryRequest(BaseModel):
    """기간 요약 요청.

    filter_type "month" uses month (YYYY-MM); "custom" uses start_date and
    end_date inclusive.
    """

    filter_type: Literal["month", "custom"] = "month"
    month: str | None = Field(default=None, pattern=r"^\d{4}-\d{2}$")
    start_date: date | None = None
    end_date: date | None = None
    department: str | None = None
    employee_name: str | None = None


class PersonalSummaryResponse(BaseModel):
    summary: str


class StructuredSummaryResponse(BaseModel):
    """구조화 요약 응답. generated_by는 "ai" 또는 "rule"."""

    summary: dict[str, Any]
    generated_by: Literal["ai", "rule"]
