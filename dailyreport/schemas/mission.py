"""미션, KPI, 프로젝트 Pydantic 요청/응답 스키마 정의.

Mission, mission KPI and project request/response schemas.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

MissionStatus = Literal["대기", "진행중", "완료"]
ProjectStatus = Literal["진행중", "완료", "대기", "보류", "취소"]


# === KPI 스키마 ===

class KpiCreate(BaseModel):
    kpi_name: str = Field(min_length=1)
    target_value: float = Field(ge=0)
    current_value: float = Field(default=0, ge=0)
    unit: str = Field(min_length=1)


class KpiUpdate(BaseModel):
    kpi_name: str | None = Field(default=None, min_length=1)
    target_value: float | None = Field(default=None, ge=0)
    current_value: float | None = Field(default=None, ge=0)
    unit: str | None = Field(default=None, min_length=1)


class KpiResponse(BaseModel):
    """KPI 응답. achievement_rate는 제한 없이, bar_width는 0~100으로 제한.

    achievement_rate is the unclamped label value; bar_width is clamped for
    progress bars.
    """

    id: str
    mission_id: str
    kpi_name: str
    target_value: float
    current_value: float
    unit: str
    achievement_rate: float
    bar_width: float


# === 미션 (Mission) 스키마 ===

class MissionCreate(BaseModel):
    """미션 생성 요청 스키마.

    Attributes:
        mission_name: 미션명 (Mission name)
        assignee: 담당자 (Assignee name)
        start_date / end_date: 기간 (Period)
        company_id: 운영자만 지정 가능, 기본값은 본인 회사 (Operators only)
        kpis: 함께 생성할 KPI (KPIs created with the mission)
    """

    mission_name: str = Field(min_length=1)
    description: str = ""
    assignee: str = Field(min_length=1)
    department: str = ""
    start_date: date
    end_date: date
    status: MissionStatus = "대기"
    progress_rate: int = Field(default=0, ge=0, le=100)
    company_id: str | None = None
    kpis: list[KpiCreate] = []


class MissionUpdate(BaseModel):
    mission_name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    assignee: str | None = Field(default=None, min_length=1)
    department: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: MissionStatus | None = None
    progress_rate: int | None = Field(default=None, ge=0, le=100)


class MissionResponse(BaseModel):
    id: str
    company_id: str
    mission_name: str
    description: str
    assignee: str
    department: str
    start_date: date
    end_date: date
    status: str
    progress_rate: int
    kpis: list[KpiResponse] = []
    created_at: datetime


# === 프로젝트 (Project) 스키마 ===

class ProjectCreate(BaseModel):
    project_name: str = Field(min_length=1)
    department: str = ""
    manager: str = ""
    target_end_date: date
    revised_end_date: date | None = None
    status: ProjectStatus = "진행중"
    progress_rate: int = Field(default=0, ge=0, le=100)
    main_issues: str = ""
    detailed_progress: str = ""
    company_id: str | None = None


class ProjectUpdate(BaseModel):
    project_name: str | None = Field(default=None, min_length=1)
    department: str | None = None
    manager: str | None = None
    target_end_date: date | None = None
    revised_end_date: date | None = None
    status: ProjectStatus | None = None
    progress_rate: int | None = Field(default=None, ge=0, le=100)
    main_issues: str | None = None
    detailed_progress: str | None = None


class ProjectResponse(BaseModel):
    id: str
    company_id: str
    project_name: str
    department: str
    manager: str
    target_end_date: date
    revised_end_date: date | None = None
    status: str
    progress_rate: int
    main_issues: str
    detailed_progress: str
    created_at: datetime
