"""회사 및 부서 관련 Pydantic 요청/응답 스키마 정의.

Company and Department request/response schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# === 회사 (Company) 스키마 ===

class CompanyCreate(BaseModel):
    """회사 생성 요청 스키마.

    Attributes:
        name: 회사 이름, 전역 고유 (Company name, globally unique)
    """

    name: str = Field(min_length=1, max_length=255)


class CompanyUpdate(BaseModel):
    """회사 수정 요청 스키마 (부분 업데이트)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)


class CompanyResponse(BaseModel):
    id: str
    name: str
    created_at: datetime


# === 부서 (Department) 스키마 ===

class DepartmentCreate(BaseModel):
    """부서 생성 요청 스키마.

    Attributes:
        company_id: 소속 회사 UUID (Parent company)
        name: 부서명, 회사 안에서 고유 (Name, unique within the company)
    """

    company_id: str
    name: str = Field(min_length=1, max_length=100)


class DepartmentUpdate(BaseModel):
    """부서 수정 요청 스키마 (부분 업데이트)."""

    company_id: str | None = None
    name: str | None = Field(default=None, min_length=1, max_length=100)


class DepartmentResponse(BaseModel):
    id: str
    company_id: str
    company_name: str | None = None
    name: str
    created_at: datetime
