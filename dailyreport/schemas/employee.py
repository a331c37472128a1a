"""직원 관련 Pydantic 요청/응답 스키마 정의.

Employee request/response schemas. Password hashes never appear in a
response model.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from dailyreport.utils.password import MIN_PASSWORD_LENGTH


class EmployeeCreate(BaseModel):
    """직원 생성 요청 스키마.

    company_id and department are overwritten server-side by the caller's
    write scope when it pins them.

    Attributes:
        employee_code: 사번, 회사 안에서 고유 (Employee code, unique per company)
        name: 이름 (Display name)
        position: 직급 (Job title)
        department: 부서명 (Department name)
        company_id: 소속 회사 UUID, 운영자만 지정 (Company, honoured for operators only)
        email: 로그인 이메일 (Login email, optional)
        password: 초기 비밀번호 (Initial password, optional)
        role: 역할 (Role, defaults to "user")
    """

    employee_code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    position: str = ""
    department: str = ""
    company_id: str | None = None
    email: str | None = None
    password: str | None = Field(default=None, min_length=MIN_PASSWORD_LENGTH)
    role: str = "user"


class EmployeeUpdate(BaseModel):
    """직원 수정 요청 스키마 (부분 업데이트)."""

    employee_code: str | None = Field(default=None, min_length=1, max_length=50)
    name: str | None = Field(default=None, min_length=1, max_length=100)
    position: str | None = None
    department: str | None = None
    company_id: str | None = None
    email: str | None = None
    role: str | None = None


class EmployeeResponse(BaseModel):
    id: str
    company_id: str
    company_name: str | None = None
    employee_code: str
    name: str
    position: str
    department: str
    email: str | None = None
    role: str
    has_password: bool = False
    created_at: datetime


class ResetPasswordRequest(BaseModel):
    """비밀번호 초기화 요청 스키마 (Password reset by a manager)."""

    new_password: str = Field(min_length=MIN_PASSWORD_LENGTH)
