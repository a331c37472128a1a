"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication request/response schemas: login, current principal and
password change.
"""

from pydantic import BaseModel, Field

from dailyreport.utils.password import MIN_PASSWORD_LENGTH


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Attributes:
        email: 로그인 이메일 (Login email)
        password: 비밀번호 (Plain text, compared to the bcrypt hash)
    """

    email: str
    password: str


class PrincipalResponse(BaseModel):
    """현재 로그인 주체 응답 스키마 (Session principal as seen by clients)."""

    id: str
    email: str
    employee_name: str
    role: str
    company_id: str
    company_name: str
    department: str | None = None


class LoginResponse(BaseModel):
    """로그인 응답 스키마.

    The token is also set as the HTTP-only session cookie; it is returned in
    the body for API clients that send it as a Bearer header.
    """

    user: PrincipalResponse
    token: str


class ChangePasswordRequest(BaseModel):
    """비밀번호 변경 요청 스키마."""

    current_password: str
    new_password: str = Field(min_length=MIN_PASSWORD_LENGTH)
