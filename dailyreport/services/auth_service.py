"""인증 서비스, 로그인/내 정보/비밀번호 변경 비즈니스 로직.

Auth Service. Login builds the principal from the employee row once and
signs it into the session token; later requests read the principal back
from the token only.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.employee import Employee
from dailyreport.repositories.employee_repository import employee_repository
from dailyreport.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    PrincipalResponse,
)
from dailyreport.utils.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from dailyreport.utils.jwt import create_session_token
from dailyreport.utils.password import hash_password, verify_password
from dailyreport.utils.scope import Principal

INVALID_CREDENTIALS: str = "이메일 또는 비밀번호가 올바르지 않습니다."


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling login, the current principal and password change.
    """

    def to_response(self, principal: Principal) -> PrincipalResponse:
        return PrincipalResponse(
            id=str(principal.id),
            email=principal.email,
            employee_name=principal.employee_name,
            role=principal.role,
            company_id=str(principal.company_id),
            company_name=principal.company_name,
            department=principal.department,
        )

    async def login(self, db: AsyncSession, data: LoginRequest) -> LoginResponse:
        """이메일/비밀번호로 로그인하고 세션 토큰을 발급합니다.

        Authenticate by email and password and issue a session token.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 로그인 요청 (Login request)

        Returns:
            LoginResponse: 주체 정보와 토큰 (Principal and token)

        Raises:
            UnauthorizedError: 이메일이 없거나 비밀번호 불일치
                               (Unknown email, no password set, or mismatch)
        """
        email: str = data.email.strip().lower()
        employee: Employee | None = await employee_repository.get_by_email(db, email)
        if employee is None or not employee.password_hash:
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not verify_password(data.password, employee.password_hash):
            raise UnauthorizedError(INVALID_CREDENTIALS)

        row = await employee_repository.get_with_company(db, employee.id)
        company_name: str = row[1] if row is not None else ""
        principal: Principal = Principal(
            id=employee.id,
            email=email,
            employee_name=employee.name,
            role=employee.role,
            company_id=employee.company_id,
            company_name=company_name,
            department=employee.department or None,
        )
        token: str = create_session_token(principal.to_claims())
        return LoginResponse(user=self.to_response(principal), token=token)

    async def change_password(
        self,
        db: AsyncSession,
        principal: Principal,
        data: ChangePasswordRequest,
    ) -> None:
        """현재 비밀번호 확인 후 새 비밀번호로 변경합니다.

        Raises:
            NotFoundError: 직원 행이 삭제됨 (Employee row no longer exists)
            BadRequestError: 현재 비밀번호 불일치 (Current password mismatch)
        """
        employee: Employee | None = await employee_repository.get_by_id(db, principal.id)
        if employee is None:
            raise NotFoundError("사용자를 찾을 수 없습니다.")
        if not employee.password_hash or not verify_password(data.current_password, employee.password_hash):
            raise BadRequestError("현재 비밀번호가 올바르지 않습니다.")
        if data.current_password == data.new_password:
            raise BadRequestError("새 비밀번호가 현재 비밀번호와 같습니다.")

        await employee_repository.update(db, employee.id, {"password_hash": hash_password(data.new_password)})


# 싱글턴 인스턴스 (Singleton instance)
auth_service: AuthService = AuthService()
