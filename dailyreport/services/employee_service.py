"""직원 서비스, 직원 CRUD 및 비밀번호 초기화 비즈니스 로직.

Employee Service. Company and department on writes come from the
caller's write scope, never from the client, and row-level mutations are
authorized by membership in the caller's scoped employee list.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.company import Company
from dailyreport.models.employee import Employee
from dailyreport.repositories.company_repository import company_repository
from dailyreport.repositories.employee_repository import employee_repository
from dailyreport.schemas.employee import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    ResetPasswordRequest,
)
from dailyreport.services.organization_service import parse_uuid
from dailyreport.utils.exceptions import BadRequestError, DuplicateError, ForbiddenError, NotFoundError
from dailyreport.utils.password import hash_password
from dailyreport.utils.scope import (
    MANAGER,
    OPERATOR,
    ROLE_PRIORITY,
    Principal,
    Scope,
    can_assign_role,
    narrow_scope,
    resolve_employee_write_scope,
    resolve_scope,
)


class EmployeeService:
    """직원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling employee administration and directory reads.
    """

    def _to_response(self, employee: Employee, company_name: str | None = None) -> EmployeeResponse:
        return EmployeeResponse(
            id=str(employee.id),
            company_id=str(employee.company_id),
            company_name=company_name,
            employee_code=employee.employee_code,
            name=employee.name,
            position=employee.position,
            department=employee.department,
            email=employee.email,
            role=employee.role,
            has_password=bool(employee.password_hash),
            created_at=employee.created_at,
        )

    # === 조회 (Reads) ===

    def _write_scope(self, principal: Principal) -> Scope:
        """직원 쓰기 범위. 부서가 없는 부서 관리자는 거부합니다.

        Raises:
            ForbiddenError: 소속 부서가 없는 관리자 (Manager without a department)
        """
        if principal.role == MANAGER and not principal.department:
            raise ForbiddenError("소속 부서가 없는 관리자는 직원을 관리할 수 없습니다.")
        return resolve_employee_write_scope(principal)

    async def list_managed(
        self,
        db: AsyncSession,
        principal: Principal,
        company_id: UUID | None = None,
        department: str | None = None,
    ) -> list[EmployeeResponse]:
        """관리 화면 직원 목록, 쓰기 범위 기준.

        Employees the caller may administer: their write scope, optionally
        narrowed by query parameters.
        """
        scope: Scope | None = narrow_scope(self._write_scope(principal), company_id, department)
        if scope is None:
            return []
        rows = await employee_repository.list_scoped_with_company(db, scope)
        return [self._to_response(e, name) for e, name in rows]

    async def list_directory(
        self,
        db: AsyncSession,
        principal: Principal,
        department: str | None = None,
        company_id: UUID | None = None,
    ) -> list[Employee]:
        """읽기 범위 안의 직원 목록 (Employees visible to the caller)."""
        scope: Scope | None = narrow_scope(resolve_scope(principal), company_id, department)
        if scope is None:
            return []
        return await employee_repository.list_scoped(db, scope)

    async def list_directory_responses(
        self,
        db: AsyncSession,
        principal: Principal,
        department: str | None = None,
        company_id: UUID | None = None,
    ) -> list[EmployeeResponse]:
        employees: list[Employee] = await self.list_directory(db, principal, department, company_id)
        return [self._to_response(e) for e in employees]

    async def list_department_names(
        self,
        db: AsyncSession,
        principal: Principal,
        company_id: UUID | None = None,
    ) -> list[str]:
        """범위 안 직원들의 부서명 (Department names among visible employees)."""
        scope: Scope | None = narrow_scope(resolve_scope(principal), company_id)
        if scope is None:
            return []
        return await employee_repository.list_departments(db, scope)

    async def get_managed_employee(
        self,
        db: AsyncSession,
        principal: Principal,
        employee_id: UUID,
    ) -> Employee:
        """쓰기 범위 목록에 포함된 직원만 반환합니다.

        Row-level authorization: re-run the caller's scoped list and check
        membership instead of trusting the id.

        Raises:
            NotFoundError: 범위 밖이거나 존재하지 않음 (Not in scope or missing)
            ForbiddenError: 같거나 높은 역할의 직원 (Target ranks at or above caller)
        """
        scope: Scope = self._write_scope(principal)
        members: list[Employee] = await employee_repository.list_scoped(db, scope)
        employee: Employee | None = next((e for e in members if e.id == employee_id), None)
        if employee is None:
            raise NotFoundError("직원을 찾을 수 없습니다.")
        if principal.role != OPERATOR and employee.id != principal.id:
            if ROLE_PRIORITY.get(employee.role, 99) <= ROLE_PRIORITY[principal.role]:
                raise ForbiddenError("같거나 높은 권한의 직원은 수정할 수 없습니다.")
        return employee

    # === 쓰기 (Writes) ===

    def _forced_fields(self, principal: Principal, requested_company: str | None) -> dict[str, Any]:
        """쓰기 범위가 고정하는 필드 (Fields pinned by the write scope)."""
        scope: Scope = self._write_scope(principal)
        forced: dict[str, Any] = {}
        if scope.company_id is not None:
            forced["company_id"] = scope.company_id
        elif requested_company:
            forced["company_id"] = parse_uuid(requested_company, "회사 ID")
        if scope.department is not None:
            forced["department"] = scope.department
        return forced

    async def _check_unique(
        self,
        db: AsyncSession,
        company_id: UUID,
        employee_code: str | None,
        email: str | None,
        exclude_id: UUID | None = None,
    ) -> None:
        if employee_code is not None and await employee_repository.exists(
            db, {"company_id": company_id, "employee_code": employee_code}, exclude_id=exclude_id
        ):
            raise DuplicateError("이미 존재하는 사번입니다.")
        if email and await employee_repository.exists(db, {"email": email}, exclude_id=exclude_id):
            raise DuplicateError("이미 사용 중인 이메일입니다.")

    async def create_employee(
        self,
        db: AsyncSession,
        principal: Principal,
        data: EmployeeCreate,
    ) -> EmployeeResponse:
        """새 직원을 생성합니다.

        Create an employee. The company (non-operators) and department
        (managers) are overwritten with the caller's own.

        Raises:
            ForbiddenError: 부여할 수 없는 역할 (Role above what the caller may assign)
            NotFoundError: 회사 없음 (Company not found)
            DuplicateError: 사번 또는 이메일 중복 (Code or email taken)
        """
        if not can_assign_role(principal, data.role):
            raise ForbiddenError("해당 역할을 부여할 권한이 없습니다.")

        values: dict[str, Any] = data.model_dump(exclude={"password", "company_id"})
        values["company_id"] = principal.company_id
        values.update(self._forced_fields(principal, data.company_id))
        values["email"] = data.email.strip().lower() if data.email else None
        values["password_hash"] = hash_password(data.password) if data.password else None

        company: Company | None = await company_repository.get_by_id(db, values["company_id"])
        if company is None:
            raise NotFoundError("회사를 찾을 수 없습니다.")
        await self._check_unique(db, values["company_id"], values["employee_code"], values["email"])

        employee: Employee = await employee_repository.create(db, values)
        return self._to_response(employee, company.name)

    async def update_employee(
        self,
        db: AsyncSession,
        principal: Principal,
        employee_id: UUID,
        data: EmployeeUpdate,
    ) -> EmployeeResponse:
        """직원 정보를 수정합니다 (범위 강제 규칙은 생성과 동일).

        Raises:
            NotFoundError: 범위 밖 (Not in the caller's scope)
            ForbiddenError: 역할 권한 부족 (Role not assignable)
            DuplicateError: 사번 또는 이메일 중복 (Code or email taken)
        """
        employee: Employee = await self.get_managed_employee(db, principal, employee_id)

        update_data: dict[str, Any] = data.model_dump(exclude_unset=True, exclude={"company_id"})
        if "role" in update_data and update_data["role"] != employee.role:
            if employee.id == principal.id or not can_assign_role(principal, update_data["role"]):
                raise ForbiddenError("해당 역할을 부여할 권한이 없습니다.")
        if "email" in update_data:
            update_data["email"] = update_data["email"].strip().lower() if update_data["email"] else None
        update_data.update(self._forced_fields(principal, data.company_id))

        company_id: UUID = update_data.get("company_id", employee.company_id)
        if await company_repository.get_by_id(db, company_id) is None:
            raise NotFoundError("회사를 찾을 수 없습니다.")
        await self._check_unique(
            db,
            company_id,
            update_data.get("employee_code", employee.employee_code),
            update_data.get("email"),
            exclude_id=employee.id,
        )

        updated: Employee | None = await employee_repository.update(db, employee.id, update_data)
        row = await employee_repository.get_with_company(db, updated.id)
        return self._to_response(updated, row[1] if row else None)

    async def delete_employee(self, db: AsyncSession, principal: Principal, employee_id: UUID) -> None:
        """직원을 삭제합니다. 본인 계정은 삭제 불가.

        Raises:
            BadRequestError: 본인 삭제 시도 (Deleting oneself)
            NotFoundError: 범위 밖 (Not in scope)
        """
        if employee_id == principal.id:
            raise BadRequestError("본인 계정은 삭제할 수 없습니다.")
        employee: Employee = await self.get_managed_employee(db, principal, employee_id)
        await employee_repository.delete(db, employee.id)

    async def reset_password(
        self,
        db: AsyncSession,
        principal: Principal,
        employee_id: UUID,
        data: ResetPasswordRequest,
    ) -> None:
        """범위 안 직원의 비밀번호를 초기화합니다 (Reset a managed employee's password)."""
        employee: Employee = await self.get_managed_employee(db, principal, employee_id)
        await employee_repository.update(db, employee.id, {"password_hash": hash_password(data.new_password)})


# 싱글턴 인스턴스 (Singleton instance)
employee_service: EmployeeService = EmployeeService()
