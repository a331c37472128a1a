"""회사/부서 서비스, 운영자 관리 화면의 비즈니스 로직.

Company and Department Service. Name uniqueness is checked before
writing; deletes are blocked while employees still reference the row.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.company import Company, Department
from dailyreport.repositories.company_repository import company_repository, department_repository
from dailyreport.schemas.organization import (
    CompanyCreate,
    CompanyResponse,
    CompanyUpdate,
    DepartmentCreate,
    DepartmentResponse,
    DepartmentUpdate,
)
from dailyreport.utils.exceptions import BadRequestError, ConflictError, DuplicateError, NotFoundError


def parse_uuid(value: str, label: str = "ID") -> UUID:
    """문자열 UUID 파싱, 실패 시 400 (Parse a UUID string or raise 400)."""
    try:
        return UUID(value)
    except (TypeError, ValueError):
        raise BadRequestError(f"잘못된 {label} 형식입니다.")


class OrganizationService:
    """회사와 부서 관리 서비스 (Company and department administration)."""

    def _company_response(self, company: Company) -> CompanyResponse:
        return CompanyResponse(id=str(company.id), name=company.name, created_at=company.created_at)

    def _department_response(self, department: Department, company_name: str | None = None) -> DepartmentResponse:
        return DepartmentResponse(
            id=str(department.id),
            company_id=str(department.company_id),
            company_name=company_name,
            name=department.name,
            created_at=department.created_at,
        )

    # === 회사 (Company) ===

    async def list_companies(self, db: AsyncSession) -> list[CompanyResponse]:
        companies: list[Company] = await company_repository.list_all(db)
        return [self._company_response(c) for c in companies]

    async def create_company(self, db: AsyncSession, data: CompanyCreate) -> CompanyResponse:
        """새 회사를 생성합니다.

        Raises:
            DuplicateError: 같은 이름의 회사가 있을 때 (Name already taken)
        """
        name: str = data.name.strip()
        if await company_repository.exists(db, {"name": name}):
            raise DuplicateError("이미 존재하는 회사명입니다.")
        company: Company = await company_repository.create(db, {"name": name})
        return self._company_response(company)

    async def update_company(self, db: AsyncSession, company_id: UUID, data: CompanyUpdate) -> CompanyResponse:
        update_data: dict = data.model_dump(exclude_unset=True)
        if update_data.get("name"):
            update_data["name"] = update_data["name"].strip()
            if await company_repository.exists(db, {"name": update_data["name"]}, exclude_id=company_id):
                raise DuplicateError("이미 존재하는 회사명입니다.")
        company: Company | None = await company_repository.update(db, company_id, update_data)
        if company is None:
            raise NotFoundError("회사를 찾을 수 없습니다.")
        return self._company_response(company)

    async def delete_company(self, db: AsyncSession, company_id: UUID) -> None:
        """회사를 삭제합니다. 직원이 남아 있으면 거부.

        Raises:
            NotFoundError: 회사 없음 (Company not found)
            ConflictError: 소속 직원이 있음 (Employees still reference it)
        """
        company: Company | None = await company_repository.get_by_id(db, company_id)
        if company is None:
            raise NotFoundError("회사를 찾을 수 없습니다.")
        if await company_repository.count_employees(db, company_id) > 0:
            raise ConflictError("소속 직원이 있는 회사는 삭제할 수 없습니다.")
        await company_repository.delete(db, company_id)

    # === 부서 (Department) ===

    async def list_departments(self, db: AsyncSession, company_id: UUID | None = None) -> list[DepartmentResponse]:
        rows = await department_repository.list_with_company(db, company_id)
        return [self._department_response(d, name) for d, name in rows]

    async def create_department(self, db: AsyncSession, data: DepartmentCreate) -> DepartmentResponse:
        """새 부서를 생성합니다.

        Raises:
            NotFoundError: 회사 없음 (Company not found)
            DuplicateError: 회사 안에 같은 부서명이 있음 (Name taken within company)
        """
        company_id: UUID = parse_uuid(data.company_id, "회사 ID")
        company: Company | None = await company_repository.get_by_id(db, company_id)
        if company is None:
            raise NotFoundError("회사를 찾을 수 없습니다.")
        name: str = data.name.strip()
        if await department_repository.exists(db, {"company_id": company_id, "name": name}):
            raise DuplicateError("이미 존재하는 부서명입니다. 다른 이름을 사용해주세요.")
        department: Department = await department_repository.create(db, {"company_id": company_id, "name": name})
        return self._department_response(department, company.name)

    async def update_department(
        self, db: AsyncSession, department_id: UUID, data: DepartmentUpdate
    ) -> DepartmentResponse:
        department: Department | None = await department_repository.get_by_id(db, department_id)
        if department is None:
            raise NotFoundError("부서를 찾을 수 없습니다.")

        update_data: dict = data.model_dump(exclude_unset=True)
        company_id: UUID = department.company_id
        if update_data.get("company_id"):
            company_id = parse_uuid(update_data["company_id"], "회사 ID")
            if await company_repository.get_by_id(db, company_id) is None:
                raise NotFoundError("회사를 찾을 수 없습니다.")
            update_data["company_id"] = company_id
        else:
            update_data.pop("company_id", None)
        name: str = (update_data.get("name") or department.name).strip()
        update_data["name"] = name
        if await department_repository.exists(db, {"company_id": company_id, "name": name}, exclude_id=department_id):
            raise DuplicateError("이미 존재하는 부서명입니다. 다른 이름을 사용해주세요.")

        updated: Department | None = await department_repository.update(db, department_id, update_data)
        company: Company | None = await company_repository.get_by_id(db, company_id)
        return self._department_response(updated, company.name if company else None)

    async def delete_department(self, db: AsyncSession, department_id: UUID) -> None:
        """부서를 삭제합니다. 해당 부서 직원이 있으면 거부.

        Raises:
            NotFoundError: 부서 없음 (Department not found)
            ConflictError: 소속 직원이 있음 (Employees still carry the name)
        """
        department: Department | None = await department_repository.get_by_id(db, department_id)
        if department is None:
            raise NotFoundError("부서를 찾을 수 없습니다.")
        if await department_repository.count_members(db, department.company_id, department.name) > 0:
            raise ConflictError("소속 직원이 있는 부서는 삭제할 수 없습니다.")
        await department_repository.delete(db, department_id)


# 싱글턴 인스턴스 (Singleton instance)
organization_service: OrganizationService = OrganizationService()
