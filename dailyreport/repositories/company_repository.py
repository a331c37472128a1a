"""회사 및 부서 레포지토리.

Company and Department repositories.
"""

from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.company import Company, Department
from dailyreport.models.employee import Employee
from dailyreport.repositories.base import BaseRepository


class CompanyRepository(BaseRepository[Company]):
    """회사 테이블 쿼리 (Queries for the companies table)."""

    def __init__(self) -> None:
        super().__init__(Company)

    async def list_all(self, db: AsyncSession) -> list[Company]:
        result = await db.execute(select(Company).order_by(Company.name))
        return list(result.scalars().all())

    async def count_employees(self, db: AsyncSession, company_id: UUID) -> int:
        """회사에 속한 직원 수 (Employees still referencing the company)."""
        query: Select = select(func.count()).select_from(Employee).where(Employee.company_id == company_id)
        return (await db.execute(query)).scalar() or 0


class DepartmentRepository(BaseRepository[Department]):
    """부서 테이블 쿼리 (Queries for the departments table)."""

    def __init__(self) -> None:
        super().__init__(Department)

    async def list_with_company(
        self,
        db: AsyncSession,
        company_id: UUID | None = None,
    ) -> list[tuple[Department, str]]:
        """부서와 회사 이름을 함께 조회합니다.

        List departments joined with their company name, ordered by company
        then department name.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            company_id: 회사 필터, None이면 전체 (Company filter, None for all)

        Returns:
            list[tuple[Department, str]]: (부서, 회사명) 목록
        """
        query: Select = (
            select(Department, Company.name)
            .join(Company, Department.company_id == Company.id)
            .order_by(Company.name, Department.name)
        )
        if company_id is not None:
            query = query.where(Department.company_id == company_id)
        result = await db.execute(query)
        return [(row[0], row[1]) for row in result.all()]

    async def count_members(self, db: AsyncSession, company_id: UUID, name: str) -> int:
        """해당 부서명을 가진 직원 수 (Employees carrying the department name)."""
        query: Select = (
            select(func.count())
            .select_from(Employee)
            .where(Employee.company_id == company_id, Employee.department == name)
        )
        return (await db.execute(query)).scalar() or 0


# 싱글턴 인스턴스 (Singleton instances)
company_repository: CompanyRepository = CompanyRepository()
department_repository: DepartmentRepository = DepartmentRepository()
