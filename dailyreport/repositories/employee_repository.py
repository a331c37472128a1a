"""직원 레포지토리.

Employee Repository. Every list query takes a Scope so visibility rules
are applied in SQL, never after the fact.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.company import Company
from dailyreport.models.employee import Employee
from dailyreport.repositories.base import BaseRepository
from dailyreport.utils.scope import Scope


class EmployeeRepository(BaseRepository[Employee]):
    """직원 테이블 쿼리 (Queries for the employees table)."""

    def __init__(self) -> None:
        super().__init__(Employee)

    def _scope_query(self, query: Select, scope: Scope) -> Select:
        if scope.company_id is not None:
            query = query.where(Employee.company_id == scope.company_id)
        if scope.department is not None:
            query = query.where(Employee.department == scope.department)
        return query

    async def list_scoped(self, db: AsyncSession, scope: Scope) -> list[Employee]:
        """범위 안의 직원을 부서, 사번 순으로 조회합니다.

        List employees inside a scope, ordered by department then code.
        """
        query: Select = self._scope_query(select(Employee), scope).order_by(
            Employee.department, Employee.employee_code
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def list_scoped_with_company(
        self, db: AsyncSession, scope: Scope
    ) -> list[tuple[Employee, str]]:
        """직원과 회사 이름을 함께 조회 (Employees joined with company name)."""
        query: Select = (
            self._scope_query(
                select(Employee, Company.name).join(Company, Employee.company_id == Company.id),
                scope,
            )
            .order_by(Company.name, Employee.department, Employee.employee_code)
        )
        result = await db.execute(query)
        return [(row[0], row[1]) for row in result.all()]

    async def list_departments(self, db: AsyncSession, scope: Scope) -> list[str]:
        """범위 안 직원들의 부서명 목록 (Distinct department names in scope)."""
        query: Select = self._scope_query(select(Employee.department).distinct(), scope).order_by(
            Employee.department
        )
        result = await db.execute(query)
        return [name for name in result.scalars().all() if name]

    async def get_by_email(self, db: AsyncSession, email: str) -> Employee | None:
        result = await db.execute(select(Employee).where(Employee.email == email))
        return result.scalar_one_or_none()

    async def get_with_company(
        self, db: AsyncSession, employee_id: UUID
    ) -> tuple[Employee, str] | None:
        """직원과 회사 이름 (Employee with its company name)."""
        result = await db.execute(
            select(Employee, Company.name)
            .join(Company, Employee.company_id == Company.id)
            .where(Employee.id == employee_id)
        )
        row = result.first()
        return (row[0], row[1]) if row is not None else None


# 싱글턴 인스턴스 (Singleton instance)
employee_repository: EmployeeRepository = EmployeeRepository()
