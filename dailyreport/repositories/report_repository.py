"""일일 보고서 및 요약 레포지토리.

Daily report and daily summary repositories.
Replacement deletes are issued as single bulk statements keyed by the
batch identity chosen during reconciliation.
"""

from datetime import date
from uuid import UUID

from sqlalchemy import Select, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.report import DailyReport, DailySummary
from dailyreport.repositories.base import BaseRepository
from dailyreport.utils.reconciliation import ById, Identity
from dailyreport.utils.scope import Scope


class ReportRepository(BaseRepository[DailyReport]):
    """일일 보고서 테이블 쿼리 (Queries for the daily_reports table)."""

    def __init__(self) -> None:
        super().__init__(DailyReport)

    async def list_scoped(
        self,
        db: AsyncSession,
        scope: Scope,
        start_date: date | None = None,
        end_date: date | None = None,
        employee_name: str | None = None,
        employee_id: UUID | None = None,
    ) -> list[DailyReport]:
        """범위 안의 보고서를 조회합니다.

        List reports inside a scope, optionally bounded by an inclusive date
        range and one employee, ordered by date then department.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            scope: 회사/부서 범위 (Company/department scope)
            start_date: 시작일 포함 (Inclusive start)
            end_date: 종료일 포함 (Inclusive end)
            employee_name: 직원 이름 필터 (Employee name filter)
            employee_id: 직원 ID 필터 (Employee id filter)

        Returns:
            list[DailyReport]: 보고서 목록 (Matching rows)
        """
        query: Select = select(DailyReport)
        if scope.company_id is not None:
            query = query.where(DailyReport.company_id == scope.company_id)
        if scope.department is not None:
            query = query.where(DailyReport.department == scope.department)
        if start_date is not None:
            query = query.where(DailyReport.report_date >= start_date)
        if end_date is not None:
            query = query.where(DailyReport.report_date <= end_date)
        if employee_name:
            query = query.where(DailyReport.employee_name == employee_name.strip())
        if employee_id is not None:
            query = query.where(DailyReport.employee_id == employee_id)
        query = query.order_by(
            DailyReport.report_date, DailyReport.department, DailyReport.employee_name, DailyReport.created_at
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def delete_by_identity(
        self,
        db: AsyncSession,
        company_id: UUID,
        report_date: date,
        identity: Identity,
        department: str | None = None,
    ) -> int:
        """(회사, 날짜, 식별 집합)에 해당하는 행을 모두 삭제합니다.

        Delete every stored row of the identity set on that date. A
        department pins the delete to the caller's department scope.

        Returns:
            int: 삭제된 행 수 (Number of deleted rows)
        """
        stmt = delete(DailyReport).where(
            DailyReport.company_id == company_id,
            DailyReport.report_date == report_date,
        )
        if department is not None:
            stmt = stmt.where(DailyReport.department == department)
        if isinstance(identity, ById):
            stmt = stmt.where(DailyReport.employee_id.in_(identity.ids))
        else:
            stmt = stmt.where(DailyReport.employee_name.in_(identity.names))
        result = await db.execute(stmt)
        return result.rowcount or 0

    async def delete_rows(self, db: AsyncSession, report_ids: list[UUID]) -> int:
        if not report_ids:
            return 0
        result = await db.execute(
            delete(DailyReport)
            .where(DailyReport.id.in_(report_ids))
        )
        return result.rowcount or 0


class SummaryRepository(BaseRepository[DailySummary]):
    """일일 요약 테이블 쿼리 (Queries for the daily_summaries table)."""

    def __init__(self) -> None:
        super().__init__(DailySummary)

    @staticmethod
    def _department_clause(department: str | None):
        if department is None:
            return DailySummary.department.is_(None)
        return DailySummary.department == department

    async def update_by_key(
        self,
        db: AsyncSession,
        company_id: UUID,
        summary_date: date,
        department: str | None,
        summary: str,
    ) -> int:
        """자연키로 요약 본문을 갱신합니다.

        Update the summary text by natural key.

        Returns:
            int: 갱신된 행 수, 0이면 호출자가 insert (Rows updated)
        """
        result = await db.execute(
            update(DailySummary)
            .where(
                DailySummary.company_id == company_id,
                DailySummary.summary_date == summary_date,
                self._department_clause(department),
            )
            .values(summary=summary)
        )
        return result.rowcount or 0

    async def list_by_key(
        self,
        db: AsyncSession,
        company_id: UUID,
        summary_date: date,
        department: str | None,
    ) -> list[DailySummary]:
        result = await db.execute(
            select(DailySummary)
            .where(
                DailySummary.company_id == company_id,
                DailySummary.summary_date == summary_date,
                self._department_clause(department),
            )
            .order_by(DailySummary.created_at)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_scoped(
        self,
        db: AsyncSession,
        scope: Scope,
        summary_date: date | None = None,
    ) -> list[DailySummary]:
        """범위 안의 요약 목록. 부서가 고정된 범위는 회사 전체 요약도 포함.

        Summaries inside a scope; a department-pinned scope also sees the
        company-wide (department NULL) summary.
        """
        query: Select = select(DailySummary)
        if scope.company_id is not None:
            query = query.where(DailySummary.company_id == scope.company_id)
        if scope.department is not None:
            query = query.where(
                (DailySummary.department == scope.department) | DailySummary.department.is_(None)
            )
        if summary_date is not None:
            query = query.where(DailySummary.summary_date == summary_date)
        query = query.order_by(DailySummary.summary_date.desc(), DailySummary.department)
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 (Singleton instances)
report_repository: ReportRepository = ReportRepository()
summary_repository: SummaryRepository = SummaryRepository()
