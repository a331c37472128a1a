"""대시보드 통계 서비스."""

from datetime import date, timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.report import DailyReport
from dailyreport.repositories.report_repository import report_repository
from dailyreport.schemas.stats import StatsResponse
from dailyreport.utils.aggregation import DashboardStats, dashboard_stats
from dailyreport.utils.scope import Principal, Scope, narrow_scope, resolve_scope


class StatsService:
    async def get_stats(
        self,
        db: AsyncSession,
        principal: Principal,
        today: date | None = None,
        company_id: UUID | None = None,
    ) -> StatsResponse:
        """이번 달, 최근 7일, 부서별 평균 달성률을 계산합니다.

        Dashboard averages over the caller's scoped reports. Only the rows
        from the earlier of the month start and the week start are loaded.
        """
        today = today or date.today()
        scope: Scope | None = narrow_scope(resolve_scope(principal), company_id)
        if scope is None:
            return StatsResponse(monthly_average_rate=0, weekly_average_rate=0, department_stats={})

        start: date = min(today.replace(day=1), today - timedelta(days=6))
        reports: list[DailyReport] = await report_repository.list_scoped(db, scope, start_date=start, end_date=today)
        stats: DashboardStats = dashboard_stats(reports, today)
        return StatsResponse(
            monthly_average_rate=stats.monthly_average_rate,
            weekly_average_rate=stats.weekly_average_rate,
            department_stats=stats.department_stats,
        )


# 싱글턴 인스턴스 (Singleton instance)
stats_service: StatsService = StatsService()
