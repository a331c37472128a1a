"""미션, KPI, 프로젝트 레포지토리.

Mission, KPI and project repositories.
"""

from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.mission import Mission, MissionKpi, Project
from dailyreport.repositories.base import BaseRepository
from dailyreport.utils.scope import Scope


class MissionRepository(BaseRepository[Mission]):
    def __init__(self) -> None:
        super().__init__(Mission)

    async def list_scoped(self, db: AsyncSession, scope: Scope) -> list[Mission]:
        """범위 안의 미션을 시작일 최신순으로 조회 (Missions in scope, newest first)."""
        query: Select = select(Mission)
        if scope.company_id is not None:
            query = query.where(Mission.company_id == scope.company_id)
        if scope.department is not None:
            query = query.where(Mission.department == scope.department)
        result = await db.execute(query.order_by(Mission.start_date.desc(), Mission.mission_name))
        return list(result.scalars().all())


class KpiRepository(BaseRepository[MissionKpi]):
    def __init__(self) -> None:
        super().__init__(MissionKpi)

    async def list_for_missions(
        self, db: AsyncSession, mission_ids: list[UUID]
    ) -> dict[UUID, list[MissionKpi]]:
        """여러 미션의 KPI를 한 번에 조회합니다.

        Bulk-fetch KPIs for many missions, grouped by mission id.
        """
        grouped: dict[UUID, list[MissionKpi]] = {mission_id: [] for mission_id in mission_ids}
        if not mission_ids:
            return grouped
        result = await db.execute(
            select(MissionKpi)
            .where(MissionKpi.mission_id.in_(mission_ids))
            .order_by(MissionKpi.created_at)
        )
        for kpi in result.scalars().all():
            grouped.setdefault(kpi.mission_id, []).append(kpi)
        return grouped

    async def delete_for_mission(self, db: AsyncSession, mission_id: UUID) -> int:
        result = await db.execute(
            delete(MissionKpi)
            .where(MissionKpi.mission_id == mission_id)
        )
        return result.rowcount or 0


class ProjectRepository(BaseRepository[Project]):
    def __init__(self) -> None:
        super().__init__(Project)

    async def list_scoped(self, db: AsyncSession, scope: Scope) -> list[Project]:
        query: Select = select(Project)
        if scope.company_id is not None:
            query = query.where(Project.company_id == scope.company_id)
        if scope.department is not None:
            query = query.where(Project.department == scope.department)
        result = await db.execute(query.order_by(Project.target_end_date, Project.project_name))
        return list(result.scalars().all())


# 싱글턴 인스턴스 (Singleton instances)
mission_repository: MissionRepository = MissionRepository()
kpi_repository: KpiRepository = KpiRepository()
project_repository: ProjectRepository = ProjectRepository()
