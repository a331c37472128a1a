"""미션 및 KPI 서비스.

Mission Service. Missions are company scoped; their KPIs are reached only
through a mission the caller can see, and are deleted together with it.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.mission import Mission, MissionKpi
from dailyreport.repositories.mission_repository import kpi_repository, mission_repository
from dailyreport.schemas.mission import (
    KpiCreate,
    KpiResponse,
    KpiUpdate,
    MissionCreate,
    MissionResponse,
    MissionUpdate,
)
from dailyreport.services.organization_service import parse_uuid
from dailyreport.utils.aggregation import filter_missions, kpi_achievement
from dailyreport.utils.exceptions import BadRequestError, NotFoundError
from dailyreport.utils.scope import OPERATOR, Principal, Scope, narrow_scope, resolve_scope


class MissionService:
    """미션 관련 비즈니스 로직을 처리하는 서비스."""

    def _kpi_response(self, kpi: MissionKpi) -> KpiResponse:
        rate, width = kpi_achievement(kpi.current_value, kpi.target_value)
        return KpiResponse(
            id=str(kpi.id),
            mission_id=str(kpi.mission_id),
            kpi_name=kpi.kpi_name,
            target_value=kpi.target_value,
            current_value=kpi.current_value,
            unit=kpi.unit,
            achievement_rate=rate,
            bar_width=width,
        )

    def _to_response(self, mission: Mission, kpis: list[MissionKpi]) -> MissionResponse:
        return MissionResponse(
            id=str(mission.id),
            company_id=str(mission.company_id),
            mission_name=mission.mission_name,
            description=mission.description,
            assignee=mission.assignee,
            department=mission.department,
            start_date=mission.start_date,
            end_date=mission.end_date,
            status=mission.status,
            progress_rate=mission.progress_rate,
            kpis=[self._kpi_response(k) for k in kpis],
            created_at=mission.created_at,
        )

    async def list_missions(
        self,
        db: AsyncSession,
        principal: Principal,
        department: str | None = None,
        assignee: str | None = None,
        status: str | None = None,
        company_id: UUID | None = None,
    ) -> list[MissionResponse]:
        """범위 안의 미션 목록, KPI 포함.

        Missions in scope with their KPIs fetched in one query, then
        filtered on department, assignee and status.
        """
        scope: Scope | None = narrow_scope(resolve_scope(principal), company_id)
        if scope is None:
            return []
        missions: list[Mission] = filter_missions(
            await mission_repository.list_scoped(db, scope), department, assignee, status
        )
        kpis: dict[UUID, list[MissionKpi]] = await kpi_repository.list_for_missions(db, [m.id for m in missions])
        return [self._to_response(m, kpis.get(m.id, [])) for m in missions]

    async def _get_mission(self, db: AsyncSession, principal: Principal, mission_id: UUID) -> Mission:
        mission: Mission | None = await mission_repository.get_by_id(db, mission_id)
        if mission is None or not resolve_scope(principal).allows(mission.company_id, mission.department):
            raise NotFoundError("미션을 찾을 수 없습니다.")
        return mission

    async def get_mission(self, db: AsyncSession, principal: Principal, mission_id: UUID) -> MissionResponse:
        mission: Mission = await self._get_mission(db, principal, mission_id)
        kpis: dict[UUID, list[MissionKpi]] = await kpi_repository.list_for_missions(db, [mission.id])
        return self._to_response(mission, kpis[mission.id])

    async def create_mission(
        self,
        db: AsyncSession,
        principal: Principal,
        data: MissionCreate,
    ) -> MissionResponse:
        """미션과 KPI를 함께 생성합니다.

        Raises:
            BadRequestError: 종료일이 시작일보다 빠름 (End before start)
        """
        if data.end_date < data.start_date:
            raise BadRequestError("종료일은 시작일보다 빠를 수 없습니다.")

        company_id: UUID = principal.company_id
        if principal.role == OPERATOR and data.company_id:
            company_id = parse_uuid(data.company_id, "회사 ID")

        values: dict[str, Any] = data.model_dump(exclude={"company_id", "kpis"})
        values["company_id"] = company_id
        mission: Mission = await mission_repository.create(db, values)

        kpis: list[MissionKpi] = await kpi_repository.create_many(
            db, [{**kpi.model_dump(), "mission_id": mission.id} for kpi in data.kpis]
        )
        return self._to_response(mission, kpis)

    async def update_mission(
        self,
        db: AsyncSession,
        principal: Principal,
        mission_id: UUID,
        data: MissionUpdate,
    ) -> MissionResponse:
        mission: Mission = await self._get_mission(db, principal, mission_id)
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True, exclude_none=True)
        start = update_data.get("start_date", mission.start_date)
        end = update_data.get("end_date", mission.end_date)
        if end < start:
            raise BadRequestError("종료일은 시작일보다 빠를 수 없습니다.")

        updated: Mission | None = await mission_repository.update(db, mission.id, update_data)
        kpis: dict[UUID, list[MissionKpi]] = await kpi_repository.list_for_missions(db, [mission.id])
        return self._to_response(updated, kpis[mission.id])

    async def delete_mission(self, db: AsyncSession, principal: Principal, mission_id: UUID) -> None:
        """미션과 소속 KPI를 삭제합니다 (Delete a mission and its KPIs)."""
        mission: Mission = await self._get_mission(db, principal, mission_id)
        await kpi_repository.delete_for_mission(db, mission.id)
        await mission_repository.delete(db, mission.id)

    # === KPI ===

    async def add_kpi(
        self,
        db: AsyncSession,
        principal: Principal,
        mission_id: UUID,
        data: KpiCreate,
    ) -> KpiResponse:
        mission: Mission = await self._get_mission(db, principal, mission_id)
        kpi: MissionKpi = await kpi_repository.create(db, {**data.model_dump(), "mission_id": mission.id})
        return self._kpi_response(kpi)

    async def _get_kpi(self, db: AsyncSession, principal: Principal, kpi_id: UUID) -> MissionKpi:
        kpi: MissionKpi | None = await kpi_repository.get_by_id(db, kpi_id)
        if kpi is None:
            raise NotFoundError("KPI를 찾을 수 없습니다.")
        # 상위 미션의 범위로 권한 확인 (Scope is inherited from the mission)
        await self._get_mission(db, principal, kpi.mission_id)
        return kpi

    async def update_kpi(
        self,
        db: AsyncSession,
        principal: Principal,
        kpi_id: UUID,
        data: KpiUpdate,
    ) -> KpiResponse:
        kpi: MissionKpi = await self._get_kpi(db, principal, kpi_id)
        updated: MissionKpi | None = await kpi_repository.update(
            db, kpi.id, data.model_dump(exclude_unset=True, exclude_none=True)
        )
        return self._kpi_response(updated)

    async def delete_kpi(self, db: AsyncSession, principal: Principal, kpi_id: UUID) -> None:
        kpi: MissionKpi = await self._get_kpi(db, principal, kpi_id)
        await kpi_repository.delete(db, kpi.id)


# 싱글턴 인스턴스 (Singleton instance)
mission_service: MissionService = MissionService()
