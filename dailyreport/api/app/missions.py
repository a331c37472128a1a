"""앱 미션/KPI 라우터.

App Mission Router. Any authenticated principal reads missions in scope;
creating, editing and deleting missions or KPIs needs a managing role.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.api.deps import get_current_principal, require_managing
from dailyreport.database import get_db
from dailyreport.schemas.mission import (
    KpiCreate,
    KpiResponse,
    KpiUpdate,
    MissionCreate,
    MissionResponse,
    MissionUpdate,
)
from dailyreport.services.mission_service import mission_service
from dailyreport.utils.scope import Principal

router: APIRouter = APIRouter()


@router.get("", response_model=list[MissionResponse])
async def list_missions(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
    department: Annotated[str | None, Query()] = None,
    assignee: Annotated[str | None, Query()] = None,
    status: Annotated[str | None, Query()] = None,
    company_id: Annotated[UUID | None, Query()] = None,
) -> list[MissionResponse]:
    return await mission_service.list_missions(db, principal, department, assignee, status, company_id)


@router.post("", response_model=MissionResponse, status_code=201)
async def create_mission(
    data: MissionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_managing)],
) -> MissionResponse:
    """미션 생성, 요청에 포함된 KPI도 함께 생성."""
    result: MissionResponse = await mission_service.create_mission(db, principal, data)
    await db.commit()
    return result


# KPI 경로는 /{mission_id}보다 먼저 등록 (Registered before /{mission_id})
@router.put("/kpis/{kpi_id}", response_model=KpiResponse)
async def update_kpi(
    kpi_id: UUID,
    data: KpiUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_managing)],
) -> KpiResponse:
    result: KpiResponse = await mission_service.update_kpi(db, principal, kpi_id, data)
    await db.commit()
    return result


@router.delete("/kpis/{kpi_id}", status_code=204)
async def delete_kpi(
    kpi_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_managing)],
) -> None:
    await mission_service.delete_kpi(db, principal, kpi_id)
    await db.commit()


@router.get("/{mission_id}", response_model=MissionResponse)
async def get_mission(
    mission_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> MissionResponse:
    return await mission_service.get_mission(db, principal, mission_id)


@router.put("/{mission_id}", response_model=MissionResponse)
async def update_mission(
    mission_id: UUID,
    data: MissionUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_managing)],
) -> MissionResponse:
    result: MissionResponse = await mission_service.update_mission(db, principal, mission_id, data)
    await db.commit()
    return result


@router.delete("/{mission_id}", status_code=204)
async def delete_mission(
    mission_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_managing)],
) -> None:
    """미션과 소속 KPI를 삭제합니다."""
    await mission_service.delete_mission(db, principal, mission_id)
    await db.commit()


@router.post("/{mission_id}/kpis", response_model=KpiResponse, status_code=201)
async def add_kpi(
    mission_id: UUID,
    data: KpiCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_managing)],
) -> KpiResponse:
    result: KpiResponse = await mission_service.add_kpi(db, principal, mission_id, data)
    await db.commit()
    return result
