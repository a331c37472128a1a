"""앱 프로젝트 라우터."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.api.deps import get_current_principal, require_managing
from dailyreport.database import get_db
from dailyreport.schemas.mission import ProjectCreate, ProjectResponse, ProjectUpdate
from dailyreport.services.project_service import project_service
from dailyreport.utils.scope import Principal

router: APIRouter = APIRouter()


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
    department: Annotated[str | None, Query()] = None,
    status: Annotated[str | None, Query()] = None,
    q: Annotated[str | None, Query(description="프로젝트명 검색 (case-insensitive)")] = None,
    company_id: Annotated[UUID | None, Query()] = None,
) -> list[ProjectResponse]:
    return await project_service.list_projects(db, principal, department, status, q, company_id)


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    data: ProjectCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_managing)],
) -> ProjectResponse:
    result: ProjectResponse = await project_service.create_project(db, principal, data)
    await db.commit()
    return result


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_managing)],
) -> ProjectResponse:
    result: ProjectResponse = await project_service.update_project(db, principal, project_id, data)
    await db.commit()
    return result


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_managing)],
) -> None:
    await project_service.delete_project(db, principal, project_id)
    await db.commit()
