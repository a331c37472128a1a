"""관리자 부서 라우터.

Admin Department Router. Operators and managers may list; only operators
create, rename or delete.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.api.deps import require_operator, require_operator_or_manager
from dailyreport.database import get_db
from dailyreport.schemas.organization import DepartmentCreate, DepartmentResponse, DepartmentUpdate
from dailyreport.services.organization_service import organization_service
from dailyreport.utils.scope import OPERATOR, Principal

router: APIRouter = APIRouter()


@router.get("", response_model=list[DepartmentResponse])
async def list_departments(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_operator_or_manager)],
    company_id: Annotated[UUID | None, Query()] = None,
) -> list[DepartmentResponse]:
    """부서 목록. 관리자는 본인 회사만 조회.

    List departments; non-operators always see their own company only.
    """
    if principal.role != OPERATOR:
        company_id = principal.company_id
    return await organization_service.list_departments(db, company_id)


@router.post("", response_model=DepartmentResponse, status_code=201)
async def create_department(
    data: DepartmentCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_operator)],
) -> DepartmentResponse:
    result: DepartmentResponse = await organization_service.create_department(db, data)
    await db.commit()
    return result


@router.put("/{department_id}", response_model=DepartmentResponse)
async def update_department(
    department_id: UUID,
    data: DepartmentUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_operator)],
) -> DepartmentResponse:
    result: DepartmentResponse = await organization_service.update_department(db, department_id, data)
    await db.commit()
    return result


@router.delete("/{department_id}", status_code=204)
async def delete_department(
    department_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_operator)],
) -> None:
    """부서를 삭제합니다. 소속 직원이 있으면 409."""
    await organization_service.delete_department(db, department_id)
    await db.commit()
