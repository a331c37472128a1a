"""관리자 회사 라우터, 운영자 전용 회사 CRUD.

Admin Company Router. Operator only.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.api.deps import require_operator
from dailyreport.database import get_db
from dailyreport.schemas.organization import CompanyCreate, CompanyResponse, CompanyUpdate
from dailyreport.services.organization_service import organization_service
from dailyreport.utils.scope import Principal

router: APIRouter = APIRouter()


@router.get("", response_model=list[CompanyResponse])
async def list_companies(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_operator)],
) -> list[CompanyResponse]:
    return await organization_service.list_companies(db)


@router.post("", response_model=CompanyResponse, status_code=201)
async def create_company(
    data: CompanyCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_operator)],
) -> CompanyResponse:
    """새 회사를 생성합니다. 이름 중복 시 409."""
    result: CompanyResponse = await organization_service.create_company(db, data)
    await db.commit()
    return result


@router.put("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: UUID,
    data: CompanyUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_operator)],
) -> CompanyResponse:
    result: CompanyResponse = await organization_service.update_company(db, company_id, data)
    await db.commit()
    return result


@router.delete("/{company_id}", status_code=204)
async def delete_company(
    company_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_operator)],
) -> None:
    """회사를 삭제합니다. 소속 직원이 있으면 409.

    Delete a company; blocked while employees still belong to it.
    """
    await organization_service.delete_company(db, company_id)
    await db.commit()
