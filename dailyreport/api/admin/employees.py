"""관리자 직원 라우터.

Admin Employee Router. Company and department of every write come from
the caller's write scope; a row outside that scope answers 404.

Permission Matrix (역할별 권한):
    - operator: 전체 회사 직원
    - company_manager: 본인 회사 직원
    - manager: 본인 회사, 본인 부서 직원
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.api.deps import require_managing
from dailyreport.database import get_db
from dailyreport.schemas.common import MessageResponse
from dailyreport.schemas.employee import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    ResetPasswordRequest,
)
from dailyreport.services.employee_service import employee_service
from dailyreport.utils.scope import Principal

router: APIRouter = APIRouter()


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_managing)],
    company_id: Annotated[UUID | None, Query()] = None,
    department: Annotated[str | None, Query()] = None,
) -> list[EmployeeResponse]:
    """관리 가능한 직원 목록 (Employees inside the caller's write scope)."""
    return await employee_service.list_managed(db, principal, company_id, department)


@router.post("", response_model=EmployeeResponse, status_code=201)
async def create_employee(
    data: EmployeeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_managing)],
) -> EmployeeResponse:
    result: EmployeeResponse = await employee_service.create_employee(db, principal, data)
    await db.commit()
    return result


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: UUID,
    data: EmployeeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_managing)],
) -> EmployeeResponse:
    result: EmployeeResponse = await employee_service.update_employee(db, principal, employee_id, data)
    await db.commit()
    return result


@router.delete("/{employee_id}", status_code=204)
async def delete_employee(
    employee_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_managing)],
) -> None:
    await employee_service.delete_employee(db, principal, employee_id)
    await db.commit()


@router.post("/{employee_id}/reset-password", response_model=MessageResponse)
async def reset_password(
    employee_id: UUID,
    data: ResetPasswordRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_managing)],
) -> MessageResponse:
    """직원 비밀번호 초기화 (Reset the password of a managed employee)."""
    await employee_service.reset_password(db, principal, employee_id, data)
    await db.commit()
    return MessageResponse(message="비밀번호가 초기화되었습니다.")
