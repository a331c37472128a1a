"""앱 디렉터리 라우터, 범위 안 부서와 직원 조회.

App Directory Router. Read-only lists used by the report form and filters.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.api.deps import get_current_principal
from dailyreport.database import get_db
from dailyreport.schemas.employee import EmployeeResponse
from dailyreport.services.employee_service import employee_service
from dailyreport.utils.scope import Principal

router: APIRouter = APIRouter()


@router.get("/departments", response_model=list[str])
async def list_departments(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
    company_id: Annotated[UUID | None, Query()] = None,
) -> list[str]:
    """범위 안 직원들의 부서명 목록 (Distinct departments in scope)."""
    return await employee_service.list_department_names(db, principal, company_id)


@router.get("/employees", response_model=list[EmployeeResponse])
async def list_employees(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
    department: Annotated[str | None, Query()] = None,
    company_id: Annotated[UUID | None, Query()] = None,
) -> list[EmployeeResponse]:
    return await employee_service.list_directory_responses(db, principal, department, company_id)
