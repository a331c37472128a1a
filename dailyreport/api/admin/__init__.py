"""관리자 API 라우터 패키지, 모든 관리자 엔드포인트 통합.

Admin API Router package. Aggregates the administration endpoints into a
single router mounted at /api/v1/admin.

Included routers:
    - companies: 회사 관리 (Company management, operator)
    - departments: 부서 관리 (Department table)
    - employees: 직원 관리 (Employee administration within write scope)
    - prompts: LLM 프롬프트 관리 (Prompt management)
"""

from fastapi import APIRouter

from dailyreport.api.admin.companies import router as companies_router
from dailyreport.api.admin.departments import router as departments_router
from dailyreport.api.admin.employees import router as employees_router
from dailyreport.api.admin.prompts import router as prompts_router

admin_router: APIRouter = APIRouter()

admin_router.include_router(companies_router, prefix="/companies", tags=["Companies"])
admin_router.include_router(departments_router, prefix="/departments", tags=["Departments"])
admin_router.include_router(employees_router, prefix="/employees", tags=["Employees"])
admin_router.include_router(prompts_router, prefix="/prompts", tags=["Prompts"])
