"""앱 API 라우터 패키지, 모든 사용자 엔드포인트 통합.

App API Router package. Aggregates the endpoints available to every
authenticated principal (scoped by role) into a router mounted at
/api/v1/app.

Included routers:
    - directory: 부서/직원 조회 (Departments and employees in scope)
    - reports: 일일 보고서 (Daily reports, complete list, attendance, export)
    - summaries: 일일 요약 (Daily summaries and LLM generation)
    - missions: 미션/KPI (Missions and KPIs)
    - projects: 프로젝트 (Projects)
    - stats: 대시보드 통계, 기간 요약 (Dashboard stats, period summary)
"""

from fastapi import APIRouter

from dailyreport.api.app.directory import router as directory_router
from dailyreport.api.app.missions import router as missions_router
from dailyreport.api.app.projects import router as projects_router
from dailyreport.api.app.reports import router as reports_router
from dailyreport.api.app.stats import router as stats_router
from dailyreport.api.app.summaries import router as summaries_router

app_router: APIRouter = APIRouter()

app_router.include_router(directory_router, tags=["Directory"])
app_router.include_router(reports_router, prefix="/reports", tags=["Reports"])
app_router.include_router(summaries_router, prefix="/summaries", tags=["Summaries"])
app_router.include_router(missions_router, prefix="/missions", tags=["Missions"])
app_router.include_router(projects_router, prefix="/projects", tags=["Projects"])
app_router.include_router(stats_router, tags=["Stats"])
