"""SQLAlchemy ORM 모델 패키지, 모든 도메인 모델의 중앙 임포트 지점.

Central import point for all domain models. Importing this package
registers every table with the metadata, which Alembic and create_all need.

Modules:
    company: 회사, 부서 (Company, Department)
    employee: 직원 (Employee)
    report: 일일 보고서, 일일 요약 (DailyReport, DailySummary)
    mission: 미션, KPI, 프로젝트 (Mission, MissionKpi, Project)
    prompt: LLM 프롬프트 (Prompt)
"""

from dailyreport.models.company import Company, Department
from dailyreport.models.employee import Employee
from dailyreport.models.report import DailyReport, DailySummary
from dailyreport.models.mission import Mission, MissionKpi, Project
from dailyreport.models.prompt import Prompt

__all__ = [
    "Company", "Department",
    "Employee",
    "DailyReport", "DailySummary",
    "Mission", "MissionKpi", "Project",
    "Prompt",
]
