"""조회용 집계 뷰.

Read-side aggregation over already scoped rows: attendance statistics,
the complete report list with "not submitted" placeholders, KPI
achievement, mission/project filters and dashboard averages.

Inputs are duck-typed: any object exposing the listed attributes works,
ORM rows included.
"""

import math
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Iterable, Sequence

from dailyreport.utils.reconciliation import ANNUAL_LEAVE, NOT_SUBMITTED

UNASSIGNED_DEPARTMENT: str = "미분류"


def round_half_up(value: float) -> int:
    """사사오입 반올림 (Round .5 away from zero for non-negative values)."""
    return int(math.floor(value + 0.5))


def is_regular(report: Any) -> bool:
    """연차, 작성 안됨이 아닌 실제 업무 행인지 (Ordinary work row)."""
    return report.work_overview not in (ANNUAL_LEAVE, NOT_SUBMITTED)


def employee_identity(report: Any) -> str:
    employee_id = getattr(report, "employee_id", None)
    if employee_id is not None:
        return f"id:{employee_id}"
    return f"name:{report.employee_name}"


# ---------------------------------------------------------------------------
# 근태 통계 (Attendance statistics)
# ---------------------------------------------------------------------------

@dataclass
class AttendanceStats:
    """직원별 근태 통계 (Per-employee attendance statistics)."""

    employee_id: uuid.UUID | None
    employee_name: str
    department: str
    total_days: int = 0
    working_days: int = 0
    annual_leave_days: int = 0
    average_achievement: int = 0
    dates: list[date] = field(default_factory=list)


def attendance_stats(reports: Iterable[Any]) -> list[AttendanceStats]:
    """직원별, 날짜별로 묶어 근태 통계를 계산합니다.

    Group by employee (id preferred, name fallback) then by date.
    working_days counts distinct dates with at least one regular entry,
    annual_leave_days counts distinct leave dates, and the average runs over
    regular entries only. Placeholders count toward neither.

    Args:
        reports: 범위가 적용된 보고서 행 (Scoped report rows)

    Returns:
        list[AttendanceStats]: 직원 이름순 통계 (Stats ordered by employee name)
    """
    grouped: dict[str, dict[date, list[Any]]] = defaultdict(lambda: defaultdict(list))
    first_seen: dict[str, Any] = {}
    for report in reports:
        key: str = employee_identity(report)
        grouped[key][report.report_date].append(report)
        first_seen.setdefault(key, report)

    result: list[AttendanceStats] = []
    for key, by_date in grouped.items():
        sample: Any = first_seen[key]
        working: set[date] = set()
        leave: set[date] = set()
        rates: list[int] = []
        for day, rows in by_date.items():
            for row in rows:
                if row.work_overview == ANNUAL_LEAVE:
                    leave.add(day)
                elif row.work_overview != NOT_SUBMITTED:
                    working.add(day)
                    rates.append(row.achievement_rate)
        result.append(
            AttendanceStats(
                employee_id=getattr(sample, "employee_id", None),
                employee_name=sample.employee_name,
                department=sample.department,
                total_days=len(by_date),
                working_days=len(working),
                annual_leave_days=len(leave),
                average_achievement=round_half_up(sum(rates) / len(rates)) if rates else 0,
                dates=sorted(by_date),
            )
        )
    result.sort(key=lambda s: (s.employee_name, str(s.employee_id or "")))
    return result


# ---------------------------------------------------------------------------
# 전체 보고서 목록 (Complete report list)
# ---------------------------------------------------------------------------

@dataclass
class ReportView:
    """화면 표시용 보고서 행, 저장되지 않는 자리표시 행 포함.

    Display row; placeholders have no id and are never persisted.
    """

    id: uuid.UUID | None
    report_date: date
    employee_id: uuid.UUID | None
    employee_name: str
    employee_code: str
    department: str
    work_overview: str
    progress_goal: str
    achievement_rate: int
    manager_evaluation: str
    remarks: str
    company_id: uuid.UUID | None = None
    is_placeholder: bool = False


def placeholder_for(employee: Any, report_date: date) -> ReportView:
    """미제출 직원용 "작성 안됨" 행 (Synthetic not-submitted row)."""
    return ReportView(
        id=None,
        report_date=report_date,
        employee_id=employee.id,
        employee_name=employee.name,
        employee_code=employee.employee_code,
        department=employee.department,
        work_overview=NOT_SUBMITTED,
        progress_goal="-",
        achievement_rate=0,
        manager_evaluation="-",
        remarks=NOT_SUBMITTED,
        company_id=employee.company_id,
        is_placeholder=True,
    )


def build_complete_report_list(
    report_date: date,
    reports: Sequence[Any],
    employees: Sequence[Any],
) -> list[ReportView]:
    """실제 보고서와 미제출 자리표시 행을 합칩니다.

    Union the stored rows of one date with a placeholder for every
    in-scope employee who has none. An employee counts as reported when a
    row matches their id, or for rows without an id, their name. Ordered by
    department, then employee code.

    Args:
        report_date: 조회 날짜 (Date being viewed)
        reports: 해당 날짜의 범위 내 보고서 (Scoped rows of that date)
        employees: 범위 내 직원 (Scoped employees)

    Returns:
        list[ReportView]: 정렬된 전체 목록 (Sorted complete list)
    """
    codes_by_id: dict[uuid.UUID, str] = {e.id: e.employee_code for e in employees}
    codes_by_name: dict[str, str] = {e.name: e.employee_code for e in employees}
    reported_ids: set[uuid.UUID] = set()
    reported_names: set[str] = set()

    rows: list[ReportView] = []
    for report in reports:
        if report.employee_id is not None:
            reported_ids.add(report.employee_id)
            code: str = codes_by_id.get(report.employee_id, codes_by_name.get(report.employee_name, ""))
        else:
            reported_names.add(report.employee_name)
            code = codes_by_name.get(report.employee_name, "")
        rows.append(
            ReportView(
                id=report.id,
                report_date=report.report_date,
                employee_id=report.employee_id,
                employee_name=report.employee_name,
                employee_code=code,
                department=report.department,
                work_overview=report.work_overview,
                progress_goal=report.progress_goal,
                achievement_rate=report.achievement_rate,
                manager_evaluation=report.manager_evaluation,
                remarks=report.remarks,
                company_id=report.company_id,
            )
        )

    for employee in employees:
        if employee.id in reported_ids or employee.name in reported_names:
            continue
        rows.append(placeholder_for(employee, report_date))

    rows.sort(key=lambda r: (r.department, r.employee_code, r.employee_name))
    return rows


# ---------------------------------------------------------------------------
# 미션 KPI / 필터 (Mission KPIs and list filters)
# ---------------------------------------------------------------------------

def kpi_achievement(current_value: float, target_value: float) -> tuple[float, float]:
    """KPI 달성률과 진행 막대 폭을 계산합니다.

    Returns the unclamped rate (current / target * 100, 0 when the target
    is 0) rounded to one decimal, and the bar width clamped to [0, 100].
    """
    if not target_value:
        return 0.0, 0.0
    rate: float = round(current_value / target_value * 100, 1)
    return rate, max(0.0, min(rate, 100.0))


def filter_missions(
    missions: Iterable[Any],
    department: str | None = None,
    assignee: str | None = None,
    status: str | None = None,
) -> list[Any]:
    """미션 목록 필터 (Exact match on department, assignee and status)."""
    return [
        m for m in missions
        if (not department or m.department == department)
        and (not assignee or m.assignee == assignee)
        and (not status or m.status == status)
    ]


def filter_projects(
    projects: Iterable[Any],
    department: str | None = None,
    status: str | None = None,
    name_query: str | None = None,
) -> list[Any]:
    """프로젝트 목록 필터, 이름은 대소문자 무시 부분 일치.

    Project filter; the name query is a case-insensitive substring match.
    """
    needle: str = (name_query or "").strip().lower()
    return [
        p for p in projects
        if (not department or p.department == department)
        and (not status or p.status == status)
        and (not needle or needle in p.project_name.lower())
    ]


# ---------------------------------------------------------------------------
# 대시보드 통계 (Dashboard averages)
# ---------------------------------------------------------------------------

@dataclass
class DashboardStats:
    monthly_average_rate: int
    weekly_average_rate: int
    department_stats: dict[str, int]


def _average(rates: list[int]) -> int:
    return round_half_up(sum(rates) / len(rates)) if rates else 0


def dashboard_stats(reports: Iterable[Any], today: date) -> DashboardStats:
    """이번 달, 최근 7일, 부서별 평균 달성률.

    Averages over regular entries: the current calendar month, the seven
    days ending today, and per department across the current month.
    """
    week_start: date = today - timedelta(days=6)
    monthly: list[int] = []
    weekly: list[int] = []
    by_department: dict[str, list[int]] = defaultdict(list)
    for report in reports:
        if not is_regular(report):
            continue
        day: date = report.report_date
        if day.year == today.year and day.month == today.month:
            monthly.append(report.achievement_rate)
            by_department[report.department or UNASSIGNED_DEPARTMENT].append(report.achievement_rate)
        if week_start <= day <= today:
            weekly.append(report.achievement_rate)
    return DashboardStats(
        monthly_average_rate=_average(monthly),
        weekly_average_rate=_average(weekly),
        department_stats={dept: _average(rates) for dept, rates in sorted(by_department.items())},
    )


def render_daily_report_text(report_date: date, reports: Iterable[Any]) -> str:
    """LLM 입력용 부서별 보고서 텍스트를 만듭니다.

    Render one date's reports grouped by department; sentinel rows are left
    out and "-" placeholders are not repeated.
    """
    grouped: dict[str, list[Any]] = defaultdict(list)
    for report in reports:
        grouped[report.department or UNASSIGNED_DEPARTMENT].append(report)

    lines: list[str] = [f"{report_date.isoformat()} 일일업무보고 내용:", ""]
    for department, rows in grouped.items():
        lines.append(f"[{department}]")
        for report in rows:
            if not is_regular(report):
                continue
            lines.append(f"{report.employee_name}: {report.work_overview}")
            if report.progress_goal and report.progress_goal != "-":
                lines.append(f"  진행목표: {report.progress_goal}")
            if report.achievement_rate > 0:
                lines.append(f"  달성률: {report.achievement_rate}%")
            if report.remarks and report.remarks not in ("-", NOT_SUBMITTED):
                lines.append(f"  비고: {report.remarks}")
            lines.append("")
    return "\n".join(lines)
