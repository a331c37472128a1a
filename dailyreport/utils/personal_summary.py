"""기간별 업무 보고 요약 (개인/부서).

Period work summary built from report rows without any LLM: project
grouping, per-employee statistics and a Markdown rendering. The same
structure is the fallback when the AI summary cannot be produced.
"""

import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Sequence

from dailyreport.utils.aggregation import is_regular, round_half_up
from dailyreport.utils.reconciliation import ANNUAL_LEAVE

# 업무 개요에서 프로젝트명 추출 구분자 (Separators ending the project name)
_PROJECT_SEPARATOR = re.compile(r"[-,]")


@dataclass(frozen=True)
class SummaryFilter:
    """요약 대상 기간과 대상 (Period and target of a summary)."""

    period: str
    department: str | None = None
    employee_name: str | None = None

    @property
    def target(self) -> str:
        return self.department or "전체"


def project_key(work_overview: str) -> str:
    """업무 개요 첫 구간을 프로젝트명으로 사용 (First segment of the overview)."""
    return _PROJECT_SEPARATOR.split(work_overview, maxsplit=1)[0].strip()


def project_status(rate: int) -> str:
    if rate >= 90:
        return "완료"
    if rate >= 70:
        return "진행중"
    return "지연"


def performance_grade(rate: int) -> str:
    if rate >= 90:
        return "우수"
    if rate >= 70:
        return "양호"
    return "개선필요"


_STATUS_BADGE: dict[str, str] = {"완료": "✅ 완료", "진행중": "🔄 진행중", "지연": "⚠️ 지연"}


def recommendation(rate: int) -> str:
    if rate >= 85:
        return "조직 전체가 우수한 성과를 보이고 있습니다. 현재의 업무 프로세스를 유지하면서 지속적인 개선을 추진하세요."
    if rate >= 70:
        return "전반적으로 양호한 성과를 유지하고 있습니다. 일부 개선이 필요한 영역에 대한 지원을 강화하세요."
    return "성과 개선이 필요합니다. 업무 프로세스 재검토와 목표 재설정을 고려하세요."


def _date_range(dates: Sequence[str]) -> str:
    ordered = sorted(dates)
    if ordered[0] == ordered[-1]:
        return ordered[0]
    return f"{ordered[0]} ~ {ordered[-1]}"


def build_structured_summary(reports: Sequence[Any], filters: SummaryFilter) -> dict[str, Any]:
    """보고서를 프로젝트/인원 단위 구조로 요약합니다.

    Build the structured summary used by the AI endpoint and its fallback.
    Leave and placeholder rows only feed the special notes.

    Args:
        reports: 범위가 적용된 보고서 (Scoped rows, sentinels included)
        filters: 기간/대상 정보 (Period and target)

    Returns:
        dict[str, Any]: JSON 직렬화 가능한 요약 (JSON-ready summary)

    Raises:
        ValueError: 업무 내용이 있는 보고서가 없을 때 (No regular rows)
    """
    regular: list[Any] = [r for r in reports if is_regular(r)]
    if not regular:
        raise ValueError("업무 내용이 있는 보고서가 없습니다.")

    projects: dict[str, dict[str, Any]] = {}
    employees: dict[str, dict[str, Any]] = {}
    for report in regular:
        day: str = report.report_date.isoformat()
        key: str = project_key(report.work_overview)
        project = projects.setdefault(
            key, {"participants": [], "dates": [], "rates": [], "tasks": {}}
        )
        if report.employee_name not in project["participants"]:
            project["participants"].append(report.employee_name)
        project["dates"].append(day)
        project["rates"].append(report.achievement_rate)

        task = project["tasks"].setdefault(
            (report.work_overview, report.progress_goal),
            {"assignees": [], "dates": [], "rates": []},
        )
        if report.employee_name not in task["assignees"]:
            task["assignees"].append(report.employee_name)
        task["dates"].append(day)
        task["rates"].append(report.achievement_rate)

        employee = employees.setdefault(
            report.employee_name,
            {"department": report.department, "projects": [], "rates": []},
        )
        if key not in employee["projects"]:
            employee["projects"].append(key)
        employee["rates"].append(report.achievement_rate)

    project_items: list[dict[str, Any]] = []
    ordered = sorted(projects.items(), key=lambda kv: len(kv[1]["rates"]), reverse=True)
    for order, (name, data) in enumerate(ordered, start=1):
        avg: int = round_half_up(sum(data["rates"]) / len(data["rates"]))
        project_items.append({
            "project_name": name,
            "order": order,
            "tasks": [
                {
                    "title": title,
                    "description": goal,
                    "assignees": task["assignees"],
                    "frequency": len(task["dates"]),
                    "date_range": _date_range(task["dates"]),
                    "achievement_rate": round_half_up(sum(task["rates"]) / len(task["rates"])),
                }
                for (title, goal), task in sorted(
                    data["tasks"].items(), key=lambda kv: len(kv[1]["dates"]), reverse=True
                )
            ],
            "results": {
                "period": _date_range(data["dates"]),
                "participants": data["participants"],
                "avg_achievement_rate": avg,
                "total_tasks": len(data["rates"]),
                "status": project_status(avg),
            },
        })

    employee_items: list[dict[str, Any]] = []
    for name, data in employees.items():
        avg = round_half_up(sum(data["rates"]) / len(data["rates"]))
        employee_items.append({
            "name": name,
            "department": data["department"],
            "total_reports": len(data["rates"]),
            "avg_achievement_rate": avg,
            "main_projects": data["projects"][:3],
            "project_count": len(data["projects"]),
            "performance": performance_grade(avg),
        })
    employee_items.sort(key=lambda e: e["avg_achievement_rate"], reverse=True)

    leave_dates: dict[str, list[str]] = defaultdict(list)
    for report in reports:
        if report.work_overview == ANNUAL_LEAVE:
            leave_dates[report.employee_name].append(report.report_date.isoformat())

    overall: int = round_half_up(sum(r.achievement_rate for r in regular) / len(regular))
    return {
        "title": "업무 보고 요약",
        "period": filters.period,
        "target": filters.target,
        "employee": filters.employee_name,
        "overall_achievement_rate": overall,
        "total_reports": len(regular),
        "projects": project_items,
        "employees": employee_items,
        "summary_table": [
            {
                "project_name": p["project_name"],
                "task_count": p["results"]["total_tasks"],
                "achievement_rate": p["results"]["avg_achievement_rate"],
                "status": _STATUS_BADGE[p["results"]["status"]],
            }
            for p in project_items[:5]
        ],
        "special_notes": [
            {"type": ANNUAL_LEAVE, "content": f"{name}: 연차 ({', '.join(sorted(dates))})"}
            for name, dates in leave_dates.items()
        ],
        "recommendation": recommendation(overall),
    }


def render_markdown(summary: dict[str, Any]) -> str:
    """구조화 요약을 Markdown 보고서로 변환합니다.

    Render a structured summary as the Markdown report shown to managers.
    """
    target: str = summary["target"]
    if summary.get("employee"):
        target = f"{target} - {summary['employee']}"

    out: list[str] = [
        "# 업무 보고 요약",
        "",
        f"📅 기간: {summary['period']}",
        f"👥 대상: {target}",
        f"📊 전체 달성률: {summary['overall_achievement_rate']}%",
        "",
        "---",
        "",
    ]

    for project in summary["projects"]:
        results = project["results"]
        out.append(f"## ✅ {project['order']}. {project['project_name']}")
        out.append("")
        out.append("### 주요 작업 내용")
        for task in project["tasks"]:
            out.append(f"**{task['title']}**")
            out.append(f"- {task['description']}")
            if len(task["assignees"]) > 1:
                out.append(f"- 담당: {', '.join(task['assignees'])}")
            if task["frequency"] > 1:
                out.append(f"- 수행: {task['frequency']}회 ({task['date_range']})")
            out.append(f"- 달성률: {task['achievement_rate']}%")
            out.append("")
        out.append("### 결과 및 성과")
        out.append(f"- 작업 기간: {results['period']}")
        out.append(f"- 참여 인원: {', '.join(results['participants'])} ({len(results['participants'])}명)")
        out.append(f"- 평균 달성률: {results['avg_achievement_rate']}%")
        out.append(f"- 총 작업 수: {results['total_tasks']}건")
        out.append("")

    out.append("## 📌 인원별 업무 요약")
    out.append("")
    for employee in summary["employees"]:
        projects: str = ", ".join(employee["main_projects"])
        extra: int = employee["project_count"] - len(employee["main_projects"])
        if extra > 0:
            projects += f" 외 {extra}개"
        out.append(f"### {employee['name']} ({employee['department']})")
        out.append(f"- 총 보고서: {employee['total_reports']}건")
        out.append(f"- 평균 달성률: {employee['avg_achievement_rate']}%")
        out.append(f"- 주요 참여 프로젝트: {projects}")
        out.append("")

    out.append("## 📊 종합 정리")
    out.append("")
    out.append("| 구분 | 주요 업무 | 달성률 | 상태 |")
    out.append("|------|-----------|--------|------|")
    for row in summary["summary_table"]:
        out.append(
            f"| {row['project_name']} | {row['task_count']}개 작업 | {row['achievement_rate']}% | {row['status']} |"
        )
    out.append("")

    if summary["special_notes"]:
        out.append("## 🗓️ 기타 사항")
        for note in summary["special_notes"]:
            out.append(f"- {note['content']}")
        out.append("")

    out.append("---")
    out.append("")
    out.append("💡 필요하시면 위 내용을 주간보고, 월간보고 또는 회의자료용으로 재구성해드릴 수 있습니다.")
    return "\n".join(out) + "\n"
