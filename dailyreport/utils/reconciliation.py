"""일일 보고서 배치 정리 규칙.

Daily report batch reconciliation rules.
Turns a submitted batch into the exact rows to persist and decides how
existing rows are matched for replacement. Pure functions; the report
service applies the result to the database.

Rules:
    - 빈 항목과 "작성 안됨" 항목은 저장하지 않음
      (Blank items and "not submitted" placeholders are dropped)
    - 연차가 있는 직원은 그날 연차 항목 하나만 남김
      (An employee on leave keeps exactly one canonical leave entry)
    - 모든 항목에 employee_id가 있으면 ID 기준, 하나라도 없으면 배치 전체를 이름 기준으로 매칭
      (Identity strategy is chosen once per batch, never per entry)
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable, Sequence

# 센티널 값 (Sentinel work_overview values)
ANNUAL_LEAVE: str = "연차"
NOT_SUBMITTED: str = "작성 안됨"

EMPTY_BATCH_MESSAGE: str = "저장할 내용이 없습니다. 최소 1개 이상의 항목을 입력하거나 연차를 체크해주세요."


class ReconciliationError(ValueError):
    """배치가 저장 규칙을 위반할 때 발생 (Batch breaks a persistence rule)."""


@dataclass(frozen=True)
class ReportItem:
    """저장 전 보고서 항목 (A report row before persistence)."""

    report_date: date
    employee_name: str
    company_id: uuid.UUID | None
    department: str
    work_overview: str = ""
    progress_goal: str = ""
    achievement_rate: int = 0
    manager_evaluation: str = ""
    remarks: str = ""
    employee_id: uuid.UUID | None = None

    @property
    def employee_key(self) -> str:
        """직원 식별 키, ID 우선 (Employee identity, id preferred over name)."""
        if self.employee_id is not None:
            return f"id:{self.employee_id}"
        return f"name:{self.employee_name}"

    @property
    def is_leave(self) -> bool:
        return self.work_overview.strip() == ANNUAL_LEAVE

    @property
    def is_placeholder(self) -> bool:
        return self.work_overview.strip() == NOT_SUBMITTED

    @property
    def is_blank(self) -> bool:
        """텍스트 필드가 모두 비어 있는지 (No text content at all)."""
        return not any(
            value.strip()
            for value in (self.work_overview, self.progress_goal, self.remarks, self.manager_evaluation)
        )


@dataclass(frozen=True)
class ById:
    """ID 기준 매칭 (Match stored rows by employee id)."""

    ids: frozenset[uuid.UUID] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ByName:
    """이름 기준 매칭, 레거시 행용 (Match stored rows by employee name)."""

    names: frozenset[str] = field(default_factory=frozenset)


Identity = ById | ByName


@dataclass(frozen=True)
class ReconciledBatch:
    """정리된 배치 (Normalized batch ready to persist)."""

    report_date: date
    company_id: uuid.UUID | None
    items: tuple[ReportItem, ...]
    identity: Identity


def leave_entry(item: ReportItem) -> ReportItem:
    """표준 연차 항목을 만듭니다 (Canonical leave row for an employee)."""
    return replace(
        item,
        work_overview=ANNUAL_LEAVE,
        progress_goal="-",
        achievement_rate=0,
        manager_evaluation="-",
        remarks=ANNUAL_LEAVE,
    )


def normalize_batch(items: Iterable[ReportItem]) -> list[ReportItem]:
    """빈 항목 제거 및 연차 단일화.

    Drop blank items and placeholders, then collapse every employee that has
    a leave item to a single leave entry. Submission order is kept for the
    remaining rows.

    Args:
        items: 제출된 항목 (Submitted items)

    Returns:
        list[ReportItem]: 저장할 항목 (Rows to persist, possibly empty)
    """
    kept: list[ReportItem] = [
        item for item in items if not item.is_blank and not item.is_placeholder
    ]

    on_leave: dict[str, ReportItem] = {}
    for item in kept:
        if item.is_leave and item.employee_key not in on_leave:
            on_leave[item.employee_key] = leave_entry(item)

    result: list[ReportItem] = []
    emitted: set[str] = set()
    for item in kept:
        key: str = item.employee_key
        if key in on_leave:
            if key not in emitted:
                result.append(on_leave[key])
                emitted.add(key)
            continue
        result.append(item)
    return result


def choose_identity(items: Sequence[ReportItem]) -> Identity:
    """배치 전체의 매칭 기준을 한 번 결정합니다.

    ById when every item carries an employee_id, otherwise ByName for the
    whole batch.
    """
    if items and all(item.employee_id is not None for item in items):
        return ById(frozenset(item.employee_id for item in items))  # type: ignore[misc]
    return ByName(frozenset(item.employee_name for item in items))


def reconcile(items: Iterable[ReportItem]) -> ReconciledBatch:
    """제출 배치를 저장 가능한 형태로 정리합니다.

    Normalize a submitted batch and validate its shape.

    Raises:
        ReconciliationError: 빈 배치, 여러 날짜, 여러 회사, 업무 개요 누락
                             (Empty batch, mixed dates, mixed companies, missing overview)
    """
    normalized: list[ReportItem] = normalize_batch(items)
    if not normalized:
        raise ReconciliationError(EMPTY_BATCH_MESSAGE)

    dates: set[date] = {item.report_date for item in normalized}
    if len(dates) > 1:
        raise ReconciliationError("한 번에 하나의 날짜만 저장할 수 있습니다.")
    companies: set[uuid.UUID | None] = {item.company_id for item in normalized}
    if len(companies) > 1:
        raise ReconciliationError("한 번에 하나의 회사 보고서만 저장할 수 있습니다.")
    for item in normalized:
        if not item.employee_name.strip():
            raise ReconciliationError("직원 이름이 없는 항목이 있습니다.")
        if not item.work_overview.strip():
            raise ReconciliationError(f"{item.employee_name}: 업무 개요를 입력해주세요.")

    return ReconciledBatch(
        report_date=dates.pop(),
        company_id=companies.pop(),
        items=tuple(normalized),
        identity=choose_identity(normalized),
    )


def legacy_remainder(work_overviews: Sequence[str], target_overview: str) -> list[int]:
    """레거시 삭제 후 다시 넣을 행의 위치를 반환합니다.

    Indexes of the rows that survive a legacy delete, i.e. whose
    work_overview differs from the one being removed.
    """
    return [i for i, overview in enumerate(work_overviews) if overview != target_overview]
