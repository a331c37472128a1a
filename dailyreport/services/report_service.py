"""일일 보고서 서비스, 제출/교체/삭제 및 조회 뷰.

Daily Report Service. Applies the reconciliation rules to the database:
scope stamping, employee verification, replace-by-identity and the
legacy content-matched delete. Everything a request writes happens in
its one session and is committed once by the router.
"""

from dataclasses import replace
from datetime import date
from io import BytesIO
from typing import Any
from uuid import UUID

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.employee import Employee
from dailyreport.models.report import DailyReport
from dailyreport.repositories.report_repository import report_repository
from dailyreport.schemas.report import (
    AttendanceResponse,
    DailyReportEntry,
    DailyReportResponse,
    DailyReportUpdate,
    LegacyDeleteRequest,
    ReportBatchRequest,
    ReportBatchResponse,
)
from dailyreport.services.employee_service import employee_service
from dailyreport.services.organization_service import parse_uuid
from dailyreport.utils.aggregation import ReportView, attendance_stats, build_complete_report_list
from dailyreport.utils.exceptions import BadRequestError, NotFoundError
from dailyreport.utils.reconciliation import (
    ANNUAL_LEAVE,
    NOT_SUBMITTED,
    ReconciledBatch,
    ReconciliationError,
    ReportItem,
    leave_entry,
    legacy_remainder,
    reconcile,
)
from dailyreport.utils.scope import OPERATOR, USER, Principal, Scope, narrow_scope, resolve_scope

# 보고서 행 복사 시 사용하는 컬럼 (Columns copied when re-inserting rows)
_REPORT_COLUMNS: tuple[str, ...] = (
    "company_id",
    "employee_id",
    "employee_name",
    "department",
    "report_date",
    "work_overview",
    "progress_goal",
    "achievement_rate",
    "manager_evaluation",
    "remarks",
)


class ReportService:
    """일일 보고서 비즈니스 로직을 처리하는 서비스.

    Service handling report submission, edits, deletes and read views.
    """

    def _to_response(self, report: DailyReport) -> DailyReportResponse:
        return DailyReportResponse(
            id=str(report.id),
            report_date=report.report_date,
            company_id=str(report.company_id),
            employee_id=str(report.employee_id) if report.employee_id else None,
            employee_name=report.employee_name,
            department=report.department,
            work_overview=report.work_overview,
            progress_goal=report.progress_goal,
            achievement_rate=report.achievement_rate,
            manager_evaluation=report.manager_evaluation,
            remarks=report.remarks,
            created_at=report.created_at,
        )

    def _view_response(self, view: ReportView) -> DailyReportResponse:
        return DailyReportResponse(
            id=str(view.id) if view.id else None,
            report_date=view.report_date,
            company_id=str(view.company_id) if view.company_id else None,
            employee_id=str(view.employee_id) if view.employee_id else None,
            employee_name=view.employee_name,
            employee_code=view.employee_code or None,
            department=view.department,
            work_overview=view.work_overview,
            progress_goal=view.progress_goal,
            achievement_rate=view.achievement_rate,
            manager_evaluation=view.manager_evaluation,
            remarks=view.remarks,
            is_placeholder=view.is_placeholder,
        )

    def _read_scope(
        self,
        principal: Principal,
        company_id: UUID | None = None,
        department: str | None = None,
    ) -> Scope | None:
        return narrow_scope(resolve_scope(principal), company_id, department)

    # === 제출 (Submission) ===

    def _stamp(self, principal: Principal, entry: DailyReportEntry) -> ReportItem:
        """범위 필드를 서버에서 덮어씁니다.

        Non-operators always write into their own company; plain users also
        into their own department.
        """
        company_id: UUID = principal.company_id
        if principal.role == OPERATOR and entry.company_id:
            company_id = parse_uuid(entry.company_id, "회사 ID")
        department: str = entry.department
        if principal.role == USER:
            department = principal.department or ""
        return ReportItem(
            report_date=entry.report_date,
            employee_name=entry.employee_name.strip(),
            company_id=company_id,
            department=department,
            work_overview=entry.work_overview,
            progress_goal=entry.progress_goal,
            achievement_rate=entry.achievement_rate,
            manager_evaluation=entry.manager_evaluation,
            remarks=entry.remarks,
            employee_id=parse_uuid(entry.employee_id, "직원 ID") if entry.employee_id else None,
        )

    async def _verify_employees(
        self,
        db: AsyncSession,
        principal: Principal,
        batch: ReconciledBatch,
    ) -> list[ReportItem]:
        """employee_id가 있는 항목의 직원이 범위 안에 있는지 확인합니다.

        Entries carrying an employee_id must reference an employee visible
        to the caller in the batch's company; name and department are taken
        from the employee row.

        Raises:
            NotFoundError: 범위 밖 직원 (Employee outside the caller's scope)
        """
        ids: set[UUID] = {item.employee_id for item in batch.items if item.employee_id is not None}
        if not ids:
            return list(batch.items)

        visible: list[Employee] = await employee_service.list_directory(
            db, principal, company_id=batch.company_id
        )
        by_id: dict[UUID, Employee] = {e.id: e for e in visible}
        missing: set[UUID] = ids - by_id.keys()
        if missing:
            raise NotFoundError("범위 안에서 찾을 수 없는 직원이 포함되어 있습니다.")

        items: list[ReportItem] = []
        for item in batch.items:
            if item.employee_id is not None:
                employee: Employee = by_id[item.employee_id]
                item = replace(item, employee_name=employee.name, department=employee.department)
            items.append(item)
        return items

    async def submit_batch(
        self,
        db: AsyncSession,
        principal: Principal,
        data: ReportBatchRequest,
    ) -> ReportBatchResponse:
        """보고서 배치를 저장합니다.

        Save a batch of one date. With is_update, every stored row of the
        batch's identity set on that date is deleted first, so the stored
        set afterwards is exactly the submitted one.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            principal: 요청 주체 (Caller)
            data: 제출 배치 (Submitted batch)

        Returns:
            ReportBatchResponse: 저장 결과 (Saved row count and message)

        Raises:
            BadRequestError: 빈 배치, 여러 날짜/회사, 업무 개요 누락
            NotFoundError: 범위 밖 직원 (Employee outside scope)
        """
        try:
            batch: ReconciledBatch = reconcile(self._stamp(principal, entry) for entry in data.reports)
        except ReconciliationError as exc:
            raise BadRequestError(str(exc))

        items: list[ReportItem] = await self._verify_employees(db, principal, batch)

        if data.is_update:
            await report_repository.delete_by_identity(
                db,
                batch.company_id,
                batch.report_date,
                batch.identity,
                department=resolve_scope(principal).department,
            )

        await report_repository.create_many(
            db,
            [{column: getattr(item, column) for column in _REPORT_COLUMNS} for item in items],
        )

        action: str = "수정" if data.is_update else "등록"
        return ReportBatchResponse(
            message=f"{len(items)}건의 보고서가 {action}되었습니다.",
            saved_count=len(items),
            report_date=batch.report_date,
        )

    # === 조회 (Reads) ===

    async def list_reports(
        self,
        db: AsyncSession,
        principal: Principal,
        start_date: date | None = None,
        end_date: date | None = None,
        department: str | None = None,
        employee_name: str | None = None,
        company_id: UUID | None = None,
    ) -> list[DailyReportResponse]:
        scope: Scope | None = self._read_scope(principal, company_id, department)
        if scope is None:
            return []
        reports: list[DailyReport] = await report_repository.list_scoped(
            db, scope, start_date=start_date, end_date=end_date, employee_name=employee_name
        )
        return [self._to_response(r) for r in reports]

    async def complete_list(
        self,
        db: AsyncSession,
        principal: Principal,
        report_date: date,
        department: str | None = None,
        employee_name: str | None = None,
        company_id: UUID | None = None,
    ) -> list[ReportView]:
        """날짜별 전체 목록, 미제출 직원은 "작성 안됨" 행으로 표시.

        Stored rows of the date plus a placeholder for every visible
        employee without one. Placeholders are never written.
        """
        scope: Scope | None = self._read_scope(principal, company_id, department)
        if scope is None:
            return []
        reports: list[DailyReport] = await report_repository.list_scoped(
            db, scope, start_date=report_date, end_date=report_date
        )
        employees: list[Employee] = await employee_service.list_directory(
            db, principal, department=department, company_id=company_id
        )
        if employee_name:
            needle: str = employee_name.strip()
            reports = [r for r in reports if r.employee_name == needle]
            employees = [e for e in employees if e.name == needle]
        return build_complete_report_list(report_date, reports, employees)

    async def complete_list_responses(self, db: AsyncSession, principal: Principal, **filters: Any) -> list[DailyReportResponse]:
        views: list[ReportView] = await self.complete_list(db, principal, **filters)
        return [self._view_response(v) for v in views]

    async def attendance(
        self,
        db: AsyncSession,
        principal: Principal,
        start_date: date | None = None,
        end_date: date | None = None,
        department: str | None = None,
        employee_name: str | None = None,
        company_id: UUID | None = None,
    ) -> list[AttendanceResponse]:
        """기간 내 직원별 근무일, 연차일, 평균 달성률 (Per-employee attendance)."""
        scope: Scope | None = self._read_scope(principal, company_id, department)
        if scope is None:
            return []
        reports: list[DailyReport] = await report_repository.list_scoped(
            db, scope, start_date=start_date, end_date=end_date, employee_name=employee_name
        )
        return [
            AttendanceResponse(
                employee_id=str(s.employee_id) if s.employee_id else None,
                employee_name=s.employee_name,
                department=s.department,
                total_days=s.total_days,
                working_days=s.working_days,
                annual_leave_days=s.annual_leave_days,
                average_achievement=s.average_achievement,
            )
            for s in attendance_stats(reports)
        ]

    # === 단건 수정/삭제 (Single row edit and delete) ===

    async def _get_in_scope(self, db: AsyncSession, principal: Principal, report_id: UUID) -> DailyReport:
        report: DailyReport | None = await report_repository.get_by_id(db, report_id)
        if report is None or not resolve_scope(principal).allows(report.company_id, report.department):
            raise NotFoundError("보고서를 찾을 수 없습니다.")
        return report

    async def update_report(
        self,
        db: AsyncSession,
        principal: Principal,
        report_id: UUID,
        data: DailyReportUpdate,
    ) -> DailyReportResponse:
        """저장된 보고서 한 건을 수정합니다.

        Raises:
            NotFoundError: 범위 밖 (Not in scope)
            BadRequestError: "작성 안됨" 지정 또는 빈 항목 (Placeholder value or blank row)
        """
        report: DailyReport = await self._get_in_scope(db, principal, report_id)
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True, exclude_none=True)

        item: ReportItem = ReportItem(
            report_date=report.report_date,
            employee_name=report.employee_name,
            company_id=report.company_id,
            department=report.department,
            work_overview=update_data.get("work_overview", report.work_overview),
            progress_goal=update_data.get("progress_goal", report.progress_goal),
            achievement_rate=update_data.get("achievement_rate", report.achievement_rate),
            manager_evaluation=update_data.get("manager_evaluation", report.manager_evaluation),
            remarks=update_data.get("remarks", report.remarks),
            employee_id=report.employee_id,
        )
        if item.is_placeholder:
            raise BadRequestError(f"'{NOT_SUBMITTED}'은 저장할 수 없습니다.")
        if item.is_blank or not item.work_overview.strip():
            raise BadRequestError("업무 개요를 입력해주세요.")
        if item.is_leave:
            item = leave_entry(item)

        updated: DailyReport | None = await report_repository.update(
            db,
            report.id,
            {
                "work_overview": item.work_overview,
                "progress_goal": item.progress_goal,
                "achievement_rate": item.achievement_rate,
                "manager_evaluation": item.manager_evaluation,
                "remarks": item.remarks,
            },
        )
        return self._to_response(updated)

    async def delete_report(self, db: AsyncSession, principal: Principal, report_id: UUID) -> None:
        report: DailyReport = await self._get_in_scope(db, principal, report_id)
        await report_repository.delete(db, report.id)

    async def delete_legacy(
        self,
        db: AsyncSession,
        principal: Principal,
        data: LegacyDeleteRequest,
    ) -> int:
        """ID 없이 (날짜, 직원명, 업무 개요)로 보고서를 삭제합니다.

        Fetch every row of the employee on the date, delete them all, then
        re-insert the ones whose work_overview differs from the target. The
        search covers one company (the caller's own unless an operator names
        another) and, when given, one department.

        Returns:
            int: 삭제된 행 수 (Rows removed)

        Raises:
            NotFoundError: 일치하는 행 없음 (No row matched)
        """
        company_id: UUID = principal.company_id
        if principal.role == OPERATOR and data.company_id:
            company_id = parse_uuid(data.company_id, "회사 ID")
        scope: Scope | None = self._read_scope(principal, company_id, data.department)
        if scope is None:
            raise NotFoundError("삭제할 보고서를 찾을 수 없습니다.")
        rows: list[DailyReport] = await report_repository.list_scoped(
            db, scope, start_date=data.report_date, end_date=data.report_date, employee_name=data.employee_name
        )
        keep: list[int] = legacy_remainder([r.work_overview for r in rows], data.work_overview)
        if len(keep) == len(rows):
            raise NotFoundError("삭제할 보고서를 찾을 수 없습니다.")

        remainder: list[dict[str, Any]] = [
            {column: getattr(rows[i], column) for column in _REPORT_COLUMNS} for i in keep
        ]
        await report_repository.delete_rows(db, [r.id for r in rows])
        if remainder:
            await report_repository.create_many(db, remainder)
        return len(rows) - len(remainder)

    # === 엑셀 내보내기 (Excel export) ===

    async def export_excel(
        self,
        db: AsyncSession,
        principal: Principal,
        report_date: date,
        department: str | None = None,
        company_id: UUID | None = None,
    ) -> bytes:
        """날짜별 전체 보고서 목록을 Excel 파일로 내보내기."""
        views: list[ReportView] = await self.complete_list(
            db, principal, report_date, department=department, company_id=company_id
        )

        wb = Workbook()
        ws = wb.active
        ws.title = report_date.isoformat()
        header_font = Font(bold=True, color="FFFFFF", size=11)
        header_fill = PatternFill(start_color="2D3436", end_color="2D3436", fill_type="solid")
        headers: list[str] = ["부서", "사번", "이름", "업무 개요", "진행 목표", "달성률(%)", "관리자 평가", "비고"]
        for col_idx, h in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col_idx, value=h)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")

        for view in views:
            ws.append([
                view.department,
                view.employee_code,
                view.employee_name,
                view.work_overview,
                view.progress_goal,
                view.achievement_rate,
                view.manager_evaluation,
                view.remarks,
            ])

        for i, w in enumerate([14, 10, 12, 40, 30, 10, 24, 20], 1):
            ws.column_dimensions[ws.cell(row=1, column=i).column_letter].width = w

        working: int = sum(1 for v in views if v.work_overview not in (ANNUAL_LEAVE, NOT_SUBMITTED))
        leave: int = sum(1 for v in views if v.work_overview == ANNUAL_LEAVE)
        missing: int = sum(1 for v in views if v.is_placeholder)
        ws.append([])
        ws.append(["합계", f"업무 {working}건", f"연차 {leave}건", f"미작성 {missing}건"])

        buffer = BytesIO()
        wb.save(buffer)
        return buffer.getvalue()


# 싱글턴 인스턴스 (Singleton instance)
report_service: ReportService = ReportService()
