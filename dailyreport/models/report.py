"""일일 보고서 및 요약 SQLAlchemy ORM 모델 정의.

Daily report and daily summary ORM models.

Tables:
    - daily_reports: 직원별 일일 업무 항목 (One row per work item per day)
    - daily_summaries: (회사, 날짜, 부서)별 요약 (One summary per natural key)
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from dailyreport.database import Base


class DailyReport(Base):
    """일일 보고서 항목 모델.

    One work item of one employee on one day. Rows written before employee
    ids existed have employee_id NULL and are matched by employee_name.
    work_overview "연차" marks annual leave; "작성 안됨" is never stored.
    """

    __tablename__ = "daily_reports"
    __table_args__ = (
        Index("ix_daily_reports_company_date", "company_id", "report_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False)
    # 직원 FK, 레거시 행은 NULL (SET NULL: 직원 삭제 후에도 보고서는 유지)
    employee_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True)
    employee_name: Mapped[str] = mapped_column(String(100), nullable=False)
    department: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    report_date: Mapped[date] = mapped_column(Date, nullable=False)
    work_overview: Mapped[str] = mapped_column(Text, nullable=False)
    progress_goal: Mapped[str] = mapped_column(Text, nullable=False, default="")
    achievement_rate: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    manager_evaluation: Mapped[str] = mapped_column(Text, nullable=False, default="")
    remarks: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))


class DailySummary(Base):
    """일일 요약 모델.

    Natural key (company_id, summary_date, department); department NULL is
    the company-wide summary. Uniqueness is kept by the update-then-insert
    rule rather than a constraint, so two concurrent first writes can both
    insert.
    """

    __tablename__ = "daily_summaries"
    __table_args__ = (
        Index("ix_daily_summaries_key", "company_id", "summary_date", "department"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False)
    summary_date: Mapped[date] = mapped_column(Date, nullable=False)
    department: Mapped[str | None] = mapped_column(String(100), nullable=True)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
