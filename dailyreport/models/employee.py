"""직원 SQLAlchemy ORM 모델 정의.

Employee ORM model. An employee with an email and password hash can log in;
the role column drives every access decision.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from dailyreport.database import Base


class Employee(Base):
    """직원 모델.

    Employee model. employee_code is unique within a company, email is
    unique globally because it is the login id.

    Attributes:
        company_id: 소속 회사 FK (Parent company)
        employee_code: 사번 (Employee code, unique per company)
        name: 이름 (Display name)
        position: 직급 (Job title)
        department: 부서명 (Department name, matches departments.name)
        email: 로그인 이메일 (Login email, optional)
        password_hash: bcrypt 해시 (Password hash, optional)
        role: operator | company_manager | manager | user
    """

    __tablename__ = "employees"
    __table_args__ = (
        UniqueConstraint("company_id", "employee_code", name="uq_employees_company_code"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소속 회사 FK (RESTRICT: 직원이 있으면 회사 삭제 불가)
    company_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("companies.id", ondelete="RESTRICT"), nullable=False)
    employee_code: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    position: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    department: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(30), nullable=False, default="user")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
