"""테스트 인프라, 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure: in-memory SQLite database (aiosqlite), session and
httpx client fixtures. The schema is created and dropped per test.
Set TEST_DATABASE_URL to run against another database.
"""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from dailyreport.database import Base, get_db
from dailyreport.main import app
from dailyreport.models import *  # noqa: F401,F403 register all models with metadata
from dailyreport.models.company import Company
from dailyreport.models.employee import Employee
from dailyreport.utils.jwt import create_session_token
from dailyreport.utils.password import hash_password
from dailyreport.utils.scope import Principal

TEST_DATABASE_URL: str = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 테스트마다 스키마를 만들고 지웁니다."""
    options: dict = {}
    if TEST_DATABASE_URL.startswith("sqlite"):
        options = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    eng = create_async_engine(TEST_DATABASE_URL, echo=False, **options)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트, DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def _add(db: AsyncSession, obj):
    db.add(obj)
    await db.flush()
    await db.refresh(obj)
    return obj


@pytest_asyncio.fixture
async def company(db: AsyncSession) -> Company:
    """테스트 회사를 생성합니다."""
    return await _add(db, Company(name="테스트 회사"))


@pytest_asyncio.fixture
async def other_company(db: AsyncSession) -> Company:
    return await _add(db, Company(name="다른 회사"))


def _employee(company: Company, code: str, name: str, department: str, role: str, **kwargs) -> Employee:
    return Employee(
        company_id=company.id,
        employee_code=code,
        name=name,
        position="사원",
        department=department,
        role=role,
        **kwargs,
    )


@pytest_asyncio.fixture
async def operator_user(db: AsyncSession, company) -> Employee:
    """운영자, 로그인 테스트용 비밀번호 포함."""
    return await _add(db, _employee(
        company, "0001", "운영자", "", "operator",
        email="admin@test.com", password_hash=hash_password("admin123!"),
    ))


@pytest_asyncio.fixture
async def company_manager_user(db: AsyncSession, company) -> Employee:
    return await _add(db, _employee(company, "0002", "회사관리자", "경영지원팀", "company_manager"))


@pytest_asyncio.fixture
async def manager_user(db: AsyncSession, company) -> Employee:
    """개발팀 부서 관리자."""
    return await _add(db, _employee(company, "1001", "김팀장", "개발팀", "manager"))


@pytest_asyncio.fixture
async def dev_user(db: AsyncSession, company) -> Employee:
    """개발팀 일반 직원."""
    return await _add(db, _employee(company, "1002", "이개발", "개발팀", "user"))


@pytest_asyncio.fixture
async def sales_user(db: AsyncSession, company) -> Employee:
    """영업팀 일반 직원."""
    return await _add(db, _employee(company, "2001", "박영업", "영업팀", "user"))


@pytest_asyncio.fixture
async def outsider(db: AsyncSession, other_company) -> Employee:
    """다른 회사 직원."""
    return await _add(db, _employee(other_company, "9001", "최외부", "개발팀", "user"))


def make_token(employee: Employee, company: Company) -> str:
    """테스트용 세션 토큰을 생성합니다."""
    principal = Principal(
        id=employee.id,
        email=employee.email or f"{employee.employee_code}@test.com",
        employee_name=employee.name,
        role=employee.role,
        company_id=company.id,
        company_name=company.name,
        department=employee.department or None,
    )
    return create_session_token(principal.to_claims())


@pytest.fixture
def operator_token(operator_user, company) -> str:
    return make_token(operator_user, company)


@pytest.fixture
def company_manager_token(company_manager_user, company) -> str:
    return make_token(company_manager_user, company)


@pytest.fixture
def manager_token(manager_user, company) -> str:
    return make_token(manager_user, company)


@pytest.fixture
def dev_token(dev_user, company) -> str:
    return make_token(dev_user, company)


@pytest.fixture
def sales_token(sales_user, company) -> str:
    return make_token(sales_user, company)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
