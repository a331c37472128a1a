"""초기 데이터 시드 스크립트, 기본 회사와 운영자 계정 생성.

Seed script. Creates the default company, the daily summary prompt and an
operator account. Run once to bootstrap an empty database.

Usage:
    python -m dailyreport.seed

Creates:
    - 1개 회사: "기본 회사" (1 company)
    - 1개 운영자 계정: admin@example.com / admin123 (1 operator)
    - 일일 요약 프롬프트 daily_summary (Default summary prompt)
"""

import asyncio

from sqlalchemy import select

from dailyreport.database import Base, async_session, engine
from dailyreport.models import Company, Employee, Prompt
from dailyreport.services.summary_service import (
    DAILY_SUMMARY_PROMPT_KEY,
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_USER_TEMPLATE,
)
from dailyreport.utils.password import hash_password
from dailyreport.utils.scope import OPERATOR


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Idempotent: 회사가 이미 있으면 건너뜁니다 (Skips when any company exists).
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        result = await db.execute(select(Company).limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        company: Company = Company(name="기본 회사")
        db.add(company)
        await db.flush()

        admin: Employee = Employee(
            company_id=company.id,
            employee_code="0001",
            name="운영자",
            position="운영자",
            department="",
            email="admin@example.com",
            password_hash=hash_password("admin123"),
            role=OPERATOR,
        )
        db.add(admin)

        db.add(
            Prompt(
                prompt_key=DAILY_SUMMARY_PROMPT_KEY,
                prompt_name="일일 보고 요약",
                description="일일 업무 보고 요약 생성에 사용 ({{reports}}에 보고서 내용이 들어감)",
                system_prompt=DEFAULT_SYSTEM_PROMPT,
                user_prompt_template=DEFAULT_USER_TEMPLATE,
            )
        )

        await db.commit()
        print(f"Seeded: company={company.id}, operator=admin@example.com/admin123")


if __name__ == "__main__":
    asyncio.run(seed())
