"""LLM 프롬프트 레포지토리."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.prompt import Prompt
from dailyreport.repositories.base import BaseRepository


class PromptRepository(BaseRepository[Prompt]):
    def __init__(self) -> None:
        super().__init__(Prompt)

    async def get_by_key(self, db: AsyncSession, prompt_key: str) -> Prompt | None:
        result = await db.execute(select(Prompt).where(Prompt.prompt_key == prompt_key))
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 (Singleton instance)
prompt_repository: PromptRepository = PromptRepository()
