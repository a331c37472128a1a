"""LLM 프롬프트 관리 서비스.

Prompt Service. Prompts are global and identified by prompt_key; the key
is fixed once created because the summary services look prompts up by it.
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.models.prompt import Prompt
from dailyreport.repositories.prompt_repository import prompt_repository
from dailyreport.schemas.prompt import PromptCreate, PromptResponse, PromptUpdate
from dailyreport.utils.exceptions import DuplicateError, NotFoundError


class PromptService:
    def _to_response(self, prompt: Prompt) -> PromptResponse:
        return PromptResponse(
            id=str(prompt.id),
            prompt_key=prompt.prompt_key,
            prompt_name=prompt.prompt_name,
            description=prompt.description,
            system_prompt=prompt.system_prompt,
            user_prompt_template=prompt.user_prompt_template,
            updated_at=prompt.updated_at,
        )

    async def list_prompts(self, db: AsyncSession) -> list[PromptResponse]:
        prompts: Sequence[Prompt] = await prompt_repository.get_all(db, order_by=Prompt.created_at)
        return [self._to_response(p) for p in prompts]

    async def create_prompt(self, db: AsyncSession, data: PromptCreate) -> PromptResponse:
        """프롬프트를 생성합니다.

        Raises:
            DuplicateError: prompt_key 중복 (Key already used)
        """
        if await prompt_repository.get_by_key(db, data.prompt_key) is not None:
            raise DuplicateError("이미 존재하는 프롬프트 키입니다.")
        prompt: Prompt = await prompt_repository.create(db, data.model_dump())
        return self._to_response(prompt)

    async def update_prompt(self, db: AsyncSession, prompt_id: UUID, data: PromptUpdate) -> PromptResponse:
        # description만 null로 지울 수 있음 (Only description may be cleared)
        update_data: dict[str, Any] = {
            k: v for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k == "description"
        }
        prompt: Prompt | None = await prompt_repository.update(db, prompt_id, update_data)
        if prompt is None:
            raise NotFoundError("프롬프트를 찾을 수 없습니다.")
        return self._to_response(prompt)


# 싱글턴 인스턴스 (Singleton instance)
prompt_service: PromptService = PromptService()
