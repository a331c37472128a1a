"""관리자 프롬프트 라우터 (LLM prompt management, operator and manager)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.api.deps import require_operator_or_manager
from dailyreport.database import get_db
from dailyreport.schemas.prompt import PromptCreate, PromptResponse, PromptUpdate
from dailyreport.services.prompt_service import prompt_service
from dailyreport.utils.scope import Principal

router: APIRouter = APIRouter()


@router.get("", response_model=list[PromptResponse])
async def list_prompts(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_operator_or_manager)],
) -> list[PromptResponse]:
    return await prompt_service.list_prompts(db)


@router.post("", response_model=PromptResponse, status_code=201)
async def create_prompt(
    data: PromptCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_operator_or_manager)],
) -> PromptResponse:
    result: PromptResponse = await prompt_service.create_prompt(db, data)
    await db.commit()
    return result


@router.put("/{prompt_id}", response_model=PromptResponse)
async def update_prompt(
    prompt_id: UUID,
    data: PromptUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(require_operator_or_manager)],
) -> PromptResponse:
    result: PromptResponse = await prompt_service.update_prompt(db, prompt_id, data)
    await db.commit()
    return result
