"""LLM 프롬프트 Pydantic 요청/응답 스키마 정의."""

from datetime import datetime

from pydantic import BaseModel, Field


class PromptCreate(BaseModel):
    prompt_key: str = Field(min_length=1, max_length=100)
    prompt_name: str = Field(min_length=1)
    description: str | None = None
    system_prompt: str = Field(min_length=1)
    user_prompt_template: str = Field(min_length=1)


class PromptUpdate(BaseModel):
    prompt_name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    system_prompt: str | None = Field(default=None, min_length=1)
    user_prompt_template: str | None = Field(default=None, min_length=1)


class PromptResponse(BaseModel):
    id: str
    prompt_key: str
    prompt_name: str
    description: str | None = None
    system_prompt: str
    user_prompt_template: str
    updated_at: datetime
