"""LLM 호출 서비스 (LangChain OpenAI).

LLM service wrapping LangChain's ChatOpenAI. The model is treated as an
opaque text generator; callers decide how to recover from failures.
"""

import json
import logging
from typing import Any

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from dailyreport.config import settings
from dailyreport.utils.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)


class LLMService:
    """ChatOpenAI 호출 래퍼 (Thin wrapper around ChatOpenAI)."""

    @property
    def is_configured(self) -> bool:
        return bool(settings.OPENAI_API_KEY)

    def _client(self, temperature: float, max_tokens: int, **kwargs: Any) -> ChatOpenAI:
        if not self.is_configured:
            raise ServiceUnavailableError("OpenAI API 키가 설정되지 않았습니다.")
        return ChatOpenAI(
            model=settings.OPENAI_MODEL,
            temperature=temperature,
            max_tokens=max_tokens,
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.OPENAI_TIMEOUT_SECONDS,
            max_retries=0,
            **kwargs,
        )

    async def complete_text(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> str:
        """텍스트 응답을 생성합니다.

        Generate a plain-text completion.

        Raises:
            ServiceUnavailableError: 키 미설정, 호출 실패, 빈 응답
                                     (Missing key, call failure, empty answer)
        """
        llm: ChatOpenAI = self._client(temperature, max_tokens)
        try:
            response = await llm.ainvoke(
                [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
            )
        except Exception as exc:
            logger.error("LLM 요약 생성 실패: %s", exc)
            raise ServiceUnavailableError("요약 생성에 실패했습니다.") from exc

        content: str = str(response.content or "").strip()
        if not content:
            raise ServiceUnavailableError("요약 생성에 실패했습니다.")
        return content

    async def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 4000,
    ) -> dict[str, Any]:
        """JSON 객체 응답을 생성합니다.

        Generate a completion constrained to a JSON object.

        Raises:
            ServiceUnavailableError: 키 미설정, 호출 실패, JSON 파싱 실패
        """
        llm: ChatOpenAI = self._client(
            temperature, max_tokens, model_kwargs={"response_format": {"type": "json_object"}}
        )
        try:
            response = await llm.ainvoke(
                [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
            )
            parsed = json.loads(str(response.content))
        except Exception as exc:
            logger.error("LLM 구조화 요약 실패: %s", exc)
            raise ServiceUnavailableError("구조화 요약 생성에 실패했습니다.") from exc

        if not isinstance(parsed, dict):
            raise ServiceUnavailableError("구조화 요약 형식이 올바르지 않습니다.")
        return parsed


# 싱글턴 인스턴스 (Singleton instance)
llm_service: LLMService = LLMService()
