"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data and sends one structured event per request
to Axiom, or to the "dailyreport.access" logger when Axiom is not
configured. Logs: endpoint, method, caller role, data (body/params),
status code and error reason. Sensitive fields are masked.
"""

import json
import logging
import re
import time
from typing import Any

import jwt
from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from dailyreport.config import settings
from dailyreport.utils.jwt import decode_token

access_logger = logging.getLogger("dailyreport.access")

# 마스킹 대상 필드 패턴 (Fields to mask in request/response bodies)
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 (Paths excluded from logging)
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 마스킹 (Recursively mask sensitive fields in dicts/lists)."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    return data


def _truncate(value: Any, max_len: int = 2000) -> Any:
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


def _caller_role(request: Request) -> str | None:
    """세션 토큰에서 역할만 읽습니다. 인증 자체는 의존성이 담당.

    Read the role claim for logging only; invalid tokens log as None.
    """
    token: str | None = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        auth: str = request.headers.get("authorization", "")
        if auth.lower().startswith("bearer "):
            token = auth[7:]
    if not token:
        return None
    try:
        return decode_token(token).get("role")
    except jwt.InvalidTokenError:
        return None


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 로깅하는 미들웨어.

    Middleware that logs all API requests and responses.
    Captures: method, path, role, query params, request body, status code,
    error detail.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    def _emit(self, event: dict[str, Any]) -> None:
        if self._client is None:
            level: int = logging.WARNING if event["status_code"] >= 400 else logging.INFO
            access_logger.log(
                level,
                "%s %s %s %sms",
                event["method"],
                event["path"],
                event["status_code"],
                event["duration_ms"],
                extra={"event": event},
            )
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception as exc:
            # 로깅 실패가 요청 처리에 영향주지 않음 (Log failures never break a request)
            access_logger.warning("Axiom ingest failed: %s", exc)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.time()

        method = request.method
        path = request.url.path
        query_params = dict(request.query_params) if request.query_params else None

        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            try:
                body_bytes = await request.body()
                if body_bytes:
                    request_body = _truncate(_mask_dict(json.loads(body_bytes)))
            except (json.JSONDecodeError, UnicodeDecodeError):
                request_body = "(non-json body)"

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 (Extract error detail from error responses)
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

                try:
                    error_data = json.loads(resp_body)
                    error_detail = error_data.get("detail", str(error_data))
                    if isinstance(error_detail, str) and len(error_detail) > 500:
                        error_detail = error_detail[:500] + "..."
                except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
                    error_detail = resp_body.decode("utf-8", errors="replace")[:500]

                # 소비한 body를 다시 응답으로 반환 (Re-wrap the consumed body)
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event: dict[str, Any] = {
                "method": method,
                "path": path,
                "role": _caller_role(request),
                "status_code": status_code,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }
            if query_params:
                log_event["query_params"] = _mask_dict(query_params)
            if request_body is not None:
                log_event["request_body"] = request_body
            if error_detail:
                log_event["error"] = error_detail
            self._emit(log_event)

        return response
