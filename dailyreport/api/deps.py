"""FastAPI 의존성 주입 모듈, 세션 인증 및 역할 검사.

FastAPI dependency injection module for session authentication and
role-based access control.

Authentication Flow:
    1. auth-token 쿠키 또는 Authorization: Bearer 헤더에서 토큰 추출
       (Token read from the auth-token cookie, else the Bearer header)
    2. decode_token()이 서명과 만료를 검증 (Signature and expiry verified)
    3. 클레임에서 Principal을 복원, DB 조회 없음
       (Principal rebuilt from claims without a database lookup)

Authorization Flow (require_roles):
    1. get_current_principal로 인증 (Authenticated via get_current_principal)
    2. authorize()로 역할 확인, 허용되지 않으면 403
       (Role checked with authorize(); 403 when not allowed)
"""

from typing import Annotated, Awaitable, Callable

import jwt
from fastapi import Depends
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from dailyreport.config import settings
from dailyreport.utils.exceptions import ForbiddenError, UnauthorizedError
from dailyreport.utils.jwt import decode_token
from dailyreport.utils.scope import COMPANY_MANAGER, MANAGER, OPERATOR, Principal, authorize

# 세션 쿠키 추출기 (Reads the HTTP-only session cookie)
cookie_scheme: APIKeyCookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)
# Bearer 토큰 추출기, API 클라이언트용 (Bearer header for API clients)
bearer_scheme: HTTPBearer = HTTPBearer(auto_error=False)


async def get_current_principal(
    cookie_token: Annotated[str | None, Depends(cookie_scheme)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Principal:
    """세션 토큰에서 현재 주체를 추출합니다.

    Decode the session token and return the principal it carries.

    Returns:
        Principal: 인증된 주체 (Authenticated principal)

    Raises:
        UnauthorizedError: 토큰 없음, 만료, 위조, 클레임 누락
                           (Missing, expired, forged or incomplete token)
    """
    token: str | None = cookie_token or (credentials.credentials if credentials else None)
    if not token:
        raise UnauthorizedError("로그인이 필요합니다.")
    try:
        payload: dict = decode_token(token)
        return Principal.from_claims(payload)
    except (jwt.ExpiredSignatureError, jwt.InvalidTokenError, KeyError, ValueError):
        raise UnauthorizedError("세션이 만료되었거나 유효하지 않습니다.")


def require_roles(*roles: str) -> Callable[..., Awaitable[Principal]]:
    """역할 기반 권한 검사 의존성 팩토리.

    Dependency factory allowing only the given roles.

    Args:
        roles: 허용 역할 (Allowed role names)

    Returns:
        FastAPI 의존성, 주체 반환 또는 403 (Dependency returning the principal or raising 403)
    """
    allowed: frozenset[str] = frozenset(roles)

    async def _check(
        principal: Annotated[Principal, Depends(get_current_principal)],
    ) -> Principal:
        if not authorize(principal, allowed):
            raise ForbiddenError("권한이 없습니다.")
        return principal
    return _check


# 편의 의존성 (Pre-configured role sets)
require_operator = require_roles(OPERATOR)
require_operator_or_manager = require_roles(OPERATOR, MANAGER)
require_managing = require_roles(OPERATOR, COMPANY_MANAGER, MANAGER)
