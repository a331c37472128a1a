"""세션 토큰 생성 및 검증 유틸리티 모듈.

Session token creation and verification utility module.
The token carries the whole principal so requests never re-read the
employee row; a change to the employee does not affect sessions already
issued.

JWT Payload Structure:
    {
        "sub": "employee_uuid",
        "email": "kim@example.com",
        "name": "김철수",
        "role": "manager",
        "company_id": "company_uuid",
        "company_name": "테스트 회사",
        "department": "개발팀" | null,
        "exp": 1234567890
    }
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from dailyreport.config import settings


def create_session_token(data: dict[str, Any]) -> str:
    """세션 JWT를 생성합니다.

    Generate a signed session token. Expires after SESSION_EXPIRE_DAYS.

    Args:
        data: 페이로드 데이터 (Principal claims)

    Returns:
        str: 인코딩된 JWT 문자열 (Encoded JWT token string)
    """
    to_encode: dict[str, Any] = data.copy()
    expire: datetime = datetime.now(timezone.utc) + timedelta(days=settings.SESSION_EXPIRE_DAYS)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """JWT 토큰을 디코딩하고 검증합니다.

    Decode and verify a session token.

    Raises:
        jwt.ExpiredSignatureError: 토큰 만료 시 (When token has expired)
        jwt.InvalidTokenError: 유효하지 않은 토큰 (When token is invalid)
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
