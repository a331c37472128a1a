"""인증 라우터, 로그인/로그아웃/내 정보/비밀번호 변경.

Auth Router. Login sets the HTTP-only session cookie; logout clears it.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from dailyreport.api.deps import get_current_principal
from dailyreport.config import settings
from dailyreport.database import get_db
from dailyreport.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    PrincipalResponse,
)
from dailyreport.schemas.common import MessageResponse
from dailyreport.services.auth_service import auth_service
from dailyreport.utils.scope import Principal

router: APIRouter = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LoginResponse:
    """로그인, 세션 쿠키 설정.

    Authenticate and set the auth-token cookie (HttpOnly, SameSite=Lax).
    """
    result: LoginResponse = await auth_service.login(db, data)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=result.token,
        max_age=settings.SESSION_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    return result


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    """로그아웃, 세션 쿠키 삭제 (Clear the session cookie)."""
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")
    return MessageResponse(message="로그아웃되었습니다.")


@router.get("/me", response_model=PrincipalResponse)
async def get_me(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> PrincipalResponse:
    """현재 세션의 주체 정보 (Principal carried by the session)."""
    return auth_service.to_response(principal)


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: ChangePasswordRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> MessageResponse:
    await auth_service.change_password(db, principal, data)
    await db.commit()
    return MessageResponse(message="비밀번호가 변경되었습니다.")
