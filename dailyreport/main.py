"""FastAPI 애플리케이션 엔트리포인트, 미들웨어 및 라우터 등록.

FastAPI application entry point. Configures logging, CORS, the request
logging middleware, the health check and the /api/v1 routers.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from dailyreport.config import settings
from dailyreport.middleware.axiom_logging import AxiomLoggingMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.DEBUG,
)

# 요청/응답 로깅 미들웨어, CORS보다 먼저 등록
# (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# 세션 쿠키를 쓰므로 출처를 명시 (Explicit origins since the session is a cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """저장소 제약 위반을 409로 변환 (Store constraint violations become 409)."""
    logger.warning("IntegrityError on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=409, content={"detail": "이미 존재하는 데이터입니다."})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록 (Router registration)
# ---------------------------------------------------------------------------
from dailyreport.api.admin import admin_router  # noqa: E402
from dailyreport.api.app import app_router  # noqa: E402
from dailyreport.api.auth import router as auth_router  # noqa: E402

app.include_router(auth_router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(admin_router, prefix="/api/v1/admin")
app.include_router(app_router, prefix="/api/v1/app")
