"""
Project Showcase API
FastAPI 메인 애플리케이션

- Discord OAuth 토큰으로 사용자 식별
- 프로젝트 / 협업자 / 런치 연도 CRUD
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .db.connection import dispose_db, init_db
from .logging_config import setup_logging
from .middleware import SecurityHeadersMiddleware, setup_metrics
from .routers import projects_router, user_router
from .services.discord_service import close_discord_client

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ============================================================
# App 설정
# ============================================================

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
    프로젝트 쇼케이스 플랫폼 API

    ## 주요 기능
    - **Projects**: 프로젝트 등록/조회/수정/삭제, 협업자 및 런치 연도
    - **User**: Discord 계정 기반 사용자 등록/수정

    ## 인증
    - `Authorization: Bearer <Discord OAuth access token>`
    """,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ============================================================
# 미들웨어
# ============================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.cors_origins_list != ["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)

setup_metrics(app)

# ============================================================
# 전역 에러 핸들러
# ============================================================

def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Malformed request"

    first = errors[0]
    # field_validator에서 올린 메시지는 그대로 전달 (예: "Invalid downloadLink")
    if first.get("type") == "value_error":
        error = first.get("ctx", {}).get("error")
        if error is not None:
            return str(error)

    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "header", "path")]
    field = loc[0] if loc else "body"
    return f'Parameter "{field}" not provided or malformed'


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": {"error": _validation_message(exc), "code": "MALFORMED_REQUEST"}},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    전역 예외 처리

    상세 에러는 로그에만 기록하고, 사용자에게는 일반적인 메시지만 반환
    """
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)

    content = {"error": "Internal server error", "code": "INTERNAL_ERROR"}
    if settings.DEBUG:
        content["detail"] = str(exc)
    return JSONResponse(status_code=500, content={"detail": content})

# ============================================================
# 라우터 등록
# ============================================================

@app.get("/health", tags=["health"])
def health():
    """서버 상태 확인"""
    return {"ok": True, "version": settings.APP_VERSION}


app.include_router(projects_router)
app.include_router(user_router)

# ============================================================
# Startup / Shutdown 이벤트
# ============================================================

@app.on_event("startup")
async def startup_event():
    """앱 시작 시 실행"""
    if settings.DB_CREATE_TABLES:
        await init_db()
    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} started")


@app.on_event("shutdown")
async def shutdown_event():
    """앱 종료 시 실행"""
    await close_discord_client()
    await dispose_db()
