import logging
from contextlib import asynccontextmanager
from typing import Type

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from foodblog.core.config import settings
from foodblog.core.database import init_db
from foodblog.routers.auth_router import router as auth_router
from foodblog.routers.blog_router import router as blog_router
from foodblog.routers.comment_router import router as comment_router
from foodblog.routers.like_router import router as like_router
from foodblog.routers.notification_router import router as notification_router
from foodblog.routers.user_router import router as user_router
from foodblog.utils.exceptions import (
    ApiError, BadRequestError, ForbiddenError,
    NotFoundError, UnauthorizedError
)

logger = logging.getLogger(__name__)


# ─── 애플리케이션 수명 주기 이벤트 핸들러 정의 ─────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    앱 시작 시 DB 테이블 생성
    """
    await init_db()
    yield

# ─── FastAPI 애플리케이션 인스턴스 생성 ─────────────────────────────────────
app = FastAPI(
    title="FoodBlog API",
    description="맛집 리뷰 작성, 댓글/좋아요/북마크 및 알림 기능 제공",
    version="1.0.0",
    lifespan=lifespan,
)

# ─── 로그 설정 ─────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# ─── CORS 설정 ─────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ─── 예외 클래스 → Status Code 매핑 ───────────────────────────────────────
EXCEPTION_STATUS_MAP: dict[Type[Exception], int] = {
    BadRequestError: 400,
    UnauthorizedError: 401,
    ForbiddenError: 403,
    NotFoundError: 404,
}


def status_for(exc: Exception) -> int:
    """
    예외 클래스의 MRO를 따라 가장 가까운 매핑 상태 코드를 반환 (없으면 500)
    """
    for cls in type(exc).__mro__:
        if cls in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[cls]
    return 500


@app.get("/health")
async def health_check() -> dict:
    """
    서비스 상태 확인용 엔드포인트
    """
    return {"status": "ok"}

# ─── 예외 처리 핸들러 등록───────────────────────────────────────────────────
@app.exception_handler(ApiError)
async def handle_api_error(request: Request, exc: ApiError):
    """
    커스텀 ApiError를 EXCEPTION_STATUS_MAP 기준 상태 코드와 {"message"} 본문으로 변환
    """
    status_code = status_for(exc)
    if status_code == 500:
        logger.error("매핑되지 않은 API 예외: %r", exc)
    return ORJSONResponse(status_code=status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """
    요청 본문/경로 파라미터 형식 오류는 400으로 반환
    """
    return ORJSONResponse(
        status_code=400,
        content={"message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    """
    그 외 모든 예외는 500 + 원본 오류 메시지
    """
    logger.exception("처리되지 않은 예외: %s %s", request.method, request.url.path)
    return ORJSONResponse(
        status_code=500,
        content={"message": "Server error", "error": str(exc)},
    )

# ─── 라우터 등록 ───────────────────────────────────────────────────────
app.include_router(auth_router,         prefix="/api")
app.include_router(blog_router,         prefix="/api")
app.include_router(comment_router,      prefix="/api")
app.include_router(like_router,         prefix="/api")
app.include_router(notification_router, prefix="/api")
app.include_router(user_router,         prefix="/api")

if __name__ == "__main__":
    uvicorn.run(
        "foodblog.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
