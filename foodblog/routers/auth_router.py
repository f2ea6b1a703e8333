import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.core.config import settings
from foodblog.core.database import get_db_session
from foodblog.dependencies import get_identity_verifier
from foodblog.schemas.auth_schema import (
    AccessTokenResponse,
    GoogleSignInRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
)
from foodblog.schemas.user_schema import UserSummary
from foodblog.services.auth_service import AuthService
from foodblog.services.identity_verifier import IdentityVerifier

# 로거 설정
logger = logging.getLogger(__name__)


# 리프레시 토큰 쿠키 설정
class CookieConfig:
    REFRESH_NAME = settings.REFRESH_COOKIE_NAME
    PATH = "/"
    SAMESITE = settings.COOKIE_SAMESITE
    SECURE = settings.COOKIE_SECURE
    HTTPONLY = True
    REFRESH_MAX_AGE = 60 * 60 * 24 * settings.JWT_REFRESH_TOKEN_EXPIRES_DAYS

    @classmethod
    def set_refresh_cookie(cls, response: Response, refresh: str) -> None:
        """
        응답에 리프레시 토큰 쿠키를 설정
        """
        response.set_cookie(
            key=cls.REFRESH_NAME,
            value=refresh,
            httponly=cls.HTTPONLY,
            secure=cls.SECURE,
            samesite=cls.SAMESITE,
            max_age=cls.REFRESH_MAX_AGE,
            path=cls.PATH,
        )

    @classmethod
    def clear_refresh_cookie(cls, response: Response) -> None:
        response.delete_cookie(
            cls.REFRESH_NAME,
            path=cls.PATH,
            secure=cls.SECURE,
            httponly=cls.HTTPONLY,
            samesite=cls.SAMESITE,
        )


# 라우터 인스턴스
router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(
    req: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """
    이메일 회원가입 (토큰은 발급하지 않음, 로그인 필요)
    """
    await AuthService(db).register(req.username, req.email, req.password)
    return MessageResponse(message="Registration successful")


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
async def login(
    req: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    """
    이메일 로그인
    1) AuthService.login → 액세스/리프레시 토큰 발급
    2) 리프레시 토큰은 HttpOnly 쿠키로, 액세스 토큰은 본문으로 전달
    """
    result = await AuthService(db).login(req.email, req.password)
    CookieConfig.set_refresh_cookie(response, result["refresh_token"])
    return LoginResponse(
        access_token=result["access_token"],
        user=UserSummary.of(result["user"], with_role=True),
    )


@router.get("/refresh", response_model=AccessTokenResponse)
async def refresh_token(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> AccessTokenResponse:
    """
    리프레시 토큰 쿠키를 검증하고 새 액세스 토큰을 발급
    """
    token = request.cookies.get(CookieConfig.REFRESH_NAME)
    access_token = await AuthService(db).refresh(token)
    return AccessTokenResponse(access_token=access_token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """
    저장된 리프레시 세션 삭제 및 쿠키 삭제로 로그아웃 처리
    """
    await AuthService(db).logout(request.cookies.get(CookieConfig.REFRESH_NAME))
    CookieConfig.clear_refresh_cookie(response)
    return MessageResponse(message="Logged out")


@router.post("/google", response_model=LoginResponse, response_model_exclude_none=True)
async def google_sign_in(
    req: GoogleSignInRequest,
    db: AsyncSession = Depends(get_db_session),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> LoginResponse:
    """
    Google ID 토큰 로그인
    - 액세스 토큰만 발급 (리프레시 쿠키 없음)
    """
    result = await AuthService(db, verifier).federated_sign_in(req.id_token)
    return LoginResponse(
        access_token=result["access_token"],
        user=UserSummary.of(result["user"], with_role=True, with_email=True),
    )
