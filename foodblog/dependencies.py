import logging
from functools import lru_cache
from typing import Annotated, List, Optional

from fastapi import Depends, Path, Request, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.core.config import get_settings, Settings
from foodblog.core.database import MAX_ID, get_db_session
from foodblog.core.security import decode_access_token
from foodblog.repositories.user_repository import UserRepository
from foodblog.services.authorization import Caller
from foodblog.services.identity_verifier import FirebaseIdentityVerifier, IdentityVerifier
from foodblog.services.image_host import ImageHostClient, UploadedImage
from foodblog.utils.exceptions import ApiError, InvalidTokenError, UnauthorizedError

logger = logging.getLogger(__name__)

# 경로 파라미터로 받는 리소스 ID (범위 밖이면 400)
ResourceId = Annotated[int, Path(ge=1, le=MAX_ID)]


def _bearer_token(request: Request) -> Optional[str]:
    """
    Authorization 헤더에서 Bearer 토큰을 추출 (쿠키는 보지 않음)
    """
    auth_header = request.headers.get("authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def resolve_caller(token: Optional[str], db_session: AsyncSession) -> Caller:
    """
    액세스 토큰을 검증하고 DB에서 사용자를 조회하여 Caller 반환
    Raises:
        UnauthorizedError: 토큰 없음
        InvalidTokenError: 토큰 서명/만료 오류 또는 사용자 없음
    """
    if not token:
        raise UnauthorizedError("No token provided")

    payload = decode_access_token(token)
    user = await UserRepository(db_session).find_by_id(payload.user_id)
    if not user:
        logger.warning("토큰의 사용자(%s) 조회 실패", payload.sub)
        raise InvalidTokenError("Invalid token")
    return Caller.from_user(user)


async def get_current_user(
    request: Request,
    db_session: AsyncSession = Depends(get_db_session),
) -> Caller:
    """
    현재 요청의 호출자를 가져오는 종속성 함수
    1) Authorization 헤더의 Bearer 토큰 추출
    2) 토큰 검증 및 사용자 조회
    3) Caller 반환 (이후 서비스 호출에 명시적으로 전달)
    """
    return await resolve_caller(_bearer_token(request), db_session)


async def get_current_user_optional(
    request: Request,
    db_session: AsyncSession = Depends(get_db_session),
) -> Optional[Caller]:
    """
    선택적 호출자 조회 함수
    - 토큰이 없거나 검증에 실패하면 None 반환
    """
    token = _bearer_token(request)
    if not token:
        return None
    try:
        return await resolve_caller(token, db_session)
    except ApiError:
        # 토큰이 만료되었거나 유효하지 않으면 비로그인으로 처리
        return None


@lru_cache()
def _firebase_verifier(project_id: Optional[str]) -> FirebaseIdentityVerifier:
    return FirebaseIdentityVerifier(project_id=project_id)


def get_identity_verifier(
    settings: Settings = Depends(get_settings),
) -> IdentityVerifier:
    """
    Google(Firebase) ID 토큰 검증기 의존성 주입 함수
    """
    return _firebase_verifier(settings.FIREBASE_PROJECT_ID)


def get_image_host(
    settings: Settings = Depends(get_settings),
) -> ImageHostClient:
    """
    이미지 호스트 클라이언트 의존성 주입 함수
    """
    return ImageHostClient(
        api_key=settings.IMGBB_API_KEY,
        upload_url=settings.IMGBB_UPLOAD_URL,
        timeout=settings.IMAGE_UPLOAD_TIMEOUT_SECONDS,
        retries=settings.IMAGE_UPLOAD_RETRIES,
        retry_delay=settings.IMAGE_UPLOAD_RETRY_DELAY_SECONDS,
        max_bytes=settings.IMAGE_MAX_BYTES,
    )


async def read_uploads(files: Optional[List[UploadFile]]) -> List[UploadedImage]:
    """
    multipart 업로드 파일을 UploadedImage 목록으로 변환 (빈 파일 항목은 제외)
    """
    images = []
    for f in files or []:
        if not f.filename:
            continue
        images.append(
            UploadedImage(
                filename=f.filename,
                content_type=f.content_type or "",
                data=await f.read(),
            )
        )
    return images
