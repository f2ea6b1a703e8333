from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.core.database import get_db_session
from foodblog.dependencies import ResourceId, get_current_user, get_image_host, read_uploads
from foodblog.schemas.auth_schema import MessageResponse
from foodblog.schemas.user_schema import UserProfileResponse, UserUpdateData
from foodblog.services.authorization import Caller
from foodblog.services.image_host import ImageHostClient
from foodblog.services.user_service import UserService
from foodblog.utils.exceptions import BadRequestError

router = APIRouter(
    prefix="/users",
    tags=["User"],
)


@router.get("/me", response_model=UserProfileResponse)
async def get_me(
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> UserProfileResponse:
    """
    현재 로그인한 사용자 프로필 (비밀번호 해시 제외)
    """
    user = await UserService(db).get_me(current_user)
    return UserProfileResponse.model_validate(user)


@router.get("", response_model=List[UserProfileResponse])
async def list_users(
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> List[UserProfileResponse]:
    """
    전체 사용자 목록 (관리자 전용)
    """
    users = await UserService(db).list_users(current_user)
    return [UserProfileResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user(
    user_id: ResourceId,
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> UserProfileResponse:
    user = await UserService(db).get_user(user_id)
    return UserProfileResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserProfileResponse)
async def update_user(
    user_id: ResourceId,
    data: str = Form("{}"),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
    image_host: ImageHostClient = Depends(get_image_host),
) -> UserProfileResponse:
    """
    프로필 수정 (본인 또는 관리자)
    - data: {"username", "bio"} JSON 문자열
    - image: 새 아바타 이미지 (선택)
    """
    try:
        update = UserUpdateData.model_validate_json(data or "{}")
    except ValidationError:
        raise BadRequestError("Invalid data format")

    uploads = await read_uploads([image] if image else None)
    user = await UserService(db, image_host).update_user(
        user_id,
        current_user,
        username=update.username,
        bio=update.bio,
        avatar=uploads[0] if uploads else None,
    )
    return UserProfileResponse.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: ResourceId,
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> MessageResponse:
    await UserService(db).delete_user(user_id, current_user)
    return MessageResponse(message="User deleted")
