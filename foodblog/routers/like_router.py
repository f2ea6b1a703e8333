from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.core.database import get_db_session
from foodblog.dependencies import ResourceId, get_current_user
from foodblog.schemas.like_schema import (
    LikeCountResponse,
    LikedUsersResponse,
    LikeStatusResponse,
    ToggleLikeResponse,
)
from foodblog.schemas.user_schema import UserSummary
from foodblog.services.authorization import Caller
from foodblog.services.like_service import LikeService

router = APIRouter(
    prefix="/likes",
    tags=["Like"],
)


@router.post("/{blog_id}", response_model=ToggleLikeResponse)
async def toggle_like(
    blog_id: ResourceId,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> ToggleLikeResponse:
    """
    좋아요 토글
    - 새로 좋아요: 201, 좋아요 취소: 200
    """
    liked, total = await LikeService(db).toggle_like(blog_id, current_user)
    if liked:
        response.status_code = status.HTTP_201_CREATED
        return ToggleLikeResponse(message="Liked successfully", total_likes=total, liked=True)
    return ToggleLikeResponse(message="Unliked successfully", total_likes=total, liked=False)


@router.get("/{blog_id}/count", response_model=LikeCountResponse)
async def like_count(
    blog_id: ResourceId,
    db: AsyncSession = Depends(get_db_session),
) -> LikeCountResponse:
    return LikeCountResponse(total_likes=await LikeService(db).count_likes(blog_id))


@router.get("/{blog_id}/status", response_model=LikeStatusResponse)
async def like_status(
    blog_id: ResourceId,
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> LikeStatusResponse:
    return LikeStatusResponse(liked=await LikeService(db).has_liked(blog_id, current_user))


@router.get("/{blog_id}/users", response_model=LikedUsersResponse)
async def liked_users(
    blog_id: ResourceId,
    db: AsyncSession = Depends(get_db_session),
) -> LikedUsersResponse:
    users = await LikeService(db).users_who_liked(blog_id)
    return LikedUsersResponse(users=[UserSummary.of(u) for u in users])
