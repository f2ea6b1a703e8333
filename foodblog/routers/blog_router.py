import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.core.database import get_db_session
from foodblog.dependencies import (
    ResourceId,
    get_current_user,
    get_current_user_optional,
    get_image_host,
    read_uploads,
)
from foodblog.schemas.auth_schema import MessageResponse
from foodblog.schemas.blog_schema import (
    BlogData,
    BlogMutationResponse,
    BlogResponse,
    BookmarkResponse,
    CommentView,
)
from foodblog.schemas.user_schema import UserSummary
from foodblog.services.authorization import Caller
from foodblog.services.blog_service import FILTER_ALL, BlogService, BlogView
from foodblog.services.comment_service import CommentEntry
from foodblog.services.image_host import ImageHostClient
from foodblog.utils.exceptions import BadRequestError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/blogs",
    tags=["Blog"],
)


def to_comment_view(entry: CommentEntry) -> CommentView:
    """
    CommentEntry를 CommentView 스키마로 변환
    """
    comment = entry.comment
    return CommentView(
        id=comment.id,
        blog_id=comment.blog_id,
        content=comment.content,
        user=UserSummary.of(entry.user) if entry.user else None,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


def to_blog_response(view: BlogView) -> BlogResponse:
    """
    BlogView를 BlogResponse 스키마로 변환
    """
    blog = view.blog
    return BlogResponse(
        id=blog.id,
        title=blog.title,
        content=blog.content,
        restaurant=blog.restaurant,
        location=blog.location or "",
        rating=blog.rating,
        tags=list(blog.tags or []),
        category=blog.category or "",
        images=list(blog.images or []),
        author=UserSummary.of(view.author) if view.author else None,
        is_featured=bool(blog.is_featured),
        comments=[to_comment_view(c) for c in view.comments],
        created_at=blog.created_at,
        updated_at=blog.updated_at,
        total_likes=view.total_likes,
        has_liked=view.has_liked,
        is_bookmarked=view.is_bookmarked,
    )


def parse_blog_data(data: str) -> BlogData:
    """
    multipart `data` 필드(JSON 문자열)를 BlogData로 파싱
    """
    try:
        return BlogData.model_validate_json(data or "{}")
    except ValidationError as e:
        logger.info("리뷰 data 필드 파싱 실패: %s", e)
        raise BadRequestError("Invalid data format")


@router.get("", response_model=List[BlogResponse])
async def list_blogs(
    filter_: str = Query(FILTER_ALL, alias="filter"),
    db: AsyncSession = Depends(get_db_session),
    current_user: Optional[Caller] = Depends(get_current_user_optional),
) -> List[BlogResponse]:
    """
    리뷰 목록 조회 (all | my | featured)
    """
    views = await BlogService(db).list_blogs(filter_, current_user)
    return [to_blog_response(v) for v in views]


@router.post(
    "",
    response_model=BlogMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_blog(
    data: str = Form("{}"),
    images: Optional[List[UploadFile]] = File(None),
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
    image_host: ImageHostClient = Depends(get_image_host),
) -> BlogMutationResponse:
    """
    새 리뷰 작성
    - data: 리뷰 필드 JSON 문자열
    - images: 첨부 이미지 (이미지 호스트에 업로드 후 URL 저장)
    """
    blog_data = parse_blog_data(data)
    uploads = await read_uploads(images)
    view = await BlogService(db, image_host).create_blog(current_user, blog_data, uploads)
    return BlogMutationResponse(message="Blog created", blog=to_blog_response(view))


@router.get("/bookmarks", response_model=List[BlogResponse])
async def list_bookmarks(
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> List[BlogResponse]:
    """
    내가 북마크한 리뷰 목록
    """
    views = await BlogService(db).list_bookmarked_blogs(current_user)
    return [to_blog_response(v) for v in views]


@router.post("/{blog_id}/bookmark", response_model=BookmarkResponse)
async def toggle_bookmark(
    blog_id: ResourceId,
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> BookmarkResponse:
    is_bookmarked = await BlogService(db).toggle_bookmark(blog_id, current_user)
    return BookmarkResponse(
        message=f"Blog {'bookmarked' if is_bookmarked else 'unbookmarked'} successfully",
        is_bookmarked=is_bookmarked,
    )


@router.get("/{blog_id}", response_model=BlogResponse)
async def get_blog(
    blog_id: ResourceId,
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> BlogResponse:
    view = await BlogService(db).get_blog(blog_id, current_user)
    return to_blog_response(view)


@router.put("/{blog_id}", response_model=BlogMutationResponse)
async def update_blog(
    blog_id: ResourceId,
    data: str = Form("{}"),
    images: Optional[List[UploadFile]] = File(None),
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
    image_host: ImageHostClient = Depends(get_image_host),
) -> BlogMutationResponse:
    """
    리뷰 수정 (작성자 또는 관리자)
    """
    blog_data = parse_blog_data(data)
    uploads = await read_uploads(images)
    view = await BlogService(db, image_host).update_blog(blog_id, current_user, blog_data, uploads)
    return BlogMutationResponse(message="Blog updated successfully", blog=to_blog_response(view))


@router.delete("/{blog_id}", response_model=MessageResponse)
async def delete_blog(
    blog_id: ResourceId,
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> MessageResponse:
    await BlogService(db).delete_blog(blog_id, current_user)
    return MessageResponse(message="Blog deleted successfully")
