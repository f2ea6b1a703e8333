from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.core.database import get_db_session
from foodblog.dependencies import ResourceId, get_current_user
from foodblog.routers.blog_router import to_comment_view
from foodblog.schemas.auth_schema import MessageResponse
from foodblog.schemas.blog_schema import CommentView
from foodblog.schemas.comment_schema import (
    CommentCreateRequest,
    CommentMutationResponse,
    CommentUpdateRequest,
)
from foodblog.services.authorization import Caller
from foodblog.services.comment_service import CommentService

router = APIRouter(
    prefix="/comments",
    tags=["Comment"],
)


@router.post(
    "",
    response_model=CommentMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    req: CommentCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> CommentMutationResponse:
    """
    리뷰에 댓글 작성
    - 리뷰 작성자가 아니면 작성자에게 알림 생성 (실패해도 댓글은 저장됨)
    """
    entry = await CommentService(db).create_comment(current_user, req.blog_id, req.content)
    return CommentMutationResponse(message="Comment added", comment=to_comment_view(entry))


@router.get("/{blog_id}", response_model=List[CommentView])
async def list_comments(
    blog_id: ResourceId,
    db: AsyncSession = Depends(get_db_session),
) -> List[CommentView]:
    entries = await CommentService(db).list_comments(blog_id)
    return [to_comment_view(e) for e in entries]


@router.put("/{comment_id}", response_model=CommentMutationResponse)
async def update_comment(
    comment_id: ResourceId,
    req: CommentUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> CommentMutationResponse:
    entry = await CommentService(db).update_comment(comment_id, current_user, req.content)
    return CommentMutationResponse(message="Comment updated", comment=to_comment_view(entry))


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: ResourceId,
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> MessageResponse:
    await CommentService(db).delete_comment(comment_id, current_user)
    return MessageResponse(message="Comment deleted")
