from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.core.config import settings
from foodblog.core.database import get_db_session
from foodblog.dependencies import ResourceId, get_current_user
from foodblog.schemas.auth_schema import MessageResponse
from foodblog.schemas.notification_schema import (
    NotificationBlog,
    NotificationResponse,
    NotificationSender,
)
from foodblog.services.authorization import Caller
from foodblog.services.notification_service import NotificationEntry, NotificationService

router = APIRouter(
    prefix="/notifications",
    tags=["Notification"],
)


def to_notification_response(entry: NotificationEntry) -> NotificationResponse:
    """
    NotificationEntry를 NotificationResponse 스키마로 변환
    """
    n, sender, blog = entry.notification, entry.sender, entry.blog
    return NotificationResponse(
        id=n.id,
        recipient_id=n.recipient_id,
        sender=(
            NotificationSender(
                id=sender.id,
                username=sender.username,
                avatar_url=sender.avatar_url or settings.DEFAULT_AVATAR_URL,
            )
            if sender
            else None
        ),
        blog=NotificationBlog(id=blog.id, title=blog.title) if blog else None,
        blog_id=n.blog_id,
        type=n.type,
        message=n.message,
        is_read=bool(n.is_read),
        created_at=n.created_at,
    )


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> List[NotificationResponse]:
    """
    내 알림 목록 (최신순)
    """
    entries = await NotificationService(db).list_notifications(current_user)
    return [to_notification_response(e) for e in entries]


@router.patch("/{notification_id}/read", response_model=MessageResponse)
async def mark_as_read(
    notification_id: ResourceId,
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> MessageResponse:
    await NotificationService(db).mark_as_read(notification_id, current_user)
    return MessageResponse(message="Notification marked as read")


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: ResourceId,
    db: AsyncSession = Depends(get_db_session),
    current_user: Caller = Depends(get_current_user),
) -> MessageResponse:
    await NotificationService(db).delete_notification(notification_id, current_user)
    return MessageResponse(message="Notification deleted")
