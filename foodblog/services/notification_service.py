import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.models.blog import Blog
from foodblog.models.notification import Notification
from foodblog.models.user import User
from foodblog.repositories.blog_repository import BlogRepository
from foodblog.repositories.notification_repository import NotificationRepository
from foodblog.repositories.user_repository import UserRepository
from foodblog.services.authorization import Caller, ensure_owner_or_admin
from foodblog.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)

LIKE = "like"
COMMENT = "comment"


@dataclass
class NotificationEntry:
    """
    알림 + 발신자 + 관련 리뷰 (응답용, 삭제된 경우 None)
    """
    notification: Notification
    sender: Optional[User] = None
    blog: Optional[Blog] = None


class NotificationDispatcher:
    """
    좋아요/댓글 처리 중 동기적으로 알림 레코드를 생성하는 헬퍼
    - 호출자 세션과 같은 엔진의 별도 세션에서 커밋 (실패해도 호출자 세션 상태는 그대로)
    - 전달은 최대 1회, 실패 시 재시도 없음
    """
    def __init__(self, db: AsyncSession):
        self.db = db

    async def notify(
        self,
        recipient_id: int,
        sender_id: int,
        blog_id: int,
        type: str,
        message: str,
    ) -> Notification:
        notification = Notification(
            recipient_id=recipient_id,
            sender_id=sender_id,
            blog_id=blog_id,
            type=type,
            message=message,
            is_read=False,
        )
        async with AsyncSession(bind=self.db.bind, expire_on_commit=False) as session:
            NotificationRepository(session).add(notification)
            await session.commit()
        return notification

    async def notify_best_effort(
        self,
        recipient_id: int,
        sender_id: int,
        blog_id: int,
        type: str,
        message: str,
    ) -> None:
        """
        본인 행동이면 호출하지 않고, 알림 생성 실패는 로그만 남기고 삼킴
        (이미 커밋된 좋아요/댓글은 롤백하지 않음)
        """
        if recipient_id == sender_id:
            return
        try:
            await self.notify(recipient_id, sender_id, blog_id, type, message)
        except Exception:
            logger.exception(
                "알림 생성 실패 (type=%s, blog=%s, recipient=%s)", type, blog_id, recipient_id
            )


def like_message(sender_name: str, blog_title: str) -> str:
    return f'{sender_name} liked your review "{blog_title}"'


def comment_message(sender_name: str, blog_title: str) -> str:
    return f'{sender_name} commented on your review "{blog_title}"'


class NotificationService:
    """
    수신자 기준 알림 조회/읽음 처리/삭제
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = NotificationRepository(db)
        self.user_repo = UserRepository(db)
        self.blog_repo = BlogRepository(db)

    async def list_notifications(self, caller: Caller) -> List[NotificationEntry]:
        """
        내 알림 목록 (최신순), 발신자 이름과 리뷰 제목을 함께 조회
        """
        notifications = await self.repo.list_by_recipient(caller.id)
        senders = {
            u.id: u for u in await self.user_repo.find_by_ids({n.sender_id for n in notifications})
        }
        blogs = {
            b.id: b for b in await self.blog_repo.find_by_ids(list({n.blog_id for n in notifications}))
        }
        return [
            NotificationEntry(
                notification=n,
                sender=senders.get(n.sender_id),
                blog=blogs.get(n.blog_id),
            )
            for n in notifications
        ]

    async def _get_owned(self, notification_id: int, caller: Caller) -> Notification:
        notification = await self.repo.find_by_id(notification_id)
        if not notification:
            raise NotFoundError("Notification not found")
        ensure_owner_or_admin(notification, caller)
        return notification

    async def mark_as_read(self, notification_id: int, caller: Caller) -> Notification:
        notification = await self._get_owned(notification_id, caller)
        notification.is_read = True
        await self.db.commit()
        return notification

    async def delete_notification(self, notification_id: int, caller: Caller) -> None:
        notification = await self._get_owned(notification_id, caller)
        await self.repo.delete(notification)
        await self.db.commit()
