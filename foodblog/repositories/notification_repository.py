from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.models.notification import Notification


class NotificationRepository:
    """
    알림(Notification) 데이터 액세스 객체
    """
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, notification_id: int) -> Optional[Notification]:
        return await self.session.get(Notification, notification_id)

    async def list_by_recipient(self, recipient_id: int) -> List[Notification]:
        """
        수신자의 알림을 최신순으로 반환
        """
        query = (
            select(Notification)
            .where(Notification.recipient_id == recipient_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    def add(self, notification: Notification) -> None:
        self.session.add(notification)

    async def delete(self, notification: Notification) -> None:
        await self.session.delete(notification)
