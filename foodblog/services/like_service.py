import logging
from typing import List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.models.blog import Blog
from foodblog.models.like import Like
from foodblog.models.user import User
from foodblog.repositories.blog_repository import BlogRepository
from foodblog.repositories.like_repository import LikeRepository
from foodblog.repositories.user_repository import UserRepository
from foodblog.services.authorization import Caller
from foodblog.services.notification_service import (
    LIKE,
    NotificationDispatcher,
    like_message,
)
from foodblog.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class LikeService:
    """
    좋아요 서비스
    - (리뷰, 사용자) 기준 존재 여부 토글
    - 반환하는 개수는 항상 좋아요 행을 새로 센 값
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.blog_repo = BlogRepository(db)
        self.like_repo = LikeRepository(db)
        self.user_repo = UserRepository(db)
        self.dispatcher = NotificationDispatcher(db)

    async def _get_blog(self, blog_id: int) -> Blog:
        blog = await self.blog_repo.find_by_id(blog_id)
        if not blog:
            raise NotFoundError("Blog not found")
        return blog

    async def toggle_like(self, blog_id: int, caller: Caller) -> Tuple[bool, int]:
        """
        좋아요 토글 후 (liked, total_likes) 반환
        1) 기존 좋아요가 있으면 삭제 → liked=False
        2) 없으면 생성 → 본인 리뷰가 아니면 알림 → liked=True
        """
        blog = await self._get_blog(blog_id)
        author_id, title = blog.author_id, blog.title

        existing = await self.like_repo.find(blog_id, caller.id)
        if existing:
            await self.like_repo.delete(existing)
            await self.db.commit()
            return False, await self.like_repo.count_by_blog(blog_id)

        self.like_repo.add(Like(blog_id=blog_id, user_id=caller.id))
        try:
            await self.db.commit()
        except IntegrityError:
            # 동시 요청이 먼저 좋아요를 만든 경우: 이미 좋아요 상태로 간주
            await self.db.rollback()
            logger.info("중복 좋아요 무시 (blog=%s, user=%s)", blog_id, caller.id)
            return True, await self.like_repo.count_by_blog(blog_id)

        await self.dispatcher.notify_best_effort(
            recipient_id=author_id,
            sender_id=caller.id,
            blog_id=blog_id,
            type=LIKE,
            message=like_message(caller.username, title),
        )
        return True, await self.like_repo.count_by_blog(blog_id)

    async def count_likes(self, blog_id: int) -> int:
        return await self.like_repo.count_by_blog(blog_id)

    async def has_liked(self, blog_id: int, caller: Caller) -> bool:
        return await self.like_repo.exists(blog_id, caller.id)

    async def users_who_liked(self, blog_id: int) -> List[User]:
        likes = await self.like_repo.list_by_blog(blog_id)
        users = {u.id: u for u in await self.user_repo.find_by_ids([like.user_id for like in likes])}
        return [users[like.user_id] for like in likes if like.user_id in users]
