import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.models.comment import Comment
from foodblog.models.user import User
from foodblog.repositories.blog_repository import BlogRepository
from foodblog.repositories.comment_repository import CommentRepository
from foodblog.repositories.user_repository import UserRepository
from foodblog.services.authorization import Caller, ensure_owner_or_admin
from foodblog.services.notification_service import (
    COMMENT,
    NotificationDispatcher,
    comment_message,
)
from foodblog.utils.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class CommentEntry:
    """
    댓글 + 작성자 (응답용)
    """
    comment: Comment
    user: Optional[User] = None


async def with_authors(
    user_repo: UserRepository,
    comments: Sequence[Comment],
) -> List[CommentEntry]:
    """
    댓글 목록에 작성자 정보를 채워 CommentEntry 목록으로 변환 (순서 유지)
    """
    users = {u.id: u for u in await user_repo.find_by_ids({c.user_id for c in comments})}
    return [CommentEntry(comment=c, user=users.get(c.user_id)) for c in comments]


class CommentService:
    """
    댓글 서비스
    - 생성: 리뷰 확인 → 댓글 저장 → 리뷰 comment_ids에 추가 → (타인 리뷰면) 알림
    - 삭제: 리뷰 comment_ids에서 분리 → 댓글 삭제
    - 여러 레코드에 걸친 작업은 트랜잭션으로 묶지 않음 (알림은 best-effort)
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.blog_repo = BlogRepository(db)
        self.comment_repo = CommentRepository(db)
        self.user_repo = UserRepository(db)
        self.dispatcher = NotificationDispatcher(db)

    async def _entry(self, comment: Comment) -> CommentEntry:
        return CommentEntry(comment=comment, user=await self.user_repo.find_by_id(comment.user_id))

    async def _get_owned(self, comment_id: int, caller: Caller) -> Comment:
        comment = await self.comment_repo.find_by_id(comment_id)
        if not comment:
            raise NotFoundError("Comment not found")
        ensure_owner_or_admin(comment, caller)
        return comment

    async def create_comment(self, caller: Caller, blog_id: int, content: Optional[str]) -> CommentEntry:
        """
        댓글 생성
        1) 내용/리뷰 존재 확인
        2) Comment 저장 및 리뷰 comment_ids 끝에 ID 추가
        3) 리뷰 작성자가 댓글 작성자와 다르면 알림 생성 (실패해도 댓글은 유지)
        """
        if not content or not content.strip():
            raise BadRequestError("Blog ID and content are required")

        blog = await self.blog_repo.find_by_id(blog_id)
        if not blog:
            raise NotFoundError("Blog not found")

        comment = Comment(blog_id=blog.id, user_id=caller.id, content=content.strip())
        self.comment_repo.add(comment)
        await self.db.flush()

        blog.comment_ids = list(blog.comment_ids or []) + [comment.id]
        await self.db.commit()

        await self.dispatcher.notify_best_effort(
            recipient_id=blog.author_id,
            sender_id=caller.id,
            blog_id=blog.id,
            type=COMMENT,
            message=comment_message(caller.username, blog.title),
        )
        return await self._entry(comment)

    async def list_comments(self, blog_id: int) -> List[CommentEntry]:
        comments = await self.comment_repo.list_by_blog(blog_id)
        return await with_authors(self.user_repo, comments)

    async def update_comment(self, comment_id: int, caller: Caller, content: Optional[str]) -> CommentEntry:
        if not content or not content.strip():
            raise BadRequestError("Content is required")

        comment = await self._get_owned(comment_id, caller)
        comment.content = content
        await self.db.commit()
        await self.db.refresh(comment)
        return await self._entry(comment)

    async def delete_comment(self, comment_id: int, caller: Caller) -> None:
        """
        댓글 삭제
        1) 부모 리뷰가 있으면 comment_ids에서 제거 (이미 분리됐거나 리뷰가 없어도 진행)
        2) 댓글 레코드 삭제
        """
        comment = await self._get_owned(comment_id, caller)

        blog = await self.blog_repo.find_by_id(comment.blog_id)
        if blog and comment.id in (blog.comment_ids or []):
            blog.comment_ids = [c for c in blog.comment_ids if c != comment.id]
            await self.db.commit()

        await self.comment_repo.delete(comment)
        await self.db.commit()
