from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.models.comment import Comment


class CommentRepository:
    """
    댓글(Comment) 데이터 액세스 객체
    """
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, comment_id: int) -> Optional[Comment]:
        return await self.session.get(Comment, comment_id)

    async def list_by_blog(self, blog_id: int) -> List[Comment]:
        """
        리뷰에 달린 댓글을 최신순으로 반환
        """
        query = (
            select(Comment)
            .where(Comment.blog_id == blog_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_by_ids(self, comment_ids: Sequence[int]) -> List[Comment]:
        """
        ID 목록에 해당하는 댓글을 최신순으로 반환
        """
        if not comment_ids:
            return []
        query = (
            select(Comment)
            .where(Comment.id.in_(list(comment_ids)))
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    def add(self, comment: Comment) -> None:
        self.session.add(comment)

    async def delete(self, comment: Comment) -> None:
        await self.session.delete(comment)
