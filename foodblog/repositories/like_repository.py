from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.models.like import Like


class LikeRepository:
    """
    좋아요(Like) 데이터 액세스 객체
    - 개수는 항상 행 수를 새로 세어 반환
    """
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(self, blog_id: int, user_id: int) -> Optional[Like]:
        query = select(Like).where(Like.blog_id == blog_id, Like.user_id == user_id)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def exists(self, blog_id: int, user_id: int) -> bool:
        return await self.find(blog_id, user_id) is not None

    async def count_by_blog(self, blog_id: int) -> int:
        query = select(func.count()).select_from(Like).where(Like.blog_id == blog_id)
        result = await self.session.execute(query)
        return result.scalar_one()

    async def list_by_blog(self, blog_id: int) -> List[Like]:
        query = select(Like).where(Like.blog_id == blog_id).order_by(Like.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    def add(self, like: Like) -> None:
        self.session.add(like)

    async def delete(self, like: Like) -> None:
        await self.session.delete(like)

    async def delete_by_blog(self, blog_id: int) -> int:
        """
        리뷰에 달린 좋아요를 모두 삭제하고 삭제 건수를 반환
        """
        result = await self.session.execute(delete(Like).where(Like.blog_id == blog_id))
        return result.rowcount or 0
