from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.models.blog import Blog


class BlogRepository:
    """
    리뷰(Blog) 데이터 액세스 객체
    """
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, blog_id: int) -> Optional[Blog]:
        return await self.session.get(Blog, blog_id)

    async def list_blogs(
        self,
        author_id: Optional[int] = None,
        featured_only: bool = False,
    ) -> List[Blog]:
        """
        조건에 맞는 리뷰 목록을 최신순으로 반환
        - author_id: 특정 작성자의 리뷰만
        - featured_only: 추천 리뷰만
        """
        query = select(Blog)
        if author_id is not None:
            query = query.where(Blog.author_id == author_id)
        if featured_only:
            query = query.where(Blog.is_featured.is_(True))
        query = query.order_by(Blog.created_at.desc(), Blog.id.desc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_by_ids(self, blog_ids: Sequence[int]) -> List[Blog]:
        """
        ID 목록에 해당하는 리뷰를 입력 순서대로 반환 (존재하지 않는 ID는 건너뜀)
        """
        if not blog_ids:
            return []
        query = select(Blog).where(Blog.id.in_(list(blog_ids)))
        result = await self.session.execute(query)
        by_id = {blog.id: blog for blog in result.scalars().all()}
        return [by_id[i] for i in blog_ids if i in by_id]

    def add(self, blog: Blog) -> None:
        self.session.add(blog)

    async def delete(self, blog: Blog) -> None:
        await self.session.delete(blog)
