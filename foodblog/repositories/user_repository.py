from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.models.user import User


class UserRepository:
    """
    사용자 관련 데이터 액세스 담당 Repository 클래스
    - User 엔티티 조회 및 생성/삭제 기능 제공 (커밋은 서비스 계층에서 수행)
    """
    def __init__(self, session: AsyncSession):
        """
        session: 비동기 SQLAlchemy 세션
        """
        self.session = session

    async def find_by_id(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """
        주어진 이메일과 일치하는 User 객체 반환
        """
        query = select(User).where(User.email == email)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def find_by_ids(self, user_ids: Sequence[int]) -> List[User]:
        if not user_ids:
            return []
        query = select(User).where(User.id.in_(list(user_ids)))
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_users(self) -> List[User]:
        query = select(User).order_by(User.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def create_user(self, user: User) -> None:
        """
        새 User 엔티티를 세션에 추가
        """
        self.session.add(user)

    async def delete_user(self, user: User) -> None:
        await self.session.delete(user)
