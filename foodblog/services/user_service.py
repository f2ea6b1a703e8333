import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.models.user import User
from foodblog.repositories.user_repository import UserRepository
from foodblog.services.authorization import Caller, ensure_admin, ensure_owner_or_admin
from foodblog.services.image_host import ImageHostClient, UploadedImage
from foodblog.utils.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)


class UserService:
    """
    사용자 프로필 서비스
    - 조회, 수정(본인 또는 관리자), 삭제(본인 또는 관리자), 전체 목록(관리자)
    - 사용자 삭제 시 작성한 리뷰/댓글/좋아요/알림은 정리하지 않음
    """
    def __init__(self, db: AsyncSession, image_host: Optional[ImageHostClient] = None):
        self.db = db
        self.image_host = image_host
        self.user_repo = UserRepository(db)

    async def get_user(self, user_id: int) -> User:
        user = await self.user_repo.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def get_me(self, caller: Caller) -> User:
        return await self.get_user(caller.id)

    async def update_user(
        self,
        user_id: int,
        caller: Caller,
        username: Optional[str] = None,
        bio: Optional[str] = None,
        avatar: Optional[UploadedImage] = None,
    ) -> User:
        """
        프로필 수정
        1) 대상 사용자 조회 및 권한 확인
        2) 아바타가 있으면 이미지 호스트에 업로드
        3) 전달된 필드만 변경
        """
        user = await self.get_user(user_id)
        ensure_owner_or_admin(user, caller)

        avatar_url = None
        if avatar is not None:
            if self.image_host is None:
                raise BadRequestError("Image upload is not available")
            avatar_url = await self.image_host.upload(avatar)

        if username:
            user.username = username
        if bio is not None:
            user.bio = bio
        if avatar_url:
            user.avatar_url = avatar_url

        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def delete_user(self, user_id: int, caller: Caller) -> None:
        user = await self.get_user(user_id)
        ensure_owner_or_admin(user, caller)
        await self.user_repo.delete_user(user)
        await self.db.commit()
        logger.info("사용자 삭제: id=%s (by %s)", user_id, caller.id)

    async def list_users(self, caller: Caller) -> List[User]:
        ensure_admin(caller)
        return await self.user_repo.list_users()
