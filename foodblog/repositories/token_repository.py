from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.core.database import utcnow
from foodblog.models.token import RefreshToken


class TokenRepository:
    """
    리프레시 토큰 세션 Repository
    - 사용자당 1건 유지 (upsert)
    """
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_user_id(self, user_id: int) -> Optional[RefreshToken]:
        query = (
            select(RefreshToken)
            .where(RefreshToken.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    def _upsert_statement(self, user_id: int, refresh_token: str):
        """
        DB 방언별 INSERT ... ON CONFLICT 구문 생성 (user_id 유니크 키 기준)
        """
        values = dict(user_id=user_id, refresh_token=refresh_token, updated_at=utcnow())
        dialect = self.session.bind.dialect.name
        if dialect == "mysql":
            stmt = mysql_insert(RefreshToken).values(**values)
            return stmt.on_duplicate_key_update(
                refresh_token=stmt.inserted.refresh_token,
                updated_at=stmt.inserted.updated_at,
            )
        if dialect == "sqlite":
            stmt = sqlite_insert(RefreshToken).values(**values)
            return stmt.on_conflict_do_update(
                index_elements=[RefreshToken.user_id],
                set_={
                    "refresh_token": stmt.excluded.refresh_token,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
        raise NotImplementedError(f"refresh token upsert is not supported on {dialect}")

    async def upsert(self, user_id: int, refresh_token: str) -> None:
        """
        단일 구문으로 토큰 레코드를 덮어쓰거나(이전 토큰 무효화) 새로 생성
        - 동시 로그인도 유니크 충돌 없이 마지막 쓰기가 남음
        """
        await self.session.execute(self._upsert_statement(user_id, refresh_token))

    async def delete_by_token(self, refresh_token: str) -> int:
        """
        주어진 토큰 문자열과 일치하는 레코드를 삭제하고 삭제 건수를 반환
        """
        result = await self.session.execute(
            delete(RefreshToken).where(RefreshToken.refresh_token == refresh_token)
        )
        return result.rowcount or 0
