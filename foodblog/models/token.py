from sqlalchemy import Column, DateTime, Integer, String

from foodblog.core.database import Base, utcnow


class RefreshToken(Base):
    """
    리프레시 토큰 세션 모델
    - 사용자당 1건만 유지 (upsert: 새 로그인 시 이전 토큰을 덮어써서 무효화)
    - 로그아웃 시 삭제
    """
    __tablename__ = "tokens"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
    )
    user_id: int = Column(
        Integer,
        unique=True,
        nullable=False,
        doc="토큰 소유자 User ID"
    )
    refresh_token: str = Column(
        String(512),
        nullable=False,
        index=True,
        doc="현재 유효한 리프레시 토큰"
    )
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
