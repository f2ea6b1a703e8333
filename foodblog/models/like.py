from sqlalchemy import Column, DateTime, Integer, UniqueConstraint

from foodblog.core.database import Base, utcnow


class Like(Base):
    """
    좋아요(Like) 모델
    - (blog_id, user_id) 조합당 최대 1건
    - 좋아요 여부/개수는 이 테이블의 행 존재와 개수로만 판단 (비정규화 카운트 없음)
    """
    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("blog_id", "user_id", name="uq_like_blog_user"),
    )

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="좋아요 기록 고유 ID"
    )
    blog_id: int = Column(
        Integer,
        nullable=False,
        index=True,
        doc="좋아요 대상 리뷰(Blog) ID"
    )
    user_id: int = Column(
        Integer,
        nullable=False,
        index=True,
        doc="좋아요를 누른 사용자(User) ID"
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
