from sqlalchemy import Column, DateTime, Integer, Text

from foodblog.core.database import Base, utcnow


class Comment(Base):
    """
    댓글(Comment) 모델
    - blog_id: 부모 리뷰 ID (리뷰 삭제 후에도 레코드는 남음)
    - user_id: 작성자 ID
    """
    __tablename__ = "comment"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="댓글 고유 ID"
    )
    blog_id: int = Column(
        Integer,
        nullable=False,
        index=True,
        doc="부모 리뷰(Blog) ID"
    )
    user_id: int = Column(
        Integer,
        nullable=False,
        index=True,
        doc="댓글 작성자(User) ID"
    )
    content: str = Column(
        Text,
        nullable=False,
        doc="댓글 내용"
    )

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def owner_id(self) -> int:
        return self.user_id
