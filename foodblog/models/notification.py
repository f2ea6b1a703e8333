from sqlalchemy import Boolean, Column, DateTime, Integer, String

from foodblog.core.database import Base, utcnow


class Notification(Base):
    """
    알림(Notification) 모델
    - 좋아요/댓글 발생 시 리뷰 작성자(recipient)에게 생성
    - 본인 행동(sender == recipient)에 대해서는 생성하지 않음
    - 수신자만 읽음 처리/삭제 가능 (관리자 예외)
    """
    __tablename__ = "notification"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="알림 고유 ID"
    )
    recipient_id: int = Column(
        Integer,
        nullable=False,
        index=True,
        doc="수신자 User ID"
    )
    sender_id: int = Column(
        Integer,
        nullable=False,
        doc="발신자 User ID"
    )
    blog_id: int = Column(
        Integer,
        nullable=False,
        doc="관련 리뷰(Blog) ID"
    )
    type: str = Column(
        String(20),
        nullable=False,
        doc="알림 종류 (like | comment)"
    )
    message: str = Column(
        String(512),
        nullable=False,
        doc="알림 메시지"
    )
    is_read: bool = Column(
        Boolean,
        nullable=False,
        default=False,
        doc="읽음 여부"
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def owner_id(self) -> int:
        return self.recipient_id
