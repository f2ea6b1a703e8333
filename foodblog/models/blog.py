from sqlalchemy import Boolean, Column, DateTime, Float, Integer, JSON, String, Text

from foodblog.core.database import Base, utcnow


class Blog(Base):
    """
    음식점 리뷰(Blog) 모델
    - 제목, 본문, 음식점, 위치, 평점, 태그, 카테고리, 이미지 URL
    - 작성자(author_id)는 생성 후 변경되지 않음
    - comment_ids: 이 리뷰에 달린 댓글 ID 목록 (리뷰가 소유하는 참조 배열)
    """
    __tablename__ = "blog"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="리뷰 고유 ID"
    )
    title: str = Column(
        String(255),
        nullable=False,
        doc="리뷰 제목"
    )
    content: str = Column(
        Text,
        nullable=False,
        doc="리뷰 본문"
    )
    restaurant: str = Column(
        String(255),
        nullable=False,
        doc="음식점 이름"
    )
    location: str = Column(
        String(255),
        nullable=False,
        default="",
        doc="음식점 위치"
    )
    rating: float = Column(
        Float,
        nullable=False,
        doc="평점"
    )
    tags: list = Column(
        JSON,
        nullable=False,
        default=list,
        doc="태그 목록 (입력 순서 유지)"
    )
    category: str = Column(
        String(120),
        nullable=False,
        default="",
        doc="카테고리"
    )
    images: list = Column(
        JSON,
        nullable=False,
        default=list,
        doc="이미지 호스트에 업로드된 이미지 URL 목록"
    )
    # 외래키 제약 없이 ID만 보관 (사용자 삭제 시 참조가 그대로 남음)
    author_id: int = Column(
        Integer,
        nullable=False,
        index=True,
        doc="작성자 User ID"
    )
    is_featured: bool = Column(
        Boolean,
        nullable=False,
        default=False,
        doc="추천 리뷰 여부"
    )
    comment_ids: list = Column(
        JSON,
        nullable=False,
        default=list,
        doc="댓글 ID 목록 (추가 순서)"
    )

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def owner_id(self) -> int:
        return self.author_id
