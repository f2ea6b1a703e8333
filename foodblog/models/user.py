from sqlalchemy import Column, DateTime, Integer, JSON, String, Text

from foodblog.core.database import Base, utcnow


class User(Base):
    """
    서비스 사용자(User) 모델
    - 이메일/비밀번호 또는 Google 로그인으로 생성
    - 프로필, 권한(role), 북마크 및 팔로우 목록을 문서 필드(JSON)로 보관
    - 사용자 삭제 시 연관 리뷰/댓글/좋아요는 정리하지 않음 (참조만 남음)
    """
    __tablename__ = "user"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="사용자 고유 ID"
    )
    username: str = Column(
        String(120),
        nullable=False,
        doc="서비스 내 사용자 이름"
    )
    email: str = Column(
        String(255),
        unique=True,
        nullable=False,
        doc="사용자 이메일(로그인 ID)"
    )
    password: str = Column(
        String(255),
        nullable=True,
        doc="해시 처리된 비밀번호 (Google 전용 계정은 NULL)"
    )
    google_uid: str = Column(
        String(128),
        unique=True,
        nullable=True,
        doc="연동된 Google 계정 subject ID"
    )
    bio: str = Column(
        Text,
        nullable=False,
        default="",
        doc="자기소개"
    )
    avatar_url: str = Column(
        String(512),
        nullable=False,
        default="",
        doc="프로필 이미지 URL"
    )
    role: str = Column(
        String(20),
        nullable=False,
        default="user",
        doc="권한 (user | admin)"
    )

    # 북마크한 리뷰 ID 목록 (배열 멤버십 기준으로 토글)
    bookmarks: list = Column(
        JSON,
        nullable=False,
        default=list,
        doc="북마크한 Blog ID 목록"
    )
    followers: list = Column(
        JSON,
        nullable=False,
        default=list,
        doc="팔로워 User ID 목록"
    )
    following: list = Column(
        JSON,
        nullable=False,
        default=list,
        doc="팔로잉 User ID 목록"
    )

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def owner_id(self) -> int:
        # 프로필 수정/삭제 권한 판단 시 본인이 소유자
        return self.id
