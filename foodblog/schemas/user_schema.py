from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from foodblog.core.config import settings

# ─── 사용자 관련 요청/응답 스키마 정의 ───────────────────────────────────


class UserSummary(BaseModel):
    """
    작성자/댓글 작성자/로그인 응답에 포함되는 공개 사용자 요약
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int = Field(..., description="사용자 ID")
    username: str = Field(..., description="사용자 이름")
    avatar_url: str = Field("", description="프로필 이미지 URL")
    role: Optional[str] = Field(None, description="권한 (user | admin)")
    email: Optional[str] = Field(None, description="이메일 (Google 로그인 응답에만 포함)")

    @classmethod
    def of(cls, user, *, with_role: bool = False, with_email: bool = False) -> "UserSummary":
        return cls(
            id=user.id,
            username=user.username,
            avatar_url=user.avatar_url or settings.DEFAULT_AVATAR_URL,
            role=user.role if with_role else None,
            email=user.email if with_email else None,
        )


class UserProfileResponse(BaseModel):
    """
    사용자 프로필 응답 모델 (비밀번호 해시 제외)
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    username: str
    email: str
    bio: str = ""
    avatar_url: str = ""
    role: str
    bookmarks: List[int] = Field(default_factory=list)
    followers: List[int] = Field(default_factory=list)
    following: List[int] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpdateData(BaseModel):
    """
    프로필 수정 요청의 `data` 폼 필드(JSON 문자열) 내용
    """
    model_config = ConfigDict(extra="ignore")

    username: Optional[str] = Field(None, description="새 사용자 이름")
    bio: Optional[str] = Field(None, description="새 자기소개")
