from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from foodblog.schemas.user_schema import UserSummary

# ─── 좋아요 관련 응답 스키마 정의 ─────────────────────────────────────────

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ToggleLikeResponse(BaseModel):
    """
    좋아요 토글 응답
    - totalLikes는 토글 후 좋아요 행을 다시 센 값
    """
    model_config = _camel

    message: str
    total_likes: int = Field(..., description="현재 좋아요 수")
    liked: bool = Field(..., description="토글 후 좋아요 상태")


class LikeCountResponse(BaseModel):
    model_config = _camel

    total_likes: int


class LikeStatusResponse(BaseModel):
    liked: bool


class LikedUsersResponse(BaseModel):
    users: List[UserSummary] = Field(default_factory=list)
