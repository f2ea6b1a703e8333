from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from foodblog.schemas.user_schema import UserSummary

# ─── 리뷰(Blog) 관련 요청/응답 스키마 정의 ─────────────────────────────────────


class BlogData(BaseModel):
    """
    리뷰 생성/수정 요청의 `data` 폼 필드(JSON 문자열) 내용
    - 생성 시 필수 여부(title, content, restaurant, rating)는 서비스에서 검사
    - tags: 배열 또는 콤마 구분 문자열
    - images: 수정 시 유지할 기존 이미지 URL 목록
    """
    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Tacos",
                "content": "Great",
                "restaurant": "Taco Hut",
                "location": "Seoul",
                "rating": 5,
                "tags": "mexican, spicy",
                "category": "Mexican",
            }
        },
    )

    title:      Optional[str] = None
    content:    Optional[str] = None
    restaurant: Optional[str] = None
    location:   Optional[str] = None
    rating:     Optional[Any] = None
    tags:       Optional[Any] = None
    category:   Optional[str] = None
    images:     Optional[List[str]] = None
    is_featured: Optional[bool] = None


class CommentView(BaseModel):
    """
    리뷰 응답에 포함되는 댓글
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    blog_id: int
    content: str
    user: Optional[UserSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BlogResponse(BaseModel):
    """
    리뷰 응답 모델
    - totalLikes/hasLiked/isBookmarked는 요청 시점에 계산된 파생 값
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    content: str
    restaurant: str
    location: str = ""
    rating: float
    tags: List[str] = Field(default_factory=list)
    category: str = ""
    images: List[str] = Field(default_factory=list)
    author: Optional[UserSummary] = None
    is_featured: bool = False
    comments: List[CommentView] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    total_likes: int = 0
    has_liked: bool = False
    is_bookmarked: bool = False


class BlogMutationResponse(BaseModel):
    message: str = Field(..., description="응답 메시지")
    blog: BlogResponse


class BookmarkResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    is_bookmarked: bool
