from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from foodblog.core.database import MAX_ID
from foodblog.schemas.blog_schema import CommentView

# ─── 댓글 관련 요청/응답 스키마 정의 ─────────────────────────────────────


class CommentCreateRequest(BaseModel):
    """
    댓글 생성 요청 모델
    - 내용이 비어 있는지는 서비스에서 검사
    """
    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"example": {"blogId": 1, "content": "Looks tasty!"}},
    )

    blog_id: int = Field(..., ge=1, le=MAX_ID, description="댓글을 달 리뷰 ID")
    content: Optional[str] = Field(None, description="댓글 내용")


class CommentUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: Optional[str] = Field(None, description="새 댓글 내용")


class CommentMutationResponse(BaseModel):
    message: str = Field(..., description="응답 메시지")
    comment: CommentView
