from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ─── 알림 관련 응답 스키마 정의 ───────────────────────────────────────────


class NotificationSender(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    username: str
    avatar_url: str = ""


class NotificationBlog(BaseModel):
    id: int
    title: str


class NotificationResponse(BaseModel):
    """
    알림 응답 모델
    - sender/blog는 삭제된 경우 null
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    recipient_id: int
    sender: Optional[NotificationSender] = None
    blog: Optional[NotificationBlog] = None
    blog_id: int
    type: str = Field(..., description="like | comment")
    message: str
    is_read: bool = False
    created_at: Optional[datetime] = None
