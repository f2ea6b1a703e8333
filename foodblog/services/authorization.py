"""
권한 검사 모듈

- Caller: 요청마다 액세스 토큰으로 확인된 호출자 정보 (핸들러/서비스에 명시적으로 전달)
- Ownable: 소유자 ID를 노출하는 리소스 (Blog, Comment, Notification, User)
- 소유권 규칙: 리소스 소유자 == 호출자 이거나 호출자가 admin
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from foodblog.utils.exceptions import ForbiddenError

ADMIN_ROLE = "admin"
USER_ROLE = "user"


@dataclass(frozen=True)
class Caller:
    id: int
    username: str
    role: str = USER_ROLE

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    @classmethod
    def from_user(cls, user) -> "Caller":
        return cls(id=user.id, username=user.username, role=user.role)


@runtime_checkable
class Ownable(Protocol):
    def owner_id(self) -> int:
        ...


def ensure_owner_or_admin(resource: Ownable, caller: Caller) -> None:
    """
    리소스 소유자가 아니고 관리자도 아니면 ForbiddenError
    """
    if resource.owner_id() != caller.id and not caller.is_admin:
        raise ForbiddenError("Unauthorized")


def ensure_admin(caller: Caller) -> None:
    if not caller.is_admin:
        raise ForbiddenError("Admin access required")
