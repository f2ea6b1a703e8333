"""
비밀번호 해시 및 JWT 발급/검증 유틸리티

- 액세스 토큰: {sub, role, type=access}, 1시간, JWT_SECRET_KEY로 서명
- 리프레시 토큰: {sub, jti, type=refresh}, 7일, JWT_REFRESH_SECRET_KEY로 서명
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from foodblog.core.config import settings
from foodblog.utils.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenPayload(BaseModel):
    """
    JWT 토큰 페이로드 모델
    - sub: 사용자 ID (문자열)
    - role: 권한 (액세스 토큰에만 포함)
    - jti: 토큰 식별자 (리프레시 토큰에만 포함)
    """
    sub: str
    type: str
    role: Optional[str] = None
    jti: Optional[str] = None

    @property
    def user_id(self) -> int:
        return int(self.sub)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: Optional[str]) -> bool:
    """
    평문 비밀번호와 저장된 해시를 비교
    - 비밀번호가 없는 계정(Google 전용)은 항상 실패
    """
    if not hashed:
        return False
    return pwd_context.verify(password, hashed)


def create_access_token(user_id: int, role: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role,
        "type": ACCESS_TOKEN_TYPE,
        "iat": now,
        "exp": now + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRES_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_refresh_token(user_id: int) -> str:
    # 같은 초에 두 번 발급돼도 서로 다른 토큰이 되도록 jti 부여
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "type": REFRESH_TOKEN_TYPE,
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": now + timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRES_DAYS),
    }
    return jwt.encode(payload, settings.JWT_REFRESH_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def _decode(token: str, secret: str, expected_type: str) -> TokenPayload:
    """
    토큰 서명/만료/종류를 검증하여 TokenPayload 반환
    Raises:
        InvalidTokenError: 디코딩 실패, 필수 클레임 누락, 종류 불일치
    """
    try:
        payload_data = jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
        token_payload = TokenPayload(**payload_data)
    except (JWTError, ValueError) as e:
        logger.warning("유효하지 않은 %s 토큰: %s", expected_type, e)
        raise InvalidTokenError("Invalid token")

    if token_payload.type != expected_type or not token_payload.sub.isdigit():
        logger.warning("토큰 종류/subject 불일치 (expected=%s)", expected_type)
        raise InvalidTokenError("Invalid token")
    return token_payload


def decode_access_token(token: str) -> TokenPayload:
    return _decode(token, settings.JWT_SECRET_KEY, ACCESS_TOKEN_TYPE)


def decode_refresh_token(token: str) -> TokenPayload:
    return _decode(token, settings.JWT_REFRESH_SECRET_KEY, REFRESH_TOKEN_TYPE)
