import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import google.auth.exceptions
import google.auth.transport
import google.auth.transport.requests
from google.oauth2 import id_token as google_id_token

from foodblog.utils.exceptions import AuthProviderError

logger = logging.getLogger(__name__)

FIREBASE_ISSUER = "https://securetoken.google.com/{project_id}"


@dataclass(frozen=True)
class IdentityClaims:
    """
    외부 ID 제공자가 검증한 신원 정보
    """
    email: str
    uid: str
    name: Optional[str] = None


class IdentityVerifier(Protocol):
    async def verify(self, id_token: str) -> IdentityClaims:
        ...


class FirebaseIdentityVerifier:
    """
    Firebase(Google 로그인) ID 토큰 검증기
    - google-auth로 securetoken 공개 인증서 서명/만료/aud(프로젝트 ID) 검증
    - iss가 해당 프로젝트의 securetoken 발급자인지 확인
    - 검증 자체는 동기 호출이므로 asyncio.to_thread 로 감싸서 사용
    """
    def __init__(
        self,
        project_id: Optional[str],
        request: Optional[google.auth.transport.Request] = None,
        clock_skew_seconds: int = 10,
    ):
        self.project_id = project_id
        self.clock_skew_seconds = clock_skew_seconds
        self._request = request or google.auth.transport.requests.Request()

    def _verify_signature(self, id_token: str) -> dict:
        return google_id_token.verify_firebase_token(
            id_token,
            self._request,
            audience=self.project_id,
            clock_skew_in_seconds=self.clock_skew_seconds,
        )

    async def verify(self, id_token: str) -> IdentityClaims:
        """
        1) 서명/만료/aud 검증 (실패 시 AuthProviderError)
        2) iss, email_verified, 필수 클레임 확인
        3) IdentityClaims 반환
        """
        if not self.project_id:
            raise AuthProviderError("Google authentication failed: verifier not configured")

        try:
            data = await asyncio.to_thread(self._verify_signature, id_token)
        except (ValueError, google.auth.exceptions.GoogleAuthError) as e:
            logger.warning("Firebase ID 토큰 검증 실패: %s", e)
            raise AuthProviderError(f"Google authentication failed: {e}")

        if data.get("iss") != FIREBASE_ISSUER.format(project_id=self.project_id):
            raise AuthProviderError("Google authentication failed: issuer mismatch")
        if data.get("email_verified") is False:
            raise AuthProviderError("Google authentication failed: email not verified")

        email = data.get("email")
        uid = data.get("sub")
        if not email or not uid:
            raise AuthProviderError("Google authentication failed: missing claims")

        return IdentityClaims(email=email, uid=uid, name=data.get("name") or None)
