import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.core.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    hash_password,
    verify_password,
)
from foodblog.models.user import User
from foodblog.repositories.token_repository import TokenRepository
from foodblog.repositories.user_repository import UserRepository
from foodblog.services.authorization import USER_ROLE
from foodblog.services.identity_verifier import IdentityVerifier
from foodblog.utils.exceptions import (
    AuthProviderError,
    BadRequestError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


class AuthService:
    """
    인증 관련 서비스 클래스
    - 회원가입, 로그인, 토큰 재발급, 로그아웃, Google 로그인
    - 리프레시 토큰은 사용자당 1건만 저장 (새 로그인 시 이전 세션 무효화)
    """
    def __init__(
        self,
        db: AsyncSession,
        identity_verifier: Optional[IdentityVerifier] = None,
    ):
        self.db = db
        self.user_repo = UserRepository(db)
        self.token_repo = TokenRepository(db)
        self.identity_verifier = identity_verifier

    @staticmethod
    def issue_access_token(user: User) -> str:
        return create_access_token(user.id, user.role)

    async def issue_refresh_token(self, user: User) -> str:
        """
        리프레시 토큰 발급 후 사용자 세션 레코드에 upsert (이전 토큰은 덮어써서 폐기)
        """
        refresh_token = create_refresh_token(user.id)
        await self.token_repo.upsert(user.id, refresh_token)
        await self.db.commit()
        return refresh_token

    async def register(self, username: str, email: str, password: str) -> User:
        """
        이메일 회원가입
        1) 이메일 중복 체크
        2) 비밀번호 해시 후 User 저장 (기본 권한 user)
        """
        if await self.user_repo.find_by_email(email):
            raise BadRequestError("Email already in use")

        user = User(
            username=username,
            email=email,
            password=hash_password(password),
            role=USER_ROLE,
        )
        await self.user_repo.create_user(user)
        try:
            await self.db.commit()
        except Exception as e:
            logger.error("회원가입 커밋 실패: %s", e)
            await self.db.rollback()
            raise
        await self.db.refresh(user)
        logger.info("신규 사용자 가입: id=%s", user.id)
        return user

    async def login(self, email: str, password: str) -> dict:
        """
        이메일/비밀번호 로그인
        - 이메일 없음: NotFoundError(404)
        - 비밀번호 불일치: InvalidCredentialsError(400)
        """
        user = await self.user_repo.find_by_email(email)
        if not user:
            logger.info("로그인 실패: 존재하지 않는 이메일")
            raise NotFoundError("User not found")
        if not verify_password(password, user.password):
            logger.info("로그인 실패: 비밀번호 불일치 (user=%s)", user.id)
            raise InvalidCredentialsError("Invalid credentials")

        access_token = self.issue_access_token(user)
        refresh_token = await self.issue_refresh_token(user)
        return {
            "access_token": access_token,
            "refresh_token": refresh_token,
            "user": user,
        }

    async def refresh(self, refresh_token: Optional[str]) -> str:
        """
        리프레시 토큰으로 새 액세스 토큰 발급 (리프레시 토큰은 회전하지 않음)
        1) 쿠키 없음: UnauthorizedError
        2) 서명/만료 오류, 사용자 없음, 저장된 토큰과 불일치: InvalidTokenError
        """
        if not refresh_token:
            raise UnauthorizedError("No refresh token")

        payload = decode_refresh_token(refresh_token)
        user = await self.user_repo.find_by_id(payload.user_id)
        if not user:
            raise InvalidTokenError("Invalid token")

        # 로그아웃으로 삭제됐거나 다른 기기 로그인으로 덮어써진 토큰은 거부
        record = await self.token_repo.find_by_user_id(user.id)
        if not record or record.refresh_token != refresh_token:
            logger.info("폐기된 리프레시 토큰 사용 시도 (user=%s)", user.id)
            raise InvalidTokenError("Invalid token")

        return self.issue_access_token(user)

    async def logout(self, refresh_token: Optional[str]) -> None:
        """
        저장된 리프레시 토큰 레코드 삭제 (없어도 오류 아님)
        """
        if not refresh_token:
            return
        deleted = await self.token_repo.delete_by_token(refresh_token)
        await self.db.commit()
        logger.info("로그아웃 처리 (삭제된 세션 %d건)", deleted)

    async def federated_sign_in(self, id_token: Optional[str]) -> dict:
        """
        Google ID 토큰 로그인
        1) IdentityVerifier로 토큰 검증 (실패 시 AuthProviderError)
        2) 이메일로 사용자 조회, 없으면 생성 (username: 표시 이름 또는 이메일 로컬 파트)
        3) 기존 사용자에 google_uid가 없으면 연결 (기존 연결은 덮어쓰지 않음)
        4) 액세스 토큰만 발급 (리프레시 토큰/쿠키 없음)
        """
        if not id_token:
            raise BadRequestError("No ID token provided")
        if self.identity_verifier is None:
            raise AuthProviderError("Google authentication failed: verifier not configured")

        claims = await self.identity_verifier.verify(id_token)

        user = await self.user_repo.find_by_email(claims.email)
        if not user:
            user = User(
                username=claims.name or claims.email.split("@")[0],
                email=claims.email,
                google_uid=claims.uid,
                role=USER_ROLE,
            )
            await self.user_repo.create_user(user)
            await self.db.commit()
            await self.db.refresh(user)
            logger.info("Google 로그인으로 신규 사용자 생성: id=%s", user.id)
        elif not user.google_uid:
            user.google_uid = claims.uid
            await self.db.commit()
            logger.info("기존 사용자에 Google 계정 연결: id=%s", user.id)

        return {
            "access_token": self.issue_access_token(user),
            "user": user,
        }
