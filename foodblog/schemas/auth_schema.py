from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from foodblog.schemas.user_schema import UserSummary

# ─── 인증 관련 요청/응답 스키마 정의 ─────────────────────────────────────


class RegisterRequest(BaseModel):
    """
    회원가입 요청 모델
    - 유저명, 이메일, 비밀번호
    """
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "username": "alice",
                "email":    "alice@example.com",
                "password": "pw1",
            }
        },
    )

    username: str      = Field(..., min_length=1, description="사용자 이름")
    email:    EmailStr = Field(..., description="이메일 주소")
    password: str      = Field(..., min_length=1, description="비밀번호")


class LoginRequest(BaseModel):
    """
    로그인 요청 모델
    """
    model_config = ConfigDict(extra="ignore")
    email:    EmailStr = Field(..., description="로그인용 이메일 주소")
    password: str      = Field(..., min_length=1, description="비밀번호")


class GoogleSignInRequest(BaseModel):
    """
    Google 로그인 요청 모델 (클라이언트가 받은 ID 토큰)
    """
    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)
    id_token: str = Field("", description="Google ID 토큰")


class LoginResponse(BaseModel):
    """
    로그인 응답 모델
    - 리프레시 토큰은 본문이 아닌 HttpOnly 쿠키로 전달
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str = Field(..., description="Access Token")
    user: UserSummary


class AccessTokenResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str = Field(..., description="새 Access Token")


class MessageResponse(BaseModel):
    """
    단순 메시지 응답 모델
    """
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {"message": "Logged out"}
        },
    )

    message: str = Field(..., description="응답 메시지")
