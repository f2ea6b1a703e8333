from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from pathlib import Path
from functools import lru_cache
from typing import List, Optional

# 프로젝트 루트 디렉토리
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    애플리케이션 환경 설정 모델
    - config/settings.env 파일이 있으면 자동 로드 (없으면 환경 변수와 기본값 사용)
    """
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / "config" / "settings.env"),
        env_file_encoding="utf-8",
        extra='ignore',
    )

    # Security & JWT
    JWT_SECRET_KEY: str = Field(
        "dev-access-secret-change-me",
        description="액세스 토큰 서명 키",
    )
    JWT_REFRESH_SECRET_KEY: str = Field(
        "dev-refresh-secret-change-me",
        description="리프레시 토큰 서명 키 (액세스 토큰과 별도)",
    )
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRES_MINUTES: int = Field(
        60,
        description="액세스 토큰 만료 시간(분)",
    )
    JWT_REFRESH_TOKEN_EXPIRES_DAYS: int = Field(
        7,
        description="리프레시 토큰 만료 시간(일)",
    )
    BCRYPT_ROUNDS: int = Field(10, description="bcrypt cost factor")

    # Refresh cookie
    REFRESH_COOKIE_NAME: str = "refreshToken"
    COOKIE_SECURE: bool = True
    COOKIE_SAMESITE: str = "none"

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="허용할 프론트엔드 도메인 목록",
    )

    # Database
    DB_USER:     str = "foodblog"
    DB_PASSWORD: str = "foodblog_pw"
    DB_HOST:     str = "localhost"
    DB_PORT:     int = 3306
    DB_NAME:     str = "foodblog"
    DATABASE_URL: Optional[str] = Field(
        None,
        description="전체 DB 연결 URL (우선순위: env > 자동 조합)",
        validate_default=True,
    )

    # Google 로그인 (Firebase ID 토큰 검증)
    FIREBASE_PROJECT_ID: Optional[str] = Field(
        None,
        description="ID 토큰의 aud/iss 검증에 쓰는 Firebase 프로젝트 ID",
    )

    # 이미지 호스팅 (ImgBB)
    IMGBB_API_KEY: Optional[str] = None
    IMGBB_UPLOAD_URL: str = "https://api.imgbb.com/1/upload"
    IMAGE_UPLOAD_TIMEOUT_SECONDS: float = 60.0
    IMAGE_UPLOAD_RETRIES: int = 3
    IMAGE_UPLOAD_RETRY_DELAY_SECONDS: float = 1.0
    IMAGE_MAX_BYTES: int = 32 * 1024 * 1024

    DEFAULT_AVATAR_URL: str = "/api/placeholder/32/32"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def _assemble_database_url(cls, v: Optional[str], info) -> str:
        """
        DATABASE_URL이 설정되어 있으면 그대로 사용하고, 없으면 개별 DB 설정값으로 URL을 조합
        """
        if v:
            return v
        values = info.data
        user = values.get("DB_USER")
        pw   = values.get("DB_PASSWORD")
        host = values.get("DB_HOST")
        port = values.get("DB_PORT")
        name = values.get("DB_NAME")
        return f"mysql+asyncmy://{user}:{pw}@{host}:{port}/{name}?charset=utf8mb4"

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """
        SQLAlchemy가 기대하는 이름의 DB 연결 문자열을 반환
        """
        return self.DATABASE_URL  # 항상 존재함


@lru_cache()
def get_settings() -> Settings:
    """
    Settings 인스턴스를 싱글톤으로 반환
    최초 호출 시 객체를 생성하고, 이후 캐싱된 인스턴스를 반환
    """
    return Settings()

# 전역 설정 인스턴스
settings = get_settings()
