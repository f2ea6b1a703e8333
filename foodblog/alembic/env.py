import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from dotenv import load_dotenv


# 환경 변수 로딩
ENV_PATH = os.path.join(os.path.dirname(__file__), '..', 'config', 'settings.env')


def load_environment(env_path: str = ENV_PATH) -> None:
    """
    settings.env 파일이 있으면 읽어 환경 변수를 설정 (이미 설정된 값은 유지)
    """
    load_dotenv(env_path, override=False)


def build_database_url() -> str:
    """
    앱 설정과 같은 규칙으로 DB URL을 결정한 뒤 동기 드라이버 URL로 변환
    """
    from foodblog.core.config import get_settings

    return convert_async_to_sync(get_settings().SQLALCHEMY_DATABASE_URI)


def convert_async_to_sync(url: str) -> str:
    """
    비동기 드라이버 접두어를 동기 커넥터로 변경
    - mysql+asyncmy → mysql+pymysql
    - sqlite+aiosqlite → sqlite
    """
    for async_prefix, sync_prefix in (
        ('mysql+asyncmy://', 'mysql+pymysql://'),
        ('sqlite+aiosqlite://', 'sqlite://'),
    ):
        if url.startswith(async_prefix):
            return url.replace(async_prefix, sync_prefix, 1)
    return url


# .env 로드
load_environment()

# 알렘빅 설정 객체 가져오기
alembic_cfg = context.config
if alembic_cfg.config_file_name:
    fileConfig(alembic_cfg.config_file_name)

# SQLAlchemy URL 설정
alembic_cfg.set_main_option('sqlalchemy.url', build_database_url())

# 메타데이터 바인딩
from foodblog.core.database import Base, import_models  # noqa: E402

import_models()
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """
    오프라인 모드에서 SQL 스크립트를 생성
    """
    url = alembic_cfg.get_main_option('sqlalchemy.url')
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={'paramstyle': 'named'},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    온라인 모드에서 데이터베이스에 직접 연결하여 마이그레이션을 실행
    """
    connectable = engine_from_config(
        alembic_cfg.get_section(alembic_cfg.config_ini_section),
        prefix='sqlalchemy.',
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


# 엔트리포인트
if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
