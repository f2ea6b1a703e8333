import asyncio
import inspect
import json
import os
import tempfile
from dataclasses import dataclass
from typing import Dict, List, Optional

# Point the app at a throwaway SQLite database before foodblog is imported
_test_tmp_dir = tempfile.mkdtemp(prefix="foodblog_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_test_tmp_dir, 'test.db')}"
os.environ.setdefault("JWT_SECRET_KEY", "test-access-secret-do-not-use-in-production")
os.environ.setdefault("JWT_REFRESH_SECRET_KEY", "test-refresh-secret-do-not-use-in-production")
os.environ.setdefault("IMGBB_API_KEY", "test-imgbb-key")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import update  # noqa: E402

from foodblog.core.database import Base, async_engine, import_models  # noqa: E402
from foodblog.dependencies import get_identity_verifier, get_image_host  # noqa: E402
from foodblog.main import app  # noqa: E402
from foodblog.models.user import User  # noqa: E402
from foodblog.services.identity_verifier import IdentityClaims  # noqa: E402
from foodblog.services.image_host import UploadedImage  # noqa: E402
from foodblog.utils.exceptions import AuthProviderError  # noqa: E402

BASE_URL = "https://testserver"


async def _reset_schema() -> None:
    import_models()
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def _set_role(user_id: int, role: str) -> None:
    async with async_engine.begin() as conn:
        await conn.execute(update(User).where(User.id == user_id).values(role=role))


@pytest.fixture(autouse=True)
def reset_db():
    asyncio.run(_reset_schema())
    yield


class FakeIdentityVerifier:
    """Accepts only the ID tokens registered in `tokens`."""

    def __init__(self):
        self.tokens: Dict[str, IdentityClaims] = {}

    async def verify(self, id_token: str) -> IdentityClaims:
        claims = self.tokens.get(id_token)
        if claims is None:
            raise AuthProviderError("Google authentication failed: invalid ID token")
        return claims


class FakeImageHost:
    """Records uploads and returns deterministic URLs without network access."""

    def __init__(self):
        self.uploaded: List[UploadedImage] = []

    async def upload(self, image: UploadedImage) -> str:
        self.uploaded.append(image)
        return f"https://i.ibb.co/test/{image.filename}"

    async def upload_many(self, images) -> List[str]:
        return [await self.upload(image) for image in images]


@pytest.fixture
def identity_verifier():
    return FakeIdentityVerifier()


@pytest.fixture
def image_host():
    return FakeImageHost()


@pytest.fixture
def client(identity_verifier, image_host):
    app.dependency_overrides[get_identity_verifier] = lambda: identity_verifier
    app.dependency_overrides[get_image_host] = lambda: image_host
    with TestClient(app, base_url=BASE_URL) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@dataclass
class Account:
    id: int
    username: str
    email: str
    password: str
    token: str

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture
def make_user(client):
    """Register and log in a user through the API; `role="admin"` promotes it first."""

    def _make(username: str, role: str = "user", password: str = "pw123",
              email: Optional[str] = None) -> Account:
        email = email or f"{username}@example.com"
        resp = client.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        if role != "user":
            user_id = client.post(
                "/api/auth/login", json={"email": email, "password": password}
            ).json()["user"]["id"]
            asyncio.run(_set_role(user_id, role))
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        body = resp.json()
        return Account(
            id=body["user"]["id"],
            username=username,
            email=email,
            password=password,
            token=body["accessToken"],
        )

    return _make


@pytest.fixture
def create_review(client):
    """Create a review as `account` and return the response body's `blog`."""

    def _create(account: Account, **fields) -> dict:
        data = {
            "title": "Tacos",
            "content": "Great",
            "restaurant": "Taco Hut",
            "rating": 5,
        }
        data.update(fields)
        resp = client.post(
            "/api/blogs",
            data={"data": json.dumps(data)},
            headers=account.headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["blog"]

    return _create


def pytest_pyfunc_call(pyfuncitem):
    if inspect.iscoroutinefunction(pyfuncitem.obj):
        call_kwargs = {
            name: pyfuncitem.funcargs[name]
            for name in pyfuncitem._fixtureinfo.argnames
            if name in pyfuncitem.funcargs
        }
        asyncio.run(pyfuncitem.obj(**call_kwargs))
        return True
    return None


def pytest_configure(config):
    config.addinivalue_line("markers", "asyncio: mark test as async")
