from __future__ import annotations

import asyncio
import os
import tempfile
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

_TMP_DIR = tempfile.mkdtemp(prefix="tip_service_tests_")

# app.config는 import 시점에 환경 변수를 읽으므로 먼저 설정한다.
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'startup.db')}"
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "app.log")
os.environ["SESSION_SECRET"] = "test-secret"
os.environ["CLIENT_URL"] = "http://client.test"
os.environ["GOOGLE_CLIENT_ID"] = "google-client"
os.environ["GOOGLE_CLIENT_SECRET"] = "google-secret"
os.environ["NAVER_CLIENT_ID"] = "naver-client"
os.environ["NAVER_CLIENT_SECRET"] = "naver-secret"

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool  # noqa: E402

from app.database import Base  # noqa: E402
from app.models import Restaurant, RestaurantSubmission, User  # noqa: E402, F401
from app.utils.db import get_db  # noqa: E402
from app.utils.http import get_async_client  # noqa: E402
from main import app  # noqa: E402


class FakeOAuthProvider:
    """구글/네이버 토큰·프로필 엔드포인트 흉내"""

    def __init__(self):
        self.google_profile = {
            "sub": "g-123",
            "email": "google@example.com",
            "name": "구글 사용자",
        }
        self.naver_profile = {
            "resultcode": "00",
            "message": "success",
            "response": {"id": "n-456", "email": "naver@example.com", "name": "네이버 사용자"},
        }
        self.token_status = 200
        self.token_text = None
        self.requests: list[httpx.Request] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/token"):
            if self.token_text is not None:
                return httpx.Response(200, text=self.token_text)
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "server_error"})
            return httpx.Response(
                200, json={"access_token": "token-abc", "token_type": "Bearer"}
            )
        if request.url.host == "openidconnect.googleapis.com":
            return httpx.Response(200, json=self.google_profile)
        if request.url.host == "openapi.naver.com":
            return httpx.Response(200, json=self.naver_profile)
        return httpx.Response(404)


async def _create_schema(engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def session_factory(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool
    )
    asyncio.run(_create_schema(engine))
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    asyncio.run(engine.dispose())


@pytest.fixture
def oauth_provider():
    return FakeOAuthProvider()


@pytest.fixture
def client(session_factory, oauth_provider):
    async def override_get_db():
        async with session_factory() as db:
            yield db

    async def override_get_async_client():
        transport = httpx.MockTransport(oauth_provider.handle)
        async with httpx.AsyncClient(transport=transport) as http_client:
            yield http_client

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_async_client] = override_get_async_client
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def run_db(session_factory):
    """세션을 받아 코루틴을 실행하는 헬퍼: run_db(lambda db: service(db, ...))"""

    def _run(func):
        async def _inner():
            async with session_factory() as db:
                return await func(db)

        return asyncio.run(_inner())

    return _run


def start_oauth(client, provider: str) -> str:
    """소셜 로그인 시작 요청을 보내고 세션에 저장된 state 값을 돌려준다."""
    resp = client.get(f"/api/auth/{provider}", follow_redirects=False)
    assert resp.status_code == 302
    return parse_qs(urlparse(resp.headers["location"]).query)["state"][0]
