"""
Shared fixtures.

- In-memory SQLite database per test
- FakeStrava: httpx.MockTransport standing in for strava.com
- API client with database and Strava dependencies overridden
"""

import json
import time
from collections.abc import AsyncGenerator
from typing import Any, Optional

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from macroclaw.api.deps import get_strava_client, get_strava_oauth
from macroclaw.config import Settings
from macroclaw.db.session import get_async_db
from macroclaw.features.strava import StravaClient, StravaOAuth
from macroclaw.features.strava import tokens
from macroclaw.features.users import User
from macroclaw.main import app
from macroclaw.models import Base, register_models

register_models()

USER_ID = "11111111-1111-1111-1111-111111111111"
ATHLETE_ID = 4242


# =============================================================================
# Fake Strava
# =============================================================================

class FakeStrava:
    """
    Minimal Strava: token endpoint, activities listing, deauthorize.

    Every request is recorded so tests can count calls per endpoint.
    """

    TOKEN_PATH = "/oauth/token"
    ACTIVITIES_PATH = "/api/v3/athlete/activities"
    DEAUTHORIZE_PATH = "/oauth/deauthorize"

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.activities: list[dict] = []
        self.token_status = 200
        self.activities_status = 200
        self.deauthorize_status = 200
        self.expires_in = 3600
        self._issued = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == self.TOKEN_PATH:
            if self.token_status != 200:
                return httpx.Response(
                    self.token_status,
                    json={"message": "Bad Request", "errors": [{"code": "invalid"}]}
                )
            body = json.loads(request.content)
            self._issued += 1
            payload: dict[str, Any] = {
                "token_type": "Bearer",
                "access_token": f"access-{self._issued}",
                "refresh_token": f"refresh-{self._issued}",
                "expires_at": int(time.time()) + self.expires_in,
            }
            if body["grant_type"] == "authorization_code":
                payload["athlete"] = {"id": ATHLETE_ID, "firstname": "Ada", "lastname": "L"}
            return httpx.Response(200, json=payload)

        if path == self.ACTIVITIES_PATH:
            if self.activities_status != 200:
                return httpx.Response(self.activities_status, json={"message": "Server Error"})
            per_page = int(request.url.params.get("per_page", 30))
            return httpx.Response(200, json=self.activities[:per_page])

        if path == self.DEAUTHORIZE_PATH:
            return httpx.Response(self.deauthorize_status, json={})

        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def token_calls(self, grant_type: Optional[str] = None) -> list[httpx.Request]:
        calls = self.calls(self.TOKEN_PATH)
        if grant_type:
            calls = [r for r in calls if json.loads(r.content)["grant_type"] == grant_type]
        return calls

    def activity_calls(self) -> list[httpx.Request]:
        return self.calls(self.ACTIVITIES_PATH)


def make_raw_activity(**overrides) -> dict:
    """Strava /athlete/activities item."""
    activity = {
        "id": 1001,
        "name": "Morning Run",
        "sport_type": "Run",
        "type": "Run",
        "start_date": "2026-10-18T06:30:00Z",
        "moving_time": 1800,
        "elapsed_time": 1900,
        "distance": 5000.0,
        "total_elevation_gain": 42.0,
        "average_heartrate": 151.6,
        "average_speed": 2.7778,
    }
    activity.update(overrides)
    return activity


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        strava_client_id="12345",
        strava_client_secret="shh",
        strava_redirect_uri="http://localhost:8000/api/v1/strava/callback",
        app_url="http://localhost:3000",
    )


@pytest.fixture
def fake_strava() -> FakeStrava:
    return FakeStrava()


@pytest.fixture
def oauth(test_settings, fake_strava) -> StravaOAuth:
    return StravaOAuth(settings=test_settings, transport=fake_strava.transport)


@pytest.fixture
def strava_client(test_settings, fake_strava) -> StravaClient:
    return StravaClient(settings=test_settings, transport=fake_strava.transport)


@pytest.fixture(autouse=True)
def reset_refresh_locks():
    tokens._refresh_locks.clear()
    yield
    tokens._refresh_locks.clear()


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def user(db) -> User:
    user = User(id=USER_ID, email="ada@example.com", name="Ada")
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def client(session_factory, oauth, strava_client) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_get_db
    app.dependency_overrides[get_strava_oauth] = lambda: oauth
    app.dependency_overrides[get_strava_client] = lambda: strava_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
