"""Shared test fixtures: fake backend API and test client."""

import time
from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from app.api.deps import get_http_client
from app.core.config import Settings, get_settings
from app.core.cookies import CookieStore
from app.main import app
from app.services.api_client import ApiClient
from app.services.backend.auth import AuthApi
from app.services.token_manager import SingleFlight, TokenManager

API_BASE = "http://backend.test"


def make_jwt(expires_in: int | None = 900, **claims: Any) -> str:
    payload = dict(claims)
    if expires_in is not None:
        payload["exp"] = int(time.time()) + expires_in
    return jwt.encode(payload, "test-secret", algorithm="HS256")


def cookie_header(access: str | None = None, refresh: str | None = None) -> dict[str, str]:
    parts = []
    if access:
        parts.append(f"accessToken={access}")
    if refresh:
        parts.append(f"refreshToken={refresh}")
    return {"Cookie": "; ".join(parts)} if parts else {}


Handler = Callable[[httpx.Request], Any]


class FakeBackend:
    """Routes ``(method, path)`` to queued responses and records every call."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[httpx.Response | Handler]] = {}
        self.calls: list[httpx.Request] = []

    def on(self, method: str, path: str, *responses: httpx.Response | Handler) -> None:
        self.routes[(method, path)] = list(responses)

    def calls_to(self, method: str, path: str) -> list[httpx.Request]:
        return [c for c in self.calls if c.method == method and c.url.path == path]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"message": f"No route for {request.method} {request.url.path}"})
        # The last response repeats once the queue is drained
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, httpx.Response):
            return item
        result = item(request)
        if not isinstance(result, httpx.Response):
            result = await result
        return result


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        environment="development",
        main_domain="localhost",
        api_base_url=API_BASE,
        api_key="default-key",
        tenant_api_keys={"acme": "acme-key", "beauty-salon": "beauty-key"},
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
async def http(backend: FakeBackend) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(backend)) as client:
        yield client


@pytest.fixture
def cookies() -> CookieStore:
    return CookieStore()


@pytest.fixture
def tokens(cookies: CookieStore, settings: Settings) -> TokenManager:
    return TokenManager(cookies, flight=SingleFlight(), settings=settings)


@pytest.fixture
def api(tokens: TokenManager, http: httpx.AsyncClient, settings: Settings) -> ApiClient:
    """ApiClient wired the same way the request dependencies wire it."""
    client = ApiClient(API_BASE, tokens, http=http)
    tokens.refresher = AuthApi(client, settings).refresh_tokens
    return client


@pytest.fixture
async def client(http: httpx.AsyncClient, settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX async test client against the app, backend calls faked."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = lambda: http
    app.state.refresh_flight = SingleFlight()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://localhost") as ac:
        yield ac

    app.dependency_overrides.clear()
