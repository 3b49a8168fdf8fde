"""Access / refresh token lifecycle backed by the request's cookie store."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from datetime import timedelta
from enum import StrEnum
from typing import Any, TypeVar

from app.core.config import Settings, get_settings
from app.core.cookies import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE, CookieStore
from app.core.errors import RefreshError
from app.core.security import decode_untrusted_claims, is_token_expired

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


Refresher = Callable[[str], Awaitable[TokenPair]]


class TokenState(StrEnum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    STALE = "stale"  # access token gone or expired, refresh token still there


class SingleFlight:
    """Collapse concurrent calls for the same key into one underlying call.

    Every caller awaiting a key while its call is running gets that call's
    result (or exception). The entry is dropped as soon as the call settles,
    so the next caller starts a fresh one.
    """

    def __init__(self) -> None:
        self._calls: dict[Hashable, asyncio.Task[Any]] = {}

    def in_flight(self, key: Hashable) -> bool:
        return key in self._calls

    async def do(self, key: Hashable, fn: Callable[[], Awaitable[T]]) -> T:
        task = self._calls.get(key)
        if task is None:
            task = asyncio.ensure_future(self._run(key, fn))
            self._calls[key] = task
        # A cancelled caller must not cancel the call the others are waiting on
        return await asyncio.shield(task)

    async def _run(self, key: Hashable, fn: Callable[[], Awaitable[T]]) -> T:
        try:
            return await fn()
        finally:
            self._calls.pop(key, None)


class TokenManager:
    def __init__(
        self,
        cookies: CookieStore,
        *,
        refresher: Refresher | None = None,
        flight: SingleFlight | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.cookies = cookies
        self.refresher = refresher
        self.flight = flight or SingleFlight()
        self.settings = settings or get_settings()

    # ── Storage ─────────────────────────────────────────────

    def get_access_token(self) -> str | None:
        return self.cookies.get(ACCESS_TOKEN_COOKIE)

    def get_refresh_token(self) -> str | None:
        return self.cookies.get(REFRESH_TOKEN_COOKIE)

    def set_tokens(self, access_token: str, refresh_token: str) -> None:
        """Overwrite both cookies (called after login, register and refresh)."""
        secure = self.settings.secure_cookies
        self.cookies.set(
            ACCESS_TOKEN_COOKIE,
            access_token,
            max_age=timedelta(minutes=self.settings.access_token_minutes),
            secure=secure,
            samesite="strict",
        )
        self.cookies.set(
            REFRESH_TOKEN_COOKIE,
            refresh_token,
            max_age=timedelta(days=self.settings.refresh_token_days),
            secure=secure,
            samesite="strict",
        )

    def clear_tokens(self) -> None:
        self.cookies.delete(ACCESS_TOKEN_COOKIE)
        self.cookies.delete(REFRESH_TOKEN_COOKIE)

    # ── Inspection ──────────────────────────────────────────

    def is_authenticated(self) -> bool:
        """Presence check only; expiry is not looked at."""
        return bool(self.get_access_token()) or bool(self.get_refresh_token())

    def state(self) -> TokenState:
        access = self.get_access_token()
        if access and not is_token_expired(access):
            return TokenState.AUTHENTICATED
        if self.get_refresh_token():
            return TokenState.STALE
        return TokenState.UNAUTHENTICATED

    @staticmethod
    def decode_untrusted_claims(token: str) -> dict[str, Any] | None:
        return decode_untrusted_claims(token)

    @staticmethod
    def is_token_expired(token: str) -> bool:
        return is_token_expired(token)

    def get_user_from_token(self) -> dict[str, Any] | None:
        token = self.get_access_token()
        if not token:
            return None
        return decode_untrusted_claims(token)

    # ── Refresh ─────────────────────────────────────────────

    async def refresh_access_token(self) -> str:
        """Exchange the refresh token for a new pair and return the access token.

        Concurrent refreshes of the same refresh token share one backend call.
        Any failure clears both cookies before the error propagates.
        """
        refresh_token = self.get_refresh_token()
        if not refresh_token:
            raise RefreshError("No refresh token available")
        if self.refresher is None:
            raise RefreshError("No refresh handler configured")

        refresher = self.refresher
        logger.info("Refreshing access token (joining in-flight call: %s)", self.flight.in_flight(refresh_token))
        try:
            pair = await self.flight.do(refresh_token, lambda: refresher(refresh_token))
        except Exception:
            logger.warning("Token refresh failed, clearing session cookies")
            self.clear_tokens()
            raise

        self.set_tokens(pair.access_token, pair.refresh_token)
        return pair.access_token
