"""Request-scoped cookie store.

Seeded from the cookies the browser sent, it records every write so the
changes can be replayed onto the outgoing response with ``apply_to``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Literal

from starlette.responses import Response

SameSite = Literal["lax", "strict", "none"]

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"

DEFAULT_MAX_AGE = timedelta(days=7)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StoredCookie:
    value: str
    expires_at: datetime | None = None
    path: str = "/"
    secure: bool = False
    samesite: SameSite = "lax"
    httponly: bool = True


class CookieStore:
    def __init__(
        self,
        initial: Mapping[str, str] | None = None,
        *,
        secure_default: bool = False,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._clock = clock
        self._secure_default = secure_default
        self._cookies: dict[str, StoredCookie] = {
            name: StoredCookie(value=value) for name, value in (initial or {}).items()
        }
        # name -> cookie to write, or None to expire it
        self._pending: dict[str, StoredCookie | None] = {}
        self._pending_paths: dict[str, str] = {}

    def set(
        self,
        name: str,
        value: str,
        *,
        max_age: timedelta | None = DEFAULT_MAX_AGE,
        path: str = "/",
        secure: bool | None = None,
        samesite: SameSite = "lax",
        httponly: bool = True,
    ) -> None:
        expires_at = self._clock() + max_age if max_age else None
        cookie = StoredCookie(
            value=value,
            expires_at=expires_at,
            path=path,
            secure=self._secure_default if secure is None else secure,
            samesite=samesite,
            httponly=httponly,
        )
        self._cookies[name] = cookie
        self._pending[name] = cookie

    def get(self, name: str) -> str | None:
        cookie = self._cookies.get(name)
        if cookie is None:
            return None
        if cookie.expires_at is not None and cookie.expires_at <= self._clock():
            self._cookies.pop(name, None)
            return None
        return cookie.value

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def delete(self, name: str, path: str = "/") -> None:
        self._cookies.pop(name, None)
        self._pending[name] = None
        self._pending_paths[name] = path

    def clear_all(self) -> None:
        for name in list(self._cookies):
            self.delete(name)

    def get_all(self) -> dict[str, str]:
        values = {}
        for name in list(self._cookies):
            value = self.get(name)
            if value:
                values[name] = value
        return values

    @property
    def dirty(self) -> bool:
        return bool(self._pending)

    def apply_to(self, response: Response) -> None:
        """Write pending sets and deletes as ``Set-Cookie`` headers."""
        now = self._clock()
        for name, cookie in self._pending.items():
            if cookie is None:
                response.delete_cookie(name, path=self._pending_paths.get(name, "/"))
                continue
            max_age = None
            if cookie.expires_at is not None:
                max_age = max(round((cookie.expires_at - now).total_seconds()), 0)
            response.set_cookie(
                name,
                cookie.value,
                max_age=max_age,
                path=cookie.path,
                secure=cookie.secure,
                httponly=cookie.httponly,
                samesite=cookie.samesite,
            )
        self._pending.clear()
        self._pending_paths.clear()
