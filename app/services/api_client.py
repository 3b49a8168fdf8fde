"""HTTP client for the backend API: bearer injection + one refresh-and-retry."""

import logging
from typing import Any

import httpx
from fastapi import status

from app.core.errors import GENERIC_FAILURE_MESSAGE, ApiError, PortalError, SessionExpiredError
from app.services.token_manager import TokenManager

logger = logging.getLogger(__name__)


def error_message(payload: Any) -> str:
    """Backend-supplied ``message`` if there is one, else a generic failure."""
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
    return GENERIC_FAILURE_MESSAGE


def _json_or_none(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


class ApiClient:
    """Thin wrapper over ``httpx.AsyncClient`` bound to one user's tokens.

    The underlying ``httpx.AsyncClient`` is usually shared across requests
    (see ``app.main``); only the token manager is per request.
    """

    def __init__(
        self,
        base_url: str,
        tokens: TokenManager,
        *,
        http: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.tokens = tokens
        self._owns_http = http is None
        # timeout=None keeps httpx from applying its 5s default
        self.http = http or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def request(
        self,
        path: str,
        *,
        method: str = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        skip_auth: bool = False,
    ) -> Any:
        """Call the backend and return its decoded JSON body.

        Raises ``ApiError`` for non-2xx answers and ``SessionExpiredError``
        when a 401 cannot be recovered by refreshing the token pair once.
        """
        send_headers = {"Content-Type": "application/json", **(headers or {})}
        access_token = self.tokens.get_access_token()
        if access_token and not skip_auth:
            send_headers["Authorization"] = f"Bearer {access_token}"

        response = await self._send(method, path, body, send_headers, params)

        if response.status_code == status.HTTP_401_UNAUTHORIZED and not skip_auth:
            response = await self._refresh_and_retry(method, path, body, send_headers, params)

        data = _json_or_none(response)
        if response.is_success:
            return data

        message = error_message(data)
        logger.info("Backend %s %s failed with %s: %s", method, path, response.status_code, message)
        raise ApiError(response.status_code, message)

    async def _refresh_and_retry(
        self,
        method: str,
        path: str,
        body: Any,
        headers: dict[str, str],
        params: dict[str, Any] | None,
    ) -> httpx.Response:
        if not self.tokens.get_refresh_token():
            logger.info("Backend rejected %s %s and no refresh token is stored", method, path)
            self.tokens.clear_tokens()
            raise SessionExpiredError()

        try:
            access_token = await self.tokens.refresh_access_token()
        except (PortalError, httpx.HTTPError) as exc:
            self.tokens.clear_tokens()
            raise SessionExpiredError() from exc

        headers = {**headers, "Authorization": f"Bearer {access_token}"}
        response = await self._send(method, path, body, headers, params)
        if response.status_code == status.HTTP_401_UNAUTHORIZED:
            logger.warning("Backend rejected freshly refreshed token for %s %s", method, path)
            self.tokens.clear_tokens()
            raise SessionExpiredError()
        return response

    async def _send(
        self,
        method: str,
        path: str,
        body: Any,
        headers: dict[str, str],
        params: dict[str, Any] | None,
    ) -> httpx.Response:
        try:
            return await self.http.request(
                method,
                f"{self.base_url}{path}",
                json=body,
                headers=headers,
                params=params,
            )
        except httpx.TransportError as exc:
            logger.warning("Backend unreachable for %s %s: %s", method, path, exc)
            raise ApiError(status.HTTP_502_BAD_GATEWAY, "Backend unavailable") from exc
