"""/auth endpoints."""

import logging
from typing import Any

from app.core.errors import ApiError, RefreshError
from app.models.user import UserRole
from app.services.backend.base import BackendApi
from app.services.token_manager import TokenPair

logger = logging.getLogger(__name__)


def extract_token_pair(payload: Any) -> TokenPair | None:
    if not isinstance(payload, dict):
        return None
    access_token = payload.get("accessToken")
    refresh_token = payload.get("refreshToken")
    if access_token and refresh_token:
        return TokenPair(access_token=access_token, refresh_token=refresh_token)
    return None


class AuthApi(BackendApi):
    async def login(self, email: str, password: str, tenant_code: str | None = None) -> dict:
        body: dict[str, Any] = {"email": email, "password": password}
        if tenant_code:
            body["tenantCode"] = tenant_code
        return await self.client.request("/auth/login", method="POST", body=body, skip_auth=True)

    async def register(
        self,
        email: str,
        password: str,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
        tenant_code: str | None = None,
    ) -> dict:
        """Tenant user registration."""
        body = {
            "email": email,
            "password": password,
            "firstName": first_name,
            "lastName": last_name,
            "tenantCode": tenant_code,
        }
        body = {key: value for key, value in body.items() if value is not None}
        return await self.client.request("/auth/register", method="POST", body=body, skip_auth=True)

    async def register_master(self, name: str, email: str, password: str, role: UserRole = UserRole.OWNER) -> dict:
        """Platform (master domain) user registration."""
        body = {"name": name, "email": email, "password": password, "role": UserRole(role).value}
        return await self.client.request("/auth/register", method="POST", body=body, skip_auth=True)

    async def forgot_password(self, email: str) -> dict:
        return await self.client.request(
            "/auth/forgot-password", method="POST", body={"email": email}, skip_auth=True
        )

    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        data = await self.client.request(
            "/auth/refresh-token",
            method="POST",
            body={"refreshToken": refresh_token},
            skip_auth=True,
        )
        pair = extract_token_pair(data)
        if pair is None:
            raise RefreshError("Refresh response did not contain a token pair")
        return pair

    async def logout(self) -> dict:
        # Local cookies are cleared by the caller whatever the backend says
        try:
            return await self.client.request("/auth/logout", method="POST")
        except ApiError as exc:
            logger.info("Backend logout failed (%s), continuing", exc.status_code)
            return {"message": "Logged out"}

    async def get_current_user(self) -> dict:
        return await self.client.request("/auth/me")
