"""Shared plumbing for the backend API wrappers."""

from typing import Any

from app.core.config import Settings
from app.core.security import get_api_key_for_tenant
from app.services.api_client import ApiClient


class BackendApi:
    def __init__(self, client: ApiClient, settings: Settings | None = None) -> None:
        self.client = client
        self.settings = settings or client.tokens.settings

    def tenant_scope(self, tenant_code: str | None) -> dict[str, Any]:
        """Request options for a tenant-scoped call.

        With a tenant code the call authenticates with the tenant's
        ``x-api-key`` instead of the user's bearer token.
        """
        if not tenant_code:
            return {}
        api_key = get_api_key_for_tenant(tenant_code, self.settings)
        if not api_key:
            return {}
        return {"headers": {"x-api-key": api_key}, "skip_auth": True}
