"""/tenants endpoints."""

from urllib.parse import quote

from app.models.tenant import (
    DeploymentConfig,
    Tenant,
    TenantApiKeyResponse,
    TenantRegistrationRequest,
)
from app.services.backend.base import BackendApi


class TenantApi(BackendApi):
    async def get_my_tenants(self) -> list[Tenant]:
        data = await self.client.request("/tenants/my-tenants")
        return [Tenant.model_validate(item) for item in data or []]

    async def register_tenant(self, request: TenantRegistrationRequest) -> TenantApiKeyResponse:
        data = await self.client.request("/tenants/register", method="POST", body=request.to_wire())
        return TenantApiKeyResponse.model_validate(data)

    async def get_tenant_by_code(self, tenant_code: str) -> Tenant:
        data = await self.client.request(f"/tenants/{quote(tenant_code)}")
        return Tenant.model_validate(data)

    async def get_tenant_by_id(self, tenant_id: str) -> Tenant:
        data = await self.client.request(f"/tenants/by-id/{quote(tenant_id)}")
        return Tenant.model_validate(data)

    async def update_deployment_config(self, tenant_id: str, config: DeploymentConfig) -> Tenant:
        data = await self.client.request(
            f"/tenants/{quote(tenant_id)}/deployment",
            method="PUT",
            body={"deploymentConfig": config.to_wire()},
        )
        return Tenant.model_validate(data)

    async def regenerate_api_key(self, tenant_code: str) -> TenantApiKeyResponse:
        data = await self.client.request(f"/tenants/regenerate-api-key/{quote(tenant_code)}")
        return TenantApiKeyResponse.model_validate(data)

    async def delete_tenant(self, tenant_code: str) -> dict:
        """Irreversible: the backend drops the tenant's database too."""
        return await self.client.request(f"/tenants/{quote(tenant_code)}", method="DELETE")

    async def test_protected_route(self, api_key: str) -> dict:
        return await self.client.request(
            "/tenants/protected", headers={"x-api-key": api_key}, skip_auth=True
        )
