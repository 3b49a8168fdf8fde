"""/services endpoints."""

from urllib.parse import quote

from app.models.service import ApplyServiceRequest, ApplyServiceResponse, EnabledService, Service
from app.services.backend.base import BackendApi


class ServiceApi(BackendApi):
    async def get_all_services(self, tenant_code: str | None = None) -> list[Service]:
        params = {"tenantCode": tenant_code} if tenant_code else None
        data = await self.client.request("/services", params=params)
        return [Service.model_validate(item) for item in data or []]

    async def get_service_by_code(self, code: str) -> Service:
        data = await self.client.request(f"/services/code/{quote(code)}")
        return Service.model_validate(data)

    async def apply_service_to_tenant(self, request: ApplyServiceRequest) -> ApplyServiceResponse:
        """The backend also enables every service the requested one depends on."""
        data = await self.client.request(
            "/services/apply-to-tenant", method="POST", body=request.to_wire()
        )
        return ApplyServiceResponse.model_validate(data)

    async def get_enabled_services(self, tenant_code: str) -> list[EnabledService]:
        data = await self.client.request(f"/services/tenant/{quote(tenant_code)}/enabled")
        services = (data or {}).get("services") or []
        return [EnabledService.model_validate(item) for item in services]

    async def remove_service_from_tenant(self, tenant_code: str, service_code: str) -> dict:
        return await self.client.request(
            f"/services/tenant/{quote(tenant_code)}/service/{quote(service_code)}",
            method="DELETE",
        )
