"""Service catalogue and per-tenant service enablement."""

from fastapi import APIRouter, Query

from app.api.deps import Client, Context
from app.core.tenancy import require_tenant
from app.models.service import ApplyServiceRequest, ApplyServiceResponse, EnabledService, Service
from app.services.backend.services import ServiceApi

router = APIRouter(prefix="/services", tags=["services"])


def _tenant_code(context: Context, tenant_code: str | None) -> str:
    """Explicit ``tenant_code`` wins, else the tenant of the current host."""
    return tenant_code or require_tenant(context).code


@router.get("", response_model=list[Service])
async def list_services(client: Client, tenant_code: str | None = Query(default=None)) -> list[Service]:
    return await ServiceApi(client).get_all_services(tenant_code)


@router.get("/enabled", response_model=list[EnabledService])
async def enabled_services(
    context: Context,
    client: Client,
    tenant_code: str | None = Query(default=None),
) -> list[EnabledService]:
    return await ServiceApi(client).get_enabled_services(_tenant_code(context, tenant_code))


@router.get("/{code}", response_model=Service)
async def get_service(code: str, client: Client) -> Service:
    return await ServiceApi(client).get_service_by_code(code)


@router.post("/apply", response_model=ApplyServiceResponse)
async def apply_service(body: ApplyServiceRequest, client: Client) -> ApplyServiceResponse:
    return await ServiceApi(client).apply_service_to_tenant(body)


@router.delete("/{service_code}")
async def remove_service(
    service_code: str,
    context: Context,
    client: Client,
    tenant_code: str | None = Query(default=None),
) -> dict:
    return await ServiceApi(client).remove_service_from_tenant(_tenant_code(context, tenant_code), service_code)
