"""Tenant management and deployment routing endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel

from app.api.deps import Client
from app.models.infrastructure import InfrastructureConfig
from app.models.tenant import DeploymentConfig, Tenant, TenantApiKeyResponse, TenantRegistrationRequest
from app.services.backend.tenants import TenantApi
from app.services.routing import (
    PlacementRequirements,
    PlacementStrategy,
    check_tenant_routing,
    determine_tenant_placement,
    plan_tenant_migration,
    validate_routing_config,
)

router = APIRouter(tags=["tenants"])


# ── Schemas ──────────────────────────────────────────────────

class PlacementRequest(BaseModel):
    strategy: PlacementStrategy
    infrastructure: InfrastructureConfig
    requirements: PlacementRequirements | None = None


# ── Tenants ──────────────────────────────────────────────────

@router.get("/tenants", response_model=list[Tenant])
async def list_my_tenants(client: Client) -> list[Tenant]:
    return await TenantApi(client).get_my_tenants()


@router.post("/tenants", response_model=TenantApiKeyResponse, status_code=status.HTTP_201_CREATED)
async def register_tenant(body: TenantRegistrationRequest, client: Client) -> TenantApiKeyResponse:
    """Create a tenant. The API key in the response is shown once."""
    return await TenantApi(client).register_tenant(body)


@router.get("/tenants/by-id/{tenant_id}", response_model=Tenant)
async def get_tenant_by_id(tenant_id: str, client: Client) -> Tenant:
    return await TenantApi(client).get_tenant_by_id(tenant_id)


@router.get("/tenants/{tenant_code}", response_model=Tenant)
async def get_tenant(tenant_code: str, client: Client) -> Tenant:
    return await TenantApi(client).get_tenant_by_code(tenant_code)


@router.delete("/tenants/{tenant_code}")
async def delete_tenant(tenant_code: str, client: Client) -> dict:
    return await TenantApi(client).delete_tenant(tenant_code)


@router.post("/tenants/{tenant_code}/api-key", response_model=TenantApiKeyResponse)
async def regenerate_api_key(tenant_code: str, client: Client) -> TenantApiKeyResponse:
    return await TenantApi(client).regenerate_api_key(tenant_code)


# ── Deployment ───────────────────────────────────────────────

@router.put("/tenants/{tenant_id}/deployment", response_model=Tenant)
async def update_deployment(tenant_id: str, body: DeploymentConfig, client: Client) -> Tenant:
    """Validate locally, then store the configuration on the backend."""
    validation = validate_routing_config(body)
    if not validation.valid:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=validation.errors,
        )
    return await TenantApi(client).update_deployment_config(tenant_id, body)


@router.post("/tenants/{tenant_code}/deployment/plan")
async def plan_migration(tenant_code: str, body: DeploymentConfig, client: Client) -> dict:
    tenant = await TenantApi(client).get_tenant_by_code(tenant_code)
    plan = plan_tenant_migration(tenant, body)
    return {
        "tenantCode": tenant.tenant_code,
        "from": tenant.deployment_config.level.value if tenant.deployment_config else "shared",
        "to": body.level.value,
        "steps": plan.steps,
        "downtime": plan.downtime,
        "complexity": plan.complexity.value,
    }


@router.get("/tenants/{tenant_code}/routing")
async def tenant_routing(tenant_code: str, request: Request, client: Client) -> dict:
    """Where this tenant's frontend should be served from."""
    tenant = await TenantApi(client).get_tenant_by_code(tenant_code)
    decision = check_tenant_routing(tenant, request.url.hostname or "", "frontend")
    return {
        "shouldRedirect": decision.should_redirect,
        "targetUrl": decision.target_url,
        "reason": decision.reason,
        "summary": tenant.deployment_summary(),
    }


@router.post("/deployment/placement")
async def placement(body: PlacementRequest) -> dict:
    try:
        config = determine_tenant_placement(body.strategy, body.infrastructure, body.requirements)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return config.to_wire()


@router.post("/deployment/validate")
async def validate(body: DeploymentConfig) -> dict:
    return asdict(validate_routing_config(body))
