"""Host context and system health endpoints."""

import platform
import sys
import time
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.deps import AppSettings, Context, Tokens, get_http_client
from app.core.layouts import resolve_layout

router = APIRouter(tags=["system"])

_start_time = time.time()


class ContextResponse(BaseModel):
    host: str
    kind: str
    layout: str
    tenant_code: str | None = None
    is_subdomain: bool | None = None
    custom_domain: str | None = None
    is_admin_domain: bool
    is_master_admin: bool
    is_tenant_admin: bool
    authenticated: bool


class ServiceHealth(BaseModel):
    status: str  # "ok" or "error"
    detail: str | None = None
    latency_ms: int | None = None


class HealthResponse(BaseModel):
    status: str
    backend: ServiceHealth
    uptime_seconds: int
    python: str
    platform: str


@router.get("/context", response_model=ContextResponse)
async def host_context(context: Context, tokens: Tokens) -> ContextResponse:
    """How the current host was classified and which layout it gets."""
    tenant = context.tenant
    return ContextResponse(
        host=context.host,
        kind=context.kind.value,
        layout=resolve_layout(context).value,
        tenant_code=context.tenant_code,
        is_subdomain=tenant.is_subdomain if tenant else None,
        custom_domain=tenant.custom_domain if tenant else None,
        is_admin_domain=context.admin.is_admin_domain,
        is_master_admin=context.admin.is_master_admin,
        is_tenant_admin=context.admin.is_tenant_admin,
        authenticated=tokens.is_authenticated(),
    )


@router.get("/system/health", response_model=HealthResponse)
async def system_health(
    settings: AppSettings,
    http: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> HealthResponse:
    """Check that the backend API answers at all."""
    backend = await _check_backend(http, settings.api_base_url)
    return HealthResponse(
        status="ok" if backend.status == "ok" else "degraded",
        backend=backend,
        uptime_seconds=int(time.time() - _start_time),
        python=sys.version.split()[0],
        platform=platform.platform(),
    )


async def _check_backend(http: httpx.AsyncClient, base_url: str) -> ServiceHealth:
    start = time.monotonic()
    try:
        resp = await http.get(base_url, timeout=5)
    except httpx.HTTPError as exc:
        return ServiceHealth(status="error", detail=str(exc) or exc.__class__.__name__)
    latency = int((time.monotonic() - start) * 1000)
    # Any HTTP answer means the backend is reachable
    return ServiceHealth(status="ok", detail=f"HTTP {resp.status_code}", latency_ms=latency)
