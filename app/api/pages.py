"""Page entry points: pick the layout and template for the current host.

Rendering is left to the browser bundle; these endpoints only decide *which*
shell and template a page uses and who may see it.
"""

from typing import Annotated

import httpx
from fastapi import APIRouter, Depends

from app.api.deps import Context, Tokens, route_group
from app.core.errors import PortalError, SessionExpiredError
from app.core.layouts import RouteGroup, resolve_layout, resolve_template
from app.core.tenancy import HostContext
from app.services.token_manager import TokenState

router = APIRouter(include_in_schema=False)

AdminHost = Annotated[HostContext, Depends(route_group(RouteGroup.ADMIN))]
MasterHost = Annotated[HostContext, Depends(route_group(RouteGroup.MASTER))]
TenantHost = Annotated[HostContext, Depends(route_group(RouteGroup.TENANT))]


def _page(page: str, context: HostContext, **extra) -> dict:
    return {
        "page": page,
        "layout": resolve_layout(context).value,
        "template": resolve_template(page, context),
        "tenantCode": context.tenant_code,
        **extra,
    }


@router.get("/")
async def home(context: Context) -> dict:
    return _page("home", context)


@router.get("/login")
async def login_page(context: Context) -> dict:
    return _page("login", context)


@router.get("/register")
async def register_page(context: Context) -> dict:
    return _page("register", context)


@router.get("/forgot-password")
async def forgot_password_page(context: Context) -> dict:
    return _page("forgot-password", context)


@router.get("/dashboard")
async def dashboard(context: Context, tokens: Tokens) -> dict:
    # The auth gate in app.main has already bounced visitors without a token
    if tokens.state() is TokenState.STALE:
        try:
            await tokens.refresh_access_token()
        except (PortalError, httpx.HTTPError) as exc:
            raise SessionExpiredError() from exc
    return _page("dashboard", context, user=tokens.get_user_from_token())


@router.get("/admin")
async def admin_home(context: AdminHost) -> dict:
    return _page("admin", context)


@router.get("/tenants")
async def master_tenants(context: MasterHost) -> dict:
    return _page("tenants", context)


@router.get("/products")
async def products(context: TenantHost) -> dict:
    return _page("products", context)


@router.get("/settings")
async def settings_page(context: TenantHost) -> dict:
    return _page("settings", context)


@router.get("/users")
async def users_page(context: TenantHost) -> dict:
    return _page("users", context)
