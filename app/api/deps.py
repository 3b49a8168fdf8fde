"""FastAPI dependencies for host context, tokens and the backend client."""

import logging
from typing import Annotated

import httpx
from fastapi import Depends, HTTPException, Request, status

from app.core.config import Settings, get_settings
from app.core.cookies import CookieStore
from app.core.layouts import HOME_PATH, RouteGroup, allows_group
from app.core.tenancy import HostContext, TenantIdentity, require_tenant, resolve_host
from app.services.api_client import ApiClient
from app.services.backend.auth import AuthApi
from app.services.token_manager import SingleFlight, TokenManager

logger = logging.getLogger(__name__)


def get_host_context(request: Request, settings: Annotated[Settings, Depends(get_settings)]) -> HostContext:
    """Context resolved by the middleware, or resolved here when it did not run."""
    context = getattr(request.state, "host_context", None)
    if context is None:
        context = resolve_host(request.headers.get("host", ""), settings.main_domain)
        request.state.host_context = context
    return context


def get_cookie_store(request: Request, settings: Annotated[Settings, Depends(get_settings)]) -> CookieStore:
    cookies = getattr(request.state, "cookies", None)
    if cookies is None:
        cookies = CookieStore(request.cookies, secure_default=settings.secure_cookies)
        request.state.cookies = cookies
    return cookies


def get_single_flight(request: Request) -> SingleFlight:
    return request.app.state.refresh_flight


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http


def get_token_manager(
    cookies: Annotated[CookieStore, Depends(get_cookie_store)],
    flight: Annotated[SingleFlight, Depends(get_single_flight)],
    http: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenManager:
    tokens = TokenManager(cookies, flight=flight, settings=settings)
    auth = AuthApi(ApiClient(settings.api_base_url, tokens, http=http), settings)
    tokens.refresher = auth.refresh_tokens
    return tokens


def get_api_client(
    tokens: Annotated[TokenManager, Depends(get_token_manager)],
    http: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ApiClient:
    return ApiClient(settings.api_base_url, tokens, http=http)


def get_current_tenant(context: Annotated[HostContext, Depends(get_host_context)]) -> TenantIdentity:
    """Raises ``TenantRequiredError`` on hosts without a tenant."""
    return require_tenant(context)


def route_group(group: RouteGroup):
    """Dependency that sends hosts outside ``group`` back to the home page."""

    def _guard(context: Annotated[HostContext, Depends(get_host_context)]) -> HostContext:
        if not allows_group(group, context):
            logger.info("Host %s is outside the %s route group", context.host, group.value)
            raise HTTPException(
                status_code=status.HTTP_307_TEMPORARY_REDIRECT,
                detail=f"{group.value} pages are not served on {context.host or 'this host'}",
                headers={"Location": HOME_PATH},
            )
        return context

    return _guard


# Typed shorthand for use in route signatures
Context = Annotated[HostContext, Depends(get_host_context)]
Tokens = Annotated[TokenManager, Depends(get_token_manager)]
Client = Annotated[ApiClient, Depends(get_api_client)]
CurrentTenant = Annotated[TenantIdentity, Depends(get_current_tenant)]
AppSettings = Annotated[Settings, Depends(get_settings)]
