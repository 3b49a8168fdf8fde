"""Layout / template selection and route-group guards for a host context."""

from __future__ import annotations

from enum import StrEnum

from app.core.tenancy import HostContext

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"
HOME_PATH = "/"

PROTECTED_PREFIXES = (DASHBOARD_PATH,)
GUEST_ONLY_PREFIXES = ("/login", "/register", "/forgot-password")


class Layout(StrEnum):
    ADMIN = "admin"
    TENANT = "tenant"
    MASTER = "master"


class RouteGroup(StrEnum):
    ADMIN = "admin"
    MASTER = "master"
    TENANT = "tenant"
    COMMON = "common"


def resolve_layout(context: HostContext) -> Layout:
    # admin.<code>.<main> carries a tenant code but still renders the admin shell
    if context.is_admin:
        return Layout.ADMIN
    if context.tenant is not None:
        return Layout.TENANT
    return Layout.MASTER


def resolve_template(page: str, context: HostContext) -> str:
    return f"{page}/{resolve_layout(context).value}"


def allows_group(group: RouteGroup, context: HostContext) -> bool:
    if group is RouteGroup.ADMIN:
        return context.is_admin
    if group is RouteGroup.MASTER:
        return context.tenant is None and not context.is_admin
    if group is RouteGroup.TENANT:
        return context.tenant is not None
    return True


def _matches(path: str, prefixes: tuple[str, ...]) -> bool:
    return any(path.startswith(prefix) for prefix in prefixes)


def auth_redirect(path: str, has_access_token: bool) -> str | None:
    """Where the auth gate sends a request, or ``None`` to let it through."""
    if _matches(path, PROTECTED_PREFIXES) and not has_access_token:
        return LOGIN_PATH
    if _matches(path, GUEST_ONLY_PREFIXES) and has_access_token:
        return DASHBOARD_PATH
    return None
