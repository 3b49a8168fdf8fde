"""Hostname -> tenant / admin classification.

Every function here is pure: the same host and main domain always give the
same answer, and "no tenant" is a normal result rather than an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from app.core.config import Settings, get_settings
from app.core.errors import TenantRequiredError

ADMIN_LABEL = "admin"
RESERVED_SUBDOMAINS = frozenset({"www", "api", ADMIN_LABEL})


class HostKind(StrEnum):
    ADMIN_MASTER = "admin-master"
    ADMIN_TENANT = "admin-tenant"
    TENANT_SUBDOMAIN = "tenant-subdomain"
    TENANT_CUSTOM_DOMAIN = "tenant-custom-domain"
    MASTER = "master"


@dataclass(frozen=True)
class TenantIdentity:
    code: str
    domain: str
    is_subdomain: bool
    custom_domain: str | None = None


@dataclass(frozen=True)
class AdminIdentity:
    is_admin_domain: bool = False
    is_master_admin: bool = False
    is_tenant_admin: bool = False
    tenant_code: str | None = None


NOT_ADMIN = AdminIdentity()


@dataclass(frozen=True)
class HostContext:
    host: str
    kind: HostKind
    tenant: TenantIdentity | None = None
    admin: AdminIdentity = NOT_ADMIN

    @property
    def is_admin(self) -> bool:
        return self.admin.is_admin_domain

    @property
    def is_master(self) -> bool:
        return self.kind is HostKind.MASTER

    @property
    def tenant_code(self) -> str | None:
        if self.tenant is not None:
            return self.tenant.code
        return self.admin.tenant_code


def normalize_host(raw_host: str | None) -> str:
    host = (raw_host or "").strip().lower()
    return host.split(":", 1)[0].rstrip(".")


def _subdomain_prefix(host: str, main_domain: str) -> str | None:
    suffix = f".{main_domain}"
    if host != main_domain and host.endswith(suffix):
        return host[: -len(suffix)]
    return None


def resolve_admin(raw_host: str, main_domain: str) -> AdminIdentity:
    """``admin.<main>`` is the platform admin, ``admin.<code>.<main>`` a tenant admin."""
    host = normalize_host(raw_host)
    prefix = _subdomain_prefix(host, main_domain.lower())
    if prefix is None:
        return NOT_ADMIN

    labels = prefix.split(".")
    if labels == [ADMIN_LABEL]:
        return AdminIdentity(is_admin_domain=True, is_master_admin=True)
    if len(labels) == 2 and labels[0] == ADMIN_LABEL and labels[1]:
        return AdminIdentity(is_admin_domain=True, is_tenant_admin=True, tenant_code=labels[1])
    return NOT_ADMIN


def resolve_tenant(raw_host: str, main_domain: str) -> TenantIdentity | None:
    host = normalize_host(raw_host)
    main_domain = main_domain.lower()
    if not host:
        return None

    prefix = _subdomain_prefix(host, main_domain)
    if prefix is not None:
        if prefix and prefix not in RESERVED_SUBDOMAINS and not prefix.startswith(f"{ADMIN_LABEL}."):
            return TenantIdentity(code=prefix, domain=host, is_subdomain=True)
        return None

    if host != main_domain and main_domain not in host:
        # Display code only: distinct domains can hyphenate to the same value.
        return TenantIdentity(
            code=host.replace(".", "-"),
            domain=host,
            is_subdomain=False,
            custom_domain=host,
        )
    return None


def resolve_host(raw_host: str, main_domain: str) -> HostContext:
    """Classify a ``Host`` header. Admin hosts are checked before tenants."""
    host = normalize_host(raw_host)

    admin = resolve_admin(host, main_domain)
    if admin.is_master_admin:
        return HostContext(host=host, kind=HostKind.ADMIN_MASTER, admin=admin)
    if admin.is_tenant_admin:
        return HostContext(host=host, kind=HostKind.ADMIN_TENANT, admin=admin)

    tenant = resolve_tenant(host, main_domain)
    if tenant is None:
        return HostContext(host=host, kind=HostKind.MASTER)
    kind = HostKind.TENANT_SUBDOMAIN if tenant.is_subdomain else HostKind.TENANT_CUSTOM_DOMAIN
    return HostContext(host=host, kind=kind, tenant=tenant)


def is_tenant_request(raw_host: str, main_domain: str) -> bool:
    return resolve_tenant(raw_host, main_domain) is not None


def get_tenant_code(raw_host: str, main_domain: str) -> str | None:
    tenant = resolve_tenant(raw_host, main_domain)
    return tenant.code if tenant else None


def require_tenant(context: HostContext) -> TenantIdentity:
    if context.tenant is None:
        raise TenantRequiredError(context.host)
    return context.tenant


def build_tenant_url(tenant_code: str, path: str = "/", settings: Settings | None = None) -> str:
    """Public URL of a tenant's subdomain."""
    settings = settings or get_settings()
    if not path.startswith("/"):
        path = f"/{path}"
    if settings.is_production:
        return f"https://{tenant_code}.{settings.main_domain}{path}"
    return f"http://{tenant_code}.{settings.main_domain}:{settings.frontend_port}{path}"
