"""Hostname classification: admin, tenant subdomain, custom domain, master."""

import pytest

from app.core.config import Settings
from app.core.errors import TenantRequiredError
from app.core.tenancy import (
    HostKind,
    build_tenant_url,
    get_tenant_code,
    is_tenant_request,
    require_tenant,
    resolve_admin,
    resolve_host,
    resolve_tenant,
)

MAIN = "myapp.com"


def test_main_domain_is_master():
    context = resolve_host("myapp.com", MAIN)
    assert context.kind is HostKind.MASTER
    assert context.tenant is None
    assert not context.is_admin


def test_port_is_stripped():
    context = resolve_host("acme.myapp.com:3000", MAIN)
    assert context.kind is HostKind.TENANT_SUBDOMAIN
    assert context.tenant.code == "acme"
    assert context.tenant.domain == "acme.myapp.com"


def test_admin_master():
    admin = resolve_admin("admin.myapp.com", MAIN)
    assert admin.is_admin_domain and admin.is_master_admin
    assert not admin.is_tenant_admin
    assert resolve_host("admin.myapp.com:443", MAIN).kind is HostKind.ADMIN_MASTER


@pytest.mark.parametrize("code", ["acme", "beauty", "clinic-7"])
def test_admin_tenant(code):
    context = resolve_host(f"admin.{code}.myapp.com", MAIN)
    assert context.kind is HostKind.ADMIN_TENANT
    assert context.admin.tenant_code == code
    assert context.admin.is_tenant_admin
    assert context.tenant is None
    assert context.tenant_code == code


@pytest.mark.parametrize("code", ["acme", "shop1", "eu.acme"])
def test_tenant_subdomain(code):
    tenant = resolve_tenant(f"{code}.myapp.com", MAIN)
    assert tenant is not None
    assert tenant.code == code
    assert tenant.is_subdomain
    assert tenant.custom_domain is None


@pytest.mark.parametrize("host", ["www.myapp.com", "api.myapp.com", "admin.a.b.myapp.com"])
def test_reserved_subdomains_have_no_tenant(host):
    assert resolve_tenant(host, MAIN) is None


def test_admin_label_never_becomes_a_tenant_code():
    assert resolve_tenant("admin.myapp.com", MAIN) is None
    assert resolve_host("admin.myapp.com", MAIN).tenant is None


def test_custom_domain():
    context = resolve_host("shop.example.org", MAIN)
    assert context.kind is HostKind.TENANT_CUSTOM_DOMAIN
    assert context.tenant.code == "shop-example-org"
    assert context.tenant.custom_domain == "shop.example.org"
    assert not context.tenant.is_subdomain


def test_host_containing_main_domain_is_master():
    # Neither a subdomain nor a custom domain
    assert resolve_host("myapp.com.evil.net", MAIN).kind is HostKind.MASTER


def test_resolution_is_pure():
    first = resolve_host("acme.myapp.com", MAIN)
    resolve_host("admin.myapp.com", MAIN)
    assert resolve_host("acme.myapp.com", MAIN) == first


def test_helpers():
    assert is_tenant_request("acme.myapp.com", MAIN)
    assert not is_tenant_request("www.myapp.com", MAIN)
    assert get_tenant_code("acme.myapp.com", MAIN) == "acme"
    assert get_tenant_code("myapp.com", MAIN) is None


def test_require_tenant():
    assert require_tenant(resolve_host("acme.myapp.com", MAIN)).code == "acme"
    with pytest.raises(TenantRequiredError):
        require_tenant(resolve_host("myapp.com", MAIN))


def test_build_tenant_url():
    dev = Settings(_env_file=None, main_domain="myapp.com", environment="development")
    prod = Settings(_env_file=None, main_domain="myapp.com", environment="production")
    assert build_tenant_url("acme", "/users", dev) == "http://acme.myapp.com:3000/users"
    assert build_tenant_url("acme", "users", prod) == "https://acme.myapp.com/users"
