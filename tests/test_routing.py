"""Tenant placement, routing validation and migration planning."""

import pytest

from app.core.tenancy import build_tenant_url
from app.models.infrastructure import ClusterConfig, InfrastructureConfig
from app.models.tenant import DeploymentConfig, IsolationLevel, Tenant
from app.services.routing import (
    Complexity,
    PlacementRequirements,
    PlacementStrategy,
    build_tenant_resource_url,
    check_tenant_routing,
    determine_tenant_placement,
    get_tenant_api_url,
    plan_tenant_migration,
    resolve_tenant_routing,
    validate_routing_config,
)


def make_infra(*clusters: ClusterConfig) -> InfrastructureConfig:
    return InfrastructureConfig(
        clusters=list(clusters),
        default_cluster="eu-1",
        default_region="eu-west",
    )


def make_tenant(config: DeploymentConfig | None = None, code: str = "acme") -> Tenant:
    return Tenant(id="t1", tenant_code=code, name=code.title(), deployment_config=config)


# ── Placement ────────────────────────────────────────────────


def test_shared_placement():
    config = determine_tenant_placement("shared", make_infra())
    assert config.isolation_level is IsolationLevel.SHARED
    assert config.frontend_cluster is None


def test_balanced_picks_least_loaded_cluster():
    infra = make_infra(
        ClusterConfig(id="eu-1", region="eu-west", capacity=100, current_load=80),
        ClusterConfig(id="us-1", region="us-east", capacity=100, current_load=30),
        ClusterConfig(id="ap-1", region="ap-south", capacity=10, current_load=5),
    )

    config = determine_tenant_placement(PlacementStrategy.BALANCED, infra)

    assert config.isolation_level is IsolationLevel.POD
    assert config.frontend_cluster == config.backend_cluster == "us-1"
    assert config.frontend_region == config.backend_region == "us-east"


def test_balanced_tie_keeps_first_cluster():
    infra = make_infra(
        ClusterConfig(id="eu-1", region="eu-west", capacity=100, current_load=50),
        ClusterConfig(id="us-1", region="us-east", capacity=10, current_load=5),
    )
    assert determine_tenant_placement("balanced", infra).frontend_cluster == "eu-1"


def test_balanced_needs_clusters():
    with pytest.raises(ValueError):
        determine_tenant_placement("balanced", make_infra())


def test_dedicated_uses_requested_region():
    config = determine_tenant_placement(
        "dedicated", make_infra(), PlacementRequirements(region="us-east")
    )
    assert config.isolation_level is IsolationLevel.CLUSTER
    assert config.frontend_region == config.backend_region == "us-east"
    assert config.frontend_base_url is None


def test_dedicated_falls_back_to_default_region():
    config = determine_tenant_placement("dedicated", make_infra())
    assert config.frontend_region == "eu-west"


@pytest.mark.parametrize(
    ("dedicated", "level"),
    [(False, IsolationLevel.POD), (True, IsolationLevel.CLUSTER)],
)
def test_region_specific_placement(dedicated, level):
    config = determine_tenant_placement(
        "region-specific",
        make_infra(),
        PlacementRequirements(region="eu-central", data_residency=True, dedicated_resources=dedicated),
    )
    assert config.isolation_level is level
    assert config.database_region == "eu-central"
    assert config.frontend_region == config.backend_region == "eu-central"


def test_unknown_strategy_is_rejected():
    with pytest.raises(ValueError):
        determine_tenant_placement("round-robin", make_infra())


def test_cluster_capacity_must_be_positive():
    with pytest.raises(ValueError):
        ClusterConfig(id="x", region="r", capacity=0)


# ── Validation ───────────────────────────────────────────────


def test_valid_config():
    result = validate_routing_config(
        DeploymentConfig(
            isolation_level=IsolationLevel.CLUSTER,
            frontend_base_url="https://acme.eu.example.com",
            backend_base_url="https://api.acme.eu.example.com",
        )
    )
    assert result.valid
    assert result.errors == []


@pytest.mark.parametrize(
    "url",
    ["not a url", "acme.example.com", "http://exa mple.com", "http://:80", "https://a b/c"],
)
def test_invalid_frontend_url(url):
    result = validate_routing_config(
        DeploymentConfig(isolation_level=IsolationLevel.POD, frontend_base_url=url)
    )
    assert not result.valid
    assert "Invalid frontendBaseUrl format" in result.errors


def test_invalid_backend_url():
    result = validate_routing_config(
        DeploymentConfig(isolation_level=IsolationLevel.POD, backend_base_url="http://:8080/api")
    )
    assert result.errors == ["Invalid backendBaseUrl format"]


@pytest.mark.parametrize("url", ["http://localhost:3000", "https://acme.eu.example.com/app"])
def test_valid_base_urls(url):
    config = DeploymentConfig(isolation_level=IsolationLevel.POD, frontend_base_url=url, backend_base_url=url)
    assert validate_routing_config(config).valid


def test_shared_with_dedicated_url():
    result = validate_routing_config(
        DeploymentConfig(isolation_level=IsolationLevel.SHARED, backend_base_url="https://api.example.com")
    )
    assert result.errors == ["Shared isolation level should not have dedicated URLs"]


def test_region_isolation_needs_frontend_region():
    result = validate_routing_config(DeploymentConfig(isolation_level=IsolationLevel.REGION))
    assert result.errors == ["Region-level isolation requires frontendRegion"]

    ok = validate_routing_config(
        DeploymentConfig(isolation_level=IsolationLevel.REGION, frontend_region="eu-west")
    )
    assert ok.valid


def test_errors_accumulate():
    result = validate_routing_config(
        DeploymentConfig(isolation_level=IsolationLevel.SHARED, frontend_base_url="acme")
    )
    assert result.errors == [
        "Invalid frontendBaseUrl format",
        "Shared isolation level should not have dedicated URLs",
    ]


# ── Migration ────────────────────────────────────────────────


def test_same_level_migration_is_low_complexity():
    tenant = make_tenant(DeploymentConfig(isolation_level=IsolationLevel.POD))
    plan = plan_tenant_migration(tenant, DeploymentConfig(isolation_level=IsolationLevel.POD, frontend_cluster="b"))
    assert plan.complexity is Complexity.LOW
    assert not plan.downtime
    assert len(plan.steps) == 3


def test_missing_config_counts_as_shared():
    plan = plan_tenant_migration(make_tenant(), DeploymentConfig())
    assert plan.complexity is Complexity.LOW


def test_upgrade_is_high_complexity():
    plan = plan_tenant_migration(make_tenant(), DeploymentConfig(isolation_level=IsolationLevel.CLUSTER))
    assert plan.complexity is Complexity.HIGH
    assert plan.downtime
    assert len(plan.steps) == 8
    assert plan.steps[0] == "Provision new infrastructure"


def test_cluster_to_region_is_an_upgrade():
    tenant = make_tenant(DeploymentConfig(isolation_level=IsolationLevel.CLUSTER))
    plan = plan_tenant_migration(tenant, DeploymentConfig(isolation_level=IsolationLevel.REGION))
    assert plan.complexity is Complexity.HIGH


def test_downgrade_is_medium_complexity():
    tenant = make_tenant(DeploymentConfig(isolation_level=IsolationLevel.CLUSTER))
    plan = plan_tenant_migration(tenant, DeploymentConfig(isolation_level=IsolationLevel.SHARED))
    assert plan.complexity is Complexity.MEDIUM
    assert plan.downtime
    assert "Migrate data to shared infrastructure" in plan.steps


# ── Request routing ──────────────────────────────────────────


DEDICATED = DeploymentConfig(
    isolation_level=IsolationLevel.CLUSTER,
    frontend_base_url="https://acme.eu.example.com",
    backend_base_url="https://api.acme.eu.example.com/",
)


def test_shared_tenant_never_redirects():
    assert not check_tenant_routing(make_tenant(), "acme.example.com").should_redirect
    shared = make_tenant(DeploymentConfig(isolation_level=IsolationLevel.SHARED))
    assert not check_tenant_routing(shared, "acme.example.com").should_redirect


def test_dedicated_tenant_redirects_to_its_frontend():
    decision = check_tenant_routing(make_tenant(DEDICATED), "acme.example.com")
    assert decision.should_redirect
    assert decision.target_url == "https://acme.eu.example.com"
    assert decision.reason == "Tenant has cluster-level isolation"


def test_no_redirect_when_already_on_target_host():
    decision = check_tenant_routing(make_tenant(DEDICATED), "acme.eu.example.com")
    assert not decision.should_redirect


def test_isolated_without_url_stays():
    tenant = make_tenant(DeploymentConfig(isolation_level=IsolationLevel.POD))
    assert not check_tenant_routing(tenant, "acme.example.com", "backend").should_redirect


def test_resource_urls_use_dedicated_bases():
    tenant = make_tenant(DEDICATED)
    assert build_tenant_resource_url(tenant, "dashboard") == "https://acme.eu.example.com/dashboard"
    assert get_tenant_api_url(tenant, "/users") == "https://api.acme.eu.example.com/users"


def test_frontend_url_falls_back_to_subdomain(settings):
    tenant = make_tenant()
    assert tenant.frontend_url(settings) == "http://acme.localhost:3000"
    assert tenant.backend_url(settings) == settings.api_base_url

    production = settings.model_copy(update={"environment": "production", "main_domain": "example.com"})
    assert tenant.frontend_url(production) == "https://acme.example.com"


def test_frontend_url_matches_tenant_subdomain_url(settings):
    tenant = make_tenant(code="beauty")
    custom_port = settings.model_copy(update={"frontend_port": 8080})
    assert tenant.frontend_url(custom_port) == "http://beauty.localhost:8080"
    assert f"{tenant.frontend_url(custom_port)}/products" == build_tenant_url("beauty", "products", custom_port)


def test_deployment_summary():
    assert make_tenant().deployment_summary() == "Shared infrastructure"
    tenant = make_tenant(DeploymentConfig(isolation_level=IsolationLevel.REGION, frontend_region="eu-west"))
    assert tenant.deployment_summary() == "Region-level isolation • Region: eu-west"
    assert tenant.has_dedicated_infrastructure()


@pytest.mark.asyncio
async def test_resolve_tenant_routing():
    tenants = {"acme": make_tenant(DEDICATED)}

    async def registry(code: str) -> Tenant | None:
        return tenants.get(code)

    decision = await resolve_tenant_routing("acme", "http://acme.localhost:3000/dashboard", registry)
    assert decision.should_redirect
    assert decision.target_url == "https://acme.eu.example.com"

    missing = await resolve_tenant_routing("ghost", "http://ghost.localhost:3000/", registry)
    assert not missing.should_redirect
    assert missing.reason == "Tenant not found"
