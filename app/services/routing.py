"""Tenant deployment routing: placement, validation and migration planning.

Routing is data-driven: a tenant's ``DeploymentConfig`` decides where its
traffic goes. Nothing in this module talks to infrastructure; the functions
only compute configurations, decisions and advisory plans.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Literal
from urllib.parse import urlparse

from pydantic import AnyUrl, BaseModel, TypeAdapter, ValidationError

from app.models.infrastructure import InfrastructureConfig
from app.models.tenant import DeploymentConfig, IsolationLevel, Tenant

Target = Literal["frontend", "backend"]
TenantRegistry = Callable[[str], Awaitable[Tenant | None]]

# shared < pod < cluster < region
_ISOLATION_RANK = {
    IsolationLevel.SHARED: 0,
    IsolationLevel.POD: 1,
    IsolationLevel.CLUSTER: 2,
    IsolationLevel.REGION: 3,
}


class PlacementStrategy(StrEnum):
    SHARED = "shared"
    BALANCED = "balanced"
    DEDICATED = "dedicated"
    REGION_SPECIFIC = "region-specific"


class PlacementRequirements(BaseModel):
    region: str | None = None
    data_residency: bool = False
    dedicated_resources: bool = False


class Complexity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class RoutingDecision:
    should_redirect: bool
    target_url: str | None = None
    reason: str | None = None


@dataclass
class RoutingValidation:
    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass
class MigrationPlan:
    steps: list[str]
    downtime: bool
    complexity: Complexity


# ── Placement ────────────────────────────────────────────────


def determine_tenant_placement(
    strategy: PlacementStrategy | str,
    infrastructure: InfrastructureConfig,
    requirements: PlacementRequirements | None = None,
) -> DeploymentConfig:
    """Deployment configuration for a new tenant under ``strategy``."""
    strategy = PlacementStrategy(strategy)
    requirements = requirements or PlacementRequirements()

    if strategy is PlacementStrategy.SHARED:
        return DeploymentConfig(isolation_level=IsolationLevel.SHARED)

    if strategy is PlacementStrategy.BALANCED:
        if not infrastructure.clusters:
            raise ValueError("Balanced placement needs at least one cluster")
        # min() keeps the first cluster on exact ties
        cluster = min(infrastructure.clusters, key=lambda c: c.load_ratio)
        return DeploymentConfig(
            isolation_level=IsolationLevel.POD,
            frontend_cluster=cluster.id,
            backend_cluster=cluster.id,
            frontend_region=cluster.region,
            backend_region=cluster.region,
        )

    region = requirements.region or infrastructure.default_region
    if strategy is PlacementStrategy.DEDICATED:
        # Base URLs are filled in once the cluster is provisioned
        return DeploymentConfig(
            isolation_level=IsolationLevel.CLUSTER,
            frontend_region=region,
            backend_region=region,
        )

    return DeploymentConfig(
        isolation_level=IsolationLevel.CLUSTER if requirements.dedicated_resources else IsolationLevel.POD,
        frontend_region=region,
        backend_region=region,
        database_region=region,
    )


# ── Validation ───────────────────────────────────────────────


_URL = TypeAdapter(AnyUrl)


def _is_absolute_url(value: str) -> bool:
    try:
        _URL.validate_python(value)
    except ValidationError:
        return False
    return True


def validate_routing_config(config: DeploymentConfig) -> RoutingValidation:
    errors = []

    if config.frontend_base_url and not _is_absolute_url(config.frontend_base_url):
        errors.append("Invalid frontendBaseUrl format")
    if config.backend_base_url and not _is_absolute_url(config.backend_base_url):
        errors.append("Invalid backendBaseUrl format")

    if config.isolation_level is IsolationLevel.SHARED and (
        config.frontend_base_url or config.backend_base_url
    ):
        errors.append("Shared isolation level should not have dedicated URLs")
    if config.isolation_level is IsolationLevel.REGION and not config.frontend_region:
        errors.append("Region-level isolation requires frontendRegion")

    return RoutingValidation(valid=not errors, errors=errors)


# ── Migration planning ───────────────────────────────────────


def plan_tenant_migration(tenant: Tenant, target: DeploymentConfig) -> MigrationPlan:
    """Advisory steps for moving ``tenant`` to ``target``; nothing is executed."""
    current_level = tenant.deployment_config.level if tenant.deployment_config else IsolationLevel.SHARED
    target_level = target.level

    if current_level is target_level:
        return MigrationPlan(
            steps=[
                "Update routing configuration in database",
                "Update DNS if URLs changed",
                "Reload load balancer configuration",
            ],
            downtime=False,
            complexity=Complexity.LOW,
        )

    if _ISOLATION_RANK[target_level] > _ISOLATION_RANK[current_level]:
        return MigrationPlan(
            steps=[
                "Provision new infrastructure",
                "Migrate database (if needed)",
                "Deploy application to new infrastructure",
                "Update routing configuration",
                "Test in new environment",
                "Update DNS",
                "Monitor for issues",
                "Decommission old infrastructure",
            ],
            downtime=True,
            complexity=Complexity.HIGH,
        )

    return MigrationPlan(
        steps=[
            "Backup current configuration",
            f"Migrate data to {target_level.value} infrastructure",
            "Update routing configuration",
            f"Test in {target_level.value} environment",
            "Update DNS",
        ],
        downtime=True,
        complexity=Complexity.MEDIUM,
    )


# ── Request routing ──────────────────────────────────────────


def check_tenant_routing(tenant: Tenant, current_host: str, target: Target = "frontend") -> RoutingDecision:
    """Should a request for ``tenant`` on ``current_host`` go to dedicated infrastructure?"""
    config = tenant.deployment_config
    if config is None or config.isolation_level is IsolationLevel.SHARED:
        return RoutingDecision(should_redirect=False)

    target_url = config.frontend_base_url if target == "frontend" else config.backend_base_url
    if not target_url:
        return RoutingDecision(should_redirect=False)

    if urlparse(target_url).hostname == current_host:
        return RoutingDecision(should_redirect=False)

    return RoutingDecision(
        should_redirect=True,
        target_url=target_url,
        reason=f"Tenant has {config.level.value}-level isolation",
    )


def build_tenant_resource_url(tenant: Tenant, path: str = "/", target: Target = "frontend") -> str:
    base_url = tenant.frontend_url() if target == "frontend" else tenant.backend_url()
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base_url.rstrip('/')}{path}"


def get_tenant_api_url(tenant: Tenant, endpoint: str) -> str:
    return build_tenant_resource_url(tenant, endpoint, "backend")


async def resolve_tenant_routing(
    tenant_code: str,
    current_url: str,
    registry: TenantRegistry,
) -> RoutingDecision:
    """Look the tenant up and decide whether its frontend lives elsewhere."""
    tenant = await registry(tenant_code)
    if tenant is None:
        return RoutingDecision(should_redirect=False, reason="Tenant not found")
    return check_tenant_routing(tenant, urlparse(current_url).hostname or "", "frontend")
