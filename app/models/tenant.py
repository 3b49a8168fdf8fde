"""Tenant record and its deployment configuration."""

from enum import StrEnum

from app.core.config import Settings, get_settings
from app.core.tenancy import build_tenant_url
from app.models.base import BaseRecord, WireModel


class IsolationLevel(StrEnum):
    SHARED = "shared"
    POD = "pod"
    CLUSTER = "cluster"
    REGION = "region"


class DeploymentConfig(WireModel):
    """Where a tenant's frontend, backend and data live."""

    isolation_level: IsolationLevel | None = None

    frontend_base_url: str | None = None
    frontend_region: str | None = None
    frontend_cluster: str | None = None

    backend_base_url: str | None = None
    backend_region: str | None = None
    backend_cluster: str | None = None

    # Data residency
    database_region: str | None = None
    database_cluster: str | None = None

    namespace: str | None = None

    @property
    def level(self) -> IsolationLevel:
        return self.isolation_level or IsolationLevel.SHARED


class Tenant(BaseRecord):
    tenant_code: str
    name: str
    db_name: str = ""
    api_key: str | None = None  # only present in registration responses
    deployment_config: DeploymentConfig | None = None

    def frontend_url(self, settings: Settings | None = None) -> str:
        """Dedicated frontend URL, else the tenant's subdomain."""
        if self.deployment_config and self.deployment_config.frontend_base_url:
            return self.deployment_config.frontend_base_url
        return build_tenant_url(self.tenant_code, "", settings).rstrip("/")

    def backend_url(self, settings: Settings | None = None) -> str:
        """Dedicated backend URL, else the shared API."""
        if self.deployment_config and self.deployment_config.backend_base_url:
            return self.deployment_config.backend_base_url
        return (settings or get_settings()).api_base_url

    def has_dedicated_infrastructure(self) -> bool:
        return self.deployment_config is not None and self.deployment_config.isolation_level is not IsolationLevel.SHARED

    def deployment_summary(self) -> str:
        config = self.deployment_config
        if config is None or config.isolation_level is IsolationLevel.SHARED:
            return "Shared infrastructure"

        parts = []
        if config.isolation_level:
            parts.append(f"{config.isolation_level.value.capitalize()}-level isolation")
        region = config.frontend_region or config.backend_region
        if region:
            parts.append(f"Region: {region}")
        return " • ".join(parts) if parts else "Shared infrastructure"


class TenantRegistrationRequest(WireModel):
    tenant_code: str
    name: str


class TenantApiKeyResponse(WireModel):
    """Returned by registration and API key regeneration."""

    tenant_id: str
    tenant_code: str
    api_key: str
