"""Backend record types, re-exported for convenience."""

from app.models.base import BaseRecord, WireModel
from app.models.infrastructure import ClusterConfig, InfrastructureConfig, RegionConfig
from app.models.rbac import Module, Operation, Permission, PermissionRef, Role
from app.models.service import (
    AppliedService,
    ApplyServiceRequest,
    ApplyServiceResponse,
    EnabledService,
    Service,
)
from app.models.tenant import (
    DeploymentConfig,
    IsolationLevel,
    Tenant,
    TenantApiKeyResponse,
    TenantRegistrationRequest,
)
from app.models.user import User, UserRole

__all__ = [
    "AppliedService",
    "ApplyServiceRequest",
    "ApplyServiceResponse",
    "BaseRecord",
    "ClusterConfig",
    "DeploymentConfig",
    "EnabledService",
    "InfrastructureConfig",
    "IsolationLevel",
    "Module",
    "Operation",
    "Permission",
    "PermissionRef",
    "RegionConfig",
    "Role",
    "Service",
    "Tenant",
    "TenantApiKeyResponse",
    "TenantRegistrationRequest",
    "User",
    "UserRole",
    "WireModel",
]
