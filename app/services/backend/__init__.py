"""Typed wrappers around the backend REST API, one per resource area."""

from app.services.backend.auth import AuthApi
from app.services.backend.rbac import RbacApi
from app.services.backend.services import ServiceApi
from app.services.backend.tenants import TenantApi
from app.services.backend.users import UserApi

__all__ = ["AuthApi", "RbacApi", "ServiceApi", "TenantApi", "UserApi"]
