"""Roles, permissions, modules and operations."""

from app.models.base import BaseRecord, WireModel


class Role(BaseRecord):
    name: str
    description: str = ""
    is_system: bool = False
    created_by: str | None = None
    updated_by: str | None = None


class Permission(BaseRecord):
    module_key: str
    operation_key: str


class PermissionRef(WireModel):
    module_key: str
    operation_key: str


class Module(BaseRecord):
    key: str
    description: str = ""


class Operation(BaseRecord):
    key: str
    description: str = ""
