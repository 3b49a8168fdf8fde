"""Role-based access control management.

On tenant and tenant-admin hosts the calls target that tenant's RBAC store;
on the master and platform-admin hosts they target the platform's.
"""

from typing import Any

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from app.api.deps import Client, Context
from app.models.rbac import Module, Operation, Permission, PermissionRef, Role
from app.services.backend.rbac import RbacApi

router = APIRouter(prefix="/rbac", tags=["rbac"])


# ── Schemas ──────────────────────────────────────────────────

class RoleWrite(BaseModel):
    name: str = Field(max_length=255)
    description: str = ""


class KeyedWrite(BaseModel):
    key: str = Field(min_length=1, max_length=100)
    description: str = ""


class BulkPermissions(BaseModel):
    permissions: list[PermissionRef]


class UserRoleAssign(BaseModel):
    role_id: str


# ── Roles ────────────────────────────────────────────────────

@router.get("/roles", response_model=list[Role])
async def list_roles(context: Context, client: Client) -> list[Role]:
    return await RbacApi(client).get_roles(context.tenant_code)


@router.post("/roles", response_model=Role, status_code=status.HTTP_201_CREATED)
async def create_role(body: RoleWrite, context: Context, client: Client) -> Role:
    return await RbacApi(client).create_role(body.model_dump(), context.tenant_code)


@router.get("/roles/{role_id}", response_model=Role)
async def get_role(role_id: str, context: Context, client: Client) -> Role:
    return await RbacApi(client).get_role_by_id(role_id, context.tenant_code)


@router.put("/roles/{role_id}", response_model=Role)
async def update_role(role_id: str, body: RoleWrite, context: Context, client: Client) -> Role:
    return await RbacApi(client).update_role(role_id, body.model_dump(), context.tenant_code)


@router.delete("/roles/{role_id}")
async def delete_role(role_id: str, context: Context, client: Client) -> Any:
    return await RbacApi(client).delete_role(role_id, context.tenant_code)


@router.post("/roles/{role_id}/permissions")
async def assign_permission(role_id: str, body: PermissionRef, context: Context, client: Client) -> Any:
    return await RbacApi(client).assign_permission_to_role(role_id, body, context.tenant_code)


@router.post("/roles/{role_id}/permissions/bulk")
async def assign_permissions_bulk(role_id: str, body: BulkPermissions, context: Context, client: Client) -> Any:
    return await RbacApi(client).assign_permissions_bulk(role_id, body.permissions, context.tenant_code)


@router.delete("/roles/{role_id}/permissions/{permission_id}")
async def remove_permission(role_id: str, permission_id: str, context: Context, client: Client) -> Any:
    return await RbacApi(client).remove_permission_from_role(role_id, permission_id, context.tenant_code)


# ── Permissions, modules, operations ─────────────────────────

@router.get("/permissions", response_model=list[Permission])
async def list_permissions(context: Context, client: Client) -> list[Permission]:
    return await RbacApi(client).get_permissions(context.tenant_code)


@router.post("/permissions", response_model=Permission, status_code=status.HTTP_201_CREATED)
async def create_permission(body: PermissionRef, context: Context, client: Client) -> Permission:
    return await RbacApi(client).create_permission(body, context.tenant_code)


@router.delete("/permissions/{permission_id}")
async def delete_permission(permission_id: str, context: Context, client: Client) -> Any:
    return await RbacApi(client).delete_permission(permission_id, context.tenant_code)


@router.get("/modules", response_model=list[Module])
async def list_modules(context: Context, client: Client) -> list[Module]:
    return await RbacApi(client).get_modules(context.tenant_code)


@router.post("/modules", response_model=Module, status_code=status.HTTP_201_CREATED)
async def create_module(body: KeyedWrite, context: Context, client: Client) -> Module:
    return await RbacApi(client).create_module(body.key, body.description, context.tenant_code)


@router.delete("/modules/{module_id}")
async def delete_module(module_id: str, context: Context, client: Client) -> Any:
    return await RbacApi(client).delete_module(module_id, context.tenant_code)


@router.get("/operations", response_model=list[Operation])
async def list_operations(context: Context, client: Client) -> list[Operation]:
    return await RbacApi(client).get_operations(context.tenant_code)


@router.post("/operations", response_model=Operation, status_code=status.HTTP_201_CREATED)
async def create_operation(body: KeyedWrite, context: Context, client: Client) -> Operation:
    return await RbacApi(client).create_operation(body.key, body.description, context.tenant_code)


@router.delete("/operations/{operation_id}")
async def delete_operation(operation_id: str, context: Context, client: Client) -> Any:
    return await RbacApi(client).delete_operation(operation_id, context.tenant_code)


# ── User roles ───────────────────────────────────────────────

@router.get("/users/{user_id}/roles")
async def user_roles(user_id: str, context: Context, client: Client) -> Any:
    return await RbacApi(client).get_user_roles(user_id, context.tenant_code)


@router.post("/users/{user_id}/roles")
async def assign_user_role(user_id: str, body: UserRoleAssign, context: Context, client: Client) -> Any:
    return await RbacApi(client).assign_role_to_user(user_id, body.role_id, context.tenant_code)


@router.delete("/users/{user_id}/roles/{role_id}")
async def remove_user_role(user_id: str, role_id: str, context: Context, client: Client) -> Any:
    return await RbacApi(client).remove_role_from_user(user_id, role_id, context.tenant_code)
