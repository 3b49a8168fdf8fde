"""/rbac endpoints: roles, permissions, modules, operations and user roles.

Every method takes an optional ``tenant_code``; when given, the call is made
against that tenant's RBAC store with its API key.
"""

from typing import Any
from urllib.parse import quote

from app.models.rbac import Module, Operation, Permission, PermissionRef, Role
from app.services.backend.base import BackendApi


class RbacApi(BackendApi):
    async def _call(
        self,
        path: str,
        tenant_code: str | None,
        *,
        method: str = "GET",
        body: Any = None,
    ) -> Any:
        return await self.client.request(
            f"/rbac{path}", method=method, body=body, **self.tenant_scope(tenant_code)
        )

    # ── Roles ───────────────────────────────────────────────

    async def create_role(self, data: dict, tenant_code: str | None = None) -> Role:
        return Role.model_validate(await self._call("/roles", tenant_code, method="POST", body=data))

    async def get_roles(self, tenant_code: str | None = None) -> list[Role]:
        return [Role.model_validate(item) for item in await self._call("/roles", tenant_code) or []]

    async def get_role_by_id(self, role_id: str, tenant_code: str | None = None) -> Role:
        return Role.model_validate(await self._call(f"/roles/{quote(role_id)}", tenant_code))

    async def update_role(self, role_id: str, data: dict, tenant_code: str | None = None) -> Role:
        data = await self._call(f"/roles/{quote(role_id)}", tenant_code, method="PUT", body=data)
        return Role.model_validate(data)

    async def delete_role(self, role_id: str, tenant_code: str | None = None) -> dict:
        return await self._call(f"/roles/{quote(role_id)}", tenant_code, method="DELETE")

    # ── Role permissions ────────────────────────────────────

    async def assign_permission_to_role(
        self, role_id: str, permission: PermissionRef, tenant_code: str | None = None
    ) -> dict:
        return await self._call(
            f"/roles/{quote(role_id)}/permissions",
            tenant_code,
            method="POST",
            body=permission.to_wire(),
        )

    async def assign_permissions_bulk(
        self, role_id: str, permissions: list[PermissionRef], tenant_code: str | None = None
    ) -> dict:
        return await self._call(
            f"/roles/{quote(role_id)}/permissions/bulk",
            tenant_code,
            method="POST",
            body={"permissions": [p.to_wire() for p in permissions]},
        )

    async def remove_permission_from_role(
        self, role_id: str, permission_id: str, tenant_code: str | None = None
    ) -> dict:
        return await self._call(
            f"/roles/{quote(role_id)}/permissions/{quote(permission_id)}",
            tenant_code,
            method="DELETE",
        )

    # ── Permissions ─────────────────────────────────────────

    async def create_permission(self, permission: PermissionRef, tenant_code: str | None = None) -> Permission:
        data = await self._call("/permissions", tenant_code, method="POST", body=permission.to_wire())
        return Permission.model_validate(data)

    async def get_permissions(self, tenant_code: str | None = None) -> list[Permission]:
        data = await self._call("/permissions", tenant_code)
        return [Permission.model_validate(item) for item in data or []]

    async def get_permission_by_id(self, permission_id: str, tenant_code: str | None = None) -> Permission:
        return Permission.model_validate(await self._call(f"/permissions/{quote(permission_id)}", tenant_code))

    async def delete_permission(self, permission_id: str, tenant_code: str | None = None) -> dict:
        return await self._call(f"/permissions/{quote(permission_id)}", tenant_code, method="DELETE")

    # ── Modules ─────────────────────────────────────────────

    async def create_module(self, key: str, description: str = "", tenant_code: str | None = None) -> Module:
        data = await self._call(
            "/modules", tenant_code, method="POST", body={"key": key, "description": description}
        )
        return Module.model_validate(data)

    async def get_modules(self, tenant_code: str | None = None) -> list[Module]:
        return [Module.model_validate(item) for item in await self._call("/modules", tenant_code) or []]

    async def get_module_by_id(self, module_id: str, tenant_code: str | None = None) -> Module:
        return Module.model_validate(await self._call(f"/modules/{quote(module_id)}", tenant_code))

    async def get_module_by_key(self, key: str, tenant_code: str | None = None) -> Module:
        return Module.model_validate(await self._call(f"/modules/key/{quote(key, safe='')}", tenant_code))

    async def update_module(self, module_id: str, data: dict, tenant_code: str | None = None) -> Module:
        data = await self._call(f"/modules/{quote(module_id)}", tenant_code, method="PUT", body=data)
        return Module.model_validate(data)

    async def delete_module(self, module_id: str, tenant_code: str | None = None) -> dict:
        return await self._call(f"/modules/{quote(module_id)}", tenant_code, method="DELETE")

    # ── Operations ──────────────────────────────────────────

    async def create_operation(self, key: str, description: str = "", tenant_code: str | None = None) -> Operation:
        data = await self._call(
            "/operations", tenant_code, method="POST", body={"key": key, "description": description}
        )
        return Operation.model_validate(data)

    async def get_operations(self, tenant_code: str | None = None) -> list[Operation]:
        return [Operation.model_validate(item) for item in await self._call("/operations", tenant_code) or []]

    async def get_operation_by_id(self, operation_id: str, tenant_code: str | None = None) -> Operation:
        return Operation.model_validate(await self._call(f"/operations/{quote(operation_id)}", tenant_code))

    async def get_operation_by_key(self, key: str, tenant_code: str | None = None) -> Operation:
        data = await self._call(f"/operations/key/{quote(key, safe='')}", tenant_code)
        return Operation.model_validate(data)

    async def update_operation(self, operation_id: str, data: dict, tenant_code: str | None = None) -> Operation:
        data = await self._call(f"/operations/{quote(operation_id)}", tenant_code, method="PUT", body=data)
        return Operation.model_validate(data)

    async def delete_operation(self, operation_id: str, tenant_code: str | None = None) -> dict:
        return await self._call(f"/operations/{quote(operation_id)}", tenant_code, method="DELETE")

    # ── User roles ──────────────────────────────────────────

    async def assign_role_to_user(self, user_id: str, role_id: str, tenant_code: str | None = None) -> dict:
        return await self._call(
            f"/users/{quote(user_id)}/roles", tenant_code, method="POST", body={"roleId": role_id}
        )

    async def get_user_roles(self, user_id: str, tenant_code: str | None = None) -> Any:
        return await self._call(f"/users/{quote(user_id)}/roles", tenant_code)

    async def remove_role_from_user(self, user_id: str, role_id: str, tenant_code: str | None = None) -> dict:
        return await self._call(
            f"/users/{quote(user_id)}/roles/{quote(role_id)}", tenant_code, method="DELETE"
        )
