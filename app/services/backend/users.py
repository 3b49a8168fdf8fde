"""/users endpoints (tenant users)."""

from urllib.parse import quote

from app.services.backend.base import BackendApi


class UserApi(BackendApi):
    async def get_all(self, tenant_code: str | None = None) -> list[dict]:
        return await self.client.request("/users", **self.tenant_scope(tenant_code)) or []

    async def get_by_id(self, user_id: str, tenant_code: str | None = None) -> dict:
        return await self.client.request(f"/users/{quote(user_id)}", **self.tenant_scope(tenant_code))

    async def create(self, data: dict, tenant_code: str | None = None) -> dict:
        return await self.client.request(
            "/users", method="POST", body=data, **self.tenant_scope(tenant_code)
        )

    async def update(self, user_id: str, data: dict, tenant_code: str | None = None) -> dict:
        return await self.client.request(
            f"/users/{quote(user_id)}", method="PUT", body=data, **self.tenant_scope(tenant_code)
        )

    async def delete(self, user_id: str, tenant_code: str | None = None) -> dict:
        return await self.client.request(
            f"/users/{quote(user_id)}", method="DELETE", **self.tenant_scope(tenant_code)
        )
