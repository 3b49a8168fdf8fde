"""Tenant users, fetched with the tenant's API key."""

from typing import Any

from fastapi import APIRouter, status

from app.api.deps import Client, CurrentTenant
from app.services.backend.users import UserApi

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
async def list_users(tenant: CurrentTenant, client: Client) -> list[dict]:
    return await UserApi(client).get_all(tenant.code)


@router.get("/{user_id}")
async def get_user(user_id: str, tenant: CurrentTenant, client: Client) -> dict:
    return await UserApi(client).get_by_id(user_id, tenant.code)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(body: dict[str, Any], tenant: CurrentTenant, client: Client) -> dict:
    return await UserApi(client).create(body, tenant.code)


@router.put("/{user_id}")
async def update_user(user_id: str, body: dict[str, Any], tenant: CurrentTenant, client: Client) -> dict:
    return await UserApi(client).update(user_id, body, tenant.code)


@router.delete("/{user_id}")
async def delete_user(user_id: str, tenant: CurrentTenant, client: Client) -> dict:
    return await UserApi(client).delete(user_id, tenant.code)
