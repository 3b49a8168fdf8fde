"""V1 API router aggregation."""

from fastapi import APIRouter

from app.api.v1.auth import router as auth_router
from app.api.v1.rbac import router as rbac_router
from app.api.v1.services import router as services_router
from app.api.v1.system import router as system_router
from app.api.v1.tenants import router as tenants_router
from app.api.v1.users import router as users_router

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(system_router)
v1_router.include_router(auth_router)
v1_router.include_router(tenants_router)
v1_router.include_router(services_router)
v1_router.include_router(rbac_router)
v1_router.include_router(users_router)
