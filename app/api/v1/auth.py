"""Authentication endpoints: login, register, session and logout."""

import logging
from typing import Any

import httpx
from fastapi import APIRouter, status
from pydantic import BaseModel, EmailStr, Field

from app.api.deps import Client, Context, Tokens
from app.core.errors import PortalError, SessionExpiredError
from app.core.layouts import DASHBOARD_PATH, LOGIN_PATH
from app.services.backend.auth import AuthApi, extract_token_pair

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


# ── Schemas ──────────────────────────────────────────────────

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    name: str = Field(default="", max_length=255)
    first_name: str | None = None
    last_name: str | None = None


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class AuthResponse(BaseModel):
    authenticated: bool
    redirect: str
    user: dict[str, Any] | None = None


class SessionResponse(BaseModel):
    authenticated: bool
    state: str
    claims: dict[str, Any] | None = None


# ── Routes ───────────────────────────────────────────────────

@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, context: Context, tokens: Tokens, client: Client) -> AuthResponse:
    """Log in against the backend; tenant hosts log in to their tenant."""
    data = await AuthApi(client).login(body.email, body.password, tenant_code=context.tenant_code)

    pair = extract_token_pair(data)
    if pair is not None:
        tokens.set_tokens(pair.access_token, pair.refresh_token)
    else:
        logger.warning("Login response for host %s carried no token pair", context.host)

    return AuthResponse(
        authenticated=pair is not None,
        redirect=DASHBOARD_PATH,
        user=data.get("user") if isinstance(data, dict) else None,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, context: Context, tokens: Tokens, client: Client) -> AuthResponse:
    """Master hosts register platform owners, tenant hosts register tenant users."""
    api = AuthApi(client)
    if context.tenant is None:
        data = await api.register_master(body.name, body.email, body.password)
    else:
        data = await api.register(
            body.email,
            body.password,
            first_name=body.first_name,
            last_name=body.last_name,
            tenant_code=context.tenant.code,
        )

    pair = extract_token_pair(data)
    if pair is not None:
        tokens.set_tokens(pair.access_token, pair.refresh_token)
    return AuthResponse(
        authenticated=pair is not None,
        redirect=DASHBOARD_PATH if pair else LOGIN_PATH,
        user=data.get("user") if isinstance(data, dict) else None,
    )


@router.post("/forgot-password")
async def forgot_password(body: ForgotPasswordRequest, client: Client) -> dict:
    return await AuthApi(client).forgot_password(body.email)


@router.post("/refresh")
async def refresh(tokens: Tokens) -> dict:
    try:
        await tokens.refresh_access_token()
    except (PortalError, httpx.HTTPError) as exc:
        raise SessionExpiredError() from exc
    return {"refreshed": True}


@router.get("/session", response_model=SessionResponse)
async def session(tokens: Tokens) -> SessionResponse:
    """Claims of the current access token, refreshing it first when stale."""
    access_token = tokens.get_access_token()
    if not (access_token and not tokens.is_token_expired(access_token)) and tokens.get_refresh_token():
        try:
            await tokens.refresh_access_token()
        except (PortalError, httpx.HTTPError):
            logger.info("Session refresh failed, treating visitor as logged out")

    state = tokens.state()
    return SessionResponse(
        authenticated=tokens.is_authenticated(),
        state=state.value,
        claims=tokens.get_user_from_token(),
    )


@router.get("/me")
async def me(client: Client) -> Any:
    return await AuthApi(client).get_current_user()


@router.post("/logout")
async def logout(tokens: Tokens, client: Client) -> dict:
    if tokens.is_authenticated():
        await AuthApi(client).logout()
    tokens.clear_tokens()
    return {"message": "Logged out", "redirect": LOGIN_PATH}
