"""FastAPI application entrypoint."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from urllib.parse import urlencode

import httpx
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse, Response

from app.api.pages import router as pages_router
from app.api.v1 import v1_router
from app.core.config import get_settings
from app.core.cookies import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE, CookieStore
from app.core.errors import ApiError, SessionExpiredError, TenantRequiredError
from app.core.layouts import HOME_PATH, LOGIN_PATH, auth_redirect
from app.core.tenancy import resolve_host
from app.services.token_manager import SingleFlight

logger = logging.getLogger(__name__)

API_PREFIXES = ("/v1", "/health")

_settings = get_settings()
logging.basicConfig(level=_settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # One connection pool for every backend call; timeout=None means unbounded
    app.state.http = httpx.AsyncClient(timeout=_settings.request_timeout_seconds)
    yield
    await app.state.http.aclose()


app = FastAPI(
    title="Tenant Portal",
    version="0.1.0",
    description="Multi-tenant web front end over the platform REST API",
    lifespan=lifespan,
)

# Refreshes in flight, shared by every request this process serves
app.state.refresh_flight = SingleFlight()

# ── CORS ─────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in _settings.allowed_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Host context, cookies and auth gate ──────────────────────

def _is_api_request(request: Request) -> bool:
    return request.url.path.startswith(API_PREFIXES)


@app.middleware("http")
async def portal_context(request: Request, call_next) -> Response:
    settings = get_settings()
    request.state.host_context = resolve_host(request.headers.get("host", ""), settings.main_domain)
    cookies = CookieStore(request.cookies, secure_default=settings.secure_cookies)
    request.state.cookies = cookies

    target = None if _is_api_request(request) else auth_redirect(
        request.url.path, cookies.has(ACCESS_TOKEN_COOKIE)
    )
    if target == LOGIN_PATH:
        target = f"{LOGIN_PATH}?{urlencode({'redirect': request.url.path})}"

    if target is not None:
        logger.info("Auth gate redirecting %s to %s", request.url.path, target)
        response: Response = RedirectResponse(target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    else:
        response = await call_next(request)

    cookies.apply_to(response)
    return response


# ── Error translation ────────────────────────────────────────

@app.exception_handler(SessionExpiredError)
async def session_expired_handler(request: Request, exc: SessionExpiredError) -> Response:
    cookies = getattr(request.state, "cookies", None)
    if cookies is not None:
        cookies.delete(ACCESS_TOKEN_COOKIE)
        cookies.delete(REFRESH_TOKEN_COOKIE)
    logger.info("Session expired on %s", request.url.path)
    if _is_api_request(request):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
    return RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> Response:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(TenantRequiredError)
async def tenant_required_handler(request: Request, exc: TenantRequiredError) -> Response:
    if _is_api_request(request):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})
    return RedirectResponse(HOME_PATH, status_code=status.HTTP_303_SEE_OTHER)


# ── Routes ───────────────────────────────────────────────────
app.include_router(v1_router)
app.include_router(pages_router)


@app.get("/health", tags=["system"])
async def health_check() -> dict:
    return {"status": "ok"}
