"""Security utilities: untrusted JWT claims and tenant API key lookup."""

import math
import re
import time
from typing import Any

from jose import JWTError, jwt

from app.core.config import Settings, get_settings

# ── JWT claims (UNVERIFIED) ──────────────────────────────────


def decode_untrusted_claims(token: str) -> dict[str, Any] | None:
    """Return the JWT payload WITHOUT checking its signature.

    The portal never holds the backend's signing key, so this is only good
    for display (user name, expiry hints). Do not base authorization on it.
    Malformed tokens yield ``None``. python-jose reads the header segment
    too, so a token whose header does not decode counts as malformed even
    when its payload would.
    """
    if not token:
        return None
    try:
        return dict(jwt.get_unverified_claims(token))
    except JWTError:
        return None


def is_token_expired(token: str, now: float | None = None) -> bool:
    """True when ``exp`` is in the past, missing, or the token is unreadable."""
    claims = decode_untrusted_claims(token)
    if not claims:
        return True
    exp = claims.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)) or not math.isfinite(exp):
        return True
    current = time.time() if now is None else now
    return exp < current


# ── Tenant API keys ──────────────────────────────────────────

_NON_ALNUM = re.compile(r"[^A-Z0-9]")


def normalize_tenant_code(tenant_code: str) -> str:
    """``beauty-salon`` -> ``BEAUTY_SALON``."""
    return _NON_ALNUM.sub("_", tenant_code.upper())


def get_api_key_for_tenant(tenant_code: str | None, settings: Settings | None = None) -> str:
    """Tenant-specific API key, falling back to the default key."""
    settings = settings or get_settings()
    if not tenant_code:
        return settings.api_key
    keys = {normalize_tenant_code(code): key for code, key in settings.tenant_api_keys.items()}
    return keys.get(normalize_tenant_code(tenant_code)) or settings.api_key
