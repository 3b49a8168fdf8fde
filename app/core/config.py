"""Application settings loaded from environment / .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Runtime ───────────────────────────────────────────
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000"

    # ── Domains ───────────────────────────────────────────
    main_domain: str = "localhost"
    frontend_port: int = 3000

    # ── Backend API ───────────────────────────────────────
    api_base_url: str = "http://localhost:8000"
    request_timeout_seconds: float | None = None  # None = wait indefinitely

    # ── Tenant API keys ───────────────────────────────────
    api_key: str = ""  # fallback key for tenants without their own
    tenant_api_keys: dict[str, str] = {}  # JSON: {"BEAUTY": "...", ...}

    # ── Token cookies ─────────────────────────────────────
    access_token_minutes: int = 15
    refresh_token_days: int = 7
    cookie_secure: bool | None = None  # None = secure only in production

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def secure_cookies(self) -> bool:
        if self.cookie_secure is None:
            return self.is_production
        return self.cookie_secure


@lru_cache
def get_settings() -> Settings:
    return Settings()
