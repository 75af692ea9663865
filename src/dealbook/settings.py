"""
dealbook.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (service role key, Stripe secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Single settings object injected across layers.

    Every field maps to a `DEALBOOK_`-prefixed environment variable, e.g.
    `DEALBOOK_SUPABASE_URL` or `DEALBOOK_STRIPE_LICENSE_PRICE_ID`.
    """

    model_config = SettingsConfigDict(env_prefix="DEALBOOK_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "dealbook-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Identity provider (Supabase Auth)
    supabase_url: str = "http://localhost:54321"
    supabase_service_role_key: str = Field(default="", repr=False)
    identity_timeout_seconds: float = 10.0

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./dealbook.db"

    # Payments (Stripe Checkout)
    stripe_secret_key: str = Field(default="", repr=False)
    stripe_license_price_id: str | None = None
    client_url: str = "http://localhost:5173"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# A missing price id does not fail boot: it is reported at startup and surfaces as
# ConfigurationError from the checkout gateway.
