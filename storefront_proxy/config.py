"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - VTEX_API_URL, VTEX_API_APP_KEY, VTEX_API_APP_TOKEN are required and non-blank
    - Missing credentials raise ConfigurationError at startup, never per request
    - Unparseable values (SettingsError) also surface as ConfigurationError
    - get_settings() is cached (lru_cache), single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Settings passed explicitly into VtexClient (not read from ambient state by callers)
    - enrichment_concurrency_limit defaults to None (unbounded): no evidence for a number
"""

import re
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from storefront_proxy.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Upstream (VTEX)
    vtex_api_url: str = Field(min_length=1)
    vtex_api_app_key: str = Field(min_length=1)
    vtex_api_app_token: str = Field(min_length=1)
    vtex_account_name: str = ""

    @field_validator("vtex_api_url", "vtex_api_app_key", "vtex_api_app_token", mode="before")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v

    @field_validator("vtex_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    upstream_timeout_seconds: float = 30.0

    # Fan-out width per request; None = one in-flight call per item
    enrichment_concurrency_limit: int | None = Field(None, ge=1)

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


def load_settings() -> Settings:
    """Build Settings, mapping missing/blank required values to ConfigurationError."""
    try:
        return Settings()
    except ValidationError as e:
        fields = list(dict.fromkeys(
            str(err["loc"][0]).upper() for err in e.errors() if err.get("loc")
        ))
        raise ConfigurationError(fields or ["<unknown>"]) from e
    except SettingsError as e:
        # Unparseable complex value (e.g. CORS_ORIGINS that is not JSON)
        match = re.search(r'field "(\w+)"', str(e))
        raise ConfigurationError([match.group(1).upper() if match else str(e)]) from e


@lru_cache
def get_settings() -> Settings:
    return load_settings()
