"""Route Dependencies — shared VTEX client and settings for request handlers.

Invariants:
    - VtexClient created once in lifespan and stored on app.state
    - Handlers never construct clients or read the environment themselves
    - require_param raises MissingParameterError (400) for blank/missing input

Design Decisions:
    - Depends(get_vtex_client) over a module global: tests override via dependency_overrides
"""

from fastapi import Request

from storefront_proxy.config import Settings, get_settings
from storefront_proxy.core.errors import MissingParameterError
from storefront_proxy.infrastructure.vtex_client import VtexClient


def get_vtex_client(request: Request) -> VtexClient:
    return request.app.state.vtex_client


def get_concurrency_limit() -> int | None:
    settings: Settings = get_settings()
    return settings.enrichment_concurrency_limit


def require_param(value: str | None, field: str, message: str) -> str:
    """Return the stripped value or raise a 400 for blank/missing input."""
    if value is None or not value.strip():
        raise MissingParameterError(message, field)
    return value.strip()
