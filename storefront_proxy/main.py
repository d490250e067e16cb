"""Storefront Proxy — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StorefrontProxyError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Settings loaded at import: missing VTEX credentials stop the process before it serves
    - VtexClient created on startup and closed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Local paths kept verbatim (no /api/v1 prefix): existing storefront callers depend on them
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront_proxy import __version__
from storefront_proxy.api.error_handlers import register_error_handlers
from storefront_proxy.api.routes import catalog, checkout, health
from storefront_proxy.config import get_settings
from storefront_proxy.infrastructure.observability import setup_logging
from storefront_proxy.infrastructure.vtex_client import VtexClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.vtex_client = VtexClient.from_settings(settings)
    logger.info(
        "Storefront proxy started",
        extra={"upstream_url": settings.vtex_api_url},
    )
    yield
    await app.state.vtex_client.aclose()
    logger.info("Storefront proxy shutting down")


app = FastAPI(
    title="Storefront Proxy", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(catalog.router)
app.include_router(checkout.router)

register_error_handlers(app)
