"""API test fixtures — FastAPI test client wired to the fake upstream.

Invariants:
    - get_vtex_client overridden per test; overrides cleared afterwards
    - ASGITransport does not run lifespan, so no real VtexClient is ever built
"""

import pytest
from httpx import ASGITransport, AsyncClient

from storefront_proxy.api.dependencies import get_vtex_client
from storefront_proxy.main import app


@pytest.fixture
async def client(vtex_client):
    """FastAPI test client with the VTEX client dependency overridden."""
    app.dependency_overrides[get_vtex_client] = lambda: vtex_client
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
