"""Root conftest — shared test configuration and fake upstream fixtures."""

import os

# Ensure tests never talk to a real VTEX account
os.environ.setdefault("VTEX_API_URL", "https://vtex.test")
os.environ.setdefault("VTEX_API_APP_KEY", "test-app-key")
os.environ.setdefault("VTEX_API_APP_TOKEN", "test-app-token")

import pytest  # noqa: E402

from storefront_proxy.infrastructure.vtex_client import VtexClient  # noqa: E402
from tests.fake_vtex import FakeVtex  # noqa: E402


@pytest.fixture
def fake_vtex():
    return FakeVtex()


@pytest.fixture
async def vtex_client(fake_vtex):
    """VtexClient wired to the in-process fake upstream."""
    client = VtexClient(
        base_url="https://vtex.test",
        app_key="test-app-key",
        app_token="test-app-token",
        account_name="testaccount",
        transport=fake_vtex.transport(),
    )
    yield client
    await client.aclose()
