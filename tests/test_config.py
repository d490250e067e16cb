"""Configuration tests — required VTEX settings and ConfigurationError mapping.

Tests cover:
    - All three VTEX values required; missing or blank → ConfigurationError naming them
    - Trailing slash stripped from the upstream URL
    - Concurrency limit unbounded by default, validated when set
    - Unparseable values (non-JSON list) → ConfigurationError, not a raw traceback
"""

import pytest

from storefront_proxy.config import load_settings
from storefront_proxy.core.errors import ConfigurationError


@pytest.fixture
def vtex_env(monkeypatch):
    monkeypatch.setenv("VTEX_API_URL", "https://store.vtexcommercestable.com.br/")
    monkeypatch.setenv("VTEX_API_APP_KEY", "key")
    monkeypatch.setenv("VTEX_API_APP_TOKEN", "token")
    monkeypatch.delenv("ENRICHMENT_CONCURRENCY_LIMIT", raising=False)
    return monkeypatch


def test_loads_required_values(vtex_env):
    settings = load_settings()
    assert settings.vtex_api_url == "https://store.vtexcommercestable.com.br"
    assert settings.vtex_api_app_key == "key"
    assert settings.vtex_api_app_token == "token"
    assert settings.enrichment_concurrency_limit is None
    assert settings.port == 3000


@pytest.mark.parametrize(
    "missing", ["VTEX_API_URL", "VTEX_API_APP_KEY", "VTEX_API_APP_TOKEN"],
)
def test_missing_required_value_raises(vtex_env, missing):
    vtex_env.delenv(missing)
    with pytest.raises(ConfigurationError) as exc_info:
        load_settings()
    assert exc_info.value.missing == [missing]


def test_blank_value_counts_as_missing(vtex_env):
    vtex_env.setenv("VTEX_API_APP_KEY", "   ")
    with pytest.raises(ConfigurationError) as exc_info:
        load_settings()
    assert "VTEX_API_APP_KEY" in exc_info.value.missing


def test_all_missing_listed_together(vtex_env):
    for name in ("VTEX_API_URL", "VTEX_API_APP_KEY", "VTEX_API_APP_TOKEN"):
        vtex_env.delenv(name)
    with pytest.raises(ConfigurationError) as exc_info:
        load_settings()
    assert set(exc_info.value.missing) == {
        "VTEX_API_URL", "VTEX_API_APP_KEY", "VTEX_API_APP_TOKEN",
    }


def test_concurrency_limit_from_env(vtex_env):
    vtex_env.setenv("ENRICHMENT_CONCURRENCY_LIMIT", "4")
    assert load_settings().enrichment_concurrency_limit == 4


def test_concurrency_limit_must_be_positive(vtex_env):
    vtex_env.setenv("ENRICHMENT_CONCURRENCY_LIMIT", "0")
    with pytest.raises(ConfigurationError) as exc_info:
        load_settings()
    assert exc_info.value.missing == ["ENRICHMENT_CONCURRENCY_LIMIT"]


def test_unparseable_value_raises_configuration_error(vtex_env):
    vtex_env.setenv("CORS_ORIGINS", "a,b")
    with pytest.raises(ConfigurationError) as exc_info:
        load_settings()
    assert exc_info.value.missing == ["CORS_ORIGINS"]
