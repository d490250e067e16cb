"""Error hierarchy tests — codes, statuses and the REST envelope.

Tests cover:
    - Each error maps to its code, category and HTTP status
    - UpstreamPrimaryError inherits upstream url/status from its cause
    - Upstream payload only exposed when include_details=True
    - ConfigurationError names every missing variable
"""

from storefront_proxy.core.errors import (
    ConfigurationError,
    ErrorCategory,
    ErrorSeverity,
    MissingParameterError,
    StorefrontProxyError,
    UpstreamEnrichmentError,
    UpstreamError,
    UpstreamPrimaryError,
)


def _upstream(payload=None):
    return UpstreamError(
        "VTEX API error: 500 Internal Server Error",
        url="https://vtex.test/api/checkout/pub/orderForm/abc/items",
        status_code=500,
        payload=payload,
    )


def test_missing_parameter_is_400_validation():
    err = MissingParameterError("SKU ID is required", "skuId")
    assert err.http_status == 400
    assert err.code == "VALIDATION_ERROR"
    assert err.category == ErrorCategory.VALIDATION
    assert err.field == "skuId"
    assert err.to_response()["error"]["message"] == "SKU ID is required"


def test_upstream_error_carries_url_and_status():
    err = _upstream()
    assert err.http_status == 502
    assert err.context.upstream_status == 500
    assert err.context.upstream_url.endswith("/items")


def test_primary_error_is_500_and_inherits_cause_context():
    err = UpstreamPrimaryError("Error fetching products from VTEX API", cause=_upstream())
    assert err.http_status == 500
    assert err.code == "UPSTREAM_PRIMARY_ERROR"
    assert err.severity == ErrorSeverity.CRITICAL
    assert err.context.upstream_status == 500
    assert err.to_response()["error"]["context"]["upstream_status"] == 500


def test_primary_error_hides_upstream_payload_by_default():
    err = UpstreamPrimaryError("boom", cause=_upstream({"secret": "x"}))
    assert "details" not in err.to_response()["error"]


def test_primary_error_exposes_payload_when_requested():
    payload = {"error": {"message": "Item not available"}}
    err = UpstreamPrimaryError(
        "Failed to add item to cart", cause=_upstream(payload), include_details=True,
    )
    assert err.to_response()["error"]["details"] == payload


def test_configuration_error_lists_missing_variables():
    err = ConfigurationError(["VTEX_API_URL", "VTEX_API_APP_TOKEN"])
    assert "VTEX_API_URL" in err.message
    assert "VTEX_API_APP_TOKEN" in err.message
    assert err.missing == ["VTEX_API_URL", "VTEX_API_APP_TOKEN"]


def test_enrichment_error_records_item_id():
    err = UpstreamEnrichmentError("Failed to fetch SKU details", item_id="42")
    assert err.context.item_id == "42"
    assert err.to_response()["error"]["context"]["item_id"] == "42"
    assert err.http_status is None


def test_all_errors_share_base_class():
    for err in (
        MissingParameterError("x", "f"),
        _upstream(),
        UpstreamPrimaryError("x"),
        UpstreamEnrichmentError("x"),
        ConfigurationError(["X"]),
    ):
        assert isinstance(err, StorefrontProxyError)
