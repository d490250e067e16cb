"""Enrichment merge tests — nested/flat merge rules and batch classification.

Tests cover:
    - Nested success attaches payload under the field, no error key
    - Nested failure keeps primary fields, nulls the field, adds error
    - Flat success merges payload fields into the record
    - Flat failure adds only the error annotation
    - Flat merge with a non-mapping payload is a contract violation
    - Primary item never mutated
    - summarize classifies all/partial/none failed

Design Decisions:
    - Pure core function: no mocks, no fixtures, just data in → data out
"""

import pytest

from storefront_proxy.core.enrichment import (
    AggregateOutcome,
    EnrichmentFailure,
    EnrichmentSuccess,
    merge_enrichment,
    summarize,
)


def test_nested_success_attaches_payload_under_field():
    item = {"SkuId": 1, "ProductId": 10}
    merged = merge_enrichment(
        item, EnrichmentSuccess({"Id": 1, "NameComplete": "Shoe"}), field="skuDetails",
    )
    assert merged == {
        "SkuId": 1, "ProductId": 10,
        "skuDetails": {"Id": 1, "NameComplete": "Shoe"},
    }
    assert "error" not in merged


def test_nested_failure_nulls_field_and_annotates():
    item = {"id": "7", "quantity": 2}
    merged = merge_enrichment(
        item, EnrichmentFailure("Failed to fetch SKU details"), field="skuDetails",
    )
    assert merged == {
        "id": "7", "quantity": 2,
        "skuDetails": None, "error": "Failed to fetch SKU details",
    }


def test_flat_success_merges_fields():
    merged = merge_enrichment({"id": "A"}, EnrichmentSuccess({"price": 10}))
    assert merged == {"id": "A", "price": 10}


def test_flat_failure_only_adds_error():
    merged = merge_enrichment({"id": "B"}, EnrichmentFailure("boom"))
    assert merged == {"id": "B", "error": "boom"}


def test_custom_error_field():
    merged = merge_enrichment(
        {"id": "B"}, EnrichmentFailure("boom"), error_field="enrichmentError",
    )
    assert merged == {"id": "B", "enrichmentError": "boom"}


def test_flat_merge_rejects_non_mapping_payload():
    with pytest.raises(TypeError):
        merge_enrichment({"id": "A"}, EnrichmentSuccess([1, 2, 3]))


def test_nested_merge_accepts_any_payload():
    merged = merge_enrichment({"productId": "p1"}, EnrichmentSuccess([]), field="skus")
    assert merged == {"productId": "p1", "skus": []}


def test_primary_item_not_mutated():
    item = {"id": "A"}
    merge_enrichment(item, EnrichmentSuccess({"price": 10}))
    merge_enrichment(item, EnrichmentFailure("boom"), field="details")
    assert item == {"id": "A"}


def test_summarize_all_succeeded():
    summary = summarize([EnrichmentSuccess(1), EnrichmentSuccess(2)])
    assert summary.outcome == AggregateOutcome.ALL_SUCCEEDED
    assert summary.total == 2
    assert summary.failed == 0


def test_summarize_partially_failed():
    summary = summarize([EnrichmentSuccess(1), EnrichmentFailure("x"), EnrichmentSuccess(3)])
    assert summary.outcome == AggregateOutcome.PARTIALLY_FAILED
    assert summary.failed == 1


def test_summarize_all_failed():
    summary = summarize([EnrichmentFailure("x"), EnrichmentFailure("y")])
    assert summary.outcome == AggregateOutcome.ALL_FAILED


def test_summarize_empty_batch_counts_as_success():
    summary = summarize([])
    assert summary.outcome == AggregateOutcome.ALL_SUCCEEDED
    assert summary.total == 0
