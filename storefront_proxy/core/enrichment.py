"""Enrichment Results — tagged per-item outcomes and the rules for merging them into items.

Invariants:
    - Pure module: no IO, no async
    - merge_enrichment never mutates the primary item (always returns a new dict)
    - Success never carries an error annotation; failure always does
    - Failure keeps every primary field; nested mode sets the enrichment field to None

Design Decisions:
    - Tagged result (success/failure dataclasses) over exceptions crossing the join:
      one failing branch cannot unwind its siblings
    - Two merge modes: nested under a field (skuDetails, skus) or flat (fields merged
      into the record); flat mode requires a mapping payload
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from storefront_proxy.core.errors import UpstreamEnrichmentError

DEFAULT_ERROR_FIELD = "error"


@dataclass(frozen=True)
class EnrichmentSuccess:
    """Enrichment call returned a payload."""
    payload: Any


@dataclass(frozen=True)
class EnrichmentFailure:
    """Enrichment call failed; reason is the human-readable annotation."""
    reason: str
    error: UpstreamEnrichmentError | None = None


EnrichmentResult = Union[EnrichmentSuccess, EnrichmentFailure]


class AggregateOutcome(str, Enum):
    """Terminal state of an aggregation whose primary fetch succeeded."""
    ALL_SUCCEEDED = "all_succeeded"
    PARTIALLY_FAILED = "partially_failed"
    ALL_FAILED = "all_failed"


@dataclass(frozen=True)
class AggregateSummary:
    outcome: AggregateOutcome
    total: int
    failed: int


def merge_enrichment(
    item: Mapping[str, Any],
    result: EnrichmentResult,
    *,
    field: str | None = None,
    error_field: str = DEFAULT_ERROR_FIELD,
) -> dict[str, Any]:
    """Combine one primary item with its enrichment result.

    Nested mode (field given):
        success → {**item, field: payload}
        failure → {**item, field: None, error_field: reason}
    Flat mode (field=None):
        success → {**item, **payload}
        failure → {**item, error_field: reason}
    """
    merged = dict(item)
    if isinstance(result, EnrichmentSuccess):
        if field is not None:
            merged[field] = result.payload
            return merged
        if not isinstance(result.payload, Mapping):
            raise TypeError(
                "flat merge requires a mapping payload, "
                f"got {type(result.payload).__name__}",
            )
        merged.update(result.payload)
        return merged

    if field is not None:
        merged[field] = None
    merged[error_field] = result.reason
    return merged


def summarize(results: Sequence[EnrichmentResult]) -> AggregateSummary:
    """Classify a settled batch by how many branches failed."""
    failed = sum(1 for r in results if isinstance(r, EnrichmentFailure))
    total = len(results)
    if failed == 0:
        outcome = AggregateOutcome.ALL_SUCCEEDED
    elif failed == total:
        outcome = AggregateOutcome.ALL_FAILED
    else:
        outcome = AggregateOutcome.PARTIALLY_FAILED
    return AggregateSummary(outcome=outcome, total=total, failed=failed)
