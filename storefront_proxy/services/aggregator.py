"""Aggregating Fetcher — concurrent per-item enrichment with partial-failure tolerance.

Invariants:
    - Output length and order equal input length and order (no item dropped)
    - All enrichment calls start before any is awaited; result built after all settle
    - A failing enrichment never cancels siblings and never fails the call
    - Only contract violations (items not a sequence of mappings) raise
    - Each enrichment attempted exactly once: no retries, no caching, no timeout override

Design Decisions:
    - asyncio.gather over per-branch wrappers that never raise: gather's join waits
      for the slowest branch and keeps index order
    - Exception (not BaseException) is absorbed: CancelledError still propagates
    - concurrency_limit=None means unbounded fan-out; a number caps in-flight calls
      via asyncio.Semaphore (value comes from settings, no built-in default)
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from storefront_proxy.core.enrichment import (
    EnrichmentFailure,
    EnrichmentResult,
    EnrichmentSuccess,
    merge_enrichment,
    summarize,
)
from storefront_proxy.core.errors import StorefrontProxyError, UpstreamEnrichmentError

logger = logging.getLogger(__name__)

PrimaryItem = Mapping[str, Any]
Enricher = Callable[[PrimaryItem], Awaitable[Any]]


def _check_items(items: Any) -> None:
    """Reject anything that is not a materialized sequence of mappings."""
    if isinstance(items, (str, bytes, bytearray, Mapping)) or not isinstance(items, Sequence):
        raise TypeError(
            f"items must be a sequence of mappings, got {type(items).__name__}",
        )
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise TypeError(
                f"items[{index}] must be a mapping, got {type(item).__name__}",
            )


def _check_limit(concurrency_limit: int | None) -> None:
    if concurrency_limit is not None and concurrency_limit < 1:
        raise ValueError(
            f"concurrency_limit must be >= 1 or None, got {concurrency_limit}",
        )


def _failure_reason(exc: Exception, error_message: str | None) -> str:
    if error_message:
        return error_message
    if isinstance(exc, StorefrontProxyError):
        return exc.message
    return str(exc) or type(exc).__name__


async def settle_all(
    items: Sequence[PrimaryItem],
    enrich: Enricher,
    *,
    concurrency_limit: int | None = None,
    error_message: str | None = None,
    id_field: str | None = None,
) -> list[EnrichmentResult]:
    """Run enrich(item) for every item concurrently and collect tagged results in order."""
    _check_items(items)
    _check_limit(concurrency_limit)
    semaphore = asyncio.Semaphore(concurrency_limit) if concurrency_limit else None

    async def _settle(item: PrimaryItem) -> EnrichmentResult:
        try:
            if semaphore is None:
                payload = await enrich(item)
            else:
                async with semaphore:
                    payload = await enrich(item)
        except Exception as exc:
            item_id = item.get(id_field) if id_field else None
            reason = _failure_reason(exc, error_message)
            logger.warning(
                f"Enrichment failed for item {item_id}: {exc}",
                extra={"item_id": item_id},
            )
            error = UpstreamEnrichmentError(
                reason, item_id=None if item_id is None else str(item_id),
            )
            error.__cause__ = exc
            return EnrichmentFailure(reason=reason, error=error)
        return EnrichmentSuccess(payload=payload)

    return list(await asyncio.gather(*(_settle(item) for item in items)))


async def aggregate(
    items: Sequence[PrimaryItem],
    enrich: Enricher,
    *,
    field: str | None = None,
    error_message: str | None = None,
    concurrency_limit: int | None = None,
    id_field: str | None = None,
) -> list[dict[str, Any]]:
    """Enrich every primary item concurrently and merge results in input order.

    field: nest the payload under this key; None merges payload fields flat.
    error_message: fixed annotation for failed items; None uses the exception text.
    id_field: item key logged alongside a failed enrichment.
    """
    results = await settle_all(
        items,
        enrich,
        concurrency_limit=concurrency_limit,
        error_message=error_message,
        id_field=id_field,
    )
    summary = summarize(results)
    logger.info(
        f"Aggregated {summary.total} items ({summary.outcome.value})",
        extra={"item_count": summary.total, "failed_count": summary.failed},
    )
    return [
        merge_enrichment(item, result, field=field)
        for item, result in zip(items, results)
    ]
