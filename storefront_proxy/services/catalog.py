"""Catalog Operations — SKU, pricing, collection and search, with SKU enrichment fan-out.

Invariants:
    - Primary fetch failure raises UpstreamPrimaryError (no partial content)
    - Enrichment failure annotates the one item; list length and order preserved
    - Pass-through operations map UpstreamError to UpstreamPrimaryError (500)

Design Decisions:
    - Services receive the client explicitly (no module-level client): testable with fakes
    - Failure annotations are fixed strings, never upstream internals
"""

import logging
from typing import Any

from storefront_proxy.core.errors import UpstreamError, UpstreamPrimaryError
from storefront_proxy.infrastructure.vtex_client import VtexClient
from storefront_proxy.services.aggregator import aggregate

logger = logging.getLogger(__name__)

SKU_DETAILS_FIELD = "skuDetails"
SKUS_FIELD = "skus"
SKU_FAILURE = "Failed to fetch SKU details"
VARIATIONS_FAILURE = "Failed to fetch SKU variations"


async def get_sku_details(client: VtexClient, sku_id: str) -> Any:
    try:
        return await client.get_sku(sku_id)
    except UpstreamError as e:
        raise UpstreamPrimaryError(
            "Error fetching SKU details from VTEX API", cause=e,
        ) from e


async def get_sku_pricing(client: VtexClient, sku_id: str) -> Any:
    try:
        return await client.get_price(sku_id)
    except UpstreamError as e:
        raise UpstreamPrimaryError(
            "Error fetching pricing details from VTEX API", cause=e,
        ) from e


async def collection_products_with_sku_details(
    client: VtexClient,
    collection_id: str,
    *,
    concurrency_limit: int | None = None,
) -> list[dict]:
    """Products of a collection, each with its SKU details under skuDetails."""
    try:
        products = await client.list_collection_products(collection_id)
    except UpstreamError as e:
        raise UpstreamPrimaryError(
            "Error fetching products from VTEX API", cause=e,
        ) from e
    logger.debug(f"Collection {collection_id}: {len(products)} products")

    return await aggregate(
        products,
        lambda product: client.get_sku(product["SkuId"]),
        field=SKU_DETAILS_FIELD,
        error_message=SKU_FAILURE,
        concurrency_limit=concurrency_limit,
        id_field="SkuId",
    )


async def search_products_with_skus(
    client: VtexClient,
    query: str,
    *,
    concurrency_limit: int | None = None,
) -> list[dict]:
    """Search results, each with its SKU variations under skus."""
    try:
        products = await client.search_products(query)
    except UpstreamError as e:
        raise UpstreamPrimaryError(
            "Error fetching search results from VTEX API", cause=e,
        ) from e

    return await aggregate(
        products,
        lambda product: client.get_product_variations(product["productId"]),
        field=SKUS_FIELD,
        error_message=VARIATIONS_FAILURE,
        concurrency_limit=concurrency_limit,
        id_field="productId",
    )
