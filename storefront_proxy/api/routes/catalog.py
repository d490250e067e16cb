"""Catalog Routes — SKU, pricing, collection products and product search.

Invariants:
    - Blank/missing identifiers rejected with 400 before any upstream call
    - Local paths match the public contract verbatim (camelCase query names)

Design Decisions:
    - Query params declared Optional so the 400 message stays human-readable
      (MissingParameterError) instead of FastAPI's field-level validation body
"""

import logging

from fastapi import APIRouter, Depends, Query

from storefront_proxy.api.dependencies import (
    get_concurrency_limit, get_vtex_client, require_param,
)
from storefront_proxy.infrastructure.vtex_client import VtexClient
from storefront_proxy.services import catalog

logger = logging.getLogger(__name__)
router = APIRouter(tags=["catalog"])


@router.get("/sku/{sku_id}")
async def get_sku(sku_id: str, client: VtexClient = Depends(get_vtex_client)):
    """SKU details by id."""
    sku_id = require_param(sku_id, "skuId", "SKU ID is required")
    return await catalog.get_sku_details(client, sku_id)


@router.get("/pricing/{sku_id}")
async def get_pricing(sku_id: str, client: VtexClient = Depends(get_vtex_client)):
    """Price of a SKU."""
    sku_id = require_param(sku_id, "skuId", "SKU ID is required")
    return await catalog.get_sku_pricing(client, sku_id)


@router.get("/collectionProduct")
async def collection_products(
    collection_id: str | None = Query(None, alias="collectionId"),
    client: VtexClient = Depends(get_vtex_client),
    concurrency_limit: int | None = Depends(get_concurrency_limit),
):
    """Products of a collection, each enriched with SKU details."""
    collection_id = require_param(collection_id, "collectionId", "Collection ID is required")
    return await catalog.collection_products_with_sku_details(
        client, collection_id, concurrency_limit=concurrency_limit,
    )


@router.get("/searchProducts")
async def search_products(
    q: str | None = Query(None),
    client: VtexClient = Depends(get_vtex_client),
    concurrency_limit: int | None = Depends(get_concurrency_limit),
):
    """Full-text product search, each result enriched with SKU variations."""
    q = require_param(q, "q", "Search query is required")
    return await catalog.search_products_with_skus(
        client, q, concurrency_limit=concurrency_limit,
    )
