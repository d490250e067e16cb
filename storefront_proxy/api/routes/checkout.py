"""Checkout Routes — order simulation, cart retrieval, cart enrichment, add-to-cart.

Invariants:
    - Missing body fields rejected with 400 before any upstream call
    - add-to-cart mirrors the upstream status code on success

Design Decisions:
    - Bodies parsed by Pydantic (schemas/checkout.py); presence checked here so the
      message matches the public contract ("Items, postalCode, and country are required")
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront_proxy.api.dependencies import (
    get_concurrency_limit, get_vtex_client, require_param,
)
from storefront_proxy.core.errors import MissingParameterError
from storefront_proxy.infrastructure.vtex_client import VtexClient
from storefront_proxy.schemas.checkout import AddToCartRequest, SimulateOrderRequest
from storefront_proxy.services import checkout

logger = logging.getLogger(__name__)
router = APIRouter(tags=["checkout"])


@router.post("/simulateOrder")
async def simulate_order(
    body: SimulateOrderRequest | None = None,
    client: VtexClient = Depends(get_vtex_client),
):
    """Price and shipping simulation for a set of items."""
    if body is None or not body.is_complete():
        raise MissingParameterError(
            "Items, postalCode, and country are required", "items",
        )
    items = [item.model_dump() for item in body.items]
    return await checkout.simulate_order(
        client, items, body.postalCode, body.country,
    )


@router.get("/cart/")
async def get_cart(client: VtexClient = Depends(get_vtex_client)):
    """Fresh order form (new cart)."""
    return await checkout.get_cart(client)


@router.get("/cart-with-product-details/{order_form_id}")
async def cart_with_product_details(
    order_form_id: str,
    client: VtexClient = Depends(get_vtex_client),
    concurrency_limit: int | None = Depends(get_concurrency_limit),
):
    """Order form with each cart item enriched by its SKU details."""
    order_form_id = require_param(order_form_id, "orderFormId", "Order Form ID is required")
    return await checkout.cart_with_product_details(
        client, order_form_id, concurrency_limit=concurrency_limit,
    )


@router.post("/add-to-cart/{order_form_id}")
async def add_to_cart(
    order_form_id: str,
    body: AddToCartRequest | None = None,
    client: VtexClient = Depends(get_vtex_client),
):
    """Add items to an existing order form."""
    if body is None or body.orderItems is None:
        raise MissingParameterError("Item data is required", "orderItems")
    order_form_id = require_param(order_form_id, "orderFormId", "Order Form ID is required")
    status_code, payload = await checkout.add_to_cart(
        client, order_form_id, body.orderItems,
    )
    return JSONResponse(status_code=status_code, content=payload)
