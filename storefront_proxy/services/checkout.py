"""Checkout Operations — order simulation, carts, and cart enrichment with SKU details.

Invariants:
    - Simulation items normalized to {id, quantity, seller}; seller defaults to "1"
    - Order form fetch failure fails the whole request (no partial content)
    - productDetails length and order equal orderForm.items; failed items annotated
    - Empty or missing orderForm.items → productDetails == [] (no upstream fan-out)
    - Malformed orderForm.items (not a list of objects) fails the whole request
    - add_to_cart returns the upstream status unchanged; failures carry upstream payload

Design Decisions:
    - Order form returned whole with productDetails appended (callers rely on totals etc.)
"""

import logging
from typing import Any

from storefront_proxy.core.errors import UpstreamError, UpstreamPrimaryError
from storefront_proxy.infrastructure.vtex_client import VtexClient
from storefront_proxy.services.aggregator import aggregate
from storefront_proxy.services.catalog import SKU_DETAILS_FIELD, SKU_FAILURE

logger = logging.getLogger(__name__)

DEFAULT_SELLER = "1"
PRODUCT_DETAILS_FIELD = "productDetails"


def build_simulation_body(
    items: list[dict], postal_code: str, country: str,
) -> dict:
    """Shape a simulation request body for the upstream checkout API."""
    return {
        "items": [
            {
                "id": item.get("id"),
                "quantity": item.get("quantity"),
                "seller": item.get("seller") or DEFAULT_SELLER,
            }
            for item in items
        ],
        "postalCode": postal_code,
        "country": country,
    }


async def simulate_order(
    client: VtexClient, items: list[dict], postal_code: str, country: str,
) -> Any:
    body = build_simulation_body(items, postal_code, country)
    try:
        result = await client.simulate_order(body)
    except UpstreamError as e:
        raise UpstreamPrimaryError(
            "Error simulating order with VTEX API", cause=e,
        ) from e
    logger.debug(f"Simulation result: {result}")
    return result


async def get_cart(client: VtexClient) -> Any:
    try:
        return await client.get_order_form()
    except UpstreamError as e:
        raise UpstreamPrimaryError(
            "Error fetching OrderForm from VTEX API", cause=e,
        ) from e


async def cart_with_product_details(
    client: VtexClient,
    order_form_id: str,
    *,
    concurrency_limit: int | None = None,
) -> dict:
    """Order form plus productDetails: each cart item with its SKU details."""
    try:
        order_form = await client.get_order_form_by_id(order_form_id)
    except UpstreamError as e:
        raise UpstreamPrimaryError(
            "Error combining OrderForm and SKU details", cause=e,
        ) from e
    if not isinstance(order_form, dict):
        raise UpstreamPrimaryError(
            "Error combining OrderForm and SKU details: unexpected order form",
        )

    items = order_form.get("items") or []
    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        raise UpstreamPrimaryError(
            "Error combining OrderForm and SKU details: unexpected order form items",
        )
    if not items:
        return {**order_form, PRODUCT_DETAILS_FIELD: []}

    product_details = await aggregate(
        items,
        lambda item: client.get_sku(item["id"]),
        field=SKU_DETAILS_FIELD,
        error_message=SKU_FAILURE,
        concurrency_limit=concurrency_limit,
        id_field="id",
    )
    return {**order_form, PRODUCT_DETAILS_FIELD: product_details}


async def add_to_cart(
    client: VtexClient, order_form_id: str, order_items: list,
) -> tuple[int, Any]:
    try:
        return await client.add_items_to_cart(order_form_id, order_items)
    except UpstreamError as e:
        raise UpstreamPrimaryError(
            "Failed to add item to cart", cause=e, include_details=True,
        ) from e
