"""VTEX Client — wraps httpx.AsyncClient with credential headers and error mapping.

Invariants:
    - Every request carries X-VTEX-API-AppKey and X-VTEX-API-AppToken
    - Transport errors and non-2xx responses mapped to UpstreamError (core/errors.py)
    - Each call attempted once: no retry, timeout inherited from settings
    - One pooled AsyncClient per process; aclose() on shutdown

Design Decisions:
    - Wrapper over raw client: path templates and headers live here, not in services
    - transport injectable: tests swap in httpx.MockTransport without patching
    - Failures logged with the upstream payload (or "No response data") for diagnostics
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from storefront_proxy.config import Settings
from storefront_proxy.core.errors import UpstreamError

logger = logging.getLogger(__name__)

APP_KEY_HEADER = "X-VTEX-API-AppKey"
APP_TOKEN_HEADER = "X-VTEX-API-AppToken"


def _decode_payload(response: httpx.Response) -> Any:
    """Best-effort decode of an upstream body: JSON, else text, else None."""
    try:
        return response.json()
    except ValueError:
        return response.text or None


class VtexClient:
    """Async client for the VTEX catalog, pricing and checkout APIs."""

    def __init__(
        self,
        base_url: str,
        app_key: str,
        app_token: str,
        account_name: str = "",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.account_name = account_name.strip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={APP_KEY_HEADER: app_key, APP_TOKEN_HEADER: app_token},
            timeout=timeout_seconds,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None,
    ) -> "VtexClient":
        return cls(
            base_url=settings.vtex_api_url,
            app_key=settings.vtex_api_app_key,
            app_token=settings.vtex_api_app_token,
            account_name=settings.vtex_account_name,
            timeout_seconds=settings.upstream_timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    # ─── Catalog ────────────────────────────────────────────────

    async def get_sku(self, sku_id: str) -> Any:
        return await self._get(
            f"/api/catalog_system/pvt/sku/stockkeepingunitbyid/{quote(str(sku_id), safe='')}",
        )

    async def get_price(self, sku_id: str) -> Any:
        prefix = f"/{self.account_name}" if self.account_name else ""
        return await self._get(
            f"{prefix}/pricing/prices/{quote(str(sku_id), safe='')}",
        )

    async def list_collection_products(self, collection_id: str) -> list[dict]:
        """Products of a collection: the `Data` array of the upstream envelope."""
        path = f"/api/catalog/pvt/collection/{quote(str(collection_id), safe='')}/products"
        data = await self._get(path)
        products = data.get("Data") if isinstance(data, dict) else None
        return self._records(products, path, data, "collection")

    async def search_products(self, query: str) -> list[dict]:
        path = f"/api/catalog_system/pub/products/search/{quote(query, safe='')}"
        data = await self._get(path)
        return self._records(data, path, data, "search")

    async def get_product_variations(self, product_id: str) -> Any:
        return await self._get(
            f"/api/catalog_system/pub/products/variations/{quote(str(product_id), safe='')}",
        )

    # ─── Checkout ───────────────────────────────────────────────

    async def simulate_order(self, body: dict) -> Any:
        return await self._post("/api/checkout/pub/orderForms/simulation", body)

    async def get_order_form(self) -> Any:
        return await self._get("/api/checkout/pub/orderForm")

    async def get_order_form_by_id(self, order_form_id: str) -> Any:
        return await self._get(
            f"/api/checkout/pub/orderForm/{quote(order_form_id, safe='')}",
        )

    async def add_items_to_cart(
        self, order_form_id: str, order_items: list,
    ) -> tuple[int, Any]:
        """Add items to an order form. Returns upstream (status_code, payload)."""
        response = await self._send(
            "POST",
            f"/api/checkout/pub/orderForm/{quote(order_form_id, safe='')}/items",
            json={"orderItems": order_items},
        )
        return response.status_code, _decode_payload(response)

    # ─── Transport ──────────────────────────────────────────────

    async def _get(self, path: str, params: dict | None = None) -> Any:
        response = await self._send("GET", path, params=params)
        return _decode_payload(response)

    async def _post(self, path: str, body: dict) -> Any:
        response = await self._send("POST", path, json=body)
        return _decode_payload(response)

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Send one request; map transport failures and non-2xx to UpstreamError."""
        url = self._url(path)
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(
                f"Error {'fetching' if method == 'GET' else 'posting'} data "
                f"from VTEX API: {e} (No response data)",
                extra={"upstream_url": url},
            )
            raise UpstreamError(str(e) or type(e).__name__, url=url) from e

        if response.is_error:
            payload = _decode_payload(response)
            logger.error(
                f"Error {'fetching' if method == 'GET' else 'posting'} data "
                f"from VTEX API: HTTP {response.status_code} "
                f"{payload if payload is not None else 'No response data'}",
                extra={"upstream_url": url, "upstream_status": response.status_code},
            )
            raise UpstreamError(
                f"VTEX API error: {response.status_code} {response.reason_phrase}",
                url=url,
                status_code=response.status_code,
                payload=payload,
            )
        return response

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _records(self, records: Any, path: str, payload: Any, label: str) -> list[dict]:
        """Primary listings must be a list of objects; anything else is an upstream fault."""
        if not isinstance(records, list):
            raise UpstreamError(
                f"Unexpected {label} response: expected a list",
                url=self._url(path),
                payload=payload,
            )
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise UpstreamError(
                    f"Unexpected {label} response: item {index} is not an object",
                    url=self._url(path),
                    payload=payload,
                )
        return records
