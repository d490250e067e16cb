"""Checkout Schemas — Pydantic request bodies for simulation and add-to-cart.

Invariants:
    - Required fields are Optional here; routes reject missing ones with a short
      human-readable 400 (MissingParameterError), not a field-level 422
    - Unknown item keys pass through untouched (upstream owns item shape)

Design Decisions:
    - field_validator strips text fields so "   " counts as missing
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class SimulationItem(BaseModel):
    """One line of a simulation request."""
    model_config = ConfigDict(extra="allow")

    id: str | int | None = None
    quantity: int | None = None
    seller: str | None = None


class SimulateOrderRequest(BaseModel):
    items: list[SimulationItem] | None = None
    postalCode: str | None = None
    country: str | None = None

    @field_validator("postalCode", "country")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return v.strip() if isinstance(v, str) else v

    def is_complete(self) -> bool:
        return self.items is not None and bool(self.postalCode) and bool(self.country)


class AddToCartRequest(BaseModel):
    orderItems: list[dict[str, Any]] | None = None
