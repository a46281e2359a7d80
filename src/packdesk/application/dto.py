"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PickListLineDTO:
    """Output: one product row of the pick list."""

    product_id: str
    product_name: str
    barcode: str
    fulfilled: int
    required: int
    order_numbers: list[str]

    @property
    def is_complete(self) -> bool:
        return self.fulfilled >= self.required


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "15.00 RON"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    order_number: str
    customer_name: str
    status: str
    source: str
    items: list[OrderLineItemDTO]
    total: str
    ordered_at: str


@dataclass(frozen=True)
class ProductLineDTO:
    id: str
    name: str
    barcode: str
    quantity: int
    min_quantity: int
    low_stock: bool
