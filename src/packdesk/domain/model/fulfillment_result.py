"""Fulfillment result: the outcome of committing one batch of orders.

A fresh result is built for every commit. Each line item's outcome is a
``LineOutcome`` folded into the accumulator, so failures are data rather
than exceptions travelling through the loop.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class LineOutcome(Enum):
    DECREMENTED = "decremented"
    PRODUCT_MISSING = "product_missing"
    INSUFFICIENT_STOCK = "insufficient_stock"
    READ_ERROR = "read_error"
    WRITE_ERROR = "write_error"


@dataclass(frozen=True)
class InsufficientStock:
    product_name: str
    needed: int
    available: int


@dataclass
class ProductUpdateResult:
    succeeded: int = 0
    failed: int = 0
    insufficient_stock: list[InsufficientStock] = field(default_factory=list)

    def record(self, outcome: LineOutcome, shortage: InsufficientStock | None = None) -> None:
        if outcome == LineOutcome.DECREMENTED:
            self.succeeded += 1
            return
        self.failed += 1
        if outcome == LineOutcome.INSUFFICIENT_STOCK and shortage is not None:
            self.insufficient_stock.append(shortage)


@dataclass
class FulfillmentResult:
    """Summary shown to the user after a commit."""

    succeeded: int = 0
    failed: int = 0
    failed_order_ids: list[str] = field(default_factory=list)
    product_updates: ProductUpdateResult = field(default_factory=ProductUpdateResult)
    low_stock: list[str] = field(default_factory=list)
    sync_failures: list[str] = field(default_factory=list)

    def order_succeeded(self) -> None:
        self.succeeded += 1

    def order_failed(self, order_id: str) -> None:
        self.failed += 1
        self.failed_order_ids.append(order_id)

    def flag_low_stock(self, product_name: str) -> None:
        if product_name not in self.low_stock:
            self.low_stock.append(product_name)
