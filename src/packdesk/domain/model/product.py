"""Product aggregate.

Products live independently of orders. The fulfillment core reads their
barcodes to build the scan index and writes their stock quantity when a
batch of orders is committed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from packdesk.domain.exceptions import ValidationError
from packdesk.domain.model.value_objects import Money


@dataclass
class Product:
    """A stocked product.

    Invariant: ``quantity`` never goes below zero.
    """

    id: str
    name: str
    quantity: int
    min_quantity: int = 0
    barcode: str | None = None
    price: Money = field(default_factory=Money.zero)
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def has_stock_for(self, quantity: int) -> bool:
        return self.quantity >= quantity

    def remove_stock(self, quantity: int, at: datetime | None = None) -> None:
        """Take ``quantity`` units out of stock."""
        if quantity <= 0:
            raise ValidationError("Removal quantity must be positive")
        if not self.has_stock_for(quantity):
            raise ValidationError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, have {self.quantity})"
            )
        self.quantity -= quantity
        self.updated_at = at or datetime.now(timezone.utc)

    def set_stock(self, quantity: int, at: datetime | None = None) -> None:
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        self.quantity = quantity
        self.updated_at = at or datetime.now(timezone.utc)

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_quantity
