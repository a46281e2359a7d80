"""Pick-list entries, the per-product view of an aggregated batch.

An entry lives only in memory for one picking session. It is rebuilt from
the open orders after every commit and is never written to the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class OrderContribution:
    """How many units of a product one order asks for."""

    order_id: str
    order_number: str
    quantity: int


@dataclass
class PickListEntry:
    """All units of one product that must be gathered for the batch.

    Invariants:
    - ``fulfilled_count`` is always within ``[0, total_required]``
    - each order appears at most once in ``contributions``
    """

    product_id: str
    product_name: str
    total_required: int
    barcode: str | None = None
    fulfilled_count: int = 0
    contributions: list[OrderContribution] = field(default_factory=list)

    def add_contribution(self, order_id: str, order_number: str, quantity: int) -> None:
        """Add an order's units, merging repeat lines from the same order."""
        self.total_required += quantity
        for contribution in self.contributions:
            if contribution.order_id == order_id:
                contribution.quantity += quantity
                return
        self.contributions.append(OrderContribution(order_id, order_number, quantity))

    # --- Fulfilled-count mutators ---------------------------------------------

    def increment(self) -> bool:
        """Count one picked unit. Returns False if the entry was already full."""
        if self.is_complete:
            return False
        self.fulfilled_count += 1
        return True

    def adjust(self, delta: int) -> None:
        """Move the count by ``delta``, clamped to the valid range."""
        self.fulfilled_count = max(0, min(self.total_required, self.fulfilled_count + delta))

    def toggle_complete(self) -> None:
        if self.is_complete:
            self.fulfilled_count = 0
        else:
            self.fulfilled_count = self.total_required

    # --- Computed properties --------------------------------------------------

    @property
    def is_complete(self) -> bool:
        return self.fulfilled_count >= self.total_required

    @property
    def order_numbers(self) -> list[str]:
        return [c.order_number for c in self.contributions]
