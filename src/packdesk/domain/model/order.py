"""Order aggregate: one customer purchase and its line items.

Orders arrive either from manual entry or from the WooCommerce shop. The
fulfillment core only ever moves an order from an awaiting-fulfillment
status to the ready status; every other transition belongs to flows
outside this package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from packdesk.domain.exceptions import ValidationError
from packdesk.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    FAILED = "failed"
    DRAFT = "draft"
    CHECKOUT_DRAFT = "checkout-draft"
    PRELUATA = "preluata"  # taken over by the warehouse
    PREGATITA = "pregatita"  # picked and stock reserved
    IMPACHETATA = "impachetata"  # legacy name of PREGATITA
    EXPEDIATA = "expediata"
    RETURNATA = "returnata"
    REFUZATA = "refuzata"
    NEONORATA = "neonorata"


class OrderSource(Enum):
    MANUAL = "manual"
    WOOCOMMERCE = "woocommerce"


# ---------------------------------------------------------------------------
# Fulfillment pipeline
# ---------------------------------------------------------------------------
AWAITING_FULFILLMENT = frozenset(
    {OrderStatus.PROCESSING, OrderStatus.PRELUATA, OrderStatus.ON_HOLD}
)
READY_STATUS = OrderStatus.PREGATITA


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OrderLineItem:
    """A product line on an order, priced at the time the order was placed.

    ``picked`` is set on every line once the order is marked ready; the
    scanning workflow counts units on the pick list instead.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money
    picked: bool = False

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    The ``__init__`` is intentionally simple so repositories can
    reconstitute stored documents without re-validating them.
    """

    id: str
    order_number: str
    customer_name: str
    items: list[OrderLineItem]
    status: OrderStatus = OrderStatus.PROCESSING
    source: OrderSource = OrderSource.MANUAL
    external_id: int | None = None
    ordered_at: datetime = field(default_factory=_utcnow)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    fulfilled_at: datetime | None = None
    fulfilled_by: str | None = None

    # --- State transitions ----------------------------------------------------

    def mark_ready(self, at: datetime | None = None, by: str | None = None) -> None:
        """Transition an awaiting-fulfillment order to the ready status.

        Stock must already have been decremented for every line item
        (coordinated by the fulfillment committer).
        """
        if not self.is_awaiting_fulfillment:
            raise ValidationError(
                f"Cannot mark order #{self.order_number} as ready — "
                f"current status is {self.status.value}"
            )
        stamp = at or _utcnow()
        self.status = READY_STATUS
        self.updated_at = stamp
        self.fulfilled_at = stamp
        self.fulfilled_by = by
        for item in self.items:
            item.picked = True

    # --- Computed properties --------------------------------------------------

    @property
    def is_awaiting_fulfillment(self) -> bool:
        return self.status in AWAITING_FULFILLMENT

    @property
    def is_external(self) -> bool:
        """True if the order mirrors an order in the WooCommerce shop."""
        return self.source == OrderSource.WOOCOMMERCE and self.external_id is not None

    @property
    def total(self) -> Money:
        if not self.items:
            return Money.zero()
        result = Money.zero(self.items[0].unit_price.currency)
        for item in self.items:
            result = result + item.line_total
        return result
