"""Port for pushing order status changes back to the order's source shop."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from packdesk.domain.model.order import OrderStatus


@dataclass(frozen=True)
class SyncResult:
    success: bool
    error: str | None = None


class OrderSourceSync(ABC):

    @abstractmethod
    def update_order_status(self, external_id: int, status: OrderStatus) -> SyncResult:
        """Set the status of ``external_id`` in the source shop."""
