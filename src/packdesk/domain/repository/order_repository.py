"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from packdesk.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def list_by_status(self, statuses: Iterable[OrderStatus]) -> list[Order]:
        """Return every order in one of ``statuses``, oldest order date first."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order."""
