"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from packdesk.domain.exceptions import RepositoryError
from packdesk.domain.model.activity import ActivityEntry
from packdesk.domain.model.order import Order, OrderStatus
from packdesk.domain.model.product import Product
from packdesk.domain.repository.activity_log import ActivityLog
from packdesk.domain.repository.order_repository import OrderRepository
from packdesk.domain.repository.product_repository import ProductRepository
from packdesk.domain.service.order_source_sync import OrderSourceSync, SyncResult


class FakeOrderRepository(OrderRepository):

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._store: dict[str, Order] = {}
        for o in orders or []:
            self._store[o.id] = o

    def list_by_status(self, statuses: Iterable[OrderStatus]) -> list[Order]:
        wanted = set(statuses)
        found = [o for o in self._store.values() if o.status in wanted]
        return sorted(found, key=lambda o: o.ordered_at)

    def get_by_id(self, order_id: str) -> Order | None:
        return self._store.get(order_id)

    def save(self, order: Order) -> None:
        self._store[order.id] = order


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p
        self.lookups: list[str] = []
        self.failing_reads: set[str] = set()
        self.failing_writes: set[str] = set()

    def get_by_id(self, product_id: str) -> Product | None:
        self.lookups.append(product_id)
        if product_id in self.failing_reads:
            raise RepositoryError(f"read rejected for {product_id}")
        found = self._store.get(product_id)
        # Callers get a copy, like a document store hands out fresh records
        return replace(found) if found is not None else None

    def list_all(self) -> list[Product]:
        return [replace(p) for p in self._store.values()]

    def save(self, product: Product) -> None:
        if product.id in self.failing_writes:
            raise RepositoryError(f"write rejected for {product.id}")
        self._store[product.id] = replace(product)


class FakeActivityLog(ActivityLog):

    def __init__(self) -> None:
        self.entries: list[ActivityEntry] = []

    def record(self, entry: ActivityEntry) -> None:
        self.entries.append(entry)


class BrokenActivityLog(ActivityLog):

    def record(self, entry: ActivityEntry) -> None:
        raise RepositoryError("activity sink unavailable")


class FakeOrderSync(OrderSourceSync):

    def __init__(self, result: SyncResult | None = None, error: Exception | None = None) -> None:
        self._result = result or SyncResult(True)
        self._error = error
        self.calls: list[tuple[int, OrderStatus]] = []

    def update_order_status(self, external_id: int, status: OrderStatus) -> SyncResult:
        self.calls.append((external_id, status))
        if self._error is not None:
            raise self._error
        return self._result
