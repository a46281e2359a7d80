"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from packdesk.domain.exceptions import RepositoryError
from packdesk.domain.model.order import Order, OrderLineItem, OrderSource, OrderStatus
from packdesk.domain.model.value_objects import Money, Quantity
from packdesk.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def list_by_status(self, statuses: Iterable[OrderStatus]) -> list[Order]:
        wanted = {s.value for s in statuses}
        orders = [self._to_domain(raw) for raw in self._load_raw() if raw["status"] in wanted]
        return sorted(orders, key=lambda o: o.ordered_at)

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def save(self, order: Order) -> None:
        orders = self._load_raw()

        # Upsert: replace if exists, otherwise append
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                break
        else:
            orders.append(self._to_raw(order))

        self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "customer_name": order.customer_name,
            "status": order.status.value,
            "source": order.source.value,
            "external_id": order.external_id,
            "ordered_at": order.ordered_at.isoformat(),
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "fulfilled_at": order.fulfilled_at.isoformat() if order.fulfilled_at else None,
            "fulfilled_by": order.fulfilled_by,
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                    "picked": item.picked,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["price"]), i.get("currency", "RON")),
                picked=i.get("picked", False),
            )
            for i in raw["items"]
        ]
        fulfilled_at = raw.get("fulfilled_at")
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            customer_name=raw.get("customer_name", ""),
            items=items,
            status=OrderStatus(raw["status"]),
            source=OrderSource(raw.get("source", "manual")),
            external_id=raw.get("external_id"),
            ordered_at=datetime.fromisoformat(raw["ordered_at"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            fulfilled_at=datetime.fromisoformat(fulfilled_at) if fulfilled_at else None,
            fulfilled_by=raw.get("fulfilled_by"),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise RepositoryError(f"Cannot read orders from {self._file_path}: {exc}") from exc

    def _persist_raw(self, orders: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(orders, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise RepositoryError(f"Cannot write orders to {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
