"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from packdesk.domain.exceptions import RepositoryError
from packdesk.domain.model.product import Product
from packdesk.domain.model.value_objects import Money
from packdesk.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        products = self._load()
        products[product.id] = product
        self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise RepositoryError(f"Cannot read products from {self._file_path}: {exc}") from exc
        return {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                quantity=item["quantity"],
                min_quantity=item.get("min_quantity", 0),
                barcode=item.get("barcode") or None,
                price=Money(Decimal(item.get("price", "0")), item.get("currency", "RON")),
                updated_at=datetime.fromisoformat(item["updated_at"]),
            )
            for item in raw
        }

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [
            {
                "id": p.id,
                "name": p.name,
                "quantity": p.quantity,
                "min_quantity": p.min_quantity,
                "barcode": p.barcode,
                "price": str(p.price.amount),
                "currency": p.price.currency,
                "updated_at": p.updated_at.isoformat(),
            }
            for p in products.values()
        ]
        try:
            self._file_path.write_text(
                json.dumps(raw, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise RepositoryError(f"Cannot write products to {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
