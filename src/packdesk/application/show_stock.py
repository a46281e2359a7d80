"""Application service: Show Stock use case (query)."""

from __future__ import annotations

from packdesk.application.dto import ProductLineDTO
from packdesk.domain.repository.product_repository import ProductRepository


class ShowStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, low_only: bool = False) -> list[ProductLineDTO]:
        products = self._product_repo.list_all()
        return [
            ProductLineDTO(
                id=p.id,
                name=p.name,
                barcode=p.barcode or "",
                quantity=p.quantity,
                min_quantity=p.min_quantity,
                low_stock=p.is_low_stock,
            )
            for p in products
            if p.is_low_stock or not low_only
        ]
