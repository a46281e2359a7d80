"""Domain service: Order Aggregator.

Merges the line items of every open order into one pick-list entry per
product, keeping track of which orders asked for how many units.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from packdesk.domain.model.order import Order
from packdesk.domain.model.pick_list import PickListEntry
from packdesk.domain.model.product import Product
from packdesk.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class OrderAggregator:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def aggregate(self, orders: Iterable[Order]) -> list[PickListEntry]:
        """Build the pick list for ``orders``.

        Entries are keyed by product ID, so two products that happen to
        share a display name stay separate. The result is sorted by total
        quantity, largest first; ties keep the order in which products were
        first seen.
        """
        products: dict[str, Product | None] = {}
        entries: dict[str, PickListEntry] = {}

        for order in orders:
            for item in order.items:
                if item.product_id not in products:
                    products[item.product_id] = self._lookup(item.product_id)

                entry = entries.get(item.product_id)
                if entry is None:
                    product = products[item.product_id]
                    entry = PickListEntry(
                        product_id=item.product_id,
                        product_name=product.name if product else item.product_name,
                        barcode=product.barcode if product else None,
                        total_required=0,
                    )
                    entries[item.product_id] = entry
                entry.add_contribution(order.id, order.order_number, item.quantity.value)

        return sorted(entries.values(), key=lambda e: e.total_required, reverse=True)

    def _lookup(self, product_id: str) -> Product | None:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            # Still pickable through manual search, just not by scanning.
            logger.warning("Product %s not found; pick-list entry has no barcode", product_id)
        return product
