"""Application service: Start Picking use case.

Loads every order awaiting fulfillment, aggregates it into a pick list
and opens a scan session on it.
"""

from __future__ import annotations

import logging

from packdesk.application.dto import PickListLineDTO
from packdesk.domain.model.order import AWAITING_FULFILLMENT, Order
from packdesk.domain.model.pick_list import PickListEntry
from packdesk.domain.repository.order_repository import OrderRepository
from packdesk.domain.repository.product_repository import ProductRepository
from packdesk.domain.service.order_aggregator import OrderAggregator
from packdesk.domain.service.scan_session import ScanSession

logger = logging.getLogger(__name__)


class StartPickingHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def open_orders(self) -> list[Order]:
        return self._order_repo.list_by_status(AWAITING_FULFILLMENT)

    def build_pick_list(self) -> tuple[list[Order], list[PickListEntry]]:
        orders = self.open_orders()
        entries = OrderAggregator(self._product_repo).aggregate(orders)
        logger.info("Pick list built: %d product(s) across %d order(s)", len(entries), len(orders))
        return orders, entries

    def handle(self) -> ScanSession:
        _, entries = self.build_pick_list()
        return ScanSession(entries)

    @staticmethod
    def to_dto(entry: PickListEntry) -> PickListLineDTO:
        return PickListLineDTO(
            product_id=entry.product_id,
            product_name=entry.product_name,
            barcode=entry.barcode or "",
            fulfilled=entry.fulfilled_count,
            required=entry.total_required,
            order_numbers=entry.order_numbers,
        )
