"""Domain service: Fulfillment Committer.

Commits a user-selected batch of picked orders: takes every line item's
units out of stock, then moves the order to the ready status. Orders are
processed one at a time and independently, so one failing order never
blocks the rest of the batch.

There is no cross-order (or even cross-line) transaction. If the second
line of an order is short on stock, the first line's decrement stays
applied and the order keeps its status.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from packdesk.domain.exceptions import RepositoryError, ValidationError
from packdesk.domain.model.activity import ActivityType, User
from packdesk.domain.model.fulfillment_result import (
    FulfillmentResult,
    InsufficientStock,
    LineOutcome,
)
from packdesk.domain.model.order import READY_STATUS, Order, OrderLineItem
from packdesk.domain.repository.activity_log import ActivityLog, log_activity
from packdesk.domain.repository.order_repository import OrderRepository
from packdesk.domain.repository.product_repository import ProductRepository
from packdesk.domain.service.order_source_sync import OrderSourceSync

logger = logging.getLogger(__name__)


class FulfillmentCommitter:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        activity_log: ActivityLog,
        order_sync: OrderSourceSync | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._activity_log = activity_log
        self._order_sync = order_sync

    def commit(self, order_ids: Iterable[str], actor: User) -> FulfillmentResult:
        """Decrement stock and mark each selected order as ready.

        Raises ValidationError only for an empty selection; every other
        problem ends up in the returned result.
        """
        selected = list(dict.fromkeys(order_ids))
        if not selected:
            raise ValidationError("Select at least one order")

        result = FulfillmentResult()
        for order_id in selected:
            try:
                committed = self._commit_order(order_id, actor, result)
            except Exception:
                logger.exception("Error committing order %s", order_id)
                committed = False

            if committed:
                result.order_succeeded()
            else:
                result.order_failed(order_id)

        logger.info(
            "Committed %d order(s), %d failed, %d product update(s) failed",
            result.succeeded,
            result.failed,
            result.product_updates.failed,
        )
        return result

    # --- Per order ------------------------------------------------------------

    def _commit_order(self, order_id: str, actor: User, result: FulfillmentResult) -> bool:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            logger.warning("Order %s not found", order_id)
            return False
        if not order.is_awaiting_fulfillment:
            # Decrementing again would count the same units twice.
            logger.warning(
                "Order #%s is %s, not awaiting fulfillment",
                order.order_number,
                order.status.value,
            )
            return False

        short = False
        for item in order.items:
            outcome = self._decrement(item, actor, result)
            if outcome == LineOutcome.INSUFFICIENT_STOCK:
                short = True

        if short:
            logger.info("Order #%s left unchanged: insufficient stock", order.order_number)
            return False

        order.mark_ready(datetime.now(timezone.utc), by=actor.label)
        self._order_repo.save(order)

        if order.is_external:
            self._notify_source(order, result)

        log_activity(
            self._activity_log,
            ActivityType.UPDATED,
            "order",
            order.id,
            f"Order #{order.order_number} - Marked as ready",
            actor,
        )
        return True

    # --- Per line item --------------------------------------------------------

    def _decrement(self, item: OrderLineItem, actor: User, result: FulfillmentResult) -> LineOutcome:
        needed = item.quantity.value
        try:
            product = self._product_repo.get_by_id(item.product_id)
        except RepositoryError:
            logger.exception("Error fetching product %s", item.product_id)
            result.product_updates.record(LineOutcome.READ_ERROR)
            return LineOutcome.READ_ERROR

        if product is None:
            logger.warning("Product %s (%s) not found", item.product_id, item.product_name)
            result.product_updates.record(LineOutcome.PRODUCT_MISSING)
            return LineOutcome.PRODUCT_MISSING

        if not product.has_stock_for(needed):
            shortage = InsufficientStock(product.name, needed, product.quantity)
            result.product_updates.record(LineOutcome.INSUFFICIENT_STOCK, shortage)
            return LineOutcome.INSUFFICIENT_STOCK

        product.remove_stock(needed)
        try:
            self._product_repo.save(product)
        except RepositoryError:
            logger.exception("Error writing stock for product %s", product.id)
            result.product_updates.record(LineOutcome.WRITE_ERROR)
            return LineOutcome.WRITE_ERROR

        result.product_updates.record(LineOutcome.DECREMENTED)
        if product.is_low_stock:
            result.flag_low_stock(product.name)
        log_activity(
            self._activity_log,
            ActivityType.REMOVED,
            "product",
            product.id,
            product.name,
            actor,
            quantity=needed,
        )
        return LineOutcome.DECREMENTED

    # --- External source ------------------------------------------------------

    def _notify_source(self, order: Order, result: FulfillmentResult) -> None:
        """Best-effort status push; the local store stays authoritative."""
        if self._order_sync is None:
            return
        try:
            sync = self._order_sync.update_order_status(order.external_id, READY_STATUS)
        except Exception as exc:
            logger.warning("WooCommerce sync failed for order %s: %s", order.order_number, exc)
            result.sync_failures.append(order.order_number)
            return
        if not sync.success:
            logger.warning("WooCommerce sync failed for order %s: %s", order.order_number, sync.error)
            result.sync_failures.append(order.order_number)
