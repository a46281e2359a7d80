"""Application service: Set Stock use case.

Manual stock correction; audited as an ``updated`` activity carrying the
new quantity.
"""

from __future__ import annotations

from packdesk.domain.exceptions import EntityNotFoundError
from packdesk.domain.model.activity import ActivityType, User
from packdesk.domain.repository.activity_log import ActivityLog, log_activity
from packdesk.domain.repository.product_repository import ProductRepository


class SetStockHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        activity_log: ActivityLog,
    ) -> None:
        self._product_repo = product_repo
        self._activity_log = activity_log

    def handle(self, product_id: str, quantity: int, actor: User) -> None:
        """Set the stock quantity for a product."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        product.set_stock(quantity)
        self._product_repo.save(product)
        log_activity(
            self._activity_log,
            ActivityType.UPDATED,
            "product",
            product.id,
            product.name,
            actor,
            quantity=quantity,
        )
