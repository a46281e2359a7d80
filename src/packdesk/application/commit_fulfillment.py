"""Application service: Commit Fulfillment use case.

Runs the committer over the selected orders and, when at least one of
them went through, rebuilds the pick list and restarts the scan session
so it reflects what is still open.
"""

from __future__ import annotations

from collections.abc import Iterable

from packdesk.application.start_picking import StartPickingHandler
from packdesk.domain.model.activity import User
from packdesk.domain.model.fulfillment_result import FulfillmentResult
from packdesk.domain.repository.activity_log import ActivityLog
from packdesk.domain.repository.order_repository import OrderRepository
from packdesk.domain.repository.product_repository import ProductRepository
from packdesk.domain.service.fulfillment_committer import FulfillmentCommitter
from packdesk.domain.service.order_source_sync import OrderSourceSync
from packdesk.domain.service.scan_session import ScanSession


class CommitFulfillmentHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        activity_log: ActivityLog,
        order_sync: OrderSourceSync | None = None,
    ) -> None:
        self._committer = FulfillmentCommitter(
            order_repo, product_repo, activity_log, order_sync
        )
        self._picking = StartPickingHandler(order_repo, product_repo)

    def handle(
        self,
        order_ids: Iterable[str],
        actor: User,
        session: ScanSession | None = None,
    ) -> FulfillmentResult:
        result = self._committer.commit(order_ids, actor)

        if result.succeeded > 0 and session is not None:
            _, entries = self._picking.build_pick_list()
            session.reset(entries)

        return result
