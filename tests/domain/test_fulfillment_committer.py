"""Unit tests for the FulfillmentCommitter domain service."""

import pytest

from packdesk.domain.exceptions import ValidationError
from packdesk.domain.model.activity import ActivityType, User
from packdesk.domain.model.fulfillment_result import InsufficientStock
from packdesk.domain.model.order import OrderStatus
from packdesk.domain.service.fulfillment_committer import FulfillmentCommitter
from packdesk.domain.service.order_source_sync import SyncResult
from tests.builders import line, order, product
from tests.fakes import (
    BrokenActivityLog,
    FakeActivityLog,
    FakeOrderRepository,
    FakeOrderSync,
    FakeProductRepository,
)

ACTOR = User(uid="u1", email="maria@example.com", display_name="Maria")


def _setup(orders, products, sync=None, activity_log=None):
    order_repo = FakeOrderRepository(orders)
    product_repo = FakeProductRepository(products)
    log = activity_log or FakeActivityLog()
    committer = FulfillmentCommitter(order_repo, product_repo, log, sync)
    return committer, order_repo, product_repo, log


class TestCommitHappyPath:

    def test_decrements_stock_and_marks_ready(self):
        committer, order_repo, product_repo, _ = _setup(
            [order("A", [line("w", "Widget", 2), line("g", "Gadget", 1)])],
            [product("w", "Widget", quantity=10), product("g", "Gadget", quantity=4)],
        )

        result = committer.commit(["A"], ACTOR)

        assert result.succeeded == 1
        assert result.failed == 0
        assert result.product_updates.succeeded == 2
        assert product_repo.get_by_id("w").quantity == 8
        assert product_repo.get_by_id("g").quantity == 3
        committed = order_repo.get_by_id("A")
        assert committed.status == OrderStatus.PREGATITA
        assert committed.fulfilled_by == "Maria"
        assert all(item.picked for item in committed.items)

    def test_writes_audit_entries(self):
        committer, _, _, log = _setup(
            [order("A", [line("w", "Widget", 2)], number="1042")],
            [product("w", "Widget", quantity=10)],
        )

        committer.commit(["A"], ACTOR)

        removed, updated = log.entries
        assert removed.type == ActivityType.REMOVED
        assert removed.entity_type == "product"
        assert removed.entity_id == "w"
        assert removed.quantity == 2
        assert removed.user_name == "Maria"
        assert updated.type == ActivityType.UPDATED
        assert updated.entity_type == "order"
        assert updated.entity_name == "Order #1042 - Marked as ready"
        assert updated.quantity is None

    def test_duplicate_ids_committed_once(self):
        committer, _, product_repo, _ = _setup(
            [order("A", [line("w", "Widget", 2)])],
            [product("w", "Widget", quantity=10)],
        )
        result = committer.commit(["A", "A"], ACTOR)
        assert result.succeeded == 1
        assert product_repo.get_by_id("w").quantity == 8

    def test_low_stock_reported(self):
        committer, _, _, _ = _setup(
            [order("A", [line("w", "Widget", 3)])],
            [product("w", "Widget", quantity=5, min_quantity=2)],
        )
        result = committer.commit(["A"], ACTOR)
        assert result.low_stock == ["Widget"]


class TestCommitValidation:

    def test_empty_selection_rejected(self):
        committer, _, _, log = _setup([], [])
        with pytest.raises(ValidationError, match="at least one order"):
            committer.commit([], ACTOR)
        assert log.entries == []

    def test_missing_order_recorded_as_failed(self):
        committer, _, _, _ = _setup([], [])
        result = committer.commit(["ghost"], ACTOR)
        assert result.failed == 1
        assert result.failed_order_ids == ["ghost"]

    def test_order_not_awaiting_fulfillment_is_skipped(self):
        committer, _, product_repo, _ = _setup(
            [order("A", [line("w", "Widget", 2)], status=OrderStatus.PREGATITA)],
            [product("w", "Widget", quantity=10)],
        )
        result = committer.commit(["A"], ACTOR)
        assert result.failed_order_ids == ["A"]
        assert product_repo.get_by_id("w").quantity == 10


class TestStockGuard:

    def test_insufficient_stock_fails_order_without_write(self):
        committer, order_repo, product_repo, _ = _setup(
            [order("A", [line("w", "Widget", 7)])],
            [product("w", "Widget", quantity=5)],
        )

        result = committer.commit(["A"], ACTOR)

        assert result.failed == 1
        assert result.failed_order_ids == ["A"]
        assert result.product_updates.failed == 1
        assert result.product_updates.insufficient_stock == [InsufficientStock("Widget", 7, 5)]
        assert product_repo.get_by_id("w").quantity == 5
        assert order_repo.get_by_id("A").status == OrderStatus.PROCESSING

    def test_partial_decrements_are_not_rolled_back(self):
        committer, order_repo, product_repo, _ = _setup(
            [order("A", [line("w", "Widget", 2), line("g", "Gadget", 9)])],
            [product("w", "Widget", quantity=10), product("g", "Gadget", quantity=1)],
        )

        result = committer.commit(["A"], ACTOR)

        assert result.failed == 1
        assert product_repo.get_by_id("w").quantity == 8
        assert product_repo.get_by_id("g").quantity == 1
        assert order_repo.get_by_id("A").status == OrderStatus.PROCESSING

    def test_one_short_order_does_not_block_the_other(self):
        committer, order_repo, _, _ = _setup(
            [
                order("A", [line("w", "Widget", 2)]),
                order("B", [line("g", "Gadget", 5)]),
            ],
            [product("w", "Widget", quantity=10), product("g", "Gadget", quantity=1)],
        )

        result = committer.commit(["A", "B"], ACTOR)

        assert result.succeeded == 1
        assert result.failed == 1
        assert order_repo.get_by_id("A").status == OrderStatus.PREGATITA
        assert order_repo.get_by_id("B").status == OrderStatus.PROCESSING

    def test_missing_product_counts_as_failed_update_only(self):
        committer, order_repo, _, _ = _setup(
            [order("A", [line("gone", "Old Mug", 1), line("w", "Widget", 1)])],
            [product("w", "Widget", quantity=10)],
        )

        result = committer.commit(["A"], ACTOR)

        assert result.succeeded == 1
        assert result.product_updates.failed == 1
        assert result.product_updates.succeeded == 1
        assert order_repo.get_by_id("A").status == OrderStatus.PREGATITA

    def test_write_error_counts_as_failed_update(self):
        committer, _, product_repo, _ = _setup(
            [order("A", [line("w", "Widget", 1)])],
            [product("w", "Widget", quantity=10)],
        )
        product_repo.failing_writes.add("w")

        result = committer.commit(["A"], ACTOR)

        assert result.product_updates.failed == 1
        assert result.product_updates.insufficient_stock == []
        assert product_repo.get_by_id("w").quantity == 10

    def test_fetch_error_counts_as_failed_update(self):
        committer, order_repo, product_repo, log = _setup(
            [order("A", [line("w", "Widget", 1)])],
            [product("w", "Widget", quantity=10)],
        )
        product_repo.failing_reads.add("w")

        result = committer.commit(["A"], ACTOR)

        assert result.product_updates.failed == 1
        assert result.product_updates.succeeded == 0
        assert order_repo.get_by_id("A").status == OrderStatus.PREGATITA
        assert [e.entity_type for e in log.entries] == ["order"]

    def test_sequential_orders_see_earlier_decrements(self):
        committer, order_repo, product_repo, _ = _setup(
            [
                order("A", [line("w", "Widget", 3)]),
                order("B", [line("w", "Widget", 3)]),
            ],
            [product("w", "Widget", quantity=4)],
        )

        result = committer.commit(["A", "B"], ACTOR)

        assert result.succeeded == 1
        assert result.product_updates.insufficient_stock == [InsufficientStock("Widget", 3, 1)]
        assert product_repo.get_by_id("w").quantity == 1
        assert order_repo.get_by_id("B").status == OrderStatus.PROCESSING


class TestOrderSourceSync:

    def test_external_order_notified(self):
        sync = FakeOrderSync()
        committer, _, _, _ = _setup(
            [order("A", [line("w", "Widget", 1)], external_id=4411)],
            [product("w", "Widget")],
            sync=sync,
        )
        committer.commit(["A"], ACTOR)
        assert sync.calls == [(4411, OrderStatus.PREGATITA)]

    def test_manual_order_not_notified(self):
        sync = FakeOrderSync()
        committer, _, _, _ = _setup(
            [order("A", [line("w", "Widget", 1)])],
            [product("w", "Widget")],
            sync=sync,
        )
        committer.commit(["A"], ACTOR)
        assert sync.calls == []

    def test_sync_failure_result_does_not_fail_order(self):
        sync = FakeOrderSync(result=SyncResult(False, "401 Unauthorized"))
        committer, order_repo, _, _ = _setup(
            [order("A", [line("w", "Widget", 1)], external_id=4411, number="1042")],
            [product("w", "Widget")],
            sync=sync,
        )

        result = committer.commit(["A"], ACTOR)

        assert result.succeeded == 1
        assert result.sync_failures == ["1042"]
        assert order_repo.get_by_id("A").status == OrderStatus.PREGATITA

    def test_sync_exception_does_not_fail_order(self):
        sync = FakeOrderSync(error=ConnectionError("shop down"))
        committer, order_repo, _, _ = _setup(
            [order("A", [line("w", "Widget", 1)], external_id=4411)],
            [product("w", "Widget")],
            sync=sync,
        )

        result = committer.commit(["A"], ACTOR)

        assert result.succeeded == 1
        assert result.failed == 0
        assert order_repo.get_by_id("A").status == OrderStatus.PREGATITA

    def test_broken_activity_log_does_not_fail_commit(self):
        committer, order_repo, _, _ = _setup(
            [order("A", [line("w", "Widget", 1)])],
            [product("w", "Widget")],
            activity_log=BrokenActivityLog(),
        )
        result = committer.commit(["A"], ACTOR)
        assert result.succeeded == 1
        assert order_repo.get_by_id("A").status == OrderStatus.PREGATITA
