"""Integration tests for the CommitFulfillment use case."""

from packdesk.application.commit_fulfillment import CommitFulfillmentHandler
from packdesk.application.start_picking import StartPickingHandler
from packdesk.domain.model.activity import User
from packdesk.domain.model.order import OrderStatus
from tests.builders import line, order, product
from tests.fakes import FakeActivityLog, FakeOrderRepository, FakeProductRepository

ACTOR = User(uid="u1", display_name="Maria")


def _setup(widget_stock=10):
    order_repo = FakeOrderRepository([
        order("A", [line("w", "Widget", 2)]),
        order("B", [line("w", "Widget", 3), line("g", "Gadget", 1)], minutes=1),
    ])
    product_repo = FakeProductRepository([
        product("w", "Widget", quantity=widget_stock, barcode="5941"),
        product("g", "Gadget", quantity=10, barcode="42"),
    ])
    picking = StartPickingHandler(order_repo, product_repo)
    commit = CommitFulfillmentHandler(order_repo, product_repo, FakeActivityLog())
    return picking, commit, order_repo, product_repo


class TestScanThenCommit:

    def test_full_workflow(self):
        picking, commit, order_repo, product_repo = _setup()
        session = picking.handle()

        for _ in range(5):
            session.submit_scan("5941")
        session.submit_scan("42")
        ready = session.ready_orders(picking.open_orders())
        assert [o.id for o in ready] == ["A", "B"]

        result = commit.handle([o.id for o in ready], ACTOR, session=session)

        assert result.succeeded == 2
        assert product_repo.get_by_id("w").quantity == 5
        assert product_repo.get_by_id("g").quantity == 9
        assert order_repo.get_by_id("A").status == OrderStatus.PREGATITA
        assert session.entries == []

    def test_session_refreshed_after_partial_success(self):
        picking, commit, _, _ = _setup()
        session = picking.handle()
        session.toggle_complete("w")
        session.submit_scan("42")

        result = commit.handle(["A"], ACTOR, session=session)

        assert result.succeeded == 1
        # B is still open and its counts start over
        totals = {e.product_id: (e.fulfilled_count, e.total_required) for e in session.entries}
        assert totals == {"w": (0, 3), "g": (0, 1)}
        assert session.last_matched is None

    def test_session_kept_when_nothing_succeeded(self):
        picking, commit, _, _ = _setup(widget_stock=1)
        session = picking.handle()
        session.toggle_complete("w")

        result = commit.handle(["A"], ACTOR, session=session)

        assert result.succeeded == 0
        widget = next(e for e in session.entries if e.product_id == "w")
        assert widget.fulfilled_count == 5
