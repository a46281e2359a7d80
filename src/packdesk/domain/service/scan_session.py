"""Domain service: Scan Reconciliation.

A ``ScanSession`` holds the pick list for one fulfillment session and
turns scanned identifiers into picked units. Nothing here touches the
store; the session state only decides which orders are ready to commit.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from packdesk.domain.exceptions import EntityNotFoundError
from packdesk.domain.model.barcode import normalize_candidates
from packdesk.domain.model.order import Order
from packdesk.domain.model.pick_list import PickListEntry

FEEDBACK_DURATION = 3.0  # seconds


@dataclass(frozen=True)
class ScanFeedback:
    """Message shown after a scan; expires ``FEEDBACK_DURATION`` after ``shown_at``."""

    success: bool
    message: str
    shown_at: float


class ScanSession:

    def __init__(
        self,
        entries: Iterable[PickListEntry] = (),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self.entries: list[PickListEntry] = []
        self.last_matched: str | None = None
        self.feedback: ScanFeedback | None = None
        self.scan_buffer = ""
        self._by_barcode: dict[str, PickListEntry] = {}
        self._by_product: dict[str, PickListEntry] = {}
        self.reset(entries)

    def reset(self, entries: Iterable[PickListEntry]) -> None:
        """Start over with a freshly aggregated pick list."""
        self.entries = list(entries)
        self._by_product = {e.product_id: e for e in self.entries}
        self._by_barcode = {}
        for entry in self.entries:
            if entry.barcode and entry.barcode not in self._by_barcode:
                self._by_barcode[entry.barcode] = entry
        self.last_matched = None
        self.feedback = None
        self.scan_buffer = ""

    # --- Scanning -------------------------------------------------------------

    def submit_scan(self, identifier: str | None = None) -> ScanFeedback | None:
        """Reconcile one scanned (or typed) identifier against the pick list.

        Reads ``scan_buffer`` when no identifier is passed. The buffer is
        always cleared so the next scan can follow immediately. Returns the
        feedback emitted, or None for blank input.
        """
        raw = (self.scan_buffer if identifier is None else identifier).strip()
        self.scan_buffer = ""
        if not raw:
            return None

        entry = self._match(raw)
        if entry is None:
            return self._emit(False, f"No product found for barcode: {raw}")

        if not entry.increment():
            return self._emit(False, f"{entry.product_name} already complete")

        self.last_matched = raw
        return self._emit(
            True,
            f"{entry.product_name} ({entry.fulfilled_count}/{entry.total_required})",
        )

    def _match(self, raw: str) -> PickListEntry | None:
        for candidate in normalize_candidates(raw):
            entry = self._by_barcode.get(candidate)
            if entry is not None:
                return entry
        return None

    def _emit(self, success: bool, message: str) -> ScanFeedback:
        self.feedback = ScanFeedback(success, message, self._clock())
        return self.feedback

    def current_feedback(self) -> ScanFeedback | None:
        """The last feedback, or None once it has expired."""
        if self.feedback is None:
            return None
        if self._clock() - self.feedback.shown_at >= FEEDBACK_DURATION:
            self.feedback = None
        return self.feedback

    # --- Manual corrections ---------------------------------------------------

    def manual_adjust(self, entry: PickListEntry | str, delta: int) -> PickListEntry:
        """Step an entry's count up or down by one unit."""
        target = self._resolve(entry)
        if delta:
            target.adjust(1 if delta > 0 else -1)
        return target

    def toggle_complete(self, entry: PickListEntry | str) -> PickListEntry:
        target = self._resolve(entry)
        target.toggle_complete()
        return target

    def find(self, query: str) -> list[PickListEntry]:
        """Manual search by product name fragment or barcode."""
        needle = query.strip().lower()
        if not needle:
            return []
        codes = set(normalize_candidates(query))
        return [
            e
            for e in self.entries
            if needle in e.product_name.lower() or (e.barcode is not None and e.barcode in codes)
        ]

    def _resolve(self, entry: PickListEntry | str) -> PickListEntry:
        if isinstance(entry, PickListEntry):
            return entry
        found = self._by_product.get(entry)
        if found is None:
            raise EntityNotFoundError(f"Product '{entry}' is not on the pick list")
        return found

    # --- Order readiness ------------------------------------------------------

    def is_order_ready(self, order: Order) -> bool:
        """True when every product on the order has been fully picked.

        The comparison is against the whole entry, not this order's share
        of it: units picked for one order also count towards others that
        share the product.
        """
        for item in order.items:
            entry = self._by_product.get(item.product_id)
            if entry is None or entry.fulfilled_count < entry.total_required:
                return False
        return True

    def ready_orders(self, orders: Iterable[Order]) -> list[Order]:
        return [o for o in orders if self.is_order_ready(o)]

    def progress(self) -> tuple[int, int]:
        """(picked units, required units) across the whole session."""
        picked = sum(e.fulfilled_count for e in self.entries)
        required = sum(e.total_required for e in self.entries)
        return picked, required
