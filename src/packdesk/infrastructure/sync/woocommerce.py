"""WooCommerce REST client for pushing order status changes.

Only the status update is implemented; importing orders from the shop is
handled elsewhere. Failures are reported through ``SyncResult`` instead of
raised, because the caller treats the push as best-effort.
"""

from __future__ import annotations

import logging

import httpx

from packdesk.domain.model.order import OrderStatus
from packdesk.domain.service.order_source_sync import OrderSourceSync, SyncResult

log = logging.getLogger(__name__)

API_PATH = "/wp-json/wc/v3/"

# Custom shop statuses are registered with a "wc-" prefix.
_CUSTOM_STATUSES = {
    OrderStatus.PRELUATA: "wc-preluata",
    OrderStatus.PREGATITA: "wc-pregatita",
    OrderStatus.IMPACHETATA: "wc-pregatita",
    OrderStatus.EXPEDIATA: "wc-expediata",
    OrderStatus.REFUZATA: "wc-refuzata",
    OrderStatus.NEONORATA: "wc-neonorata",
}


def to_woocommerce_status(status: OrderStatus) -> str:
    """Map an internal status to the value the shop expects."""
    return _CUSTOM_STATUSES.get(status, status.value)


class WooCommerceOrderSync(OrderSourceSync):
    """
    Client for the WooCommerce REST API (v3).
    Authenticates with the shop's consumer key and secret over HTTP basic auth.
    """

    def __init__(
        self,
        url: str | None,
        consumer_key: str | None,
        consumer_secret: str | None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._configured = bool(url and consumer_key and consumer_secret)
        self.client: httpx.Client | None = None
        if self._configured:
            self.client = httpx.Client(
                base_url=url.rstrip("/") + API_PATH,
                auth=(consumer_key, consumer_secret),
                timeout=httpx.Timeout(timeout),
                transport=transport,
            )

    def close(self) -> None:
        if self.client is not None:
            self.client.close()

    def __enter__(self) -> WooCommerceOrderSync:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def update_order_status(self, external_id: int, status: OrderStatus) -> SyncResult:
        if self.client is None:
            return SyncResult(
                False,
                "WooCommerce credentials not found. Set WC_URL, WC_CONSUMER_KEY "
                "and WC_CONSUMER_SECRET.",
            )

        wc_status = to_woocommerce_status(status)
        log.info("Updating WooCommerce order %s status to: %s", external_id, wc_status)
        try:
            response = self.client.put(f"orders/{external_id}", json={"status": wc_status})
        except httpx.HTTPError as e:
            log.error("Error updating WooCommerce order %s status: %s", external_id, e)
            return SyncResult(False, str(e) or type(e).__name__)

        if response.status_code == 200:
            log.info("Successfully updated WooCommerce order %s", external_id)
            return SyncResult(True)

        log.error(
            "Unexpected response when updating WooCommerce order %s: %s",
            external_id,
            response.status_code,
        )
        return SyncResult(False, "Unexpected response from WooCommerce API")
