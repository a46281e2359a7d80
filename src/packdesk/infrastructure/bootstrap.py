"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import getpass
from functools import lru_cache

from packdesk.domain.model.activity import User
from packdesk.infrastructure.config import Settings, load_settings
from packdesk.infrastructure.persistence.json_activity_log import JsonLinesActivityLog
from packdesk.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from packdesk.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from packdesk.infrastructure.sync.woocommerce import WooCommerceOrderSync


@lru_cache(maxsize=1)
def settings() -> Settings:
    return load_settings()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def activity_log() -> JsonLinesActivityLog:
    return JsonLinesActivityLog(settings().data_dir / "activities.jsonl")


def order_sync() -> WooCommerceOrderSync:
    s = settings()
    return WooCommerceOrderSync(
        s.wc_url, s.wc_consumer_key, s.wc_consumer_secret, timeout=s.wc_timeout
    )


def current_user() -> User:
    s = settings()
    try:
        uid = getpass.getuser()
    except OSError:
        uid = "unknown"
    return User(uid=uid, email=s.actor_email, display_name=s.actor_name or uid)
