"""Activity entries written to the append-only audit log."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ActivityType(Enum):
    ADDED = "added"
    REMOVED = "removed"
    UPDATED = "updated"
    DELETED = "deleted"
    MOVED = "moved"


@dataclass(frozen=True)
class User:
    """The person performing an action."""

    uid: str
    email: str | None = None
    display_name: str | None = None
    role: str = "staff"

    @property
    def label(self) -> str:
        return self.display_name or self.email or "Unknown User"


@dataclass(frozen=True)
class ActivityEntry:
    type: ActivityType
    entity_type: str
    entity_id: str
    entity_name: str
    user_id: str
    user_name: str
    quantity: int | None = None
    date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
