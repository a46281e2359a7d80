"""Abstract append-only sink for activity entries.

Writing an activity is fire-and-forget for the callers: ``log_activity``
logs and drops sink failures so an audit hiccup never changes the outcome
of the operation being audited.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from packdesk.domain.model.activity import ActivityEntry, ActivityType, User

logger = logging.getLogger(__name__)


class ActivityLog(ABC):

    @abstractmethod
    def record(self, entry: ActivityEntry) -> None:
        """Append one entry to the log."""


def log_activity(
    activity_log: ActivityLog,
    activity_type: ActivityType,
    entity_type: str,
    entity_id: str,
    entity_name: str,
    actor: User,
    quantity: int | None = None,
) -> ActivityEntry | None:
    entry = ActivityEntry(
        type=activity_type,
        entity_type=entity_type,
        entity_id=entity_id,
        entity_name=entity_name,
        user_id=actor.uid,
        user_name=actor.label,
        quantity=quantity,
    )
    try:
        activity_log.record(entry)
    except Exception:
        logger.exception("Error logging activity for %s %s", entity_type, entity_id)
        return None
    return entry
