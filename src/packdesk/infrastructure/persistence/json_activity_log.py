"""Append-only JSON-lines implementation of ActivityLog."""

from __future__ import annotations

import json
from pathlib import Path

from packdesk.domain.exceptions import RepositoryError
from packdesk.domain.model.activity import ActivityEntry
from packdesk.domain.repository.activity_log import ActivityLog


class JsonLinesActivityLog(ActivityLog):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)

    def record(self, entry: ActivityEntry) -> None:
        raw = {
            "type": entry.type.value,
            "entity_type": entry.entity_type,
            "entity_id": entry.entity_id,
            "entity_name": entry.entity_name,
            "date": entry.date.isoformat(),
            "user_id": entry.user_id,
            "user_name": entry.user_name,
        }
        # Only carry quantity when the activity has one
        if entry.quantity is not None:
            raw["quantity"] = entry.quantity
        try:
            with self._file_path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(raw) + "\n")
        except OSError as exc:
            raise RepositoryError(f"Cannot append to {self._file_path}: {exc}") from exc
