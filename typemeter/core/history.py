from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from typemeter.core.session import SessionRecord

logger = logging.getLogger(__name__)

RECENT_LIMIT = 10


class HistoryStore:
    """Per-user session records, persisted as JSON at ``<data_dir>/history.json``.

    Records are only ever appended; ``reset`` is the single way to drop them.
    """

    def __init__(self, data_dir: Path) -> None:
        self._file_path = Path(data_dir) / "history.json"
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._history = self._load()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def users(self) -> List[str]:
        return sorted(self._history)

    def append_record(self, user_id: str, record: SessionRecord) -> None:
        self._history.setdefault(user_id, []).append(record)
        logger.info(
            "Recorded %s session for %s: %d wpm, %d%%",
            record.category.value,
            user_id,
            record.words_per_minute,
            record.accuracy_percent,
        )
        self._save()

    def fetch_history(self, user_id: str) -> List[SessionRecord]:
        """All records for *user_id* in the order they were appended."""
        return list(self._history.get(user_id, []))

    def recent(self, user_id: str, limit: int = RECENT_LIMIT) -> List[SessionRecord]:
        """Newest records first, at most *limit* of them."""
        records = sorted(self._history.get(user_id, []), key=lambda r: r.recorded_at, reverse=True)
        return records[: max(0, limit)]

    def reset(self, user_id: Optional[str] = None) -> None:
        """Drop the history of one user, or of everyone when *user_id* is None."""
        if user_id is None:
            self._history = {}
        else:
            self._history.pop(user_id, None)
        self._save()

    def _load(self) -> Dict[str, List[SessionRecord]]:
        history: Dict[str, List[SessionRecord]] = {}
        if not self._file_path.exists():
            return history
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load history from %s: %s", self._file_path, e)
            return history

        users = payload.get("users", {}) if isinstance(payload, dict) else {}
        if not isinstance(users, dict):
            logger.warning("Ignoring malformed 'users' section in %s", self._file_path)
            return history
        for user_id, entries in users.items():
            if not isinstance(entries, list):
                continue
            records = history.setdefault(str(user_id), [])
            for entry in entries:
                try:
                    records.append(SessionRecord.from_dict(entry))
                except (KeyError, ValueError, TypeError) as e:
                    logger.warning("Skipping bad record for %s: %s", user_id, e)
        return history

    def _save(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "users": {
                user_id: [record.to_dict() for record in records]
                for user_id, records in self._history.items()
            }
        }
        try:
            self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save history to %s: %s", self._file_path, e)
