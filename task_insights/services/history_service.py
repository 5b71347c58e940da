from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from typing import Callable

from task_insights.domain.results import HistoryEntry
from task_insights.infra.storage import KeyValueStore

from .search_service import MIN_QUERY_LENGTH, normalize_query

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_KEY = "task-insights-search-history"
DEFAULT_HISTORY_LIMIT = 10


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def _from_millis(value: int) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


class SearchHistoryStore:
    """Most-recent-first list of past queries, persisted as one JSON blob."""

    def __init__(
        self,
        storage: KeyValueStore,
        key: str = DEFAULT_HISTORY_KEY,
        limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self._storage = storage
        self._key = key
        self._limit = limit
        self._clock = clock
        self._lock = threading.Lock()

    def get_history(self) -> list[HistoryEntry]:
        return [HistoryEntry(query, _from_millis(ts)) for query, ts in self._read()]

    def add_search(self, query: str | None) -> list[HistoryEntry]:
        normalized = normalize_query(query)
        if len(normalized) < MIN_QUERY_LENGTH:
            return self.get_history()

        with self._lock:
            records = [record for record in self._read() if record[0] != normalized]
            records.insert(0, (normalized, _to_millis(self._clock())))
            records = records[: self._limit]
            self._write(records)
        return [HistoryEntry(query, _from_millis(ts)) for query, ts in records]

    def clear_history(self) -> None:
        with self._lock:
            try:
                self._storage.remove(self._key)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Could not clear search history: %s", exc)

    def _read(self) -> list[tuple[str, int]]:
        try:
            raw = self._storage.get(self._key)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not read search history: %s", exc)
            return []
        if not raw:
            return []

        try:
            payload = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding unreadable search history under %r", self._key)
            return []
        if not isinstance(payload, list):
            logger.warning("Discarding unreadable search history under %r", self._key)
            return []

        records = []
        for item in payload:
            if (
                not isinstance(item, dict)
                or not isinstance(item.get("query"), str)
                or isinstance(item.get("timestamp"), bool)
                or not isinstance(item.get("timestamp"), (int, float))
            ):
                logger.warning("Discarding unreadable search history under %r", self._key)
                return []
            try:
                _from_millis(int(item["timestamp"]))
            except (OverflowError, OSError, ValueError):
                logger.warning("Discarding unreadable search history under %r", self._key)
                return []
            records.append((item["query"], int(item["timestamp"])))
        return records[: self._limit]

    def _write(self, records: list[tuple[str, int]]) -> None:
        payload = json.dumps([{"query": query, "timestamp": ts} for query, ts in records])
        try:
            self._storage.set(self._key, payload)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not persist search history: %s", exc)
