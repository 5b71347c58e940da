from __future__ import annotations

from typing import Callable, Optional, Protocol

from sqlalchemy.orm import Session

from .models import KeyValueModel


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class SqlKeyValueStore:
    """Key/value blobs kept in the ``kv_entries`` table."""

    def __init__(self, session_factory: Callable[[], Session] | None = None) -> None:
        if session_factory is None:
            from .db import SessionLocal

            session_factory = SessionLocal
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self._session_factory() as session:
            entry = session.get(KeyValueModel, key)
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        with self._session_factory() as session:
            entry = session.get(KeyValueModel, key)
            if entry is None:
                session.add(KeyValueModel(key=key, value=value))
            else:
                entry.value = value
            session.commit()

    def remove(self, key: str) -> None:
        with self._session_factory() as session:
            entry = session.get(KeyValueModel, key)
            if not entry:
                return
            session.delete(entry)
            session.commit()
