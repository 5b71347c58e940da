from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .enums import Priority, StatusFilter


@dataclass(frozen=True)
class SearchFilters:
    status: StatusFilter = StatusFilter.ALL
    priority: Priority | None = None
    project_id: str | None = None
    label_ids: tuple[str, ...] = ()
    due_from: Optional[datetime] = None
    due_to: Optional[datetime] = None
