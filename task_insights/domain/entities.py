from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .enums import Priority


@dataclass(frozen=True)
class TaskEntity:
    id: str
    title: str
    created_at: datetime
    description: str | None = None
    priority: Priority = Priority.MEDIUM
    completed: bool = False
    completed_at: Optional[datetime] = None
    due_date: Optional[datetime] = None
    due_date_reminder: int | None = None
    labels: tuple[str, ...] = ()
    project_id: str | None = None
    estimated_minutes: float | None = None
    actual_minutes: float | None = None
    comments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # naive timestamps are read as UTC
        for name in ("created_at", "completed_at", "due_date"):
            value = getattr(self, name)
            if value is not None and value.tzinfo is None:
                object.__setattr__(self, name, value.replace(tzinfo=timezone.utc))

    def is_overdue(self, now: datetime) -> bool:
        return not self.completed and self.due_date is not None and self.due_date < now


@dataclass(frozen=True)
class ProjectEntity:
    id: str
    name: str
    color: str = ""
    description: str | None = None


@dataclass(frozen=True)
class LabelEntity:
    id: str
    name: str
    color: str = ""
