"""Reads the task manager's JSON backup (``{tasks, projects, labels, backupDate}``)."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from task_insights.domain.entities import LabelEntity, ProjectEntity, TaskEntity
from task_insights.domain.enums import Priority
from task_insights.domain.snapshot import Snapshot

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    pass


def _parse_timestamp(raw: Any) -> Optional[datetime]:
    if not raw:
        return None
    try:
        value = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    except ValueError as exc:
        raise SnapshotError(f"Invalid timestamp: {raw!r}") from exc
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _parse_priority(raw: Any) -> Priority:
    try:
        return Priority(str(raw).lower())
    except ValueError:
        return Priority.MEDIUM


def _parse_minutes(raw: Any) -> float | None:
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def _parse_reminder(raw: Any) -> int | None:
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def _comment_text(comment: Any) -> str:
    if isinstance(comment, dict):
        return str(comment.get("text") or "")
    return str(comment)


def _to_task(data: dict) -> TaskEntity:
    created_at = _parse_timestamp(data.get("createdAt"))
    if created_at is None:
        raise SnapshotError(f"Task {data.get('id')!r} has no createdAt")
    project_id = data.get("projectId")
    return TaskEntity(
        id=str(data["id"]),
        title=str(data.get("title") or ""),
        description=data.get("description") or None,
        priority=_parse_priority(data.get("priority")),
        completed=bool(data.get("completed")),
        created_at=created_at,
        completed_at=_parse_timestamp(data.get("completedAt")),
        due_date=_parse_timestamp(data.get("dueDate")),
        due_date_reminder=_parse_reminder(data.get("dueDateReminder")),
        labels=tuple(str(label) for label in data.get("labels") or ()),
        project_id=str(project_id) if project_id is not None else None,
        estimated_minutes=_parse_minutes(data.get("estimatedMinutes")),
        actual_minutes=_parse_minutes(data.get("actualMinutes")),
        comments=tuple(_comment_text(c) for c in data.get("comments") or ()),
    )


def _to_project(data: dict) -> ProjectEntity:
    return ProjectEntity(
        id=str(data["id"]),
        name=str(data.get("name") or ""),
        description=data.get("description") or None,
        color=str(data.get("color") or ""),
    )


def _to_label(data: dict) -> LabelEntity:
    return LabelEntity(
        id=str(data["id"]),
        name=str(data.get("name") or ""),
        color=str(data.get("color") or ""),
    )


def parse_snapshot(payload: dict) -> Snapshot:
    if not isinstance(payload, dict):
        raise SnapshotError("Backup must be a JSON object")
    try:
        return Snapshot(
            tasks=tuple(_to_task(item) for item in payload.get("tasks") or ()),
            projects=tuple(_to_project(item) for item in payload.get("projects") or ()),
            labels=tuple(_to_label(item) for item in payload.get("labels") or ()),
        )
    except (KeyError, TypeError, AttributeError) as exc:
        raise SnapshotError(f"Malformed backup entry: {exc}") from exc


def load_snapshot(path: Path) -> Snapshot:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SnapshotError(f"Cannot read backup {path}: {exc}") from exc
    snapshot = parse_snapshot(payload)
    logger.info(
        "Loaded snapshot %s: %d tasks, %d projects, %d labels",
        path,
        len(snapshot.tasks),
        len(snapshot.projects),
        len(snapshot.labels),
    )
    return snapshot
