from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from task_insights.domain.enums import Priority
from task_insights.infra.backup import SnapshotError, load_snapshot, parse_snapshot

BACKUP = {
    "tasks": [
        {
            "id": "t1",
            "title": "Write report",
            "description": "",
            "priority": "high",
            "completed": True,
            "createdAt": "2026-03-01T09:00:00.000Z",
            "completedAt": "2026-03-02T10:30:00Z",
            "dueDate": "2026-03-03",
            "dueDateReminder": 30,
            "labels": ["l1", "deleted"],
            "projectId": "p1",
            "estimatedMinutes": 90,
            "actualMinutes": None,
            "comments": [{"id": "c1", "text": "first draft"}, "plain note"],
        },
        {
            "id": 2,
            "title": "Loose task",
            "priority": "urgent",
            "completed": False,
            "createdAt": "2026-03-05T08:00:00",
        },
    ],
    "projects": [{"id": "p1", "name": "Reports", "color": "#fff"}],
    "labels": [{"id": "l1", "name": "writing", "color": "#000"}],
    "backupDate": "2026-03-06T00:00:00Z",
}


def test_parse_snapshot_maps_backup_fields() -> None:
    snapshot = parse_snapshot(BACKUP)

    first, second = snapshot.tasks
    assert first.priority == Priority.HIGH
    assert first.description is None
    assert first.completed_at == datetime(2026, 3, 2, 10, 30, tzinfo=timezone.utc)
    assert first.due_date == datetime(2026, 3, 3, tzinfo=timezone.utc)
    assert first.due_date_reminder == 30
    assert first.labels == ("l1", "deleted")
    assert first.estimated_minutes == 90
    assert first.actual_minutes is None
    assert first.comments == ("first draft", "plain note")

    assert second.id == "2"
    assert second.priority == Priority.MEDIUM
    assert second.created_at.tzinfo is not None
    assert second.labels == ()
    assert second.comments == ()

    assert snapshot.list_projects()[0].name == "Reports"
    assert snapshot.list_labels()[0].name == "writing"


def test_load_snapshot_reads_file(tmp_path) -> None:
    path = tmp_path / "backup.json"
    path.write_text(json.dumps(BACKUP), encoding="utf-8")

    snapshot = load_snapshot(path)

    assert len(snapshot.list_tasks()) == 2


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"tasks": [{"title": "no id", "createdAt": "2026-03-01T00:00:00Z"}]},
        {"tasks": [{"id": "t1", "title": "no created"}]},
        {"tasks": [{"id": "t1", "createdAt": "yesterday"}]},
    ],
)
def test_malformed_backups_raise(payload) -> None:
    with pytest.raises(SnapshotError):
        parse_snapshot(payload)


@pytest.mark.parametrize("reminder", ["soon", "15.5", [30]])
def test_unusable_reminder_is_dropped(tmp_path, reminder) -> None:
    path = tmp_path / "backup.json"
    task = {"id": 1, "title": "x", "createdAt": "2026-01-01T00:00:00Z", "dueDateReminder": reminder}
    path.write_text(json.dumps({"tasks": [task]}), encoding="utf-8")

    snapshot = load_snapshot(path)

    assert snapshot.tasks[0].due_date_reminder is None


def test_unreadable_file_raises(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SnapshotError):
        load_snapshot(path)
    with pytest.raises(SnapshotError):
        load_snapshot(tmp_path / "missing.json")
