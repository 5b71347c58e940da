from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from task_insights.domain.entities import LabelEntity, ProjectEntity, TaskEntity
from task_insights.domain.enums import OptimizationKind, PatternKind, Priority, StatusFilter
from task_insights.domain.filters import SearchFilters
from task_insights.domain.results import DateWindow
from task_insights.domain.snapshot import Snapshot
from task_insights.infra.storage import InMemoryKeyValueStore
from task_insights.services.history_service import SearchHistoryStore
from task_insights.services.insights_service import InsightsService

# Wednesday
NOW = datetime(2026, 3, 11, 12, 0, tzinfo=timezone.utc)


class FakeStore:
    """Host-side store handing out snapshots; counts reads."""

    def __init__(self, tasks, projects, labels) -> None:
        self.tasks = list(tasks)
        self.projects = list(projects)
        self.labels = list(labels)
        self.reads = 0

    def list_tasks(self) -> list[TaskEntity]:
        self.reads += 1
        return self.tasks

    def list_projects(self) -> list[ProjectEntity]:
        return self.projects

    def list_labels(self) -> list[LabelEntity]:
        return self.labels


def _service(store) -> InsightsService:
    history = SearchHistoryStore(InMemoryKeyValueStore(), clock=lambda: NOW)
    return InsightsService(store, history, clock=lambda: NOW)


def _store() -> FakeStore:
    projects = [ProjectEntity(id=f"p{i}", name=f"Project {i}", description="ops work") for i in range(4)]
    labels = [LabelEntity(id="l1", name="ops")]
    tasks = [
        TaskEntity(
            id=f"t{i}",
            title=f"Task {i}",
            created_at=NOW - timedelta(days=2),
            project_id=f"p{i}",
            priority=Priority.HIGH if i < 3 else Priority.LOW,
            due_date=NOW + timedelta(days=1),
        )
        for i in range(4)
    ]
    tasks.append(
        TaskEntity(
            id="done",
            title="Finished",
            created_at=NOW - timedelta(days=3),
            completed=True,
            completed_at=datetime(2026, 3, 9, 9, 0, tzinfo=timezone.utc),
        )
    )
    return FakeStore(tasks, projects, labels)


def test_search_and_history_flow() -> None:
    service = _service(_store())

    results = service.search("ops")
    service.add_search("  OPS ")
    service.add_search("ops")

    assert [hit.item.id for hit in results.labels] == ["l1"]
    assert [entry.query for entry in service.get_history()] == ["ops"]
    assert service.highlight("DevOps", "ops") == "Dev<mark>Ops</mark>"

    service.clear_history()
    assert service.get_history() == []


def test_suggest_and_advanced_search() -> None:
    service = _service(_store())

    assert service.suggest("") == ["high priority", "overdue", "today", "completed", "project 0"]
    assert service.suggest("task") == ["task"]
    done = service.advanced_search("", SearchFilters(status=StatusFilter.COMPLETED))
    assert [task.id for task in done] == ["done"]


def test_analytics_over_current_snapshot() -> None:
    store = _store()
    service = _service(store)

    score = service.calculate_productivity_score(30)
    patterns = service.identify_patterns()
    analysis = service.analyze_workload_balance()
    optimizations = service.suggest_optimizations()

    assert 0 <= score <= 100
    assert [p.kind for p in patterns] == [PatternKind.PRODUCTIVITY_DAY]
    assert analysis.metrics.total_tasks == 4
    assert analysis.metrics.busiest_day.date == date(2026, 3, 12)
    assert [item.kind for item in optimizations] == [
        OptimizationKind.PRIORITY_BALANCE,
        OptimizationKind.PROJECT_FOCUS,
    ]


def test_workload_with_explicit_window() -> None:
    service = _service(_store())

    analysis = service.analyze_workload_balance(DateWindow(start=date(2026, 3, 12), end=date(2026, 3, 12)))

    assert analysis.metrics.balance == 100
    assert analysis.days[0].priority_breakdown[Priority.HIGH] == 3


def test_each_call_reads_a_fresh_snapshot() -> None:
    store = _store()
    service = _service(store)

    service.calculate_productivity_score()
    store.tasks = []

    assert service.calculate_productivity_score() == 0
    assert store.reads == 2


def test_prediction_uses_store_history() -> None:
    store = _store()
    store.tasks.append(
        TaskEntity(id="h", title="h", created_at=NOW, completed=True, actual_minutes=45)
    )
    service = _service(store)

    estimate = service.predict_task_completion(TaskEntity(id="n", title="n", created_at=NOW))

    assert estimate.estimated_minutes == 45


def test_snapshot_capture_freezes_collections() -> None:
    store = _store()

    snapshot = Snapshot.capture(store)
    store.tasks.clear()

    assert len(snapshot.list_tasks()) == 5
