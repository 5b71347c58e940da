from __future__ import annotations

from datetime import datetime, timedelta, timezone

from task_insights.domain.entities import ProjectEntity, TaskEntity
from task_insights.domain.enums import Level, OptimizationKind, Priority
from task_insights.domain.results import Habits, WorkloadSummary
from task_insights.services.optimizations import (
    OptimizationAdvisor,
    summarize_habits,
    summarize_workload,
)

NOW = datetime(2026, 3, 11, 12, 0, tzinfo=timezone.utc)


def _task(task_id: str, **kwargs) -> TaskEntity:
    return TaskEntity(id=task_id, title=task_id, created_at=NOW - timedelta(days=3), **kwargs)


def test_nothing_triggers_on_quiet_workload() -> None:
    assert OptimizationAdvisor().advise(WorkloadSummary(), Habits()) == []


def test_all_rules_ranked_by_impact_and_effort() -> None:
    summary = WorkloadSummary(
        active_tasks=4,
        high_priority_tasks=3,
        upcoming_deadlines=6,
        active_projects=4,
    )

    advice = OptimizationAdvisor().advise(summary, Habits(average_task_duration=150))

    assert [item.kind for item in advice] == [
        OptimizationKind.PRIORITY_BALANCE,
        OptimizationKind.DEADLINE_MANAGEMENT,
        OptimizationKind.TASK_BREAKDOWN,
        OptimizationKind.PROJECT_FOCUS,
    ]
    assert (advice[0].impact, advice[0].effort) == (Level.HIGH, Level.LOW)


def test_equal_rank_keeps_rule_order() -> None:
    # task_breakdown (medium/medium) and project_focus (high/high) both rank 4
    summary = WorkloadSummary(active_projects=5)

    advice = OptimizationAdvisor().advise(summary, Habits(average_task_duration=121))

    assert [item.kind for item in advice] == [
        OptimizationKind.TASK_BREAKDOWN,
        OptimizationKind.PROJECT_FOCUS,
    ]


def test_thresholds_are_strict() -> None:
    summary = WorkloadSummary(
        active_tasks=4,
        high_priority_tasks=2,
        upcoming_deadlines=5,
        active_projects=3,
    )

    assert OptimizationAdvisor().advise(summary, Habits(average_task_duration=120)) == []


def test_ordering_is_deterministic() -> None:
    summary = WorkloadSummary(total_tasks=10, active_tasks=3, high_priority_tasks=2, active_projects=4)
    other = WorkloadSummary(total_tasks=99, completed_tasks=40, active_tasks=3, high_priority_tasks=2, active_projects=4)
    advisor = OptimizationAdvisor()

    first = advisor.advise(summary, Habits())
    second = advisor.advise(summary, Habits())
    unrelated = advisor.advise(other, Habits())

    assert first == second
    assert [item.kind for item in unrelated] == [item.kind for item in first]


def test_summary_of_four_busy_projects_and_high_priority_tasks() -> None:
    projects = [ProjectEntity(id=f"p{i}", name=f"P{i}") for i in range(5)]
    tasks = [
        _task("a", project_id="p0", priority=Priority.HIGH),
        _task("b", project_id="p1", priority=Priority.HIGH),
        _task("c", project_id="p2"),
        _task("d", project_id="p3", completed=True),
        _task("e", project_id="p3", completed=True),
        _task("f", project_id="p3", priority=Priority.LOW),
        _task("g", project_id="p4", completed=True, priority=Priority.HIGH),
        _task("h", project_id="missing"),
    ]

    summary = summarize_workload(tasks[:7], projects, NOW)

    assert summary.total_tasks == 7
    assert summary.active_tasks == 4
    assert summary.completed_tasks == 3
    assert summary.high_priority_tasks == 2
    assert summary.active_projects == 4
    assert summarize_workload(tasks, projects, NOW).active_projects == 4


def test_four_active_projects_with_high_priority_majority() -> None:
    projects = [ProjectEntity(id=f"p{i}", name=f"P{i}") for i in range(4)]
    tasks = [
        _task("a", project_id="p0", priority=Priority.HIGH),
        _task("b", project_id="p1", priority=Priority.HIGH),
        _task("c", project_id="p2"),
        _task("d", project_id="p3", completed=True),
        _task("e", project_id="p3", priority=Priority.LOW, completed=True),
        _task("f", project_id="p3", priority=Priority.HIGH),
    ]
    summary = summarize_workload(tasks, projects, NOW)

    advice = OptimizationAdvisor().advise(summary, summarize_habits(tasks))

    kinds = [item.kind for item in advice]
    assert summary.active_projects == 4
    assert OptimizationKind.PRIORITY_BALANCE in kinds
    assert OptimizationKind.PROJECT_FOCUS in kinds
    assert kinds.index(OptimizationKind.PRIORITY_BALANCE) < kinds.index(OptimizationKind.PROJECT_FOCUS)


def test_upcoming_deadlines_and_overdue_counts() -> None:
    tasks = [
        _task("soon", due_date=NOW + timedelta(days=2)),
        _task("edge", due_date=NOW + timedelta(days=7)),
        _task("far", due_date=NOW + timedelta(days=8)),
        _task("late", due_date=NOW - timedelta(hours=1)),
        _task("done", due_date=NOW + timedelta(days=1), completed=True),
    ]

    summary = summarize_workload(tasks, [], NOW)

    assert summary.upcoming_deadlines == 2
    assert summary.overdue_tasks == 1


def test_habits_average_defaults_missing_durations() -> None:
    tasks = [
        _task("a", completed=True, actual_minutes=240),
        _task("b", completed=True),
        _task("c", actual_minutes=1000),
    ]

    assert summarize_habits(tasks).average_task_duration == 150
    assert summarize_habits([]).average_task_duration == 0
