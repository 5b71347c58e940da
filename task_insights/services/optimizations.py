from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from task_insights.domain.entities import ProjectEntity, TaskEntity
from task_insights.domain.enums import Level, OptimizationKind, Priority
from task_insights.domain.results import Habits, Optimization, WorkloadSummary

IMPACT_WEIGHTS = {Level.HIGH: 3, Level.MEDIUM: 2, Level.LOW: 1}
EFFORT_WEIGHTS = {Level.LOW: 3, Level.MEDIUM: 2, Level.HIGH: 1}

HIGH_PRIORITY_SHARE = 0.5
LONG_TASK_MINUTES = 120
MAX_UPCOMING_DEADLINES = 5
MAX_ACTIVE_PROJECTS = 3
DEADLINE_HORIZON = timedelta(days=7)
DEFAULT_TASK_MINUTES = 60


def summarize_workload(
    tasks: Sequence[TaskEntity],
    projects: Sequence[ProjectEntity],
    now: Optional[datetime] = None,
) -> WorkloadSummary:
    now = now or datetime.now(timezone.utc)
    horizon = now + DEADLINE_HORIZON
    active = [task for task in tasks if not task.completed]
    busy_projects = {task.project_id for task in active if task.project_id}
    return WorkloadSummary(
        total_tasks=len(tasks),
        active_tasks=len(active),
        completed_tasks=len(tasks) - len(active),
        overdue_tasks=sum(1 for task in active if task.is_overdue(now)),
        high_priority_tasks=sum(1 for task in active if task.priority == Priority.HIGH),
        upcoming_deadlines=sum(
            1 for task in active if task.due_date is not None and now <= task.due_date <= horizon
        ),
        active_projects=sum(1 for project in projects if project.id in busy_projects),
    )


def summarize_habits(tasks: Sequence[TaskEntity]) -> Habits:
    completed = [task for task in tasks if task.completed]
    total = sum(task.actual_minutes or DEFAULT_TASK_MINUTES for task in completed)
    return Habits(average_task_duration=total / max(len(completed), 1))


class OptimizationAdvisor:
    def advise(self, summary: WorkloadSummary, habits: Habits) -> list[Optimization]:
        suggestions = []

        if summary.high_priority_tasks > summary.active_tasks * HIGH_PRIORITY_SHARE:
            suggestions.append(
                Optimization(
                    kind=OptimizationKind.PRIORITY_BALANCE,
                    title="Balance your priorities",
                    description="Too many high-priority tasks can lead to stress",
                    impact=Level.HIGH,
                    effort=Level.LOW,
                    action="Review priorities and lower some of them to medium",
                )
            )

        if habits.average_task_duration > LONG_TASK_MINUTES:
            suggestions.append(
                Optimization(
                    kind=OptimizationKind.TASK_BREAKDOWN,
                    title="Break down large tasks",
                    description="Large tasks are harder to finish and to track",
                    impact=Level.MEDIUM,
                    effort=Level.MEDIUM,
                    action="Split tasks longer than 2 hours into smaller pieces",
                )
            )

        if summary.upcoming_deadlines > MAX_UPCOMING_DEADLINES:
            suggestions.append(
                Optimization(
                    kind=OptimizationKind.DEADLINE_MANAGEMENT,
                    title="Manage your deadlines",
                    description="Many close deadlines can build up pressure",
                    impact=Level.HIGH,
                    effort=Level.MEDIUM,
                    action="Spread tasks with deadlines more evenly",
                )
            )

        if summary.active_projects > MAX_ACTIVE_PROJECTS:
            suggestions.append(
                Optimization(
                    kind=OptimizationKind.PROJECT_FOCUS,
                    title="Focus on fewer projects",
                    description="Working on many projects at once lowers efficiency",
                    impact=Level.HIGH,
                    effort=Level.HIGH,
                    action="Concentrate on the 2-3 most important projects",
                )
            )

        return sorted(
            suggestions,
            key=lambda item: IMPACT_WEIGHTS[item.impact] + EFFORT_WEIGHTS[item.effort],
            reverse=True,
        )
