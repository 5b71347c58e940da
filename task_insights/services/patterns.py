from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

from task_insights.domain.entities import ProjectEntity, TaskEntity
from task_insights.domain.enums import PatternKind
from task_insights.domain.results import Pattern
from task_insights.services.productivity import round_half_up

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

MIN_PROJECT_TASKS = 3
PROJECT_SUCCESS_RATIO = 0.7
OVERDUE_CONFIDENCE = 85


def _first_max(counts: dict) -> tuple:
    # dicts keep insertion order, max() keeps the first of equal counts
    return max(counts.items(), key=lambda item: item[1])


class PatternDetector:
    def detect(
        self,
        tasks: Sequence[TaskEntity],
        projects: Sequence[ProjectEntity],
        now: Optional[datetime] = None,
    ) -> list[Pattern]:
        now = now or datetime.now(timezone.utc)
        patterns = [
            self._productive_day(tasks),
            self._successful_project(tasks, projects),
            self._overdue_skew(tasks, now),
        ]
        return [pattern for pattern in patterns if pattern is not None]

    def _productive_day(self, tasks: Sequence[TaskEntity]) -> Pattern | None:
        completed = [task for task in tasks if task.completed and task.completed_at]
        if not completed:
            return None

        by_day: dict[str, int] = {}
        for task in completed:
            day = WEEKDAYS[task.completed_at.weekday()]
            by_day[day] = by_day.get(day, 0) + 1

        day, count = _first_max(by_day)
        return Pattern(
            kind=PatternKind.PRODUCTIVITY_DAY,
            title="Most productive day",
            description=f"You complete the most tasks on {day} ({count} tasks)",
            confidence=min(count / len(completed) * 100, 95),
            actionable=f"Plan important tasks for {day}",
        )

    def _successful_project(
        self,
        tasks: Sequence[TaskEntity],
        projects: Sequence[ProjectEntity],
    ) -> Pattern | None:
        best: tuple[ProjectEntity, float, int] | None = None
        for project in projects:
            project_tasks = [task for task in tasks if task.project_id == project.id]
            if len(project_tasks) < MIN_PROJECT_TASKS:
                continue
            ratio = sum(1 for task in project_tasks if task.completed) / len(project_tasks)
            if best is None or ratio > best[1]:
                best = (project, ratio, len(project_tasks))

        if best is None or best[1] <= PROJECT_SUCCESS_RATIO:
            return None

        project, ratio, total = best
        return Pattern(
            kind=PatternKind.PROJECT_SUCCESS,
            title="Successful project",
            description=(
                f'Project "{project.name}" has the highest completion rate '
                f"({round_half_up(ratio * 100)}%)"
            ),
            confidence=min(total * 10, 90),
            actionable="Apply the approach from this project to the others",
        )

    def _overdue_skew(self, tasks: Sequence[TaskEntity], now: datetime) -> Pattern | None:
        overdue = [task for task in tasks if task.is_overdue(now)]
        if not overdue:
            return None

        by_priority: dict[str, int] = {}
        for task in overdue:
            by_priority[task.priority.value] = by_priority.get(task.priority.value, 0) + 1

        priority, _ = _first_max(by_priority)
        return Pattern(
            kind=PatternKind.OVERDUE_PATTERN,
            title="Overdue tasks",
            description=(
                f"You have {len(overdue)} overdue tasks, most of them with "
                f'"{priority}" priority'
            ),
            confidence=OVERDUE_CONFIDENCE,
            actionable="Consider revisiting deadlines or priorities",
        )
