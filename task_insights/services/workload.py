from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Sequence

from task_insights.domain.entities import TaskEntity
from task_insights.domain.enums import Priority, RecommendationKind
from task_insights.domain.results import (
    BusiestDay,
    DateWindow,
    WorkloadAnalysis,
    WorkloadDay,
    WorkloadMetrics,
    WorkloadRecommendation,
)

from .patterns import WEEKDAYS
from .productivity import round_half_up

DEFAULT_TASK_MINUTES = 60
OVERLOAD_FACTOR = 1.5
MAX_HIGH_PRIORITY_PER_DAY = 3


class WorkloadAnalyzer:
    def __init__(self, week_start: int = 6) -> None:
        self._week_start = week_start

    def current_week(self, today: Optional[date] = None) -> DateWindow:
        today = today or datetime.now(timezone.utc).date()
        return DateWindow.week_of(today, self._week_start)

    def analyze(
        self,
        tasks: Sequence[TaskEntity],
        window: DateWindow | None = None,
    ) -> WorkloadAnalysis:
        window = window or self.current_week()
        relevant = [
            task for task in tasks if task.due_date is not None and task.due_date.date() in window
        ]

        grouped: dict[date, list[TaskEntity]] = {day: [] for day in window.days()}
        for task in relevant:
            grouped[task.due_date.date()].append(task)

        days = tuple(_build_day(day, day_tasks) for day, day_tasks in grouped.items())
        minutes = [day.total_estimated_minutes for day in days]
        average = sum(minutes) / len(minutes) if minutes else 0.0
        max_daily = max(minutes, default=0)
        min_daily = min(minutes, default=0)
        balance = 1 - (max_daily - min_daily) / max_daily if max_daily > 0 else 1

        busiest = None
        for day in days:
            if day.total_estimated_minutes > (busiest.workload if busiest else 0):
                busiest = BusiestDay(date=day.date, workload=day.total_estimated_minutes)

        return WorkloadAnalysis(
            days=days,
            metrics=WorkloadMetrics(
                average_daily=average,
                max_daily=max_daily,
                min_daily=min_daily,
                balance=round_half_up(balance * 100),
                total_tasks=len(relevant),
                busiest_day=busiest,
            ),
            recommendations=tuple(_recommendations(days, average)),
        )


def _build_day(day: date, tasks: list[TaskEntity]) -> WorkloadDay:
    breakdown = {priority: 0 for priority in Priority}
    for task in tasks:
        breakdown[task.priority] += 1
    return WorkloadDay(
        date=day,
        tasks=tuple(tasks),
        total_estimated_minutes=sum(task.estimated_minutes or DEFAULT_TASK_MINUTES for task in tasks),
        priority_breakdown=breakdown,
    )


def _recommendations(days: Sequence[WorkloadDay], average: float) -> list[WorkloadRecommendation]:
    recommendations = []
    for day in days:
        weekday = WEEKDAYS[day.date.weekday()]
        if day.total_estimated_minutes > average * OVERLOAD_FACTOR:
            hours = round_half_up(day.total_estimated_minutes / 60)
            recommendations.append(
                WorkloadRecommendation(
                    kind=RecommendationKind.OVERLOADED_DAY,
                    date=day.date,
                    message=f"{weekday} is overloaded ({hours} hours)",
                    suggestion="Consider moving some tasks to other days",
                )
            )
        if day.priority_breakdown[Priority.HIGH] > MAX_HIGH_PRIORITY_PER_DAY:
            recommendations.append(
                WorkloadRecommendation(
                    kind=RecommendationKind.TOO_MANY_HIGH_PRIORITY,
                    date=day.date,
                    message=f"Too many high-priority tasks on {weekday}",
                    suggestion="Spread high-priority tasks across the week",
                )
            )
    return recommendations
