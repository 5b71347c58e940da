from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from task_insights.domain.entities import TaskEntity
from task_insights.domain.enums import PRIORITY_WEIGHTS
from task_insights.domain.results import ProductivityBreakdown

COMPLETION_WEIGHT = 0.4
ON_TIME_WEIGHT = 0.3
PRIORITY_WEIGHT = 0.3


def round_half_up(value: float) -> int:
    # pre-round so 66.49999999999999 from float noise rounds like 66.5
    return int(Decimal(repr(round(value, 9))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _completed_on_time(task: TaskEntity) -> bool:
    if task.due_date is None:
        return True
    # falls back to created_at when completed_at is missing
    reference = task.completed_at or task.created_at
    return reference <= task.due_date


class ProductivityScorer:
    def breakdown(
        self,
        tasks: Sequence[TaskEntity],
        timeframe_days: int = 30,
        now: Optional[datetime] = None,
    ) -> ProductivityBreakdown:
        now = now or datetime.now(timezone.utc)
        start = now - timedelta(days=timeframe_days)
        relevant = [task for task in tasks if task.created_at >= start]
        if not relevant:
            return ProductivityBreakdown()

        completed = [task for task in relevant if task.completed]
        completion_rate = len(completed) / len(relevant)

        if completed:
            on_time_rate = sum(1 for task in completed if _completed_on_time(task)) / len(completed)
        else:
            on_time_rate = 1.0

        weighted_total = sum(PRIORITY_WEIGHTS[task.priority] for task in relevant)
        weighted_completed = sum(PRIORITY_WEIGHTS[task.priority] for task in completed)
        priority_score = weighted_completed / weighted_total if weighted_total else 0.0

        combined = (
            COMPLETION_WEIGHT * completion_rate
            + ON_TIME_WEIGHT * on_time_rate
            + PRIORITY_WEIGHT * priority_score
        )
        return ProductivityBreakdown(
            relevant_tasks=len(relevant),
            completed_tasks=len(completed),
            completion_rate=completion_rate,
            on_time_rate=on_time_rate,
            priority_score=priority_score,
            score=min(max(round_half_up(100 * combined), 0), 100),
        )

    def score(
        self,
        tasks: Sequence[TaskEntity],
        timeframe_days: int = 30,
        now: Optional[datetime] = None,
    ) -> int:
        return self.breakdown(tasks, timeframe_days, now).score
