from __future__ import annotations

from typing import Sequence

from task_insights.domain.entities import TaskEntity
from task_insights.domain.enums import Level, Priority
from task_insights.domain.results import CompletionEstimate

from .productivity import round_half_up

DEFAULT_ESTIMATES = {
    Priority.HIGH: 180,
    Priority.MEDIUM: 120,
    Priority.LOW: 60,
}


class CompletionPredictor:
    def predict(self, task: TaskEntity, history: Sequence[TaskEntity]) -> CompletionEstimate:
        similar = [
            other
            for other in history
            if other.completed
            and other.priority == task.priority
            and other.project_id == task.project_id
            and other.actual_minutes
        ]
        if not similar:
            return CompletionEstimate(
                estimated_minutes=DEFAULT_ESTIMATES[task.priority],
                confidence=Level.LOW,
                based_on="default_estimates",
            )

        average = sum(other.actual_minutes for other in similar) / len(similar)
        confidence = min(len(similar) * 20, 90)
        if confidence > 70:
            level = Level.HIGH
        elif confidence > 40:
            level = Level.MEDIUM
        else:
            level = Level.LOW

        return CompletionEstimate(
            estimated_minutes=round_half_up(average),
            confidence=level,
            based_on=f"{len(similar)} similar tasks",
            range=(round_half_up(average * 0.7), round_half_up(average * 1.3)),
        )
