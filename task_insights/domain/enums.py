from __future__ import annotations

from enum import StrEnum


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EntityKind(StrEnum):
    TASK = "task"
    PROJECT = "project"
    LABEL = "label"


class StatusFilter(StrEnum):
    ALL = "all"
    COMPLETED = "completed"
    ACTIVE = "active"
    OVERDUE = "overdue"


class PatternKind(StrEnum):
    PRODUCTIVITY_DAY = "productivity_day"
    PROJECT_SUCCESS = "project_success"
    OVERDUE_PATTERN = "overdue_pattern"


class OptimizationKind(StrEnum):
    PRIORITY_BALANCE = "priority_balance"
    TASK_BREAKDOWN = "task_breakdown"
    DEADLINE_MANAGEMENT = "deadline_management"
    PROJECT_FOCUS = "project_focus"


class RecommendationKind(StrEnum):
    OVERLOADED_DAY = "overloaded_day"
    TOO_MANY_HIGH_PRIORITY = "too_many_high_priority"


class Level(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


PRIORITY_WEIGHTS: dict[Priority, int] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}
