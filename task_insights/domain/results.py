from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterator, Literal, Optional, Union

from .entities import LabelEntity, ProjectEntity, TaskEntity
from .enums import EntityKind, Level, OptimizationKind, PatternKind, Priority, RecommendationKind


@dataclass(frozen=True)
class MatchSpan:
    field: str
    value: str
    start: int
    end: int
    distance: float


@dataclass(frozen=True)
class ScoredTask:
    item: TaskEntity
    score: float
    matches: tuple[MatchSpan, ...] = ()
    kind: Literal[EntityKind.TASK] = EntityKind.TASK


@dataclass(frozen=True)
class ScoredProject:
    item: ProjectEntity
    score: float
    matches: tuple[MatchSpan, ...] = ()
    kind: Literal[EntityKind.PROJECT] = EntityKind.PROJECT


@dataclass(frozen=True)
class ScoredLabel:
    item: LabelEntity
    score: float
    matches: tuple[MatchSpan, ...] = ()
    kind: Literal[EntityKind.LABEL] = EntityKind.LABEL


SearchHit = Union[ScoredTask, ScoredProject, ScoredLabel]


@dataclass(frozen=True)
class SearchResults:
    tasks: tuple[ScoredTask, ...] = ()
    projects: tuple[ScoredProject, ...] = ()
    labels: tuple[ScoredLabel, ...] = ()

    @property
    def total(self) -> int:
        return len(self.tasks) + len(self.projects) + len(self.labels)

    def hits(self) -> Iterator[SearchHit]:
        yield from self.tasks
        yield from self.projects
        yield from self.labels


@dataclass(frozen=True)
class HistoryEntry:
    query: str
    timestamp: datetime


@dataclass(frozen=True)
class DateWindow:
    start: date
    end: date

    @classmethod
    def week_of(cls, day: date, week_start: int = 6) -> "DateWindow":
        """Calendar week containing ``day``; ``week_start`` uses ``date.weekday()`` numbering."""
        offset = (day.weekday() - week_start) % 7
        start = day - timedelta(days=offset)
        return cls(start=start, end=start + timedelta(days=6))

    def days(self) -> list[date]:
        span = (self.end - self.start).days
        return [self.start + timedelta(days=offset) for offset in range(span + 1)]

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class WorkloadDay:
    date: date
    tasks: tuple[TaskEntity, ...] = ()
    total_estimated_minutes: float = 0
    priority_breakdown: dict[Priority, int] = field(
        default_factory=lambda: {priority: 0 for priority in Priority}
    )


@dataclass(frozen=True)
class BusiestDay:
    date: date
    workload: float


@dataclass(frozen=True)
class WorkloadMetrics:
    average_daily: float
    max_daily: float
    min_daily: float
    balance: int
    total_tasks: int
    busiest_day: Optional[BusiestDay]


@dataclass(frozen=True)
class WorkloadRecommendation:
    kind: RecommendationKind
    date: date
    message: str
    suggestion: str


@dataclass(frozen=True)
class WorkloadAnalysis:
    days: tuple[WorkloadDay, ...]
    metrics: WorkloadMetrics
    recommendations: tuple[WorkloadRecommendation, ...]


@dataclass(frozen=True)
class Pattern:
    kind: PatternKind
    title: str
    description: str
    confidence: float
    actionable: str


@dataclass(frozen=True)
class Optimization:
    kind: OptimizationKind
    title: str
    description: str
    impact: Level
    effort: Level
    action: str


@dataclass(frozen=True)
class WorkloadSummary:
    total_tasks: int = 0
    active_tasks: int = 0
    completed_tasks: int = 0
    overdue_tasks: int = 0
    high_priority_tasks: int = 0
    upcoming_deadlines: int = 0
    active_projects: int = 0


@dataclass(frozen=True)
class Habits:
    average_task_duration: float = 0


@dataclass(frozen=True)
class CompletionEstimate:
    estimated_minutes: int
    confidence: Level
    based_on: str
    range: tuple[int, int] | None = None


@dataclass(frozen=True)
class ProductivityBreakdown:
    relevant_tasks: int = 0
    completed_tasks: int = 0
    completion_rate: float = 0
    on_time_rate: float = 1
    priority_score: float = 0
    score: int = 0
