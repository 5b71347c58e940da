from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from task_insights.domain.entities import TaskEntity
from task_insights.domain.filters import SearchFilters
from task_insights.domain.results import (
    CompletionEstimate,
    DateWindow,
    HistoryEntry,
    Optimization,
    Pattern,
    SearchResults,
    WorkloadAnalysis,
)
from task_insights.domain.snapshot import Snapshot, SnapshotSource

from .history_service import SearchHistoryStore
from .optimizations import OptimizationAdvisor, summarize_habits, summarize_workload
from .patterns import PatternDetector
from .prediction import CompletionPredictor
from .productivity import ProductivityScorer
from .search_service import SearchEngine, highlight
from .suggestions import SuggestionGenerator
from .workload import WorkloadAnalyzer


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InsightsService:
    """Search and analytics over consistent snapshots of a task store.

    Each call takes a fresh snapshot from ``source``; nothing is cached between calls.
    """

    def __init__(
        self,
        source: SnapshotSource,
        history: SearchHistoryStore,
        search_engine: SearchEngine | None = None,
        workload_analyzer: WorkloadAnalyzer | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._source = source
        self._history = history
        self._search_engine = search_engine or SearchEngine()
        self._suggestions = SuggestionGenerator()
        self._scorer = ProductivityScorer()
        self._patterns = PatternDetector()
        self._workload = workload_analyzer or WorkloadAnalyzer()
        self._advisor = OptimizationAdvisor()
        self._predictor = CompletionPredictor()
        self._clock = clock

    def search(self, query: str | None) -> SearchResults:
        snapshot = Snapshot.capture(self._source)
        return self._search_engine.search(query, snapshot.tasks, snapshot.projects, snapshot.labels)

    def advanced_search(self, query: str | None, filters: SearchFilters) -> list[TaskEntity]:
        snapshot = Snapshot.capture(self._source)
        return self._search_engine.advanced_search(
            query,
            filters,
            snapshot.tasks,
            snapshot.projects,
            snapshot.labels,
            now=self._clock(),
        )

    def suggest(self, query: str | None) -> list[str]:
        snapshot = Snapshot.capture(self._source)
        return self._suggestions.suggest(query, snapshot.tasks, snapshot.projects, snapshot.labels)

    @staticmethod
    def highlight(text: str | None, query: str | None) -> str | None:
        return highlight(text, query)

    def get_history(self) -> list[HistoryEntry]:
        return self._history.get_history()

    def add_search(self, query: str | None) -> list[HistoryEntry]:
        return self._history.add_search(query)

    def clear_history(self) -> None:
        self._history.clear_history()

    def calculate_productivity_score(self, timeframe_days: int = 30) -> int:
        return self._scorer.score(self._source.list_tasks(), timeframe_days, now=self._clock())

    def identify_patterns(self) -> list[Pattern]:
        snapshot = Snapshot.capture(self._source)
        return self._patterns.detect(snapshot.tasks, snapshot.projects, now=self._clock())

    def analyze_workload_balance(self, window: Optional[DateWindow] = None) -> WorkloadAnalysis:
        window = window or self._workload.current_week(self._clock().date())
        return self._workload.analyze(self._source.list_tasks(), window)

    def suggest_optimizations(self) -> list[Optimization]:
        snapshot = Snapshot.capture(self._source)
        summary = summarize_workload(snapshot.tasks, snapshot.projects, now=self._clock())
        return self._advisor.advise(summary, summarize_habits(snapshot.tasks))

    def predict_task_completion(self, task: TaskEntity) -> CompletionEstimate:
        return self._predictor.predict(task, self._source.list_tasks())
