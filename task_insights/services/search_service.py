from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence

from task_insights.domain.entities import LabelEntity, ProjectEntity, TaskEntity
from task_insights.domain.enums import StatusFilter
from task_insights.domain.filters import SearchFilters
from task_insights.domain.results import (
    MatchSpan,
    ScoredLabel,
    ScoredProject,
    ScoredTask,
    SearchResults,
)

from .fuzzy import FuzzyMatcher, RapidFuzzMatcher

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


@dataclass(frozen=True)
class SearchConfig:
    fields: tuple[tuple[str, float], ...]
    threshold: float


TASK_SEARCH = SearchConfig(
    fields=(("title", 0.4), ("description", 0.3), ("comments", 0.2), ("project_name", 0.1)),
    threshold=0.4,
)
PROJECT_SEARCH = SearchConfig(fields=(("name", 0.6), ("description", 0.4)), threshold=0.3)
LABEL_SEARCH = SearchConfig(fields=(("name", 1.0),), threshold=0.2)


def normalize_query(query: str | None) -> str:
    return (query or "").strip().lower()


def find_highlight(text: str | None, query: str | None) -> tuple[int, int] | None:
    needle = (query or "").strip()
    if not text or not needle:
        return None
    found = re.search(re.escape(needle), text, re.IGNORECASE)
    return found.span() if found else None


def highlight(
    text: str | None,
    query: str | None,
    open_tag: str = "<mark>",
    close_tag: str = "</mark>",
) -> str | None:
    """Wrap the first literal, case-insensitive occurrence of ``query`` in ``text``.

    Typo matches accepted by the fuzzy search have no literal occurrence and come
    back unmarked.
    """
    span = find_highlight(text, query)
    if span is None:
        return text
    start, end = span
    return f"{text[:start]}{open_tag}{text[start:end]}{close_tag}{text[end:]}"


class SearchEngine:
    def __init__(
        self,
        matcher: FuzzyMatcher | None = None,
        task_config: SearchConfig = TASK_SEARCH,
        project_config: SearchConfig = PROJECT_SEARCH,
        label_config: SearchConfig = LABEL_SEARCH,
    ) -> None:
        self._matcher = matcher or RapidFuzzMatcher()
        self._task_config = task_config
        self._project_config = project_config
        self._label_config = label_config

    def search(
        self,
        query: str | None,
        tasks: Sequence[TaskEntity],
        projects: Sequence[ProjectEntity],
        labels: Sequence[LabelEntity],
    ) -> SearchResults:
        normalized = normalize_query(query)
        if len(normalized) < MIN_QUERY_LENGTH:
            return SearchResults()

        project_names = {project.id: project.name for project in projects}

        scored_tasks = []
        for task in tasks:
            fields = {
                "title": task.title,
                "description": task.description,
                "comments": " ".join(task.comments),
                "project_name": project_names.get(task.project_id, "") if task.project_id else "",
            }
            scored = self._score(normalized, fields, self._task_config)
            if scored is not None:
                scored_tasks.append(ScoredTask(item=task, score=scored[0], matches=scored[1]))

        scored_projects = []
        for project in projects:
            fields = {"name": project.name, "description": project.description}
            scored = self._score(normalized, fields, self._project_config)
            if scored is not None:
                scored_projects.append(ScoredProject(item=project, score=scored[0], matches=scored[1]))

        scored_labels = []
        for label in labels:
            scored = self._score(normalized, {"name": label.name}, self._label_config)
            if scored is not None:
                scored_labels.append(ScoredLabel(item=label, score=scored[0], matches=scored[1]))

        results = SearchResults(
            tasks=tuple(sorted(scored_tasks, key=lambda hit: hit.score)),
            projects=tuple(sorted(scored_projects, key=lambda hit: hit.score)),
            labels=tuple(sorted(scored_labels, key=lambda hit: hit.score)),
        )
        logger.debug("Search %r matched %d entities", normalized, results.total)
        return results

    def advanced_search(
        self,
        query: str | None,
        filters: SearchFilters,
        tasks: Sequence[TaskEntity],
        projects: Sequence[ProjectEntity],
        labels: Sequence[LabelEntity],
        now: Optional[datetime] = None,
    ) -> list[TaskEntity]:
        now = now or datetime.now(timezone.utc)
        candidates: list[TaskEntity] = list(tasks)
        if len(normalize_query(query)) >= MIN_QUERY_LENGTH:
            candidates = [hit.item for hit in self.search(query, tasks, projects, labels).tasks]
        return [task for task in candidates if _passes_filters(task, filters, now)]

    def _score(
        self,
        query: str,
        fields: dict[str, str | None],
        config: SearchConfig,
    ) -> tuple[float, tuple[MatchSpan, ...]] | None:
        total = 0.0
        spans: list[MatchSpan] = []
        for name, weight in config.fields:
            value = fields.get(name) or ""
            found = self._matcher.match(query, value) if value else None
            distance = found.distance if found else 1.0
            total += weight * distance
            if found and distance <= config.threshold:
                spans.append(MatchSpan(name, value, found.start, found.end, distance))
        score = min(max(total, 0.0), 1.0)
        if score > config.threshold:
            return None
        return score, tuple(spans)


def _passes_filters(task: TaskEntity, filters: SearchFilters, now: datetime) -> bool:
    if filters.status == StatusFilter.COMPLETED and not task.completed:
        return False
    if filters.status == StatusFilter.ACTIVE and task.completed:
        return False
    if filters.status == StatusFilter.OVERDUE and not task.is_overdue(now):
        return False

    if filters.priority is not None and task.priority != filters.priority:
        return False

    if filters.project_id is not None and task.project_id != filters.project_id:
        return False

    if filters.label_ids and not set(filters.label_ids) & set(task.labels):
        return False

    if filters.due_from is not None or filters.due_to is not None:
        if task.due_date is None:
            return False
        if filters.due_from is not None and task.due_date < filters.due_from:
            return False
        if filters.due_to is not None and task.due_date > filters.due_to:
            return False

    return True
