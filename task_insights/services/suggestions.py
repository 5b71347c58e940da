from __future__ import annotations

from typing import Iterable, Sequence

from task_insights.domain.entities import LabelEntity, ProjectEntity, TaskEntity

MAX_SUGGESTIONS = 8
MAX_EMPTY_QUERY_SUGGESTIONS = 5
SEED_SUGGESTIONS = ("high priority", "overdue", "today", "completed")
STATUS_VOCABULARY = (
    "completed",
    "active",
    "overdue",
    "high priority",
    "medium priority",
    "low priority",
)


def _ordered_unique(values: Iterable[str], limit: int) -> list[str]:
    return list(dict.fromkeys(values))[:limit]


class SuggestionGenerator:
    def suggest(
        self,
        query: str | None,
        tasks: Sequence[TaskEntity],
        projects: Sequence[ProjectEntity],
        labels: Sequence[LabelEntity],
    ) -> list[str]:
        if not query:
            seeds = list(SEED_SUGGESTIONS)
            seeds.extend(project.name.lower() for project in projects[:3])
            return _ordered_unique(seeds, MAX_EMPTY_QUERY_SUGGESTIONS)

        normalized = query.lower()
        candidates: list[str] = []

        for task in tasks:
            for word in task.title.lower().split(" "):
                if len(word) > 2 and word.startswith(normalized):
                    candidates.append(word)

        for project in projects:
            name = project.name.lower()
            if normalized in name:
                candidates.append(name)

        for label in labels:
            name = label.name.lower()
            if normalized in name:
                candidates.append(name)

        candidates.extend(status for status in STATUS_VOCABULARY if normalized in status)
        return _ordered_unique(candidates, MAX_SUGGESTIONS)
