from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from .entities import LabelEntity, ProjectEntity, TaskEntity


class SnapshotSource(Protocol):
    def list_tasks(self) -> Sequence[TaskEntity]: ...

    def list_projects(self) -> Sequence[ProjectEntity]: ...

    def list_labels(self) -> Sequence[LabelEntity]: ...


@dataclass(frozen=True)
class Snapshot:
    tasks: tuple[TaskEntity, ...] = ()
    projects: tuple[ProjectEntity, ...] = ()
    labels: tuple[LabelEntity, ...] = ()

    @classmethod
    def capture(cls, source: SnapshotSource) -> "Snapshot":
        return cls(
            tasks=tuple(source.list_tasks()),
            projects=tuple(source.list_projects()),
            labels=tuple(source.list_labels()),
        )

    def list_tasks(self) -> tuple[TaskEntity, ...]:
        return self.tasks

    def list_projects(self) -> tuple[ProjectEntity, ...]:
        return self.projects

    def list_labels(self) -> tuple[LabelEntity, ...]:
        return self.labels
