"""Domain models for the earn-tasks catalog and run reporting."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class TaskStatus(str, Enum):
    """Task states reported by the remote service."""

    FINISHED = "FINISHED"
    NOT_STARTED = "NOT_STARTED"
    STARTED = "STARTED"
    READY_FOR_CLAIM = "READY_FOR_CLAIM"


class TaskAction(str, Enum):
    """Local action required to move a task forward."""

    NONE = "none"
    START_THEN_CLAIM = "start_then_claim"
    CLAIM_ONLY = "claim_only"
    UNRECOGNIZED = "unrecognized"


class AttemptedAction(str, Enum):
    """Remote calls actually attempted for one task."""

    NONE = "none"
    START = "start"
    CLAIM = "claim"
    START_THEN_CLAIM = "start-then-claim"


class OutcomeResult(str, Enum):
    """Final fate of one task within a run."""

    ALREADY_COMPLETE = "already-complete"
    CLAIMED = "claimed"
    START_FAILED = "start-failed"
    CLAIM_FAILED = "claim-failed"
    SKIPPED_UNRECOGNIZED_STATUS = "skipped-unrecognized-status"


@dataclass(frozen=True, slots=True)
class TaskNode:
    """One task as fetched; status is the raw remote value."""

    task_id: str
    title: str
    status: str
    disclaimer_required: bool = False
    sub_tasks: tuple[TaskNode, ...] = ()


@dataclass(frozen=True, slots=True)
class Grouping:
    """Catalog section with its own tasks and nested sub-sections."""

    title: str
    tasks: tuple[TaskNode, ...] = ()
    sub_groupings: tuple[Grouping, ...] = ()


@dataclass(frozen=True, slots=True)
class Catalog:
    """Ordered top-level groupings returned by one fetch."""

    groupings: tuple[Grouping, ...] = ()

    def count_task_nodes(self) -> int:
        return sum(_count_grouping(grouping) for grouping in self.groupings)


def _count_grouping(grouping: Grouping) -> int:
    own = sum(_count_task(task) for task in grouping.tasks)
    return own + sum(_count_grouping(child) for child in grouping.sub_groupings)


def _count_task(task: TaskNode) -> int:
    return 1 + sum(_count_task(sub_task) for sub_task in task.sub_tasks)


@dataclass(frozen=True, slots=True)
class ActionResponse:
    """Response of a start or claim call; an empty title means the remote declined."""

    title: str = ""
    status: str = ""
    message: str = ""

    @property
    def has_title(self) -> bool:
        return bool(self.title.strip())


@dataclass(frozen=True, slots=True)
class TaskOutcome:
    """Recorded fate of one visited task."""

    task_id: str
    title: str
    attempted: AttemptedAction
    result: OutcomeResult
    detail: str = ""


class RunReport:
    """Outcomes of one catalog run in traversal order.

    Only the traverser appends; once sealed the report is read-only.
    """

    __slots__ = ("_outcomes", "_sealed")

    def __init__(self) -> None:
        self._outcomes: list[TaskOutcome] = []
        self._sealed = False

    def append(self, outcome: TaskOutcome) -> None:
        if self._sealed:
            raise RuntimeError("RunReport is sealed and cannot be modified.")
        self._outcomes.append(outcome)

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def outcomes(self) -> tuple[TaskOutcome, ...]:
        return tuple(self._outcomes)

    def count_by_result(self) -> dict[OutcomeResult, int]:
        """Return outcome counts for every result tag, zeros included."""

        counts = Counter(outcome.result for outcome in self._outcomes)
        return {result: counts.get(result, 0) for result in OutcomeResult}

    def __len__(self) -> int:
        return len(self._outcomes)

    def __iter__(self) -> Iterator[TaskOutcome]:
        return iter(tuple(self._outcomes))
