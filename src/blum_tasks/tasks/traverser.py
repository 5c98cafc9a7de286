"""Recursive catalog walk that records one outcome per task node."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from blum_tasks.http.errors import TransportError
from blum_tasks.tasks.classifier import classify_task_status
from blum_tasks.tasks.executor import TaskActionExecutor
from blum_tasks.tasks.gateway import RemoteTaskGateway
from blum_tasks.tasks.models import Catalog, Grouping, RunReport, TaskNode

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CatalogRunError(TransportError):
    """Run aborted by a transport failure; keeps outcomes recorded before it."""

    code: str = "run_aborted"
    partial_report: RunReport = field(default_factory=RunReport)


class CatalogTraverser:
    """Visits every task node of a catalog exactly once in deterministic order.

    Order: groupings in catalog order; inside a grouping its own tasks (each
    followed by its sub-tasks) before its sub-groupings.
    """

    def __init__(self, executor: TaskActionExecutor) -> None:
        self.executor = executor

    def run(self, catalog: Catalog) -> RunReport:
        report = RunReport()
        try:
            for task in iter_task_nodes(catalog):
                self._visit_task(task, report)
        except TransportError as exc:
            report.seal()
            logger.warning(
                "Catalog run aborted after %d task(s): %s",
                len(report),
                exc,
            )
            raise CatalogRunError(
                message=f"Catalog run aborted after {len(report)} task(s): {exc}",
                partial_report=report,
            ) from exc
        report.seal()
        return report

    def _visit_task(self, task: TaskNode, report: RunReport) -> None:
        action = classify_task_status(task.status)
        outcome = self.executor.execute(task, action)
        logger.info(
            "Task %s (%s): %s -> %s",
            task.task_id,
            task.title,
            outcome.attempted.value,
            outcome.result.value,
        )
        report.append(outcome)


def iter_task_nodes(catalog: Catalog) -> Iterator[TaskNode]:
    """Yield every task node of the catalog in traversal order."""

    for grouping in catalog.groupings:
        yield from _iter_grouping(grouping)


def _iter_grouping(grouping: Grouping) -> Iterator[TaskNode]:
    logger.debug("Entering grouping %r", grouping.title)
    for task in grouping.tasks:
        yield from _iter_task(task)
    for child in grouping.sub_groupings:
        yield from _iter_grouping(child)


def _iter_task(task: TaskNode) -> Iterator[TaskNode]:
    yield task
    for sub_task in task.sub_tasks:
        yield from _iter_task(sub_task)


def run_catalog(
    catalog: Catalog,
    *,
    gateway: RemoteTaskGateway,
    settle_seconds: float = 0.0,
) -> RunReport:
    """Run every task in the catalog with provided dependencies."""

    executor = TaskActionExecutor(gateway, settle_seconds=settle_seconds)
    return CatalogTraverser(executor).run(catalog)
