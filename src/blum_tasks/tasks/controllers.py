"""Controller for the earn-tasks CLI command."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from blum_tasks.account.auth import authenticated_client
from blum_tasks.config import Settings
from blum_tasks.tasks.classifier import classify_task_status
from blum_tasks.tasks.gateway import BlumTaskGateway
from blum_tasks.tasks.models import Catalog, RunReport
from blum_tasks.tasks.traverser import iter_task_nodes, run_catalog


@dataclass(slots=True)
class TasksRunCommand:
    """CLI inputs for the tasks command."""

    dry_run: bool = False


class TasksCliController:
    """Coordinates one catalog run against the remote service."""

    def __init__(self, *, transport: httpx.BaseTransport | None = None) -> None:
        self._transport = transport

    def run(self, command: TasksRunCommand) -> list[str]:
        settings = Settings.from_env()
        settings.validate_for_auth()
        with authenticated_client(settings, transport=self._transport) as client:
            gateway = BlumTaskGateway(client, base_url=settings.endpoints.earn_base_url)
            catalog = gateway.fetch_catalog()
            if command.dry_run:
                return _plan_lines(catalog)
            report = run_catalog(
                catalog,
                gateway=gateway,
                settle_seconds=settings.tasks.settle_seconds,
            )
        return _report_lines(report)


def _plan_lines(catalog: Catalog) -> list[str]:
    lines = [
        f"Task catalog: sections={len(catalog.groupings)} tasks={catalog.count_task_nodes()}",
    ]
    for task in iter_task_nodes(catalog):
        action = classify_task_status(task.status)
        lines.append(
            f"  {task.task_id} status={task.status or '-'} action={action.value} "
            f"title={task.title!r}",
        )
    return lines


def _report_lines(report: RunReport) -> list[str]:
    counts = report.count_by_result()
    lines = [
        "Tasks run completed: "
        f"visited={len(report)} "
        + " ".join(f"{result.value}={count}" for result, count in counts.items()),
    ]
    for outcome in report:
        line = (
            f"  {outcome.task_id} attempted={outcome.attempted.value} "
            f"result={outcome.result.value} title={outcome.title!r}"
        )
        if outcome.detail:
            line += f" detail={outcome.detail!r}"
        lines.append(line)
    return lines
