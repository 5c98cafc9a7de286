"""Drive one task through its start/claim lifecycle."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from blum_tasks.tasks.gateway import RemoteTaskGateway
from blum_tasks.tasks.models import (
    ActionResponse,
    AttemptedAction,
    OutcomeResult,
    TaskAction,
    TaskNode,
    TaskOutcome,
)

logger = logging.getLogger(__name__)


class TaskActionExecutor:
    """Executes the classified action for a task against the remote gateway.

    ``TransportError`` from the gateway is not caught here: a broken transport
    ends the run, while a declined start or claim is recorded as an outcome.
    """

    def __init__(
        self,
        gateway: RemoteTaskGateway,
        *,
        settle_seconds: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.gateway = gateway
        self.settle_seconds = settle_seconds
        self._sleep = sleep

    def execute(self, task: TaskNode, action: TaskAction) -> TaskOutcome:
        if action == TaskAction.NONE:
            return _outcome(task, AttemptedAction.NONE, OutcomeResult.ALREADY_COMPLETE)
        if action == TaskAction.CLAIM_ONLY:
            return self._claim(task, AttemptedAction.CLAIM)
        if action == TaskAction.START_THEN_CLAIM:
            return self._start_then_claim(task)

        logger.warning(
            "Skipping task %s (%s): unrecognized status %r",
            task.task_id,
            task.title,
            task.status,
        )
        return _outcome(
            task,
            AttemptedAction.NONE,
            OutcomeResult.SKIPPED_UNRECOGNIZED_STATUS,
            detail=f"status={task.status}",
        )

    def _start_then_claim(self, task: TaskNode) -> TaskOutcome:
        started = self.gateway.start(task.task_id)
        if not started.has_title:
            if task.disclaimer_required:
                logger.info("Task %s requires a disclaimer acknowledgement", task.task_id)
            return _outcome(
                task,
                AttemptedAction.START,
                OutcomeResult.START_FAILED,
                detail=_decline_detail(started),
            )
        if self.settle_seconds > 0:
            self._sleep(self.settle_seconds)
        return self._claim(task, AttemptedAction.START_THEN_CLAIM)

    def _claim(self, task: TaskNode, attempted: AttemptedAction) -> TaskOutcome:
        claimed = self.gateway.claim(task.task_id)
        if claimed.has_title:
            return _outcome(task, attempted, OutcomeResult.CLAIMED)
        return _outcome(
            task,
            attempted,
            OutcomeResult.CLAIM_FAILED,
            detail=_decline_detail(claimed),
        )


def _outcome(
    task: TaskNode,
    attempted: AttemptedAction,
    result: OutcomeResult,
    *,
    detail: str = "",
) -> TaskOutcome:
    return TaskOutcome(
        task_id=task.task_id,
        title=task.title,
        attempted=attempted,
        result=result,
        detail=detail,
    )


def _decline_detail(response: ActionResponse) -> str:
    if response.message:
        return response.message
    if response.status:
        return f"status={response.status}"
    return ""
