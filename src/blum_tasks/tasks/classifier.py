"""Map remote task status to the local action it requires."""

from __future__ import annotations

from blum_tasks.tasks.models import TaskAction, TaskStatus

_STATUS_ACTIONS: dict[str, TaskAction] = {
    TaskStatus.FINISHED.value: TaskAction.NONE,
    TaskStatus.NOT_STARTED.value: TaskAction.START_THEN_CLAIM,
    TaskStatus.STARTED.value: TaskAction.CLAIM_ONLY,
    TaskStatus.READY_FOR_CLAIM.value: TaskAction.CLAIM_ONLY,
}


def classify_task_status(status: str | TaskStatus | None) -> TaskAction:
    """Return the required action; unknown or missing statuses are ``UNRECOGNIZED``."""

    if isinstance(status, TaskStatus):
        return _STATUS_ACTIONS[status.value]
    if not isinstance(status, str):
        return TaskAction.UNRECOGNIZED
    return _STATUS_ACTIONS.get(status, TaskAction.UNRECOGNIZED)
