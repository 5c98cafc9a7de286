from __future__ import annotations

import allure
import pytest

from blum_tasks.tasks.classifier import classify_task_status
from blum_tasks.tasks.models import TaskAction, TaskStatus

pytestmark = [
    allure.epic("Earn Tasks"),
    allure.feature("Status Classification"),
]


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("FINISHED", TaskAction.NONE),
        ("NOT_STARTED", TaskAction.START_THEN_CLAIM),
        ("STARTED", TaskAction.CLAIM_ONLY),
        ("READY_FOR_CLAIM", TaskAction.CLAIM_ONLY),
    ],
)
def test_known_statuses_map_to_fixed_actions(status: str, expected: TaskAction) -> None:
    assert classify_task_status(status) == expected


def test_enum_members_classify_like_their_values() -> None:
    for status in TaskStatus:
        assert classify_task_status(status) == classify_task_status(status.value)


@pytest.mark.parametrize(
    "status",
    ["", "finished", "VERIFYING", "READY_FOR_VERIFY", " FINISHED", None],
)
def test_unknown_statuses_are_unrecognized(status: str | None) -> None:
    assert classify_task_status(status) == TaskAction.UNRECOGNIZED
