"""Decode catalog and action payloads into domain models."""

from __future__ import annotations

from blum_tasks.http.errors import ResponseParseError
from blum_tasks.tasks.models import ActionResponse, Catalog, Grouping, TaskNode


def parse_catalog(payload: object) -> Catalog:
    """Build a catalog from the tasks endpoint payload.

    Accepts a list of sections or an object with a ``sections`` list. Both
    nesting shapes are supported: tasks with ``subTasks`` and sections with
    ``subSections``.
    """

    if isinstance(payload, dict) and isinstance(payload.get("sections"), list):
        payload = payload["sections"]
    if not isinstance(payload, list):
        raise ResponseParseError(
            message=f"Task catalog must be a list of sections, got {type(payload).__name__}",
        )
    return Catalog(groupings=tuple(_parse_grouping(item, path="catalog") for item in payload))


def parse_action_response(payload: object) -> ActionResponse:
    if not isinstance(payload, dict):
        raise ResponseParseError(
            message=f"Task action response must be an object, got {type(payload).__name__}",
        )
    return ActionResponse(
        title=_text(payload.get("title")),
        status=_text(payload.get("status")),
        message=_text(payload.get("message")),
    )


def _parse_grouping(raw: object, *, path: str) -> Grouping:
    if not isinstance(raw, dict):
        raise ResponseParseError(message=f"Section at {path} must be an object")
    title = _text(raw.get("title")) or _text(raw.get("sectionType"))
    here = f"{path}/{title or '?'}"
    return Grouping(
        title=title,
        tasks=tuple(_parse_task(item, path=here) for item in _list_field(raw, "tasks", here)),
        sub_groupings=tuple(
            _parse_grouping(item, path=here) for item in _list_field(raw, "subSections", here)
        ),
    )


def _parse_task(raw: object, *, path: str) -> TaskNode:
    if not isinstance(raw, dict):
        raise ResponseParseError(message=f"Task at {path} must be an object")
    task_id = _text(raw.get("id"))
    if not task_id:
        raise ResponseParseError(message=f"Task at {path} has no id")
    here = f"{path}/{task_id}"
    return TaskNode(
        task_id=task_id,
        title=_text(raw.get("title")),
        status=_raw_text(raw.get("status")),
        disclaimer_required=_flag(raw.get("isDisclaimerRequired")),
        sub_tasks=tuple(_parse_task(item, path=here) for item in _list_field(raw, "subTasks", here)),
    )


def _list_field(raw: dict[str, object], name: str, path: str) -> list[object]:
    value = raw.get(name)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ResponseParseError(message=f"Field {name!r} at {path} must be a list")
    return value


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _raw_text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _flag(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return False
