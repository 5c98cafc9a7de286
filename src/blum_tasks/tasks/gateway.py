"""Remote task operations: fetch catalog, start task, claim task."""

from __future__ import annotations

import logging
from typing import Protocol
from urllib.parse import quote

from blum_tasks.http.client import ApiResponse, BlumHttpClient
from blum_tasks.http.errors import ResponseParseError
from blum_tasks.tasks.models import ActionResponse, Catalog
from blum_tasks.tasks.parsing import parse_action_response, parse_catalog

logger = logging.getLogger(__name__)

TASKS_PATH = "/api/v1/tasks"


class RemoteTaskGateway(Protocol):
    """Interface for the remote earn-tasks service.

    Every operation raises ``TransportError`` on network or parse failure.
    """

    def fetch_catalog(self) -> Catalog:
        """Fetch the full nested task structure for the current session."""
        raise NotImplementedError

    def start(self, task_id: str) -> ActionResponse:
        """Start a task; an empty title means the task cannot be started now."""
        raise NotImplementedError

    def claim(self, task_id: str) -> ActionResponse:
        """Claim a task reward; an empty title means nothing could be claimed."""
        raise NotImplementedError


class BlumTaskGateway(RemoteTaskGateway):
    """HTTP implementation over the earn domain of the Blum API."""

    def __init__(self, client: BlumHttpClient, *, base_url: str) -> None:
        self.client = client
        self.base_url = base_url.rstrip("/")

    def fetch_catalog(self) -> Catalog:
        response = self.client.get_json(f"{self.base_url}{TASKS_PATH}")
        if not response.is_success:
            raise ResponseParseError(
                message=f"Task catalog request failed: HTTP {response.status_code}",
                code=str(response.status_code),
            )
        catalog = parse_catalog(response.payload)
        logger.info(
            "Fetched task catalog: sections=%d tasks=%d",
            len(catalog.groupings),
            catalog.count_task_nodes(),
        )
        return catalog

    def start(self, task_id: str) -> ActionResponse:
        return self._action(task_id, "start")

    def claim(self, task_id: str) -> ActionResponse:
        return self._action(task_id, "claim")

    def _action(self, task_id: str, verb: str) -> ActionResponse:
        url = f"{self.base_url}{TASKS_PATH}/{quote(task_id, safe='')}/{verb}"
        response = self.client.post_json(url)
        parsed = parse_action_response(response.payload)
        _log_declined(task_id, verb, response, parsed)
        return parsed


def _log_declined(
    task_id: str,
    verb: str,
    response: ApiResponse,
    parsed: ActionResponse,
) -> None:
    if parsed.has_title:
        return
    logger.info(
        "Remote declined %s for task %s: HTTP %d %s",
        verb,
        task_id,
        response.status_code,
        parsed.message or "-",
    )
