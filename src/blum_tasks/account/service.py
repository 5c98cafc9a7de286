"""One-shot account calls: user, balance, farming and daily reward."""

from __future__ import annotations

import logging

from blum_tasks.account.models import BalanceSnapshot, FarmingSession
from blum_tasks.config import Settings
from blum_tasks.http.client import ApiResponse, BlumHttpClient
from blum_tasks.http.errors import ResponseParseError

logger = logging.getLogger(__name__)


class AccountService:
    """Account-level endpoints of the gateway and game domains."""

    def __init__(self, client: BlumHttpClient, settings: Settings) -> None:
        self.client = client
        self.settings = settings

    def get_username(self) -> str:
        response = self.client.get_json(f"{self.settings.endpoints.gateway_base_url}/v1/user/me")
        return _text(_require_object(response, "user").get("username"))

    def get_balance(self) -> BalanceSnapshot:
        response = self.client.get_json(
            f"{self.settings.endpoints.game_base_url}/api/v1/user/balance",
        )
        payload = _require_object(response, "balance")
        farming = payload.get("farming")
        return BalanceSnapshot(
            available_balance=_text(payload.get("availableBalance")),
            play_passes=_int(payload.get("playPasses")),
            is_fast_farming_enabled=bool(payload.get("isFastFarmingEnabled", False)),
            timestamp=_int(payload.get("timestamp")),
            farming=_farming(farming) if isinstance(farming, dict) else None,
        )

    def claim_farming(self) -> str:
        """Claim the farming reward; returns the remote message, empty on success."""

        response = self.client.post_json(
            f"{self.settings.endpoints.game_base_url}/api/v1/farming/claim",
        )
        message = _text(_require_object(response, "farming claim").get("message"))
        logger.info("Farming claim answered: %s", message or "ok")
        return message

    def start_farming(self) -> FarmingSession:
        response = self.client.post_json(
            f"{self.settings.endpoints.game_base_url}/api/v1/farming/start",
        )
        return _farming(_require_object(response, "farming start"))

    def claim_daily_reward(self) -> str:
        response = self.client.post_json(
            f"{self.settings.endpoints.game_base_url}/api/v1/daily-reward"
            f"?offset={self.settings.daily_reward_offset}",
        )
        return _text(_require_object(response, "daily reward").get("message"))


def _require_object(response: ApiResponse, what: str) -> dict[str, object]:
    if not isinstance(response.payload, dict):
        raise ResponseParseError(
            message=f"Unexpected {what} response from {response.url}: "
            f"HTTP {response.status_code}",
        )
    return response.payload


def _farming(raw: dict[str, object]) -> FarmingSession:
    return FarmingSession(
        start_time=_int(raw.get("startTime")),
        end_time=_int(raw.get("endTime")),
        earnings_rate=_text(raw.get("earningsRate")),
        balance=_text(raw.get("balance")),
    )


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _int(value: object) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ResponseParseError(message=f"Expected an integer, got {value!r}") from exc
