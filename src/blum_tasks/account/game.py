"""Play-pass mini game: start a round, wait it out, claim points."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable

from blum_tasks.account.models import GameRound
from blum_tasks.config import Settings
from blum_tasks.http.client import BlumHttpClient
from blum_tasks.http.errors import ResponseParseError

logger = logging.getLogger(__name__)


class GameService:
    """Plays game rounds with a randomized score inside the configured range."""

    def __init__(
        self,
        client: BlumHttpClient,
        settings: Settings,
        *,
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self.client = client
        self.settings = settings
        self._sleep = sleep
        self._rng = rng or random.Random()

    def play_round(self) -> GameRound:
        base_url = self.settings.endpoints.game_base_url
        response = self.client.post_json(f"{base_url}/api/v1/game/play")
        payload = response.payload
        game_id = payload.get("gameId") if isinstance(payload, dict) else None
        if not isinstance(game_id, str) or not game_id:
            raise ResponseParseError(
                message=f"Game play response has no gameId (HTTP {response.status_code})",
            )

        points = self._rng.randint(self.settings.game.min_points, self.settings.game.max_points)
        logger.info("Game %s started, claiming %d points", game_id, points)
        if self.settings.game.duration_seconds > 0:
            self._sleep(self.settings.game.duration_seconds)
        status = self.client.post_text(
            f"{base_url}/api/v1/game/claim",
            {"gameId": game_id, "points": points},
        )
        return GameRound(game_id=game_id, points=points, status=status.strip())

    def play_available(self, play_passes: int) -> list[GameRound]:
        """Play as many rounds as passes and the configured round limit allow."""

        rounds = min(max(play_passes, 0), self.settings.game.max_rounds)
        return [self.play_round() for _ in range(rounds)]
