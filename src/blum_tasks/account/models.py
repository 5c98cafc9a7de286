"""Account, farming and game payload models."""

from __future__ import annotations

from dataclasses import dataclass

NEED_TO_START_FARM = "Need to start farm"


@dataclass(slots=True)
class FarmingSession:
    """Farming cycle as reported by balance or start-farming responses."""

    start_time: int = 0
    end_time: int = 0
    earnings_rate: str = ""
    balance: str = ""


@dataclass(slots=True)
class BalanceSnapshot:
    """User balance with play passes and the current farming cycle."""

    available_balance: str
    play_passes: int
    is_fast_farming_enabled: bool = False
    timestamp: int = 0
    farming: FarmingSession | None = None


@dataclass(slots=True)
class GameRound:
    """One played game and the claim answer."""

    game_id: str
    points: int
    status: str
