"""Controllers for account CLI commands."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from blum_tasks.account.auth import authenticated_client
from blum_tasks.account.game import GameService
from blum_tasks.account.models import NEED_TO_START_FARM, BalanceSnapshot
from blum_tasks.account.service import AccountService
from blum_tasks.config import Settings


@dataclass(slots=True)
class DailyCommand:
    """CLI inputs for the daily command."""

    play_game: bool = True


@dataclass(slots=True)
class BalanceCommand:
    """CLI inputs for the balance command."""

    show_farming: bool = True


class AccountCliController:
    """Coordinates account-level command execution."""

    def __init__(
        self,
        *,
        transport: httpx.BaseTransport | None = None,
        game_factory: type[GameService] = GameService,
    ) -> None:
        self._transport = transport
        self._game_factory = game_factory

    def balance(self, command: BalanceCommand) -> list[str]:
        settings = Settings.from_env()
        settings.validate_for_auth()
        with authenticated_client(settings, transport=self._transport) as client:
            account = AccountService(client, settings)
            username = account.get_username()
            balance = account.get_balance()
        lines = [f"User: {username}"]
        lines.extend(_balance_lines(balance, show_farming=command.show_farming))
        return lines

    def daily(self, command: DailyCommand) -> list[str]:
        settings = Settings.from_env()
        settings.validate_for_auth()
        with authenticated_client(settings, transport=self._transport) as client:
            account = AccountService(client, settings)
            username = account.get_username()
            balance = account.get_balance()
            farm_message = account.claim_farming()
            daily_message = account.claim_daily_reward()

            lines = [f"User: {username}"]
            lines.extend(_balance_lines(balance, show_farming=True))
            lines.append(f"Farming claim: {farm_message or 'claimed'}")
            lines.append(f"Daily reward: {daily_message or 'claimed'}")

            if farm_message == NEED_TO_START_FARM:
                session = account.start_farming()
                lines.append(
                    "Farming started: "
                    f"start={session.start_time} end={session.end_time} "
                    f"rate={session.earnings_rate or '-'} balance={session.balance or '-'}",
                )

            if not (command.play_game and settings.game.enabled):
                lines.append("Game: disabled")
            elif balance.play_passes <= 0:
                lines.append("Game: no play passes left")
            else:
                game = self._game_factory(client, settings)
                for game_round in game.play_available(balance.play_passes):
                    lines.append(
                        f"Game: id={game_round.game_id} points={game_round.points} "
                        f"status={game_round.status or '-'}",
                    )
        return lines


def _balance_lines(balance: BalanceSnapshot, *, show_farming: bool) -> list[str]:
    lines = [
        f"Balance: {balance.available_balance or '0'}",
        f"Play passes: {balance.play_passes}",
    ]
    if show_farming and balance.farming is not None:
        lines.append(
            "Farming: "
            f"balance={balance.farming.balance or '0'} "
            f"rate={balance.farming.earnings_rate or '-'} "
            f"ends_at={balance.farming.end_time}",
        )
    return lines
