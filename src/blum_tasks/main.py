"""CLI entrypoint for blum-tasks."""

import logging
from collections.abc import Callable

import rich_click as click
from dotenv import find_dotenv, load_dotenv

from blum_tasks import __version__
from blum_tasks.account.controllers import AccountCliController, BalanceCommand, DailyCommand
from blum_tasks.config import LOG_LEVELS, Settings
from blum_tasks.http.errors import TransportError
from blum_tasks.tasks.controllers import TasksCliController, TasksRunCommand

click.rich_click.USE_MARKDOWN = True
TASKS_CONTROLLER = TasksCliController()
ACCOUNT_CONTROLLER = AccountCliController()


@click.group()
@click.version_option(version=__version__, prog_name="blum-tasks")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level. Defaults to BLUM_LOG_LEVEL or WARNING.",
)
def blum_tasks(log_level: str | None) -> None:
    """Blum earn-tasks automation CLI.

    Credentials are read from `BLUM_QUERY_ID` (environment or `.env`).
    """

    load_dotenv(find_dotenv(usecwd=True))
    if log_level is None:
        try:
            level = Settings.from_env().resolved_log_level()
        except ValueError as error:
            raise click.UsageError(str(error)) from error
    else:
        level = getattr(logging, log_level.upper())
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@blum_tasks.command("tasks")
@click.option(
    "--dry-run/--no-dry-run",
    default=False,
    show_default=True,
    help="Fetch the catalog and print planned actions without starting or claiming.",
)
def tasks(dry_run: bool) -> None:
    """Start and claim every eligible task of the earn catalog."""

    _emit_lines(_invoke(lambda: TASKS_CONTROLLER.run(TasksRunCommand(dry_run=dry_run))))


@blum_tasks.command("daily")
@click.option(
    "--game/--no-game",
    default=True,
    show_default=True,
    help="Spend available play passes on the mini game.",
)
def daily(game: bool) -> None:
    """Claim farming and daily rewards, restart farming and play games."""

    _emit_lines(_invoke(lambda: ACCOUNT_CONTROLLER.daily(DailyCommand(play_game=game))))


@blum_tasks.command("balance")
@click.option(
    "--farming/--no-farming",
    default=True,
    show_default=True,
    help="Include the current farming cycle.",
)
def balance(farming: bool) -> None:
    """Show username, balance and play passes."""

    _emit_lines(
        _invoke(lambda: ACCOUNT_CONTROLLER.balance(BalanceCommand(show_farming=farming))),
    )


def _invoke(action: Callable[[], list[str]]) -> list[str]:
    try:
        return action()
    except ValueError as error:
        raise click.UsageError(str(error)) from error
    except TransportError as error:
        raise click.ClickException(f"Remote call failed: {error}") from error


def _emit_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    blum_tasks()
