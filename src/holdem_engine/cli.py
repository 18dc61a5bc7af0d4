"""Hold'em CLI: Typer-based terminal shell around the table engine."""

import logging
import random
import time
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from holdem_engine import config

app = typer.Typer(
    name="holdem",
    help="Play-money Texas Hold'em against naive AI opponents",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _build_config(players, chips, small_blind, big_blind):
    from holdem_engine.errors import ConfigurationError
    from holdem_engine.models.table import TableConfig

    table_config = TableConfig.from_env(
        player_count=players,
        starting_chips=chips,
        small_blind=small_blind,
        big_blind=big_blind,
    )
    try:
        table_config.validate()
    except ConfigurationError as e:
        console.print(f"[red]Invalid table settings:[/red] {e}")
        raise typer.Exit(1)
    return table_config


def _prompt_action(table):
    """Ask the human for an action until a legal one is applied."""
    from holdem_engine.errors import IllegalActionError
    from holdem_engine.models.action import ActionType
    from holdem_engine.simulation.engine import HUMAN_SEAT

    legal = table.legal_actions()
    choices = {
        "f": ActionType.FOLD,
        "k": ActionType.CHECK,
        "c": ActionType.CALL,
        "r": ActionType.RAISE,
        "a": ActionType.ALL_IN,
    }
    hint = "[f]old"
    hint += ", chec[k]" if legal.can_check else f", [c]all {legal.call_amount}"
    if legal.can_raise:
        hint += f", [r]aise {legal.min_raise_to}-{legal.max_raise_to}"
    hint += ", [a]ll-in"

    while True:
        answer = typer.prompt(hint).strip().lower()
        action_type = choices.get(answer[:1])
        if action_type is None:
            console.print("[yellow]Unknown action.[/yellow]")
            continue
        amount = 0
        if action_type == ActionType.RAISE:
            amount = typer.prompt("Raise to", type=int, default=legal.min_raise_to)
        try:
            table.player_action(HUMAN_SEAT, action_type, amount)
            return
        except IllegalActionError as e:
            console.print(f"[red]{e}[/red]")


@app.command()
def play(
    players: Optional[int] = typer.Option(None, "--players", "-p", help="Seats at the table (2-6)"),
    chips: Optional[int] = typer.Option(None, "--chips", help="Starting stack (buy-in)"),
    small_blind: Optional[int] = typer.Option(None, "--sb", help="Small blind"),
    big_blind: Optional[int] = typer.Option(None, "--bb", help="Big blind"),
    balance: int = typer.Option(config.DEFAULT_START_BALANCE, "--balance",
                                help="Play-money balance to buy in from"),
    delay: float = typer.Option(config.AI_DELAY_SECONDS, "--delay",
                                help="Seconds to pause before each AI move"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for a reproducible game"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Sit down at a table and play hands interactively."""
    from holdem_engine.errors import InsufficientFundsError, SessionOverError
    from holdem_engine.formatters.table import TableFormatter
    from holdem_engine.simulation.engine import HoldemTable
    from holdem_engine.wallet import InMemoryBalanceService

    _setup_logging(verbose)
    table_config = _build_config(players, chips, small_blind, big_blind)
    service = InMemoryBalanceService(balance)
    fmt = TableFormatter(console)

    table = HoldemTable(table_config, service, rng=random.Random(seed))
    try:
        table.start_session()
    except InsufficientFundsError as e:
        console.print(f"[red]Cannot buy in:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"Bought in for [green]{table_config.starting_chips}[/green]. "
                  f"Balance: {service.get_balance()}")

    while True:
        try:
            table.advance()
        except SessionOverError:
            break

        while table.hand_in_progress:
            fmt.print_snapshot(table.snapshot())
            if table.is_human_turn():
                _prompt_action(table)
            else:
                time.sleep(delay)
                table.advance()

        fmt.print_snapshot(table.snapshot())
        console.print(f"Balance: [green]{service.get_balance()}[/green]")
        if table.is_session_over() or not typer.confirm("Deal another hand?", default=True):
            break

    fmt.print_results(table.completed_hands, [s.name for s in table.seats])


@app.command()
def simulate(
    hands: int = typer.Option(100, "--hands", "-n", help="Number of hands to play"),
    players: Optional[int] = typer.Option(None, "--players", "-p", help="Seats at the table (2-6)"),
    chips: Optional[int] = typer.Option(None, "--chips", help="Starting stack"),
    small_blind: Optional[int] = typer.Option(None, "--sb", help="Small blind"),
    big_blind: Optional[int] = typer.Option(None, "--bb", help="Big blind"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for a reproducible run"),
    show_hands: bool = typer.Option(False, "--show-hands", help="List every hand played"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Run AI-only hands; the human seat is played by the naive policy."""
    from holdem_engine.agents.naive import NaiveAgent
    from holdem_engine.errors import SessionOverError
    from holdem_engine.formatters.table import TableFormatter
    from holdem_engine.simulation.engine import HUMAN_SEAT, HoldemTable
    from holdem_engine.wallet import InMemoryBalanceService

    _setup_logging(verbose)
    table_config = _build_config(players, chips, small_blind, big_blind)
    rng = random.Random(seed)
    service = InMemoryBalanceService(table_config.starting_chips)
    table = HoldemTable(table_config, service, rng=rng)
    autopilot = NaiveAgent(table_config.human_name, HUMAN_SEAT, rng=rng)
    table.start_session()

    played = 0
    with console.status("Simulating hands..."):
        while played < hands:
            try:
                table.advance()
            except SessionOverError:
                break
            while table.hand_in_progress:
                if table.is_human_turn():
                    decision = autopilot.make_decision(table.decision_context(HUMAN_SEAT))
                    table.player_action(HUMAN_SEAT, decision.decision_type.action_type,
                                        decision.amount)
                else:
                    table.advance()
            played += 1

    fmt = TableFormatter(console)
    if show_hands:
        fmt.print_results(table.completed_hands, [s.name for s in table.seats])
    fmt.print_standings({s.name: s.stack for s in table.seats}, table.agents)
    console.print(f"Played {played} hands. Chips on table: {table.total_chips()}")


if __name__ == "__main__":
    app()
