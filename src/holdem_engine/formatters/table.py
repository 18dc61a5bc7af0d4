"""Rich table formatting for terminal output."""

from typing import Dict, List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from holdem_engine.agents.base import BaseAgent
from holdem_engine.models.card import Card
from holdem_engine.models.table import HandResult, SeatStatus, TableSnapshot


def card_text(card: Card) -> Text:
    """A card coloured by suit."""
    return Text(str(card), style="bold red" if card.suit.is_red else "bold white")


def cards_text(cards: List[Card], hidden: bool = False) -> Text:
    if hidden:
        return Text("🂠 🂠", style="blue")
    text = Text()
    for i, card in enumerate(cards):
        if i:
            text.append(" ")
        text.append_text(card_text(card))
    return text if cards else Text("-", style="dim")


class TableFormatter:
    """Format table state as Rich tables for terminal display."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def print_snapshot(self, snapshot: TableSnapshot) -> None:
        """Print the board and every seat."""
        board = cards_text(snapshot.community_cards)
        header = Text()
        header.append(f"{snapshot.phase.value.upper()}  ", style="bold cyan")
        header.append("Board: ")
        header.append_text(board)
        header.append(f"   Pot: {snapshot.pot}", style="yellow")
        if snapshot.to_call:
            header.append(f"   To call: {snapshot.to_call}")

        table = Table(title=f"Hand #{snapshot.hand_number}", show_lines=False)
        table.add_column("", width=2)
        table.add_column("Player", style="cyan")
        table.add_column("Stack", justify="right", style="green")
        table.add_column("Bet", justify="right")
        table.add_column("Cards")
        table.add_column("Status")

        for seat in snapshot.players:
            roles = " ".join(r for r, on in (("D", seat.is_dealer), ("SB", seat.is_small_blind),
                                           ("BB", seat.is_big_blind)) if on)
            status = seat.hand_description or seat.status.value
            status_style = "dim" if seat.status in (SeatStatus.FOLDED, SeatStatus.OUT) else ""
            table.add_row(
                "▶" if seat.seat == snapshot.acting_seat else "",
                f"{seat.name} {roles}".strip(),
                str(seat.stack),
                str(seat.street_contribution or ""),
                cards_text(seat.hole_cards, hidden=seat.cards_hidden),
                Text(status, style=status_style),
            )

        self.console.print(Panel(header, border_style="green"))
        self.console.print(table)
        if snapshot.last_winner_description and snapshot.acting_seat is None:
            self.console.print(f"[bold yellow]{snapshot.last_winner_description}[/bold yellow]")

    def print_results(self, results: List[HandResult], names: List[str]) -> None:
        """Print a compact list of finished hands."""
        if not results:
            self.console.print("[dim]No hands played.[/dim]")
            return

        table = Table(title=f"Hand History ({len(results)} hands)")
        table.add_column("Hand", justify="right", style="dim")
        table.add_column("Board")
        table.add_column("Pot", justify="right")
        table.add_column("Showdown")
        table.add_column("Result")

        for result in results:
            table.add_row(
                str(result.hand_number),
                cards_text(result.board),
                str(result.pot_total),
                "yes" if result.went_to_showdown else "",
                "[red]aborted[/red]" if result.aborted else result.description,
            )

        self.console.print(table)

    def print_standings(self, stacks: Dict[str, int], agents: Dict[int, BaseAgent]) -> None:
        """Print final stacks and AI statistics."""
        table = Table(title="Standings")
        table.add_column("Player", style="cyan")
        table.add_column("Stack", justify="right", style="green")
        table.add_column("Hands won", justify="right")
        table.add_column("AF", justify="right")

        by_name = {agent.name: agent for agent in agents.values()}
        for name, stack in sorted(stacks.items(), key=lambda item: -item[1]):
            agent = by_name.get(name)
            table.add_row(
                name,
                str(stack),
                str(agent.stats.hands_won) if agent else "",
                f"{agent.stats.aggression_factor:.2f}" if agent else "",
            )

        self.console.print(table)
