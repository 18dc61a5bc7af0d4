"""Plain text formatting for terminal output."""

from typing import List

from holdem_engine.models.action import ActionType, Street
from holdem_engine.models.card import format_cards
from holdem_engine.models.table import HandResult, SeatView, TableSnapshot


class TextFormatter:
    """Format table state as plain text."""

    def format_seat(self, seat: SeatView, acting: bool = False) -> str:
        """One line per seat: markers, name, stack, cards and status."""
        roles = []
        if seat.is_dealer:
            roles.append("D")
        if seat.is_small_blind:
            roles.append("SB")
        if seat.is_big_blind:
            roles.append("BB")
        role_str = f"[{'/'.join(roles)}] " if roles else ""

        if seat.cards_hidden:
            cards = "?? ??"
        else:
            cards = format_cards(seat.hole_cards) or "-"

        line = f"{'>' if acting else ' '} {role_str}{seat.name}: {seat.stack}  {cards}"
        if seat.street_contribution:
            line += f"  (bet {seat.street_contribution})"
        if seat.status.value != "active":
            line += f"  {seat.status.value}"
        if seat.hand_description:
            line += f"  - {seat.hand_description}"
        return line

    def format_snapshot(self, snapshot: TableSnapshot) -> str:
        """Format the whole table for display."""
        lines = []
        lines.append(f"=== Hand #{snapshot.hand_number} - {snapshot.phase.value} ===")
        lines.append(f"Board: {format_cards(snapshot.community_cards) or '-'}  |  "
                     f"Pot: {snapshot.pot}  |  To call: {snapshot.to_call}")
        for seat in snapshot.players:
            lines.append(self.format_seat(seat, acting=seat.seat == snapshot.acting_seat))
        if snapshot.phase == Street.SETTLED and snapshot.last_winner_description:
            lines.append("")
            lines.append(snapshot.last_winner_description)
        return "\n".join(lines)

    def format_result(self, result: HandResult, names: List[str]) -> str:
        """Format a finished hand with its actions by street."""
        lines = [f"=== Hand #{result.hand_number} ==="]
        if result.board:
            lines.append(f"Board: {format_cards(result.board)}")

        for street in (Street.PREFLOP, Street.FLOP, Street.TURN, Street.RIVER):
            street_actions = [a for a in result.actions if a.street == street
                              and a.action_type != ActionType.POST_BLIND]
            if street_actions:
                lines.append(f"\n  [{street.value.upper()}]")
                for a in street_actions:
                    lines.append(f"    {a}")

        lines.append("")
        if result.aborted:
            lines.append(f"  {result.description}")
        for seat, amount in result.winnings.items():
            lines.append(f"  Winner: {names[seat]} ({amount})")
        return "\n".join(lines)
