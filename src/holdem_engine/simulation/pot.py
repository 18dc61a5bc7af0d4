"""Pot management: contributions, side pots and pot splitting."""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence, Set

from holdem_engine.simulation.evaluator import HandRanking


@dataclass
class Pot:
    """A main or side pot."""
    amount: int = 0
    eligible_seats: Set[int] = field(default_factory=set)


def split_amount(amount: int, winners: Sequence[int], seat_order: Sequence[int]) -> Dict[int, int]:
    """Split ``amount`` equally among ``winners``.

    Odd chips go one at a time to the winners in ``seat_order``, which starts
    at the first seat left of the button.
    """
    if not winners:
        return {}
    share, remainder = divmod(amount, len(winners))
    result = {seat: share for seat in winners}
    ordered = [seat for seat in seat_order if seat in result]
    ordered += sorted(seat for seat in winners if seat not in ordered)
    for seat in ordered[:remainder]:
        result[seat] += 1
    return result


class PotManager:
    """Tracks every chip put into the pot during one hand."""

    def __init__(self):
        """Initialize an empty pot manager."""
        # Bets per seat on the current street
        self.current_bets: Dict[int, int] = {}
        # Total invested per seat over the whole hand
        self.total_invested: Dict[int, int] = {}

    def add_bet(self, seat: int, amount: int):
        """Add chips from a seat.

        Args:
            seat: The player's seat number.
            amount: The amount to add to the pot.
        """
        self.current_bets[seat] = self.current_bets.get(seat, 0) + amount
        self.total_invested[seat] = self.total_invested.get(seat, 0) + amount

    def get_player_bet(self, seat: int) -> int:
        """Get the current street bet for a seat."""
        return self.current_bets.get(seat, 0)

    def get_total_invested(self, seat: int) -> int:
        """Get the total amount a seat has invested in the hand."""
        return self.total_invested.get(seat, 0)

    def reset_street(self):
        """Reset current bets for a new street."""
        self.current_bets.clear()

    def reset_hand(self):
        """Reset everything for a new hand."""
        self.current_bets.clear()
        self.total_invested.clear()

    @property
    def total_pot(self) -> int:
        """Sum of all contributions across all streets."""
        return sum(self.total_invested.values())

    def build_pots(self, live_seats: Set[int]) -> List[Pot]:
        """Layer the pot by contribution level.

        Each pot is contested only by live (non-folded) seats that put in at
        least that level. Chips from folded seats stay in the pots they reached.

        Args:
            live_seats: Seats still holding a claim to the pot.

        Returns:
            Pots from main to last side pot.
        """
        levels = sorted({amount for seat, amount in self.total_invested.items()
                         if seat in live_seats and amount > 0})
        pots: List[Pot] = []
        previous = 0
        for level in levels:
            amount = sum(min(invested, level) - min(invested, previous)
                         for invested in self.total_invested.values())
            eligible = {seat for seat in live_seats
                        if self.total_invested.get(seat, 0) >= level}
            if pots and pots[-1].eligible_seats == eligible:
                pots[-1].amount += amount
            else:
                pots.append(Pot(amount=amount, eligible_seats=eligible))
            previous = level

        # Folded seats that put in more than any live seat
        leftover = self.total_pot - sum(p.amount for p in pots)
        if leftover and pots:
            pots[-1].amount += leftover
        return pots

    def distribute(self, rankings: Mapping[int, HandRanking],
                   seat_order: Sequence[int]) -> Dict[int, int]:
        """Award every pot to the best eligible hand(s).

        Args:
            rankings: Showdown ranking of each live seat.
            seat_order: Seats starting left of the button, for odd chips.

        Returns:
            Mapping from seat to chips won. Sums exactly to ``total_pot``.
        """
        winnings: Dict[int, int] = {}
        for pot in self.build_pots(set(rankings)):
            contenders = {seat: rankings[seat] for seat in pot.eligible_seats}
            best = max(contenders.values())
            winners = sorted(seat for seat, ranking in contenders.items() if ranking == best)
            for seat, amount in split_amount(pot.amount, winners, seat_order).items():
                winnings[seat] = winnings.get(seat, 0) + amount
        return winnings

    def __repr__(self) -> str:
        return f"PotManager(total={self.total_pot})"
