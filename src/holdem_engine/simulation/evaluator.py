"""Hand evaluation: best five cards out of hole cards plus board."""

from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Tuple

from holdem_engine.errors import InsufficientCardsError
from holdem_engine.models.card import Card

# Positional weight for the tiebreak score; must exceed the highest rank (14)
TIEBREAK_BASE = 16


class HandCategory(IntEnum):
    """Hand categories from worst to best."""
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10

    @property
    def display_name(self) -> str:
        return _CATEGORY_NAMES[self]


@dataclass(frozen=True, order=True)
class HandRanking:
    """Comparable strength of a five-card hand.

    Rankings order by category first, then by tiebreak score. Two rankings
    that compare equal split the pot.
    """
    category: HandCategory
    tiebreak_score: int
    cards: Tuple[Card, ...] = field(default=(), compare=False)
    ranks: Tuple[int, ...] = field(default=(), compare=False)

    def describe(self) -> str:
        """Human readable description such as 'Full House, Kings full of Sevens'."""
        r = self.ranks
        c = self.category
        if c == HandCategory.ROYAL_FLUSH:
            return "Royal Flush"
        if c in (HandCategory.STRAIGHT_FLUSH, HandCategory.STRAIGHT):
            return f"{c.display_name}, {_name(r[0])} high"
        if c == HandCategory.FOUR_OF_A_KIND:
            return f"Four of a Kind, {_plural(r[0])}"
        if c == HandCategory.FULL_HOUSE:
            return f"Full House, {_plural(r[0])} full of {_plural(r[3])}"
        if c == HandCategory.FLUSH:
            return f"Flush, {_name(r[0])} high"
        if c == HandCategory.THREE_OF_A_KIND:
            return f"Three of a Kind, {_plural(r[0])}"
        if c == HandCategory.TWO_PAIR:
            return f"Two Pair, {_plural(r[0])} and {_plural(r[2])}"
        if c == HandCategory.ONE_PAIR:
            return f"Pair of {_plural(r[0])}"
        return f"High Card, {_name(r[0])}"


_CATEGORY_NAMES = {
    HandCategory.HIGH_CARD: "High Card",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.ROYAL_FLUSH: "Royal Flush",
}

_RANK_NAMES = {
    1: "Ace", 2: "Two", 3: "Three", 4: "Four", 5: "Five", 6: "Six", 7: "Seven",
    8: "Eight", 9: "Nine", 10: "Ten", 11: "Jack", 12: "Queen", 13: "King", 14: "Ace",
}


def _name(value: int) -> str:
    return _RANK_NAMES[value]


def _plural(value: int) -> str:
    name = _RANK_NAMES[value]
    return name + "es" if name == "Six" else name + "s"


class HandEvaluator:
    """Evaluates poker hands."""

    @staticmethod
    def evaluate(hole_cards: Sequence[Card], community: Sequence[Card] = ()) -> HandRanking:
        """Evaluate the best five-card hand from hole cards and board.

        Every five-card subset of the combined cards is scored and the best
        one is returned.

        Args:
            hole_cards: The player's hole cards.
            community: Zero to five community cards.

        Returns:
            The ranking of the best five-card subset.

        Raises:
            InsufficientCardsError: If fewer than five cards are available.
        """
        cards = list(hole_cards) + list(community)
        if len(cards) < 5:
            raise InsufficientCardsError(
                f"Need at least 5 cards to evaluate, have {len(cards)}"
            )

        best: Optional[HandRanking] = None
        for combo in combinations(cards, 5):
            ranking = HandEvaluator.evaluate_five(combo)
            if best is None or ranking > best:
                best = ranking
        return best

    @staticmethod
    def evaluate_five(cards: Sequence[Card]) -> HandRanking:
        """Evaluate exactly 5 cards."""
        values = sorted((c.rank.numeric_value for c in cards), reverse=True)
        rank_counts = Counter(values)

        is_flush = len({c.suit for c in cards}) == 1
        straight_high = HandEvaluator._straight_high(values)

        # Ranks ordered by multiplicity, then rank: the kicker order
        ordered = sorted(values, key=lambda v: (-rank_counts[v], -v))
        counts = sorted(rank_counts.values(), reverse=True)

        if straight_high:
            # Wheel plays the ace low
            ordered = list(range(straight_high, straight_high - 5, -1))
            if is_flush:
                category = (HandCategory.ROYAL_FLUSH if straight_high == 14
                            else HandCategory.STRAIGHT_FLUSH)
            else:
                category = HandCategory.STRAIGHT
        elif counts[0] == 4:
            category = HandCategory.FOUR_OF_A_KIND
        elif counts[0] == 3 and counts[1] == 2:
            category = HandCategory.FULL_HOUSE
        elif is_flush:
            category = HandCategory.FLUSH
        elif counts[0] == 3:
            category = HandCategory.THREE_OF_A_KIND
        elif counts[0] == 2 and counts[1] == 2:
            category = HandCategory.TWO_PAIR
        elif counts[0] == 2:
            category = HandCategory.ONE_PAIR
        else:
            category = HandCategory.HIGH_CARD

        return HandRanking(
            category=category,
            tiebreak_score=HandEvaluator.tiebreak_score(ordered),
            cards=tuple(sorted(cards, key=lambda c: (-rank_counts[c.rank.numeric_value],
                                                     -c.rank.numeric_value))),
            ranks=tuple(ordered),
        )

    @staticmethod
    def tiebreak_score(ordered_ranks: Sequence[int]) -> int:
        """Weighted sum of ranks, most significant first."""
        score = 0
        for value in ordered_ranks:
            score = score * TIEBREAK_BASE + value
        return score

    @staticmethod
    def _straight_high(values: List[int]) -> int:
        """High card of a five-card straight, or 0.

        A-2-3-4-5 counts as a straight with a high card of 5.
        """
        unique = sorted(set(values), reverse=True)
        if len(unique) != 5:
            return 0
        if unique[0] - unique[4] == 4:
            return unique[0]
        if unique == [14, 5, 4, 3, 2]:
            return 5
        return 0

    @staticmethod
    def compare(cards1: Sequence[Card], cards2: Sequence[Card]) -> int:
        """Compare two hands.

        Args:
            cards1: First hand (5-7 cards).
            cards2: Second hand (5-7 cards).

        Returns:
            1 if cards1 wins, -1 if cards2 wins, 0 if tie.
        """
        rank1 = HandEvaluator.evaluate(cards1)
        rank2 = HandEvaluator.evaluate(cards2)
        if rank1 > rank2:
            return 1
        if rank1 < rank2:
            return -1
        return 0

    @staticmethod
    def rank_seats(board: Sequence[Card],
                   player_cards: Dict[int, Sequence[Card]]) -> Dict[int, HandRanking]:
        """Evaluate every seat's best hand against the board."""
        return {seat: HandEvaluator.evaluate(cards, board)
                for seat, cards in player_cards.items()}

    @staticmethod
    def get_winners(board: Sequence[Card],
                    player_cards: Dict[int, Sequence[Card]]) -> List[int]:
        """Get the winning seat(s) from a group of players.

        Args:
            board: Community cards.
            player_cards: Mapping from seat to player's hole cards.

        Returns:
            Sorted list of winning seats (several on a tie).
        """
        if not player_cards:
            return []
        rankings = HandEvaluator.rank_seats(board, player_cards)
        best = max(rankings.values())
        return sorted(seat for seat, ranking in rankings.items() if ranking == best)

    @staticmethod
    def get_rank_name(category: HandCategory) -> str:
        """Get a human-readable name for a hand category."""
        return category.display_name

