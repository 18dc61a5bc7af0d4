"""Deck management for a single hand."""

import random
from typing import Iterable, List, Optional

from holdem_engine.errors import DeckExhaustedError
from holdem_engine.models.card import Card, Rank, Suit


def full_deck() -> List[Card]:
    """All 52 cards in suit-then-rank order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Deck:
    """A standard 52-card deck, dealt from the top (index 0)."""

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize a new deck with all 52 cards.

        Args:
            rng: Random source used for shuffling. Defaults to a fresh
                ``random.Random``.
        """
        self.rng = rng or random.Random()
        self.cards: List[Card] = full_deck()
        self.burned: List[Card] = []

    @classmethod
    def stacked(cls, cards: Iterable[Card]) -> "Deck":
        """Build a deck that deals ``cards`` in the given order."""
        deck = cls()
        deck.cards = list(cards)
        return deck

    def shuffle(self) -> "Deck":
        """Shuffle in place with a Fisher-Yates pass; returns self."""
        cards = self.cards
        for i in range(len(cards) - 1, 0, -1):
            j = self.rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]
        return self

    def draw(self) -> Card:
        """Remove and return the top card.

        Raises:
            DeckExhaustedError: If the deck is empty.
        """
        if not self.cards:
            raise DeckExhaustedError("Cannot draw from an empty deck")
        return self.cards.pop(0)

    def deal(self, count: int = 1) -> List[Card]:
        """Deal cards from the top of the deck.

        Args:
            count: Number of cards to deal.

        Returns:
            List of dealt cards.
        """
        if count > len(self.cards):
            raise DeckExhaustedError(
                f"Not enough cards in deck. Need {count}, have {len(self.cards)}"
            )
        return [self.draw() for _ in range(count)]

    def burn(self):
        """Discard the top card without exposing it."""
        self.burned.append(self.draw())

    @property
    def remaining(self) -> int:
        """Get the number of remaining cards."""
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        return f"Deck(remaining={len(self.cards)})"
