"""Card, Rank, and Suit models."""

from dataclasses import dataclass
from enum import Enum
from typing import List


class Suit(str, Enum):
    SPADES = "s"
    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"

    @classmethod
    def from_symbol(cls, s: str) -> "Suit":
        mapping = {
            "s": cls.SPADES, "spades": cls.SPADES, "♠": cls.SPADES,
            "h": cls.HEARTS, "hearts": cls.HEARTS, "♥": cls.HEARTS,
            "d": cls.DIAMONDS, "diamonds": cls.DIAMONDS, "♦": cls.DIAMONDS,
            "c": cls.CLUBS, "clubs": cls.CLUBS, "♣": cls.CLUBS,
        }
        key = s if s in mapping else s.lower()
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown suit: {s}")

    @property
    def symbol(self) -> str:
        return {"s": "♠", "h": "♥", "d": "♦", "c": "♣"}[self.value]

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(str, Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def numeric_value(self) -> int:
        values = {
            "2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8,
            "9": 9, "T": 10, "J": 11, "Q": 12, "K": 13, "A": 14,
        }
        return values[self.value]

    @property
    def label(self) -> str:
        """Display label, '10' instead of 'T'."""
        return "10" if self is Rank.TEN else self.value

    @classmethod
    def from_char(cls, c: str) -> "Rank":
        if c == "10":
            return cls.TEN
        for r in cls:
            if r.value == c.upper():
                return r
        raise ValueError(f"Unknown rank: {c}")

    @classmethod
    def from_value(cls, value: int) -> "Rank":
        for r in cls:
            if r.numeric_value == value:
                return r
        raise ValueError(f"Unknown rank value: {value}")


@dataclass(frozen=True)
class Card:
    """A single playing card. Cards are values and may be copied freely."""

    rank: Rank
    suit: Suit

    @classmethod
    def parse(cls, s: str) -> "Card":
        """Parse a card string like 'Ah', 'Ts', '10c' or 'Q♥'."""
        s = s.strip()
        if len(s) == 2:
            return cls(Rank.from_char(s[0]), Suit.from_symbol(s[1]))
        elif len(s) == 3 and s[:2] == "10":
            return cls(Rank.TEN, Suit.from_symbol(s[2]))
        raise ValueError(f"Cannot parse card: {s}")

    @property
    def value(self) -> int:
        return self.rank.numeric_value

    def __repr__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def __str__(self) -> str:
        return f"{self.rank.label}{self.suit.symbol}"

    def to_short(self) -> str:
        """Return short string like 'Ah'."""
        return f"{self.rank.value}{self.suit.value}"


def parse_cards(text: str) -> List[Card]:
    """Parse a whitespace separated list such as 'Ah Kh Qh'."""
    return [Card.parse(part) for part in text.split()]


def format_cards(cards: List[Card]) -> str:
    """Format a list of cards as a string."""
    return " ".join(str(c) for c in cards)
