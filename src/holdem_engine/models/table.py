"""Table data models: configuration, seats, snapshots and hand results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from holdem_engine import config
from holdem_engine.errors import ConfigurationError
from holdem_engine.models.action import PlayerAction, Street
from holdem_engine.models.card import Card


class SeatStatus(str, Enum):
    """Seat status within a hand."""
    ACTIVE = "active"
    FOLDED = "folded"
    ALL_IN = "all_in"
    OUT = "out"


@dataclass
class TableConfig:
    """Table configuration accepted at game start."""
    player_count: int = 4
    starting_chips: int = 1000
    small_blind: int = 10
    big_blind: int = 20
    human_name: str = "You"
    button_seat: Optional[int] = None
    ai_names: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls, **overrides) -> "TableConfig":
        """Build a config from the environment defaults in ``config``."""
        values = dict(
            player_count=config.DEFAULT_PLAYER_COUNT,
            starting_chips=config.DEFAULT_STARTING_CHIPS,
            small_blind=config.DEFAULT_SMALL_BLIND,
            big_blind=config.DEFAULT_BIG_BLIND,
            human_name=config.HUMAN_NAME,
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def validate(self) -> None:
        """Reject invalid combinations.

        Raises:
            ConfigurationError: If any value is out of range.
        """
        if not config.MIN_PLAYERS <= self.player_count <= config.MAX_PLAYERS:
            raise ConfigurationError(
                f"Player count must be {config.MIN_PLAYERS}-{config.MAX_PLAYERS}, "
                f"got {self.player_count}"
            )
        if self.starting_chips < config.MIN_STARTING_CHIPS:
            raise ConfigurationError(
                f"Starting chips must be at least {config.MIN_STARTING_CHIPS}, "
                f"got {self.starting_chips}"
            )
        if self.small_blind < 1:
            raise ConfigurationError(f"Small blind must be at least 1, got {self.small_blind}")
        if self.big_blind < 2 * self.small_blind:
            raise ConfigurationError(
                f"Big blind ({self.big_blind}) must be at least twice "
                f"the small blind ({self.small_blind})"
            )
        if self.button_seat is not None and not 0 <= self.button_seat < self.player_count:
            raise ConfigurationError(f"Button seat {self.button_seat} is not at the table")
        if len(self.ai_names) > self.player_count - 1:
            raise ConfigurationError("More AI names than AI seats")


@dataclass
class Seat:
    """A player's seat. Stack and identity persist across hands."""
    seat: int
    name: str
    stack: int
    is_human: bool = False
    hole_cards: List[Card] = field(default_factory=list)
    street_contribution: int = 0
    hand_contribution: int = 0
    status: SeatStatus = SeatStatus.ACTIVE
    is_dealer: bool = False
    is_small_blind: bool = False
    is_big_blind: bool = False

    @property
    def is_active(self) -> bool:
        return self.status == SeatStatus.ACTIVE

    @property
    def in_hand(self) -> bool:
        """Still holding a claim to the pot."""
        return self.status in (SeatStatus.ACTIVE, SeatStatus.ALL_IN)

    def commit(self, amount: int) -> int:
        """Move chips from the stack into this street's contribution.

        Returns the amount actually moved (capped at the stack).
        """
        moved = min(amount, self.stack)
        self.stack -= moved
        self.street_contribution += moved
        self.hand_contribution += moved
        if self.stack == 0 and self.status == SeatStatus.ACTIVE:
            self.status = SeatStatus.ALL_IN
        return moved

    def reset_for_hand(self):
        """Clear per-hand fields; seats without chips sit out."""
        self.hole_cards = []
        self.street_contribution = 0
        self.hand_contribution = 0
        self.status = SeatStatus.ACTIVE if self.stack > 0 else SeatStatus.OUT
        self.is_dealer = False
        self.is_small_blind = False
        self.is_big_blind = False


@dataclass(frozen=True)
class SeatView:
    """Read-only view of a seat handed to the presentation layer."""
    seat: int
    name: str
    stack: int
    status: SeatStatus
    street_contribution: int
    hand_contribution: int
    hole_cards: List[Card]
    cards_hidden: bool
    is_human: bool
    is_dealer: bool
    is_small_blind: bool
    is_big_blind: bool
    hand_description: Optional[str] = None


@dataclass(frozen=True)
class TableSnapshot:
    """Everything the presentation layer needs to render the table."""
    phase: Street
    community_cards: List[Card]
    pot: int
    players: List[SeatView]
    acting_seat: Optional[int]
    to_call: int
    dealer_seat: Optional[int]
    hand_number: int
    last_winner_description: Optional[str] = None
    log: List[str] = field(default_factory=list)

    @property
    def acting_player(self) -> Optional[SeatView]:
        if self.acting_seat is None:
            return None
        return self.players[self.acting_seat]

    @property
    def human(self) -> Optional[SeatView]:
        for p in self.players:
            if p.is_human:
                return p
        return None


@dataclass
class HandResult:
    """Outcome of one completed (or aborted) hand."""
    hand_number: int
    board: List[Card] = field(default_factory=list)
    winnings: Dict[int, int] = field(default_factory=dict)
    hand_descriptions: Dict[int, str] = field(default_factory=dict)
    actions: List[PlayerAction] = field(default_factory=list)
    pot_total: int = 0
    went_to_showdown: bool = False
    aborted: bool = False
    description: str = ""

    @property
    def winners(self) -> List[int]:
        return sorted(seat for seat, amount in self.winnings.items() if amount > 0)
