"""Action and Street models."""

from dataclasses import dataclass
from enum import Enum


class Street(str, Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"
    SETTLED = "settled"

    @property
    def order(self) -> int:
        return ["preflop", "flop", "turn", "river", "showdown", "settled"].index(self.value)

    @property
    def is_betting(self) -> bool:
        return self in (Street.PREFLOP, Street.FLOP, Street.TURN, Street.RIVER)

    @property
    def next_street(self) -> "Street":
        order = list(Street)
        return order[min(self.order + 1, len(order) - 1)]

    @property
    def cards_dealt(self) -> int:
        """Community cards revealed when entering this street."""
        return {"flop": 3, "turn": 1, "river": 1}.get(self.value, 0)


class ActionType(str, Enum):
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    RAISE = "raise"
    ALL_IN = "all_in"
    POST_BLIND = "post_blind"

    @property
    def is_aggressive(self) -> bool:
        return self in (ActionType.RAISE, ActionType.ALL_IN)

    @property
    def is_voluntary(self) -> bool:
        return self is not ActionType.POST_BLIND


@dataclass
class PlayerAction:
    """A single applied action in a hand.

    ``amount`` is the number of chips the action moved from the stack.
    """
    player_name: str
    seat: int
    action_type: ActionType
    amount: int = 0
    street: Street = Street.PREFLOP
    is_all_in: bool = False
    raise_to: int = 0

    def __str__(self) -> str:
        if self.action_type in (ActionType.FOLD, ActionType.CHECK):
            return f"{self.player_name} {self.action_type.value}s"
        suffix = " (all-in)" if self.is_all_in else ""
        if self.action_type == ActionType.POST_BLIND:
            return f"{self.player_name} posts blind {self.amount}{suffix}"
        if self.action_type == ActionType.RAISE:
            return f"{self.player_name} raises to {self.raise_to}{suffix}"
        if self.action_type == ActionType.ALL_IN:
            return f"{self.player_name} goes all-in for {self.amount}"
        return f"{self.player_name} calls {self.amount}{suffix}"
