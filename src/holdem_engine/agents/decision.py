"""Decisions returned by agents."""

from dataclasses import dataclass
from enum import Enum

from holdem_engine.models.action import ActionType


class DecisionType(str, Enum):
    """Types of decisions an agent can make."""
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    RAISE = "raise"
    ALL_IN = "all_in"

    @property
    def action_type(self) -> ActionType:
        return ActionType(self.value)


@dataclass
class Decision:
    """A decision made by an agent.

    ``amount`` is the raise target (total street contribution) for raises
    and ignored otherwise.
    """
    decision_type: DecisionType
    amount: int = 0
    reasoning: str = ""


@dataclass(frozen=True)
class DecisionContext:
    """What an agent sees when it is asked to act."""
    seat: int
    stack: int
    street_contribution: int
    to_call: int
    small_blind: int
    big_blind: int
    min_raise_to: int
    pot: int

    @property
    def call_amount(self) -> int:
        """Chips still owed to match the current bet."""
        return max(0, self.to_call - self.street_contribution)

    @property
    def max_raise_to(self) -> int:
        return self.stack + self.street_contribution
