"""Base agent class for AI seats."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from holdem_engine.models.action import ActionType
from holdem_engine.agents.decision import Decision, DecisionContext


@dataclass
class AgentStats:
    """Session tallies for one AI seat, shown in the standings."""
    hands_played: int = 0
    hands_won: int = 0
    net_chips: int = 0
    raises: int = 0
    checks_and_calls: int = 0
    folds: int = 0

    @property
    def aggression_factor(self) -> float:
        """Raises per check or call; raises alone when it never called."""
        if not self.checks_and_calls:
            return float(self.raises) if self.raises else 1.0
        return self.raises / self.checks_and_calls


class BaseAgent(ABC):
    """An AI seat: picks a legal decision whenever the table asks it to act."""

    def __init__(self, name: str, seat: int):
        self.name = name
        self.seat = seat
        self.stats = AgentStats()

    @abstractmethod
    def make_decision(self, context: DecisionContext) -> Decision:
        """Make a decision for the current situation.

        Implementations must only return legal decisions for ``context``.
        """

    def record_action(self, action_type: ActionType):
        """Count an applied action; blinds are not choices and are skipped."""
        if not action_type.is_voluntary:
            return
        if action_type.is_aggressive:
            self.stats.raises += 1
        elif action_type == ActionType.FOLD:
            self.stats.folds += 1
        else:
            self.stats.checks_and_calls += 1

    def record_hand_result(self, profit: int, won: bool):
        """Record a finished hand.

        Args:
            profit: Chips won minus chips put in this hand.
            won: Whether the seat came out ahead.
        """
        self.stats.hands_played += 1
        self.stats.hands_won += int(won)
        self.stats.net_chips += profit

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, seat={self.seat})"
