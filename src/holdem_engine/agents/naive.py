"""Naive AI opponent driven only by the price of a call."""

import random
from typing import Optional

from holdem_engine.agents.base import BaseAgent
from holdem_engine.agents.decision import Decision, DecisionContext, DecisionType

CHECK_PROBABILITY = 0.7

# (max call as a fraction of stack, probability of calling)
CALL_THRESHOLDS = (
    (0.1, 0.8),
    (0.3, 0.5),
)
EXPENSIVE_CALL_PROBABILITY = 0.2


class NaiveAgent(BaseAgent):
    """Checks or small-raises when free, otherwise calls with a probability
    that shrinks as the call gets more expensive relative to the stack.

    No hand-strength awareness.
    """

    def __init__(self, name: str, seat: int, rng: Optional[random.Random] = None):
        super().__init__(name, seat)
        self.rng = rng or random.Random()

    def make_decision(self, context: DecisionContext) -> Decision:
        call_amount = context.call_amount
        roll = self.rng.random()

        if call_amount == 0:
            if roll < CHECK_PROBABILITY:
                return Decision(DecisionType.CHECK, reasoning="free card")
            target = max(context.to_call + context.small_blind, context.min_raise_to)
            if target > context.max_raise_to:
                return Decision(DecisionType.CHECK, reasoning="too short to raise")
            return Decision(DecisionType.RAISE, amount=target, reasoning="small raise")

        call_probability = EXPENSIVE_CALL_PROBABILITY
        for fraction, probability in CALL_THRESHOLDS:
            if call_amount <= fraction * context.stack:
                call_probability = probability
                break

        if roll < call_probability:
            return Decision(DecisionType.CALL,
                            reasoning=f"call {call_amount} at p={call_probability}")
        return Decision(DecisionType.FOLD,
                        reasoning=f"fold to {call_amount} at p={call_probability}")
