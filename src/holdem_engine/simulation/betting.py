"""Betting round state machine for a single street."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Set

from holdem_engine.errors import IllegalActionError
from holdem_engine.models.action import ActionType, PlayerAction, Street
from holdem_engine.models.table import Seat, SeatStatus
from holdem_engine.simulation.pot import PotManager

logger = logging.getLogger("holdem.betting")


class BettingState(str, Enum):
    """Where the current street stands."""
    AWAITING_ACTION = "awaiting_action"
    STREET_COMPLETE = "street_complete"
    HAND_COMPLETE = "hand_complete"


@dataclass(frozen=True)
class LegalActions:
    """What a seat may do right now."""
    seat: int
    call_amount: int
    can_check: bool
    can_call: bool
    can_raise: bool
    min_raise_to: int
    max_raise_to: int

    @property
    def action_types(self) -> List[ActionType]:
        actions = [ActionType.FOLD]
        if self.can_check:
            actions.append(ActionType.CHECK)
        if self.can_call:
            actions.append(ActionType.CALL)
        if self.can_raise:
            actions.append(ActionType.RAISE)
        actions.append(ActionType.ALL_IN)
        return actions


class BettingRound:
    """Validates and applies actions for one street.

    ``to_call`` is the highest street contribution any active seat must
    match. A street is complete once every active seat has acted since the
    last bet increase and matches ``to_call``, or when at most one seat still
    holds a claim to the pot.
    """

    def __init__(
        self,
        seats: List[Seat],
        street: Street,
        pot: PotManager,
        first_to_act: int,
        to_call: int = 0,
    ):
        """Open a betting round.

        Args:
            seats: All seats at the table, indexed by seat number.
            street: The street being bet.
            pot: Pot manager receiving the chips.
            first_to_act: Seat that acts first (skipped if it cannot act).
            to_call: Amount to match; the big blind preflop, zero otherwise.
        """
        self.seats = seats
        self.street = street
        self.pot = pot
        self.to_call = to_call
        self.acted: Set[int] = set()
        self.actions: List[PlayerAction] = []
        self.last_aggressor: Optional[int] = None
        self.acting_seat: Optional[int] = None
        if not self.is_complete():
            self.acting_seat = self._next_active(first_to_act, include_start=True)

    @property
    def state(self) -> BettingState:
        if len([s for s in self.seats if s.in_hand]) <= 1:
            return BettingState.HAND_COMPLETE
        if self.is_complete():
            return BettingState.STREET_COMPLETE
        return BettingState.AWAITING_ACTION

    def is_complete(self) -> bool:
        """Check if the current street is complete."""
        in_hand = [s for s in self.seats if s.in_hand]
        if len(in_hand) <= 1:
            return True

        active = [s for s in in_hand if s.is_active]
        if not active:
            return True

        # Lone active seat facing only all-ins has nobody left to bet against
        if len(active) == 1 and active[0].street_contribution >= self.to_call:
            return True

        return all(
            s.seat in self.acted and s.street_contribution == self.to_call
            for s in active
        )

    def legal_actions(self, seat: int) -> LegalActions:
        """Get what ``seat`` may do at this point of the street."""
        player = self.seats[seat]
        call_amount = max(0, self.to_call - player.street_contribution)
        max_raise_to = player.stack + player.street_contribution
        min_raise_to = self.min_raise_to
        return LegalActions(
            seat=seat,
            call_amount=min(call_amount, player.stack),
            can_check=call_amount == 0,
            can_call=call_amount > 0,
            can_raise=max_raise_to >= min_raise_to,
            min_raise_to=min_raise_to,
            max_raise_to=max_raise_to,
        )

    @property
    def min_raise_to(self) -> int:
        """Smallest legal raise target: double the amount to call."""
        return max(self.to_call * 2, self.to_call + 1)

    def apply(self, seat: int, action_type: ActionType, amount: int = 0) -> PlayerAction:
        """Validate and apply an action.

        Args:
            seat: The seat acting.
            action_type: The type of action.
            amount: For raises, the total street contribution to raise to.

        Returns:
            The applied action.

        Raises:
            IllegalActionError: If the action is not legal now. Nothing is
                changed in that case.
        """
        if self.state != BettingState.AWAITING_ACTION:
            raise IllegalActionError(f"No action expected on the {self.street.value}")
        if seat != self.acting_seat:
            raise IllegalActionError(
                f"Seat {seat} acted out of turn; seat {self.acting_seat} is to act"
            )

        player = self.seats[seat]
        owed = self.to_call - player.street_contribution

        if action_type == ActionType.FOLD:
            player.status = SeatStatus.FOLDED
            moved = 0

        elif action_type == ActionType.CHECK:
            if owed != 0:
                raise IllegalActionError(f"Cannot check - there's {owed} to call")
            moved = 0

        elif action_type == ActionType.CALL:
            moved = self._commit(player, owed)

        elif action_type == ActionType.RAISE:
            if amount <= self.to_call or amount < self.to_call * 2:
                raise IllegalActionError(
                    f"Raise to {amount} is below the minimum of {self.min_raise_to}"
                )
            if amount > player.stack + player.street_contribution:
                raise IllegalActionError(
                    f"Raise to {amount} exceeds {player.name}'s "
                    f"{player.stack + player.street_contribution} available chips"
                )
            moved = self._commit(player, amount - player.street_contribution)
            self._reopen(seat)

        elif action_type == ActionType.ALL_IN:
            if player.stack <= 0:
                raise IllegalActionError(f"{player.name} has no chips left")
            moved = self._commit(player, player.stack)
            if player.street_contribution > self.to_call:
                self._reopen(seat)

        else:
            raise IllegalActionError(f"Unknown action type: {action_type}")

        action = PlayerAction(
            player_name=player.name,
            seat=seat,
            action_type=action_type,
            amount=moved,
            street=self.street,
            is_all_in=player.status == SeatStatus.ALL_IN,
            raise_to=player.street_contribution,
        )
        self.actions.append(action)
        self.acted.add(seat)
        logger.debug("%s: %s", self.street.value, action)

        self.acting_seat = None if self.is_complete() else self._next_active(seat)
        return action

    def _commit(self, player: Seat, amount: int) -> int:
        moved = player.commit(amount)
        self.pot.add_bet(player.seat, moved)
        return moved

    def _reopen(self, seat: int):
        """A bet increase: everyone else must act again."""
        self.to_call = self.seats[seat].street_contribution
        self.last_aggressor = seat
        self.acted = {seat}

    def _next_active(self, seat: int, include_start: bool = False) -> Optional[int]:
        """Next seat with status active, wrapping around the table."""
        n = len(self.seats)
        start = 0 if include_start else 1
        for i in range(start, n + start):
            candidate = self.seats[(seat + i) % n]
            if candidate.is_active:
                return candidate.seat
        return None
