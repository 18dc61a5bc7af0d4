"""Tests for the betting round state machine."""

import pytest

from holdem_engine.errors import IllegalActionError
from holdem_engine.models.action import ActionType, Street
from holdem_engine.models.table import Seat, SeatStatus
from holdem_engine.simulation.betting import BettingRound, BettingState
from holdem_engine.simulation.pot import PotManager


def make_seats(*stacks):
    return [Seat(seat=i, name=f"P{i}", stack=stack) for i, stack in enumerate(stacks)]


def post(seat: Seat, pot: PotManager, amount: int):
    pot.add_bet(seat.seat, seat.commit(amount))


@pytest.fixture
def pot():
    return PotManager()


@pytest.fixture
def preflop(pot):
    """Three seats, blinds 10/20 posted by seats 1 and 2, seat 0 to act."""
    seats = make_seats(1000, 1000, 1000)
    post(seats[1], pot, 10)
    post(seats[2], pot, 20)
    return BettingRound(seats, Street.PREFLOP, pot, first_to_act=0, to_call=20)


class TestChecksAndCalls:
    def test_check_when_contribution_matches(self, pot):
        """Contribution 20 against 20 to call: check moves nothing."""
        seats = make_seats(1000, 1000)
        post(seats[1], pot, 20)
        betting = BettingRound(seats, Street.PREFLOP, pot, first_to_act=0, to_call=20)
        betting.apply(0, ActionType.CALL)
        stack_before = seats[1].stack

        action = betting.apply(1, ActionType.CHECK)

        assert action.amount == 0
        assert seats[1].stack == stack_before
        assert pot.total_pot == 40

    def test_check_facing_bet_rejected(self, preflop):
        with pytest.raises(IllegalActionError):
            preflop.apply(0, ActionType.CHECK)
        assert preflop.acting_seat == 0
        assert preflop.seats[0].stack == 1000

    def test_call_moves_owed_chips(self, preflop):
        action = preflop.apply(0, ActionType.CALL)
        assert action.amount == 20
        assert preflop.seats[0].stack == 980
        assert preflop.seats[0].street_contribution == 20

    def test_short_call_goes_all_in(self, pot):
        seats = make_seats(1000, 15)
        betting = BettingRound(seats, Street.FLOP, pot, first_to_act=0)
        betting.apply(0, ActionType.RAISE, 20)

        action = betting.apply(1, ActionType.CALL)

        assert action.amount == 15
        assert action.is_all_in
        assert seats[1].status == SeatStatus.ALL_IN
        assert betting.state == BettingState.STREET_COMPLETE

    def test_call_with_nothing_owed_moves_nothing(self, pot):
        seats = make_seats(1000, 1000)
        betting = BettingRound(seats, Street.TURN, pot, first_to_act=0)
        action = betting.apply(0, ActionType.CALL)
        assert action.amount == 0
        assert betting.acting_seat == 1


class TestRaises:
    def test_raise_below_double_rejected(self, preflop):
        """Raising to 30 over a 20 bet is illegal and changes nothing."""
        with pytest.raises(IllegalActionError):
            preflop.apply(0, ActionType.RAISE, 30)
        assert preflop.to_call == 20
        assert preflop.acting_seat == 0
        assert preflop.seats[0].stack == 1000
        assert preflop.pot.total_pot == 30

    def test_minimum_raise(self, preflop):
        assert preflop.min_raise_to == 40
        preflop.apply(0, ActionType.RAISE, 40)
        assert preflop.to_call == 40
        assert preflop.last_aggressor == 0
        assert preflop.seats[0].stack == 960

    def test_raise_beyond_stack_rejected(self, pot):
        seats = make_seats(100, 1000)
        betting = BettingRound(seats, Street.FLOP, pot, first_to_act=0)
        with pytest.raises(IllegalActionError):
            betting.apply(0, ActionType.RAISE, 150)

    def test_raise_reopens_action(self, preflop):
        preflop.apply(0, ActionType.CALL)
        preflop.apply(1, ActionType.CALL)
        preflop.apply(2, ActionType.RAISE, 60)
        assert preflop.acting_seat == 0
        assert preflop.state == BettingState.AWAITING_ACTION

    def test_all_in_above_to_call_reopens(self, pot):
        seats = make_seats(1000, 300, 1000)
        betting = BettingRound(seats, Street.FLOP, pot, first_to_act=0)
        betting.apply(0, ActionType.RAISE, 100)
        action = betting.apply(1, ActionType.ALL_IN)
        assert action.amount == 300
        assert betting.to_call == 300
        betting.apply(2, ActionType.CALL)
        assert betting.acting_seat == 0
        assert not betting.is_complete()

    def test_all_in_without_chips_rejected(self, pot):
        seats = make_seats(1000, 1000)
        seats[0].stack = 0
        betting = BettingRound(seats, Street.FLOP, pot, first_to_act=1)
        betting.acting_seat = 0
        with pytest.raises(IllegalActionError):
            betting.apply(0, ActionType.ALL_IN)


class TestTurnOrder:
    def test_out_of_turn_rejected(self, preflop):
        with pytest.raises(IllegalActionError):
            preflop.apply(1, ActionType.CALL)
        assert preflop.seats[1].stack == 990

    def test_big_blind_keeps_option(self, preflop):
        """Everyone limps: the big blind still gets to act."""
        preflop.apply(0, ActionType.CALL)
        preflop.apply(1, ActionType.CALL)
        assert preflop.acting_seat == 2
        assert preflop.state == BettingState.AWAITING_ACTION

        preflop.apply(2, ActionType.CHECK)
        assert preflop.state == BettingState.STREET_COMPLETE
        assert preflop.acting_seat is None

    def test_skips_folded_and_all_in_seats(self, pot):
        seats = make_seats(1000, 1000, 1000, 1000)
        seats[1].status = SeatStatus.FOLDED
        seats[2].status = SeatStatus.ALL_IN
        betting = BettingRound(seats, Street.FLOP, pot, first_to_act=1)
        assert betting.acting_seat == 3
        betting.apply(3, ActionType.CHECK)
        assert betting.acting_seat == 0

    def test_folds_to_one_player(self, preflop):
        preflop.apply(0, ActionType.FOLD)
        preflop.apply(1, ActionType.FOLD)
        assert preflop.state == BettingState.HAND_COMPLETE
        assert preflop.acting_seat is None
        with pytest.raises(IllegalActionError):
            preflop.apply(2, ActionType.CHECK)

    def test_legal_actions(self, preflop):
        legal = preflop.legal_actions(0)
        assert legal.call_amount == 20
        assert not legal.can_check
        assert legal.can_call
        assert legal.min_raise_to == 40
        assert legal.max_raise_to == 1000
        assert ActionType.CHECK not in legal.action_types
        assert ActionType.RAISE in legal.action_types

    def test_actions_recorded(self, preflop):
        preflop.apply(0, ActionType.RAISE, 60)
        action = preflop.actions[-1]
        assert action.player_name == "P0"
        assert action.raise_to == 60
        assert action.street == Street.PREFLOP
