"""Hold'em table: sequences hands, streets, AI turns and settlement."""

import logging
import random
import threading
from contextlib import contextmanager
from typing import Callable, Dict, List, Optional

from holdem_engine.agents.base import BaseAgent
from holdem_engine.agents.decision import DecisionContext
from holdem_engine.agents.factory import AgentFactory
from holdem_engine.errors import (
    ConcurrentActionError, DeckExhaustedError, HandAbortedError,
    IllegalActionError, SessionOverError,
)
from holdem_engine.models.action import ActionType, PlayerAction, Street
from holdem_engine.models.card import Card, format_cards
from holdem_engine.models.table import (
    HandResult, Seat, SeatStatus, SeatView, TableConfig, TableSnapshot,
)
from holdem_engine.simulation.betting import BettingRound, BettingState, LegalActions
from holdem_engine.simulation.deck import Deck
from holdem_engine.simulation.evaluator import HandEvaluator, HandRanking
from holdem_engine.simulation.pot import PotManager
from holdem_engine.wallet import BalanceService, Wallet

logger = logging.getLogger("holdem.engine")

HUMAN_SEAT = 0

PresentationCallback = Callable[[TableSnapshot], None]


class HoldemTable:
    """One human seat against AI seats, one hand at a time.

    Every public mutation runs as a single decision: concurrent calls are
    rejected with ``ConcurrentActionError``. Snapshots produced during a
    decision are delivered to ``on_update`` after the decision finishes, so
    the callback may call back into the table.
    """

    def __init__(
        self,
        config: TableConfig,
        balance_service: BalanceService,
        on_update: Optional[PresentationCallback] = None,
        rng: Optional[random.Random] = None,
        deck_factory: Optional[Callable[[], Deck]] = None,
        agents: Optional[Dict[int, BaseAgent]] = None,
    ):
        """Initialize the table.

        Args:
            config: Table configuration; validated before anything else.
            balance_service: The human player's account balance.
            on_update: Presentation callback receiving snapshots.
            rng: Random source for shuffles, the initial button and AI choices.
            deck_factory: Builds the deck for each hand. Defaults to a freshly
                shuffled deck drawn from ``rng``.
            agents: AI agents by seat. Defaults to naive agents for seats
                1..player_count-1.
        """
        config.validate()
        self.config = config
        self.rng = rng or random.Random()
        self.wallet = Wallet(balance_service)
        self.on_update = on_update
        self.deck_factory = deck_factory or (lambda: Deck(self.rng).shuffle())

        self.factory = AgentFactory(self.rng)
        if agents is None:
            agents = self.factory.create_agents_for_table(config)
        self.agents = agents

        # Session state
        self.seats: List[Seat] = []
        self.session_started = False
        self.hand_number = 0
        self.dealer_seat: Optional[int] = None
        self.completed_hands: List[HandResult] = []
        self.last_result: Optional[HandResult] = None

        # Hand state
        self.phase = Street.SETTLED
        self.deck: Optional[Deck] = None
        self.pot = PotManager()
        self.community_cards: List[Card] = []
        self.betting: Optional[BettingRound] = None
        self.action_history: List[str] = []
        self.hand_actions: List[PlayerAction] = []
        self.rankings: Dict[int, HandRanking] = {}

        self._lock = threading.Lock()
        self._pending: List[TableSnapshot] = []

    # ------------------------------------------------------------------
    # Public API

    def start_session(self) -> TableSnapshot:
        """Buy in once and seat everybody with the starting stack.

        Raises:
            InsufficientFundsError: If the balance cannot cover the buy-in.
                No chips move in that case.
        """
        with self._decision():
            if self.session_started:
                raise IllegalActionError("Session already started")

            self.wallet.debit(self.config.starting_chips, reason="buy-in")

            self.seats = [Seat(seat=HUMAN_SEAT, name=self.config.human_name,
                               stack=self.config.starting_chips, is_human=True)]
            for seat in range(1, self.config.player_count):
                agent = self.agents.get(seat)
                name = agent.name if agent else f"Seat {seat}"
                self.seats.append(Seat(seat=seat, name=name, stack=self.config.starting_chips))

            self.session_started = True
            logger.info(f"Session started: {self.config.player_count} players, "
                        f"blinds {self.config.small_blind}/{self.config.big_blind}, "
                        f"stacks {self.config.starting_chips}")
            self._emit()
            return self.snapshot()

    def start_hand(self) -> TableSnapshot:
        """Shuffle, post blinds and deal the next hand."""
        with self._decision():
            self._start_hand()
            return self.snapshot()

    def player_action(self, seat: int, action_type: ActionType, amount: int = 0) -> TableSnapshot:
        """Apply an action for the seat whose turn it is.

        Args:
            seat: The acting seat.
            action_type: The type of action.
            amount: For raises, the total street contribution to raise to.

        Raises:
            IllegalActionError: If the action is illegal or out of turn.
        """
        with self._decision():
            self._apply(seat, action_type, amount)
            return self.snapshot()

    def advance(self) -> TableSnapshot:
        """Perform the next step that does not need the human.

        After settlement this starts the next hand; when an AI seat is to act
        it applies that agent's decision. The presentation layer calls this
        after whatever delay it wants for pacing.

        Raises:
            IllegalActionError: If the human seat is to act.
        """
        with self._decision():
            if self.phase == Street.SETTLED:
                self._start_hand()
            else:
                seat = self.acting_seat
                if seat is None:
                    raise IllegalActionError("Nothing to advance")
                agent = self.agents.get(seat)
                if agent is None or self.seats[seat].is_human:
                    raise IllegalActionError(f"Waiting for {self.seats[seat].name} to act")
                decision = agent.make_decision(self.decision_context(seat))
                logger.debug(f"{agent.name}: {decision.decision_type.value} ({decision.reasoning})")
                self._apply(seat, decision.decision_type.action_type, decision.amount)
            return self.snapshot()

    def run_until_human(self, max_steps: int = 1000) -> TableSnapshot:
        """Advance AI turns until the human must act or the hand is settled."""
        for _ in range(max_steps):
            if self.phase == Street.SETTLED or self.is_human_turn():
                break
            self.advance()
        return self.snapshot()

    def abandon_hand(self) -> Optional[HandResult]:
        """Discard the hand in progress.

        Chips already committed to the pot are not refunded.
        """
        with self._decision():
            if self.phase == Street.SETTLED:
                return None
            logger.warning(f"Hand #{self.hand_number} abandoned with {self.pot.total_pot} in the pot")
            return self._abort("Hand abandoned")

    # ------------------------------------------------------------------
    # Queries

    @property
    def acting_seat(self) -> Optional[int]:
        if self.betting is None or self.phase == Street.SETTLED:
            return None
        return self.betting.acting_seat

    @property
    def hand_in_progress(self) -> bool:
        return self.phase != Street.SETTLED

    @property
    def human(self) -> Seat:
        return self.seats[HUMAN_SEAT]

    def is_human_turn(self) -> bool:
        return self.acting_seat == HUMAN_SEAT

    def legal_actions(self) -> Optional[LegalActions]:
        """Get the available actions for the acting seat."""
        seat = self.acting_seat
        if seat is None:
            return None
        return self.betting.legal_actions(seat)

    def is_session_over(self) -> bool:
        """True when the human is broke or fewer than two seats have chips."""
        if not self.session_started or self.hand_in_progress:
            return False
        funded = [s for s in self.seats if s.stack > 0]
        return self.human.stack == 0 or len(funded) < 2

    def total_chips(self) -> int:
        """Chips on the table: every stack plus the pot."""
        return sum(s.stack for s in self.seats) + self.pot.total_pot

    def snapshot(self) -> TableSnapshot:
        """Build the view handed to the presentation layer."""
        revealed = self.phase in (Street.SHOWDOWN, Street.SETTLED)
        players = []
        for seat in self.seats:
            ranking = self.rankings.get(seat.seat) if revealed else None
            hidden = (not seat.is_human and ranking is None)
            players.append(SeatView(
                seat=seat.seat,
                name=seat.name,
                stack=seat.stack,
                status=seat.status,
                street_contribution=seat.street_contribution,
                hand_contribution=seat.hand_contribution,
                hole_cards=[] if hidden else list(seat.hole_cards),
                cards_hidden=hidden and bool(seat.hole_cards),
                is_human=seat.is_human,
                is_dealer=seat.is_dealer,
                is_small_blind=seat.is_small_blind,
                is_big_blind=seat.is_big_blind,
                hand_description=ranking.describe() if ranking else None,
            ))
        return TableSnapshot(
            phase=self.phase,
            community_cards=list(self.community_cards),
            pot=self.pot.total_pot,
            players=players,
            acting_seat=self.acting_seat,
            to_call=self.betting.to_call if self.betting and self.hand_in_progress else 0,
            dealer_seat=self.dealer_seat,
            hand_number=self.hand_number,
            last_winner_description=self.last_result.description if self.last_result else None,
            log=list(self.action_history),
        )

    # ------------------------------------------------------------------
    # Hand lifecycle

    def _start_hand(self):
        if not self.session_started:
            raise IllegalActionError("Start the session before dealing")
        if self.hand_in_progress:
            raise IllegalActionError(f"Hand #{self.hand_number} is still in progress")
        if self.is_session_over():
            raise SessionOverError("Not enough players with chips to deal a hand")

        self.hand_number += 1
        self.action_history = []
        self.hand_actions = []
        self.community_cards = []
        self.rankings = {}
        self.pot.reset_hand()
        for seat in self.seats:
            seat.reset_for_hand()

        # Rotate dealer button
        if self.dealer_seat is None:
            if self.config.button_seat is not None and self.seats[self.config.button_seat].stack > 0:
                self.dealer_seat = self.config.button_seat
            else:
                self.dealer_seat = self.rng.choice([s.seat for s in self.seats if s.stack > 0])
        else:
            self.dealer_seat = self._next_funded(self.dealer_seat)

        sb_seat = self._next_funded(self.dealer_seat)
        bb_seat = self._next_funded(sb_seat)
        self.seats[self.dealer_seat].is_dealer = True
        self.seats[sb_seat].is_small_blind = True
        self.seats[bb_seat].is_big_blind = True

        self.phase = Street.PREFLOP
        self._add_action_log(f"--- Hand #{self.hand_number} starting ---")
        logger.info(f"Hand #{self.hand_number}: dealer {self.seats[self.dealer_seat].name}")

        self._post_blind(sb_seat, self.config.small_blind)
        self._post_blind(bb_seat, self.config.big_blind)

        try:
            self.deck = self.deck_factory()
            self._deal_hole_cards()
        except DeckExhaustedError as e:
            self._abort(str(e))
            raise HandAbortedError(f"Hand #{self.hand_number} aborted: {e}") from e

        self.betting = BettingRound(
            seats=self.seats,
            street=Street.PREFLOP,
            pot=self.pot,
            first_to_act=(bb_seat + 1) % len(self.seats),
            to_call=self.config.big_blind,
        )
        self._emit()
        self._progress()

    def _post_blind(self, seat: int, amount: int):
        """Post a blind straight into the pot; a short stack goes all-in."""
        player = self.seats[seat]
        posted = player.commit(amount)
        self.pot.add_bet(seat, posted)

        blind_type = "small blind" if player.is_small_blind else "big blind"
        self._add_action_log(f"{player.name} posts {blind_type}: {posted}")
        self.hand_actions.append(PlayerAction(
            player_name=player.name,
            seat=seat,
            action_type=ActionType.POST_BLIND,
            amount=posted,
            street=Street.PREFLOP,
            is_all_in=player.status == SeatStatus.ALL_IN,
            raise_to=player.street_contribution,
        ))

    def _deal_hole_cards(self):
        """Deal one card at a time to each seat, starting left of the button."""
        dealt_in = [s for s in self._seat_order() if self.seats[s].in_hand]
        for _ in range(2):
            for seat in dealt_in:
                self.seats[seat].hole_cards.append(self.deck.draw())

    def _apply(self, seat: int, action_type: ActionType, amount: int):
        if not self.hand_in_progress or self.betting is None:
            raise IllegalActionError("No hand in progress")
        if self.betting.state != BettingState.AWAITING_ACTION:
            raise IllegalActionError(f"No action expected during {self.phase.value}")

        action = self.betting.apply(seat, action_type, amount)
        self.hand_actions.append(action)
        self._add_action_log(str(action))

        agent = self.agents.get(seat)
        if agent is not None and not self.seats[seat].is_human:
            agent.record_action(action_type)

        self._emit()
        self._progress()

    def _progress(self):
        """Move through street transitions until someone must act."""
        while self.hand_in_progress:
            state = self.betting.state
            if state == BettingState.AWAITING_ACTION:
                return
            if state == BettingState.HAND_COMPLETE:
                self._settle_uncontested()
                return
            if self.phase == Street.RIVER:
                self._showdown()
                return
            self._deal_next_street()

    def _deal_next_street(self):
        self.pot.reset_street()
        for seat in self.seats:
            seat.street_contribution = 0

        next_street = self.phase.next_street
        try:
            self.deck.burn()
            cards = self.deck.deal(next_street.cards_dealt)
        except DeckExhaustedError as e:
            self._abort(str(e))
            raise HandAbortedError(f"Hand #{self.hand_number} aborted: {e}") from e

        self.community_cards.extend(cards)
        self.phase = next_street
        self._add_action_log(f"{next_street.value.title()}: {format_cards(self.community_cards)}")
        logger.debug(f"Hand #{self.hand_number} {next_street.value}: {format_cards(cards)}")

        self.betting = BettingRound(
            seats=self.seats,
            street=next_street,
            pot=self.pot,
            first_to_act=(self.dealer_seat + 1) % len(self.seats),
            to_call=0,
        )
        self._emit()

    def _showdown(self):
        self.phase = Street.SHOWDOWN
        live = {s.seat: s.hole_cards for s in self.seats if s.in_hand}
        self.rankings = HandEvaluator.rank_seats(self.community_cards, live)
        for seat, ranking in self.rankings.items():
            self._add_action_log(f"{self.seats[seat].name} shows "
                                 f"{format_cards(self.seats[seat].hole_cards)}: {ranking.describe()}")
        self._emit()

        winnings = self.pot.distribute(self.rankings, self._seat_order())
        self._settle(winnings, went_to_showdown=True)

    def _settle_uncontested(self):
        winner = next(s for s in self.seats if s.in_hand)
        self._settle({winner.seat: self.pot.total_pot}, went_to_showdown=False)

    def _settle(self, winnings: Dict[int, int], went_to_showdown: bool):
        """Credit pot shares, record the result and close the hand."""
        pot_total = self.pot.total_pot
        for seat, amount in winnings.items():
            self.seats[seat].stack += amount
            if self.seats[seat].is_human and amount > 0:
                self.wallet.credit(amount, reason=f"hand #{self.hand_number} pot")

        descriptions = {seat: ranking.describe() for seat, ranking in self.rankings.items()}
        description = self._describe_winners(winnings, descriptions, went_to_showdown)
        self._add_action_log(description)
        logger.info(f"Hand #{self.hand_number}: {description}")

        for seat, agent in self.agents.items():
            player = self.seats[seat]
            if player.status == SeatStatus.OUT and not player.hand_contribution:
                continue
            won = winnings.get(seat, 0)
            agent.record_hand_result(won - player.hand_contribution, won > player.hand_contribution)

        result = HandResult(
            hand_number=self.hand_number,
            board=list(self.community_cards),
            winnings={seat: amount for seat, amount in winnings.items() if amount > 0},
            hand_descriptions=descriptions,
            actions=list(self.hand_actions),
            pot_total=pot_total,
            went_to_showdown=went_to_showdown,
            description=description,
        )
        self._close_hand(result)

    def _abort(self, reason: str) -> HandResult:
        """End the hand without awarding the pot."""
        logger.error(f"Hand #{self.hand_number} aborted: {reason}")
        result = HandResult(
            hand_number=self.hand_number,
            board=list(self.community_cards),
            actions=list(self.hand_actions),
            pot_total=self.pot.total_pot,
            aborted=True,
            description=f"Hand aborted: {reason}",
        )
        self._add_action_log(result.description)
        self._close_hand(result)
        return result

    def _close_hand(self, result: HandResult):
        self.pot.reset_hand()
        for seat in self.seats:
            seat.street_contribution = 0
        self.phase = Street.SETTLED
        self.last_result = result
        self.completed_hands.append(result)
        self._add_action_log(f"--- Hand #{self.hand_number} complete ---")
        self._emit()

    # ------------------------------------------------------------------
    # Helpers

    def decision_context(self, seat: int) -> DecisionContext:
        player = self.seats[seat]
        return DecisionContext(
            seat=seat,
            stack=player.stack,
            street_contribution=player.street_contribution,
            to_call=self.betting.to_call,
            small_blind=self.config.small_blind,
            big_blind=self.config.big_blind,
            min_raise_to=self.betting.min_raise_to,
            pot=self.pot.total_pot,
        )

    def _describe_winners(self, winnings: Dict[int, int], descriptions: Dict[int, str],
                          went_to_showdown: bool) -> str:
        parts = []
        for seat, amount in sorted(winnings.items(), key=lambda item: -item[1]):
            if amount <= 0:
                continue
            text = f"{self.seats[seat].name} wins {amount}"
            if went_to_showdown and seat in descriptions:
                text += f" with {descriptions[seat]}"
            parts.append(text)
        return "; ".join(parts) if parts else "No winner"

    def _seat_order(self) -> List[int]:
        """Seats clockwise starting left of the button."""
        n = len(self.seats)
        return [(self.dealer_seat + 1 + i) % n for i in range(n)]

    def _next_funded(self, seat: int) -> int:
        """Next seat after ``seat`` that still has chips."""
        n = len(self.seats)
        for i in range(1, n + 1):
            candidate = self.seats[(seat + i) % n]
            if candidate.status != SeatStatus.OUT:
                return candidate.seat
        return seat

    def _add_action_log(self, message: str):
        """Add a message to the action history."""
        self.action_history.append(message)

    def _emit(self):
        if self.on_update is not None:
            self._pending.append(self.snapshot())

    @contextmanager
    def _decision(self):
        if not self._lock.acquire(blocking=False):
            raise ConcurrentActionError("Another decision is already in progress")
        try:
            yield
        finally:
            self._lock.release()
            self._flush()

    def _flush(self):
        pending, self._pending = self._pending, []
        for snapshot in pending:
            self.on_update(snapshot)
