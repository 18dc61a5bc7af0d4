import random
from collections import deque
from typing import Callable, Iterable, List, Optional

import pytest

from holdem_engine.agents.naive import NaiveAgent
from holdem_engine.models.card import parse_cards
from holdem_engine.models.table import TableConfig
from holdem_engine.simulation.deck import Deck, full_deck
from holdem_engine.simulation.engine import HoldemTable
from holdem_engine.wallet import InMemoryBalanceService


class ScriptedRandom:
    """Stand-in random source returning predetermined ``random()`` values."""

    def __init__(self, values: Iterable[float]):
        self._queue = deque(values)

    def random(self) -> float:
        if not self._queue:
            raise RuntimeError("No more scripted values available")
        return self._queue.popleft()


def stacked_deck(text: str, fill: bool = False) -> Callable[[], Deck]:
    """Deck factory dealing the given cards first.

    With ``fill`` the rest of the 52 cards follow in a fixed order.
    """
    def _factory() -> Deck:
        cards = parse_cards(text)
        if fill:
            cards += [c for c in full_deck() if c not in cards]
        return Deck.stacked(cards)
    return _factory


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def stacked():
    return stacked_deck


@pytest.fixture
def balance() -> InMemoryBalanceService:
    return InMemoryBalanceService(5000)


@pytest.fixture
def snapshots() -> List:
    return []


@pytest.fixture
def make_table(balance, snapshots):
    """Factory for started tables with deterministic seating."""

    def _factory(
        player_count: int = 2,
        button_seat: Optional[int] = 1,
        starting_chips: int = 1000,
        deck: Optional[Callable[[], Deck]] = None,
        ai_rolls: Iterable[float] = (),
        start: bool = True,
    ) -> HoldemTable:
        config = TableConfig(
            player_count=player_count,
            starting_chips=starting_chips,
            small_blind=10,
            big_blind=20,
            human_name="Alice",
            button_seat=button_seat,
        )
        rolls = ScriptedRandom(ai_rolls)
        agents = {seat: NaiveAgent(f"Bot{seat}", seat, rng=rolls)
                  for seat in range(1, player_count)}
        table = HoldemTable(
            config,
            balance,
            on_update=snapshots.append,
            rng=random.Random(1234),
            deck_factory=deck,
            agents=agents,
        )
        if start:
            table.start_session()
        return table

    return _factory
