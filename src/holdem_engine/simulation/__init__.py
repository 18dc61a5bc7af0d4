"""Hold'em table simulation module."""

from holdem_engine.simulation.deck import Deck
from holdem_engine.simulation.pot import Pot, PotManager
from holdem_engine.simulation.evaluator import HandCategory, HandEvaluator, HandRanking
from holdem_engine.simulation.betting import BettingRound, BettingState, LegalActions
from holdem_engine.simulation.engine import HoldemTable

__all__ = ["Deck", "Pot", "PotManager", "HandCategory", "HandEvaluator", "HandRanking",
           "BettingRound", "BettingState", "LegalActions", "HoldemTable"]
