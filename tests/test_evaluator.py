"""Tests for hand evaluation."""

import random

import pytest

from holdem_engine.errors import InsufficientCardsError
from holdem_engine.models.card import parse_cards as cards
from holdem_engine.simulation.deck import full_deck
from holdem_engine.simulation.evaluator import HandCategory, HandEvaluator

CANONICAL_HANDS = [
    (HandCategory.HIGH_CARD, "Ah Jd 8c 5s 3h"),
    (HandCategory.ONE_PAIR, "Kh Kd 8c 5s 3h"),
    (HandCategory.TWO_PAIR, "Kh Kd 8c 8s 3h"),
    (HandCategory.THREE_OF_A_KIND, "Kh Kd Kc 8s 3h"),
    (HandCategory.STRAIGHT, "9h 8d 7c 6s 5h"),
    (HandCategory.FLUSH, "Kh Jh 8h 5h 3h"),
    (HandCategory.FULL_HOUSE, "Kh Kd Kc 8s 8h"),
    (HandCategory.FOUR_OF_A_KIND, "Kh Kd Kc Ks 3h"),
    (HandCategory.STRAIGHT_FLUSH, "9s 8s 7s 6s 5s"),
    (HandCategory.ROYAL_FLUSH, "As Ks Qs Js Ts"),
]


class TestCategories:
    @pytest.mark.parametrize("category,hand", CANONICAL_HANDS)
    def test_canonical_category(self, category, hand):
        assert HandEvaluator.evaluate(cards(hand)).category == category

    def test_categories_ordered(self):
        """Every category beats every category below it."""
        rankings = [HandEvaluator.evaluate(cards(hand)) for _, hand in CANONICAL_HANDS]
        for lower, higher in zip(rankings, rankings[1:]):
            assert higher > lower

    def test_royal_flush_from_seven_cards(self):
        """A♥K♥ with Q♥J♥10♥ on board is a royal flush."""
        ranking = HandEvaluator.evaluate(cards("Ah Kh"), cards("Qh Jh Th 2s 3c"))
        assert ranking.category == HandCategory.ROYAL_FLUSH
        assert ranking.category.value == 10

    def test_wheel_is_five_high_straight(self):
        wheel = HandEvaluator.evaluate(cards("Ah 2d 3c 4s 5h"))
        six_high = HandEvaluator.evaluate(cards("2d 3c 4s 5h 6h"))
        assert wheel.category == HandCategory.STRAIGHT
        assert wheel.ranks[0] == 5
        assert six_high > wheel

    def test_steel_wheel(self):
        ranking = HandEvaluator.evaluate(cards("Ad 2d 3d 4d 5d"))
        assert ranking.category == HandCategory.STRAIGHT_FLUSH

    def test_no_wraparound_straight(self):
        ranking = HandEvaluator.evaluate(cards("Qh Kd Ac 2s 3h"))
        assert ranking.category == HandCategory.HIGH_CARD

    def test_best_five_of_seven(self):
        """The full house is found over the flush draw and trips."""
        ranking = HandEvaluator.evaluate(cards("8h 8d"), cards("8c Kh Kd 2h 3h"))
        assert ranking.category == HandCategory.FULL_HOUSE
        assert ranking.ranks[:4] == (8, 8, 8, 13)

    def test_insufficient_cards(self):
        with pytest.raises(InsufficientCardsError):
            HandEvaluator.evaluate(cards("Ah Kh"), cards("Qh Jh"))


class TestTiebreaks:
    def test_kicker_decides_pairs(self):
        assert HandEvaluator.compare(cards("Kh Kd Ac 5s 3h"), cards("Ks Kc Qc 5d 3d")) == 1

    def test_second_pair_decides(self):
        assert HandEvaluator.compare(cards("Ah Ad 9c 9s 3h"), cards("As Ac 8c 8d Kd")) == 1

    def test_trips_beat_lower_trips_regardless_of_kickers(self):
        assert HandEvaluator.compare(cards("5h 5d 5c 2s 3h"), cards("4s 4c 4d Ad Kd")) == 1

    def test_full_house_compares_trips_first(self):
        assert HandEvaluator.compare(cards("3h 3d 3c 2s 2h"), cards("2d 2c 2h As Ad")) == 1

    def test_identical_strength_ties(self):
        """Suits never break ties."""
        assert HandEvaluator.compare(cards("Ah Kh 9c 7s 3h"), cards("Ad Kd 9s 7c 3d")) == 0

    def test_board_plays_for_both(self):
        board = cards("As Ks Qs Js Ts")
        winners = HandEvaluator.get_winners(board, {0: cards("2h 3h"), 1: cards("4d 5d")})
        assert winners == [0, 1]

    def test_get_winners_single(self):
        board = cards("2c 7d 9h Js Kd")
        winners = HandEvaluator.get_winners(
            board, {0: cards("Ah Ad"), 1: cards("Kh Qc"), 2: cards("3s 4s")}
        )
        assert winners == [0]

    def test_transitive_over_random_hands(self):
        """Comparisons over random seven-card hands form a consistent order."""
        rng = random.Random(2024)
        deck = full_deck()
        rankings = []
        for _ in range(60):
            rankings.append(HandEvaluator.evaluate(rng.sample(deck, 7)))
        for a in rankings[:20]:
            for b in rankings[20:40]:
                for c in rankings[40:]:
                    if a > b and b > c:
                        assert a > c
                    if a == b and b == c:
                        assert a == c


class TestDescriptions:
    @pytest.mark.parametrize("hand,expected", [
        ("Kh Kd Kc 7s 7h", "Full House, Kings full of Sevens"),
        ("Qh Qd 8c 5s 3h", "Pair of Queens"),
        ("As Ks Qs Js Ts", "Royal Flush"),
        ("Ah 2d 3c 4s 5h", "Straight, Five high"),
        ("6h 6d 6c 6s 3h", "Four of a Kind, Sixes"),
        ("Jh Jd 4c 4s 3h", "Two Pair, Jacks and Fours"),
        ("Ah Jd 8c 5s 3h", "High Card, Ace"),
    ])
    def test_describe(self, hand, expected):
        assert HandEvaluator.evaluate(cards(hand)).describe() == expected

    def test_rank_name(self):
        assert HandEvaluator.get_rank_name(HandCategory.THREE_OF_A_KIND) == "Three of a Kind"
