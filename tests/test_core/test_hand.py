"""
Tests for hand evaluation.
"""

import itertools
import random

import pytest
from sitngo.core.card import Card, Rank, Suit, full_deck, parse_cards
from sitngo.core.hand import (
    evaluate_five, find_best_hand, compare_hands, HandCategory,
    get_hand_description, WHEEL_VALUES,
)


def evaluate(cards_str):
    return evaluate_five(parse_cards(cards_str))


class TestHandRanking:
    """Tests for hand ranking."""

    def test_royal_flush(self, royal_flush):
        """Test royal flush recognition."""
        result = evaluate_five(royal_flush)
        assert result.category == HandCategory.ROYAL_FLUSH
        assert int(result.category) == 9
        assert result.values == (14,)

    def test_straight_flush(self, straight_flush):
        """Test straight flush recognition."""
        result = evaluate_five(straight_flush)
        assert result.category == HandCategory.STRAIGHT_FLUSH
        assert result.values == (9, 8, 7, 6, 5)

    def test_steel_wheel(self):
        """A-2-3-4-5 suited is a five-high straight flush, not a royal."""
        result = evaluate("Ah 2h 3h 4h 5h")
        assert result.category == HandCategory.STRAIGHT_FLUSH
        assert result.values == WHEEL_VALUES

    def test_four_of_a_kind(self):
        """Test four of a kind recognition."""
        result = evaluate("As Ah Ad Ac Ks")
        assert result.category == HandCategory.FOUR_OF_A_KIND
        assert result.values == (14, 13)

    def test_full_house(self):
        """Test full house recognition."""
        result = evaluate("As Ah Ad Kc Ks")
        assert result.category == HandCategory.FULL_HOUSE
        assert result.values == (14, 13)

    def test_flush(self):
        """Test flush recognition."""
        result = evaluate("As Ks Js 9s 2s")
        assert result.category == HandCategory.FLUSH
        assert result.values == (14, 13, 11, 9, 2)

    def test_straight(self):
        """Test straight recognition."""
        result = evaluate("10s 9h 8d 7c 6s")
        assert result.category == HandCategory.STRAIGHT
        assert result.values == (10, 9, 8, 7, 6)

    def test_wheel_straight(self, wheel_straight):
        """The wheel ranks the ace low."""
        result = evaluate_five(wheel_straight)
        assert result.category == HandCategory.STRAIGHT
        assert result.values == (5, 4, 3, 2, 1)

    def test_broadway_straight(self):
        result = evaluate("As Kh Qd Jc 10s")
        assert result.category == HandCategory.STRAIGHT
        assert result.values == (14, 13, 12, 11, 10)

    def test_no_wraparound_straight(self):
        """Q-K-A-2-3 is not a straight."""
        assert evaluate("Qs Kh Ad 2c 3s").category == HandCategory.HIGH_CARD

    def test_three_of_a_kind(self):
        """Trips come first, then kickers high to low."""
        result = evaluate("2h 2d 2c 9s 5h")
        assert int(result.category) == 3
        assert result.values == (2, 9, 5)

    def test_two_pair(self):
        """Test two pair recognition."""
        result = evaluate("As Ah Kd Kc Qs")
        assert result.category == HandCategory.TWO_PAIR
        assert result.values == (14, 13, 12)

    def test_one_pair(self, sample_hand):
        """Test one pair recognition."""
        result = evaluate_five(sample_hand)
        assert result.category == HandCategory.ONE_PAIR
        assert result.values == (14, 13, 12, 11)

    def test_high_card(self):
        """Test high card recognition."""
        result = evaluate("As Kh 9d 7c 2s")
        assert result.category == HandCategory.HIGH_CARD
        assert result.values == (14, 13, 9, 7, 2)

    def test_requires_five_cards(self):
        with pytest.raises(ValueError):
            evaluate("As Kh 9d 7c")
        with pytest.raises(ValueError):
            evaluate("As Kh 9d 7c 2s 3s")

    def test_result_keeps_cards(self, royal_flush):
        result = evaluate_five(royal_flush)
        assert list(result.cards) == royal_flush
        assert result.name == "Royal Flush"


class TestHandComparison:
    """Tests for comparing hands."""

    def test_royal_flush_beats_straight_flush(self, royal_flush, straight_flush):
        royal = evaluate_five(royal_flush)
        sf = evaluate_five(straight_flush)
        assert compare_hands(royal, sf) == 1
        assert compare_hands(sf, royal) == -1

    def test_full_house_beats_two_pair(self):
        two_pair = evaluate("Ks Kh Qd Qc 2s")
        full_house = evaluate("3s 3h 3d 2c 2h")
        assert compare_hands(full_house, two_pair) == 1

    def test_six_high_straight_beats_wheel(self, wheel_straight):
        wheel = evaluate_five(wheel_straight)
        six_high = evaluate("2s 3h 4d 5c 6s")
        assert compare_hands(six_high, wheel) == 1

    def test_flush_beats_straight(self):
        flush = evaluate("As Js 8s 5s 2s")
        straight = evaluate("As Kh Qd Jc 10s")
        assert compare_hands(flush, straight) == 1

    def test_higher_pair_wins(self):
        kings = evaluate("Ks Kh 7d 5c 2s")
        queens = evaluate("Qs Qh Ad Kc Js")
        assert compare_hands(kings, queens) == 1

    def test_kicker_decides(self):
        ace_kicker = evaluate("Ks Kh Ad 5c 2s")
        queen_kicker = evaluate("Kd Kc Qd 5h 2h")
        assert compare_hands(ace_kicker, queen_kicker) == 1

    def test_tie(self):
        """Suits never break ties."""
        a = evaluate("As Kh Qd Jc 9s")
        b = evaluate("Ah Kd Qc Js 9h")
        assert compare_hands(a, b) == 0
        assert compare_hands(b, a) == 0

    def test_comparison_is_antisymmetric(self):
        rng = random.Random(99)
        deck = full_deck()
        for _ in range(200):
            cards = rng.sample(deck, 10)
            a = evaluate_five(cards[:5])
            b = evaluate_five(cards[5:])
            assert compare_hands(a, b) == -compare_hands(b, a)


class TestFindBestHand:
    """Tests for choosing the best five of seven."""

    def test_best_five_from_seven(self):
        cards = parse_cards("As Ks Qs Js 10s 2h 3d")
        result = find_best_hand(cards)
        assert result.category == HandCategory.ROYAL_FLUSH

    def test_flush_from_six_suited(self):
        cards = parse_cards("As Ks 9s 7s 4s 2s 3d")
        result = find_best_hand(cards)
        assert result.category == HandCategory.FLUSH
        assert result.values == (14, 13, 9, 7, 4)

    def test_full_house_from_two_trips(self):
        """Two sets make the higher full house."""
        cards = parse_cards("Ks Kh Kd 7c 7s 7h 2d")
        result = find_best_hand(cards)
        assert result.category == HandCategory.FULL_HOUSE
        assert result.values == (13, 7)

    def test_exactly_five_cards(self, sample_hand):
        assert find_best_hand(sample_hand) == evaluate_five(sample_hand)

    def test_best_hand_is_maximal(self):
        """No five-card subset beats the chosen hand."""
        rng = random.Random(5)
        deck = full_deck()
        for _ in range(50):
            cards = rng.sample(deck, 7)
            best = find_best_hand(cards)
            assert len(best.cards) == 5
            assert set(best.cards) <= set(cards)
            for combo in itertools.combinations(cards, 5):
                assert compare_hands(evaluate_five(combo), best) <= 0

    def test_too_few_cards(self):
        with pytest.raises(ValueError):
            find_best_hand(parse_cards("As Kh 9d 7c"))


class TestHandDescription:
    """Tests for hand descriptions."""

    def test_royal_flush_description(self, royal_flush):
        assert get_hand_description(evaluate_five(royal_flush)) == "Royal Flush"

    def test_pair_description(self, sample_hand):
        assert get_hand_description(evaluate_five(sample_hand)) == "Pair of Aces"

    def test_full_house_description(self):
        result = evaluate("As Ah Ad Kc Ks")
        assert get_hand_description(result) == "Full House, Aces full of Kings"

    def test_sixes_plural(self):
        assert get_hand_description(evaluate("6s 6h Ad Kc 9s")) == "Pair of Sixes"
        result = evaluate("6s 6h 6d Kc Ks")
        assert get_hand_description(result) == "Full House, Sixes full of Kings"

    def test_wheel_description(self, wheel_straight):
        description = get_hand_description(evaluate_five(wheel_straight))
        assert description == "Straight, Five high (Wheel)"

    def test_to_dict(self):
        data = evaluate("2h 2d 2c 9s 5h").to_dict()
        assert data["rank"] == 3
        assert data["name"] == "Three of a Kind"
        assert data["values"] == [2, 9, 5]
        assert len(data["cards"]) == 5
