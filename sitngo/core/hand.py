"""
Hand Evaluation for Texas Hold'em.

Every 5-card hand maps to a category (0 = High Card .. 9 = Royal Flush)
and a tuple of tie-break values, most significant first. Two results
compare by category, then lexicographically by tie-break values, so a
higher result is always the better hand.

Hand Rankings (best to worst):
9. Royal Flush: A♠ K♠ Q♠ J♠ 10♠
8. Straight Flush: 5 consecutive cards of same suit
7. Four of a Kind: 4 cards of same rank
6. Full House: 3 of a kind + pair
5. Flush: 5 cards of same suit
4. Straight: 5 consecutive cards
3. Three of a Kind: 3 cards of same rank
2. Two Pair: 2 different pairs
1. One Pair: 2 cards of same rank
0. High Card: No made hand

Note: Ace can be low in A-2-3-4-5 straight (wheel), encoded as
[5, 4, 3, 2, 1].
"""

from __future__ import annotations
from typing import List, Sequence, Tuple
from itertools import combinations
from enum import IntEnum
from collections import Counter
from dataclasses import dataclass

from sitngo.core.card import Card, Rank
from sitngo.core.rules import HAND_SIZE


class HandCategory(IntEnum):
    """Hand categories from worst (0) to best (9)."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


HAND_CATEGORY_NAMES = {
    HandCategory.HIGH_CARD: "High Card",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.ROYAL_FLUSH: "Royal Flush",
}

WHEEL = (14, 5, 4, 3, 2)
WHEEL_VALUES = (5, 4, 3, 2, 1)


@dataclass(frozen=True)
class HandResult:
    """
    An evaluated 5-card hand.

    Attributes:
        category: Hand category, 0-9
        values: Tie-break values, most significant first
        cards: The five cards making the hand
    """
    category: HandCategory
    values: Tuple[int, ...]
    cards: Tuple[Card, ...]

    @property
    def name(self) -> str:
        return HAND_CATEGORY_NAMES[self.category]

    def to_dict(self) -> dict:
        return {
            "rank": int(self.category),
            "name": self.name,
            "values": list(self.values),
            "cards": [card.to_dict() for card in self.cards],
        }


def evaluate_five(cards: Sequence[Card]) -> HandResult:
    """
    Evaluate exactly 5 cards.

    Raises:
        ValueError: If not exactly 5 cards are given
    """
    if len(cards) != HAND_SIZE:
        raise ValueError(f"Need exactly 5 cards, got {len(cards)}")

    hand = tuple(cards)
    ranks = sorted((c.value for c in hand), reverse=True)

    rank_counts = Counter(ranks)
    counts = sorted(rank_counts.values(), reverse=True)
    unique_ranks = sorted(rank_counts, reverse=True)

    is_flush = len({c.suit for c in hand}) == 1
    is_wheel = tuple(unique_ranks) == WHEEL
    is_straight = len(unique_ranks) == 5 and (
        unique_ranks[0] - unique_ranks[4] == 4 or is_wheel
    )
    straight_values = WHEEL_VALUES if is_wheel else tuple(unique_ranks)

    if is_straight and is_flush:
        if unique_ranks[0] == Rank.ACE and not is_wheel:
            return HandResult(HandCategory.ROYAL_FLUSH, (int(Rank.ACE),), hand)
        return HandResult(HandCategory.STRAIGHT_FLUSH, straight_values, hand)

    if counts[0] == 4:
        quad = _ranks_with_count(rank_counts, 4)[0]
        kicker = _ranks_with_count(rank_counts, 1)[0]
        return HandResult(HandCategory.FOUR_OF_A_KIND, (quad, kicker), hand)

    if counts[0] == 3 and counts[1] == 2:
        trips = _ranks_with_count(rank_counts, 3)[0]
        pair = _ranks_with_count(rank_counts, 2)[0]
        return HandResult(HandCategory.FULL_HOUSE, (trips, pair), hand)

    if is_flush:
        return HandResult(HandCategory.FLUSH, tuple(ranks), hand)

    if is_straight:
        return HandResult(HandCategory.STRAIGHT, straight_values, hand)

    if counts[0] == 3:
        trips = _ranks_with_count(rank_counts, 3)[0]
        return HandResult(
            HandCategory.THREE_OF_A_KIND, _with_kickers([trips], ranks), hand
        )

    if counts[0] == 2 and counts[1] == 2:
        pairs = _ranks_with_count(rank_counts, 2)
        kicker = _ranks_with_count(rank_counts, 1)[0]
        return HandResult(HandCategory.TWO_PAIR, (pairs[0], pairs[1], kicker), hand)

    if counts[0] == 2:
        pair = _ranks_with_count(rank_counts, 2)[0]
        return HandResult(HandCategory.ONE_PAIR, _with_kickers([pair], ranks), hand)

    return HandResult(HandCategory.HIGH_CARD, tuple(ranks), hand)


def _ranks_with_count(rank_counts: Counter, count: int) -> List[int]:
    """Ranks appearing exactly `count` times, highest first."""
    return sorted((r for r, c in rank_counts.items() if c == count), reverse=True)


def _with_kickers(primary: List[int], ranks: List[int]) -> Tuple[int, ...]:
    """Primary ranks followed by the remaining ranks, descending."""
    return tuple(primary + [r for r in ranks if r not in primary])


def compare_hands(a: HandResult, b: HandResult) -> int:
    """
    Compare two evaluated hands.

    Returns:
        1 if a wins, -1 if b wins, 0 if tie
    """
    if a.category != b.category:
        return 1 if a.category > b.category else -1

    for va, vb in zip(a.values, b.values):
        if va != vb:
            return 1 if va > vb else -1

    return 0


def find_best_hand(cards: Sequence[Card]) -> HandResult:
    """
    Best 5-card hand among 5 or more cards (normally 2 hole + 5 board).

    Raises:
        ValueError: If fewer than 5 cards are given
    """
    if len(cards) < HAND_SIZE:
        raise ValueError(f"Need at least 5 cards, got {len(cards)}")

    best = None
    for combo in combinations(cards, HAND_SIZE):
        result = evaluate_five(combo)
        if best is None or compare_hands(result, best) > 0:
            best = result

    return best


def get_hand_description(result: HandResult) -> str:
    """Human-readable description of an evaluated hand."""
    values = result.values
    category = result.category

    if category == HandCategory.ROYAL_FLUSH:
        return "Royal Flush"
    elif category == HandCategory.STRAIGHT_FLUSH:
        return f"Straight Flush, {_rank_name(values[0])} high"
    elif category == HandCategory.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_rank_plural(values[0])}"
    elif category == HandCategory.FULL_HOUSE:
        return f"Full House, {_rank_plural(values[0])} full of {_rank_plural(values[1])}"
    elif category == HandCategory.FLUSH:
        return f"Flush, {_rank_name(values[0])} high"
    elif category == HandCategory.STRAIGHT:
        if values == WHEEL_VALUES:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_rank_name(values[0])} high"
    elif category == HandCategory.THREE_OF_A_KIND:
        return f"Three of a Kind, {_rank_plural(values[0])}"
    elif category == HandCategory.TWO_PAIR:
        return f"Two Pair, {_rank_plural(values[0])} and {_rank_plural(values[1])}"
    elif category == HandCategory.ONE_PAIR:
        return f"Pair of {_rank_plural(values[0])}"
    else:
        return f"High Card, {_rank_name(values[0])}"


def _rank_name(value: int) -> str:
    names = {
        2: "Two", 3: "Three", 4: "Four", 5: "Five", 6: "Six",
        7: "Seven", 8: "Eight", 9: "Nine", 10: "Ten",
        11: "Jack", 12: "Queen", 13: "King", 14: "Ace",
    }
    return names[value]


def _rank_plural(value: int) -> str:
    if value == 6:
        return "Sixes"
    return _rank_name(value) + "s"
