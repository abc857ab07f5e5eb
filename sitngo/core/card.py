"""
Card and Deck classes for the tournament engine.

Ranks carry their poker value directly (2-14, Ace high) so the hand
evaluator can work with plain integers, while cards still render with
the usual suit symbols.
"""

from __future__ import annotations
import random
from typing import Iterable, List, Optional
from enum import IntEnum


class Suit(IntEnum):
    """Card suits."""
    HEARTS = 0    # ♥
    DIAMONDS = 1  # ♦
    CLUBS = 2     # ♣
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks valued 2 (lowest) to 14 (Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.HEARTS: "h",
    Suit.DIAMONDS: "d",
    Suit.CLUBS: "c",
    Suit.SPADES: "s",
}

RANK_LABELS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

# Reverse mappings
LABEL_TO_RANK = {v: k for k, v in RANK_LABELS.items()}
LABEL_TO_RANK["T"] = Rank.TEN  # Also accept "T"
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}


class Card:
    """
    An immutable playing card identified by (rank, suit).

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As"), Card.from_string("10♥")
    """

    __slots__ = ("rank", "suit")

    def __init__(self, rank: Rank, suit: Suit):
        object.__setattr__(self, "rank", Rank(rank))
        object.__setattr__(self, "suit", Suit(suit))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Card is immutable")

    def __reduce__(self):
        return (Card, (self.rank, self.suit))

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts formats:
        - "As", "Kh", "Td", "10c" (rank + suit char)
        - "A♠", "K♥", "10♦", "2♣" (rank + suit symbol)
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_part = s[:-1].upper()
        suit_part = s[-1]

        if rank_part not in LABEL_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(LABEL_TO_RANK[rank_part], suit)

    @property
    def id(self) -> str:
        """Stable identity like '10-♥'."""
        return f"{RANK_LABELS[self.rank]}-{SUIT_SYMBOLS[self.suit]}"

    @property
    def value(self) -> int:
        """Numeric rank, 2-14."""
        return int(self.rank)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self.rank == other.rank and self.suit == other.suit
        return False

    def __hash__(self) -> int:
        return int(self.rank) * 4 + int(self.suit)

    def __lt__(self, other: Card) -> bool:
        """Compare by rank only (for sorting)."""
        return self.rank < other.rank

    def __repr__(self) -> str:
        return f"Card({RANK_LABELS[self.rank]}{SUIT_CHARS[self.suit]})"

    def __str__(self) -> str:
        return f"{RANK_LABELS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self.suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "rank": RANK_LABELS[self.rank],
            "suit": SUIT_SYMBOLS[self.suit],
            "text": str(self),
            "color": self.color,
        }


def full_deck() -> List[Card]:
    """All 52 cards in suit-major order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Deck:
    """
    A 52-card deck owned by a single hand.

    The deck is shuffled on construction with the injected random source
    (``random.Random.shuffle`` is a Fisher-Yates shuffle). Cards are dealt
    from the end of the sequence.

    Usage:
        deck = Deck(random.Random(7))
        card = deck.deal()
        deck.burn()
    """

    def __init__(self, rng: Optional[random.Random] = None, shuffle: bool = True):
        self._cards: List[Card] = full_deck()
        if shuffle:
            (rng or random.Random()).shuffle(self._cards)

    @classmethod
    def stacked(cls, cards: Iterable[Card]) -> Deck:
        """
        Build a deck whose deal order is exactly ``cards`` (first dealt first).

        Useful for replaying or testing specific hands.
        """
        deck = cls(shuffle=False)
        deck._cards = list(reversed(list(cards)))
        return deck

    def deal(self) -> Optional[Card]:
        """Remove and return the next card, or None if the deck is empty."""
        if not self._cards:
            return None
        return self._cards.pop()

    def deal_many(self, n: int) -> List[Card]:
        """Deal up to n cards, omitting any the deck cannot supply."""
        dealt = []
        for _ in range(n):
            card = self.deal()
            if card is not None:
                dealt.append(card)
        return dealt

    def burn(self) -> Optional[Card]:
        """Discard the next card."""
        return self.deal()

    def copy(self) -> Deck:
        """Independent copy with the same remaining order."""
        clone = Deck(shuffle=False)
        clone._cards = list(self._cards)
        return clone

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse space-separated cards, e.g. "As Kh 10d" or "A♠ K♥ 10♦".
    """
    return [Card.from_string(s) for s in cards_str.split()]
