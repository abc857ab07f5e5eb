"""
Player snapshot for the tournament table.

A Player is immutable: every transition (posting a blind, calling,
folding, collecting a pot) returns a new Player, so a table snapshot
handed to a deferred callback is never changed underneath it.

Tracks:
- Stack (chip count) and the bet committed this stage
- Hole cards
- Fold / all-in / eliminated flags
- Hands won over the tournament
"""

from __future__ import annotations
from typing import Tuple, Optional, Dict, Any
from dataclasses import dataclass, replace

from sitngo.core.card import Card
from sitngo.core.hand import HandResult


@dataclass(frozen=True)
class Player:
    """
    A seat at the tournament table.

    Attributes:
        player_id: Unique identifier for the player
        name: Display name
        stack: Chips behind (not yet committed)
        position: Seat position at the table (0-indexed)
        is_ai: Whether the seat is driven by an agent
        hole_cards: The player's private cards (0 or 2)
        current_bet: Amount committed in the current stage
        has_acted: Acted since the last bet change this stage
        has_folded: Folded this hand
        is_all_in: No chips behind, cannot act further this hand
        is_eliminated: Out of the tournament, permanent
        hands_won: Pots won (shares of split pots count)
        hand_result: Best hand, cached at showdown
        comment: Transient table talk, cleared between stages
    """
    player_id: str
    name: str
    stack: int
    position: int = 0
    is_ai: bool = False
    hole_cards: Tuple[Card, ...] = ()
    current_bet: int = 0
    has_acted: bool = False
    has_folded: bool = False
    is_all_in: bool = False
    is_eliminated: bool = False
    hands_won: int = 0
    hand_result: Optional[HandResult] = None
    comment: Optional[str] = None

    def reset_for_new_hand(self) -> Player:
        """Clear per-hand state. Eliminated players stay folded out."""
        return replace(
            self,
            hole_cards=(),
            current_bet=0,
            has_acted=False,
            has_folded=self.is_eliminated,
            is_all_in=False,
            hand_result=None,
            comment=None,
        )

    def reset_for_new_round(self) -> Player:
        """Clear per-stage state (bets are swept by the table first)."""
        return replace(self, current_bet=0, has_acted=False, comment=None)

    def receive_card(self, card: Card) -> Player:
        return replace(self, hole_cards=self.hole_cards + (card,))

    def commit(self, amount: int) -> Player:
        """
        Move chips from the stack into the current bet.

        The amount is clamped to [0, stack]; an emptied stack means all-in.
        """
        actual = max(0, min(amount, self.stack))
        stack = self.stack - actual
        return replace(
            self,
            stack=stack,
            current_bet=self.current_bet + actual,
            is_all_in=self.is_all_in or stack == 0,
        )

    def fold(self) -> Player:
        return replace(self, has_folded=True, has_acted=True)

    def mark_acted(self, acted: bool = True) -> Player:
        return replace(self, has_acted=acted)

    def award(self, amount: int) -> Player:
        """Collect winnings and count the hand as won."""
        return replace(self, stack=self.stack + amount, hands_won=self.hands_won + 1)

    def eliminate(self) -> Player:
        return replace(self, is_eliminated=True)

    def with_result(self, result: Optional[HandResult]) -> Player:
        return replace(self, hand_result=result)

    @property
    def is_in_hand(self) -> bool:
        """Still contesting the pot (not folded, not eliminated)."""
        return not self.has_folded and not self.is_eliminated

    @property
    def can_act(self) -> bool:
        """Can take a betting action this hand."""
        return self.is_in_hand and not self.is_all_in

    @property
    def chips(self) -> int:
        """Stack plus the bet still in front of the player."""
        return self.stack + self.current_bet

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result = {
            "id": self.player_id,
            "name": self.name,
            "position": self.position,
            "is_ai": self.is_ai,
            "stack": self.stack,
            "bet": self.current_bet,
            "has_acted": self.has_acted,
            "has_folded": self.has_folded,
            "is_all_in": self.is_all_in,
            "is_eliminated": self.is_eliminated,
            "hands_won": self.hands_won,
            "comment": self.comment,
        }

        if not hide_cards and self.hole_cards:
            result["cards"] = [card.to_dict() for card in self.hole_cards]
        if self.hand_result is not None:
            result["hand_result"] = self.hand_result.to_dict()

        return result

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"{self.name} [{cards_str}] ${self.stack}"
