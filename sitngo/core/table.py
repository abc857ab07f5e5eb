"""
Immutable table snapshot.

A TableState is the whole observable state of the table at one moment:
stage, seats, board, pot and whose turn it is. Engine transitions take
a snapshot and return a new one; nothing mutates a snapshot in place.
The deck is the single mutable piece and the engine copies it before
every draw.
"""

from __future__ import annotations
from typing import Tuple, Optional, Dict, Any, List
from dataclasses import dataclass, field, replace

from sitngo.core.card import Card, Deck
from sitngo.core.hand import HandResult
from sitngo.core.player import Player
from sitngo.core.rules import (
    GameStage, BlindStructure, BETTING_STAGES,
    DEFAULT_SMALL_BLIND, DEFAULT_BIG_BLIND,
)


@dataclass(frozen=True)
class Winner:
    """A share of the pot paid at the end of a hand."""
    player_id: str
    amount: int
    hand_result: Optional[HandResult] = None
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "amount": self.amount,
            "hand_type": self.hand_result.name if self.hand_result else None,
            "description": self.description,
            "cards": [str(c) for c in self.hand_result.cards] if self.hand_result else [],
        }


@dataclass(frozen=True)
class TableState:
    """
    Snapshot of the tournament table.

    Attributes:
        players: Seats in table order
        stage: Current stage
        community_cards: Board cards (0, 3, 4 or 5)
        pot: Chips swept from finished betting rounds
        current_bet: Highest bet this stage
        dealer_index: Dealer button seat
        small_blind_index: Seat that posted the small blind
        big_blind_index: Seat that posted the big blind
        current_player_index: Seat to act, -1 when nobody may act
        last_raiser_index: Seat of the last raise (first actor at stage start)
        blinds: Blind amounts
        deck: Undealt cards of the current hand
        hand_number: Hands started so far
        message: Description of the last transition
        winners: Payouts of the finished hand
        winning_cards: Best five cards of the (first) winner
        tournament_winner: Player id once the tournament is over
        showdown_resolved: Pot has been paid for this hand
        history: Structured events of the current hand
    """
    players: Tuple[Player, ...]
    stage: GameStage = GameStage.SETUP
    community_cards: Tuple[Card, ...] = ()
    pot: int = 0
    current_bet: int = 0
    dealer_index: int = 0
    small_blind_index: int = -1
    big_blind_index: int = -1
    current_player_index: int = -1
    last_raiser_index: int = -1
    blinds: BlindStructure = BlindStructure(DEFAULT_SMALL_BLIND, DEFAULT_BIG_BLIND)
    deck: Optional[Deck] = field(default=None, compare=False, repr=False)
    hand_number: int = 0
    message: str = ""
    winners: Tuple[Winner, ...] = ()
    winning_cards: Tuple[Card, ...] = ()
    tournament_winner: Optional[str] = None
    showdown_resolved: bool = False
    history: Tuple[Dict[str, Any], ...] = field(default=(), compare=False, repr=False)

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    @property
    def total_pot(self) -> int:
        """Pot plus every bet still in front of the players."""
        return self.pot + sum(p.current_bet for p in self.players)

    @property
    def total_chips(self) -> int:
        """All chips on the table; constant through a hand."""
        return self.pot + sum(p.chips for p in self.players)

    @property
    def players_in_hand(self) -> List[Player]:
        """Players still contesting the pot."""
        return [p for p in self.players if p.is_in_hand]

    @property
    def remaining_players(self) -> List[Player]:
        """Players not yet eliminated from the tournament."""
        return [p for p in self.players if not p.is_eliminated]

    def is_hand_running(self) -> bool:
        return self.stage in BETTING_STAGES or (
            self.stage == GameStage.SHOWDOWN and not self.showdown_resolved
        )

    def is_tournament_over(self) -> bool:
        return self.stage == GameStage.END

    def amount_to_call(self, seat: int) -> int:
        return max(0, self.current_bet - self.players[seat].current_bet)

    def seat_of(self, player_id: str) -> int:
        for i, player in enumerate(self.players):
            if player.player_id == player_id:
                return i
        return -1

    def with_player(self, seat: int, player: Player) -> TableState:
        players = list(self.players)
        players[seat] = player
        return replace(self, players=tuple(players))

    def log(self, action: str, **details: Any) -> TableState:
        """Append an event to the hand history."""
        entry = {"action": action, "stage": self.stage.name, **details}
        return replace(self, history=self.history + (entry,))

    def to_dict(self, for_player_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Public view of the table, plus hole cards for one player.

        Every player's cards are shown once the showdown has been resolved.
        """
        reveal_all = self.stage == GameStage.SHOWDOWN and self.showdown_resolved
        current = self.current_player
        return {
            "stage": self.stage.name,
            "hand_number": self.hand_number,
            "pot": self.total_pot,
            "current_bet": self.current_bet,
            "board": [c.to_dict() for c in self.community_cards],
            "dealer_position": self.dealer_index,
            "small_blind_position": self.small_blind_index,
            "big_blind_position": self.big_blind_index,
            "current_player": current.player_id if current else None,
            "players": [
                p.to_dict(hide_cards=not (reveal_all and p.is_in_hand) and p.player_id != for_player_id)
                for p in self.players
            ],
            "message": self.message,
            "winners": [w.to_dict() for w in self.winners],
            "winning_cards": [c.to_dict() for c in self.winning_cards],
            "tournament_winner": self.tournament_winner,
        }
