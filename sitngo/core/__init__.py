"""
Sit & Go Core - Pure Python Texas Hold'em Game Logic

This module contains all game logic without any network dependencies.
"""

from sitngo.core.card import Card, Deck, Rank, Suit
from sitngo.core.player import Player
from sitngo.core.hand import (
    HandCategory, HandResult, evaluate_five, find_best_hand, compare_hands,
)
from sitngo.core.rules import GameStage, ActionType, BlindStructure, find_next_seat
from sitngo.core.table import TableState, Winner
from sitngo.core.engine import (
    new_hand, apply_action, advance_stage, resolve_showdown, next_hand,
    legal_actions, pending_step,
)
from sitngo.core.game import TournamentGame, ActionResult

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "Player",
    "HandCategory",
    "HandResult",
    "evaluate_five",
    "find_best_hand",
    "compare_hands",
    "GameStage",
    "ActionType",
    "BlindStructure",
    "find_next_seat",
    "TableState",
    "Winner",
    "new_hand",
    "apply_action",
    "advance_stage",
    "resolve_showdown",
    "next_hand",
    "legal_actions",
    "pending_step",
    "TournamentGame",
    "ActionResult",
]
