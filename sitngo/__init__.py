"""
Sit & Go - Single-Table Texas Hold'em Tournament Engine

A standalone Texas Hold'em tournament project with:
- Pure Python game core (cards, hand evaluation, betting state machine)
- Heuristic AI seats
- Optional FastAPI server for a human player against the AI seats

Usage:
    from sitngo.core import TournamentGame, find_best_hand, compare_hands
    from sitngo.agents import HeuristicAgent
"""

__version__ = "0.1.0"

from sitngo.core.card import Card, Deck
from sitngo.core.player import Player
from sitngo.core.game import TournamentGame
from sitngo.core.hand import HandCategory, HandResult, find_best_hand, compare_hands
from sitngo.config import GameConfig

__all__ = [
    "Card",
    "Deck",
    "Player",
    "TournamentGame",
    "HandCategory",
    "HandResult",
    "find_best_hand",
    "compare_hands",
    "GameConfig",
    "__version__",
]
