"""
Heuristic hand-strength agent.

Scores the seat's hand and picks an action from a fixed decision
ladder with one random draw per decision. This is table filler, not a
strategy: it ignores position, pot odds and opponents.

Scores:
- Preflop: sum of both ranks, +100 + 10 x rank for a pocket pair,
  +20 suited, +15 connectors, +10 holding an ace.
- Postflop: (best hand category + 1) x 20.

Ladder, with r drawn from [0, 1):
1. Facing a bet with score < 30 and r > 0.1: fold.
2. Facing a bet above half the stack with score < 50 and r > 0.2: fold.
3. Score > 60, or score > 40 and r > 0.7: raise to
   max(table bet + big blind, min(stack, 3/4 pot + to call)) rounded down
   to a multiple of 10, or call if that is not below the stack.
4. Otherwise call a bet, or check.
"""

import random
from typing import Optional, Sequence

from sitngo.agents.base import BaseAgent, Decision
from sitngo.core.card import Card
from sitngo.core.hand import find_best_hand
from sitngo.core.rules import ActionType, GameStage, HAND_SIZE
from sitngo.core.table import TableState


def preflop_strength(hole_cards: Sequence[Card]) -> int:
    """Score two hole cards."""
    if len(hole_cards) != 2:
        return 0

    rank1, rank2 = hole_cards[0].value, hole_cards[1].value
    score = rank1 + rank2

    if rank1 == rank2:
        score += 100 + rank1 * 10
    if hole_cards[0].suit == hole_cards[1].suit:
        score += 20
    if abs(rank1 - rank2) == 1:
        score += 15
    if rank1 == 14 or rank2 == 14:
        score += 10

    return score


def postflop_strength(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> int:
    """Score the best hand made with the board."""
    cards = list(hole_cards) + list(community_cards)
    if len(cards) < HAND_SIZE:
        return 0
    return (int(find_best_hand(cards).category) + 1) * 20


def hand_strength(state: TableState, seat: int) -> int:
    player = state.players[seat]
    if state.stage == GameStage.PREFLOP:
        return preflop_strength(player.hole_cards)
    return postflop_strength(player.hole_cards, state.community_cards)


class HeuristicAgent(BaseAgent):
    """
    Rule-of-thumb AI used for the computer seats.

    Args:
        rng: Random source for the per-decision draw
        name: Optional name
    """

    def __init__(self, rng: Optional[random.Random] = None, name: Optional[str] = None):
        super().__init__(name)
        self.rng = rng or random.Random()

    def act(self, state: TableState, seat: int) -> Decision:
        return self.decide(state, seat, self.rng.random())

    def decide(self, state: TableState, seat: int, draw: float) -> Decision:
        """Apply the decision ladder for a given random draw."""
        player = state.players[seat]
        to_call = state.amount_to_call(seat)
        score = hand_strength(state, seat)

        if to_call > 0 and score < 30 and draw > 0.1:
            return Decision(ActionType.FOLD)

        if to_call > player.stack * 0.5 and score < 50 and draw > 0.2:
            return Decision(ActionType.FOLD)

        if score > 60 or (score > 40 and draw > 0.7):
            target = self.raise_target(state, seat)
            if target < player.stack:
                return Decision(ActionType.RAISE, target)
            return Decision(ActionType.CALL)

        if to_call > 0:
            return Decision(ActionType.CALL)
        return Decision(ActionType.CHECK)

    @staticmethod
    def raise_target(state: TableState, seat: int) -> int:
        """Total bet the agent raises to, before the stack check."""
        player = state.players[seat]
        to_call = state.amount_to_call(seat)
        bet_size = min(player.stack, state.total_pot * 3 // 4 + to_call)
        # Rounded down to 10, but never below the minimum raise
        return max(state.current_bet + state.blinds.big_blind, bet_size // 10 * 10)
