"""
Baseline agents.

Simple agents that pick from the engine's legal actions. Useful for
testing game logic and for filling seats in simulations.
"""

import random
from typing import Optional

from sitngo.agents.base import BaseAgent, Decision
from sitngo.core.engine import legal_actions
from sitngo.core.rules import ActionType
from sitngo.core.table import TableState


class RandomAgent(BaseAgent):
    """
    An agent that selects random legal actions.

    The agent has configurable tendencies:
    - fold_probability: How likely to fold when possible
    - raise_probability: How likely to raise vs call
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        name: Optional[str] = None,
        fold_probability: float = 0.1,
        raise_probability: float = 0.3,
    ):
        super().__init__(name)
        self.rng = rng or random.Random()
        self.fold_probability = fold_probability
        self.raise_probability = raise_probability

    def act(self, state: TableState, seat: int) -> Decision:
        actions = {a["type"]: a for a in legal_actions(state, seat)}
        if not actions:
            return Decision(ActionType.FOLD)

        roll = self.rng.random()

        # Maybe fold, but never fold a free check
        if "CALL" in actions and roll < self.fold_probability:
            return Decision(ActionType.FOLD)

        raise_action = actions.get("RAISE")
        if raise_action and roll < self.fold_probability + self.raise_probability:
            amount = self.rng.randint(raise_action["min"], raise_action["max"])
            return Decision(ActionType.RAISE, amount)

        if "CHECK" in actions:
            return Decision(ActionType.CHECK)
        return Decision(ActionType.CALL)


class CallAgent(BaseAgent):
    """
    An agent that always calls (or checks).

    Useful for testing and as a simple baseline.
    """

    def act(self, state: TableState, seat: int) -> Decision:
        if state.amount_to_call(seat) == 0:
            return Decision(ActionType.CHECK)
        return Decision(ActionType.CALL)
