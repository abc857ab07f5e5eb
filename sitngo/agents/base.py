"""
Base Agent Interface for the tournament table.

An agent drives one AI seat. The game asks it for a Decision whenever
that seat is the current actor, passing the current (immutable) table
snapshot.

Usage:
    class MyAgent(BaseAgent):
        def act(self, state, seat):
            return Decision(ActionType.CALL)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from sitngo.core.rules import ActionType
from sitngo.core.table import TableState, Winner


@dataclass(frozen=True)
class Decision:
    """
    An agent's chosen action.

    Attributes:
        action: Action type
        amount: Total bet for RAISE
        comment: Optional table talk shown next to the seat
    """
    action: ActionType
    amount: Optional[int] = None
    comment: Optional[str] = None


class BaseAgent(ABC):
    """
    Abstract base class for poker agents.

    Attributes:
        name: Human-readable name
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__

    @abstractmethod
    def act(self, state: TableState, seat: int) -> Decision:
        """
        Choose an action for `seat`, which is the current actor in `state`.

        Returning an illegal action is tolerated: the game falls back to
        checking or calling.
        """

    def reset(self) -> None:
        """
        Reset the agent's internal state for a new tournament.

        Override this method if your agent keeps state between hands.
        """

    def on_hand_start(self, hand_number: int) -> None:
        """Called when a new hand starts."""

    def on_hand_end(self, winners: Sequence[Winner]) -> None:
        """Called once the pot of a hand has been paid."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"
