"""
Tournament Game - drives the state machine for one table.

TournamentGame keeps the current TableState snapshot and moves it
forward:
- human actions arrive through `act`
- stage advances and AI turns run as deferred tasks on a Scheduler
- the showdown is paid as soon as it is reached

Every transition replaces the whole snapshot and bumps a version
counter. A deferred task remembers the version it was scheduled
against and does nothing if the table has moved on since.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Optional, Sequence, Any, Union
from dataclasses import dataclass, replace
import logging
import random

from sitngo.config import GameConfig
from sitngo.core.card import Deck
from sitngo.core.engine import (
    STEP_ADVANCE, STEP_SHOWDOWN,
    create_players, new_hand, next_hand, apply_action, advance_stage,
    resolve_showdown, pending_step, legal_actions, parse_action,
)
from sitngo.core.rules import ActionType, GameStage, MIN_PLAYERS
from sitngo.core.scheduler import Scheduler, ScheduledTask, ImmediateScheduler
from sitngo.core.table import TableState
from sitngo.agents.base import BaseAgent, Decision
from sitngo.agents.heuristic import HeuristicAgent


logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Result of a player action."""
    success: bool
    message: str
    action_type: Optional[ActionType] = None


class TournamentGame:
    """
    A single-table sit-and-go.

    Usage:
        game = TournamentGame(["You", "Alice", "Bob"], config=GameConfig(seed=1))
        game.start()

        while not game.state.is_tournament_over():
            if game.state.is_hand_running():
                game.act(seat, ActionType.CALL)   # human seat's turn
            else:
                game.next_hand()
    """

    def __init__(
        self,
        player_names: Sequence[str],
        human_seats: Sequence[int] = (0,),
        config: Optional[GameConfig] = None,
        scheduler: Optional[Scheduler] = None,
        agents: Optional[Dict[int, BaseAgent]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            player_names: Names in seat order
            human_seats: Seats controlled through `act`; all others are AI
            config: Table settings
            scheduler: Runs deferred steps (default: no delay)
            agents: Agent per AI seat (default: HeuristicAgent)
            rng: Random source for shuffles, dealer draw and default agents
        """
        self.config = config or GameConfig()

        if not MIN_PLAYERS <= len(player_names) <= self.config.max_players:
            raise ValueError(
                f"Number of players must be {MIN_PLAYERS}-{self.config.max_players}"
            )

        self.rng = rng or random.Random(self.config.seed)
        self.scheduler = scheduler or ImmediateScheduler()

        players = create_players(player_names, self.config.starting_stack, human_seats)
        self.state = TableState(players=players, blinds=self.config.blinds)

        self.agents: Dict[int, BaseAgent] = dict(agents or {})
        for seat, player in enumerate(players):
            if player.is_ai and seat not in self.agents:
                self.agents[seat] = HeuristicAgent(self.rng, name=player.name)

        self._version = 0
        self._pending: Optional[ScheduledTask] = None
        self._listeners: List[Callable[[TableState], None]] = []

    @property
    def version(self) -> int:
        """Number of transitions applied so far."""
        return self._version

    def subscribe(self, listener: Callable[[TableState], None]) -> None:
        """Call `listener` with every new snapshot."""
        self._listeners.append(listener)

    def start(self, dealer_index: Optional[int] = None, deck: Optional[Deck] = None) -> TableState:
        """
        Start (or restart) the tournament and deal the first hand.

        The dealer seat is drawn at random unless given.
        """
        if dealer_index is None:
            dealer_index = self.rng.randrange(self.state.num_players)

        players = create_players(
            [p.name for p in self.state.players],
            self.config.starting_stack,
            [i for i, p in enumerate(self.state.players) if not p.is_ai],
        )
        for agent in self.agents.values():
            agent.reset()

        logger.info(f"Tournament starting with {len(players)} players")
        self._begin_hand(new_hand(
            players, dealer_index, blinds=self.config.blinds, rng=self.rng, deck=deck,
        ))
        return self.state

    def next_hand(self, deck: Optional[Deck] = None) -> TableState:
        """Deal the next hand once the current one has been paid."""
        self._begin_hand(next_hand(self.state, rng=self.rng, deck=deck))
        return self.state

    def _begin_hand(self, new_state: TableState) -> None:
        if new_state is not self.state and new_state.stage == GameStage.PREFLOP:
            for agent in self.agents.values():
                agent.on_hand_start(new_state.hand_number)
        self._commit(new_state)

    def act(
        self,
        seat: int,
        action: Union[ActionType, str],
        amount: Optional[int] = None,
    ) -> ActionResult:
        """
        Submit an action for a seat.

        Only the current actor may act; anything else leaves the table
        unchanged.
        """
        new_state = apply_action(self.state, seat, action, amount)
        if new_state is self.state:
            return ActionResult(False, f"Action {action} not allowed for seat {seat}")

        self._commit(new_state)
        return ActionResult(True, new_state.message, parse_action(action))

    def legal_actions(self, seat: Optional[int] = None) -> List[Dict[str, Any]]:
        return legal_actions(self.state, seat)

    def get_state(self, for_player_id: Optional[str] = None) -> Dict[str, Any]:
        """Serializable view of the table (hole cards only for `for_player_id`)."""
        return self.state.to_dict(for_player_id)

    def play_until_hand_over(self) -> TableState:
        """
        Let every seat be played by agents until the pot is paid.

        Human seats without an agent fall back to check/call.
        """
        guard = 0
        while self.state.is_hand_running() and guard < 1000:
            guard += 1
            seat = self.state.current_player_index
            if seat == -1 or seat in self.agents:
                # Waiting on a deferred step; run it now
                if not self._run_pending_now():
                    break
                continue
            to_call = self.state.amount_to_call(seat)
            self.act(seat, ActionType.CALL if to_call else ActionType.CHECK)
        return self.state

    def stop(self) -> None:
        """Cancel any deferred step; the table stays as it is."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _run_pending_now(self) -> bool:
        task = self._pending
        if task is None or not task.pending:
            return False
        task.run()
        return True

    def _commit(self, new_state: TableState) -> None:
        if new_state is self.state:
            return

        previous = self.state
        self.state = new_state
        self._version += 1

        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

        if new_state.showdown_resolved and not previous.showdown_resolved:
            for agent in self.agents.values():
                agent.on_hand_end(new_state.winners)

        for listener in self._listeners:
            listener(new_state)

        self._schedule_next()

    def _schedule_next(self) -> None:
        step = pending_step(self.state)

        if step == STEP_SHOWDOWN:
            self._defer(0, self._run_showdown)
        elif step == STEP_ADVANCE:
            self._defer(self.config.stage_delay_ms, self._run_advance)
        elif self.state.current_player_index in self.agents:
            self._defer(self.config.ai_turn_delay_ms, self._run_ai_turn)

    def _defer(self, delay_ms: int, step: Callable[[], None]) -> None:
        version = self._version

        def callback() -> None:
            if version != self._version:
                logger.debug(f"Skipping stale {step.__name__} (version {version})")
                return
            step()

        logger.debug(f"Scheduling {step.__name__} in {delay_ms}ms")
        task = self.scheduler.call_later(delay_ms / 1000, callback)
        # An immediate scheduler may already have run it (and its successors)
        if task.pending:
            self._pending = task

    def _run_advance(self) -> None:
        self._commit(advance_stage(self.state))

    def _run_showdown(self) -> None:
        self._commit(resolve_showdown(self.state))

    def _run_ai_turn(self) -> None:
        seat = self.state.current_player_index
        agent = self.agents.get(seat)
        if agent is None:
            return

        decision = agent.act(self.state, seat)
        new_state = apply_action(self.state, seat, decision.action, decision.amount)

        if new_state is self.state:
            fallback = ActionType.CALL if self.state.amount_to_call(seat) else ActionType.CHECK
            logger.warning(f"{agent!r} chose an illegal {decision.action.value}, playing {fallback.value}")
            decision = Decision(fallback, comment=decision.comment)
            new_state = apply_action(self.state, seat, fallback)

        if decision.comment:
            new_state = new_state.with_player(
                seat, replace(new_state.players[seat], comment=decision.comment)
            )

        self._commit(new_state)
