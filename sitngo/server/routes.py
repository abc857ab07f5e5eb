"""
HTTP API Routes for the tournament table.

One table per server process: a human seat (seat 0) plays against AI
seats. AI turns and stage advances run on the app's scheduler, so a
client polls `/state` to follow the table.
"""

from typing import Dict, Any, Optional
import logging
import random

from fastapi import APIRouter, HTTPException, Request

from sitngo.config import GameConfig
from sitngo.core.game import TournamentGame
from sitngo.core.rules import ActionType
from sitngo.server.schemas import (
    CreateTournamentRequest, ActionRequest, ActionResultSchema,
    LegalActionsSchema, TournamentSchema,
)


logger = logging.getLogger(__name__)

router = APIRouter()

HUMAN_SEAT = 0


def get_game(request: Request) -> TournamentGame:
    """Get the current tournament."""
    game: Optional[TournamentGame] = getattr(request.app.state, "game", None)
    if game is None:
        raise HTTPException(status_code=404, detail="No tournament in progress")
    return game


def _human_id(game: TournamentGame) -> str:
    return game.state.players[HUMAN_SEAT].player_id


@router.get("/")
async def index() -> Dict[str, Any]:
    """Service banner."""
    return {"service": "sitngo", "endpoints": ["/tournament", "/state", "/action", "/next_hand"]}


@router.post("/tournament", response_model=TournamentSchema)
async def create_tournament(req: CreateTournamentRequest, request: Request) -> Dict[str, Any]:
    """
    Seat a new tournament and deal the first hand.

    Replaces any tournament in progress.
    """
    base: GameConfig = request.app.state.config
    names = [req.player_name] + req.ai_names

    if len(names) > base.max_players:
        raise HTTPException(status_code=400, detail=f"At most {base.max_players} players")
    if req.dealer_index is not None and req.dealer_index >= len(names):
        raise HTTPException(status_code=400, detail="Dealer seat out of range")

    seed = req.seed if req.seed is not None else base.seed
    previous: Optional[TournamentGame] = getattr(request.app.state, "game", None)
    if previous is not None:
        previous.stop()

    game = TournamentGame(
        names,
        human_seats=(HUMAN_SEAT,),
        config=base,
        scheduler=request.app.state.scheduler_factory(),
        rng=random.Random(seed),
    )
    request.app.state.game = game
    game.start(dealer_index=req.dealer_index)
    logger.info(f"Tournament created with {len(names)} players (seed={seed})")

    return {
        "player_id": _human_id(game),
        "seats": len(names),
        "small_blind": base.small_blind,
        "big_blind": base.big_blind,
        "starting_stack": base.starting_stack,
        "state": game.get_state(_human_id(game)),
    }


@router.get("/state")
async def get_state(request: Request) -> Dict[str, Any]:
    """Current table as seen by the human seat."""
    game = get_game(request)
    return game.get_state(_human_id(game))


@router.get("/legal_actions", response_model=LegalActionsSchema)
async def get_legal_actions(request: Request) -> Dict[str, Any]:
    """Legal actions for the human seat (empty when it is not their turn)."""
    game = get_game(request)
    actions = game.legal_actions(HUMAN_SEAT)
    if not actions:
        return {"actions": [], "message": "Not your turn"}
    return {"actions": actions}


@router.post("/action", response_model=ActionResultSchema)
async def take_action(req: ActionRequest, request: Request) -> Dict[str, Any]:
    """
    Take an action for the human seat.

    Illegal actions (out of turn, check facing a bet, bad raise) are
    reported with success=false and leave the table unchanged.
    """
    game = get_game(request)

    try:
        action_type = ActionType(req.action_type.upper())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid action type: {req.action_type}")

    if action_type == ActionType.RAISE and req.amount is None:
        raise HTTPException(status_code=400, detail="amount required for RAISE")

    result = game.act(HUMAN_SEAT, action_type, req.amount)

    return {
        "success": result.success,
        "message": result.message,
        "action_type": result.action_type.value if result.action_type else None,
        "state": game.get_state(_human_id(game)),
    }


@router.post("/next_hand")
async def deal_next_hand(request: Request) -> Dict[str, Any]:
    """Deal the next hand (or end the tournament)."""
    game = get_game(request)

    if game.state.is_hand_running():
        raise HTTPException(status_code=409, detail="Hand still in progress")
    if game.state.is_tournament_over():
        raise HTTPException(status_code=409, detail="Tournament is over")

    game.next_hand()
    return game.get_state(_human_id(game))


@router.post("/reset")
async def reset(request: Request) -> Dict[str, Any]:
    """Drop the current tournament."""
    game: Optional[TournamentGame] = getattr(request.app.state, "game", None)
    if game is not None:
        game.stop()
    request.app.state.game = None
    return {"success": True, "message": "Tournament reset"}
