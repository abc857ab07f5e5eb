"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field


DEFAULT_AI_NAMES = ["Corinthians", "Palmeiras", "São Paulo", "Flamengo", "Vasco"]


# ============= Request Schemas =============

class CreateTournamentRequest(BaseModel):
    """Request to seat a new tournament: one human against AI seats."""
    player_name: str = Field(default="You", min_length=1, max_length=40)
    ai_names: List[str] = Field(default_factory=lambda: list(DEFAULT_AI_NAMES), min_length=1, max_length=9)
    seed: Optional[int] = Field(default=None, description="Seed for shuffles and AI decisions")
    dealer_index: Optional[int] = Field(default=None, ge=0, description="Dealer seat (random if omitted)")


class ActionRequest(BaseModel):
    """Request to take a game action."""
    action_type: str = Field(..., description="Action type: FOLD, CHECK, CALL, RAISE")
    amount: Optional[int] = Field(default=None, ge=0, description="Total bet for RAISE")


# ============= Response Schemas =============

class ActionSchema(BaseModel):
    """Available action."""
    type: str
    amount: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None


class LegalActionsSchema(BaseModel):
    """Legal actions for the human seat."""
    actions: List[ActionSchema] = []
    message: Optional[str] = None


class ActionResultSchema(BaseModel):
    """Result of an action, with the table after it."""
    success: bool
    message: str
    action_type: Optional[str] = None
    state: Dict[str, Any]


class TournamentSchema(BaseModel):
    """Tournament summary and current table."""
    player_id: str
    seats: int
    small_blind: int
    big_blind: int
    starting_stack: int
    state: Dict[str, Any]
