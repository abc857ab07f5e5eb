"""
Game configuration.

Defaults match the house rules in `sitngo.core.rules`; every value can be
overridden from the environment (SITNGO_*), e.g. for the server:

    SITNGO_BIG_BLIND=50 SITNGO_SEED=7 python run.py
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import os
import logging

from sitngo.core.rules import (
    BlindStructure,
    DEFAULT_SMALL_BLIND, DEFAULT_BIG_BLIND, DEFAULT_STARTING_STACK,
    MIN_PLAYERS, MAX_PLAYERS,
)


logger = logging.getLogger(__name__)


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not an integer")
        return default


@dataclass
class GameConfig:
    """
    Table settings.

    Attributes:
        small_blind: Small blind amount
        big_blind: Big blind amount
        starting_stack: Chips each player starts the tournament with
        stage_delay_ms: Pause before a finished betting round advances
        ai_turn_delay_ms: Pause before an AI seat acts
        seed: Seed for shuffles and AI decisions (None = unseeded)
        max_players: Largest table allowed
    """
    small_blind: int = DEFAULT_SMALL_BLIND
    big_blind: int = DEFAULT_BIG_BLIND
    starting_stack: int = DEFAULT_STARTING_STACK
    stage_delay_ms: int = 1200
    ai_turn_delay_ms: int = 1500
    seed: Optional[int] = None
    max_players: int = MAX_PLAYERS

    def __post_init__(self) -> None:
        if self.small_blind <= 0:
            raise ValueError("Small blind must be positive")
        if self.big_blind < self.small_blind:
            raise ValueError("Big blind must be at least the small blind")
        if self.starting_stack <= 0:
            raise ValueError("Starting stack must be positive")
        if not MIN_PLAYERS <= self.max_players <= MAX_PLAYERS:
            raise ValueError(f"max_players must be {MIN_PLAYERS}-{MAX_PLAYERS}")
        self.stage_delay_ms = max(0, self.stage_delay_ms)
        self.ai_turn_delay_ms = max(0, self.ai_turn_delay_ms)

    @property
    def blinds(self) -> BlindStructure:
        return BlindStructure(self.small_blind, self.big_blind)

    @classmethod
    def from_env(cls) -> GameConfig:
        return cls(
            small_blind=_env_int("SITNGO_SMALL_BLIND", DEFAULT_SMALL_BLIND),
            big_blind=_env_int("SITNGO_BIG_BLIND", DEFAULT_BIG_BLIND),
            starting_stack=_env_int("SITNGO_STARTING_STACK", DEFAULT_STARTING_STACK),
            stage_delay_ms=_env_int("SITNGO_STAGE_DELAY_MS", 1200),
            ai_turn_delay_ms=_env_int("SITNGO_AI_TURN_DELAY_MS", 1500),
            seed=_env_int("SITNGO_SEED", None),
        )
