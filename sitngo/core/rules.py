"""
Texas Hold'em Rules and Constants for the sit-and-go table.

House rules followed by this engine:

1. Blinds: the small blind is the next active seat after the dealer, the
   big blind the next active seat after the small blind. This holds
   heads-up too (no dealer-posts-small-blind exception).

2. Minimum raise: a raise must reach at least the table bet plus one big
   blind. A player may always raise all-in for less.

3. First to act: the seat after the big blind preflop, the seat after the
   dealer on every later street.

4. Single pot: all chips go to one pot; no side pots are built for uneven
   all-ins. Split pots pay floor(pot / winners) each and the odd chips are
   not distributed.
"""

from enum import Enum, IntEnum
from dataclasses import dataclass
from typing import Optional, Sequence


class GameStage(IntEnum):
    """Stages of the table, strictly increasing during a hand."""
    SETUP = 0
    DEALING = 1  # not entered; new_hand deals and posts blinds in one step
    PREFLOP = 2
    FLOP = 3
    TURN = 4
    RIVER = 5
    SHOWDOWN = 6
    END = 7


BETTING_STAGES = (GameStage.PREFLOP, GameStage.FLOP, GameStage.TURN, GameStage.RIVER)


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"


@dataclass(frozen=True)
class BlindStructure:
    """Blind structure for a game."""
    small_blind: int
    big_blind: int


# Default game settings
DEFAULT_SMALL_BLIND = 10
DEFAULT_BIG_BLIND = 20
DEFAULT_STARTING_STACK = 1500
MIN_PLAYERS = 2
MAX_PLAYERS = 10

# Cards per stage
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Hand evaluation
HAND_SIZE = 5  # Best 5-card hand

# Community cards revealed when entering each stage
CARDS_FOR_STAGE = {
    GameStage.FLOP: FLOP_CARDS,
    GameStage.TURN: TURN_CARDS,
    GameStage.RIVER: RIVER_CARDS,
}


def find_next_seat(
    players: Sequence,
    from_index: int,
    direction: int = 1,
    include_all_in: bool = False,
) -> int:
    """
    Find the next seat after `from_index`, scanning circularly.

    Eliminated players are always skipped. Folded and all-in players are
    skipped unless `include_all_in` is set.

    Args:
        players: Seat-ordered players
        from_index: Seat to start from (not itself considered first)
        direction: +1 clockwise, -1 counter-clockwise
        include_all_in: Only skip eliminated players

    Returns:
        Seat index, or -1 if no seat qualifies within two laps
    """
    num_players = len(players)
    if num_players == 0:
        return -1

    index = from_index
    for _ in range(num_players * 2):
        index = (index + direction + num_players) % num_players
        player = players[index]
        if player.is_eliminated:
            continue
        if include_all_in or (not player.has_folded and not player.is_all_in):
            return index
    return -1


def calculate_min_raise(current_bet: int, big_blind: int) -> int:
    """
    Minimum total bet for a raise: the table bet plus one big blind.
    """
    return current_bet + big_blind


def clamp_raise(
    amount: Optional[int],
    player_bet: int,
    player_stack: int,
    current_bet: int,
    big_blind: int,
) -> Optional[int]:
    """
    Validate a raise-to amount for a player.

    Amounts above the player's maximum are capped at it (all-in). A raise
    below the minimum is only legal as the player's all-in.

    Args:
        amount: Requested total bet for the stage
        player_bet: The player's bet this stage
        player_stack: The player's remaining stack
        current_bet: Highest bet on the table this stage
        big_blind: Big blind amount

    Returns:
        The legal total bet, or None if the raise is not allowed
    """
    if amount is None:
        return None

    max_total = player_stack + player_bet
    total = min(int(amount), max_total)

    if total <= current_bet or total <= player_bet:
        return None

    if total < calculate_min_raise(current_bet, big_blind) and total != max_total:
        return None

    return total
