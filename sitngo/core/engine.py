"""
Betting round state machine - pure transitions over TableState.

Each public function takes a snapshot and returns the next one. Invalid
requests (wrong seat, ineligible player, illegal check or raise) return
the snapshot unchanged and log a warning; nothing here raises during
play.

Stage flow for one hand:

    new_hand -> PREFLOP -> FLOP -> TURN -> RIVER -> SHOWDOWN
                  (apply_action ... advance_stage) x 4
    resolve_showdown pays the pot, next_hand starts the next one
    (or moves the table to END when one player is left).

The functions never schedule anything. `pending_step` tells the caller
which transition is due so it can run it now or after a delay.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Dict, Any, Union
from dataclasses import replace
import logging
import random

from sitngo.core.card import Deck
from sitngo.core.hand import find_best_hand, compare_hands, get_hand_description
from sitngo.core.player import Player
from sitngo.core.table import TableState, Winner
from sitngo.core.rules import (
    GameStage, ActionType, BlindStructure, BETTING_STAGES, CARDS_FOR_STAGE,
    DEFAULT_SMALL_BLIND, DEFAULT_BIG_BLIND, DEFAULT_STARTING_STACK,
    HOLE_CARDS, HAND_SIZE, MIN_PLAYERS,
    find_next_seat, calculate_min_raise, clamp_raise,
)


logger = logging.getLogger(__name__)

STEP_ADVANCE = "advance"
STEP_SHOWDOWN = "showdown"

STAGE_MESSAGES = {
    GameStage.FLOP: "The flop is on the table!",
    GameStage.TURN: "The turn card is up!",
    GameStage.RIVER: "The river! Last betting round.",
    GameStage.SHOWDOWN: "Showdown! Time to show the cards!",
}


def create_players(
    names: Sequence[str],
    starting_stack: int = DEFAULT_STARTING_STACK,
    human_seats: Iterable[int] = (0,),
) -> tuple:
    """
    Seat a fresh set of players.

    Seats listed in `human_seats` get ids like 'player-1', the others are
    AI seats with ids like 'ai-1'.
    """
    humans = set(human_seats)
    players = []
    ai_count = 0
    human_count = 0
    for seat, name in enumerate(names):
        if seat in humans:
            human_count += 1
            player_id = f"player-{human_count}"
        else:
            ai_count += 1
            player_id = f"ai-{ai_count}"
        players.append(Player(
            player_id=player_id,
            name=name,
            stack=starting_stack,
            position=seat,
            is_ai=seat not in humans,
        ))
    return tuple(players)


def new_hand(
    players: Sequence[Player],
    dealer_index: int,
    blinds: Optional[BlindStructure] = None,
    rng: Optional[random.Random] = None,
    deck: Optional[Deck] = None,
    hand_number: int = 1,
) -> TableState:
    """
    Set up a new hand: fresh deck, blinds, hole cards, first actor.

    With fewer than two players left the tournament ends instead.

    Args:
        players: Seats in table order (eliminated players keep their seat)
        dealer_index: Dealer button seat
        blinds: Blind amounts (defaults 10/20)
        rng: Random source for the shuffle
        deck: Pre-arranged deck, used instead of shuffling
        hand_number: Sequence number of this hand

    Returns:
        The PREFLOP snapshot, or an END snapshot
    """
    blinds = blinds or BlindStructure(DEFAULT_SMALL_BLIND, DEFAULT_BIG_BLIND)
    players = tuple(players)
    remaining = [p for p in players if not p.is_eliminated]

    if len(remaining) < MIN_PLAYERS:
        return _end_tournament(players, dealer_index, blinds, hand_number - 1)

    deck = deck.copy() if deck is not None else Deck(rng)
    seats = [p.reset_for_new_hand() for p in players]

    sb_index = find_next_seat(seats, dealer_index)
    bb_index = find_next_seat(seats, sb_index)

    sb_player = seats[sb_index].commit(blinds.small_blind)
    seats[sb_index] = sb_player
    bb_player = seats[bb_index].commit(blinds.big_blind)
    seats[bb_index] = bb_player

    # One card per player per pass
    for _ in range(HOLE_CARDS):
        for i, player in enumerate(seats):
            if player.is_eliminated:
                continue
            card = deck.deal()
            if card is not None:
                seats[i] = player.receive_card(card)

    first_to_act = find_next_seat(seats, bb_index)

    state = TableState(
        players=tuple(seats),
        stage=GameStage.PREFLOP,
        pot=0,
        current_bet=blinds.big_blind,
        dealer_index=dealer_index,
        small_blind_index=sb_index,
        big_blind_index=bb_index,
        current_player_index=first_to_act,
        last_raiser_index=first_to_act,
        blinds=blinds,
        deck=deck,
        hand_number=hand_number,
        message=f"New hand! {sb_player.name} (SB), {bb_player.name} (BB).",
    )

    logger.info(f"Starting hand #{hand_number}, dealer seat {dealer_index}")
    logger.debug(
        f"Blinds posted: SB={sb_player.current_bet} (seat {sb_index}) "
        f"BB={bb_player.current_bet} (seat {bb_index})"
    )

    state = state.log(
        "HAND_START",
        hand_number=hand_number,
        dealer=dealer_index,
        small_blind=sb_index,
        big_blind=bb_index,
    )
    state = state.log(
        "BLINDS",
        small_blind=sb_player.current_bet,
        big_blind=bb_player.current_bet,
    )
    return _close_betting_if_settled(state)


def _end_tournament(
    players: tuple,
    dealer_index: int,
    blinds: BlindStructure,
    hand_number: int,
) -> TableState:
    remaining = [p for p in players if not p.is_eliminated]
    winner = remaining[0] if remaining else None
    message = f"{winner.name} wins the tournament!" if winner else "Game over!"
    logger.info(message)
    state = TableState(
        players=players,
        stage=GameStage.END,
        dealer_index=dealer_index,
        blinds=blinds,
        hand_number=hand_number,
        message=message,
        tournament_winner=winner.player_id if winner else None,
    )
    return state.log("TOURNAMENT_END", winner=winner.player_id if winner else None)


def is_betting_round_complete(state: TableState) -> bool:
    """
    Check whether the current betting round needs no further action.

    Complete when every player able to act has acted and matched the
    table bet, or when at most one player is able to act and owes
    nothing (the others are all-in).
    """
    actors = [p for p in state.players if p.can_act]

    if all(p.has_acted and p.current_bet == state.current_bet for p in actors):
        return True

    return len(actors) == 1 and actors[0].current_bet >= state.current_bet


def pending_step(state: TableState) -> Optional[str]:
    """
    The transition due next, if it does not wait on a player.

    Returns:
        STEP_ADVANCE, STEP_SHOWDOWN or None
    """
    if state.stage == GameStage.SHOWDOWN:
        return None if state.showdown_resolved else STEP_SHOWDOWN

    if state.stage not in BETTING_STAGES:
        return None

    if len(state.players_in_hand) <= 1 or is_betting_round_complete(state):
        return STEP_ADVANCE

    return None


def _close_betting_if_settled(state: TableState) -> TableState:
    """Nobody acts while a stage advance is due."""
    if pending_step(state) is not None and state.current_player_index != -1:
        return replace(state, current_player_index=-1)
    return state


def parse_action(action: Union[ActionType, str]) -> Optional[ActionType]:
    if isinstance(action, ActionType):
        return action
    try:
        return ActionType(str(action).upper())
    except ValueError:
        return None


def apply_action(
    state: TableState,
    seat_index: int,
    action: Union[ActionType, str],
    amount: Optional[int] = None,
) -> TableState:
    """
    Apply a betting action for the seat whose turn it is.

    Args:
        state: Current snapshot
        seat_index: Seat submitting the action
        action: FOLD, CHECK, CALL or RAISE
        amount: For RAISE, the new total bet for the stage (not the increment)

    Returns:
        The next snapshot, or `state` itself if the action is not allowed
    """
    action_type = parse_action(action)
    if action_type is None:
        logger.warning(f"Rejected unknown action {action!r} from seat {seat_index}")
        return state

    if state.stage not in BETTING_STAGES or pending_step(state) is not None:
        logger.warning(f"Rejected {action_type.value} from seat {seat_index}: betting is closed")
        return state

    if seat_index != state.current_player_index:
        logger.warning(f"Rejected {action_type.value} from seat {seat_index}: not their turn")
        return state

    player = state.players[seat_index]
    if not player.can_act:
        logger.warning(f"Rejected {action_type.value} from seat {seat_index}: player cannot act")
        return state

    chips_to_call = state.amount_to_call(seat_index)
    players = list(state.players)
    current_bet = state.current_bet
    last_raiser = state.last_raiser_index
    chips_moved = 0

    if action_type == ActionType.FOLD:
        updated = player.fold()
        message = f"{player.name} folds."

    elif action_type == ActionType.CHECK:
        if chips_to_call > 0:
            logger.warning(f"Rejected CHECK from seat {seat_index}: must call ${chips_to_call}")
            return state
        updated = player.mark_acted()
        message = f"{player.name} checks."

    elif action_type == ActionType.CALL:
        updated = player.commit(chips_to_call).mark_acted()
        chips_moved = updated.current_bet - player.current_bet
        message = f"{player.name} calls ${chips_moved}."

    else:
        total = clamp_raise(
            amount, player.current_bet, player.stack, current_bet, state.blinds.big_blind
        )
        if total is None:
            logger.warning(
                f"Rejected RAISE to {amount} from seat {seat_index} "
                f"(table bet {current_bet}, max {player.chips})"
            )
            return state

        updated = player.commit(total - player.current_bet).mark_acted()
        chips_moved = total - player.current_bet
        current_bet = updated.current_bet
        last_raiser = seat_index
        for i, other in enumerate(players):
            if i != seat_index and other.can_act:
                players[i] = other.mark_acted(False)
        message = f"{player.name} raises to ${total}."

    players[seat_index] = updated

    state = replace(
        state,
        players=tuple(players),
        current_bet=current_bet,
        last_raiser_index=last_raiser,
        message=message,
    )
    state = state.log(
        action_type.value,
        player=player.player_id,
        amount=chips_moved,
        all_in=updated.is_all_in,
    )
    logger.debug(message)

    if pending_step(state) is not None:
        return replace(state, current_player_index=-1)

    return replace(state, current_player_index=find_next_seat(state.players, seat_index))


def advance_stage(state: TableState) -> TableState:
    """
    Close the betting round and move to the next stage.

    Sweeps bets into the pot and resets per-round flags. With one player
    (or none) left in the hand the table goes straight to SHOWDOWN;
    otherwise the next street is burned and dealt.
    """
    if state.stage not in BETTING_STAGES:
        return state

    pot = state.total_pot
    players = tuple(p.reset_for_new_round() for p in state.players)

    if len([p for p in players if p.is_in_hand]) <= 1:
        state = replace(
            state,
            players=players,
            pot=pot,
            current_bet=0,
            stage=GameStage.SHOWDOWN,
            current_player_index=-1,
        )
        return state.log("SHOWDOWN", pot=pot)

    next_stage = GameStage(state.stage + 1)
    deck = state.deck.copy() if state.deck is not None else None
    community = state.community_cards

    revealed = []
    if next_stage in CARDS_FOR_STAGE and deck is not None:
        deck.burn()
        revealed = deck.deal_many(CARDS_FOR_STAGE[next_stage])
        community = community + tuple(revealed)

    first_to_act = find_next_seat(players, state.dealer_index)
    if next_stage == GameStage.SHOWDOWN:
        first_to_act = -1

    state = replace(
        state,
        players=players,
        pot=pot,
        current_bet=0,
        stage=next_stage,
        community_cards=community,
        deck=deck,
        current_player_index=first_to_act,
        last_raiser_index=first_to_act,
        message=STAGE_MESSAGES[next_stage],
    )
    logger.info(f"Hand #{state.hand_number}: {next_stage.name}, pot ${pot}")

    if revealed:
        state = state.log(next_stage.name, cards=[str(c) for c in revealed])
    else:
        state = state.log(next_stage.name, pot=pot)

    return _close_betting_if_settled(state)


def resolve_showdown(state: TableState) -> TableState:
    """
    Pay the pot and eliminate busted players.

    A lone remaining player takes everything. Otherwise the best hands
    split the pot evenly; the remainder of an uneven split is not paid
    out to anyone.
    """
    if state.stage != GameStage.SHOWDOWN or state.showdown_resolved:
        return state

    pot = state.total_pot
    players: List[Player] = [replace(p, current_bet=0) for p in state.players]
    contenders = [i for i, p in enumerate(players) if p.is_in_hand]
    winners: List[Winner] = []
    winning_cards: tuple = ()

    if len(contenders) == 1:
        seat = contenders[0]
        players[seat] = players[seat].award(pot)
        winners.append(Winner(players[seat].player_id, pot, None, "All other players folded"))
        message = f"{players[seat].name} wins ${pot}."
        state = state.log("WIN_BY_FOLD", winner=players[seat].player_id, amount=pot)
    else:
        results = {}
        for seat in contenders:
            cards = players[seat].hole_cards + state.community_cards
            if len(cards) < HAND_SIZE:
                continue
            results[seat] = find_best_hand(cards)
            players[seat] = players[seat].with_result(results[seat])

        if not results:
            logger.warning(f"Showdown with no evaluable hands, pot of ${pot} not paid")
            message = "No winner this hand."
        else:
            best = None
            for result in results.values():
                if best is None or compare_hands(result, best) > 0:
                    best = result
            winning_seats = [s for s, r in results.items() if compare_hands(r, best) == 0]

            share = pot // len(winning_seats)
            for seat in winning_seats:
                players[seat] = players[seat].award(share)
                winners.append(Winner(
                    players[seat].player_id, share, results[seat],
                    get_hand_description(results[seat]),
                ))
            winning_cards = best.cards

            names = ", ".join(players[s].name for s in winning_seats)
            if len(winning_seats) == 1:
                message = f"{names} wins ${share} with {get_hand_description(best)}."
            else:
                message = f"Split pot! {names} win ${share} each with {get_hand_description(best)}."

        state = state.log("SHOWDOWN", winners=[w.to_dict() for w in winners])

    for i, player in enumerate(players):
        if player.stack == 0 and not player.is_eliminated:
            players[i] = player.eliminate()
            logger.info(f"{player.name} is eliminated")
            state = state.log("ELIMINATED", player=player.player_id)

    logger.info(f"Hand #{state.hand_number} result: {message}")

    return replace(
        state,
        players=tuple(players),
        pot=0,
        current_bet=0,
        current_player_index=-1,
        winners=tuple(winners),
        winning_cards=winning_cards,
        showdown_resolved=True,
        message=message,
    )


def next_hand(
    state: TableState,
    rng: Optional[random.Random] = None,
    deck: Optional[Deck] = None,
) -> TableState:
    """
    Move the button to the next remaining seat and deal the next hand.

    Only allowed between hands; ends the tournament when fewer than two
    players remain.
    """
    if state.stage == GameStage.END:
        return state

    if state.is_hand_running():
        logger.warning("Cannot start the next hand while a hand is running")
        return state

    dealer_index = find_next_seat(state.players, state.dealer_index, include_all_in=True)
    if dealer_index == -1:
        dealer_index = state.dealer_index

    return new_hand(
        state.players,
        dealer_index,
        blinds=state.blinds,
        rng=rng,
        deck=deck,
        hand_number=state.hand_number + 1,
    )


def legal_actions(state: TableState, seat: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    Legal actions for a seat (default: the current player).

    Returns:
        List of action dicts with type and constraints, empty when the
        seat may not act
    """
    if seat is None:
        seat = state.current_player_index

    if seat == -1 or seat != state.current_player_index:
        return []

    player = state.players[seat]
    if not player.can_act or pending_step(state) is not None:
        return []

    actions: List[Dict[str, Any]] = [{"type": ActionType.FOLD.value}]
    chips_to_call = state.amount_to_call(seat)

    if chips_to_call == 0:
        actions.append({"type": ActionType.CHECK.value})
    else:
        actions.append({
            "type": ActionType.CALL.value,
            "amount": min(chips_to_call, player.stack),
        })

    max_raise = player.chips
    if player.stack > chips_to_call and max_raise > state.current_bet:
        min_raise = calculate_min_raise(state.current_bet, state.blinds.big_blind)
        actions.append({
            "type": ActionType.RAISE.value,
            "min": min(min_raise, max_raise),
            "max": max_raise,
        })

    return actions
