"""
Pytest configuration and shared fixtures for the sit-and-go tests.
"""

import random

import pytest
from sitngo.config import GameConfig
from sitngo.core.card import Card, Deck, Rank, Suit, full_deck, parse_cards
from sitngo.core.engine import create_players
from sitngo.core.player import Player
from sitngo.core.scheduler import ImmediateScheduler, ManualScheduler


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def deck(rng):
    """Create a fresh shuffled deck."""
    return Deck(rng)


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def stacked_deck():
    """
    Build a deck that deals the given hole cards and board.

    Hole cards are given per seat ("As Kd"), in seat order; they are dealt
    one card per seat per pass. Board cards are dealt after a burn card
    before the flop, the turn and the river.

    Usage:
        deck = stacked_deck(["As Ah", "Ks Kh", "2c 7d"], "Ad Kc 9s 4h 3c")
    """
    def build(holes, board=""):
        hole_cards = [parse_cards(h) for h in holes]
        board_cards = parse_cards(board)
        used = {c for pair in hole_cards for c in pair} | set(board_cards)
        filler = iter([c for c in full_deck() if c not in used])

        order = [pair[0] for pair in hole_cards] + [pair[1] for pair in hole_cards]
        if board_cards:
            order += [next(filler)] + board_cards[:3]
            order += [next(filler)] + board_cards[3:4]
            order += [next(filler)] + board_cards[4:5]
        order += list(filler)
        return Deck.stacked(order)

    return build


@pytest.fixture
def sample_player():
    """Create a sample player with 1000 chips."""
    return Player(player_id="test_player", name="Tester", stack=1000)


@pytest.fixture
def three_players():
    """Three fresh seats with 1500 chips, seat 0 human."""
    return create_players(["You", "Alice", "Bob"], 1500)


@pytest.fixture
def heads_up_players():
    """Two fresh seats with 1500 chips."""
    return create_players(["You", "Alice"], 1500)


@pytest.fixture
def fast_config():
    """Default blinds and stacks, no pacing delays."""
    return GameConfig(stage_delay_ms=0, ai_turn_delay_ms=0, seed=7)


@pytest.fixture
def immediate_scheduler():
    return ImmediateScheduler()


@pytest.fixture
def manual_scheduler():
    return ManualScheduler()


@pytest.fixture
def sample_hand():
    """Create a sample 5-card hand (pair of aces)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.KING, Suit.DIAMONDS),
        Card(Rank.QUEEN, Suit.CLUBS),
        Card(Rank.JACK, Suit.SPADES),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return [
        Card(Rank.NINE, Suit.HEARTS),
        Card(Rank.EIGHT, Suit.HEARTS),
        Card(Rank.SEVEN, Suit.HEARTS),
        Card(Rank.SIX, Suit.HEARTS),
        Card(Rank.FIVE, Suit.HEARTS),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
