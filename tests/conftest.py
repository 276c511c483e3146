"""
Pytest configuration for tests at the root level.

This module contains fixtures for building cards and stacked game states.
"""

from dataclasses import replace

import pytest

from holecard.common.card import Card, Rank, Suit
from holecard.common.deck import standard_deck
from holecard.events import EventBus
from holecard.state.models import GameState


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus.reset()
    yield
    EventBus.reset()


@pytest.fixture
def make_card():
    """Factory for cards: make_card(Rank.ACE) is a face-up ace of spades."""

    def _make(rank: Rank, suit: Suit = Suit.SPADES, showing: bool = True) -> Card:
        return Card(suit, rank, showing)

    return _make


@pytest.fixture
def stacked_state():
    """
    Factory for a game state whose deck starts with the given cards.

    The remaining cards of a full shoe follow the stacked ones, so the state
    still holds exactly 52 cards per deck.
    """

    def _stack(top=(), decks: int = 4, chips: int = 500, bet_limit: int = 100, **fields):
        rest = list(standard_deck()) * decks
        stacked = []
        for card in top:
            card = replace(card, showing=False)
            rest.remove(card)
            stacked.append(card)
        return GameState(
            deck=tuple(stacked) + tuple(rest),
            chips=chips,
            bet_limit=bet_limit,
            deck_count=decks,
            **fields,
        )

    return _stack
