"""
Immutable state models for the holecard engine.

This module provides dataclasses for representing the state of a blackjack
session in an immutable manner. These classes are designed to be used with
pure transition functions that create new state instances rather than
modifying existing ones.
"""

import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Optional, Tuple

from holecard.blackjack.constants import CARD_LIMIT, CARDS_PER_DECK
from holecard.blackjack.rules import check_table_limits
from holecard.common.card import Card
from holecard.common.deck import build_deck


class GameStage(Enum):
    """
    Phases of a single round.
    """

    BETTING = auto()
    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    RESOLUTION = auto()


class Target(Enum):
    """The two hands on the table."""

    PLAYER = "player"
    DEALER = "dealer"


class Outcome(Enum):
    """Possible results of a round, from the player's point of view."""

    SURRENDER = "surrender"
    BLACKJACK = "blackjack"
    PUSH = "push"
    WIN = "win"
    LOSE = "lose"


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of the table between two transitions.

    Attributes:
        deck: Cards left to deal, face down, top card first
        discard: Played cards waiting to be shuffled back in
        player: The player's hand in deal order
        dealer: The dealer's hand in deal order
        chips: Bankroll not currently on the table
        card_limit: Deck size below which the discard is shuffled back in
        bet_limit: Ceiling on any single bet
        current_bet: Chips at stake this round, 0 between rounds
        turns: Number of actions the player has taken this round
        deck_count: Number of decks the shoe was built from
    """

    deck: Tuple[Card, ...] = ()
    discard: Tuple[Card, ...] = ()
    player: Tuple[Card, ...] = ()
    dealer: Tuple[Card, ...] = ()
    chips: int = 0
    card_limit: int = CARD_LIMIT
    bet_limit: int = 0
    current_bet: int = 0
    turns: int = 0
    deck_count: int = 0

    def hand(self, target: Target) -> Tuple[Card, ...]:
        """Get the hand held by `target`."""
        if target is Target.PLAYER:
            return self.player
        if target is Target.DEALER:
            return self.dealer
        raise ValueError(f"Unknown hand target: {target!r}")

    @property
    def total_cards(self) -> int:
        """Number of cards across every zone of the table."""
        return len(self.deck) + len(self.discard) + len(self.player) + len(self.dealer)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary suitable for logging.

        Hidden cards are reported as None so the dictionary never leaks them.
        """
        return {
            "deck_remaining": len(self.deck),
            "discard": len(self.discard),
            "player": [str(card) if card.showing else None for card in self.player],
            "dealer": [str(card) if card.showing else None for card in self.dealer],
            "chips": self.chips,
            "bet_limit": self.bet_limit,
            "current_bet": self.current_bet,
            "turns": self.turns,
            "deck_count": self.deck_count,
        }


def new_game(
    chips: int, bet_limit: int, decks: int, rng: Optional[random.Random] = None
) -> GameState:
    """
    Create the opening state of a session.

    Args:
        chips: Starting bankroll, positive
        bet_limit: Ceiling on any single bet, positive
        decks: Number of decks in the shoe, between 4 and 8
        rng: Optional random generator for the initial shuffle

    Raises:
        ConfigurationError: If any value is out of range
    """
    check_table_limits(chips, bet_limit, decks)
    return GameState(
        deck=build_deck(decks, rng=rng),
        chips=chips,
        bet_limit=bet_limit,
        deck_count=decks,
    )


def expected_card_count(state: GameState) -> int:
    """Number of cards a state built from `state.deck_count` decks must hold."""
    return CARDS_PER_DECK * state.deck_count


@dataclass(frozen=True)
class SessionResult:
    """
    Result of playing one round.

    Exactly one of the subclasses is returned so that callers can tell a
    game that goes on from a session that has ended.
    """

    state: GameState

    @property
    def is_over(self) -> bool:
        return True


@dataclass(frozen=True)
class Continuing(SessionResult):
    """The round finished and the next one can start from `state`."""

    @property
    def is_over(self) -> bool:
        return False


@dataclass(frozen=True)
class Exited(SessionResult):
    """The player chose to leave; `state` is the table as it was left."""


@dataclass(frozen=True)
class Broke(SessionResult):
    """The player has no chips left after resolving a round."""
