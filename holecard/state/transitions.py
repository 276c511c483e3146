"""
State transition functions for the holecard engine.

This module provides pure functions for moving between game states, without
modifying the original state objects. Every transition checks its
preconditions first and raises `PreconditionError` when they do not hold;
values are never clamped into range. The input layer validates user input
before a transition is called, so a failed precondition is a bug.
"""

import math
import random
from dataclasses import replace
from fractions import Fraction
from typing import Optional, Tuple

from holecard.blackjack.action import Action
from holecard.blackjack.hand import beats, is_busted, is_twenty_one, pushes
from holecard.common.deck import shuffle_together
from holecard.state.models import GameState, Outcome, Target

# Share of the current bet credited back to the player per outcome
PAYOUTS = {
    Outcome.SURRENDER: Fraction(1, 2),
    Outcome.BLACKJACK: Fraction(5, 2),
    Outcome.PUSH: Fraction(1),
    Outcome.WIN: Fraction(2),
    Outcome.LOSE: Fraction(0),
}


class IllegalTransitionError(Exception):
    """Raised when a transition cannot be applied to a game state."""

    pass


class PreconditionError(IllegalTransitionError):
    """Raised when a transition is called with arguments its preconditions forbid."""

    pass


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise PreconditionError(message)


def _check_target(target: Target) -> None:
    _require(isinstance(target, Target), f"Unknown hand target: {target!r}")


class StateTransitionEngine:
    """
    Pure functions for state transitions.

    This class contains static methods that implement game state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def deal_cards(state: GameState, n: int, target: Target, show: bool) -> GameState:
        """
        Deal cards from the top of the deck to a hand.

        The deck is not replenished here; `dump_hands` is the only place the
        discard is shuffled back in.

        Args:
            state: Current game state
            n: Number of cards to deal
            target: Hand receiving the cards
            show: Whether the cards are dealt face up

        Returns:
            New game state with the cards moved from the deck to the hand
        """
        _check_target(target)
        _require(n >= 0, f"Cannot deal a negative number of cards: {n}")
        _require(
            len(state.deck) >= n,
            f"Cannot deal {n} cards from a deck of {len(state.deck)}",
        )

        cards = tuple(card.with_showing(show) for card in state.deck[:n])
        hand = state.hand(target) + cards

        return replace(state, deck=state.deck[n:], **{target.value: hand})

    @staticmethod
    def show_hand(state: GameState, target: Target) -> GameState:
        """
        Turn every card in a hand face up.

        Args:
            state: Current game state
            target: Hand to reveal

        Returns:
            New game state with the hand fully showing
        """
        _check_target(target)
        hand = tuple(card.with_showing(True) for card in state.hand(target))
        return replace(state, **{target.value: hand})

    @staticmethod
    def make_bet(state: GameState, amount: int) -> GameState:
        """
        Place the player's bet for the round.

        Args:
            state: Current game state
            amount: Chips to stake

        Returns:
            New game state with the chips moved onto the table
        """
        _require(state.current_bet == 0, f"A bet of {state.current_bet} is already placed")
        _require(amount > 0, f"Bet must be positive, got {amount}")
        _require(
            amount <= state.bet_limit,
            f"Bet of {amount} exceeds the bet limit of {state.bet_limit}",
        )
        _require(
            amount <= state.chips,
            f"Bet of {amount} exceeds the {state.chips} chips available",
        )

        return replace(state, chips=state.chips - amount, current_bet=amount)

    @staticmethod
    def scale_bet(state: GameState, factor) -> GameState:
        """
        Multiply the current bet, taking the difference from the bankroll.

        Used for double-down with a factor of 2. The scaled bet is truncated
        to a whole number of chips.

        Args:
            state: Current game state
            factor: Multiplier for the current bet

        Returns:
            New game state with the scaled bet on the table
        """
        _require(factor > 0, f"Bet scale factor must be positive, got {factor}")
        new_bet = int(state.current_bet * factor)
        available = state.chips + state.current_bet
        _require(
            new_bet <= available,
            f"Scaled bet of {new_bet} exceeds the {available} chips available",
        )
        _require(
            new_bet <= state.bet_limit,
            f"Scaled bet of {new_bet} exceeds the bet limit of {state.bet_limit}",
        )

        return replace(state, chips=available - new_bet, current_bet=new_bet)

    @staticmethod
    def resolve_bet(state: GameState, outcome: Outcome) -> GameState:
        """
        Pay out the current bet according to the round's outcome.

        Args:
            state: Current game state
            outcome: Result of the round

        Returns:
            New game state with the payout credited and no bet outstanding
        """
        _require(outcome in PAYOUTS, f"Unknown outcome: {outcome!r}")
        pay = math.floor(PAYOUTS[outcome] * state.current_bet)
        return replace(state, chips=state.chips + pay, current_bet=0)

    @staticmethod
    def dump_hands(state: GameState, rng: Optional[random.Random] = None) -> GameState:
        """
        Clear the table at the end of a round.

        Both hands go face down to the discard pile and the turn counter is
        reset. When the deck has fallen below the card limit, the discard is
        shuffled back into it.

        Args:
            state: Current game state
            rng: Optional random generator for the reshuffle

        Returns:
            New game state with empty hands
        """
        played = tuple(card.with_showing(False) for card in state.dealer + state.player)
        discard = state.discard + played
        deck = state.deck
        if len(deck) < state.card_limit:
            deck = shuffle_together(deck, discard, rng=rng)
            discard = ()

        return replace(
            state, deck=deck, discard=discard, player=(), dealer=(), turns=0
        )

    @staticmethod
    def play_hit(state: GameState, target: Target) -> GameState:
        """
        Deal one face-up card to a hand.

        Only the player's hits count as turns; the dealer draws with the same
        primitive without touching the player's turn count.

        Args:
            state: Current game state
            target: Hand receiving the card

        Returns:
            New game state with the card dealt
        """
        new_state = StateTransitionEngine.deal_cards(state, 1, target, show=True)
        if target is Target.PLAYER:
            new_state = replace(new_state, turns=state.turns + 1)
        return new_state

    @staticmethod
    def initial_deal(state: GameState) -> GameState:
        """
        Deal the opening hands: two face-up cards to the player, then one
        face-up and one face-down card to the dealer.
        """
        state = StateTransitionEngine.deal_cards(state, 2, Target.PLAYER, show=True)
        state = StateTransitionEngine.deal_cards(state, 1, Target.DEALER, show=True)
        return StateTransitionEngine.deal_cards(state, 1, Target.DEALER, show=False)


def determine_outcome(state: GameState, surrendered: bool = False) -> Outcome:
    """
    Decide the result of the round from the player's point of view.

    The checks run in a fixed order: surrender, dealer bust, push, then a
    player win, which pays as blackjack only when the player reached 21
    without taking any action.
    """
    if surrendered:
        return Outcome.SURRENDER
    if is_busted(state.dealer):
        return Outcome.WIN
    if pushes(state.dealer, state.player):
        return Outcome.PUSH
    if beats(state.player, state.dealer):
        if state.turns == 0 and is_twenty_one(state.player):
            return Outcome.BLACKJACK
        return Outcome.WIN
    return Outcome.LOSE


def is_broke(state: GameState) -> bool:
    return state.chips + state.current_bet == 0


def special_options(state: GameState) -> Tuple[Action, ...]:
    """First-turn moves: surrender, and double-down when it can be funded."""
    if state.turns != 0:
        return ()
    funded = (
        state.chips >= state.current_bet
        and state.current_bet * 2 <= state.bet_limit
    )
    if funded:
        return (Action.SURRENDER, Action.DOUBLE_DOWN)
    return (Action.SURRENDER,)


def move_choices(state: GameState) -> Tuple[Action, ...]:
    """All moves open to the player, in the order they are offered."""
    return (Action.HIT, Action.STAY) + special_options(state) + (Action.EXIT,)
