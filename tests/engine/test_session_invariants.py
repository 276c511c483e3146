"""
Seeded random sessions checked state by state.

A random player bets and picks among the offered moves (never exit) until
the session ends or hits the round cap. Every state the engine renders must
hold all of its cards, a non-negative bankroll and a bet within the limit.
"""

import logging
import random

import pytest

from holecard.blackjack.action import Action
from holecard.blackjack.rules import TableConfig
from holecard.common.card import Card, Rank, Suit
from holecard.common.io_interface import IOInterface, TestIOInterface
from holecard.engine import BlackjackEngine
from holecard.state import Broke, Continuing, expected_card_count


class RandomIOInterface(IOInterface):
    """Plays legal random bets and moves and keeps every rendered state."""

    def __init__(self, rng: random.Random):
        self.rng = rng
        self.states = []

    def output(self, message):
        pass

    def render(self, state):
        self.states.append(state)

    def prompt_bet(self, chips, bet_limit):
        return self.rng.randint(1, min(chips, bet_limit))

    def prompt_move(self, choices):
        return self.rng.choice([c for c in choices if c is not Action.EXIT])

    def prompt_continue(self):
        pass


@pytest.mark.parametrize("seed", range(12))
def test_every_rendered_state_is_consistent(seed):
    rng = random.Random(seed)
    config = TableConfig(
        chips=rng.choice([50, 200, 500]),
        bet_limit=rng.choice([10, 50, 100]),
        decks=4 + seed % 5,
        pacing=0,
        seed=seed,
    )
    io = RandomIOInterface(rng)
    engine = BlackjackEngine.from_config(config, io)

    result = engine.run(max_rounds=150)

    assert isinstance(result, (Continuing, Broke))
    assert io.states
    for state in io.states:
        assert state.total_cards == expected_card_count(state)
        assert state.chips >= 0
        assert 0 <= state.current_bet <= state.bet_limit
    assert result.state.total_cards == expected_card_count(result.state)


def test_phase_entry_is_logged_without_the_hole_card(stacked_state, caplog):
    top = [
        Card(Suit.SPADES, Rank.TEN),
        Card(Suit.SPADES, Rank.SIX),
        Card(Suit.CLUBS, Rank.NINE),
        Card(Suit.CLUBS, Rank.SEVEN),
    ]
    io = TestIOInterface(bets=[20], moves=[Action.EXIT])
    engine = BlackjackEngine(io, stacked_state(top))

    with caplog.at_level(logging.DEBUG, logger="holecard.engine"):
        engine.play_round()

    entries = [r.getMessage() for r in caplog.records if "entering" in r.getMessage()]
    assert [m.split(" with ")[0] for m in entries] == [
        "Round 1: entering BETTING",
        "Round 1: entering PLAYER_TURN",
    ]
    assert "'dealer': ['nine of clubs', None]" in entries[1]
    assert "seven of clubs" not in entries[1]
