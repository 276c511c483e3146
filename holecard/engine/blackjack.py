"""
Blackjack engine implementation.

This module provides the BlackjackEngine class, which drives a session round
by round: betting, the opening deal, the player's decisions, the dealer's
draw and the payout. Every change to the table goes through a pure function
from `holecard.state.transitions`; the engine only keeps the latest state,
talks to the IO interface and announces what happened on the event bus.
"""

import logging
import random
import time
from typing import Callable, Optional, Tuple

from holecard.blackjack.action import Action
from holecard.blackjack.hand import is_busted, is_over_16, is_twenty_one, top_score
from holecard.blackjack.rules import TableConfig
from holecard.common.io_interface import IOInterface
from holecard.events import EngineEventType, EventBus
from holecard.state import (
    Broke,
    Continuing,
    Exited,
    GameStage,
    GameState,
    Outcome,
    SessionResult,
    StateTransitionEngine,
    Target,
    determine_outcome,
    is_broke,
    move_choices,
    new_game,
)

logger = logging.getLogger(__name__)

FAREWELL = "Goodbye!"
OUT_OF_CHIPS = "Sorry, you're out of chips!"


class BlackjackEngine:
    """
    Engine for a single-player blackjack session.

    The engine is synchronous. It blocks on the IO interface while waiting
    for a bet or a move and, when `pacing` is set, sleeps between the
    dealer's draws.
    """

    def __init__(
        self,
        io_interface: IOInterface,
        state: GameState,
        pacing: float = 0.0,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the blackjack engine.

        Args:
            io_interface: Interface used for prompts and display
            state: Opening game state, usually from `new_game`
            pacing: Seconds to pause between dealer draws
            rng: Optional random generator for reshuffles
            sleep: Function used for the pause
        """
        self.io_interface = io_interface
        self.state = state
        self.pacing = pacing
        self.rng = rng
        self.sleep = sleep
        self.stage = GameStage.BETTING
        self.round_number = 0
        self.event_bus = EventBus.get_instance()

    @classmethod
    def from_config(cls, config: TableConfig, io_interface: IOInterface) -> "BlackjackEngine":
        """Build an engine with a freshly shuffled shoe for `config`."""
        config.validate()
        rng = random.Random(config.seed) if config.seed is not None else None
        state = new_game(config.chips, config.bet_limit, config.decks, rng=rng)
        engine = cls(io_interface, state, pacing=config.pacing, rng=rng)
        engine.event_bus.emit(
            EngineEventType.GAME_CREATED,
            {"config": config.to_dict(), "deck_remaining": len(state.deck)},
        )
        return engine

    def _enter(self, stage: GameStage, state: GameState) -> None:
        logger.debug(
            "Round %d: entering %s with %s", self.round_number, stage.name, state.to_dict()
        )
        self.stage = stage

    def _emit_dealt(self, state: GameState, target: Target, count: int) -> None:
        for card in state.hand(target)[-count:]:
            self.event_bus.emit(
                EngineEventType.CARD_DEALT,
                {
                    "round": self.round_number,
                    "target": target.value,
                    "card": str(card) if card.showing else None,
                    "is_hole_card": not card.showing,
                    "deck_remaining": len(state.deck),
                },
            )

    def _hit(self, state: GameState, target: Target) -> GameState:
        state = StateTransitionEngine.play_hit(state, target)
        self._emit_dealt(state, target, 1)
        return state

    def bet_phase(self, state: GameState) -> GameState:
        """
        Take the player's bet and deal the opening hands.
        """
        self.io_interface.render(state)
        amount = self.io_interface.prompt_bet(state.chips, state.bet_limit)
        state = StateTransitionEngine.make_bet(state, amount)
        logger.info("Bet %d, %d chips left", amount, state.chips)
        self.event_bus.emit(
            EngineEventType.PLAYER_BET,
            {"round": self.round_number, "amount": amount, "chips": state.chips},
        )

        state = StateTransitionEngine.initial_deal(state)
        self._emit_dealt(state, Target.PLAYER, 2)
        self._emit_dealt(state, Target.DEALER, 2)
        return state

    def player_phase(self, state: GameState) -> Tuple[GameState, Optional[Action]]:
        """
        Play the player's decisions.

        Returns:
            The state after the player's turn and the move that ended it, or
            None when the player stood automatically on a natural 21
        """
        if is_twenty_one(state.player):
            logger.debug("Natural 21, player stands")
            return state, None

        while True:
            self.io_interface.render(state)
            action = self.io_interface.prompt_move(move_choices(state))
            self.event_bus.emit(
                EngineEventType.PLAYER_ACTION,
                {"round": self.round_number, "action": action.value, "turns": state.turns},
            )
            logger.debug("Player chose %s", action.value)

            if action in (Action.EXIT, Action.SURRENDER, Action.STAY):
                return state, action

            if action is Action.DOUBLE_DOWN:
                state = StateTransitionEngine.scale_bet(state, 2)
                logger.info("Doubled down, bet is now %d", state.current_bet)
                state = self._hit(state, Target.PLAYER)
                return state, action

            if action is Action.HIT:
                state = self._hit(state, Target.PLAYER)
                if is_busted(state.player) or is_twenty_one(state.player):
                    return state, action

    def dealer_phase(self, state: GameState) -> GameState:
        """
        Reveal the hole card and draw until the dealer stands on 17 or more.

        The dealer does not draw against a busted player.
        """
        state = StateTransitionEngine.show_hand(state, Target.DEALER)
        self.event_bus.emit(
            EngineEventType.CARD_REVEALED,
            {"round": self.round_number, "dealer": [str(card) for card in state.dealer]},
        )

        while True:
            self.io_interface.render(state)
            if self.pacing > 0:
                self.sleep(self.pacing)
            if is_over_16(state.dealer) or is_busted(state.player):
                break
            self.event_bus.emit(
                EngineEventType.DEALER_ACTION,
                {"round": self.round_number, "action": "hit", "score": top_score(state.dealer)},
            )
            state = self._hit(state, Target.DEALER)

        if is_busted(state.dealer):
            self.event_bus.emit(
                EngineEventType.HAND_BUSTED,
                {"round": self.round_number, "target": Target.DEALER.value},
            )
        return state

    def resolution_phase(
        self, state: GameState, surrendered: bool = False
    ) -> Tuple[GameState, Outcome]:
        """
        Settle the bet, report the outcome and clear the table.
        """
        outcome = determine_outcome(state, surrendered)
        state = StateTransitionEngine.show_hand(state, Target.DEALER)
        bet, chips = state.current_bet, state.chips
        state = StateTransitionEngine.resolve_bet(state, outcome)
        payout = state.chips - chips
        logger.info("Round %d: %s on a bet of %d", self.round_number, outcome.value, bet)

        self.event_bus.emit(
            EngineEventType.HAND_RESULT,
            {
                "round": self.round_number,
                "outcome": outcome.value,
                "player_score": top_score(state.player),
                "dealer_score": top_score(state.dealer),
            },
        )
        self.event_bus.emit(
            EngineEventType.MONEY_PAYOUT,
            {"round": self.round_number, "bet": bet, "payout": payout, "chips": state.chips},
        )

        self.io_interface.render(state)
        self.io_interface.announce_outcome(outcome)

        deck_before = len(state.deck)
        state = StateTransitionEngine.dump_hands(state, rng=self.rng)
        if len(state.deck) > deck_before:
            logger.info("Shuffled the discard back in, %d cards in the deck", len(state.deck))
            self.event_bus.emit(
                EngineEventType.SHUFFLE,
                {"round": self.round_number, "deck_remaining": len(state.deck)},
            )

        self.io_interface.prompt_continue()
        return state, outcome

    def play_round(self) -> SessionResult:
        """
        Play one round from the bet to the payout.

        Returns:
            Exited if the player left mid-round, Broke if the player has no
            chips left, otherwise Continuing with the state for the next round
        """
        self.round_number += 1
        start = self.state
        self.event_bus.emit(
            EngineEventType.ROUND_STARTED,
            {"round": self.round_number, "chips": start.chips},
        )

        self._enter(GameStage.BETTING, start)
        state = self.bet_phase(start)

        self._enter(GameStage.PLAYER_TURN, state)
        state, action = self.player_phase(state)
        if action is Action.EXIT:
            self.state = state
            return Exited(state)

        surrendered = action is Action.SURRENDER
        if not surrendered:
            self._enter(GameStage.DEALER_TURN, state)
            state = self.dealer_phase(state)

        self._enter(GameStage.RESOLUTION, state)
        state, outcome = self.resolution_phase(state, surrendered)
        self.state = state

        self.event_bus.emit(
            EngineEventType.ROUND_ENDED,
            {
                "round": self.round_number,
                "outcome": outcome.value,
                "chips": state.chips,
                "net": state.chips - start.chips,
            },
        )

        if is_broke(state):
            return Broke(state)
        return Continuing(state)

    def run(self, max_rounds: Optional[int] = None) -> SessionResult:
        """
        Play rounds until the player exits or runs out of chips.

        Args:
            max_rounds: Optional cap on the number of rounds, for simulation

        Returns:
            The result of the last round played
        """
        result: SessionResult = Continuing(self.state)
        rounds = 0
        while max_rounds is None or rounds < max_rounds:
            result = self.play_round()
            rounds += 1
            if isinstance(result, Exited):
                self.io_interface.output(FAREWELL)
                break
            if isinstance(result, Broke):
                self.io_interface.output(OUT_OF_CHIPS)
                break

        logger.info("Session ended after %d rounds with %d chips", rounds, self.state.chips)
        self.event_bus.emit(
            EngineEventType.GAME_ENDED,
            {
                "rounds": rounds,
                "chips": self.state.chips,
                "result": type(result).__name__,
            },
        )
        return result
