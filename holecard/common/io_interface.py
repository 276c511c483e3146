"""
This module contains the IOInterface abstract base class and its implementations.

The engine never reads input or prints on its own. It asks an IOInterface for
bets and moves, and hands it game states and outcomes to show. Validating what
the user types is the interface's job: `prompt_bet` and `prompt_move` only
return values the engine can use.
"""

import os
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from holecard.blackjack.action import Action
from holecard.blackjack.hand import top_score
from holecard.blackjack.notation import outcome_message, table_lines
from holecard.blackjack.constants import DEALER_STANDS_AT
from holecard.state.models import GameState, Outcome


class IOInterface(ABC):
    """
    Abstract base class for an IO interface.

    This class defines the calls the engine makes into the presentation and
    input layer.
    """

    @abstractmethod
    def output(self, message: str) -> None:
        """Output a message to the interface."""
        pass

    @abstractmethod
    def prompt_move(self, choices: Sequence[Action]) -> Action:
        """Ask for a move until one of `choices` is given."""
        pass

    @abstractmethod
    def prompt_bet(self, chips: int, bet_limit: int) -> int:
        """Ask for a bet until one with 0 < bet <= min(chips, bet_limit) is given."""
        pass

    @abstractmethod
    def prompt_continue(self) -> None:
        """Block until the user acknowledges the end of a round."""
        pass

    def render(self, state: GameState) -> None:
        """Show both hands, hiding face-down cards, and the chip/bet line."""
        for line in table_lines(state):
            self.output(line)

    def announce_outcome(self, outcome: Outcome) -> None:
        """Show the message for a round's outcome."""
        self.output(outcome_message(outcome))


class DummyIOInterface(IOInterface):
    """
    A dummy IO interface for simulation purposes. Does not perform any actual IO.

    It plays by itself: every round it bets `unit` chips (or whatever is left
    under the limits), hits while its hand is below 17 and stays otherwise.
    """

    def __init__(self, unit: int = 10):
        self.unit = unit
        self._last_state: Optional[GameState] = None

    def output(self, message: str) -> None:
        """Simulates output operation."""
        pass

    def render(self, state: GameState) -> None:
        self._last_state = state

    def prompt_move(self, choices: Sequence[Action]) -> Action:
        if not choices:
            raise ValueError("No valid actions available.")
        score = top_score(self._last_state.player) if self._last_state else None
        if score is not None and score < DEALER_STANDS_AT and Action.HIT in choices:
            return Action.HIT
        return Action.STAY if Action.STAY in choices else choices[0]

    def prompt_bet(self, chips: int, bet_limit: int) -> int:
        return min(chips, bet_limit, self.unit)

    def prompt_continue(self) -> None:
        pass


class TestIOInterface(IOInterface):
    """
    A test IO interface for testing purposes. Collects output and replays
    scripted bets and moves.
    """

    __test__ = False

    def __init__(
        self,
        bets: Optional[List[int]] = None,
        moves: Optional[List[Action]] = None,
    ):
        self.bets = list(bets or [])
        self.moves = list(moves or [])
        self.sent_messages: List[str] = []
        self.rendered_states: List[GameState] = []
        self.offered_choices: List[Sequence[Action]] = []
        self.outcomes: List[Outcome] = []
        self.continues = 0

    def add_bet(self, amount: int) -> None:
        """Add a bet to the queue."""
        self.bets.append(amount)

    def add_move(self, action: Action) -> None:
        """Add a player move to the queue."""
        self.moves.append(action)

    def output(self, message: str) -> None:
        self.sent_messages.append(message)

    def render(self, state: GameState) -> None:
        self.rendered_states.append(state)
        super().render(state)

    def announce_outcome(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)
        super().announce_outcome(outcome)

    def prompt_move(self, choices: Sequence[Action]) -> Action:
        self.offered_choices.append(tuple(choices))
        if not self.moves:
            raise ValueError("No more moves left in TestIOInterface queue.")
        move = self.moves.pop(0)
        if move not in choices:
            raise ValueError(f"Scripted move {move} is not among {list(choices)}")
        return move

    def prompt_bet(self, chips: int, bet_limit: int) -> int:
        if not self.bets:
            raise ValueError("No more bets left in TestIOInterface queue.")
        return self.bets.pop(0)

    def prompt_continue(self) -> None:
        self.continues += 1


class ConsoleIOInterface(IOInterface):
    """
    A console IO interface for interactive gameplay.

    Invalid input is answered with a short explanation and the question is
    asked again, as often as it takes.
    """

    def __init__(self, clear_screen: bool = True):
        self.clear_screen = clear_screen

    def output(self, message: str) -> None:
        print(message)

    def input(self, prompt: str) -> str:
        print(prompt)
        return input()

    def clear(self) -> None:
        os.system("cls" if os.name == "nt" else "clear")

    def render(self, state: GameState) -> None:
        if self.clear_screen:
            self.clear()
        super().render(state)
        self.output("")

    def prompt_move(self, choices: Sequence[Action]) -> Action:
        names = [str(choice) for choice in choices]
        prompt = "What is your move? Your choices are {}, and {}.".format(
            ", ".join(names[:-1]), names[-1]
        )
        while True:
            answer = self.input(prompt).strip().lower()
            for choice in choices:
                if answer == choice.value:
                    return choice
            self.output("Hmm, sorry, I didn't get that. Let's try again.")

    def prompt_bet(self, chips: int, bet_limit: int) -> int:
        limit = min(chips, bet_limit)
        prompt = f"How many chips (up to {limit}) would you like to bet?"
        while True:
            try:
                bet = int(self.input(prompt).strip())
            except ValueError:
                self.output("Sorry, that input seems to be invalid.")
                continue
            if bet <= 0:
                self.output("Only positive bets, please.")
            elif bet > bet_limit:
                self.output(f"{bet_limit} or fewer, please.")
            elif bet > chips:
                self.output("Not enough funding for that!")
            else:
                return bet

    def prompt_continue(self) -> None:
        self.input("Please hit enter to proceed.")
