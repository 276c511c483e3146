"""
Plain-text rendering of cards, hands and outcomes.

These helpers build the lines the console prints. A face-down card is always
rendered as a generic hidden card and is left out of the displayed score, so
the table never reveals the dealer's hole card early.
"""

from typing import List, Sequence

from holecard.blackjack.constants import BLACKJACK
from holecard.blackjack.hand import score_hand, visible_cards
from holecard.common.card import Card
from holecard.state.models import GameState, Outcome

HIDDEN_CARD = "Hidden card."

OUTCOME_MESSAGES = {
    Outcome.SURRENDER: "Player surrendered.",
    Outcome.BLACKJACK: "Blackjack!",
    Outcome.PUSH: "Push!",
    Outcome.WIN: "Player wins.",
    Outcome.LOSE: "Dealer wins.",
}


def describe_card(card: Card) -> str:
    """
    >>> from holecard.common.card import Rank, Suit
    >>> describe_card(Card(Suit.CLUBS, Rank.QUEEN, showing=True))
    'queen of clubs'
    >>> describe_card(Card(Suit.CLUBS, Rank.QUEEN))
    'Hidden card.'
    """
    return str(card) if card.showing else HIDDEN_CARD


def score_str(hand: Sequence[Card]) -> str:
    """
    The live candidate scores of a hand joined by a slash, e.g. "7/17".

    Returns an empty string for a bust.
    """
    return "/".join(str(score) for score in score_hand(hand) if score <= BLACKJACK)


def hand_lines(hand: Sequence[Card], title: str) -> List[str]:
    """Header line plus one line per card, scoring only the face-up cards."""
    points = score_str(visible_cards(hand))
    if points:
        header = f"{title} hand, showing {points} points:"
    else:
        header = f"{title} hand (a bust!)"
    return [header] + [describe_card(card) for card in hand]


def bet_line(state: GameState) -> str:
    return (
        f"You have {state.chips} chips left. "
        f"Your current bet is {state.current_bet}."
    )


def table_lines(state: GameState) -> List[str]:
    """Every line of the table view: both hands (once dealt) and the bet line."""
    lines = []
    if state.dealer:
        for hand, title in ((state.dealer, "Dealer's"), (state.player, "Your")):
            lines.extend(hand_lines(hand, title))
            lines.append("")
    lines.append(bet_line(state))
    return lines


def outcome_message(outcome: Outcome) -> str:
    return OUTCOME_MESSAGES[outcome]
