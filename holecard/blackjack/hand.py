"""
Hand scoring for blackjack.

A hand is any sequence of `Card` values in deal order. Scoring ignores order
and the `showing` flag; callers that must not leak hidden cards filter with
`visible_cards` first.

An ace counts 1, and at most one ace per hand may instead count 11, so a hand
has one or two candidate scores:

>>> from holecard.common.card import Card, Rank, Suit
>>> score_hand([Card(Suit.SPADES, Rank.ACE), Card(Suit.CLUBS, Rank.KING)])
[11, 21]
>>> score_hand([])
[0]
"""

from typing import List, Optional, Sequence, Tuple

from holecard.blackjack.constants import ACE_BONUS, BLACKJACK, DEALER_STANDS_AT
from holecard.blackjack.constants import get_blackjack_value
from holecard.common.card import Card, Rank


def score_hand(hand: Sequence[Card]) -> List[int]:
    """
    Return the candidate scores of a hand, lowest first.

    A hand holding any ace gets a second candidate with exactly one ace
    counted as 11.
    """
    score = 0
    has_ace = False
    for card in hand:
        score += get_blackjack_value(card.rank)
        if card.rank == Rank.ACE:
            has_ace = True
    if has_ace:
        return [score, score + ACE_BONUS]
    return [score]


def top_score(hand: Sequence[Card]) -> Optional[int]:
    """The highest candidate score not above 21, or None for a bust."""
    live = [score for score in score_hand(hand) if score <= BLACKJACK]
    return live[-1] if live else None


def is_busted(hand: Sequence[Card]) -> bool:
    return all(score > BLACKJACK for score in score_hand(hand))


def is_over_16(hand: Sequence[Card]) -> bool:
    """True when every candidate is at least 17, the dealer's stand condition."""
    return all(score >= DEALER_STANDS_AT for score in score_hand(hand))


def is_twenty_one(hand: Sequence[Card]) -> bool:
    return BLACKJACK in score_hand(hand)


def pushes(hand1: Sequence[Card], hand2: Sequence[Card]) -> bool:
    return top_score(hand1) == top_score(hand2)


def beats(hand1: Sequence[Card], hand2: Sequence[Card]) -> bool:
    """
    True when `hand1` is live and scores higher than `hand2`.

    A busted `hand2` has no top score and loses to any live hand.
    """
    if is_busted(hand1):
        return False
    other = top_score(hand2)
    return other is None or top_score(hand1) > other


def visible_cards(hand: Sequence[Card]) -> Tuple[Card, ...]:
    """The face-up cards of a hand, in deal order."""
    return tuple(card for card in hand if card.showing)
