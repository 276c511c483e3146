"""
Deck construction and shuffling.

Decks are plain tuples of `Card` values. Both functions return new tuples and
never modify their inputs, so they can be used from pure state transitions.

>>> deck = build_deck(1)
>>> len(deck)
52
>>> any(card.showing for card in deck)
False
"""

import random
from typing import Iterable, Optional, Tuple

from holecard.common.card import Card, Rank, Suit

# One face-down copy of every suit/rank combination
_default_deck = tuple(Card(suit, rank) for suit in Suit for rank in Rank)


def shuffle_together(
    *decks: Iterable[Card], rng: Optional[random.Random] = None
) -> Tuple[Card, ...]:
    """
    Shuffle any number of card sequences together.

    :param decks: Card sequences to combine.
    :param rng: Random generator to draw from. Defaults to the module-level
                generator; pass a seeded `random.Random` for replayable runs.
    :return: A uniformly random permutation of all supplied cards.
    """
    cards = [card for deck in decks for card in deck]
    # random.shuffle is Fisher-Yates, unbiased over the whole multiset
    (rng or random).shuffle(cards)
    return tuple(cards)


def build_deck(n: int, rng: Optional[random.Random] = None) -> Tuple[Card, ...]:
    """
    Return `n` standard decks shuffled together, every card face down.

    :param n: Number of 52-card decks (at least 1).
    :param rng: Optional random generator, see `shuffle_together`.
    """
    if n < 1:
        raise ValueError("Number of decks must be at least 1")
    return shuffle_together(*([_default_deck] * n), rng=rng)


def standard_deck() -> Tuple[Card, ...]:
    """Return one unshuffled 52-card deck."""
    return _default_deck
