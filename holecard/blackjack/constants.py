"""Blackjack-specific constants and value mappings."""

from holecard.common.card import Rank

# Primary card values (Ace counts 1, see ACE_BONUS)
RANK_VALUES = {
    Rank.ACE: 1,
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
}

# Extra value when a single ace is counted as 11
ACE_BONUS = 10

BLACKJACK = 21
DEALER_STANDS_AT = 17

CARDS_PER_DECK = 52
CARD_LIMIT = 52

MIN_DECKS = 4
MAX_DECKS = 8


def get_blackjack_value(rank: Rank) -> int:
    """Get the primary blackjack value for a given rank."""
    return RANK_VALUES[rank]
