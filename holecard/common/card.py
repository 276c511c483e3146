"""
This module defines the `Suit`, `Rank`, and `Card` types used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Hearts, Spades, Clubs, and Diamonds.

- `Rank`: An enum representing the thirteen ranks of a standard deck, Ace
through King.

- `Card`: An immutable playing card. Besides its suit and rank a card carries a
`showing` flag telling whether it lies face up. Turning a card over produces a
new card value.

This module is part of the `holecard` package.
"""

from dataclasses import dataclass, replace
from enum import Enum, unique


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    HEARTS = "hearts"
    SPADES = "spades"
    CLUBS = "clubs"
    DIAMONDS = "diamonds"

    def __str__(self) -> str:
        return self.value


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck.

    The value is the rank's display name. Scoring values live in
    `holecard.blackjack.constants`.
    """

    ACE = "ace"
    TWO = "two"
    THREE = "three"
    FOUR = "four"
    FIVE = "five"
    SIX = "six"
    SEVEN = "seven"
    EIGHT = "eight"
    NINE = "nine"
    TEN = "ten"
    JACK = "jack"
    QUEEN = "queen"
    KING = "king"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Card:
    """
    Immutable playing card.

    >>> card = Card(Suit.HEARTS, Rank.TWO)
    >>> print(card)
    two of hearts
    >>> card.showing
    False
    >>> card.with_showing(True).showing
    True
    """

    suit: Suit
    rank: Rank
    showing: bool = False

    def __post_init__(self):
        if not isinstance(self.suit, Suit):
            raise TypeError(f"Invalid suit: {self.suit}")
        if not isinstance(self.rank, Rank):
            raise TypeError(f"Invalid rank: {self.rank}")

    def with_showing(self, showing: bool) -> "Card":
        """Return a copy of this card turned face up or face down."""
        return replace(self, showing=bool(showing))

    def __str__(self) -> str:
        return f"{self.rank} of {self.suit}"
