"""Defines the Action enum for the moves a player can choose during their turn."""
from enum import Enum


class Action(Enum):
    """Enum for the possible moves a player can take in a round of blackjack."""

    HIT = "hit"
    STAY = "stay"
    SURRENDER = "surrender"
    DOUBLE_DOWN = "double-down"
    EXIT = "exit"

    def __str__(self) -> str:
        return self.value
