"""
Table configuration for a blackjack session.

`TableConfig` collects the startup parameters of a session: the starting
bankroll, the bet ceiling, the number of decks in the shoe, plus console
presentation options. The values are checked once with `validate()` before
the first game state is built; a bad value is a fatal startup error, not a
game event.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from holecard.blackjack.constants import MAX_DECKS, MIN_DECKS


class ConfigurationError(ValueError):
    """Raised when the table is configured with values the game cannot use."""

    pass


def check_table_limits(chips: int, bet_limit: int, decks: int) -> None:
    """
    Validate the values a game state is created from.

    Raises:
        ConfigurationError: If a value is out of range
    """
    if not MIN_DECKS <= decks <= MAX_DECKS:
        raise ConfigurationError(
            f"Number of decks must be between {MIN_DECKS} and {MAX_DECKS}, got {decks}"
        )
    if chips <= 0:
        raise ConfigurationError(f"Starting chips must be positive, got {chips}")
    if bet_limit <= 0:
        raise ConfigurationError(f"Bet limit must be positive, got {bet_limit}")


@dataclass(frozen=True)
class TableConfig:
    """
    Startup parameters for a session.

    Attributes:
        chips: Starting bankroll
        bet_limit: Ceiling on any single bet
        decks: Number of 52-card decks in the shoe
        pacing: Seconds to pause between dealer draws
        clear_screen: Whether the console clears the terminal before drawing
        seed: Optional seed for a replayable shuffle
    """

    chips: int = 500
    bet_limit: int = 100
    decks: int = 6
    pacing: float = 0.6
    clear_screen: bool = True
    seed: Optional[int] = None

    def validate(self) -> "TableConfig":
        check_table_limits(self.chips, self.bet_limit, self.decks)
        if self.pacing < 0:
            raise ConfigurationError(f"Pacing must not be negative, got {self.pacing}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary for logging and events."""
        return asdict(self)
