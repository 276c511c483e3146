"""
Immutable state management for the holecard engine.

This package provides immutable state classes and pure transition functions
for managing game state in a predictable and testable way.
"""

from holecard.state.models import (
    GameState,
    GameStage,
    Target,
    Outcome,
    SessionResult,
    Continuing,
    Exited,
    Broke,
    new_game,
    expected_card_count,
)

from holecard.state.transitions import (
    StateTransitionEngine,
    IllegalTransitionError,
    PreconditionError,
    determine_outcome,
    is_broke,
    move_choices,
    special_options,
)

__all__ = [
    "GameState",
    "GameStage",
    "Target",
    "Outcome",
    "SessionResult",
    "Continuing",
    "Exited",
    "Broke",
    "new_game",
    "expected_card_count",
    "StateTransitionEngine",
    "IllegalTransitionError",
    "PreconditionError",
    "determine_outcome",
    "is_broke",
    "move_choices",
    "special_options",
]
