"""
holecard: a single-player blackjack game built on an immutable game-state engine.
"""

__version__ = "0.1.0"
