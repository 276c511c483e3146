"""
Game engines for holecard.
"""

from holecard.engine.blackjack import BlackjackEngine

__all__ = ["BlackjackEngine"]
