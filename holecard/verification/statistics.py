"""
Statistical validation of the shuffle.

An unbiased shuffle places every card in every position equally often. This
module shuffles a small deck of distinct cards many times, counts where each
card lands and runs a chi-square goodness-of-fit test per position against
the uniform distribution.
"""

import random
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np
import scipy.stats as stats

from holecard.common.deck import shuffle_together, standard_deck


@dataclass
class UniformityReport:
    """
    Result of a shuffle uniformity check.

    Attributes:
        trials: Number of shuffles performed
        counts: Matrix where counts[c, p] is how often card c landed in position p
        p_values: Chi-square p-value for each position
    """

    trials: int
    counts: np.ndarray
    p_values: np.ndarray

    @property
    def min_p_value(self) -> float:
        return float(self.p_values.min())

    def is_uniform(self, alpha: float = 0.001) -> bool:
        """Whether no position rejects uniformity at significance `alpha`."""
        return self.min_p_value >= alpha

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary."""
        return {
            "trials": self.trials,
            "counts": self.counts.tolist(),
            "p_values": self.p_values.tolist(),
            "min_p_value": self.min_p_value,
        }


def shuffle_uniformity(
    trials: int, size: int = 5, rng: Optional[random.Random] = None
) -> UniformityReport:
    """
    Check that `shuffle_together` spreads cards uniformly over positions.

    Args:
        trials: Number of shuffles to perform
        size: Number of distinct cards in the test deck (2 to 52)
        rng: Optional random generator passed to the shuffle

    Returns:
        A UniformityReport with the position counts and p-values
    """
    if trials < 1:
        raise ValueError("At least one trial is required")
    if not 2 <= size <= 52:
        raise ValueError("Test deck size must be between 2 and 52")

    cards = standard_deck()[:size]
    index = {card: i for i, card in enumerate(cards)}
    counts = np.zeros((size, size), dtype=np.int64)

    for _ in range(trials):
        for position, card in enumerate(shuffle_together(cards, rng=rng)):
            counts[index[card], position] += 1

    # Each column is one position; expected count is trials / size per card
    p_values = np.array(
        [stats.chisquare(counts[:, position]).pvalue for position in range(size)]
    )
    return UniformityReport(trials=trials, counts=counts, p_values=p_values)
