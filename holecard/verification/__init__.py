"""
Statistical checks for the holecard shuffle.
"""

from holecard.verification.statistics import UniformityReport, shuffle_uniformity

__all__ = ["UniformityReport", "shuffle_uniformity"]
