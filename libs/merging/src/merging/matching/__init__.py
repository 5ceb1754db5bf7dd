"""Matching probability between incoming records and golden records."""

from .base import MatchingProbabilityCalculator, MatchingProbabilityResult
from .calculator import DefaultMatchingProbabilityCalculator
from .weights import MatchAttribute, applicable_attributes, normalized_weights

__all__ = [
    "DefaultMatchingProbabilityCalculator",
    "MatchAttribute",
    "MatchingProbabilityCalculator",
    "MatchingProbabilityResult",
    "applicable_attributes",
    "normalized_weights",
]
