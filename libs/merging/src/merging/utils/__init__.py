"""Text and number helpers shared by the candidate index and the matching calculator."""

from .number_similarity import weighted_probability_of_two_numbers_being_equal
from .title_normalization import normalize_title

__all__ = ["normalize_title", "weighted_probability_of_two_numbers_being_equal"]
