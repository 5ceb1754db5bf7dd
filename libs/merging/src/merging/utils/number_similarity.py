"""Similarity of two non-negative numbers such as episode counts or years."""

__all__ = ["weighted_probability_of_two_numbers_being_equal"]


def weighted_probability_of_two_numbers_being_equal(
    number: int, other: int, factor: int
) -> float:
    """Probability that two numbers describe the same value.

    The penalty grows exponentially with the difference of both numbers:
    ``1 - factor ** |number - other| / 100``, floored at 0. A larger factor
    makes the similarity drop faster.

    Args:
        number: First number, must not be negative
        other: Second number, must not be negative
        factor: Base of the penalty, must be greater than 1

    Returns:
        1.0 for equal numbers, otherwise a value in [0, 1)

    Raises:
        ValueError: If a number is negative or the factor is not greater than 1

    Example:
        >>> weighted_probability_of_two_numbers_being_equal(26, 27, 4)
        0.96
    """
    if factor <= 1:
        raise ValueError(f"Factor must be greater than 1, got {factor}")
    if number < 0 or other < 0:
        raise ValueError(f"Numbers must not be negative, got {number} and {other}")

    if number == other:
        return 1.0

    penalty = factor ** abs(number - other)
    if penalty >= 100:
        return 0.0

    return 1.0 - penalty / 100
