"""Attributes taking part in a comparison and their normalized weights."""

from enum import Enum

from common.models.anime import Anime, AnimeStatus

__all__ = ["MatchAttribute", "applicable_attributes", "normalized_weights"]


class MatchAttribute(str, Enum):
    """Attributes the matching probability is composed of."""

    TITLE = "title"
    TYPE = "type"
    EPISODES = "episodes"
    STATUS = "status"
    YEAR = "year"
    DURATION = "duration"


def applicable_attributes(anime: Anime, other: Anime) -> list[MatchAttribute]:
    """Determine the attributes that are informative on both sides.

    Title, type and episodes are always compared. Status, year and duration
    only take part if neither record has the unknown value.
    """
    attributes = [MatchAttribute.TITLE, MatchAttribute.TYPE, MatchAttribute.EPISODES]

    if AnimeStatus.UNKNOWN not in (anime.status, other.status):
        attributes.append(MatchAttribute.STATUS)

    if anime.is_year_known() and other.is_year_known():
        attributes.append(MatchAttribute.YEAR)

    if anime.is_duration_known() and other.is_duration_known():
        attributes.append(MatchAttribute.DURATION)

    return attributes


def normalized_weights(
    attributes: list[MatchAttribute], base_weights: dict[str, float]
) -> dict[MatchAttribute, float]:
    """Renormalize the base weights of the given attributes so they sum up to 1.

    Attributes missing from ``base_weights`` weigh 1.0. If the applicable
    attributes carry no weight at all, the title alone decides.

    Args:
        attributes: Attributes applicable to a pair of records
        base_weights: Base weight per attribute name

    Returns:
        Weight per applicable attribute

    Example:
        >>> normalized_weights([MatchAttribute.TITLE, MatchAttribute.TYPE], {})
        {<MatchAttribute.TITLE: 'title'>: 0.5, <MatchAttribute.TYPE: 'type'>: 0.5}
    """
    weights = {attribute: base_weights.get(attribute.value, 1.0) for attribute in attributes}
    total = sum(weights.values())

    if total <= 0:
        return {MatchAttribute.TITLE: 1.0}

    return {attribute: weight / total for attribute, weight in weights.items()}
