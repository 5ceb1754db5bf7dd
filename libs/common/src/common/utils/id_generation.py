"""Identity generation utilities using ULID.

Golden records receive a random, time-sortable identifier when they are
created. Identifiers are never reused within or across merge passes.
"""

from typing import Literal

from ulid import ULID

# Common entity prefixes for easy identification
EntityType = Literal["anime", "golden_record"]

ENTITY_PREFIXES: dict[EntityType, str] = {
    "anime": "anime_",
    "golden_record": "gr_",
}


def generate_ulid(entity_type: EntityType) -> str:
    """Generate a new random, time-sortable ULID with entity prefix.

    Args:
        entity_type: The type of entity (e.g. 'golden_record')

    Returns:
        Prefixed ULID string (e.g., 'gr_01ARZ3NDEKTSV4RRFFQ69G5FAV')
    """
    prefix = ENTITY_PREFIXES.get(entity_type, f"{entity_type}_")
    return f"{prefix}{ULID()}"
