# matchscore/animals.py
"""
Animal personality types and the pairing table used by the compatibility factor.
"""

from enum import Enum
from typing import Dict, FrozenSet, Mapping, NamedTuple


class AnimalType(str, Enum):
    WOLF = "wolf"
    TIGER = "tiger"
    HAWK = "hawk"
    OWL = "owl"
    FOX = "fox"
    HEDGEHOG = "hedgehog"
    RAVEN = "raven"
    BEAR = "bear"
    DEER = "deer"
    KOALA = "koala"
    DOG = "dog"
    DOLPHIN = "dolphin"
    PANDA = "panda"
    RABBIT = "rabbit"
    LEOPARD = "leopard"
    CAT = "cat"


class AnimalCompatibility(NamedTuple):
    best: FrozenSet[AnimalType] = frozenset()
    good: FrozenSet[AnimalType] = frozenset()
    neutral: FrozenSet[AnimalType] = frozenset()
    challenging: FrozenSet[AnimalType] = frozenset()


# TODO: fill in pairings once the personality team publishes the compatibility matrix
ANIMAL_COMPATIBILITIES: Dict[AnimalType, AnimalCompatibility] = {}


def get_compatibility_level(
    viewer: AnimalType,
    target: AnimalType,
    table: Mapping[AnimalType, AnimalCompatibility] = ANIMAL_COMPATIBILITIES,
) -> str:
    """
    Return 'best', 'good', 'neutral', 'challenging' or 'unknown' for a pair.

    Lookup is directional: the viewer's row decides. Challenging is checked
    before neutral so a pair listed in both is treated as challenging.
    """
    compat = table.get(viewer)
    if compat is None:
        return "unknown"
    if target in compat.best:
        return "best"
    if target in compat.good:
        return "good"
    if target in compat.challenging:
        return "challenging"
    if target in compat.neutral:
        return "neutral"
    return "unknown"
