# matchscore/traits.py
"""
Trait-vector and play-schedule similarity used as the base of the match score.

Trait similarity blends two ideas: on the "similarity" axes players want to be
alike (cosine + normalized euclidean), on the "complementary" axes a moderate
gap is best (two strong leaders clash, two pure followers stall).
"""

import math
from typing import List, Sequence

import numpy as np

from matchscore.config import settings
from matchscore.logging_config import get_logger
from matchscore.models import PlaySchedule, TraitVector

logger = get_logger(__name__)

TRAIT_KEYS = ('cooperation', 'exploration', 'strategy', 'leadership', 'social')
SIMILARITY_TRAITS = ('cooperation', 'social', 'exploration')
COMPLEMENTARY_TRAITS = ('leadership', 'strategy')

SIMILARITY_COSINE_WEIGHT = 0.7
SIMILARITY_EUCLIDEAN_WEIGHT = 0.3
SIMILARITY_BLEND = 0.85
COMPLEMENT_BLEND = 0.15

OPTIMAL_COMPLEMENT_DIFF = 35.0
COMPLEMENT_STD_DEV = 20.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def _vector(traits: TraitVector, keys: Sequence[str]) -> np.ndarray:
    return np.array([getattr(traits, k) for k in keys], dtype=float)


def complementarity_score(viewer_value: float, target_value: float) -> float:
    """Gaussian score peaking when the two values differ by the optimal gap."""
    diff = abs(viewer_value - target_value)
    return math.exp(-((diff - OPTIMAL_COMPLEMENT_DIFF) ** 2) / (2 * COMPLEMENT_STD_DEV ** 2))


def calculate_traits_similarity(viewer: TraitVector, target: TraitVector) -> int:
    """
    Compute trait similarity between two players as an integer in [0, 100].

    Identical vectors short-circuit to 100.
    """
    if all(getattr(viewer, k) == getattr(target, k) for k in TRAIT_KEYS):
        return 100

    v = _vector(viewer, SIMILARITY_TRAITS)
    t = _vector(target, SIMILARITY_TRAITS)

    magnitude = math.sqrt(float(np.dot(v, v)) * float(np.dot(t, t))) or 1.0
    cosine_sim = float(np.dot(v, t)) / magnitude

    max_distance = math.sqrt(len(SIMILARITY_TRAITS) * 100 ** 2)
    euclidean_sim = 1 - float(np.linalg.norm(v - t)) / max_distance

    similarity = cosine_sim * SIMILARITY_COSINE_WEIGHT + euclidean_sim * SIMILARITY_EUCLIDEAN_WEIGHT

    complement = sum(
        complementarity_score(getattr(viewer, k), getattr(target, k))
        for k in COMPLEMENTARY_TRAITS
    ) / len(COMPLEMENTARY_TRAITS)

    result = round_half_up((similarity * SIMILARITY_BLEND + complement * COMPLEMENT_BLEND) * 100)
    result = max(0, min(100, result))

    if settings.scoring.debug_perfect_scores and result >= 85:
        logger.debug("High trait similarity", extra={
            'similarity_score': round_half_up(similarity * 100),
            'complement_score': round_half_up(complement * 100),
            'cosine_sim': round_half_up(cosine_sim * 100),
            'euclidean_sim': round_half_up(euclidean_sim * 100),
            'leadership_diff': abs(viewer.leadership - target.leadership),
            'strategy_diff': abs(viewer.strategy - target.strategy),
            'traits_similarity': result,
        })

    return result


def find_top_trait(viewer: TraitVector, target: TraitVector) -> str:
    """Return the trait on which the two players are closest (first wins on ties)."""
    top_trait = TRAIT_KEYS[0]
    min_diff = math.inf
    for key in TRAIT_KEYS:
        diff = abs(getattr(viewer, key) - getattr(target, key))
        if diff < min_diff:
            min_diff = diff
            top_trait = key
    return top_trait


def common_time_slots(
    viewer_schedule: Sequence[PlaySchedule],
    target_schedule: Sequence[PlaySchedule],
) -> List[PlaySchedule]:
    """Viewer slots that also appear in the target's schedule, in viewer order."""
    target_slots = {(s.day_type, s.time_slot) for s in target_schedule}
    return [s for s in viewer_schedule if (s.day_type, s.time_slot) in target_slots]


def calculate_schedule_similarity(
    viewer_schedule: Sequence[PlaySchedule],
    target_schedule: Sequence[PlaySchedule],
) -> int:
    """Share of overlapping play slots, 0-100, relative to the longer schedule."""
    if not viewer_schedule or not target_schedule:
        return 0
    common = common_time_slots(viewer_schedule, target_schedule)
    total = max(len(viewer_schedule), len(target_schedule))
    return round_half_up(len(common) / total * 100)
