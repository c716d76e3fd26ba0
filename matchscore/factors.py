# matchscore/factors.py
"""
Score adjustments computed from a MatchContext.

Every function here is pure: it reads the context (and a score where one is
taken) and returns a number. Missing optional fields mean "not linked" and
always produce the neutral value, never an error.

Online status is two-way here: ``is_online is True`` counts as online,
``False`` and absent both count as offline. The three-way distinction only
surfaces in ``MatchResultDTO.availability_hint``.
"""

from typing import Mapping, Set, Tuple

from matchscore.animals import ANIMAL_COMPATIBILITIES, AnimalCompatibility, AnimalType, get_compatibility_level
from matchscore.models import MatchContext
from matchscore.traits import (
    calculate_schedule_similarity,
    calculate_traits_similarity,
    round_half_up,
)

MAX_SCORE = 100
COLD_START_SCORE = 50

ONLINE_BONUS_MULTIPLIER = 1.1

STEAM_POINTS_PER_GAME = 2
STEAM_FACTOR_PER_GAME = 0.02
STEAM_FACTOR_GAME_CAP = 5

ONLINE_AVAILABILITY = 1.0
OFFLINE_AVAILABILITY = 0.85

SAME_ANIMAL_FACTOR = 1.025
ANIMAL_LEVEL_FACTORS = {
    'best': 1.05,
    'good': 1.035,
    'challenging': 0.975,
}

SCHEDULE_BONUS_THRESHOLD = 60
SCHEDULE_MAX_BONUS = 0.025


def is_target_online(context: MatchContext) -> bool:
    activity = context.target.activity
    return activity is not None and activity.is_online is True


def _steam_games(user) -> Tuple[int, ...]:
    if user.steam is None or user.steam.steam_games is None:
        return ()
    return user.steam.steam_games


def common_steam_games(context: MatchContext) -> Set[int]:
    """
    Distinct catalog ids owned by both players.

    Empty when either side has no linked library.
    """
    viewer_games = _steam_games(context.viewer)
    target_games = _steam_games(context.target)
    if not viewer_games or not target_games:
        return set()
    return set(viewer_games) & set(target_games)


def apply_online_bonus(base_score: float, context: MatchContext) -> float:
    """
    Boost the score by 10% when the target is online right now.

    The boosted score is rounded and capped at 100. Offline or unknown
    targets get the score back unchanged.
    """
    if is_target_online(context):
        return min(MAX_SCORE, round_half_up(base_score * ONLINE_BONUS_MULTIPLIER))
    return base_score


def steam_bonus_points(context: MatchContext) -> int:
    return len(common_steam_games(context)) * STEAM_POINTS_PER_GAME


def apply_steam_bonus(base_score: float, context: MatchContext) -> float:
    """
    Add 2 points per shared Steam game, capped at 100.

    Deprecated alternate to calculate_steam_compatibility_factor: growth is
    unbounded in the number of shared games. Kept for callers that select
    the additive strategy explicitly.
    """
    points = steam_bonus_points(context)
    if not points:
        return base_score
    return min(MAX_SCORE, base_score + points)


def calculate_steam_compatibility_factor(context: MatchContext) -> float:
    """
    Multiplicative factor for shared Steam games: +2% per game, at most 5 games.

    Returns one of 1.0, 1.02, 1.04, 1.06, 1.08, 1.10.
    """
    shared = min(len(common_steam_games(context)), STEAM_FACTOR_GAME_CAP)
    return 1.0 + shared * STEAM_FACTOR_PER_GAME


def calculate_availability_factor(context: MatchContext) -> float:
    """
    Ranking weight for how actionable the match is right now.

    Not part of the final score; callers ordering result lists apply it.
    """
    return ONLINE_AVAILABILITY if is_target_online(context) else OFFLINE_AVAILABILITY


def calculate_base_similarity(context: MatchContext) -> int:
    viewer_traits = context.viewer.traits.traits if context.viewer.traits else None
    target_traits = context.target.traits.traits if context.target.traits else None
    if viewer_traits is None or target_traits is None:
        return COLD_START_SCORE
    return calculate_traits_similarity(viewer_traits, target_traits)


def calculate_animal_compatibility_factor(
    context: MatchContext,
    table: Mapping[AnimalType, AnimalCompatibility] = ANIMAL_COMPATIBILITIES,
) -> float:
    viewer_animal = context.viewer.traits.animal_type if context.viewer.traits else None
    target_animal = context.target.traits.animal_type if context.target.traits else None
    if viewer_animal is None or target_animal is None:
        return 1.0
    if viewer_animal == target_animal:
        return SAME_ANIMAL_FACTOR
    level = get_compatibility_level(viewer_animal, target_animal, table)
    return ANIMAL_LEVEL_FACTORS.get(level, 1.0)


def calculate_schedule_compatibility_factor(context: MatchContext) -> float:
    """Up to +2.5% for players whose play slots overlap at least 60%."""
    viewer_schedule = context.viewer.activity.schedule if context.viewer.activity else None
    target_schedule = context.target.activity.schedule if context.target.activity else None
    if not viewer_schedule or not target_schedule:
        return 1.0
    schedule_score = calculate_schedule_similarity(viewer_schedule, target_schedule)
    if schedule_score < SCHEDULE_BONUS_THRESHOLD:
        return 1.0
    ramp = (schedule_score - SCHEDULE_BONUS_THRESHOLD) / (MAX_SCORE - SCHEDULE_BONUS_THRESHOLD)
    return 1.0 + ramp * SCHEDULE_MAX_BONUS
