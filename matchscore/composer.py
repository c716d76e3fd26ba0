# matchscore/composer.py
"""
Score composition: base similarity -> factors -> single round/clamp.

The pipeline is an ordered tuple of steps ``(score, context) -> score``.
Nothing is rounded or clamped between steps; ``finalize_score`` runs once at
the end. Exactly one Steam step is present, chosen by ``SteamStrategy``.
"""

import time
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple, Union

from matchscore.config import settings
from matchscore.factors import (
    MAX_SCORE,
    ONLINE_BONUS_MULTIPLIER,
    calculate_animal_compatibility_factor,
    calculate_base_similarity,
    calculate_schedule_compatibility_factor,
    calculate_steam_compatibility_factor,
    is_target_online,
    steam_bonus_points,
)
from matchscore.logging_config import ScoringLoggingContext, get_logger
from matchscore.metrics import record_batch, record_match_score
from matchscore.models import (
    AvailabilityHint,
    MatchContext,
    MatchResultDTO,
    ScoredMatch,
    UserMatchInput,
)
from matchscore.traits import round_half_up

logger = get_logger(__name__)

ScoreStep = Callable[[float, MatchContext], float]


class SteamStrategy(str, Enum):
    MULTIPLICATIVE = "multiplicative"
    ADDITIVE = "additive"  # deprecated alternate, uncapped


def _animal_step(score: float, context: MatchContext) -> float:
    return score * calculate_animal_compatibility_factor(context)


def _schedule_step(score: float, context: MatchContext) -> float:
    return score * calculate_schedule_compatibility_factor(context)


def _steam_factor_step(score: float, context: MatchContext) -> float:
    return score * calculate_steam_compatibility_factor(context)


def _steam_points_step(score: float, context: MatchContext) -> float:
    return score + steam_bonus_points(context)


def _online_step(score: float, context: MatchContext) -> float:
    if is_target_online(context):
        return score * ONLINE_BONUS_MULTIPLIER
    return score


def build_pipeline(strategy: SteamStrategy) -> Tuple[ScoreStep, ...]:
    """Ordered adjustment steps applied to the base similarity."""
    steam_step = _steam_points_step if strategy is SteamStrategy.ADDITIVE else _steam_factor_step
    return (_animal_step, _schedule_step, steam_step, _online_step)


def resolve_steam_strategy(strategy: Union[SteamStrategy, str, None]) -> SteamStrategy:
    if strategy is None:
        strategy = settings.scoring.steam_strategy
    if isinstance(strategy, SteamStrategy):
        return strategy
    return SteamStrategy(strategy.lower())


def finalize_score(raw_score: float) -> int:
    return max(0, min(MAX_SCORE, round_half_up(raw_score)))


def availability_hint(context: MatchContext) -> AvailabilityHint:
    activity = context.target.activity
    if activity is None or activity.is_online is None:
        return 'unknown'
    return 'online' if activity.is_online else 'offline'


def calculate_final_match_score(
    context: MatchContext,
    steam_strategy: Union[SteamStrategy, str, None] = None,
) -> MatchResultDTO:
    """
    Compose the final match score for one viewer/target pair.

    Args:
        context: viewer and target descriptors
        steam_strategy: override for ``settings.scoring.steam_strategy``

    Returns:
        MatchResultDTO with an integer score in [0, 100] and availability metadata
    """
    start = time.perf_counter()
    strategy = resolve_steam_strategy(steam_strategy)

    base_score = calculate_base_similarity(context)
    raw_score: float = base_score
    for step in build_pipeline(strategy):
        raw_score = step(raw_score, context)

    final_score = finalize_score(raw_score)
    hint = availability_hint(context)

    if settings.scoring.debug_perfect_scores and final_score == MAX_SCORE:
        logger.debug("Perfect score detected", extra={
            'target_user_id': context.target.user_id,
            'base_score': base_score,
            'animal_factor': calculate_animal_compatibility_factor(context),
            'schedule_factor': calculate_schedule_compatibility_factor(context),
            'steam_strategy': strategy.value,
            'raw_score': raw_score,
        })

    record_match_score(strategy.value, hint, final_score, time.perf_counter() - start)

    return MatchResultDTO(
        final_score=final_score,
        is_online_matched=is_target_online(context),
        availability_hint=hint,
    )


def _target_id(target) -> Optional[str]:
    """Best-effort id for log records, including targets that fail validation."""
    if isinstance(target, dict):
        return target.get('userId', target.get('user_id'))
    return getattr(target, 'user_id', None)


def score_candidates(
    viewer: UserMatchInput,
    targets: Iterable[UserMatchInput],
    steam_strategy: Union[SteamStrategy, str, None] = None,
    request_id: Optional[str] = None,
) -> List[ScoredMatch]:
    """
    Score one viewer against many targets, preserving input order.

    A target that fails to score, including one that fails validation, is
    logged and skipped so that one bad record does not drop the whole batch.
    No sorting is applied.
    """
    strategy = resolve_steam_strategy(steam_strategy)
    results: List[ScoredMatch] = []
    submitted = 0
    skipped = 0

    with ScoringLoggingContext(request_id=request_id, viewer_id=viewer.user_id) as batch:
        for target in targets:
            submitted += 1
            target_id = _target_id(target)
            with ScoringLoggingContext(
                request_id=batch.request_id, viewer_id=viewer.user_id, target_id=target_id
            ):
                try:
                    context = MatchContext(viewer=viewer, target=target)
                    result = calculate_final_match_score(context, strategy)
                except Exception:
                    skipped += 1
                    logger.exception("Failed to score target", extra={'target_user_id': target_id})
                    continue
            results.append(ScoredMatch(target_user_id=context.target.user_id, **result.model_dump()))

        logger.info("Scored candidates", extra={
            'submitted': submitted,
            'scored': len(results),
            'skipped': skipped,
            'steam_strategy': strategy.value,
        })

    record_batch(submitted, skipped)
    return results
