# matchscore/explanation.py
"""
Human-facing explanations for a match: short tags and structured reasons.

Both lists are driven by the same signals as the score. When fewer than three
signals fire, baseline entries pad the list so a card never looks empty; at
most five entries are returned.
"""

from typing import List, Optional

from matchscore.factors import common_steam_games, is_target_online
from matchscore.models import (
    ActivityPatternDetail,
    CommonGameDetail,
    MatchContext,
    MatchReason,
    MatchTag,
    OnlineNowDetail,
    PlayTimeDetail,
    ReliabilityDetail,
    StyleSimilarityDetail,
)
from matchscore.traits import (
    calculate_schedule_similarity,
    calculate_traits_similarity,
    common_time_slots,
    find_top_trait,
    round_half_up,
)

MIN_ENTRIES = 3
MAX_ENTRIES = 5

SAME_GAME = "same_game"
PLAY_TIME_MATCH = "play_time_match"
STYLE_SIMILAR = "style_similar"
SCHEDULE_MATCH = "schedule_match"
ONLINE_NOW = "online_now"
HIGH_RELIABILITY = "high_reliability"
SIMILAR_EXPERIENCE = "similar_experience"
ACTIVITY_PATTERN = "activity_pattern"

STYLE_TAG_THRESHOLD = 70
RATIO_THRESHOLD = 0.6
RELIABILITY_TAG_THRESHOLD = 70
RELIABILITY_REASON_THRESHOLD = 60
BASELINE_SCORE = 50


def _ratio(a: Optional[float], b: Optional[float]) -> Optional[float]:
    """min/max ratio of two positive quantities, None when either is missing."""
    if a is None or b is None or a <= 0 or b <= 0:
        return None
    return min(a, b) / max(a, b)


def _play_time_ratio(context: MatchContext) -> Optional[float]:
    viewer = context.viewer.steam.total_play_time if context.viewer.steam else None
    target = context.target.steam.total_play_time if context.target.steam else None
    return _ratio(viewer, target)


def _traits_pair(context: MatchContext):
    viewer = context.viewer.traits.traits if context.viewer.traits else None
    target = context.target.traits.traits if context.target.traits else None
    if viewer is None or target is None:
        return None
    return viewer, target


def _schedules(context: MatchContext):
    viewer = context.viewer.activity.schedule if context.viewer.activity else None
    target = context.target.activity.schedule if context.target.activity else None
    return viewer or (), target or ()


def _target_reliability(context: MatchContext) -> Optional[float]:
    if context.target.reliability is None:
        return None
    return context.target.reliability.reliability_score


def generate_match_tags(context: MatchContext) -> List[MatchTag]:
    labels: List[str] = []

    if common_steam_games(context):
        labels.append(SAME_GAME)

    ratio = _play_time_ratio(context)
    if ratio is not None and ratio >= RATIO_THRESHOLD:
        labels.append(PLAY_TIME_MATCH)

    pair = _traits_pair(context)
    if pair is not None and calculate_traits_similarity(*pair) >= STYLE_TAG_THRESHOLD:
        labels.append(STYLE_SIMILAR)

    viewer_schedule, target_schedule = _schedules(context)
    if calculate_schedule_similarity(viewer_schedule, target_schedule) > 0:
        labels.append(SCHEDULE_MATCH)

    if is_target_online(context):
        labels.append(ONLINE_NOW)

    reliability = _target_reliability(context)
    if reliability is not None and reliability >= RELIABILITY_TAG_THRESHOLD:
        labels.append(HIGH_RELIABILITY)

    viewer_parties = context.viewer.reliability.party_count if context.viewer.reliability else None
    target_parties = context.target.reliability.party_count if context.target.reliability else None
    ratio = _ratio(viewer_parties, target_parties)
    if ratio is not None and ratio >= RATIO_THRESHOLD:
        labels.append(SIMILAR_EXPERIENCE)

    for baseline in (STYLE_SIMILAR, ACTIVITY_PATTERN, HIGH_RELIABILITY):
        if len(labels) >= MIN_ENTRIES:
            break
        if baseline not in labels:
            labels.append(baseline)

    return [MatchTag(label=label) for label in labels[:MAX_ENTRIES]]


def generate_match_reasons(context: MatchContext) -> List[MatchReason]:
    reasons: List[MatchReason] = []

    shared_ids = common_steam_games(context)
    viewer_games = context.viewer.steam.steam_games if context.viewer.steam else None
    # viewer's library order, duplicates dropped
    shared = [game_id for game_id in dict.fromkeys(viewer_games or ()) if game_id in shared_ids]
    if shared:
        reasons.append(MatchReason(
            detail=CommonGameDetail(
                game_count=len(shared),
                top_games=[f"Game {game_id}" for game_id in shared[:2]],
            ),
            priority='HIGH',
        ))

    pair = _traits_pair(context)
    if pair is not None:
        reasons.append(MatchReason(
            detail=StyleSimilarityDetail(
                similarity_score=calculate_traits_similarity(*pair),
                top_trait=find_top_trait(*pair),
            ),
            priority='HIGH',
        ))

    viewer_schedule, target_schedule = _schedules(context)
    common_slots = common_time_slots(viewer_schedule, target_schedule)
    if common_slots:
        reasons.append(MatchReason(
            detail=ActivityPatternDetail(
                pattern_score=calculate_schedule_similarity(viewer_schedule, target_schedule),
                common_time_slots=common_slots,
            ),
            priority='MEDIUM',
        ))

    if is_target_online(context):
        reasons.append(MatchReason(detail=OnlineNowDetail(is_online=True), priority='MEDIUM'))

    ratio = _play_time_ratio(context)
    if ratio is not None:
        match_score = round_half_up(ratio * 100)
        if match_score >= RATIO_THRESHOLD * 100:
            reasons.append(MatchReason(detail=PlayTimeDetail(match_score=match_score), priority='MEDIUM'))

    reliability = _target_reliability(context)
    if reliability is not None and reliability >= RELIABILITY_REASON_THRESHOLD:
        reasons.append(MatchReason(
            detail=ReliabilityDetail(reliability_score=reliability),
            priority='LOW',
        ))

    present = {reason.detail.type for reason in reasons}
    baselines = (
        MatchReason(
            detail=StyleSimilarityDetail(similarity_score=BASELINE_SCORE, top_trait='cooperation'),
            priority='HIGH',
            is_baseline=True,
        ),
        MatchReason(
            detail=ActivityPatternDetail(pattern_score=BASELINE_SCORE, common_time_slots=[]),
            priority='MEDIUM',
            is_baseline=True,
        ),
        MatchReason(
            detail=ReliabilityDetail(reliability_score=BASELINE_SCORE),
            priority='LOW',
            is_baseline=True,
        ),
    )
    for baseline in baselines:
        if len(reasons) >= MIN_ENTRIES:
            break
        if baseline.detail.type not in present:
            reasons.append(baseline)

    return reasons[:MAX_ENTRIES]
