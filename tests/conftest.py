from typing import Optional, Sequence

import pytest

from matchscore.models import MatchContext, UserMatchInput


def make_user(
    user_id: str,
    games: Optional[Sequence[int]] = None,
    is_online: Optional[bool] = None,
    traits: Optional[dict] = None,
    animal: Optional[str] = None,
    schedule: Optional[Sequence[tuple]] = None,
    play_time: Optional[int] = None,
    party_count: Optional[int] = None,
    reliability: Optional[float] = None,
) -> UserMatchInput:
    """Build a UserMatchInput from the camelCase payload shape callers send."""
    data = {"userId": user_id}
    if games is not None or play_time is not None:
        data["steam"] = {"steamGames": games, "totalPlayTime": play_time}
    if is_online is not None or schedule is not None:
        data["activity"] = {"isOnline": is_online}
        if schedule is not None:
            data["activity"]["schedule"] = [
                {"dayType": day, "timeSlot": slot} for day, slot in schedule
            ]
    if traits is not None or animal is not None:
        data["traits"] = {"traits": traits, "animalType": animal}
    if party_count is not None or reliability is not None:
        data["reliability"] = {"partyCount": party_count, "reliabilityScore": reliability}
    return UserMatchInput.model_validate(data)


def make_context(viewer: Optional[dict] = None, target: Optional[dict] = None) -> MatchContext:
    return MatchContext(
        viewer=make_user("viewer-uuid", **(viewer or {})),
        target=make_user("target-uuid", **(target or {})),
    )


def flat_traits(value: float = 50, **overrides) -> dict:
    traits = {k: value for k in ("cooperation", "exploration", "strategy", "leadership", "social")}
    traits.update(overrides)
    return traits


@pytest.fixture
def empty_context() -> MatchContext:
    return make_context()
