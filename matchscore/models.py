# matchscore/models.py
from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from matchscore.animals import AnimalType

AvailabilityHint = Literal['online', 'offline', 'unknown']


class _ContextModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TraitVector(_ContextModel):
    cooperation: float = Field(ge=0, le=100)
    exploration: float = Field(ge=0, le=100)
    strategy: float = Field(ge=0, le=100)
    leadership: float = Field(ge=0, le=100)
    social: float = Field(ge=0, le=100)


class PlaySchedule(_ContextModel):
    day_type: str = Field(alias="dayType")
    time_slot: str = Field(alias="timeSlot")


class TraitsContext(_ContextModel):
    traits: Optional[TraitVector] = None
    animal_type: Optional[AnimalType] = Field(default=None, alias="animalType")


class ActivityContext(_ContextModel):
    is_online: Optional[bool] = Field(default=None, alias="isOnline")
    schedule: Optional[Tuple[PlaySchedule, ...]] = None


class SteamContext(_ContextModel):
    steam_games: Optional[Tuple[int, ...]] = Field(default=None, alias="steamGames")
    total_play_time: Optional[int] = Field(default=None, alias="totalPlayTime")


class ReliabilityContext(_ContextModel):
    party_count: Optional[int] = Field(default=None, alias="partyCount")
    reliability_score: Optional[float] = Field(default=None, alias="reliabilityScore")


class UserMatchInput(_ContextModel):
    user_id: str = Field(alias="userId")
    traits: Optional[TraitsContext] = None
    activity: Optional[ActivityContext] = None
    steam: Optional[SteamContext] = None
    reliability: Optional[ReliabilityContext] = None


class MatchContext(_ContextModel):
    """Viewer/target pair handed to every scoring function."""
    viewer: UserMatchInput
    target: UserMatchInput


class MatchResultDTO(_ContextModel):
    final_score: int = Field(alias="finalScore", ge=0, le=100)
    is_online_matched: bool = Field(alias="isOnlineMatched")
    availability_hint: AvailabilityHint = Field(alias="availabilityHint")


class ScoredMatch(MatchResultDTO):
    target_user_id: str = Field(alias="targetUserId")


class MatchTag(_ContextModel):
    label: str


class CommonGameDetail(_ContextModel):
    type: Literal['COMMON_GAME'] = 'COMMON_GAME'
    game_count: int
    top_games: List[str]


class PlayTimeDetail(_ContextModel):
    type: Literal['PLAY_TIME'] = 'PLAY_TIME'
    match_score: int


class StyleSimilarityDetail(_ContextModel):
    type: Literal['STYLE_SIMILARITY'] = 'STYLE_SIMILARITY'
    similarity_score: int
    top_trait: str


class ReliabilityDetail(_ContextModel):
    type: Literal['RELIABILITY'] = 'RELIABILITY'
    reliability_score: float


class OnlineNowDetail(_ContextModel):
    type: Literal['ONLINE_NOW'] = 'ONLINE_NOW'
    is_online: bool


class ActivityPatternDetail(_ContextModel):
    type: Literal['ACTIVITY_PATTERN'] = 'ACTIVITY_PATTERN'
    pattern_score: int
    common_time_slots: List[PlaySchedule]


MatchReasonDetail = Union[
    CommonGameDetail,
    PlayTimeDetail,
    StyleSimilarityDetail,
    ReliabilityDetail,
    OnlineNowDetail,
    ActivityPatternDetail,
]


class MatchReason(_ContextModel):
    detail: MatchReasonDetail = Field(discriminator='type')
    priority: Literal['HIGH', 'MEDIUM', 'LOW']
    is_baseline: bool = False
