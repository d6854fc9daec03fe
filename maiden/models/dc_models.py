from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from maiden.models.record_models import AllTimeRecordSchema, DailyRecordSchema


class OutcomeKind(str, Enum):
    max_roll = "max_roll"
    normal_roll = "normal_roll"


class DailyTrend(str, Enum):
    new_day = "new day"
    higher = "higher"
    lower = "lower"


class RollOutcomeModel(BaseModel):
    kind: OutcomeKind
    arena: str
    player_id: str
    display_name: str
    dice_count: int
    dice: List[int]
    sum: int
    decorated_name: str
    trend: Optional[DailyTrend] = None
    trend_marker: str = ""
    speed_count: int = 0
    speed_marker: str = ""
    flavor_text: str = ""


class RollRequestModel(BaseModel):
    player_id: str


class RollResponseModel(BaseModel):
    outcome: RollOutcomeModel
    message: str


class LeaderboardEntryModel(BaseModel):
    player_id: str
    display_name: str
    roll_count: int
    decorated_name: str = ""


class LeaderboardModel(BaseModel):
    entries: List[LeaderboardEntryModel]
    total: int


class HighscoreReportModel(BaseModel):
    today: DailyRecordSchema
    yesterday: DailyRecordSchema
    all_time: AllTimeRecordSchema
    leaderboard: LeaderboardModel
    today_name: str
    yesterday_name: str
    all_time_name: str


class HighscoreResponseModel(BaseModel):
    report: HighscoreReportModel
    message: str
