from datetime import date
from typing import Optional

from pydantic import BaseModel

from maiden.domain.badges import NOBODY


class StreakHolderSchema(BaseModel):
    holder_name: str = NOBODY
    streak_length: int = 0


class DoublerSchema(StreakHolderSchema):
    token: str = "✌️"


class CurrentHoldersSchema(BaseModel):
    hundo: StreakHolderSchema
    pooper: StreakHolderSchema
    doubler: DoublerSchema


class DailyRecordSchema(BaseModel):
    day: date
    high_score: Optional[int] = None
    high_holder_name: Optional[str] = None
    low_score: Optional[int] = None
    low_holder_name: Optional[str] = None


class AllTimeRecordSchema(BaseModel):
    high_score: Optional[int] = None
    holder_name: Optional[str] = None

