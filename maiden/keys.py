"""Key namespace for one arena.

Every key the game reads or writes is built here.
"""

from datetime import datetime
from typing import Callable

from maiden.domain.daily_window import Day, day_roll_key


class MaidenKeys:
    def __init__(self, arena: str):
        self.arena = arena
        self.prefix = f"{arena}:maiden"

    @property
    def names(self) -> str:
        return f"{self.arena}:names"

    @property
    def previous_roller(self) -> str:
        return f"{self.prefix}:previous_roller"

    @property
    def dice_count(self) -> str:
        return f"{self.prefix}:dice_count"

    @property
    def hundo(self) -> str:
        return f"{self.prefix}:hundo"

    @property
    def hundo_streak(self) -> str:
        return f"{self.hundo}_streak"

    @property
    def pooper(self) -> str:
        return f"{self.prefix}:pooper"

    @property
    def pooper_streak(self) -> str:
        return f"{self.pooper}_streak"

    @property
    def doubler(self) -> str:
        return f"{self.prefix}:doubler"

    @property
    def doubler_streak(self) -> str:
        return f"{self.doubler}_streak"

    @property
    def doubler_token(self) -> str:
        return f"{self.doubler}_token"

    @property
    def high_score(self) -> str:
        return f"{self.prefix}:high_score"

    @property
    def high_name(self) -> str:
        return f"{self.prefix}:high_name"

    @property
    def roll_counts(self) -> str:
        return f"{self.prefix}:roll_counts"

    @property
    def speed(self) -> str:
        return f"{self.arena}:speed"


class DayKeys:
    """Fields of one daily record."""

    def __init__(self, day_key: str):
        self.day_key = day_key
        self.score = f"{day_key}:score"
        self.name = f"{day_key}:name"
        self.low = f"{day_key}:low"
        self.low_name = f"{day_key}:low_name"


class DailyWindow:
    """Derives today's and yesterday's record keys from the local wall-clock date."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock

    def key_for(self, arena: str, which: Day) -> str:
        return day_roll_key(arena, which, self.clock().date())

    def keys_for(self, arena: str, which: Day) -> DayKeys:
        return DayKeys(self.key_for(arena, which))
