from datetime import datetime, timezone
from typing import List, Sequence

import pytest

from maiden.keys import DailyWindow
from maiden.randomness import RandomnessSource
from maiden.turn_engine import TurnEngine
from tests.fake_store import InMemoryStore

ARENA = "arena:1"
FIXED_NOW = datetime(2022, 3, 1, 12, 0, 0)
FIXED_UTC = datetime(2022, 3, 1, 17, 0, 0, tzinfo=timezone.utc)


class ScriptedRandomness(RandomnessSource):
    """Returns queued dice in order and always picks the first option."""

    def __init__(self, *dice: int):
        super().__init__(seed=0)
        self.dice: List[int] = list(dice)
        self.choices: List[Sequence] = []

    def push(self, *dice: int) -> None:
        self.dice.extend(dice)

    def roll_die(self, faces: int = 100) -> int:
        return self.dice.pop(0)

    def choice(self, options):
        self.choices.append(options)
        return options[0]


class MemoryRollLog:
    def __init__(self):
        self.lines = []

    async def append(self, arena, dice_count, dice, timestamp, name):
        self.lines.append((arena, dice_count, list(dice), timestamp, name))


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def randomness() -> ScriptedRandomness:
    return ScriptedRandomness()


@pytest.fixture
def window() -> DailyWindow:
    return DailyWindow(lambda: FIXED_NOW)


@pytest.fixture
def roll_log() -> MemoryRollLog:
    return MemoryRollLog()


@pytest.fixture
def engine(store, randomness, window, roll_log) -> TurnEngine:
    return TurnEngine(
        store,
        randomness=randomness,
        window=window,
        roll_log=roll_log,
        utc_clock=lambda: FIXED_UTC,
    )
