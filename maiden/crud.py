import logging
from typing import Optional

from maiden.domain.badges import CROWN, NOBODY, POOP
from maiden.domain.daily_window import Day, day_for
from maiden.keys import DailyWindow, DayKeys, MaidenKeys
from maiden.models.dc_models import (
    HighscoreReportModel,
    LeaderboardEntryModel,
    LeaderboardModel,
)
from maiden.models.record_models import (
    AllTimeRecordSchema,
    CurrentHoldersSchema,
    DailyRecordSchema,
    DoublerSchema,
    StreakHolderSchema,
)
from maiden.store import KeyValueStore

UNKNOWN_NAME = "???"


def to_int(value: Optional[str]) -> Optional[int]:
    """Parse a stored counter, treating missing or garbage values as absent."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        logging.warning(f"Ignoring non-numeric stored value: {value!r}")
        return None


class ReadRecord:
    """Read-only projections of the game state, used by reporting commands."""

    def __init__(self, store: KeyValueStore, window: DailyWindow):
        self.store = store
        self.window = window

    async def lookup_display_name(self, arena: str, player_id: str) -> str:
        name = await self.store.get_hash_field(MaidenKeys(arena).names, player_id)
        return name or UNKNOWN_NAME

    async def get_all_time_record(self, arena: str) -> AllTimeRecordSchema:
        keys = MaidenKeys(arena)
        return AllTimeRecordSchema(
            high_score=to_int(await self.store.get(keys.high_score)),
            holder_name=await self.store.get(keys.high_name),
        )

    async def get_daily_record(self, arena: str, which: Day) -> DailyRecordSchema:
        """Read the daily high/low record for today or yesterday

        Args:
            arena (str): Arena to read from
            which (Day): "today" or "yesterday"

        Returns:
            DailyRecordSchema: The record, with None for fields never written or already expired
        """
        day_keys: DayKeys = self.window.keys_for(arena, which)
        return DailyRecordSchema(
            day=day_for(which, self.window.clock().date()),
            high_score=to_int(await self.store.get(day_keys.score)),
            high_holder_name=await self.store.get(day_keys.name),
            low_score=to_int(await self.store.get(day_keys.low)),
            low_holder_name=await self.store.get(day_keys.low_name),
        )

    async def get_current_holders(self, arena: str) -> CurrentHoldersSchema:
        keys = MaidenKeys(arena)
        hundo = StreakHolderSchema(
            holder_name=await self.store.get(keys.hundo) or NOBODY,
            streak_length=to_int(await self.store.get(keys.hundo_streak)) or 0,
        )
        pooper = StreakHolderSchema(
            holder_name=await self.store.get(keys.pooper) or NOBODY,
            streak_length=to_int(await self.store.get(keys.pooper_streak)) or 0,
        )
        doubler = DoublerSchema(
            holder_name=await self.store.get(keys.doubler) or NOBODY,
            streak_length=to_int(await self.store.get(keys.doubler_streak)) or 0,
        )
        token = await self.store.get(keys.doubler_token)
        if token:
            doubler.token = token
        return CurrentHoldersSchema(hundo=hundo, pooper=pooper, doubler=doubler)

    async def get_leaderboard_counts(self, arena: str) -> LeaderboardModel:
        """Roll counts per player, fewest rolls first."""
        keys = MaidenKeys(arena)
        counts = await self.store.get_all_hash_fields(keys.roll_counts)
        names = await self.store.get_all_hash_fields(keys.names)
        entries = [
            LeaderboardEntryModel(
                player_id=player_id,
                display_name=names.get(player_id, UNKNOWN_NAME),
                roll_count=to_int(count) or 0,
            )
            for player_id, count in counts.items()
        ]
        entries.sort(key=lambda entry: entry.roll_count)
        return LeaderboardModel(
            entries=entries, total=sum(entry.roll_count for entry in entries)
        )

    async def get_highscore_report(self, arena: str) -> HighscoreReportModel:
        today = await self.get_daily_record(arena, "today")
        yesterday = await self.get_daily_record(arena, "yesterday")
        all_time = await self.get_all_time_record(arena)
        leaderboard = await self.get_leaderboard_counts(arena)
        latest_pooper = await self.store.get(MaidenKeys(arena).pooper)

        def adorn(name: str) -> str:
            badges = [name]
            if name != NOBODY and name == yesterday.high_holder_name:
                badges.append(CROWN)
            if name != NOBODY and name == latest_pooper:
                badges.append(POOP)
            return "".join(badges)

        for entry in leaderboard.entries:
            entry.decorated_name = adorn(entry.display_name)
        return HighscoreReportModel(
            today=today,
            yesterday=yesterday,
            all_time=all_time,
            leaderboard=leaderboard,
            today_name=adorn(today.high_holder_name or "<nobody yet>"),
            yesterday_name=yesterday.high_holder_name or NOBODY,
            all_time_name=adorn(all_time.holder_name or NOBODY),
        )


class UpdateRecord:
    """Post-turn statistics writes."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def update_all_time_high(self, arena: str, total: int, name: str) -> bool:
        """Replace the all-time record when the new total beats it

        Args:
            arena (str): Arena to update
            total (int): Sum of the dice just rolled
            name (str): Display name of the roller

        Returns:
            bool: True if a new all-time record was set
        """
        keys = MaidenKeys(arena)
        old_high_score = to_int(await self.store.get(keys.high_score))
        if old_high_score and old_high_score >= total:
            return False
        await self.store.set(keys.high_score, str(total))
        await self.store.set(keys.high_name, name)
        logging.info(f"New all-time high in {arena}: {total} by {name}")
        return True

    async def increment_roll_count(self, arena: str, player_id: str) -> int:
        return await self.store.increment_hash_field(MaidenKeys(arena).roll_counts, player_id, 1)
