"""Turn resolution for the xd100 dice game.

A turn is resolved in two parts. ``resolve_turn`` validates the player,
rolls the dice and updates everything the reply depends on.
``record_turn`` updates statistics that nobody waits for. ``roll`` runs
both.

The guarantee is best-effort, not all-or-nothing: if the store fails in
the middle of a turn the error propagates and the writes already applied
stay applied.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from maiden.arena_sync_manager import ArenaSyncManager
from maiden.crud import ReadRecord, UpdateRecord, to_int
from maiden.domain.badges import NOBODY, BadgeContext, DoublerBadge, HolderBadge, adorn_name
from maiden.domain.daily_window import DAILY_RECORD_EXPIRY
from maiden.domain.flavor import DOUBLES_TOKENS, speed_marker, trend_marker, two_dice_flavor
from maiden.errors import ConsecutiveTurnRejection
from maiden.keys import DailyWindow, MaidenKeys
from maiden.models.dc_models import DailyTrend, OutcomeKind, RollOutcomeModel
from maiden.randomness import DIE_FACES, RandomnessSource
from maiden.roll_log import RollLogSink
from maiden.store import KeyValueStore, StoreOperation

FAST_COOLDOWN = 3


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TurnEngine:
    def __init__(
        self,
        store: KeyValueStore,
        randomness: Optional[RandomnessSource] = None,
        window: Optional[DailyWindow] = None,
        roll_log: Optional[RollLogSink] = None,
        sync_manager: Optional[ArenaSyncManager] = None,
        fast_emoji: str = "💨",
        fast_cooldown: int = FAST_COOLDOWN,
        utc_clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.randomness = randomness or RandomnessSource()
        self.window = window or DailyWindow()
        self.roll_log = roll_log
        self.sync_manager = sync_manager or ArenaSyncManager()
        self.fast_emoji = fast_emoji
        self.fast_cooldown = fast_cooldown
        self.utc_clock = utc_clock
        self.read_record = ReadRecord(store, self.window)
        self.update_record = UpdateRecord(store)

    async def roll(self, arena: str, player_id: str, display_name: str) -> RollOutcomeModel:
        outcome = await self.resolve_turn(arena, player_id, display_name)
        await self.record_turn(outcome)
        return outcome

    async def resolve_turn(self, arena: str, player_id: str, display_name: str) -> RollOutcomeModel:
        """Roll the dice for one player and update the game state

        Args:
            arena (str): Arena the turn is taken in
            player_id (str): Id of the rolling player
            display_name (str): Resolved display name, "???" when unknown

        Raises:
            ConsecutiveTurnRejection: The player also took the previous turn

        Returns:
            RollOutcomeModel: The dice, the decorated name and all annotations
        """
        async with self.sync_manager.hold(arena):
            return await self._resolve_turn(arena, player_id, display_name)

    async def _resolve_turn(self, arena: str, player_id: str, name: str) -> RollOutcomeModel:
        keys = MaidenKeys(arena)

        # prevent consecutive rolls
        previous_roller = await self.store.get(keys.previous_roller)
        if previous_roller == player_id:
            logging.info(f"Rejected consecutive roll by {player_id} in {arena}")
            raise ConsecutiveTurnRejection(arena, player_id)

        dice_count = await self._load_dice_count(keys)
        holders = await self.read_record.get_current_holders(arena)
        hundo = HolderBadge(name=holders.hundo.holder_name, streak=holders.hundo.streak_length)
        pooper = HolderBadge(name=holders.pooper.holder_name, streak=holders.pooper.streak_length)
        doubler = DoublerBadge(
            name=holders.doubler.holder_name,
            streak=holders.doubler.streak_length,
            token=holders.doubler.token,
        )

        dice = []
        is_max_roll = True
        for _ in range(dice_count):
            die = self.randomness.roll_die()
            if die < DIE_FACES:
                is_max_roll = False
            else:
                hundo.streak, _ = await self.store.claim_streak(keys.hundo, keys.hundo_streak, name)
                hundo.name = name
            if die == 1:
                pooper.streak, _ = await self.store.claim_streak(keys.pooper, keys.pooper_streak, name)
                pooper.name = name
            dice.append(die)
        total = sum(dice)

        # only 2d100 doubles are tracked
        if not is_max_roll and dice_count == 2 and dice[0] == dice[1]:
            doubler = await self._claim_doubles(keys, name, doubler)

        trend = await self._update_daily_record(arena, total, name)

        yesterday = self.window.keys_for(arena, "yesterday")
        context = BadgeContext(
            today=self.window.clock().date(),
            champ=await self.store.get(yesterday.name) or NOBODY,
            brick=await self.store.get(yesterday.low_name) or NOBODY,
            hundo=hundo,
            pooper=pooper,
            doubler=doubler,
        )

        speed_count = await self.store.increment_with_expiry(keys.speed, self.fast_cooldown) - 1

        flavor_text = ""
        if is_max_roll:
            # increase target number of dice
            dice_count_after = await self.store.increment(keys.dice_count)
            await self.store.delete(keys.previous_roller)
            kind = OutcomeKind.max_roll
            logging.info(f"{name} MAX ROLL in {arena}: {dice}, now rolling {dice_count_after}d100")
        else:
            await self.store.set(keys.previous_roller, player_id)
            kind = OutcomeKind.normal_roll
            if dice_count == 2:
                flavor_text = two_dice_flavor(dice[0], dice[1], self.randomness.choice)
            logging.debug(f"{name} rolled {dice} in {arena}")

        return RollOutcomeModel(
            kind=kind,
            arena=arena,
            player_id=player_id,
            display_name=name,
            dice_count=dice_count,
            dice=dice,
            sum=total,
            decorated_name=adorn_name(name, context),
            trend=trend,
            trend_marker=trend_marker(trend.value if trend else None),
            speed_count=speed_count,
            speed_marker=speed_marker(self.fast_emoji, speed_count),
            flavor_text=flavor_text,
        )

    async def record_turn(self, outcome: RollOutcomeModel) -> None:
        """Update all-time high, roll counts and the roll log. Order does not matter."""
        await asyncio.gather(
            self.update_record.update_all_time_high(outcome.arena, outcome.sum, outcome.display_name),
            self.update_record.increment_roll_count(outcome.arena, outcome.player_id),
            self._append_roll_log(outcome),
        )

    async def _load_dice_count(self, keys: MaidenKeys) -> int:
        dice_count = to_int(await self.store.get(keys.dice_count))
        if not dice_count or dice_count < 1:
            await self.store.set(keys.dice_count, "1")
            dice_count = 1
        return dice_count

    async def _claim_doubles(self, keys: MaidenKeys, name: str, doubler: DoublerBadge) -> DoublerBadge:
        # each doubles streak is assigned a random token
        token = self.randomness.choice(DOUBLES_TOKENS) if name != doubler.name else doubler.token
        streak, is_new_holder = await self.store.claim_streak(
            keys.doubler, keys.doubler_streak, name, keys.doubler_token, token
        )
        if is_new_holder:
            return DoublerBadge(name=name, streak=streak, token=token)
        return DoublerBadge(name=name, streak=streak, token=doubler.token)

    async def _update_daily_record(self, arena: str, total: int, name: str) -> Optional[DailyTrend]:
        today = self.window.keys_for(arena, "today")
        daily_high = to_int(await self.store.get(today.score))
        daily_low = to_int(await self.store.get(today.low))

        trend = None
        if not daily_high or daily_high < total:
            await self.store.batch(
                [
                    StoreOperation(key=today.score, value=str(total), ttl=DAILY_RECORD_EXPIRY),
                    StoreOperation(key=today.name, value=name, ttl=DAILY_RECORD_EXPIRY),
                ]
            )
            trend = DailyTrend.higher if daily_high else DailyTrend.new_day
        if not daily_low or daily_low > total:
            await self.store.batch(
                [
                    StoreOperation(key=today.low, value=str(total), ttl=DAILY_RECORD_EXPIRY),
                    StoreOperation(key=today.low_name, value=name, ttl=DAILY_RECORD_EXPIRY),
                ]
            )
            if trend is None:
                trend = DailyTrend.lower
        return trend

    async def _append_roll_log(self, outcome: RollOutcomeModel) -> None:
        if self.roll_log is None:
            return
        await self.roll_log.append(
            outcome.arena, outcome.dice_count, outcome.dice, self.utc_clock(), outcome.display_name
        )
