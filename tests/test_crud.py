"""Tests for the read-only record projections and statistics writes."""

from datetime import date

import pytest

from maiden.crud import ReadRecord, UpdateRecord, to_int
from maiden.formatter import render_highscore
from maiden.keys import MaidenKeys
from tests.conftest import ARENA

KEYS = MaidenKeys(ARENA)
TODAY = f"{ARENA}:maiden:day:2022-03-01"
YESTERDAY = f"{ARENA}:maiden:day:2022-02-28"


@pytest.fixture
def read_record(store, window) -> ReadRecord:
    return ReadRecord(store, window)


@pytest.fixture
def update_record(store) -> UpdateRecord:
    return UpdateRecord(store)


@pytest.mark.parametrize("value, expected", [(None, None), ("12", 12), ("-1", -1), ("x", None)])
def test_to_int(value, expected):
    assert to_int(value) == expected


async def test_lookup_display_name(read_record, store):
    store.hashes[KEYS.names] = {"p-ann": "Ann"}

    assert await read_record.lookup_display_name(ARENA, "p-ann") == "Ann"
    assert await read_record.lookup_display_name(ARENA, "p-zed") == "???"


async def test_fresh_arena_defaults(read_record):
    holders = await read_record.get_current_holders(ARENA)
    all_time = await read_record.get_all_time_record(ARENA)
    today = await read_record.get_daily_record(ARENA, "today")

    assert holders.hundo.holder_name == "<nobody>"
    assert holders.hundo.streak_length == 0
    assert holders.doubler.token == "✌️"
    assert all_time.high_score is None
    assert today.day == date(2022, 3, 1)
    assert today.high_score is None


async def test_daily_record_yesterday(read_record, store):
    store.values[f"{YESTERDAY}:score"] = "180"
    store.values[f"{YESTERDAY}:name"] = "Bob"
    store.values[f"{YESTERDAY}:low"] = "3"
    store.values[f"{YESTERDAY}:low_name"] = "Cid"

    record = await read_record.get_daily_record(ARENA, "yesterday")

    assert record.day == date(2022, 2, 28)
    assert (record.high_score, record.high_holder_name) == (180, "Bob")
    assert (record.low_score, record.low_holder_name) == (3, "Cid")


async def test_leaderboard_sorted_by_fewest_rolls(read_record, store):
    store.hashes[KEYS.roll_counts] = {"p-ann": "5", "p-bob": "2", "p-cid": "9"}
    store.hashes[KEYS.names] = {"p-ann": "Ann", "p-bob": "Bob"}

    leaderboard = await read_record.get_leaderboard_counts(ARENA)

    assert [(entry.display_name, entry.roll_count) for entry in leaderboard.entries] == [
        ("Bob", 2),
        ("Ann", 5),
        ("???", 9),
    ]
    assert leaderboard.total == 16


async def test_highscore_report(read_record, store):
    store.values[f"{TODAY}:score"] = "150"
    store.values[f"{TODAY}:name"] = "Ann"
    store.values[f"{YESTERDAY}:score"] = "180"
    store.values[f"{YESTERDAY}:name"] = "Bob"
    store.values[KEYS.high_score] = "190"
    store.values[KEYS.high_name] = "Bob"
    store.values[KEYS.pooper] = "Ann"
    store.hashes[KEYS.roll_counts] = {"p-ann": "5", "p-bob": "2"}
    store.hashes[KEYS.names] = {"p-ann": "Ann", "p-bob": "Bob"}

    report = await read_record.get_highscore_report(ARENA)

    assert report.today_name == "Ann💩"
    assert report.yesterday_name == "Bob"
    assert report.all_time_name == "Bob👑"
    assert render_highscore(report) == (
        "Today: 150 by Ann💩\n"
        "Yesterday: 180 by Bob👑\n"
        "All time: 190 by Bob👑\n"
        "Rolls: Bob👑 (2), Ann💩 (5), Total: 7"
    )


async def test_highscore_report_for_empty_arena(read_record):
    report = await read_record.get_highscore_report(ARENA)

    assert render_highscore(report) == (
        "Today: 0 by <nobody yet>\n"
        "Yesterday: 0 by <nobody>👑\n"
        "All time: 0 by <nobody>\n"
        "Rolls: "
    )


async def test_update_all_time_high(update_record, store):
    assert await update_record.update_all_time_high(ARENA, 120, "Ann")
    assert not await update_record.update_all_time_high(ARENA, 120, "Bob")
    assert not await update_record.update_all_time_high(ARENA, 90, "Bob")
    assert await update_record.update_all_time_high(ARENA, 121, "Cid")

    assert store.values[KEYS.high_score] == "121"
    assert store.values[KEYS.high_name] == "Cid"


async def test_increment_roll_count(update_record, store):
    await update_record.increment_roll_count(ARENA, "p-ann")
    count = await update_record.increment_roll_count(ARENA, "p-ann")

    assert count == 2
    assert store.hashes[KEYS.roll_counts] == {"p-ann": "2"}
