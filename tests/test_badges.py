"""Tests for badge composition."""

from datetime import date, timedelta

import pytest

from maiden.domain.badges import (
    DEFAULT_SEASONAL_TOKEN,
    SEASONAL_TOKENS,
    BadgeContext,
    DoublerBadge,
    HolderBadge,
    adorn_name,
    multiply,
    seasonal_token,
)

MARCH_FIRST = date(2022, 3, 1)


@pytest.mark.parametrize(
    "n, expected",
    [
        (0, ""),
        (1, "💩"),
        (3, "💩💩💩"),
        (19, "💩" * 19),
        (20, "💩 x20"),
        (68, "💩 x68"),
        (69, "💩 x69 (nice)"),
        (70, "💩 x70"),
    ],
)
def test_multiply(n, expected):
    assert multiply("💩", n) == expected


@pytest.mark.parametrize(
    "day, token",
    [
        (date(2022, 1, 1), "🐣"),
        (date(2022, 1, 8), "🐤"),
        (date(2022, 1, 30), "🐓"),
        (date(2022, 1, 31), "🍗"),
        (date(2022, 2, 14), "🍲"),
        (date(2022, 2, 15), "⛷️"),
        (date(2024, 2, 29), "⛷️"),
        (date(2022, 3, 23), "☕"),
        (date(2022, 3, 24), "⛺"),
        (date(2022, 4, 14), "🌸"),
        (date(2022, 4, 17), "🐇"),
        (date(2022, 4, 18), "🍫"),
        (date(2022, 4, 25), "🌱"),
        (date(2022, 4, 26), "🪴"),
        (date(2022, 5, 22), "🦆"),
        (date(2022, 6, 21), "🏝️"),
        (date(2022, 7, 1), "🍁"),
        (date(2022, 7, 2), "🐚"),
        (date(2022, 7, 31), "🌻"),
        (date(2022, 8, 15), "🦗"),
        (date(2022, 10, 19), "⛺"),
        (date(2022, 12, 25), "⛺"),
        (date(2022, 12, 26), "🥚"),
    ],
)
def test_seasonal_token(day, token):
    assert seasonal_token(day) == token


def test_every_day_of_a_leap_year_has_a_token():
    known = {token for rules in SEASONAL_TOKENS.values() for _, token in rules}
    known.add(DEFAULT_SEASONAL_TOKEN)
    day = date(2024, 1, 1)
    while day.year == 2024:
        assert seasonal_token(day) in known
        day += timedelta(days=1)


def test_plain_name_without_badges():
    assert adorn_name("Ann", BadgeContext(today=MARCH_FIRST)) == "Ann"


def test_badge_order_is_fixed():
    context = BadgeContext(
        today=MARCH_FIRST,
        champ="Ann",
        brick="Ann",
        hundo=HolderBadge(name="Ann", streak=2),
        pooper=HolderBadge(name="Ann", streak=1),
        doubler=DoublerBadge(name="Ann", streak=69, token="🍒"),
    )

    assert adorn_name("Ann", context) == "Ann👑☕☕💩🍒 x69 (nice)🧱"


def test_badges_only_match_own_name():
    context = BadgeContext(
        today=MARCH_FIRST,
        champ="Bob",
        brick="Cid",
        hundo=HolderBadge(name="Ann", streak=1),
        pooper=HolderBadge(name="Bob", streak=25),
        doubler=DoublerBadge(name="Cid", streak=2, token="🧦"),
    )

    assert adorn_name("Ann", context) == "Ann☕"
    assert adorn_name("Bob", context) == "Bob👑💩 x25"
    assert adorn_name("Cid", context) == "Cid🧦🧦🧱"


def test_adorn_is_deterministic():
    context = BadgeContext(today=date(2022, 12, 31), hundo=HolderBadge(name="Ann", streak=3))
    assert adorn_name("Ann", context) == adorn_name("Ann", context) == "Ann🥚🥚🥚"
