"""Badge composition for display names.

Badges are appended in a fixed order: crown, hundo, pooper, doubler, brick.
"""

from datetime import date
from typing import Dict, List, Tuple

from pydantic import BaseModel

NOBODY = "<nobody>"

CROWN = "👑"
POOP = "💩"
BRICK = "🧱"
DEFAULT_SEASONAL_TOKEN = "⛺"

# month -> [(last day of month covered, token), ...] in ascending order
SEASONAL_TOKENS: Dict[int, List[Tuple[int, str]]] = {
    1: [(7, "🐣"), (14, "🐤"), (30, "🐓"), (31, "🍗")],
    2: [(14, "🍲"), (29, "⛷️")],
    3: [(23, "☕")],
    4: [(14, "🌸"), (17, "🐇"), (18, "🍫"), (25, "🌱"), (30, "🪴")],
    5: [(7, "🌳"), (14, "🐛"), (21, "🦋"), (31, "🦆")],
    6: [(7, "🌊"), (14, "🏄"), (21, "🏝️"), (30, "🪸")],
    7: [(1, "🍁"), (7, "🐚"), (14, "🦐"), (21, "🦩"), (31, "🌻")],
    8: [(31, "🦗")],
    12: [(25, DEFAULT_SEASONAL_TOKEN), (31, "🥚")],
}


class HolderBadge(BaseModel):
    name: str = NOBODY
    streak: int = 0


class DoublerBadge(HolderBadge):
    token: str = "✌️"


class BadgeContext(BaseModel):
    """Everything needed to decorate a name, captured at one point in time."""

    today: date
    champ: str = NOBODY
    brick: str = NOBODY
    hundo: HolderBadge = HolderBadge()
    pooper: HolderBadge = HolderBadge()
    doubler: DoublerBadge = DoublerBadge()


def multiply(token: str, n: int) -> str:
    """Repeat a token once per streak step, compacting long streaks."""
    if n == 69:
        return f"{token} x69 (nice)"
    return token * n if n < 20 else f"{token} x{n}"


def seasonal_token(today: date) -> str:
    """Pick the hundo token for the given calendar date."""
    for last_day, token in SEASONAL_TOKENS.get(today.month, []):
        if today.day <= last_day:
            return token
    return DEFAULT_SEASONAL_TOKEN


def adorn_name(name: str, context: BadgeContext) -> str:
    """Decorate a display name with the badges its owner currently holds."""
    badges = [name]
    if context.champ and name == context.champ:
        badges.append(CROWN)
    if context.hundo.name and name == context.hundo.name:
        badges.append(multiply(seasonal_token(context.today), context.hundo.streak))
    if context.pooper.name and name == context.pooper.name:
        badges.append(multiply(POOP, context.pooper.streak))
    if context.doubler.name and name == context.doubler.name:
        badges.append(multiply(context.doubler.token, context.doubler.streak))
    if context.brick and name == context.brick:
        badges.append(BRICK)
    return "".join(badges)
