"""Flavor text tables for two-dice rolls, doubles tokens and trend markers."""

from typing import Callable, List, Optional, Sequence, Tuple

from maiden.domain.badges import multiply

DOUBLES_TOKENS = [
    "🍒", "✌️", "🫁", "👯", "🤼", "🫂", "🎎", "🙌", "🖇️", "⚔️", "🛠️",
    "⛓️", "🛍️", "🚻", "👣", "🧦", "🩰", "⚖️", "🧬", "🎵", "♊", "🪺",
]

NICE_PHRASES = [
    "( ͝° ͜ʖ͡°)",
    "(nice)",
    "★~(◠‿◕✿)",
    "(⁄ ⁄•⁄ω⁄•⁄ ⁄)",
    "( ͡° ͜ʖ├┬┴┬┴",
    "(✌ﾟ∀ﾟ)☞",
]

OOF_PHRASES = [
    "(oof)",
    "(you make me sad)",
    "(my gram rolls better than you)",
    "(you're number one!)",
    "(git gud)",
]

KARMA_PHRASE = "HOW IS THIS EVEN POSSIBLE, WHY DO YOU HAVE THIS KARMA?!"
DOUBLES_PHRASE = "DOUBLES! :beers:"

# First matching rule wins; one phrase is picked at random from its list.
TWO_DICE_RULES: List[Tuple[Callable[[int, int, int], bool], Sequence[str]]] = [
    (lambda a, b, total: a == 69 and b == 69, ["ʕ◉ᴥ◉ʔ", "(so nice they rolled it twice!)"]),
    (lambda a, b, total: total == 2, ["(BIG OOOF)"]),
    (lambda a, b, total: a == b, [DOUBLES_PHRASE]),
    (lambda a, b, total: a == 69 or b == 69 or total == 69, NICE_PHRASES),
    (lambda a, b, total: total == 111, ["🌠"]),
    (lambda a, b, total: {a, b} == {1, 100}, [KARMA_PHRASE]),
    (lambda a, b, total: a == 100 or b == 100, ["(another :100: wasted)"]),
    (lambda a, b, total: a == 1 or b == 1, OOF_PHRASES),
]

TREND_MARKERS = {
    "new day": " ☀️",
    "higher": " 📈",
    "lower": " 📉",
}


def two_dice_phrases(a: int, b: int) -> Sequence[str]:
    """Return the candidate phrases for a pair of dice, empty when none apply."""
    total = a + b
    for matches, phrases in TWO_DICE_RULES:
        if matches(a, b, total):
            return phrases
    return []


def two_dice_flavor(a: int, b: int, choose: Callable[[Sequence[str]], str]) -> str:
    phrases = two_dice_phrases(a, b)
    if not phrases:
        return ""
    return choose(phrases)


def trend_marker(trend: Optional[str]) -> str:
    return TREND_MARKERS.get(trend, "") if trend else ""


def speed_marker(emoji: str, speed_count: int) -> str:
    """Mark how many turns landed just before this one inside the cooldown."""
    if speed_count <= 0:
        return ""
    return multiply(emoji, speed_count)
