"""English inflection helpers: ordinal suffixes and naive pluralisation."""

from __future__ import annotations

import re

_IRREGULARS = {
    "child": "children",
    "goose": "geese",
    "man": "men",
    "person": "people",
    "sex": "sexes",
    "leaf": "leaves",
    "mouse": "mice",
    "quiz": "quizzes",
    "ox": "oxen",
    "foot": "feet",
    "tooth": "teeth",
    "louse": "lice",
}

_UNCOUNTABLES = frozenset(
    {
        "equipment",
        "furniture",
        "information",
        "rice",
        "money",
        "species",
        "series",
        "fish",
        "sheep",
        "jeans",
        "police",
        "music",
        "news",
        "advice",
        "luggage",
        "sugar",
        "butter",
        "water",
        "tuna",
        "salmon",
        "trout",
    }
)

# A replacement starting with "-" keeps the first captured group before the suffix.
_INFLECTIONS = [
    (re.compile(pattern, re.IGNORECASE), replacement)
    for pattern, replacement in (
        (r"^(ax|test)is\Z", "-es"),
        (r"(octop|vir)us\Z", "-i"),
        (r"([ti])um\Z", "-a"),
        (r"([ti])a\Z", "-a"),
        (r"([^aeiouy]|qu)y\Z", "-ies"),
        (r"^(matr|vert|ind)(ix|ex)\Z", "-ices"),
        (r"(x|ch|ss|sh)\Z", "-es"),
        (r"sis\Z", "ses"),
        (r"s\Z", "ses"),
    )
]

_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}


def ordinalize(number: int) -> str:
    """Append an ordinal suffix chosen by the last digit (1st, 2nd, 3rd, 4th...).

    The remainder truncates toward zero, so negative numbers always get "th".
    """
    if not isinstance(number, int) or isinstance(number, bool):
        raise TypeError(f"Expected int, got {type(number).__name__}")
    remainder = number % 10 if number >= 0 else -((-number) % 10)
    return f"{number}{_SUFFIXES.get(remainder, 'th')}"


def _ascii_lower(word: str) -> str:
    return "".join(chr(ord(ch) + 32) if "A" <= ch <= "Z" else ch for ch in word)


def pluralize(word: str) -> str:
    """Return the plural of an English noun."""
    if not isinstance(word, str):
        raise TypeError(f"Expected str, got {type(word).__name__}")
    lower = _ascii_lower(word)

    plural = _IRREGULARS.get(lower)
    if plural is not None:
        return word[0] + plural[1:]

    if lower in _UNCOUNTABLES:
        return word

    for pattern, replacement in _INFLECTIONS:
        match = pattern.search(word)
        if match is None:
            continue
        head = word[: match.start()]
        if replacement.startswith("-"):
            return head + match.group(1) + replacement[1:]
        return head + replacement

    return word + "s"