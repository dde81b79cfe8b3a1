"""
Colour name and hex value resolution.

Colours in a specification document may be given either as one of a fixed
set of CPK-style names or as a ``#rrggbb`` hex value. Both resolve to a
canonical lower-case hex string.

    >>> resolve_colour("Red")
    '#eb3c25'
    >>> resolve_colour("#ABCDEF")
    '#abcdef'
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Final, Mapping

from molspec.exceptions import InvalidColourError


# Keys are lower-case; lookups lower-case their input first.
NAMED_COLOURS: Final[Mapping[str, str]] = MappingProxyType({
    "white": "#ffffff",
    "black": "#222222",
    "blue": "#1b43f5",
    "red": "#eb3c25",
    "green": "#70ea4e",
    "darkred": "#8e2c13",
    "darkviolet": "#5c22b4",
    "cyan": "#73fbfd",
    "orange": "#f29b38",
    "yellow": "#fce454",
    "beige": "#f4ac80",
    "violet": "#6b2ff5",
    "darkgreen": "#33741f",
    "grey": "#999999",
    "darkorange": "#d17b2c",
    "pink": "#d081f8",
})

_HEX_COLOUR: Final[re.Pattern[str]] = re.compile(r"#[0-9a-f]{6}")


def resolve_colour(colour: str) -> str:
    """Map a colour name or hex value to its canonical hex form.

    Args:
        colour: Colour name (case-insensitive) or ``#`` followed by exactly
            six hexadecimal digits.

    Returns:
        Lower-case ``#rrggbb`` string.

    Raises:
        InvalidColourError: If the value is neither a known name nor a
            valid hex colour.
    """
    key = colour.strip().lower()
    named = NAMED_COLOURS.get(key)
    if named is not None:
        return named
    if _HEX_COLOUR.fullmatch(key):
        return key
    raise InvalidColourError(colour)


def is_colour(colour: str) -> bool:
    """Check if a value resolves to a colour."""
    try:
        resolve_colour(colour)
    except InvalidColourError:
        return False
    return True
