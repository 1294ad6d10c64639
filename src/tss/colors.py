"""Color and text-attribute model for tss."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Union

# Constants for color literals
HEX_COLOR_FULL_LENGTH = 6  # Length of a full hex color (#RRGGBB)
CHANNEL_MAX = 255  # Upper bound for RGB channels and ANSI indexes

_DECIMAL_RE = re.compile(r"[0-9]+")
_HEX_RE = re.compile(r"[0-9a-fA-F]+")


# ============================================================================
# Colors
# ============================================================================


class ColorName(str, Enum):
    """Closed set of named colors.

    FG_CANVAS and BG_CANVAS are virtual: they ask the renderer to use the
    terminal's default foreground/background.
    """

    RESET = "reset"
    BLACK = "black"
    DARK_GREY = "dark-grey"
    RED = "red"
    DARK_RED = "dark-red"
    GREEN = "green"
    DARK_GREEN = "dark-green"
    YELLOW = "yellow"
    DARK_YELLOW = "dark-yellow"
    BLUE = "blue"
    DARK_BLUE = "dark-blue"
    MAGENTA = "magenta"
    DARK_MAGENTA = "dark-magenta"
    CYAN = "cyan"
    DARK_CYAN = "dark-cyan"
    WHITE = "white"
    GREY = "grey"
    FG_CANVAS = "fg-canvas"
    BG_CANVAS = "bg-canvas"


@dataclass(frozen=True, slots=True)
class RgbColor:
    """24-bit color from a ``#rrggbb`` literal."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= CHANNEL_MAX:
                raise ValueError(f"RGB channel out of range: {channel}")

    def to_hex(self) -> str:
        """Return the color as a lowercase ``#rrggbb`` string."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def __str__(self) -> str:
        return self.to_hex()


@dataclass(frozen=True, slots=True)
class AnsiColor:
    """Indexed color from the 256-color ANSI palette."""

    index: int

    def __post_init__(self) -> None:
        if not 0 <= self.index <= CHANNEL_MAX:
            raise ValueError(f"ANSI color index out of range: {self.index}")

    def __str__(self) -> str:
        return str(self.index)


@dataclass(frozen=True, slots=True)
class NamedColor:
    """One of the fixed color names."""

    name: ColorName

    def __str__(self) -> str:
        return self.name.value


Color = Union[RgbColor, AnsiColor, NamedColor]


def _spellings(canonical: str) -> set[str]:
    """Hyphenated, underscored and concatenated spellings of a name."""
    return {canonical, canonical.replace("-", "_"), canonical.replace("-", "")}


_COLOR_NAMES: dict[str, ColorName] = {
    spelling: name for name in ColorName for spelling in _spellings(name.value)
}
# American spellings
_COLOR_NAMES.update(
    {
        spelling: name
        for name in (ColorName.GREY, ColorName.DARK_GREY)
        for spelling in _spellings(name.value.replace("grey", "gray"))
    }
)


def parse_color(token: str) -> Color:
    """Parse a color literal.

    Supported formats:
    - ``#rrggbb`` - RGB color
    - ``123`` or ``0x7b`` - ANSI palette index (0-255)
    - ``dark-grey``, ``fg-canvas``, ... - named color (case-insensitive)

    Raises:
        ValueError: If the token is not a valid color literal
    """
    text = token.strip()
    if text.startswith("#"):
        digits = text[1:]
        if len(digits) != HEX_COLOR_FULL_LENGTH or not _HEX_RE.fullmatch(digits):
            raise ValueError(f"invalid RGB color literal {token!r}")
        return RgbColor(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    lowered = text.lower()
    if lowered.startswith("0x"):
        if not _HEX_RE.fullmatch(lowered[2:]):
            raise ValueError(f"invalid hex ANSI color literal {token!r}")
        return _ansi(int(lowered[2:], 16), token)
    if _DECIMAL_RE.fullmatch(text):
        return _ansi(int(text), token)

    name = _COLOR_NAMES.get(lowered)
    if name is None:
        raise ValueError(f"unknown color name {token!r}")
    return NamedColor(name)


def _ansi(index: int, token: str) -> AnsiColor:
    if index > CHANNEL_MAX:
        raise ValueError(f"ANSI color index out of range (0-255): {token!r}")
    return AnsiColor(index)


def format_color(color: Color) -> str:
    """Return the canonical tss spelling of a color."""
    return str(color)


# ============================================================================
# Attributes
# ============================================================================


class Attribute(Flag):
    """Text attribute flags. Combine with ``|``; ``Attribute(0)`` is the empty set."""

    BOLD = auto()
    ITALIC = auto()
    UNDERLINED = auto()
    DIM = auto()
    SLOW_BLINK = auto()
    RAPID_BLINK = auto()
    CROSSED_OUT = auto()
    FRAMED = auto()
    ENCIRCLED = auto()
    REVERSE = auto()


NO_ATTRIBUTES = Attribute(0)

# Canonical spelling per flag, in serialization order
ATTRIBUTE_NAMES: dict[Attribute, str] = {
    Attribute.BOLD: "bold",
    Attribute.ITALIC: "italic",
    Attribute.UNDERLINED: "underlined",
    Attribute.DIM: "dim",
    Attribute.SLOW_BLINK: "slow-blink",
    Attribute.RAPID_BLINK: "rapid-blink",
    Attribute.CROSSED_OUT: "crossed-out",
    Attribute.FRAMED: "framed",
    Attribute.ENCIRCLED: "encircled",
    Attribute.REVERSE: "reverse",
}

_ATTRIBUTE_SPELLINGS: dict[str, Attribute] = {
    spelling: flag for flag, name in ATTRIBUTE_NAMES.items() for spelling in _spellings(name)
}
_ATTRIBUTE_SPELLINGS["underline"] = Attribute.UNDERLINED


def parse_attribute(name: str) -> Attribute:
    """Parse a single attribute name, accepting all synonym spellings.

    Raises:
        ValueError: If the name is not a known attribute
    """
    flag = _ATTRIBUTE_SPELLINGS.get(name.strip().lower())
    if flag is None:
        raise ValueError(f"unknown attribute {name!r}")
    return flag


def parse_attrs(token: str) -> Attribute:
    """Parse a ``|``-separated attribute list into a flag set.

    Example:
        parse_attrs("bold|underline")  # Attribute.BOLD | Attribute.UNDERLINED

    Raises:
        ValueError: On an unknown attribute or one listed twice
    """
    attrs = NO_ATTRIBUTES
    for name in token.split("|"):
        flag = parse_attribute(name)
        if flag & attrs:
            raise ValueError(f"duplicate attribute {name.strip()!r}")
        attrs |= flag
    return attrs


def format_attrs(attrs: Attribute) -> str:
    """Return the canonical ``a|b`` spelling of an attribute set."""
    return "|".join(name for flag, name in ATTRIBUTE_NAMES.items() if flag & attrs)
