"""
convention.py

PURPOSE: Pydantic models for markup conventions and the fixed built-in set.
DEPENDENCIES: pydantic

ARCHITECTURE NOTES:
A Convention is a delimiter pair plus a colour policy and a set of effects.
Its JSON dump is also the persistence record for custom conventions:

    {key, syntax, opening, closing, description, example, color,
     effects: {glow, bold, flash, pulse}}

The colour is stored as a plain string ("keyword", "inherit", or a hex
colour) and exposed to the style compiler as a ColorPolicy value.
syntax/description/example are display metadata and never reach the parser.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_KEYWORD_COLOR = "#ff00ff"
DEFAULT_TERMINAL_KEYWORD_COLOR = "#00ffff"

KEYWORD = "keyword"
INHERIT = "inherit"

MAX_DELIMITER_LENGTH = 4

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
KEY_PATTERN = r"^[A-Za-z][A-Za-z0-9_-]*$"


@dataclass(frozen=True)
class LiteralColor:
    """Render with a fixed colour."""

    value: str


@dataclass(frozen=True)
class InheritColor:
    """Render with whatever colour is already in scope."""


@dataclass(frozen=True)
class KeywordColor:
    """Render with the keyword colour supplied at parse time."""


ColorPolicy = LiteralColor | InheritColor | KeywordColor


class Effect(Enum):
    """Visual effects. Declaration order is the compiled order."""

    GLOW = "glow"
    BOLD = "bold"
    FLASH = "flash"
    PULSE = "pulse"


@dataclass(frozen=True)
class DelimiterPair:
    """An opening/closing delimiter pair."""

    opening: str
    closing: str

    @property
    def syntax(self) -> str:
        """Display form, e.g. '<text>'."""
        return f"{self.opening}text{self.closing}"


@dataclass(frozen=True)
class NamedColor:
    """An entry in the author-facing colour palette."""

    name: str
    value: str


# High-contrast palette offered to authors
MARKUP_COLORS: tuple[NamedColor, ...] = (
    NamedColor("Cyan", "#00ffff"),
    NamedColor("Magenta", "#ff00ff"),
    NamedColor("Yellow", "#ffff00"),
    NamedColor("Red", "#ff0000"),
    NamedColor("Green", "#00ff00"),
    NamedColor("Blue", "#0000ff"),
    NamedColor("Orange", "#ff8800"),
    NamedColor("Pink", "#ff88ff"),
    NamedColor("Lime", "#88ff00"),
    NamedColor("Aqua", "#00ff88"),
    NamedColor("Purple", "#8800ff"),
    NamedColor("Gold", "#ffaa00"),
    NamedColor("White", "#ffffff"),
    NamedColor("Silver", "#cccccc"),
    NamedColor("Crimson", "#cc0000"),
    NamedColor("Emerald", "#00cc88"),
    NamedColor("Dark Gray", "#666666"),
)


def is_hex_color(value: str) -> bool:
    """Check whether a value is a #rgb/#rgba/#rrggbb/#rrggbbaa colour."""
    return bool(HEX_COLOR_PATTERN.match(value))


def resolve_color_name(value: str) -> str:
    """
    Normalize an author-supplied colour.

    Accepts "keyword", "inherit", a hex colour, or a palette name
    (case-insensitive). Returns the stored form.

    Raises:
        ValueError: If the value is none of those.
    """
    cleaned = value.strip()
    lowered = cleaned.lower()
    if lowered in (KEYWORD, INHERIT):
        return lowered
    if is_hex_color(cleaned):
        return cleaned.lower()
    for color in MARKUP_COLORS:
        if color.name.lower() == lowered:
            return color.value
    raise ValueError(f'Unknown colour "{value}"')


class Effects(BaseModel):
    """The effect flags of a convention."""

    model_config = ConfigDict(frozen=True)

    glow: bool = Field(default=False)
    bold: bool = Field(default=False)
    flash: bool = Field(default=False)
    pulse: bool = Field(default=False)

    @classmethod
    def of(cls, *effects: Effect) -> "Effects":
        """Build an Effects value from a set of Effect members."""
        return cls(**{effect.value: True for effect in effects})

    def active(self) -> tuple[Effect, ...]:
        """Enabled effects in compiled order (glow, bold, flash, pulse)."""
        return tuple(effect for effect in Effect if getattr(self, effect.value))

    def describe(self) -> str:
        """Comma-separated effect names, or 'no' when nothing is enabled."""
        names = [effect.value for effect in self.active()]
        return ", ".join(names) or "no"


class Convention(BaseModel):
    """
    A markup convention: delimiters plus colour and effects.

    Within built-in ∪ custom conventions no two may share the same
    (opening, closing) pair. That is enforced while authoring, not here.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, max_length=64, pattern=KEY_PATTERN)
    syntax: str = Field(default="")
    opening: str = Field(..., min_length=1, max_length=MAX_DELIMITER_LENGTH)
    closing: str = Field(..., min_length=1, max_length=MAX_DELIMITER_LENGTH)
    description: str = Field(default="")
    example: str = Field(default="")
    color: str = Field(
        default=INHERIT,
        description='"keyword", "inherit", or a hex colour',
    )
    effects: Effects = Field(default_factory=Effects)

    @field_validator("opening", "closing")
    @classmethod
    def check_delimiter(cls, v: str) -> str:
        """Delimiters are printable and contain no whitespace."""
        if not v.isprintable() or any(ch.isspace() for ch in v):
            raise ValueError("delimiters must be printable, non-whitespace characters")
        return v

    @field_validator("color", mode="before")
    @classmethod
    def check_color(cls, v: object) -> object:
        """Only keyword, inherit, or hex colours are allowed."""
        if not isinstance(v, str):
            return v
        if v in (KEYWORD, INHERIT) or is_hex_color(v):
            return v
        raise ValueError(f'color must be "keyword", "inherit", or a hex colour, got "{v}"')

    @property
    def pair(self) -> DelimiterPair:
        return DelimiterPair(self.opening, self.closing)

    @property
    def color_policy(self) -> ColorPolicy:
        if self.color == KEYWORD:
            return KeywordColor()
        if self.color == INHERIT:
            return InheritColor()
        return LiteralColor(self.color)

    @property
    def builtin(self) -> bool:
        return is_builtin_key(self.key)


BUILTIN_CONVENTIONS: Mapping[str, Convention] = MappingProxyType(
    {
        "angleBrackets": Convention(
            key="angleBrackets",
            syntax="<text>",
            opening="<",
            closing=">",
            description="Glows with keyword/NPC color (default purple/cyan)",
            example="The <ancient artifact> glows brightly.",
            color=KEYWORD,
            effects=Effects(glow=True),
        ),
        "squareBrackets": Convention(
            key="squareBrackets",
            syntax="[text]",
            opening="[",
            closing="]",
            description="Glows with same color (preserved/inherited)",
            example="You see [something mysterious] in the distance.",
            color=INHERIT,
            effects=Effects(glow=True),
        ),
        "exclamation": Convention(
            key="exclamation",
            syntax="!text!",
            opening="!",
            closing="!",
            description="Glows red (emphasis/warning)",
            example="!Danger! The path ahead is treacherous.",
            color="#ff0000",
            effects=Effects(glow=True),
        ),
    }
)


def is_builtin_key(key: str) -> bool:
    """Check whether a key names one of the fixed built-in conventions."""
    return key in BUILTIN_CONVENTIONS
