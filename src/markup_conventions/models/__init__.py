"""Domain models for markup conventions."""

from markup_conventions.models.convention import (
    BUILTIN_CONVENTIONS,
    DEFAULT_KEYWORD_COLOR,
    DEFAULT_TERMINAL_KEYWORD_COLOR,
    MARKUP_COLORS,
    ColorPolicy,
    Convention,
    DelimiterPair,
    Effect,
    Effects,
    InheritColor,
    KeywordColor,
    LiteralColor,
    NamedColor,
    is_builtin_key,
    is_hex_color,
    resolve_color_name,
)

__all__ = [
    "BUILTIN_CONVENTIONS",
    "DEFAULT_KEYWORD_COLOR",
    "DEFAULT_TERMINAL_KEYWORD_COLOR",
    "MARKUP_COLORS",
    "ColorPolicy",
    "Convention",
    "DelimiterPair",
    "Effect",
    "Effects",
    "InheritColor",
    "KeywordColor",
    "LiteralColor",
    "NamedColor",
    "is_builtin_key",
    "is_hex_color",
    "resolve_color_name",
]
