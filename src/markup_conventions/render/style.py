"""
style.py

PURPOSE: Compile a convention's colour policy and effects into inline CSS.
DEPENDENCIES: convention model

ARCHITECTURE NOTES:
compile_style() is deterministic and side-effect free:
1. Resolve the colour: literal -> itself, keyword -> the caller's keyword
   colour for this parse, inherit -> no colour declaration at all
2. Emit effects in a fixed order: glow, bold, flash, pulse

Glow is a text-shadow in currentColor, so the halo always takes the resolved
colour: the literal value, the keyword colour of this parse, or the inherited
colour of the surrounding text.

Flash and pulse refer to @keyframes registered once by the display surface
(ANIMATION_STYLESHEET) instead of embedding animation definitions per span.
When both are enabled they share one comma-joined `animation` declaration,
since a second declaration would override the first.
"""

from dataclasses import dataclass

from markup_conventions.models.convention import (
    ColorPolicy,
    Convention,
    Effect,
    Effects,
    InheritColor,
    KeywordColor,
    LiteralColor,
)

GLOW_SHADOW = (
    "0 0 5px currentColor, 0 0 10px currentColor, 0 0 15px currentColor, 0 0 20px currentColor"
)
FLASH_ANIMATION = "markup-flash 1s ease-in-out infinite"
PULSE_ANIMATION = "markup-pulse 2s ease infinite"

ANIMATION_STYLESHEET = """\
@keyframes markup-flash {
    0%, 100% { opacity: 1; }
    50% { opacity: 0.3; }
}
@keyframes markup-pulse {
    0%, 100% { transform: scale(1); }
    50% { transform: scale(0.75); }
}
"""


@dataclass(frozen=True)
class StyleDescription:
    """An ordered list of CSS declarations."""

    declarations: tuple[tuple[str, str], ...] = ()

    @property
    def css(self) -> str:
        return " ".join(f"{prop}: {value};" for prop, value in self.declarations)

    def get(self, prop: str) -> str | None:
        """Value of a declared property, or None."""
        for declared, value in self.declarations:
            if declared == prop:
                return value
        return None

    def __str__(self) -> str:
        return self.css

    def __bool__(self) -> bool:
        return bool(self.declarations)


def resolve_color(policy: ColorPolicy, keyword_color: str) -> str | None:
    """Resolve a colour policy to a CSS colour, or None for inherit."""
    if isinstance(policy, LiteralColor):
        return policy.value
    if isinstance(policy, KeywordColor):
        return keyword_color
    if isinstance(policy, InheritColor):
        return None
    raise TypeError(f"Unknown colour policy: {policy!r}")


def compile_style(policy: ColorPolicy, effects: Effects, keyword_color: str) -> StyleDescription:
    """
    Compile a colour policy and effect flags into a style description.

    Args:
        policy: How the span's colour is chosen
        effects: Which effects are enabled
        keyword_color: Colour for keyword conventions in this parse call

    Returns:
        StyleDescription (empty for inherit with no effects)
    """
    declarations: list[tuple[str, str]] = []

    color = resolve_color(policy, keyword_color)
    if color is not None:
        declarations.append(("color", color))

    animations: list[str] = []
    for effect in effects.active():
        if effect is Effect.GLOW:
            declarations.append(("text-shadow", GLOW_SHADOW))
        elif effect is Effect.BOLD:
            declarations.append(("font-weight", "bold"))
        elif effect is Effect.FLASH:
            animations.append(FLASH_ANIMATION)
        elif effect is Effect.PULSE:
            declarations.append(("display", "inline-block"))
            declarations.append(("transform-origin", "center"))
            animations.append(PULSE_ANIMATION)

    if animations:
        declarations.append(("animation", ", ".join(animations)))

    return StyleDescription(tuple(declarations))


def compile_convention_style(convention: Convention, keyword_color: str) -> StyleDescription:
    """Compile the style for a convention."""
    return compile_style(convention.color_policy, convention.effects, keyword_color)
