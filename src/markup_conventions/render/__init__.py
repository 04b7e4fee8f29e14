"""Rendering of markup conventions to styled HTML."""

from markup_conventions.render.parser import (
    MarkupParser,
    PlainText,
    RenderedSpan,
    Segment,
    parse,
    parse_segments,
    render,
)
from markup_conventions.render.style import (
    ANIMATION_STYLESHEET,
    StyleDescription,
    compile_convention_style,
    compile_style,
)
from markup_conventions.render.terminal import format_message_for_terminal

__all__ = [
    "ANIMATION_STYLESHEET",
    "MarkupParser",
    "PlainText",
    "RenderedSpan",
    "Segment",
    "StyleDescription",
    "compile_convention_style",
    "compile_style",
    "format_message_for_terminal",
    "parse",
    "parse_segments",
    "render",
]
