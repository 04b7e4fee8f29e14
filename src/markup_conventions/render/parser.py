"""
parser.py

PURPOSE: Turn game text with markup conventions into sanitized, styled HTML.
DEPENDENCIES: markupsafe, registry, style compiler

ARCHITECTURE NOTES:
The working text is a sequence of units: single plain characters and
already-rendered spans. Conventions are applied one at a time, longest
opening first, each pass replacing every match with one RenderedSpan unit.

    "The <old> [key]"
        angleBrackets  -> T h e _ <Span old> _ [ k e y ]
        squareBrackets -> T h e _ <Span old> _ <Span key>

Rules:
- Delimiters only match runs of plain characters; rendered spans are atomic
  but may sit inside a later (shorter) convention's span, which nests them
- Matching is lazy: a span ends at the first closing token after at least
  one unit of content
- A closing token right after the opening is content only if it is truly
  terminal: no opening follows it before the next closing. Otherwise it
  starts the next span and the current opening stays plain text
- Plain text is escaped exactly once, when it is rendered; RenderedSpan
  HTML is never escaped again

Unmatched delimiters are plain text. parse() never raises for any input.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from markupsafe import Markup, escape

from markup_conventions.conventions.registry import ConventionRegistry, sort_longest_first
from markup_conventions.models.convention import DEFAULT_KEYWORD_COLOR, Convention
from markup_conventions.observability import get_tracer
from markup_conventions.render.style import StyleDescription, compile_convention_style

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

SPAN_TEMPLATE = Markup('<span class="markup-{key}" style="{style}">{content}</span>')


@dataclass(frozen=True)
class PlainText:
    """Text that was never claimed by a convention; escaped on render."""

    text: str


@dataclass(frozen=True)
class RenderedSpan:
    """A styled span produced from a match; already safe HTML."""

    key: str
    html: Markup
    text: str = ""


Segment = PlainText | RenderedSpan
Unit = str | RenderedSpan


def _token_positions(units: Sequence[Unit], token: str) -> list[int]:
    """Every index where token starts in a run of plain characters."""
    positions: list[int] = []
    width = len(token)
    for i in range(len(units) - width + 1):
        if all(units[i + offset] == ch for offset, ch in enumerate(token)):
            positions.append(i)
    return positions


def _first_at_or_after(positions: list[int], index: int) -> int | None:
    found = bisect_left(positions, index)
    return positions[found] if found < len(positions) else None


class _ConventionPass:
    """One scan of the units for a single convention."""

    def __init__(self, units: list[Unit], convention: Convention, style: StyleDescription):
        self.units = units
        self.convention = convention
        self.style = style
        self.openings = _token_positions(units, convention.opening)
        self.closings = _token_positions(units, convention.closing)
        self._opening_starts = set(self.openings)

    def _is_truly_terminal(self, closing_at: int) -> bool:
        """True if no opening follows this closing before the next closing."""
        after = closing_at + len(self.convention.closing)
        next_opening = _first_at_or_after(self.openings, after)
        if next_opening is None:
            return True
        next_closing = _first_at_or_after(self.closings, after)
        return next_closing is not None and next_closing < next_opening

    def match_end(self, start: int) -> int | None:
        """
        End index (exclusive) of a match whose opening starts at start.

        Returns None if the opening at start does not begin a span.
        """
        content_start = start + len(self.convention.opening)
        closing_at = _first_at_or_after(self.closings, content_start)
        if closing_at is None:
            return None

        if closing_at == content_start:
            if not self._is_truly_terminal(closing_at):
                return None
            # a terminal closing is content; the span ends at the next one
            closing_at = _first_at_or_after(self.closings, closing_at + len(self.convention.closing))
            if closing_at is None:
                return None

        return closing_at + len(self.convention.closing)

    def render_span(self, inner: Sequence[Unit]) -> RenderedSpan:
        content = Markup("").join(unit if isinstance(unit, str) else unit.html for unit in inner)
        html = SPAN_TEMPLATE.format(key=self.convention.key, style=self.style.css, content=content)
        text = "".join(unit if isinstance(unit, str) else unit.text for unit in inner)
        return RenderedSpan(self.convention.key, html, text)

    def run(self) -> tuple[list[Unit], int]:
        """Apply the convention left to right; returns (units, match count)."""
        if not self.openings or not self.closings:
            return self.units, 0

        result: list[Unit] = []
        matches = 0
        opening_width = len(self.convention.opening)
        closing_width = len(self.convention.closing)
        i = 0
        while i < len(self.units):
            end = self.match_end(i) if i in self._opening_starts else None
            if end is None:
                result.append(self.units[i])
                i += 1
                continue
            inner = self.units[i + opening_width : end - closing_width]
            result.append(self.render_span(inner))
            matches += 1
            i = end
        return result, matches


def parse_segments(
    text: str,
    conventions: Iterable[Convention],
    keyword_color: str = DEFAULT_KEYWORD_COLOR,
) -> list[Segment]:
    """
    Split text into plain and rendered segments.

    Args:
        text: Raw author text
        conventions: Active conventions (sorted longest opening first here)
        keyword_color: Colour for keyword conventions in this call

    Returns:
        Ordered segments; adjacent plain characters are merged
    """
    if not text or not isinstance(text, str):
        return []

    keyword_color = keyword_color or DEFAULT_KEYWORD_COLOR
    units: list[Unit] = list(text)

    for convention in sort_longest_first(list(conventions)):
        style = compile_convention_style(convention, keyword_color)
        units, matches = _ConventionPass(units, convention, style).run()
        if matches:
            logger.debug(f"{convention.key}: {matches} span(s)")

    segments: list[Segment] = []
    plain: list[str] = []
    for unit in units:
        if isinstance(unit, str):
            plain.append(unit)
            continue
        if plain:
            segments.append(PlainText("".join(plain)))
            plain = []
        segments.append(unit)
    if plain:
        segments.append(PlainText("".join(plain)))
    return segments


def render(segments: Iterable[Segment]) -> str:
    """Escape plain segments and join them with rendered spans."""
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, PlainText):
            parts.append(str(escape(segment.text)))
        else:
            parts.append(str(segment.html))
    return "".join(parts)


class MarkupParser:
    """
    Parses text against a registry's conventions.

    The registry is reloaded on every call, so newly authored conventions
    apply immediately. Each call works on its own snapshot and keeps no
    state between calls.

    Usage:
        parser = MarkupParser(registry)
        html = parser.parse("The <ancient artifact> glows.", "#00ffff")
    """

    def __init__(self, registry: ConventionRegistry | None = None):
        self.registry = registry or ConventionRegistry()

    def parse_segments(self, text: str, keyword_color: str = DEFAULT_KEYWORD_COLOR) -> list[Segment]:
        return parse_segments(text, self.registry.snapshot(), keyword_color)

    def parse(self, text: str, keyword_color: str = DEFAULT_KEYWORD_COLOR) -> str:
        """
        Render text to sanitized HTML.

        Args:
            text: Raw author text
            keyword_color: Colour for keyword conventions in this call

        Returns:
            Escaped text with <span class="markup-{key}"> fragments
        """
        with tracer.start_as_current_span("markup.parse") as span:
            conventions = self.registry.snapshot()
            span.set_attribute("markup.text_length", len(text or ""))
            span.set_attribute("markup.convention_count", len(conventions))
            segments = parse_segments(text, conventions, keyword_color)
            span.set_attribute(
                "markup.span_count", sum(isinstance(s, RenderedSpan) for s in segments)
            )
            return render(segments)


def parse(
    text: str,
    registry: ConventionRegistry | None = None,
    keyword_color: str = DEFAULT_KEYWORD_COLOR,
) -> str:
    """Render text with the built-in conventions plus the registry's custom ones."""
    return MarkupParser(registry).parse(text, keyword_color)
