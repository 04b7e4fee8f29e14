"""
detector.py

PURPOSE: Derive an opening/closing delimiter pair from an author's input.
DEPENDENCIES: convention model

ARCHITECTURE NOTES:
Authors type only the opening half; the closing half is derived:
    "."   -> (".", ".")      single
    ".."  -> ("..", "..")    double
    ",."  -> (",.", ".,")    mixed, closing is the reverse
    3-4 chars -> split at the midpoint, closing is the reversed second half

The 3-4 character rule is best-effort: different inputs may derive the
same pair, and the conflict checker catches that.
"""

from enum import Enum

from markup_conventions.models.convention import MAX_DELIMITER_LENGTH, DelimiterPair


class PatternType(Enum):
    """How a delimiter pair was derived."""

    SINGLE = "single"
    DOUBLE = "double"
    MIXED = "mixed"
    CUSTOM = "custom"


def classify(raw_opening: str) -> PatternType | None:
    """Return the pattern type for an opening sequence, or None if invalid."""
    if not raw_opening or len(raw_opening) > MAX_DELIMITER_LENGTH:
        return None
    if len(raw_opening) == 1:
        return PatternType.SINGLE
    if len(raw_opening) == 2:
        return PatternType.DOUBLE if raw_opening[0] == raw_opening[1] else PatternType.MIXED
    return PatternType.CUSTOM


def detect(raw_opening: str) -> DelimiterPair | None:
    """
    Detect the delimiter pair described by an opening sequence.

    Args:
        raw_opening: 1-4 characters typed by the author

    Returns:
        The derived DelimiterPair, or None if the input is empty or too long
        (the caller should ask the author to re-enter it)
    """
    pattern_type = classify(raw_opening)
    if pattern_type is None:
        return None

    if pattern_type in (PatternType.SINGLE, PatternType.DOUBLE):
        return DelimiterPair(raw_opening, raw_opening)

    if pattern_type is PatternType.MIXED:
        return DelimiterPair(raw_opening, raw_opening[::-1])

    half = len(raw_opening) // 2
    return DelimiterPair(raw_opening[:half], raw_opening[half:][::-1])
