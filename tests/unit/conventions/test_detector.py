"""
TEST DOC: Pattern Detector

WHAT: Tests for deriving delimiter pairs from an opening sequence
WHY: Authors only type the opening half, so the closing half must be predictable
HOW: Check each pattern shape and the invalid inputs

CASES:
- Single character
- Doubled character
- Mixed two characters (closing reversed)
- Three and four characters (split at the midpoint)

EDGE CASES:
- Empty input
- Input longer than four characters
"""

import pytest

from markup_conventions.conventions.detector import PatternType, classify, detect
from markup_conventions.models.convention import DelimiterPair


class TestDetect:
    """Tests for detect()."""

    def test_single(self):
        assert detect(".") == DelimiterPair(".", ".")

    def test_double(self):
        assert detect("..") == DelimiterPair("..", "..")

    def test_mixed(self):
        """Closing is the reverse of the opening."""
        assert detect(",.") == DelimiterPair(",.", ".,")

    def test_three_characters(self):
        """First half opens, reversed second half closes."""
        assert detect("*~=") == DelimiterPair("*", "=~")

    def test_four_characters(self):
        assert detect("{%-#") == DelimiterPair("{%", "#-")

    def test_four_symmetric(self):
        assert detect("(())") == DelimiterPair("((", "))")

    @pytest.mark.parametrize("raw", ["", "abcde", "....."])
    def test_invalid_returns_none(self, raw: str):
        assert detect(raw) is None

    def test_syntax(self):
        assert detect(",.").syntax == ",.text.,"


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (".", PatternType.SINGLE),
            ("..", PatternType.DOUBLE),
            (",.", PatternType.MIXED),
            ("abc", PatternType.CUSTOM),
            ("abcd", PatternType.CUSTOM),
            ("", None),
            ("abcde", None),
        ],
    )
    def test_classify(self, raw: str, expected: PatternType | None):
        assert classify(raw) == expected
