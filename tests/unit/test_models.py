"""
TEST DOC: Convention Models

WHAT: Tests for Convention, Effects, colour policies, and the built-in set.
WHY: The convention model doubles as the persistence record, so validation
     must keep bad colours and delimiters out of the store.
HOW: Test valid/invalid data and the derived properties.

CASES:
- Built-in set has the three fixed conventions
- Colour strings map to colour policies
- Effects report active effects in compiled order
- Palette names resolve to hex values

EDGE CASES:
- CSS injection through the colour field is rejected
- Whitespace and overlong delimiters are rejected
- Keys must be usable in a CSS class name
"""

import pytest
from pydantic import ValidationError

from markup_conventions.models.convention import (
    BUILTIN_CONVENTIONS,
    MARKUP_COLORS,
    Convention,
    DelimiterPair,
    Effect,
    Effects,
    InheritColor,
    KeywordColor,
    LiteralColor,
    is_builtin_key,
    resolve_color_name,
)


class TestBuiltins:
    """Tests for the fixed built-in conventions."""

    def test_three_builtins(self):
        """Exactly angle brackets, square brackets, and exclamation."""
        assert set(BUILTIN_CONVENTIONS) == {"angleBrackets", "squareBrackets", "exclamation"}

    def test_angle_brackets_use_keyword_color(self):
        convention = BUILTIN_CONVENTIONS["angleBrackets"]
        assert convention.pair == DelimiterPair("<", ">")
        assert convention.color_policy == KeywordColor()
        assert convention.effects.active() == (Effect.GLOW,)

    def test_square_brackets_inherit(self):
        convention = BUILTIN_CONVENTIONS["squareBrackets"]
        assert convention.pair == DelimiterPair("[", "]")
        assert convention.color_policy == InheritColor()

    def test_exclamation_is_red(self):
        convention = BUILTIN_CONVENTIONS["exclamation"]
        assert convention.pair == DelimiterPair("!", "!")
        assert convention.color_policy == LiteralColor("#ff0000")

    def test_builtin_mapping_is_read_only(self):
        """Built-ins cannot be reassigned."""
        with pytest.raises(TypeError):
            BUILTIN_CONVENTIONS["angleBrackets"] = BUILTIN_CONVENTIONS["exclamation"]  # type: ignore[index]

    def test_is_builtin_key(self):
        assert is_builtin_key("exclamation")
        assert not is_builtin_key("custom_abc")
        assert BUILTIN_CONVENTIONS["exclamation"].builtin


class TestEffects:
    """Tests for the Effects model."""

    def test_active_in_fixed_order(self):
        """Active effects come out glow, bold, flash, pulse regardless of input order."""
        effects = Effects.of(Effect.PULSE, Effect.GLOW, Effect.FLASH)
        assert effects.active() == (Effect.GLOW, Effect.FLASH, Effect.PULSE)

    def test_no_effects(self):
        assert Effects().active() == ()
        assert Effects().describe() == "no"

    def test_describe(self):
        assert Effects(glow=True, bold=True).describe() == "glow, bold"


class TestConvention:
    """Tests for Convention validation."""

    def test_record_round_trip(self):
        """The JSON dump has the persistence record fields."""
        convention = BUILTIN_CONVENTIONS["exclamation"]
        record = convention.model_dump(mode="json")
        assert set(record) == {
            "key",
            "syntax",
            "opening",
            "closing",
            "description",
            "example",
            "color",
            "effects",
        }
        assert record["effects"] == {"glow": True, "bold": False, "flash": False, "pulse": False}
        assert Convention.model_validate(record) == convention

    @pytest.mark.parametrize("color", ["#fff", "#00ffAA", "#11223344", "keyword", "inherit"])
    def test_valid_colors(self, color: str):
        convention = Convention(key="c", opening=".", closing=".", color=color)
        assert convention.color == color

    @pytest.mark.parametrize(
        "color",
        ["red", "#ff00ff; background: url(x)", '#fff" onmouseover="x', "", "#12345"],
    )
    def test_invalid_colors_rejected(self, color: str):
        """Only keyword, inherit, and hex colours get into a style attribute."""
        with pytest.raises(ValidationError):
            Convention(key="c", opening=".", closing=".", color=color)

    @pytest.mark.parametrize("delimiter", ["", "abcde", " ", "a b", "\t"])
    def test_invalid_delimiters_rejected(self, delimiter: str):
        with pytest.raises(ValidationError):
            Convention(key="c", opening=delimiter, closing=".")

    @pytest.mark.parametrize("key", ["1abc", "has space", 'quote"', ""])
    def test_invalid_keys_rejected(self, key: str):
        with pytest.raises(ValidationError):
            Convention(key=key, opening=".", closing=".")

    def test_literal_color_policy(self):
        convention = Convention(key="c", opening="~", closing="~", color="#00ff00")
        assert convention.color_policy == LiteralColor("#00ff00")

    def test_frozen(self):
        convention = Convention(key="c", opening="~", closing="~")
        with pytest.raises(ValidationError):
            convention.opening = "*"  # type: ignore[misc]


class TestColors:
    """Tests for palette and colour name resolution."""

    def test_palette_has_seventeen_colors(self):
        assert len(MARKUP_COLORS) == 17
        assert MARKUP_COLORS[0].name == "Cyan"

    def test_resolve_palette_name(self):
        assert resolve_color_name("gold") == "#ffaa00"
        assert resolve_color_name("Dark Gray") == "#666666"

    def test_resolve_keywords_and_hex(self):
        assert resolve_color_name("Keyword") == "keyword"
        assert resolve_color_name("inherit") == "inherit"
        assert resolve_color_name("#ABCDEF") == "#abcdef"

    def test_resolve_unknown(self):
        with pytest.raises(ValueError):
            resolve_color_name("chartreuse-ish")
