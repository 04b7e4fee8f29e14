"""
TEST DOC: Terminal Envelope

WHAT: Tests for wrapping parsed messages for terminal display
WHY: The display surface styles info and error messages by class
HOW: Format messages and check the envelope and its content

CASES:
- Info and error envelopes
- Default keyword colour is cyan

EDGE CASES:
- Empty text renders nothing
- Markup-free HTML in the message stays escaped inside the envelope
"""

from markup_conventions.render.parser import MarkupParser
from markup_conventions.render.terminal import format_message_for_terminal


class TestFormatMessage:
    """Tests for format_message_for_terminal()."""

    def test_info_envelope(self):
        html = format_message_for_terminal("You arrive.")
        assert html == '<div class="info-message">You arrive.</div>'

    def test_error_envelope(self):
        html = format_message_for_terminal("!No! You cannot.", kind="error")
        assert html.startswith('<div class="error-message"><span class="markup-exclamation"')
        assert html.endswith(" You cannot.</div>")

    def test_default_keyword_color(self):
        html = format_message_for_terminal("Talk to <Mira>.")
        assert "color: #00ffff;" in html

    def test_empty(self):
        assert format_message_for_terminal("") == ""

    def test_escaped_inside_envelope(self):
        html = format_message_for_terminal("a & b")
        assert html == '<div class="info-message">a &amp; b</div>'

    def test_uses_given_parser(self, parser: MarkupParser, store, dots):
        store.save({dots.key: dots})
        html = format_message_for_terminal("..hi..", parser=parser)
        assert 'class="markup-custom_dots"' in html
