"""
terminal.py

PURPOSE: Wrap parsed text in the message envelope the terminal display expects.
DEPENDENCIES: markupsafe, parser

ARCHITECTURE NOTES:
Game messages are rendered once, on the server, and sent to every client
as ready HTML. Clients only parse text they generate themselves.
"""

import logging
from typing import Literal

from markupsafe import Markup

from markup_conventions.models.convention import DEFAULT_TERMINAL_KEYWORD_COLOR
from markup_conventions.render.parser import MarkupParser

logger = logging.getLogger(__name__)

MessageKind = Literal["info", "error"]

MESSAGE_TEMPLATE = Markup('<div class="{css_class}">{content}</div>')


def message_class(kind: MessageKind) -> str:
    return "error-message" if kind == "error" else "info-message"


def format_message_for_terminal(
    text: str,
    kind: MessageKind = "info",
    keyword_color: str = DEFAULT_TERMINAL_KEYWORD_COLOR,
    parser: MarkupParser | None = None,
) -> str:
    """
    Parse a game message and wrap it for terminal display.

    Args:
        text: Raw message text with markup
        kind: "info" or "error"
        keyword_color: Colour for keyword conventions
        parser: Parser to use (built-in conventions only if omitted)

    Returns:
        '<div class="info-message">...</div>' (or error-message), or "" for empty text
    """
    if not text:
        logger.debug("Empty terminal message")
        return ""

    parser = parser or MarkupParser()
    content = Markup(parser.parse(text, keyword_color))
    return str(MESSAGE_TEMPLATE.format(css_class=message_class(kind), content=content))
