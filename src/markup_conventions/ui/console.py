"""
console.py

PURPOSE: Rich console output for the command-line interface.
DEPENDENCIES: rich

ARCHITECTURE NOTES:
Author text is full of square brackets, which rich would read as its own
markup, so anything author-supplied goes through rich.markup.escape or is
printed as a Text object.

print_preview() approximates the HTML styling in the terminal: colour and
bold map directly, flash/pulse map to blink, glow maps to underline.
"""

from collections.abc import Iterable

from rich.color import Color, ColorParseError
from rich.console import Console
from rich.markup import escape
from rich.style import Style
from rich.table import Table
from rich.text import Text

from markup_conventions.models.convention import Convention, NamedColor
from markup_conventions.render.parser import PlainText, Segment
from markup_conventions.render.style import resolve_color

# Global console instance
console = Console()


def print_error(text: str) -> None:
    """Print an error message."""
    console.print(f"[red]{escape(text)}[/red]")


def print_success(text: str) -> None:
    """Print a success message."""
    console.print(f"[green]{escape(text)}[/green]")


def print_html(html: str) -> None:
    """Print rendered HTML verbatim."""
    console.print(html, markup=False, highlight=False, emoji=False, soft_wrap=True)


def terminal_color(value: str | None) -> Color | None:
    """Parse a CSS colour for the terminal; None if rich cannot show it."""
    if not value:
        return None
    hex_digits = value.lstrip("#")
    if value.startswith("#") and len(hex_digits) in (3, 4):
        value = "#" + "".join(ch * 2 for ch in hex_digits[:3])
    elif value.startswith("#") and len(hex_digits) == 8:
        value = "#" + hex_digits[:6]
    try:
        return Color.parse(value)
    except ColorParseError:
        return None


def rich_style(convention: Convention, keyword_color: str) -> Style:
    """Terminal approximation of a convention's style."""
    effects = convention.effects
    return Style(
        color=terminal_color(resolve_color(convention.color_policy, keyword_color)),
        bold=effects.bold,
        underline=effects.glow,
        blink=effects.flash or effects.pulse,
    )


def print_preview(
    segments: Iterable[Segment],
    conventions: dict[str, Convention],
    keyword_color: str,
) -> None:
    """Print parsed segments with terminal styling."""
    text = Text()
    for segment in segments:
        if isinstance(segment, PlainText):
            text.append(segment.text)
            continue
        convention = conventions.get(segment.key)
        style = rich_style(convention, keyword_color) if convention else Style()
        text.append(segment.text, style=style)
    console.print(text)


def print_conventions(conventions: Iterable[Convention], title: str = "Markup Conventions") -> None:
    """Print conventions as a table."""
    table = Table(title=title)
    table.add_column("Key", style="cyan")
    table.add_column("Syntax")
    table.add_column("Color")
    table.add_column("Effects")
    table.add_column("Description", style="dim")
    table.add_column("Origin")

    for convention in conventions:
        table.add_row(
            convention.key,
            Text(convention.syntax or convention.pair.syntax),
            convention.color,
            convention.effects.describe(),
            Text(convention.description),
            "built-in" if convention.builtin else "custom",
        )
    console.print(table)


def print_conflicts(conflicts: Iterable[Convention]) -> None:
    """Print the conventions a candidate conflicts with."""
    console.print("[bold red]Conflict detected![/bold red] This convention already exists:")
    for convention in conflicts:
        origin = "built-in" if convention.builtin else "custom"
        console.print(f"  {escape(convention.syntax)}  [cyan]{convention.key}[/cyan] ({origin})")


def print_colors(colors: Iterable[NamedColor]) -> None:
    """Print the colour palette with swatches."""
    table = Table(title="Markup Colors")
    table.add_column("Name")
    table.add_column("Value")
    table.add_column("Swatch")
    for color in colors:
        table.add_row(color.name, color.value, Text("██████", style=Style(color=color.value)))
    console.print(table)
