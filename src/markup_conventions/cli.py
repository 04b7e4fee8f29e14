"""
cli.py

PURPOSE: Command-line interface for authoring and previewing markup conventions.
DEPENDENCIES: typer, rich

ARCHITECTURE NOTES:
The CLI provides commands for:
- render: Parse text and print the HTML (or a terminal preview)
- detect: Show the delimiter pair an opening sequence describes
- list/add/update/remove: Manage custom conventions
- colors/stylesheet/config: Reference output for authors and hosts

Custom conventions live in a JSON store under the configured data directory.
"""

import logging
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from markup_conventions import __version__
from markup_conventions.config import Settings, get_settings
from markup_conventions.conventions import (
    ConflictResolution,
    ConventionAuthor,
    ConventionError,
    ConventionRegistry,
    CustomConventionStore,
    JsonFileKeyValueStore,
    SaveStatus,
    detect,
    draft_convention,
    find_conflicts,
)
from markup_conventions.conventions.detector import classify
from markup_conventions.models.convention import MARKUP_COLORS, Effects
from markup_conventions.observability import init_telemetry, shutdown_telemetry
from markup_conventions.render import (
    ANIMATION_STYLESHEET,
    MarkupParser,
    format_message_for_terminal,
)
from markup_conventions.ui import console as out

app = typer.Typer(
    name="markup-conventions",
    help="Author and preview markup conventions for game text.",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"markup-conventions version {__version__}")
        raise typer.Exit()


def build_registry(settings: Settings) -> ConventionRegistry:
    """Registry backed by the JSON store in the data directory."""
    store = CustomConventionStore(JsonFileKeyValueStore(settings.store_path()))
    return ConventionRegistry(store, failure_policy=settings.store_failure_policy)


@app.callback()
def main(
    ctx: typer.Context,
    _version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Markup Conventions - styled markup for game text."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    if init_telemetry(settings.otel):
        ctx.call_on_close(shutdown_telemetry)


@app.command()
def render(
    text: Annotated[str, typer.Argument(help="Text containing markup")],
    keyword_color: Annotated[
        str | None,
        typer.Option(
            "--keyword-color",
            "-k",
            help="Colour for keyword conventions (default from settings)",
        ),
    ] = None,
    terminal: Annotated[
        bool,
        typer.Option(
            "--terminal",
            "-t",
            help="Wrap the output in a terminal message envelope",
        ),
    ] = False,
    error: Annotated[
        bool,
        typer.Option(
            "--error",
            "-e",
            help="Use the error envelope (implies --terminal)",
        ),
    ] = False,
    preview: Annotated[
        bool,
        typer.Option(
            "--preview",
            "-p",
            help="Show a styled terminal preview instead of HTML",
        ),
    ] = False,
) -> None:
    """Render text with the active markup conventions."""
    settings = get_settings()
    color = keyword_color or settings.keyword_color

    try:
        registry = build_registry(settings)
        parser = MarkupParser(registry)

        if preview:
            conventions = {c.key: c for c in registry.all()}
            out.print_preview(parser.parse_segments(text, color), conventions, color)
            return

        if terminal or error:
            html = format_message_for_terminal(
                text, kind="error" if error else "info", keyword_color=color, parser=parser
            )
        else:
            html = parser.parse(text, color)
    except ConventionError as e:
        out.print_error(str(e))
        raise typer.Exit(1) from None

    out.print_html(html)


@app.command("detect")
def detect_cmd(
    opening: Annotated[str, typer.Argument(help="Opening sequence (1-4 characters)")],
) -> None:
    """Show the delimiter pair an opening sequence describes."""
    pair = detect(opening)
    if pair is None:
        out.print_error("Invalid pattern. Use 1-4 characters (e.g. . or .. or ,.)")
        raise typer.Exit(1)

    pattern_type = classify(opening)
    console.print(f"Opening: [bold]{escape(pair.opening)}[/bold]")
    console.print(f"Closing: [bold]{escape(pair.closing)}[/bold]")
    console.print(f"Syntax:  {escape(pair.syntax)}")
    console.print(f"Type:    {pattern_type.value if pattern_type else 'unknown'}")

    try:
        conflicts = find_conflicts(pair, build_registry(get_settings()))
    except ConventionError as e:
        out.print_error(str(e))
        raise typer.Exit(1) from None
    if conflicts:
        out.print_conflicts(conflicts)


@app.command("list")
def list_cmd() -> None:
    """List built-in and custom conventions."""
    try:
        conventions = build_registry(get_settings()).all()
    except ConventionError as e:
        out.print_error(str(e))
        raise typer.Exit(1) from None
    out.print_conventions(conventions)


@app.command()
def add(
    opening: Annotated[str, typer.Argument(help="Opening sequence (closing is derived)")],
    color: Annotated[
        str,
        typer.Option(
            "--color",
            "-c",
            help='"keyword", "inherit", a hex colour, or a palette name',
        ),
    ] = "inherit",
    glow: Annotated[bool, typer.Option("--glow/--no-glow", help="Glow effect")] = True,
    bold: Annotated[bool, typer.Option("--bold", help="Bold effect")] = False,
    flash: Annotated[bool, typer.Option("--flash", help="Flash animation")] = False,
    pulse: Annotated[bool, typer.Option("--pulse", help="Pulse animation")] = False,
    edit_existing: Annotated[
        bool,
        typer.Option(
            "--edit-existing",
            help="If the delimiters are taken, update that convention instead",
        ),
    ] = False,
) -> None:
    """Add a custom markup convention."""
    settings = get_settings()
    effects = Effects(glow=glow, bold=bold, flash=flash, pulse=pulse)

    try:
        candidate = draft_convention(opening, color=color, effects=effects)
        author = ConventionAuthor(build_registry(settings))
        resolution = (
            ConflictResolution.EDIT_EXISTING if edit_existing else ConflictResolution.REJECT
        )
        result = author.save(candidate, resolution)
    except (ConventionError, ValidationError, ValueError) as e:
        out.print_error(str(e))
        raise typer.Exit(1) from None

    if result.status is SaveStatus.CONFLICT:
        out.print_conflicts(result.conflicts)
        if any(c.builtin for c in result.conflicts):
            out.print_error("Built-in conventions cannot be edited. Choose another pattern.")
        else:
            out.print_error("Use --edit-existing to update it, or choose another pattern.")
        raise typer.Exit(1)

    saved = result.convention
    assert saved is not None
    verb = "Updated" if result.status is SaveStatus.UPDATED else "Added"
    out.print_success(f"{verb} {saved.key}: {saved.syntax}")
    out.print_html(MarkupParser(author.registry).parse(saved.example, settings.keyword_color))


@app.command()
def update(
    key: Annotated[str, typer.Argument(help="Key of the custom convention")],
    opening: Annotated[
        str | None,
        typer.Option("--opening", "-o", help="New opening sequence"),
    ] = None,
    color: Annotated[
        str | None,
        typer.Option("--color", "-c", help="New colour"),
    ] = None,
    glow: Annotated[bool | None, typer.Option("--glow/--no-glow", help="Glow effect")] = None,
    bold: Annotated[bool | None, typer.Option("--bold/--no-bold", help="Bold effect")] = None,
    flash: Annotated[bool | None, typer.Option("--flash/--no-flash", help="Flash")] = None,
    pulse: Annotated[bool | None, typer.Option("--pulse/--no-pulse", help="Pulse")] = None,
) -> None:
    """Edit a custom markup convention."""
    try:
        author = ConventionAuthor(build_registry(get_settings()))
        effects = None
        flags = {"glow": glow, "bold": bold, "flash": flash, "pulse": pulse}
        if any(value is not None for value in flags.values()):
            current = author.registry.get(key)
            base = current.effects if current else Effects()
            changes = {name: value for name, value in flags.items() if value is not None}
            effects = base.model_copy(update=changes)
        result = author.update(key, raw_opening=opening, color=color, effects=effects)
    except (ConventionError, ValidationError, ValueError) as e:
        out.print_error(str(e))
        raise typer.Exit(1) from None

    if result.status is SaveStatus.CONFLICT:
        out.print_conflicts(result.conflicts)
        raise typer.Exit(1)

    saved = result.convention
    assert saved is not None
    out.print_success(f"Updated {saved.key}: {saved.syntax}")


@app.command()
def remove(
    key: Annotated[str, typer.Argument(help="Key of the custom convention")],
) -> None:
    """Remove a custom markup convention."""
    try:
        removed = ConventionAuthor(build_registry(get_settings())).remove(key)
    except ConventionError as e:
        out.print_error(str(e))
        raise typer.Exit(1) from None
    out.print_success(f"Removed {removed.key}: {removed.syntax}")


@app.command()
def colors() -> None:
    """Show the colour palette offered to authors."""
    out.print_colors(MARKUP_COLORS)


@app.command()
def stylesheet() -> None:
    """Print the @keyframes the display surface must register."""
    out.print_html(ANIMATION_STYLESHEET)


@app.command("config")
def config_cmd() -> None:
    """Show the current configuration."""
    settings = get_settings()
    console.print("[bold]Current Configuration:[/bold]")
    console.print(f"  Data directory: {settings.data_dir}")
    console.print(f"  Log level: {settings.log_level}")
    console.print(f"  Debug: {settings.debug}")
    console.print(f"  Keyword color: {settings.keyword_color}")
    console.print(f"  Store failure policy: {settings.store_failure_policy}")
    console.print()
    console.print("[bold]OpenTelemetry Settings:[/bold]")
    console.print(f"  Enabled: {settings.otel.enabled}")
    console.print(f"  Service name: {settings.otel.service_name}")
    endpoint_status = settings.otel.endpoint if settings.otel.endpoint else "(console only)"
    console.print(f"  Endpoint: {endpoint_status}")


if __name__ == "__main__":
    app()
