"""CLI interface for typing-svg."""

import logging
import os
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from .animation_pipeline import build_timeline
from .constants import (
    DEFAULT_BACKGROUND,
    DEFAULT_COLOR,
    DEFAULT_ERASE_RATE,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_FONT_WEIGHT,
    DEFAULT_HEIGHT,
    DEFAULT_PAUSE_MS,
    DEFAULT_PRINT_RATE,
    DEFAULT_WIDTH,
    LOG_LEVEL_ENV,
)
from .output import JsonOutputProvider, resolve_output_provider, supported_output_formats
from .params import build_params, split_lines
from .timeline.cursor import CURSOR_GLYPHS
from .timeline.erase import DEFAULT_ERASE_MODE_NAME, supported_erase_mode_names
from .timeline.models import TypingTimeline

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)
SUPPORTED_OUTPUT_FORMATS_TEXT = ", ".join(supported_output_formats()).upper()


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


def _configure_logging(level_name: str | None) -> None:
    level = logging.getLevelName((level_name or "WARNING").upper())
    if not isinstance(level, int):
        raise CLIError(f"Unknown log level '{level_name}'")
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def main(
    lines: str = typer.Argument(..., help="Lines to type, separated by ';'"),
    out: str = typer.Option(
        "typing.svg",
        "--output",
        "-out",
        "-o",
        help=f"Output file ({SUPPORTED_OUTPUT_FORMATS_TEXT})",
    ),
    print_speed: float = typer.Option(
        DEFAULT_PRINT_RATE, "--print-speed", help="Characters typed per second"
    ),
    erase_speed: float = typer.Option(
        DEFAULT_ERASE_RATE, "--erase-speed", help="Characters erased per second"
    ),
    pause: float = typer.Option(
        DEFAULT_PAUSE_MS, "--pause", help="Pause between lines in milliseconds"
    ),
    post_erase_pause: float | None = typer.Option(
        None, "--post-erase-pause", help="Pause after erasing in milliseconds (defaults to --pause)"
    ),
    repeat: bool = typer.Option(True, "--repeat/--no-repeat", help="Loop the animation"),
    multi_line: bool = typer.Option(
        True, "--multi-line/--single-line", help="Stack lines instead of replacing them"
    ),
    erase_mode: str = typer.Option(
        DEFAULT_ERASE_MODE_NAME,
        "--erase-mode",
        "-e",
        help=f"How lines disappear ({', '.join(supported_erase_mode_names())})",
    ),
    cursor: str = typer.Option(
        "none",
        "--cursor",
        "-c",
        help=f"Cursor style ({', '.join(CURSOR_GLYPHS)})",
    ),
    width: float = typer.Option(DEFAULT_WIDTH, "--width", help="Canvas width"),
    height: float = typer.Option(DEFAULT_HEIGHT, "--height", help="Canvas height"),
    font_size: float = typer.Option(DEFAULT_FONT_SIZE, "--font-size", help="Font size in pixels"),
    font_weight: int = typer.Option(DEFAULT_FONT_WEIGHT, "--font-weight", help="Font weight"),
    font_family: str = typer.Option(DEFAULT_FONT_FAMILY, "--font-family", help="CSS font family"),
    font_path: str | None = typer.Option(
        None,
        "--font-path",
        help="TrueType font used for measuring and embedding (or TYPING_SVG_FONT_PATH)",
    ),
    letter_spacing: str = typer.Option(
        "normal", "--letter-spacing", help="Letter spacing (normal, 4px, 0.1em)"
    ),
    color: str = typer.Option(DEFAULT_COLOR, "--color", help="Text color"),
    background: str = typer.Option(DEFAULT_BACKGROUND, "--background", help="Background color"),
    horizontal_align: str = typer.Option("center", "--h-align", help="left, center or right"),
    vertical_align: str = typer.Option("middle", "--v-align", help="top, middle or bottom"),
    dump_json: bool = typer.Option(
        False, "--dump-json", help="Print the synthesized timeline as JSON"
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (or TYPING_SVG_LOG_LEVEL)"
    ),
) -> None:
    """
    Generate an animated SVG that types (and erases) the given lines.

    Examples:
      # Two stacked lines with a straight cursor
      typing-svg "Hello;World" -o hello.svg --cursor straight

      # Replace lines in one slot and play once
      typing-svg "One;Two;Three" --single-line --no-repeat
    """
    try:
        _configure_logging(log_level or os.getenv(LOG_LEVEL_ENV))

        text_lines = split_lines(lines)
        if not text_lines:
            raise CLIError("At least one non-empty line is required")

        params = build_params(
            print_rate=print_speed,
            erase_rate=erase_speed,
            pause_ms=pause,
            post_erase_pause_ms=post_erase_pause,
            repeat=repeat,
            multi_line=multi_line,
            erase_mode=erase_mode,
            cursor_style=cursor,
            width=width,
            height=height,
            font_size=font_size,
            font_weight=font_weight,
            font_family=font_family,
            font_path=font_path,
            letter_spacing=letter_spacing,
            color=color,
            background=background,
            horizontal_align=horizontal_align,
            vertical_align=vertical_align,
        )

        timeline = build_timeline(text_lines, params)
        console.print(
            f"[bold blue]Synthesized {timeline.topology.value} timeline "
            f"for {len(timeline.lines)} line(s)...[/bold blue]"
        )

        if dump_json:
            console.print_json(JsonOutputProvider().encode(timeline).decode("utf-8"))

        _write_output(timeline, out)

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


def _write_output(timeline: TypingTimeline, output_path: str) -> None:
    """Encode the timeline in the format implied by ``output_path`` and save it."""
    try:
        provider = resolve_output_provider(output_path)
    except ValueError as exc:
        raise CLIError(str(exc))

    ext = Path(output_path).suffix[1:].upper()
    try:
        provider.write(provider.encode(timeline))
    except OSError as e:
        raise CLIError(f"Failed to save file '{output_path}': {e}")
    console.print(f"[green]✓[/green] {ext} saved to {output_path}")


app = typer.Typer()
app.command()(main)

if __name__ == "__main__":
    app()
