"""
CLI Interface
=============
Command-line interface for the schematic analyzer.

Usage:
    python -m schematic.cli solve <input_path> [options]
    python -m schematic.cli info <input_path>
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .engine import EngineConfig, SolverEngine
from .errors import MalformedNumberError
from .scanner import describe_grid

console = Console()

encoding_option = click.option(
    "--encoding",
    default=EngineConfig.encoding,
    show_default=True,
    help="Text encoding of the input file",
)


@click.group()
@click.version_option(version=__version__, prog_name="schematic")
def cli():
    """Engine Schematic Analyzer: part numbers and gear ratios."""
    pass


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.option(
    "--log-file",
    default=None,
    help="Path to log file",
)
@click.option(
    "--show-parts",
    is_flag=True,
    default=False,
    help="List every part number",
)
@click.option(
    "--show-gears",
    is_flag=True,
    default=False,
    help="List every gear",
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output only JSON result to stdout (for programmatic use)",
)
@encoding_option
def solve(
    input_path: str,
    encoding: str,
    log_level: str,
    log_file: str,
    show_parts: bool,
    show_gears: bool,
    json_output: bool,
):
    """Find part numbers and gears, and print both sums."""

    if json_output:
        # Suppress console output for JSON mode
        log_level = "ERROR"

    config = EngineConfig(
        encoding=encoding, log_level=log_level, log_file=log_file
    )

    if not json_output:
        console.print()
        console.print(
            Panel.fit(
                f"[bold cyan]Engine Schematic Analyzer v{__version__}[/]\n"
                f"[dim]Solving: {escape(os.path.basename(input_path))}[/]",
                border_style="cyan",
            )
        )
        console.print()

    try:
        engine = SolverEngine(config)
        result = engine.solve(input_path)
    except (FileNotFoundError, RuntimeError, MalformedNumberError) as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/] {escape(str(e))}")
        if log_level == "DEBUG":
            console.print_exception()
        sys.exit(1)

    if json_output:
        print(json.dumps(
            result.model_dump(),
            indent=2,
            ensure_ascii=False,
            default=str,
        ))
        return

    _display_report(result)
    if show_parts:
        _display_parts(result.schematic)
    if show_gears:
        _display_gears(result.schematic)


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@encoding_option
def info(input_path: str, encoding: str):
    """Display schematic grid information."""

    raw = Path(input_path).read_bytes()
    try:
        document = raw.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        console.print(
            f"[red]Error:[/] Could not decode {escape(input_path)} "
            f"as {escape(encoding)}: {escape(str(e))}"
        )
        sys.exit(1)

    grid = describe_grid(document)

    console.print()
    table = Table(title="Schematic Information", border_style="cyan")
    table.add_column("Property", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("File", os.path.basename(input_path))
    table.add_row("File Size", f"{len(raw)} bytes")
    table.add_row("Lines", str(grid.line_count))
    table.add_row("Empty Lines", str(grid.empty_line_count))
    table.add_row("Max Width (chars)", str(grid.max_width_chars))
    table.add_row("Max Width (bytes)", str(grid.max_width_bytes))
    table.add_row("Multi-byte Lines", str(grid.multibyte_line_count))
    table.add_row("Digit Runs", str(grid.digit_run_count))
    table.add_row("Symbols", str(grid.symbol_count))
    table.add_row("Gear Candidates", str(grid.gear_candidate_count))

    console.print(table)
    console.print()


# ─── Display Helpers ──────────────────────────────────────────────────────────


def _display_report(result):
    """Display both answers in a formatted table."""
    report = result.report

    table = Table(title="Results", border_style="green")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Part Numbers", str(report.part_number_count))
    table.add_row("(Part 1) Sum of Part Numbers", str(report.part_number_sum))
    table.add_row("Gears", str(report.gear_count))
    table.add_row("(Part 2) Sum of Gear Ratios", str(report.gear_ratio_sum))
    console.print(table)
    console.print()

    source = result.source
    console.print(
        f"[dim]Parser v{result.parse_version.parser_version} | "
        f"Lines: {source.line_count} | "
        f"SHA-256: {source.file_hash[:16]}...[/]"
    )
    console.print()


def _display_parts(schematic):
    """List part numbers with their positions."""
    table = Table(title="Part Numbers", border_style="cyan")
    table.add_column("Line", justify="right")
    table.add_column("Chars", justify="right")
    table.add_column("Bytes", justify="right")
    table.add_column("Value", justify="right", style="bold")

    for part in schematic.part_numbers:
        table.add_row(
            str(part.line_index + 1),
            f"{part.char_span.start}..{part.char_span.end}",
            f"{part.byte_span.start}..{part.byte_span.end}",
            str(part.value),
        )

    console.print(table)
    console.print()


def _display_gears(schematic):
    """List gears with their neighbours and ratios."""
    table = Table(title="Gears", border_style="yellow")
    table.add_column("Line", justify="right")
    table.add_column("Char", justify="right")
    table.add_column("Neighbors")
    table.add_column("Ratio", justify="right", style="bold")

    for gear in schematic.gears:
        first, second = gear.neighbors
        table.add_row(
            str(gear.line_index + 1),
            str(gear.char_index),
            f"{first.value} * {second.value}",
            str(gear.gear_ratio),
        )

    console.print(table)
    console.print()


# ─── Entry point (for python -m schematic.cli) ────────────────────────────────


if __name__ == "__main__":
    cli()
