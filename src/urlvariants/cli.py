"""
urlvariants CLI - Command Line Interface

Entry point for locale detection, locale-aware grouping of URL lists and
pairwise variant checks.
"""

import json
import logging
import sys
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from urlvariants import __version__
from urlvariants.core.config import load_locale_config, resolve_priority
from urlvariants.core.constants import OutputFormat
from urlvariants.core.exceptions import ConfigError, URLParseError
from urlvariants.core.stats import RunStatistics
from urlvariants.grouping.deduper import LocaleDeduper
from urlvariants.grouping.detector import LocaleDetector
from urlvariants.grouping.grouper import LocaleGrouper
from urlvariants.grouping.scorer import LocaleScorer


logger = logging.getLogger(__name__)

app = typer.Typer(
    name="urlvariants",
    help="urlvariants - Locale-aware grouping of URL variants",
    add_completion=False,
    no_args_is_help=True,
)

# Data goes to stdout, diagnostics to stderr
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _decode_lines(stream: BinaryIO) -> Iterator[str]:
    for raw in stream:
        # Undecodable bytes become U+FFFD so one bad line cannot stop the run
        line = raw.decode("utf-8", errors="replace").strip()
        if line and not line.startswith("#"):
            yield line


def _read_urls(input_file: Optional[Path]) -> Iterator[str]:
    """Yield URLs from a file or stdin, skipping blanks and comments."""
    if input_file is None:
        yield from _decode_lines(typer.get_binary_stream("stdin"))
        return

    with input_file.open("rb") as f:
        yield from _decode_lines(f)


def _split_codes(values: Optional[List[str]]) -> list[str]:
    codes = []
    for value in values or []:
        codes.extend(value.split(","))
    return codes


def _print_stats(stats: RunStatistics) -> None:
    table = Table(title="Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Total URLs", str(stats.total_urls))
    table.add_row("Parse errors", str(stats.parse_errors))
    table.add_row("Groups", str(stats.groups))
    table.add_row("Discarded variants", str(stats.discarded_variants))
    for signal, count in stats.signals.items():
        table.add_row(f"Signal: {signal}", str(count))
    for locale, count in stats.top_locales():
        table.add_row(f"Locale: {locale}", str(count))

    err_console.print(table)


# ============================================================================
# Commands
# ============================================================================

@app.command()
def detect(
    input_file: Optional[Path] = typer.Argument(
        None,
        help="File with one URL per line (default: stdin)",
        exists=True,
        dir_okay=False,
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        help="Output format",
        case_sensitive=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """
    Report the locale marker found in each URL.

    Text output is tab separated: locale, signal, base URL.
    """
    _setup_logging(verbose)
    detector = LocaleDetector()
    results = []

    for url in _read_urls(input_file):
        try:
            token = detector.detect(url)
        except URLParseError as e:
            logger.warning(f"Skipping invalid URL: {e}")
            continue

        if output_format is OutputFormat.JSON:
            results.append(token.to_dict())
        else:
            typer.echo(f"{token.locale or '-'}\t{token.signal.value}\t{token.base_url}")

    if output_format is OutputFormat.JSON:
        typer.echo(json.dumps(results, indent=2))


@app.command()
def group(
    input_file: Optional[Path] = typer.Argument(
        None,
        help="File with one URL per line (default: stdin)",
        exists=True,
        dir_okay=False,
    ),
    priority: Optional[List[str]] = typer.Option(
        None,
        "--priority",
        "-p",
        help="Preferred locale, repeatable or comma separated (default: en)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Custom configuration file",
        exists=True,
    ),
    output_format: Optional[OutputFormat] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (overrides config)",
        case_sensitive=False,
    ),
    scored: bool = typer.Option(
        False,
        "--scored",
        help="Pick representatives by score instead of plain priority",
    ),
    counts: bool = typer.Option(
        False,
        "--counts",
        help="Print occurrence counts before each URL",
    ),
    show_stats: bool = typer.Option(
        False,
        "--stats",
        help="Print statistics to stderr",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """
    Collapse locale variants and print one URL per group.
    """
    _setup_logging(verbose)

    try:
        locale_config = load_locale_config(config)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    codes = _split_codes(priority)
    resolved = resolve_priority(codes) if codes else locale_config.priority
    fmt = output_format or OutputFormat(locale_config.output_format)
    scorer = LocaleScorer(resolved) if scored or locale_config.use_scorer else None

    logger.debug(f"Locale priority: {', '.join(resolved)}")

    deduper = LocaleDeduper(resolved)
    deduper.add_all(_read_urls(input_file))
    entries = deduper.get_entries(scorer=scorer)

    if fmt is OutputFormat.JSON:
        typer.echo(json.dumps([entry.to_dict() for entry in entries], indent=2))
    else:
        for entry in entries:
            typer.echo(f"{entry.count}\t{entry.url}" if counts else entry.url)

    if show_stats:
        _print_stats(deduper.stats)


@app.command()
def compare(
    first_url: str = typer.Argument(..., help="First URL"),
    second_url: str = typer.Argument(..., help="Second URL"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """
    Check whether two URLs are locale variants of the same page.
    """
    _setup_logging(verbose)
    grouper = LocaleGrouper()

    try:
        result = grouper.should_group(first_url, second_url)
    except URLParseError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=2)

    typer.echo("true" if result else "false")


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"urlvariants {__version__}")


# ============================================================================
# Entry Point
# ============================================================================

def main() -> None:
    """Main entry point for CLI."""
    try:
        app()
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
