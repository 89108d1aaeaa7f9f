"""
Command-line interface for famsearch.

This module provides the CLI commands for searching a household records file.
Records are loaded from a JSON file (see ``famsearch.sources.loader``) and the
searching user is given with ``--user``; without a user every search is
refused with an access-denied error.

Main Commands:
    find: Search every record kind for a query
    suggest: Autocomplete suggestions for a prefix
    advanced: Multi-criteria search; without text every record is matched

Example Usage:
    Basic search:
        $ famsearch --data records.json --user 7 find invoice

    Sorted, filtered, JSON output:
        $ famsearch --data records.json --user 7 find "tax return" \\
          --type pdf --sort date_desc --format json

    Advanced search for large PDFs:
        $ famsearch --data records.json --user 7 advanced --type pdf --min-size 1000000

For more information, run: famsearch --help
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import click

from ..core.api import FamilySearch
from ..core.session import StaticSessionProvider, UserIdentity
from ..core.types import AdvancedSearchCriteria, FilterSet, OutputFormat, SearchOptions, SortBy
from ..sources.loader import load_sources
from ..utils.error_handling import ConfigurationError, create_error_report
from ..utils.formatter import (
    format_result,
    format_statistics,
    format_suggestions,
    render_highlight_console,
)
from ..utils.logging_config import LogFormat, LogLevel, configure_logging

_DATE = click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"])
_SORT = click.Choice([s.value for s in SortBy])
_FORMAT = click.Choice([f.value for f in OutputFormat])


def filter_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by ``find`` and ``advanced``."""
    options = [
        click.option("--type", "types", multiple=True, help="Allowed document type, repeatable"),
        click.option("--category", "categories", type=int, multiple=True, help="Allowed category id"),
        click.option("--min-size", type=int, help="Minimum document size in bytes"),
        click.option("--max-size", type=int, help="Maximum document size in bytes"),
        click.option("--date-from", type=_DATE, help="Created on or after (YYYY-MM-DD)"),
        click.option("--date-to", type=_DATE, help="Created on or before (YYYY-MM-DD)"),
        click.option("--include-archived", is_flag=True, default=False, help="Include archived records"),
        click.option("--sort", "sort_by", type=_SORT, default=SortBy.RELEVANCE.value, help="Document ordering"),
        click.option("--format", "fmt", type=_FORMAT, default=OutputFormat.TEXT.value, help="Output format"),
        click.option("--stats", is_flag=True, default=False, help="Print engine statistics"),
        click.option("--show-errors", is_flag=True, default=False, help="Print the error report"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option(
    "--data",
    "data_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="JSON records file",
)
@click.option("--user", "user_id", type=int, help="Id of the searching member")
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging")
@click.option(
    "--log-level",
    type=click.Choice([lvl.value for lvl in LogLevel]),
    default=LogLevel.WARNING.value,
    help="Log level",
)
@click.option(
    "--log-format",
    type=click.Choice([f.value for f in LogFormat]),
    default=LogFormat.SIMPLE.value,
    help="Log format",
)
@click.option("--log-file", type=click.Path(path_type=Path), help="Log file path")
@click.pass_context
def cli(
    ctx: click.Context,
    data_path: Path,
    user_id: int | None,
    debug: bool,
    log_level: str,
    log_format: str,
    log_file: Path | None,
) -> None:
    """famsearch - search household documents, folders, categories and members"""
    configure_logging(
        level=LogLevel.DEBUG if debug else LogLevel(log_level),
        format_type=LogFormat(log_format),
        log_file=log_file,
        enable_file=log_file is not None,
        enable_console=True,
    )

    try:
        sources = load_sources(data_path)
    except ConfigurationError as e:
        click.echo(f"Error loading records: {e.message}", err=True)
        sys.exit(1)

    user = UserIdentity(user_id) if user_id is not None else None
    engine = FamilySearch.from_sources(StaticSessionProvider(user), sources)
    ctx.obj = engine
    ctx.call_on_close(engine.close)


def _emit(engine: FamilySearch, outcome: Any, fmt: str, stats: bool, show_errors: bool) -> None:
    if show_errors:
        click.echo(create_error_report(engine.errors), err=True)

    if not outcome.ok:
        click.echo(f"Error ({outcome.error.value}): {outcome.message}", err=True)
        sys.exit(1)

    output = OutputFormat(fmt)
    if output == OutputFormat.HIGHLIGHT and sys.stdout.isatty():
        render_highlight_console(outcome.result)
    else:
        click.echo(format_result(outcome.result, output))

    if stats:
        click.echo(format_statistics(engine.statistics()), err=True)


@cli.command("find")
@click.argument("query")
@filter_options
@click.option("--member", "members", type=int, multiple=True, help="Allowed member id")
@click.option("--no-cache", is_flag=True, default=False, help="Bypass the result cache")
@click.option("--max-results", type=int, default=100, help="Maximum items per record kind")
@click.pass_obj
def find_cmd(
    engine: FamilySearch,
    query: str,
    types: tuple[str, ...],
    categories: tuple[int, ...],
    min_size: int | None,
    max_size: int | None,
    date_from: datetime | None,
    date_to: datetime | None,
    include_archived: bool,
    sort_by: str,
    fmt: str,
    stats: bool,
    show_errors: bool,
    members: tuple[int, ...],
    no_cache: bool,
    max_results: int,
) -> None:
    """Search every record kind for QUERY."""
    filters = FilterSet(
        document_types=types,
        category_ids=categories,
        member_ids=members,
        min_size=min_size,
        max_size=max_size,
        date_from=date_from,
        date_to=date_to,
        include_archived=include_archived,
    )
    options = SearchOptions(
        use_cache=not no_cache, sort_by=SortBy(sort_by), max_results=max_results
    )
    outcome = engine.search(query, filters, options)
    _emit(engine, outcome, fmt, stats, show_errors)


@cli.command("advanced")
@click.option("--text", help="Free text; omit to match every record")
@filter_options
@click.pass_obj
def advanced_cmd(
    engine: FamilySearch,
    text: str | None,
    types: tuple[str, ...],
    categories: tuple[int, ...],
    min_size: int | None,
    max_size: int | None,
    date_from: datetime | None,
    date_to: datetime | None,
    include_archived: bool,
    sort_by: str,
    fmt: str,
    stats: bool,
    show_errors: bool,
) -> None:
    """Multi-criteria search (never cached)."""
    date_range = None
    if date_from is not None or date_to is not None:
        date_range = (date_from or datetime.min, date_to or datetime.max)
    size_range = None
    if min_size is not None or max_size is not None:
        size_range = (min_size or 0, max_size if max_size is not None else sys.maxsize)

    criteria = AdvancedSearchCriteria(
        text_query=text,
        document_types=list(types),
        categories=list(categories),
        date_range=date_range,
        size_range=size_range,
        sort_by=SortBy(sort_by),
        include_archived=include_archived,
    )
    outcome = engine.advanced_search(criteria)
    _emit(engine, outcome, fmt, stats, show_errors)


@cli.command("suggest")
@click.argument("prefix")
@click.option("--max", "max_suggestions", type=int, default=10, help="Maximum suggestions")
@click.pass_obj
def suggest_cmd(engine: FamilySearch, prefix: str, max_suggestions: int) -> None:
    """Autocomplete suggestions for PREFIX."""
    suggestions = engine.quick_search(prefix, max_suggestions)
    if suggestions:
        click.echo(format_suggestions(suggestions))


def main() -> None:
    cli(prog_name="famsearch")


if __name__ == "__main__":
    main()
