"""
Output formatting utilities for famsearch.

This module renders aggregate results, suggestions and statistics for the
command line. Three formats are supported: plain text, JSON and rich console
output with the query highlighted.

Functions:
    to_json_bytes: JSON serialization of an AggregateResult using orjson
    format_text: Plain-text rendering, one section per record kind
    render_highlight_console: Rich tables with query matches highlighted
    format_result: Dispatch on OutputFormat
    format_suggestions: Plain-text suggestion list
    format_statistics: Plain-text engine statistics

Example:
    >>> from famsearch.utils.formatter import format_result
    >>> from famsearch.core.types import OutputFormat
    >>> print(format_result(outcome.result, OutputFormat.TEXT))
"""

from __future__ import annotations

import sys
from typing import Any

import orjson
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core.types import (
    AggregateResult,
    Document,
    OutputFormat,
    SearchStatistics,
    Suggestion,
)


def _document_payload(doc: Document) -> dict[str, Any]:
    return {
        "id": doc.id,
        "name": doc.name,
        "type": doc.type,
        "size": doc.size,
        "created_at": doc.created_at,
        "folder_id": doc.folder_id,
        "member_id": doc.member_id,
        "archived": doc.archived,
    }


def to_json_bytes(result: AggregateResult) -> bytes:
    """
    Convert an aggregate result to JSON bytes using orjson.

    Records are dataclasses and dates are datetimes, both serialized natively
    by orjson (dates as ISO-8601 strings).

    Args:
        result: AggregateResult to serialize

    Returns:
        JSON-encoded bytes with pretty formatting (indented)
    """
    payload = {
        "query": result.query,
        "normalized_query": result.normalized_query,
        "total_results": result.total_results,
        "search_time": result.search_time,
        "duration_ms": result.duration_ms,
        "sort_by": result.sort_by.value,
        "filters": result.filters.to_dict(),
        "documents": [_document_payload(d) for d in result.documents],
        "folders": result.folders,
        "categories": result.categories,
        "members": result.members,
    }
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2)


def _size_label(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{value:.0f}{unit}" if unit == "B" else f"{value:.1f}{unit}"
        value /= 1024
    return f"{size}B"


def _date_label(value: Any) -> str:
    return value.strftime("%Y-%m-%d") if value is not None else "-"


def format_text(result: AggregateResult) -> str:
    """
    Format an aggregate result as plain text.

    Example:
        >>> print(format_text(result))
        Documents (2)
          [12] invoice-march.pdf  pdf  20.0KB  2024-03-01
        ...
        # total=6 duration_ms=3.10 sort=relevance
    """
    out: list[str] = []

    out.append(f"Documents ({len(result.documents)})")
    for d in result.documents:
        out.append(
            f"  [{d.id}] {d.name}  {d.type or '-'}  {_size_label(d.size)}  {_date_label(d.created_at)}"
        )
    out.append(f"Folders ({len(result.folders)})")
    for f in result.folders:
        out.append(f"  [{f.id}] {f.name}  {_date_label(f.created_at)}")
    out.append(f"Categories ({len(result.categories)})")
    for c in result.categories:
        out.append(f"  [{c.id}] {c.label}" + (f"  {c.description}" if c.description else ""))
    out.append(f"Members ({len(result.members)})")
    for m in result.members:
        out.append(f"  [{m.id}] {m.first_name}" + (f"  <{m.email}>" if m.email else ""))

    out.append("")
    out.append(
        f"# total={result.total_results} duration_ms={result.duration_ms:.2f} "
        f"sort={result.sort_by.value}"
    )
    return "\n".join(out)


def _highlighted(value: str, query: str) -> Text:
    text = Text(value)
    if query and query != "*":
        text.highlight_words([query], style="bold yellow", case_sensitive=False)
    return text


def render_highlight_console(result: AggregateResult, console: Console | None = None) -> None:
    """Render an aggregate result as rich tables with the query highlighted."""
    if console is None:
        console = Console()
    query = result.normalized_query

    documents = Table(title=f"Documents ({len(result.documents)})", title_justify="left")
    for column in ("id", "name", "type", "size", "created"):
        documents.add_column(column)
    for d in result.documents:
        documents.add_row(
            str(d.id),
            _highlighted(d.name, query),
            _highlighted(d.type or "-", query),
            _size_label(d.size),
            _date_label(d.created_at),
        )
    console.print(documents)

    for title, rows in (
        ("Folders", [(f.id, f.name) for f in result.folders]),
        ("Categories", [(c.id, c.label) for c in result.categories]),
        ("Members", [(m.id, m.first_name) for m in result.members]),
    ):
        table = Table(title=f"{title} ({len(rows)})", title_justify="left")
        table.add_column("id")
        table.add_column("name")
        for record_id, name in rows:
            table.add_row(str(record_id), _highlighted(name, query))
        console.print(table)

    console.print(
        f"[dim]total={result.total_results} duration_ms={result.duration_ms:.2f} "
        f"sort={result.sort_by.value}[/dim]"
    )


def format_result(result: AggregateResult, fmt: OutputFormat) -> str:
    """Format an aggregate result according to the specified output format."""
    if fmt == OutputFormat.JSON:
        return to_json_bytes(result).decode("utf-8")
    if fmt == OutputFormat.HIGHLIGHT:
        # Use rich console rendering when stdout is a real terminal
        if sys.stdout.isatty():
            render_highlight_console(result)
            return ""
    return format_text(result)


def format_suggestions(suggestions: list[Suggestion]) -> str:
    return "\n".join(f"{s.score:.2f}  {s.type.value:<13} {s.text}" for s in suggestions)


def format_statistics(stats: SearchStatistics) -> str:
    return "\n".join(f"{key}: {value}" for key, value in stats.as_dict().items())
