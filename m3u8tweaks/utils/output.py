"""Output formatting utilities for consistent CLI reporting."""

from __future__ import annotations
import click
from typing import Any, Iterable, Sequence


def section_header(text: str) -> str:
    """Format a section header with color.

    Args:
        text: Header text

    Returns:
        Formatted header string
    """
    return click.style(f"▶ {text}", fg='cyan', bold=True)


def success(text: str, prefix: str = "✓") -> str:
    """Format a success message."""
    return f"{click.style(prefix, fg='green')} {text}"


def warning(text: str, prefix: str = "⚠") -> str:
    """Format a warning message."""
    return f"{click.style(prefix, fg='yellow')} {text}"


def value(text: Any) -> str:
    """Highlight a user-supplied or detected value (paths, roots)."""
    return click.style(str(text), fg='bright_black')


def count_badge(count: int, label: str, color: str = 'cyan') -> str:
    """Format a count badge.

    Args:
        count: Count to display
        label: Label for the count
        color: Color for the count (default: cyan)

    Returns:
        Formatted count badge
    """
    return f"{click.style(str(count), fg=color, bold=True)} {label}"


def plural(count: int, word: str) -> str:
    return word if count == 1 else word + "s"


def divider() -> str:
    """Return a visual divider line."""
    return click.style("─" * 60, fg='bright_black')


def table(rows: Iterable[Any], columns: Sequence[str], max_width: int = 60) -> str:
    """Render objects (or dicts) as a plain left-aligned table.

    Args:
        rows: Objects exposing the column names as attributes or keys
        columns: Column names, used as headers
        max_width: Cells longer than this are truncated

    Returns:
        Table text, header line first
    """
    def cell(row: Any, col: str) -> str:
        raw = row.get(col, '') if isinstance(row, dict) else getattr(row, col, '')
        text = str(raw)
        return text if len(text) <= max_width else text[:max_width - 1] + "…"

    data = [[cell(r, c) for c in columns] for r in rows]
    widths = [max([len(c)] + [len(d[i]) for d in data]) for i, c in enumerate(columns)]
    lines = ["  ".join(c.ljust(w) for c, w in zip(columns, widths)).rstrip()]
    lines.append("  ".join("-" * w for w in widths))
    for d in data:
        lines.append("  ".join(v.ljust(w) for v, w in zip(d, widths)).rstrip())
    return "\n".join(lines)


__all__ = [
    "section_header",
    "success",
    "warning",
    "value",
    "count_badge",
    "plural",
    "divider",
    "table",
]
