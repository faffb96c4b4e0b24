# src/rendering/table_renderer.py — v1
"""CSV table projection with the same windowing as text lines.

Parsing is a plain comma split with quote stripping, not a CSV grammar:
commas inside quoted fields split the field. Malformed input is shown as
split, never rejected.
"""

from __future__ import annotations

import re

from filepreview.classification.classifier import extension_of
from filepreview.rendering.models import RenderWindow, TableView

TRUNCATION_MARKER = "Content truncated"

_QUOTED = re.compile(r"""^["'](.*)["']$""", re.DOTALL)


def is_tabular(display_name: str) -> bool:
    """Whether text with this name is shown as a table instead of lines."""
    return extension_of(display_name) == "csv"


def _clean_cell(cell: str) -> str:
    cell = cell.strip()
    return _QUOTED.sub(r"\1", cell)


def parse_csv(
    text: str, truncation_marker: str = TRUNCATION_MARKER
) -> tuple[list[str], list[list[str]]]:
    """Split CSV text into a header row and data rows.

    Blank rows are skipped. A trailing row whose first cell carries the
    upstream truncation marker is dropped before counting.
    """
    lines = [[_clean_cell(cell) for cell in line.split(",")] for line in text.split("\n")]
    headers = lines[0] if lines else []
    rows = [row for row in lines[1:] if any(cell for cell in row)]

    if rows and rows[-1] and truncation_marker in rows[-1][0]:
        rows.pop()

    return headers, rows


def render_table(
    text: str,
    window: RenderWindow | None = None,
    truncation_marker: str = TRUNCATION_MARKER,
) -> TableView:
    """Parse ``text`` and keep only the rows inside the window."""
    headers, rows = parse_csv(text, truncation_marker)
    if window is None:
        window = RenderWindow.initial(len(rows))
    else:
        window = window.with_total(len(rows))
    return TableView(headers=headers, rows=rows[: window.shown], window=window)
