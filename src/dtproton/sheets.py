"""Active-sheet resolution and value-grid loading.

The write view (full openpyxl load) is the source of truth for *which* sheet
is active; the read view (read-only, cached values) is the source of truth
for *what data* that sheet holds.
"""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd
from openpyxl import Workbook

from dtproton.errors import NoWorksheetsError, SheetReadError
from dtproton.models import CellValue
from dtproton.normalize import classify


def active_tab_index(workbook: Workbook) -> int:
    """Return the 0-based active tab index from the workbook view settings."""
    views = workbook.views
    if not views:
        return 0
    active = views[0].activeTab
    return int(active) if active is not None else 0


def resolve_sheet_name(active_index: int, sheet_names: Sequence[str]) -> str:
    """Pick the sheet at *active_index*, falling back to the first sheet.

    Raises
    ------
    NoWorksheetsError
        If *sheet_names* is empty.
    """
    if not sheet_names:
        raise NoWorksheetsError("Workbook has no worksheets")
    if 0 <= active_index < len(sheet_names):
        return sheet_names[active_index]
    return sheet_names[0]


def read_sheet_grid(workbook: Workbook, sheet_name: str) -> pd.DataFrame:
    """Return the value grid of *sheet_name*, anchored at A1.

    Grid position ``(r, c)`` is spreadsheet row ``r + 1``, column ``c + 1``;
    every entry is a :class:`CellValue`. Short rows are padded with empties.
    """
    if sheet_name not in workbook.sheetnames:
        raise SheetReadError(f"Cannot read worksheet {sheet_name!r}: not found")

    ws = workbook[sheet_name]
    epoch = workbook.epoch
    if getattr(workbook, "read_only", False):
        # stored <dimension> tags are often stale; size the sheet from its cells
        ws.reset_dimensions()
    try:
        rows = [
            [classify(cell.value, getattr(cell, "data_type", "n"), epoch) for cell in row]
            for row in ws.iter_rows()
        ]
    except (AttributeError, TypeError, ValueError, KeyError) as exc:
        raise SheetReadError(f"Cannot read worksheet {sheet_name!r}: {exc}") from exc

    width = max((len(row) for row in rows), default=0)
    for row in rows:
        row.extend(CellValue.empty() for _ in range(width - len(row)))
    return pd.DataFrame(rows, columns=range(width), dtype=object)
