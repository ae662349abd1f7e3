"""Marker check + region scan — pure functions, no side effects."""

from __future__ import annotations

import re

import pandas as pd

from dtproton import CLEAR_PATTERN, MARKER_POSITION, MARKER_TEXT, SCAN_START_ROW
from dtproton.coords import cell_reference
from dtproton.models import CellValue, ScanResult
from dtproton.normalize import normalize


def _text_at(grid: pd.DataFrame, row: int, col: int) -> str:
    height, width = grid.shape
    if row >= height or col >= width:
        return ""
    cell = grid.iat[row, col]
    if not isinstance(cell, CellValue):
        return ""
    return normalize(cell)


def marker_matches(grid: pd.DataFrame, marker: str = MARKER_TEXT) -> bool:
    """Return True when the marker cell (A3) holds exactly *marker*, trimmed."""
    row, col = MARKER_POSITION
    return _text_at(grid, row, col).strip() == marker


def find_cells_to_clear(
    grid: pd.DataFrame,
    pattern: re.Pattern[str] = CLEAR_PATTERN,
    start_row: int = SCAN_START_ROW,
) -> list[str]:
    """Return addresses of cells from *start_row* on whose text matches *pattern*.

    Addresses are 1-based (``B6``) in row-major order.
    """
    height, width = grid.shape
    to_clear: list[str] = []
    for row in range(start_row, height):
        for col in range(width):
            text = _text_at(grid, row, col)
            if text and pattern.search(text):
                to_clear.append(cell_reference(col + 1, row + 1))
    return to_clear


def scan_sheet(
    grid: pd.DataFrame,
    sheet_name: str = "",
    pattern: re.Pattern[str] = CLEAR_PATTERN,
) -> ScanResult:
    """Apply the cleanup rule to *grid*.

    The rule applies only when the marker matches and the grid reaches row 6.
    An applicable result may still carry an empty clear list.
    """
    if not marker_matches(grid):
        return ScanResult(
            applicable=False,
            sheet_name=sheet_name,
            reason=f"Cell A3 is not {MARKER_TEXT!r}; nothing to do.",
        )

    height = grid.shape[0]
    if height < SCAN_START_ROW + 1:
        return ScanResult(
            applicable=False,
            sheet_name=sheet_name,
            reason=f"Sheet has fewer than {SCAN_START_ROW + 1} rows; nothing to clear.",
        )

    return ScanResult(
        applicable=True,
        sheet_name=sheet_name,
        to_clear=find_cells_to_clear(grid, pattern),
    )
