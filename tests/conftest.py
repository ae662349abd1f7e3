from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest
from openpyxl import Workbook

BuildWorkbook = Callable[..., Path]


def _grid(height: int, width: int, cells: dict[tuple[int, int], Any]) -> list[list[Any]]:
    rows: list[list[Any]] = [[None] * width for _ in range(height)]
    for (row, col), value in cells.items():
        rows[row][col] = value
    return rows


@pytest.fixture
def make_workbook(tmp_path: Path) -> BuildWorkbook:
    """Return a builder that saves an .xlsx with the given sheets.

    ``sheets`` maps sheet name -> rows (list of row lists, 0-based).
    """

    def _build(
        sheets: dict[str, Sequence[Sequence[Any]]],
        *,
        name: str = "book.xlsx",
        active: int = 0,
    ) -> Path:
        wb = Workbook()
        default = wb.active
        for sheet_name, rows in sheets.items():
            ws = wb.create_sheet(sheet_name)
            for r_idx, row in enumerate(rows, start=1):
                for c_idx, value in enumerate(row, start=1):
                    if value is not None:
                        ws.cell(row=r_idx, column=c_idx, value=value)
        wb.remove(default)
        wb.active = active
        path = tmp_path / name
        wb.save(path)
        return path

    return _build


@pytest.fixture
def ic_rows() -> list[list[Any]]:
    """Seven-row, three-column ion-chromatography sheet with two flagged cells."""
    return _grid(
        7,
        3,
        {
            (0, 0): "Report",
            (2, 0): "离子色谱 ",
            (4, 1): "Cl(RM)",
            (5, 0): "Sample 1",
            (5, 1): "Cl(RM)",
            (6, 1): 12.5,
            (6, 2): "SO4(C)",
        },
    )
