"""Apply clears to the write view and persist the processed copy."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from openpyxl import Workbook

from dtproton import DEFAULT_OUTPUT_NAME, OUTPUT_PREFIX
from dtproton.errors import NoWorksheetsError, SheetReadError
from dtproton.io import save_workbook


def processed_output_path(input_path: Path, out_dir: Path = Path(".")) -> Path:
    """Return ``out_dir / processed_<input file name>``."""
    name = Path(input_path).name
    if name in ("", ".", ".."):
        name = DEFAULT_OUTPUT_NAME
    return Path(out_dir) / f"{OUTPUT_PREFIX}{name}"


def apply_clears(
    workbook: Workbook, addresses: Iterable[str], sheet_name: str | None = None
) -> int:
    """Set every addressed cell of *sheet_name* (default: the active sheet) to ``""``.

    An out-of-range active tab falls back to the first worksheet, the same
    way the sheet resolver does. Returns the number of cells touched.
    """
    if sheet_name is not None:
        if sheet_name not in workbook.sheetnames:
            raise SheetReadError(f"Cannot clear cells: worksheet {sheet_name!r} not found")
        ws = workbook[sheet_name]
    else:
        ws = workbook.active
    if ws is None:
        if not workbook.worksheets:
            raise NoWorksheetsError("Workbook has no worksheets")
        ws = workbook.worksheets[0]
    count = 0
    for address in addresses:
        ws[address].value = ""
        count += 1
    return count


def persist(workbook: Workbook, input_path: Path, out_dir: Path = Path(".")) -> Path:
    """Save *workbook* into *out_dir* under the processed name."""
    return save_workbook(workbook, processed_output_path(input_path, out_dir))
