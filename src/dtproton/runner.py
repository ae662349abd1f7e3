"""End-to-end processing of one workbook."""

from __future__ import annotations

from pathlib import Path

from dtproton.io import open_read_view, open_write_view
from dtproton.models import ProcessOutcome
from dtproton.pipeline import scan_sheet
from dtproton.sheets import active_tab_index, read_sheet_grid, resolve_sheet_name
from dtproton.transform import apply_clears, persist


def process_excel(
    path: Path,
    *,
    out_dir: Path = Path("."),
    dry_run: bool = False,
) -> ProcessOutcome:
    """Scan the active sheet of *path* and write the processed copy.

    Nothing is written when the rule does not apply or *dry_run* is set.

    Raises
    ------
    DtprotonError
        Any of its subclasses, for unreadable input, a workbook without
        worksheets, an unreadable sheet or an unwritable destination.
    """
    path = Path(path)
    write_book = open_write_view(path)
    active_index = active_tab_index(write_book)

    read_book = open_read_view(path)
    try:
        sheet_name = resolve_sheet_name(active_index, read_book.sheetnames)
        grid = read_sheet_grid(read_book, sheet_name)
    finally:
        read_book.close()

    scan = scan_sheet(grid, sheet_name)
    outcome = ProcessOutcome(input_path=path, scan=scan, dry_run=dry_run)
    if not scan.applicable or dry_run:
        return outcome

    apply_clears(write_book, scan.to_clear, scan.sheet_name)
    outcome.output_path = persist(write_book, path, out_dir)
    return outcome
