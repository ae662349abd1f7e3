from __future__ import annotations

from pathlib import Path

import pytest
from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font

from dtproton.errors import OutputWriteError, SheetReadError
from dtproton.transform import apply_clears, persist, processed_output_path


@pytest.mark.parametrize(
    ("input_path", "expected"),
    [
        (Path("45vocs2.xlsx"), Path("processed_45vocs2.xlsx")),
        (Path("/data/runs/ic.xlsx"), Path("processed_ic.xlsx")),
        (Path(".."), Path("processed_output.xlsx")),
        (Path("/"), Path("processed_output.xlsx")),
    ],
)
def test_processed_output_path(input_path: Path, expected: Path) -> None:
    assert processed_output_path(input_path) == expected


def test_processed_output_path_honours_out_dir(tmp_path: Path) -> None:
    assert processed_output_path(Path("x/ic.xlsx"), tmp_path) == tmp_path / "processed_ic.xlsx"


def test_apply_clears_targets_active_sheet() -> None:
    wb = Workbook()
    first = wb.active
    first["B6"] = "keep(RM)"
    second = wb.create_sheet("Data")
    second["B6"] = "Cl(RM)"
    second["C7"] = "SO4(C)"
    wb.active = 1

    count = apply_clears(wb, ["B6", "C7"])

    assert count == 2
    assert second["B6"].value == ""
    assert second["C7"].value == ""
    assert first["B6"].value == "keep(RM)"


def test_apply_clears_by_sheet_name() -> None:
    wb = Workbook()
    first = wb.active
    first["B6"] = "keep(RM)"
    second = wb.create_sheet("Data")
    second["B6"] = "Cl(RM)"

    apply_clears(wb, ["B6"], "Data")

    assert second["B6"].value == ""
    assert first["B6"].value == "keep(RM)"


def test_apply_clears_unknown_sheet() -> None:
    with pytest.raises(SheetReadError, match="Missing"):
        apply_clears(Workbook(), ["A1"], "Missing")


def test_apply_clears_is_idempotent() -> None:
    wb = Workbook()
    ws = wb.active
    ws["A6"] = "Na(C)"

    apply_clears(wb, ["A6"])
    apply_clears(wb, ["A6"])

    assert ws["A6"].value == ""


def test_apply_clears_without_addresses_is_noop() -> None:
    wb = Workbook()
    wb.active["A1"] = "x"

    assert apply_clears(wb, []) == 0
    assert wb.active["A1"].value == "x"


def test_persist_keeps_formatting_and_other_cells(tmp_path: Path) -> None:
    wb = Workbook()
    ws = wb.active
    ws["A1"] = "Title"
    ws["A1"].font = Font(bold=True)
    ws["B6"] = "Cl(RM)"
    ws["B7"] = 3.5

    apply_clears(wb, ["B6"])
    out = persist(wb, Path("run.xlsx"), tmp_path / "out")

    assert out == tmp_path / "out" / "processed_run.xlsx"
    reloaded = load_workbook(out).active
    assert reloaded["A1"].value == "Title"
    assert reloaded["A1"].font.bold is True
    assert reloaded["B6"].value in (None, "")
    assert reloaded["B7"].value == 3.5


def test_persist_failure_raises_output_write_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    with pytest.raises(OutputWriteError, match="Cannot save"):
        persist(Workbook(), Path("run.xlsx"), blocker)
