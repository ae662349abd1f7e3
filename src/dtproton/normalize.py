"""Cell value classification and canonical string rendering."""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

from openpyxl.utils.datetime import WINDOWS_EPOCH, to_excel

from dtproton.models import CellKind, CellValue

# Excel error literals -> debug-style tags.
_ERROR_TAGS: dict[str, str] = {
    "#DIV/0!": "Div0",
    "#N/A": "NA",
    "#NAME?": "Name",
    "#NULL!": "Null",
    "#NUM!": "Num",
    "#REF!": "Ref",
    "#VALUE!": "Value",
    "#GETTING_DATA": "GettingData",
}


# ── Classification ───────────────────────────────────────────────


def _iso_duration(delta: timedelta) -> str:
    total = delta.total_seconds()
    sign = "-" if total < 0 else ""
    total = abs(total)
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    parts = [f"{sign}P"]
    if days:
        parts.append(f"{int(days)}D")
    clock = ""
    if hours:
        clock += f"{int(hours)}H"
    if minutes:
        clock += f"{int(minutes)}M"
    if seconds or not (days or clock):
        clock += f"{_format_number(round(seconds, 6))}S"
    if clock:
        parts.append(f"T{clock}")
    return "".join(parts)


def classify(value: Any, data_type: str = "n", epoch: datetime = WINDOWS_EPOCH) -> CellValue:
    """Map an openpyxl cell value onto the closed :class:`CellValue` union.

    *data_type* is openpyxl's cell ``data_type`` code; it is what tells an
    error cell (``"e"``) apart from text that merely looks like one. openpyxl
    already parses ``t="d"`` cells into ``datetime``, so the ``"d"`` branch
    only sees ISO text handed in by callers that bypass that conversion.
    """
    if value is None:
        return CellValue.empty()
    if isinstance(value, bool):
        return CellValue(CellKind.BOOL, value)
    if isinstance(value, int):
        return CellValue(CellKind.INT, value)
    if isinstance(value, float):
        return CellValue(CellKind.FLOAT, value)
    if isinstance(value, (datetime, date, time)):
        return CellValue(CellKind.DATETIME, float(to_excel(value, epoch)))
    if isinstance(value, timedelta):
        return CellValue(CellKind.DURATION_ISO, _iso_duration(value))
    if isinstance(value, str):
        if data_type == "e":
            return CellValue(CellKind.ERROR, value)
        if data_type == "d":
            return CellValue(CellKind.DATETIME_ISO, value)
        return CellValue.text(value)
    raise TypeError(f"Unsupported cell value type: {type(value).__name__}")


# ── Rendering ────────────────────────────────────────────────────


def _format_number(value: float) -> str:
    if not math.isfinite(value):
        return repr(value)
    if value.is_integer():
        return f"{value:.0f}"
    # shortest round-trip digits, never in exponent form
    return format(Decimal(repr(value)), "f")


_FORMATTERS: dict[CellKind, Callable[[Any], str]] = {
    CellKind.EMPTY: lambda _value: "",
    CellKind.TEXT: str,
    CellKind.INT: lambda value: str(int(value)),
    CellKind.FLOAT: _format_number,
    CellKind.BOOL: lambda value: "true" if value else "false",
    CellKind.DATETIME: _format_number,
    CellKind.DATETIME_ISO: str,
    CellKind.DURATION_ISO: str,
    CellKind.ERROR: lambda value: _ERROR_TAGS.get(value, value),
}


def normalize(cell: CellValue) -> str:
    """Return the canonical string form of *cell*.

    Whole floats drop their fractional part (``5.0`` -> ``"5"``), other
    floats use the shortest round-trip ``repr``; booleans are lowercase.
    The result never depends on the locale.
    """
    return _FORMATTERS[cell.kind](cell.value)
