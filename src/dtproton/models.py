"""Data models used across the package."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from numbers import Integral
from pathlib import Path
from typing import Any


def _to_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise TypeError(f"{field_name} must be an integer")
    result = int(value)
    if result < 0:
        raise ValueError(f"{field_name} must be >= 0")
    return result


def _to_string_list(values: Sequence[Any] | None, field_name: str) -> list[str]:
    if values is None:
        return []
    if isinstance(values, str):
        raise TypeError(f"{field_name} must be a sequence of strings")
    normalized: list[str] = []
    for item in values:
        if not isinstance(item, str):
            raise TypeError(f"{field_name} items must be strings")
        normalized.append(item)
    return normalized


class CellKind(str, Enum):
    EMPTY = "empty"
    TEXT = "text"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    DATETIME = "datetime"
    DATETIME_ISO = "datetime_iso"
    DURATION_ISO = "duration_iso"
    ERROR = "error"


_PAYLOAD_TYPES: dict[CellKind, tuple[type, ...]] = {
    CellKind.EMPTY: (type(None),),
    CellKind.TEXT: (str,),
    CellKind.INT: (int,),
    CellKind.FLOAT: (float,),
    CellKind.BOOL: (bool,),
    CellKind.DATETIME: (float,),
    CellKind.DATETIME_ISO: (str,),
    CellKind.DURATION_ISO: (str,),
    CellKind.ERROR: (str,),
}


@dataclass(frozen=True)
class CellValue:
    """A typed cell value.

    ``kind`` selects the variant, ``value`` is its payload: ``None`` for
    EMPTY, the Excel serial number for DATETIME, the ISO text for the
    ``*_ISO`` kinds and the error literal (``#DIV/0!``) for ERROR.
    """

    kind: CellKind
    value: Any = None

    def __post_init__(self) -> None:
        expected = _PAYLOAD_TYPES[self.kind]
        payload = self.value
        if self.kind is not CellKind.BOOL and isinstance(payload, bool):
            raise TypeError(f"{self.kind.value} payload must not be a bool")
        if self.kind in (CellKind.FLOAT, CellKind.DATETIME) and isinstance(payload, int):
            object.__setattr__(self, "value", float(payload))
            return
        if not isinstance(payload, expected):
            raise TypeError(
                f"{self.kind.value} payload must be {expected[0].__name__}, "
                f"got {type(payload).__name__}"
            )

    @classmethod
    def empty(cls) -> CellValue:
        return cls(CellKind.EMPTY)

    @classmethod
    def text(cls, value: str) -> CellValue:
        return cls(CellKind.TEXT, value)

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY


@dataclass
class ScanResult:
    """Outcome of the marker check and region scan on one sheet.

    ``reason`` explains why the rule does not apply and is empty when
    ``applicable`` is true.
    """

    applicable: bool
    sheet_name: str = ""
    reason: str = ""
    to_clear: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.to_clear = _to_string_list(self.to_clear, "to_clear")
        if self.applicable and self.reason:
            raise ValueError("reason must be empty when the rule applies")
        if not self.applicable and self.to_clear:
            raise ValueError("to_clear must be empty when the rule does not apply")


@dataclass
class ProcessOutcome:
    """What ``process_excel`` did: the scan plus the written file, if any."""

    input_path: Path
    scan: ScanResult
    output_path: Path | None = None
    dry_run: bool = False

    @property
    def written(self) -> bool:
        return self.output_path is not None


@dataclass
class RunManifest:
    """Audit-trail manifest for a single run."""

    tool: str = "dtproton"
    version: str = ""
    input_path: str = ""
    output_path: str = ""
    created_at_utc: str = ""
    sheet_name: str = ""
    cleared_cells: list[str] = field(default_factory=list)
    cleared_count: int = 0
    sha256: str = ""
    status: str = "success"
    error_code: int | None = None
    error_message: str = ""

    def __post_init__(self) -> None:
        self.cleared_cells = _to_string_list(self.cleared_cells, "cleared_cells")
        self.cleared_count = _to_non_negative_int(self.cleared_count, "cleared_count")
        if self.cleared_count != len(self.cleared_cells):
            raise ValueError("cleared_count must equal len(cleared_cells)")
        if self.status not in ("success", "skipped", "dry_run", "failed"):
            raise ValueError(f"Unknown status: {self.status!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool": self.tool,
            "version": self.version,
            "input_path": self.input_path,
            "output_path": self.output_path,
            "created_at_utc": self.created_at_utc,
            "sheet_name": self.sheet_name,
            "cleared_cells": list(self.cleared_cells),
            "cleared_count": self.cleared_count,
            "sha256": self.sha256,
            "status": self.status,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }
