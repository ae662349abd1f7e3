"""I/O helpers — open workbook views, save workbooks, write JSON artifacts."""

from __future__ import annotations

import json
import zipfile
from datetime import date, datetime
from pathlib import Path
from typing import Any

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from dtproton.errors import InputOpenError, OutputWriteError

_OPEN_ERRORS = (OSError, zipfile.BadZipFile, InvalidFileException, KeyError, ValueError)

# ── Loading ──────────────────────────────────────────────────────


def _load(path: Path, **kwargs: Any) -> Workbook:
    path = Path(path)
    if not path.exists():
        raise InputOpenError(f"Input file not found: {path}")
    if path.is_dir():
        raise InputOpenError(f"Input path is a directory, not a file: {path}")
    try:
        return load_workbook(path, **kwargs)
    except _OPEN_ERRORS as exc:
        raise InputOpenError(f"Cannot open workbook {path}: {exc}") from exc


def open_read_view(path: Path) -> Workbook:
    """Open *path* for reading cached cell values.

    The returned workbook is read-only and keeps the archive open; callers
    must ``close()`` it.

    Raises
    ------
    InputOpenError
        If *path* does not exist or is not a readable workbook.
    """
    return _load(path, read_only=True, data_only=True)


def open_write_view(path: Path) -> Workbook:
    """Open *path* as a mutable workbook that keeps formatting on save."""
    return _load(path)


# ── Writing ──────────────────────────────────────────────────────


def save_workbook(workbook: Workbook, path: Path) -> Path:
    """Serialize *workbook* to *path*.

    Raises
    ------
    OutputWriteError
        If the destination cannot be written.
    """
    path = Path(path)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        workbook.save(tmp_path)
        tmp_path.replace(path)
    except OSError as exc:
        raise OutputWriteError(f"Cannot save workbook {path}: {exc}") from exc
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
    return path


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def write_json(path: Path, data: Any) -> Path:
    """Write *data* as pretty-printed JSON to *path* (atomic + deterministic)."""
    path = Path(path)
    payload = json.dumps(
        data,
        indent=2,
        sort_keys=True,
        ensure_ascii=False,
        default=_json_default,
    ) + "\n"
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(payload, encoding="utf-8")
        tmp_path.replace(path)
    except OSError as exc:
        raise OutputWriteError(f"Cannot write {path}: {exc}") from exc
    return path
