"""Spreadsheet cell references from 1-based grid positions."""

from __future__ import annotations

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def column_to_letters(col: int) -> str:
    """Return the column letters for a 1-based column (1 -> A, 27 -> AA)."""
    if col < 1:
        raise ValueError(f"column must be >= 1, got {col}")
    letters: list[str] = []
    while col > 0:
        col, rem = divmod(col - 1, 26)
        letters.append(_ALPHABET[rem])
    return "".join(reversed(letters))


def cell_reference(col: int, row: int) -> str:
    """Return the address of a 1-based (col, row) position, e.g. ``B6``."""
    if row < 1:
        raise ValueError(f"row must be >= 1, got {row}")
    return f"{column_to_letters(col)}{row}"
