"""Fatal error types raised while processing a workbook."""

from __future__ import annotations


class DtprotonError(Exception):
    """Base class for unrecoverable processing errors.

    ``exit_code`` is the process exit status the CLI maps the error to.
    """

    exit_code: int = 1


class InputOpenError(DtprotonError):
    exit_code = 2


class NoWorksheetsError(DtprotonError):
    exit_code = 2


class SheetReadError(DtprotonError):
    exit_code = 2


class OutputWriteError(DtprotonError):
    exit_code = 1
