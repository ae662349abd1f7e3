"""CLI entry point for dtproton."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table as RichTable

from dtproton import __version__
from dtproton.errors import DtprotonError
from dtproton.io import write_json
from dtproton.models import ProcessOutcome, RunManifest
from dtproton.runner import process_excel
from dtproton.utils import sha256_file, utcnow_iso

app = typer.Typer(
    name="dtproton",
    help="dtproton — Clear (RM)/(C) cells from ion-chromatography result sheets.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

USAGE_HINT = "Usage: dtproton <file.xlsx>   e.g. dtproton 45vocs2.xlsx"


def _noop(*_args: object, **_kwargs: object) -> None:
    return None


def _printer(quiet: bool) -> Callable[..., None]:
    return _noop if quiet else console.print


def _err(msg: str) -> None:
    err_console.print(f"[red]x[/red] {msg}")


# ── Helpers ──────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"dtproton v{__version__}")
        raise typer.Exit()


def _outcome_status(outcome: ProcessOutcome) -> str:
    if not outcome.scan.applicable:
        return "skipped"
    if outcome.dry_run:
        return "dry_run"
    return "success"


def _write_manifest(
    path: Path,
    input_file: Path,
    created_at: str,
    outcome: ProcessOutcome | None = None,
    *,
    error: DtprotonError | None = None,
) -> Path:
    sha256 = ""
    try:
        sha256 = sha256_file(input_file)
    except OSError:
        pass

    cleared: list[str] = []
    sheet_name = ""
    output_path = ""
    status = "failed"
    if outcome is not None:
        sheet_name = outcome.scan.sheet_name
        status = _outcome_status(outcome)
        if outcome.output_path is not None:
            cleared = list(outcome.scan.to_clear)
            output_path = str(outcome.output_path.resolve())

    manifest = RunManifest(
        version=__version__,
        input_path=str(input_file.resolve()),
        output_path=output_path,
        created_at_utc=created_at,
        sheet_name=sheet_name,
        cleared_cells=cleared,
        cleared_count=len(cleared),
        sha256=sha256,
        status=status,
        error_code=error.exit_code if error is not None else None,
        error_message=str(error) if error is not None else "",
    )
    return write_json(path, manifest.to_dict())


def _print_clear_list(addresses: list[str]) -> None:
    tbl = RichTable(title="Cells to clear", show_lines=False)
    tbl.add_column("#", justify="right")
    tbl.add_column("Cell", style="bold")
    for idx, address in enumerate(addresses, start=1):
        tbl.add_row(str(idx), address)
    console.print(tbl)


# ── Command ──────────────────────────────────────────────────────


@app.command()
def main(
    input_file: Path | None = typer.Argument(
        None,
        help="Path to the .xlsx workbook to process.",
        show_default=False,
    ),
    out_dir: Path = typer.Option(
        Path("."), "--out-dir", "-o",
        help="Directory for the processed_<name> copy.",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run",
        help="List the cells that would be cleared without writing anything.",
    ),
    manifest: Path | None = typer.Option(
        None, "--manifest",
        help="Also write a JSON run manifest to this path.",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Suppress informational output.",
    ),
    version: bool | None = typer.Option(
        None, "--version", "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Clear (RM)/(C) cells from row 6 on when A3 marks an ion-chromatography sheet."""
    if input_file is None:
        console.print(USAGE_HINT)
        return

    echo = _printer(quiet)
    created_at = utcnow_iso()

    echo(f"[blue]>[/blue] Processing {input_file} …")
    try:
        outcome = process_excel(input_file, out_dir=out_dir, dry_run=dry_run)
    except DtprotonError as exc:
        _err(f"Error processing Excel file: {exc}")
        if manifest:
            try:
                _write_manifest(manifest, input_file, created_at, error=exc)
            except DtprotonError as manifest_exc:
                _err(str(manifest_exc))
        raise typer.Exit(code=exc.exit_code)
    except Exception as exc:
        _err(f"Unexpected internal error: {exc}")
        raise typer.Exit(code=1)

    scan = outcome.scan
    echo(f"  Active sheet: {scan.sheet_name}")

    if not scan.applicable:
        echo(f"[yellow]![/yellow] {scan.reason}")
    elif dry_run:
        echo(f"  {len(scan.to_clear)} cell(s) would be cleared")
        if not quiet and scan.to_clear:
            _print_clear_list(scan.to_clear)
    else:
        echo(f"  {len(scan.to_clear)} cell(s) cleared")
        if not quiet:
            console.print(Panel(
                f"[green]Done[/green] — saved as {outcome.output_path}",
                title="dtproton", border_style="green",
            ))

    if manifest:
        try:
            manifest_path = _write_manifest(manifest, input_file, created_at, outcome)
        except DtprotonError as exc:
            _err(str(exc))
            raise typer.Exit(code=exc.exit_code)
        echo(f"  Manifest -> {manifest_path}")
