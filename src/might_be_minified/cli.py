from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich import print
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .analysis import analyze
from .io.files import (
    DEFAULT_ENCODING,
    DEFAULT_EXTENSIONS,
    SourceReadError,
    collect_sources,
    read_source,
    write_table,
)
from .report import build_file_record, build_report, records_to_dataframe, utc_now

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="might-be-minified - detect minified JavaScript",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _verdict(minified: bool) -> str:
    return "[red]Minified[/red]" if minified else "[green]Not Minified[/green]"


def _version_callback(value: bool) -> None:
    if value:
        print(f"might-be-minified {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version"
    ),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("check")
def check(
    input_file: str = typer.Argument(..., help="JavaScript file"),
    as_json: bool = typer.Option(False, "--json", help="Print the metrics as JSON"),
    encoding: str = typer.Option(DEFAULT_ENCODING, "--encoding", "-e", help="Source encoding"),
):
    """Analyze one file and print its metrics and verdict."""
    try:
        code = read_source(input_file, encoding=encoding)
    except SourceReadError as e:
        print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    a = analyze(code)
    if as_json:
        typer.echo(json.dumps(build_file_record(input_file, a), indent=2))
        return

    print(f"Analyzing {escape(repr(input_file))}")
    print("results:")
    print(f"  space to code: {a.space_to_code_ratio()}")
    print(f"  ident median: {a.median_ident_length()}")
    print(f"  shape: {a.shape()}")
    print(f"  longest line: {a.longest_line()}")
    print(f"  p: {a.minified_probability()}")
    print("")
    print(_verdict(a.is_likely_minified()))


@app.command("scan")
def scan(
    paths: List[str] = typer.Argument(..., help="Files or directories"),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Write the metrics table (.csv, .tsv, .xlsx)"
    ),
    report_file: Optional[str] = typer.Option(
        None, "--json-report", "-j", help="Write a JSON report"
    ),
    extensions: List[str] = typer.Option(
        list(DEFAULT_EXTENSIONS), "--ext", help="Extensions searched in directories"
    ),
    encoding: str = typer.Option(DEFAULT_ENCODING, "--encoding", "-e", help="Source encoding"),
):
    """Analyze many files and summarise which look minified."""
    if output_file and Path(output_file).suffix.lower() not in (".csv", ".tsv", ".xlsx"):
        raise typer.BadParameter("Output must end in .csv, .tsv or .xlsx", param_hint="--output")

    sources = collect_sources(paths, extensions=extensions)
    if not sources:
        print("[red]✗[/red] No source files found")
        raise typer.Exit(code=1)

    ts = utc_now()
    records = []
    errors: List[Dict[str, str]] = []
    for src in sources:
        try:
            code = read_source(src, encoding=encoding)
        except SourceReadError as e:
            logger.warning("Skipping %s: %s", e.path, e.reason)
            errors.append({"path": e.path, "error": e.reason})
            continue
        records.append(build_file_record(src, analyze(code)))

    if not records:
        print("[red]✗[/red] None of the sources could be read")
        raise typer.Exit(code=1)

    table = Table(title="might-be-minified")
    table.add_column("File")
    table.add_column("p", justify="right")
    table.add_column("Verdict")
    for r in records:
        table.add_row(
            escape(r["path"]),
            f"{r['minified_probability']:.3f}",
            _verdict(r["is_likely_minified"]),
        )
    Console().print(table)

    if output_file:
        write_table(records_to_dataframe(records), output_file)
        print(f"[green]✓[/green] Saved: {escape(output_file)}")

    if report_file:
        report = build_report(records, timestamp=ts, errors=errors)
        Path(report_file).write_text(json.dumps(report, indent=2), encoding="utf-8")
        print(f"[green]✓[/green] Saved: {escape(report_file)}")

    minified = sum(1 for r in records if r["is_likely_minified"])
    print(f"  {minified}/{len(records)} files likely minified")


if __name__ == "__main__":
    app()
