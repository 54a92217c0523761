"""Typer CLI for panel nesting."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from panelnest.application import NestingOptimizer
from panelnest.application.config import (
    ConfigError,
    config_to_options,
    config_to_part_specs,
    load_config,
)
from panelnest.cli.commands import (
    catalog_command,
    display_load_error,
    resolve_catalog,
    validate_command,
)
from panelnest.domain import NestingReport, SheetSize
from panelnest.infrastructure import (
    CutDiagramRenderer,
    DiagnosticsFormatter,
    NestingSummaryFormatter,
    report_to_dict,
)
from panelnest.infrastructure.exporters import ExporterRegistry, ExportManager


def _handle_multi_format_export(
    output_formats_str: str,
    output_dir: Path | None,
    project_name: str,
    report: NestingReport,
) -> None:
    """Export the report via --output-formats.

    Args:
        output_formats_str: Comma-separated format list or "all".
        output_dir: Output directory, current directory if not given.
        project_name: Base name for the exported files.
        report: The nesting report to export.
    """
    if output_formats_str.lower() == "all":
        formats = ExporterRegistry.available_formats()
    else:
        formats = [f.strip().lower() for f in output_formats_str.split(",") if f.strip()]

    available = ExporterRegistry.available_formats()
    invalid = [f for f in formats if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)

    if not formats:
        typer.echo("No valid formats to export.", err=True)
        raise typer.Exit(code=1)

    manager = ExportManager(output_dir or Path("."))
    try:
        files = manager.export_all(formats, report, project_name)
    except OSError as e:
        typer.echo(f"Export error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo("\nExported files:", err=True)
    for fmt, path in files.items():
        typer.echo(f"  {fmt.upper()}: {path}", err=True)


app = typer.Typer(
    name="panelnest",
    help="Nest cutting lists of flat furniture panels onto stock sheets.",
)

app.command(name="validate")(validate_command)
app.command(name="catalog")(catalog_command)


@app.command()
def nest(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON nesting request (or a bare cutting list)"),
    ],
    sheet: Annotated[
        str | None,
        typer.Option("--sheet", "-s", help="Sheet size LENGTHxWIDTH in mm, e.g. 2440x1220"),
    ] = None,
    material: Annotated[
        str | None,
        typer.Option("--material", "-m", help="Only nest this material type ('all' for every material)"),
    ] = None,
    kerf: Annotated[
        float | None,
        typer.Option("--kerf", "-k", help="Saw kerf in mm between parts (0-20)"),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-w", help="Material groups nested in parallel"),
    ] = None,
    catalog_file: Annotated[
        Path | None,
        typer.Option("--catalog", help="JSON catalog file replacing the bundled one"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Console output: text or json"),
    ] = "text",
    ascii_diagram: Annotated[
        bool,
        typer.Option("--ascii", help="Print ASCII diagrams of every sheet"),
    ] = False,
    output_formats: Annotated[
        str | None,
        typer.Option(
            "--output-formats",
            help="Comma-separated export formats: csv,dxf,json,svg (or 'all')",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", help="Output directory for exported files"),
    ] = None,
    project_name: Annotated[
        str,
        typer.Option("--project-name", help="Project name for output file naming"),
    ] = "nesting",
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with code 2 if any part was skipped"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log placement decisions"),
    ] = False,
) -> None:
    """Nest a cutting list onto stock sheets.

    Exit codes:
        0 - Nesting completed
        1 - The request, options or catalog are invalid
        2 - With --strict, some parts were skipped

    Example:
        panelnest nest kitchen.json --sheet 2440x1220 --output-formats svg,dxf
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    if output_format not in ("text", "json"):
        typer.echo(f"Unknown output format '{output_format}'. Use text or json.", err=True)
        raise typer.Exit(code=1)

    try:
        request = load_config(config_file)
        catalog = resolve_catalog(request, catalog_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    try:
        sheet_size = SheetSize.parse(sheet) if sheet else None
        options = config_to_options(
            request,
            stock_sheet=sheet_size,
            material_filter=material,
            kerf=kerf,
            max_workers=workers,
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    optimizer = NestingOptimizer(catalog, options)
    report = optimizer.optimize(config_to_part_specs(request))

    if output_format == "json":
        typer.echo(json.dumps(report_to_dict(report), indent=2))
    else:
        typer.echo(NestingSummaryFormatter(show_placements=verbose).format(report))
        if report.diagnostics:
            typer.echo()
            typer.echo(DiagnosticsFormatter().format(report))
        if ascii_diagram:
            typer.echo()
            typer.echo(CutDiagramRenderer().render_all_ascii(report))

    if output_formats:
        _handle_multi_format_export(output_formats, output_dir, project_name, report)

    if strict and report.diagnostics:
        raise typer.Exit(code=2)


if __name__ == "__main__":
    app()
