"""Validate command for checking nesting request files.

Loads a request and reports everything that would be skipped during
nesting, without running the packer.
"""

from pathlib import Path
from typing import Annotated

import typer

from panelnest.application.config import (
    ConfigError,
    config_to_part_specs,
    config_to_sheet_size,
    load_config,
)
from panelnest.cli.commands.catalog import resolve_catalog
from panelnest.domain.errors import Diagnostic
from panelnest.domain.services import MaterialGrouper, UnitExpander


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON nesting request to validate"),
    ],
    catalog_file: Annotated[
        Path | None,
        typer.Option("--catalog", help="JSON catalog file replacing the bundled one"),
    ] = None,
) -> None:
    """Validate a nesting request file.

    Checks the file for:
    - JSON syntax errors
    - Schema errors (missing fields, wrong types, duplicate part ids)
    - Part lines with invalid dimensions or quantities
    - Material groups with no stock sheet

    Exit codes:
        0 - Request is valid
        1 - Request has errors (cannot be used)
        2 - Request is usable but some parts would be skipped

    Example:
        panelnest validate kitchen.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        request = load_config(config_file)
        catalog = resolve_catalog(request, catalog_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    expansion = UnitExpander().expand(config_to_part_specs(request))
    grouper = MaterialGrouper(catalog, config_to_sheet_size(request.stock_sheet))
    grouping = grouper.group(expansion.units)
    warnings: list[Diagnostic] = [*expansion.diagnostics, *grouping.diagnostics]

    if warnings:
        typer.echo("Warnings:")
        for warning in warnings:
            subject = warning.part_id or warning.unit_id
            prefix = f"{subject}: " if subject else ""
            typer.echo(f"  {prefix}{warning.message}")
        typer.echo()
        typer.echo(f"Validation passed with {len(warnings)} warning(s)")
        raise typer.Exit(code=2)

    typer.echo(
        f"Validation passed. {len(request.cutting_list)} part line(s), "
        f"{len(expansion.units)} piece(s) in {len(grouping.groups)} material group(s)."
    )


def display_load_error(error: ConfigError) -> None:
    """Print a request loading error to stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            typer.echo(f"    Line {line}, Column {column}: {detail.get('message')}", err=True)
    elif error.error_type == "validation" and error.details:
        for detail in error.details:
            typer.echo(f"  {detail.get('path') or '(root)'}: {detail.get('message')}", err=True)
            value = detail.get("value")
            if value is not None and not isinstance(value, (dict, list)):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo(err=True)
    typer.echo("Validation failed.", err=True)
