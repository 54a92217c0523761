"""Catalog command for listing stock sheets.

Also holds the catalog resolution shared by the other commands: an
explicit ``--catalog`` file wins over a request's inline catalog, which
wins over the bundled one.
"""

from pathlib import Path
from typing import Annotated

import typer

from panelnest.application import STANDARD_SHEET_SIZES, MaterialSheetCatalog
from panelnest.application.config import (
    ConfigError,
    NestingRequestSchema,
    config_to_catalog,
    load_catalog,
)


def resolve_catalog(
    request: NestingRequestSchema | None, catalog_file: Path | None
) -> MaterialSheetCatalog:
    """Pick the catalog for a command.

    Raises:
        ConfigError: If the catalog file cannot be loaded.
    """
    if catalog_file is not None:
        return load_catalog(catalog_file)
    if request is not None and request.catalog:
        return config_to_catalog(request.catalog)
    return MaterialSheetCatalog.default()


def catalog_command(
    catalog_file: Annotated[
        Path | None,
        typer.Option("--catalog", help="JSON catalog file to list instead of the bundled one"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the catalog as JSON"),
    ] = False,
    sizes: Annotated[
        bool,
        typer.Option("--sizes", help="List the standard sheet size presets"),
    ] = False,
) -> None:
    """List the stock sheets available for nesting.

    Example:
        panelnest catalog --catalog my-sheets.json
    """
    if sizes:
        for label, size in STANDARD_SHEET_SIZES:
            typer.echo(f"{str(size):<12} {label}")
        return

    try:
        catalog = resolve_catalog(None, catalog_file)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(catalog.to_json())
        return

    lines = [
        "STOCK SHEETS",
        "=" * 76,
        f"{'Name':<28} {'Material':<12} {'Thick':>6} {'Size (mm)':<11} {'Cost':>8} {'Std':>4}",
        "-" * 76,
    ]
    for entry in catalog.entries:
        cost = "-" if entry.cost_per_sheet is None else f"{entry.cost_per_sheet:.2f}"
        lines.append(
            f"{entry.name[:28]:<28} {entry.material_type[:12]:<12} {entry.thickness:>6g} "
            f"{f'{entry.length:g}x{entry.width:g}':<11} {cost:>8} "
            f"{'yes' if entry.is_standard else 'no':>4}"
        )
    typer.echo("\n".join(lines))
