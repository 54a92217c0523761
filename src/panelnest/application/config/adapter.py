"""Conversion from validated request schemas to domain objects.

The optimizer works on frozen domain types only; this adapter is the one
place that knows both the wire shape and the domain shape.
"""

from typing import Sequence

from panelnest.application.catalog import CatalogEntry, MaterialSheetCatalog
from panelnest.application.config.schema import (
    CatalogEntrySchema,
    NestingRequestSchema,
    PartSpecSchema,
    SheetSizeSchema,
)
from panelnest.application.optimizer import NestingOptions
from panelnest.domain.value_objects import EdgeBanding, PartSpec, SheetSize


def config_to_part_spec(config: PartSpecSchema) -> PartSpec:
    return PartSpec(
        id=config.id,
        name=config.name or config.id,
        material_type=config.material_type,
        thickness=config.thickness,
        length=config.length,
        width=config.width,
        quantity=config.quantity,
        grain=config.grain,
        edge_banding=EdgeBanding(
            front=config.edge_banding.front,
            back=config.edge_banding.back,
            left=config.edge_banding.left,
            right=config.edge_banding.right,
        ),
        priority=config.priority,
    )


def config_to_part_specs(config: NestingRequestSchema) -> list[PartSpec]:
    """Convert the request's cutting list, preserving line order."""
    return [config_to_part_spec(part) for part in config.cutting_list]


def config_to_sheet_size(config: SheetSizeSchema | None) -> SheetSize | None:
    if config is None:
        return None
    return SheetSize(length=config.length, width=config.width)


def config_to_options(
    config: NestingRequestSchema,
    stock_sheet: SheetSize | None = None,
    material_filter: str | None = None,
    kerf: float | None = None,
    max_workers: int | None = None,
) -> NestingOptions:
    """Build optimizer options from a request.

    Explicit arguments (e.g. CLI flags) take precedence over request values.
    """
    return NestingOptions(
        stock_sheet=stock_sheet or config_to_sheet_size(config.stock_sheet),
        material_filter=material_filter if material_filter is not None else config.material_filter,
        kerf=kerf if kerf is not None else config.kerf,
        max_workers=max_workers if max_workers is not None else config.max_workers,
    )


def config_to_catalog(
    entries: Sequence[CatalogEntrySchema] | None,
) -> MaterialSheetCatalog:
    """Build a catalog from schema entries, or the bundled one if there are none."""
    if not entries:
        return MaterialSheetCatalog.default()
    return MaterialSheetCatalog(
        CatalogEntry(
            id=entry.id,
            name=entry.name or entry.id,
            material_type=entry.material_type,
            thickness=entry.thickness,
            length=entry.length,
            width=entry.width,
            cost_per_sheet=entry.cost_per_sheet,
            supplier=entry.supplier,
            is_standard=entry.is_standard,
        )
        for entry in entries
    )
