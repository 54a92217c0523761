"""Material catalog endpoints."""

from fastapi import APIRouter

from panelnest.application import STANDARD_SHEET_SIZES
from panelnest.web.dependencies import CatalogDep
from panelnest.web.schemas.responses import (
    CatalogEntryResponseSchema,
    CatalogResponseSchema,
    SheetSizeResponseSchema,
)

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=CatalogResponseSchema)
async def list_catalog(catalog: CatalogDep) -> CatalogResponseSchema:
    """List the bundled stock sheets and the standard size presets."""
    return CatalogResponseSchema(
        sheets=[
            CatalogEntryResponseSchema(
                id=entry.id,
                name=entry.name,
                material_type=entry.material_type,
                thickness=entry.thickness,
                length=entry.length,
                width=entry.width,
                cost_per_sheet=entry.cost_per_sheet,
                supplier=entry.supplier,
                is_standard=entry.is_standard,
            )
            for entry in catalog.entries
        ],
        standard_sizes=[
            SheetSizeResponseSchema(length=size.length, width=size.width)
            for _, size in STANDARD_SHEET_SIZES
        ],
    )
