"""Pydantic response schemas for the REST API.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SheetSizeResponseSchema(_CamelModel):
    length: float = Field(..., description="Sheet length in mm")
    width: float = Field(..., description="Sheet width in mm")


class NestingPartSchema(_CamelModel):
    """A placed part."""

    id: str = Field(..., description="Unit id, e.g. 'side-1#2'")
    part_id: str = Field(..., description="Cutting-list line the unit came from")
    name: str = Field(..., description="Part name")
    sheet_index: int = Field(..., description="Zero-based sheet index within the material group")
    x: float = Field(..., description="Offset along the sheet length in mm")
    y: float = Field(..., description="Offset along the sheet width in mm")
    rotation: int = Field(..., description="0 or 90 degrees")
    length: float = Field(..., description="Extent along the sheet length in mm")
    width: float = Field(..., description="Extent along the sheet width in mm")
    grain: str = Field(..., description="Grain constraint of the part")


class NestingResultSchema(_CamelModel):
    """Nesting result for one material group."""

    id: str
    sheet_size: SheetSizeResponseSchema
    sheet_name: str | None = None
    material_type: str
    thickness: float
    parts: list[NestingPartSchema] = Field(default_factory=list)
    efficiency: float = Field(..., description="Used area percentage of consumed sheets")
    used_area: float
    waste_area: float
    total_area: float
    sheet_count: int
    cost_per_sheet: float | None = None
    material_cost: float | None = None
    unplaceable: list[str] = Field(default_factory=list)
    pending: list[str] = Field(default_factory=list)
    cancelled: bool = False


class DiagnosticSchema(_CamelModel):
    """Something the optimizer skipped."""

    kind: str = Field(..., description="invalid_dimension, unknown_stock_sheet, unplaceable_part or cancelled")
    message: str
    part_id: str | None = None
    unit_id: str | None = None
    material_type: str | None = None
    thickness: float | None = None


class NestingSummarySchema(_CamelModel):
    total_sheets: int
    total_parts: int
    used_area: float
    total_area: float
    waste_area: float
    efficiency: float


class NestingResponseSchema(_CamelModel):
    """Response for a nesting request."""

    results: list[NestingResultSchema] = Field(default_factory=list)
    diagnostics: list[DiagnosticSchema] = Field(default_factory=list)
    cancelled: bool = False
    summary: NestingSummarySchema


class CatalogEntryResponseSchema(_CamelModel):
    """A stock sheet in the material catalog."""

    id: str
    name: str
    material_type: str
    thickness: float
    length: float
    width: float
    cost_per_sheet: float | None = None
    supplier: str = ""
    is_standard: bool = True


class CatalogResponseSchema(_CamelModel):
    sheets: list[CatalogEntryResponseSchema] = Field(default_factory=list)
    standard_sizes: list[SheetSizeResponseSchema] = Field(default_factory=list)


class ExportFormatsSchema(BaseModel):
    """Response for available export formats."""

    formats: list[str] = Field(..., description="Available format names")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
