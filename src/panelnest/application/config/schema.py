"""Pydantic configuration schema models for nesting requests.

This module defines the schema for JSON nesting requests, as read from
files by the CLI and from request bodies by the web API. It uses Pydantic
v2 for validation and serialization.

Field names are snake_case. Every field also accepts the camelCase wire
name used by existing cutting-list exports (``cuttingList``,
``partName``, ``materialType`` and so on).

Part dimensions are not range-checked here. A bad line must not reject
the whole request; the unit expander reports it as a diagnostic instead.
"""

from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from panelnest.domain.value_objects import GrainDirection

# Supported schema versions for request files
# Version 1.0: Cutting list, sheet size and material filter
# Version 1.1: Added kerf, worker count and inline catalog
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})

CURRENT_VERSION = "1.1"


class EdgeBandingSchema(BaseModel):
    """Edge-banding flags for the four edges of a part."""

    model_config = ConfigDict(extra="ignore")

    front: bool = False
    back: bool = False
    left: bool = False
    right: bool = False


class PartSpecSchema(BaseModel):
    """One cutting-list line.

    Attributes:
        id: Line identifier, unique within the request.
        name: Part name, e.g. "Side Panel".
        material_type: Material name, e.g. "Plywood".
        thickness: Thickness in mm.
        length: Length in mm (along the grain for grain=length).
        width: Width in mm.
        quantity: Number of identical pieces.
        grain: Grain constraint: "length", "width" or "none".
        edge_banding: Edge-banding flags, carried through unchanged.
        priority: Carried through unchanged; does not affect placement.
        cabinet_id: Originating cabinet, informational only.
        cabinet_name: Originating cabinet name, informational only.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = Field(default="", validation_alias=AliasChoices("name", "partName", "part_name"))
    material_type: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("material_type", "materialType")
    )
    thickness: float
    length: float
    width: float
    quantity: int = 1
    grain: GrainDirection = GrainDirection.NONE
    edge_banding: EdgeBandingSchema = Field(
        default_factory=EdgeBandingSchema,
        validation_alias=AliasChoices("edge_banding", "edgeBanding"),
    )
    priority: int = 0
    cabinet_id: str | None = Field(
        default=None, validation_alias=AliasChoices("cabinet_id", "cabinetId")
    )
    cabinet_name: str | None = Field(
        default=None, validation_alias=AliasChoices("cabinet_name", "cabinetName")
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Accept numeric ids from spreadsheet imports."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("grain", mode="before")
    @classmethod
    def normalize_grain(cls, v: Any) -> Any:
        """Accept free-text grain values such as "With Length" or "WIDTH"."""
        if v is None or v == "":
            return GrainDirection.NONE
        if isinstance(v, str):
            text = v.strip().lower()
            if "length" in text:
                return GrainDirection.LENGTH
            if "width" in text:
                return GrainDirection.WIDTH
            if text in ("none", "no", "n/a", "-"):
                return GrainDirection.NONE
        return v


class SheetSizeSchema(BaseModel):
    """Stock sheet dimensions overriding the catalog.

    Accepts either an object with ``length`` and ``width`` or a string such
    as ``"2440x1220"``.
    """

    model_config = ConfigDict(extra="forbid")

    length: float = Field(..., gt=0, description="Sheet length in mm (grain axis)")
    width: float = Field(..., gt=0, description="Sheet width in mm")

    @model_validator(mode="before")
    @classmethod
    def parse_size_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            parts = data.lower().replace("×", "x").split("x")
            if len(parts) != 2:
                raise ValueError(f"Invalid sheet size '{data}', expected LENGTHxWIDTH")
            return {"length": parts[0].strip(), "width": parts[1].strip()}
        return data


class CatalogEntrySchema(BaseModel):
    """One stock sheet in a material catalog."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    material_type: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("material_type", "materialType", "type")
    )
    thickness: float = Field(..., gt=0)
    length: float = Field(..., gt=0)
    width: float = Field(..., gt=0)
    cost_per_sheet: float | None = Field(
        default=None, ge=0, validation_alias=AliasChoices("cost_per_sheet", "costPerSheet")
    )
    supplier: str = ""
    is_standard: bool = Field(
        default=True, validation_alias=AliasChoices("is_standard", "isStandard")
    )


class NestingRequestSchema(BaseModel):
    """Root model of a nesting request.

    Attributes:
        version: Schema version, one of SUPPORTED_VERSIONS.
        cutting_list: Cutting-list lines to nest.
        stock_sheet: Sheet size applied to every material group.
        material_filter: Only nest this material; "all" or absent nests everything.
        kerf: Saw kerf in mm between neighbouring parts and rows.
        max_workers: Material groups nested in parallel.
        catalog: Inline catalog replacing the bundled one.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    version: str = CURRENT_VERSION
    cutting_list: list[PartSpecSchema] = Field(
        default_factory=list,
        validation_alias=AliasChoices("cutting_list", "cuttingList"),
    )
    stock_sheet: SheetSizeSchema | None = Field(
        default=None,
        validation_alias=AliasChoices("stock_sheet", "stockSheet", "sheetSize", "sheet_size"),
    )
    material_filter: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "material_filter", "materialFilter", "materialType", "material_type"
        ),
    )
    kerf: float = Field(default=0.0, ge=0, le=20)
    max_workers: int = Field(
        default=1, ge=1, le=32, validation_alias=AliasChoices("max_workers", "maxWorkers")
    )
    catalog: list[CatalogEntrySchema] | None = None

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        if v not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported schema version '{v}'. "
                f"Supported versions: {', '.join(sorted(SUPPORTED_VERSIONS))}"
            )
        return v

    @model_validator(mode="after")
    def check_unique_part_ids(self) -> "NestingRequestSchema":
        seen: set[str] = set()
        duplicates: list[str] = []
        for part in self.cutting_list:
            if part.id in seen and part.id not in duplicates:
                duplicates.append(part.id)
            seen.add(part.id)
        if duplicates:
            raise ValueError(f"Duplicate part ids in cutting list: {', '.join(duplicates)}")
        return self
