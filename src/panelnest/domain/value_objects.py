"""Value objects for the nesting domain.

This module provides the immutable data types that flow through the
nesting pipeline: cutting-list lines, the individual units expanded from
them, stock sheet definitions, and final part placements.

All lengths are millimetres and all areas are square millimetres.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


class GrainDirection(str, Enum):
    """Grain direction constraint for a part.

    Controls whether a part can be rotated during nesting.

    Attributes:
        NONE: No grain constraint, part can rotate freely.
        LENGTH: Grain runs parallel to the part's length edge.
        WIDTH: Grain runs parallel to the part's width edge.
    """

    NONE = "none"
    LENGTH = "length"
    WIDTH = "width"


class MaterialKey(NamedTuple):
    """Grouping key for parts that can share a physical sheet."""

    material_type: str
    thickness: float

    def describe(self) -> str:
        """Human readable label, e.g. ``Plywood 18mm``."""
        return f"{self.material_type} {self.thickness:g}mm"


@dataclass(frozen=True)
class EdgeBanding:
    """Edge-banding flags for the four edges of a part."""

    front: bool = False
    back: bool = False
    left: bool = False
    right: bool = False

    @property
    def banded_edges(self) -> int:
        """Number of edges that receive banding."""
        return sum((self.front, self.back, self.left, self.right))


@dataclass(frozen=True)
class PartSpec:
    """One line of a cutting list, before quantity expansion.

    Dimensions are not validated on construction. A cutting list may
    contain bad lines, and the unit expander reports those as diagnostics
    instead of failing the whole optimization call.
    """

    id: str
    name: str
    material_type: str
    thickness: float
    length: float
    width: float
    quantity: int = 1
    grain: GrainDirection = GrainDirection.NONE
    edge_banding: EdgeBanding = field(default_factory=EdgeBanding)
    priority: int = 0

    @property
    def material_key(self) -> MaterialKey:
        return MaterialKey(self.material_type, self.thickness)

    @property
    def area(self) -> float:
        """Area of a single piece in square millimetres."""
        return self.length * self.width

    @property
    def total_area(self) -> float:
        """Area of all pieces on this line in square millimetres."""
        return self.area * self.quantity


@dataclass(frozen=True)
class PlaceableUnit:
    """A single physical piece to be placed on a sheet."""

    unit_id: str
    parent_part_id: str
    name: str
    material_type: str
    thickness: float
    length: float
    width: float
    grain: GrainDirection = GrainDirection.NONE
    priority: int = 0

    @property
    def material_key(self) -> MaterialKey:
        return MaterialKey(self.material_type, self.thickness)

    @property
    def area(self) -> float:
        return self.length * self.width


@dataclass(frozen=True)
class SheetSize:
    """Caller-supplied sheet dimensions that override the catalog."""

    length: float
    width: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.length) and self.length > 0):
            raise ValueError("Sheet length must be positive")
        if not (math.isfinite(self.width) and self.width > 0):
            raise ValueError("Sheet width must be positive")

    @classmethod
    def parse(cls, value: str) -> "SheetSize":
        """Parse a ``LENGTHxWIDTH`` string such as ``2440x1220``.

        Raises:
            ValueError: If the string is not two positive numbers joined by ``x``.
        """
        parts = value.lower().replace("×", "x").split("x")
        if len(parts) != 2:
            raise ValueError(f"Invalid sheet size '{value}', expected LENGTHxWIDTH")
        try:
            length, width = (float(p.strip()) for p in parts)
        except ValueError:
            raise ValueError(
                f"Invalid sheet size '{value}', expected LENGTHxWIDTH"
            ) from None
        return cls(length=length, width=width)

    @property
    def area(self) -> float:
        return self.length * self.width

    def __str__(self) -> str:
        return f"{self.length:g}x{self.width:g}"


@dataclass(frozen=True)
class StockSheet:
    """Physical sheet definition used for every sheet of a material group.

    The sheet length runs along the x axis and is the sheet's grain axis;
    the width runs along the y axis.

    Attributes:
        length: Sheet length in mm.
        width: Sheet width in mm.
        material_type: Material the sheet is made of.
        thickness: Sheet thickness in mm.
        name: Catalog name, empty for caller-supplied sizes.
        cost_per_sheet: Purchase price of one sheet, if known.
    """

    length: float
    width: float
    material_type: str
    thickness: float
    name: str = ""
    cost_per_sheet: float | None = None

    def __post_init__(self) -> None:
        if not (math.isfinite(self.length) and self.length > 0):
            raise ValueError("Sheet length must be positive")
        if not (math.isfinite(self.width) and self.width > 0):
            raise ValueError("Sheet width must be positive")
        if self.cost_per_sheet is not None and self.cost_per_sheet < 0:
            raise ValueError("Sheet cost must be non-negative")

    @classmethod
    def from_size(cls, size: SheetSize, key: MaterialKey) -> "StockSheet":
        return cls(
            length=size.length,
            width=size.width,
            material_type=key.material_type,
            thickness=key.thickness,
        )

    @property
    def area(self) -> float:
        """Area of one sheet in square millimetres."""
        return self.length * self.width

    @property
    def size(self) -> SheetSize:
        return SheetSize(self.length, self.width)

    def fits(self, length: float, width: float) -> bool:
        """Whether a rectangle fits on an empty sheet as given (no rotation)."""
        return length <= self.length and width <= self.width


@dataclass(frozen=True)
class PlacedPart:
    """A unit's final position on a sheet.

    Coordinates are measured from the sheet origin; ``placed_length`` runs
    along the sheet length (x) and ``placed_width`` along the sheet width (y).

    Attributes:
        unit_id: Id of the placed unit.
        parent_part_id: Id of the cutting-list line the unit came from.
        name: Part name for labels.
        sheet_index: Zero-based sheet index within the material group.
        x: Position along the sheet length in mm.
        y: Position along the sheet width in mm.
        rotated: True if the unit is turned 90 degrees from its natural orientation.
        placed_length: Extent along x as placed.
        placed_width: Extent along y as placed.
        grain: Grain constraint of the unit, kept for rendering.
    """

    unit_id: str
    parent_part_id: str
    name: str
    sheet_index: int
    x: float
    y: float
    rotated: bool
    placed_length: float
    placed_width: float
    grain: GrainDirection = GrainDirection.NONE

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")
        if self.sheet_index < 0:
            raise ValueError("Sheet index must be non-negative")
        if self.placed_length <= 0 or self.placed_width <= 0:
            raise ValueError("Placed dimensions must be positive")

    @property
    def rotation(self) -> int:
        """Rotation in degrees (0 or 90)."""
        return 90 if self.rotated else 0

    @property
    def right_edge(self) -> float:
        return self.x + self.placed_length

    @property
    def top_edge(self) -> float:
        return self.y + self.placed_width

    @property
    def area(self) -> float:
        return self.placed_length * self.placed_width

    def overlaps(self, other: PlacedPart) -> bool:
        """Whether two placements on the same sheet share interior area."""
        if self.sheet_index != other.sheet_index:
            return False
        return (
            self.x < other.right_edge
            and other.x < self.right_edge
            and self.y < other.top_edge
            and other.y < self.top_edge
        )
