"""Domain layer - nesting types and algorithms."""

from .cancellation import CancellationCheck, CancellationToken
from .errors import (
    Cancelled,
    Diagnostic,
    DiagnosticKind,
    InvalidDimension,
    NestingError,
    UnknownStockSheet,
    UnplaceablePart,
)
from .results import NestingReport, NestingResult
from .value_objects import (
    EdgeBanding,
    GrainDirection,
    MaterialKey,
    PartSpec,
    PlaceableUnit,
    PlacedPart,
    SheetSize,
    StockSheet,
)

__all__ = [
    "CancellationCheck",
    "CancellationToken",
    "Cancelled",
    "Diagnostic",
    "DiagnosticKind",
    "EdgeBanding",
    "GrainDirection",
    "InvalidDimension",
    "MaterialKey",
    "NestingError",
    "NestingReport",
    "NestingResult",
    "PartSpec",
    "PlaceableUnit",
    "PlacedPart",
    "SheetSize",
    "StockSheet",
    "UnknownStockSheet",
    "UnplaceablePart",
]
