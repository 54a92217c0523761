"""Application layer - optimizer entry points and the material catalog."""

from .catalog import (
    DEFAULT_CATALOG_ENTRIES,
    STANDARD_SHEET_SIZES,
    CatalogEntry,
    MaterialSheetCatalog,
)
from .optimizer import NestingOptimizer, NestingOptions, optimize_nesting

__all__ = [
    "DEFAULT_CATALOG_ENTRIES",
    "STANDARD_SHEET_SIZES",
    "CatalogEntry",
    "MaterialSheetCatalog",
    "NestingOptimizer",
    "NestingOptions",
    "optimize_nesting",
]
