"""Domain services for the nesting pipeline.

Services are listed in pipeline order: expansion, grouping, orientation,
packing, sheet allocation, efficiency, and result assembly.
"""

from .unit_expander import ExpansionResult, UnitExpander, validate_part_spec
from .material_grouper import (
    GroupingResult,
    MaterialGroup,
    MaterialGrouper,
    StockSheetCatalog,
)
from .orientation import Orientation, OrientationResolver
from .sheet_allocator import SheetAllocator, SheetContext
from .shelf_packer import (
    PackingOutcome,
    Placed,
    PlacementOutcome,
    ShelfPacker,
    Skipped,
    cancelled_diagnostic,
)
from .efficiency import (
    EfficiencyReport,
    calculate_efficiency,
    combine_efficiency,
    efficiency_percentage,
)
from .result_assembler import ResultAssembler

__all__ = [
    "EfficiencyReport",
    "ExpansionResult",
    "GroupingResult",
    "MaterialGroup",
    "MaterialGrouper",
    "Orientation",
    "OrientationResolver",
    "PackingOutcome",
    "Placed",
    "PlacementOutcome",
    "ResultAssembler",
    "SheetAllocator",
    "SheetContext",
    "ShelfPacker",
    "Skipped",
    "StockSheetCatalog",
    "UnitExpander",
    "calculate_efficiency",
    "cancelled_diagnostic",
    "combine_efficiency",
    "efficiency_percentage",
    "validate_part_spec",
]
