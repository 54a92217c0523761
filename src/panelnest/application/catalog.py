"""Material sheet catalog.

Provides the stock sheet definitions used when a caller does not supply
an explicit sheet size. The bundled catalog lists the standard sheets the
workshop stocks; custom catalogs can be built from configuration entries
or a JSON file.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from panelnest.domain.value_objects import SheetSize, StockSheet

logger = logging.getLogger(__name__)

THICKNESS_TOLERANCE = 1e-6

# Size presets offered for manual sheet selection (length x width, mm)
STANDARD_SHEET_SIZES: tuple[tuple[str, SheetSize], ...] = (
    ("2440 x 1220mm (4x8ft)", SheetSize(2440, 1220)),
    ("3050 x 1525mm (5x10ft)", SheetSize(3050, 1525)),
    ("2100 x 2800mm", SheetSize(2100, 2800)),
    ("1520 x 1520mm", SheetSize(1520, 1520)),
    ("2100 x 2100mm", SheetSize(2100, 2100)),
    ("1800 x 3600mm", SheetSize(1800, 3600)),
)


@dataclass(frozen=True)
class CatalogEntry:
    """One purchasable sheet.

    Attributes:
        id: Catalog identifier.
        name: Display name.
        material_type: Material the sheet is made of.
        thickness: Thickness in mm.
        length: Length in mm.
        width: Width in mm.
        cost_per_sheet: Price of one sheet.
        supplier: Supplier name.
        is_standard: Standard entries win when several match.
    """

    id: str
    name: str
    material_type: str
    thickness: float
    length: float
    width: float
    cost_per_sheet: float | None = None
    supplier: str = ""
    is_standard: bool = True

    def __post_init__(self) -> None:
        if self.length <= 0 or self.width <= 0:
            raise ValueError(f"Catalog entry '{self.id}' dimensions must be positive")
        if self.thickness <= 0:
            raise ValueError(f"Catalog entry '{self.id}' thickness must be positive")

    def matches(self, material_type: str, thickness: float) -> bool:
        return self.material_type.casefold() == material_type.casefold() and math.isclose(
            self.thickness, thickness, abs_tol=THICKNESS_TOLERANCE
        )

    def to_stock_sheet(self) -> StockSheet:
        return StockSheet(
            length=self.length,
            width=self.width,
            material_type=self.material_type,
            thickness=self.thickness,
            name=self.name,
            cost_per_sheet=self.cost_per_sheet,
        )


DEFAULT_CATALOG_ENTRIES: tuple[CatalogEntry, ...] = (
    CatalogEntry(
        id="ply-18-2440-1220",
        name="Plywood 18mm",
        material_type="Plywood",
        thickness=18,
        length=2440,
        width=1220,
        cost_per_sheet=52.75,
        supplier="Wood Supply Co.",
    ),
    CatalogEntry(
        id="ply-18-2100-2800",
        name="Plywood 18mm (2100x2800)",
        material_type="Plywood",
        thickness=18,
        length=2100,
        width=2800,
        cost_per_sheet=85.50,
        supplier="Wood Supply Co.",
    ),
    CatalogEntry(
        id="ply-18-1520-1520",
        name="Plywood 18mm (1520x1520)",
        material_type="Plywood",
        thickness=18,
        length=1520,
        width=1520,
        cost_per_sheet=42.25,
        supplier="Wood Supply Co.",
    ),
    CatalogEntry(
        id="mdf-18-2440-1220",
        name="MDF 18mm",
        material_type="MDF",
        thickness=18,
        length=2440,
        width=1220,
        cost_per_sheet=38.90,
        supplier="Wood Supply Co.",
    ),
    CatalogEntry(
        id="mel-white-18-2440-1220",
        name="White Melamine 18mm",
        material_type="Melamine",
        thickness=18,
        length=2440,
        width=1220,
        cost_per_sheet=68.50,
        supplier="Laminate Plus",
    ),
    CatalogEntry(
        id="ply-12-2440-1220",
        name="Plywood 12mm (Back)",
        material_type="Plywood",
        thickness=12,
        length=2440,
        width=1220,
        cost_per_sheet=35.25,
        supplier="Wood Supply Co.",
    ),
    CatalogEntry(
        id="ply-18-1800-3600",
        name="Plywood 18mm (1800x3600)",
        material_type="Plywood",
        thickness=18,
        length=1800,
        width=3600,
        cost_per_sheet=94.50,
        supplier="Wood Supply Co.",
    ),
    CatalogEntry(
        id="ply-18-2100-2100",
        name="Plywood 18mm (2100x2100)",
        material_type="Plywood",
        thickness=18,
        length=2100,
        width=2100,
        cost_per_sheet=64.25,
        supplier="Wood Supply Co.",
    ),
)


class MaterialSheetCatalog:
    """Stock sheet lookup keyed by material type and thickness.

    Material types match case-insensitively and thicknesses within a
    tolerance. When several entries match, the first standard entry wins,
    falling back to the first entry of any kind.
    """

    def __init__(self, entries: Iterable[CatalogEntry]) -> None:
        self._entries: tuple[CatalogEntry, ...] = tuple(entries)

    @classmethod
    def default(cls) -> "MaterialSheetCatalog":
        """Catalog of the standard workshop sheets."""
        return cls(DEFAULT_CATALOG_ENTRIES)

    @classmethod
    def from_file(cls, path: Path) -> "MaterialSheetCatalog":
        """Load a catalog from a JSON list of entries.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid.
        """
        # Deferred; the config loader imports this module
        from panelnest.application.config.loader import load_catalog

        return load_catalog(path)

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def find(self, material_type: str, thickness: float) -> list[CatalogEntry]:
        """All entries for a material group, in catalog order."""
        return [e for e in self._entries if e.matches(material_type, thickness)]

    def lookup(self, material_type: str, thickness: float) -> StockSheet | None:
        matches = self.find(material_type, thickness)
        if not matches:
            logger.debug(
                "No catalog sheet for %s %gmm", material_type, thickness
            )
            return None
        standard = [e for e in matches if e.is_standard]
        entry = (standard or matches)[0]
        return entry.to_stock_sheet()

    def material_types(self) -> Sequence[str]:
        """Distinct material types, in catalog order."""
        seen: dict[str, None] = {}
        for entry in self._entries:
            seen.setdefault(entry.material_type, None)
        return list(seen)

    def to_json(self) -> str:
        return json.dumps(
            [
                {
                    "id": e.id,
                    "name": e.name,
                    "material_type": e.material_type,
                    "thickness": e.thickness,
                    "length": e.length,
                    "width": e.width,
                    "cost_per_sheet": e.cost_per_sheet,
                    "supplier": e.supplier,
                    "is_standard": e.is_standard,
                }
                for e in self._entries
            ],
            indent=2,
        )
