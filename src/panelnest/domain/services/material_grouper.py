"""Partitioning of units into independent material groups.

Material type and thickness never mix on one physical sheet, so each
``(material_type, thickness)`` pair is nested on its own against its own
stock sheet definition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable

from panelnest.domain.errors import Diagnostic, UnknownStockSheet
from panelnest.domain.value_objects import (
    MaterialKey,
    PlaceableUnit,
    SheetSize,
    StockSheet,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class StockSheetCatalog(Protocol):
    """Source of stock sheet definitions keyed by material and thickness."""

    def lookup(self, material_type: str, thickness: float) -> StockSheet | None:
        """Return the sheet for a material group, or None if unknown."""
        ...


@dataclass(frozen=True)
class MaterialGroup:
    """Units of one material group together with their resolved sheet."""

    key: MaterialKey
    stock_sheet: StockSheet
    units: tuple[PlaceableUnit, ...]

    @property
    def unit_area(self) -> float:
        return sum(unit.area for unit in self.units)


@dataclass(frozen=True)
class GroupingResult:
    """Resolved groups in first-seen order plus groups that were dropped."""

    groups: tuple[MaterialGroup, ...]
    diagnostics: tuple[Diagnostic, ...]


class MaterialGrouper:
    """Groups units by material and resolves each group's stock sheet.

    An explicit sheet size applies to every group. Otherwise the catalog is
    consulted. A group without a sheet is dropped with an
    UNKNOWN_STOCK_SHEET diagnostic; the other groups still proceed.

    Attributes:
        catalog: Catalog used when no explicit sheet size is given.
        sheet_size: Explicit sheet size overriding the catalog.
    """

    def __init__(
        self,
        catalog: StockSheetCatalog | None = None,
        sheet_size: SheetSize | None = None,
    ) -> None:
        self.catalog = catalog
        self.sheet_size = sheet_size

    def group(self, units: Sequence[PlaceableUnit]) -> GroupingResult:
        groups: list[MaterialGroup] = []
        diagnostics: list[Diagnostic] = []

        for key, members in self.partition(units).items():
            try:
                sheet = self.resolve_stock_sheet(key)
            except UnknownStockSheet as e:
                logger.warning(
                    "%s; skipping %d units", e.message, len(members)
                )
                diagnostics.append(e.to_diagnostic())
                continue
            groups.append(
                MaterialGroup(key=key, stock_sheet=sheet, units=tuple(members))
            )

        return GroupingResult(groups=tuple(groups), diagnostics=tuple(diagnostics))

    def partition(
        self, units: Sequence[PlaceableUnit]
    ) -> dict[MaterialKey, list[PlaceableUnit]]:
        """Split units by material key, keeping input order within groups.

        Dicts preserve insertion order, so the groups come out in the order
        their first unit was seen.
        """
        partitioned: dict[MaterialKey, list[PlaceableUnit]] = {}
        for unit in units:
            partitioned.setdefault(unit.material_key, []).append(unit)
        return partitioned

    def resolve_stock_sheet(self, key: MaterialKey) -> StockSheet:
        """Find the sheet definition for a material group.

        Raises:
            UnknownStockSheet: If no sheet size was given and the catalog
                has no entry for the group.
        """
        if self.sheet_size is not None:
            return StockSheet.from_size(self.sheet_size, key)

        if self.catalog is not None:
            sheet = self.catalog.lookup(key.material_type, key.thickness)
            if sheet is not None:
                return sheet

        raise UnknownStockSheet(key.material_type, key.thickness)
