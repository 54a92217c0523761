"""Result types returned by the nesting optimizer.

All results are frozen and independently owned by the caller; the
optimizer keeps no state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from panelnest.domain.errors import Diagnostic, DiagnosticKind
from panelnest.domain.value_objects import MaterialKey, PlacedPart, StockSheet

if TYPE_CHECKING:
    from panelnest.domain.services.efficiency import EfficiencyReport


@dataclass(frozen=True)
class NestingResult:
    """Nesting output for one material group.

    Attributes:
        stock_sheet: Sheet definition used for every sheet of the group.
        material_type: Material of the group.
        thickness: Thickness of the group in mm.
        placements: Placed parts across all sheets of the group.
        sheet_count: Number of sheets consumed (max sheet index + 1).
        used_area: Area covered by placements in mm².
        total_area: Area of consumed sheets in mm².
        efficiency: used_area / total_area x 100.
        unplaceable: Ids of units that fit no empty sheet.
        pending: Ids of units never attempted because of cancellation.
        cancelled: True if the group was cut short by cancellation.
    """

    stock_sheet: StockSheet
    material_type: str
    thickness: float
    placements: tuple[PlacedPart, ...]
    sheet_count: int
    used_area: float
    total_area: float
    efficiency: float
    unplaceable: tuple[str, ...] = ()
    pending: tuple[str, ...] = ()
    cancelled: bool = False

    def __post_init__(self) -> None:
        if self.efficiency < 0 or self.efficiency > 100:
            raise ValueError("Efficiency must be between 0 and 100")
        if self.sheet_count < 0:
            raise ValueError("Sheet count must be non-negative")

    @property
    def material_key(self) -> MaterialKey:
        return MaterialKey(self.material_type, self.thickness)

    @property
    def waste_area(self) -> float:
        return self.total_area - self.used_area

    @property
    def material_cost(self) -> float | None:
        """Cost of the consumed sheets, if the sheet has a price."""
        if self.stock_sheet.cost_per_sheet is None:
            return None
        return self.sheet_count * self.stock_sheet.cost_per_sheet

    @property
    def unit_count(self) -> int:
        """Units accounted for by this result, placed or not."""
        return len(self.placements) + len(self.unplaceable) + len(self.pending)

    def placements_on(self, sheet_index: int) -> tuple[PlacedPart, ...]:
        return tuple(p for p in self.placements if p.sheet_index == sheet_index)

    def sheets(self) -> list[tuple[PlacedPart, ...]]:
        """Placements grouped per sheet, in sheet order."""
        return [self.placements_on(index) for index in range(self.sheet_count)]


@dataclass(frozen=True)
class NestingReport:
    """Complete output of one optimization call.

    Attributes:
        results: One result per surviving material group, in the order the
            group was first seen in the cutting list.
        diagnostics: Everything that was skipped, and why.
        cancelled: True if cancellation was observed.
    """

    results: tuple[NestingResult, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()
    cancelled: bool = False

    @property
    def overall(self) -> EfficiencyReport:
        # Deferred; the services package imports this module
        from panelnest.domain.services.efficiency import combine_efficiency

        return combine_efficiency(self.results)

    @property
    def total_sheets(self) -> int:
        return sum(result.sheet_count for result in self.results)

    @property
    def total_placed(self) -> int:
        return sum(len(result.placements) for result in self.results)

    @property
    def has_errors(self) -> bool:
        """Whether anything was skipped for a reason other than cancellation."""
        return any(d.kind != DiagnosticKind.CANCELLED for d in self.diagnostics)

    def diagnostics_of(self, kind: DiagnosticKind) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.kind == kind)

    def result_for(self, material_type: str, thickness: float) -> NestingResult | None:
        key = MaterialKey(material_type, thickness)
        for result in self.results:
            if result.material_key == key:
                return result
        return None
