"""Material efficiency of nested layouts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Sequence

from panelnest.domain.value_objects import PlacedPart, StockSheet

if TYPE_CHECKING:
    from panelnest.domain.results import NestingResult


@dataclass(frozen=True)
class EfficiencyReport:
    """Used versus consumed stock area.

    Attributes:
        used_area: Area covered by placed parts in mm².
        total_area: Area of all consumed sheets in mm².
        efficiency: used_area / total_area x 100, clamped to [0, 100].
        waste_area: total_area - used_area in mm².
    """

    used_area: float
    total_area: float
    efficiency: float
    waste_area: float


def efficiency_percentage(used_area: float, total_area: float) -> float:
    """Percentage of consumed stock covered by parts (0 when nothing is consumed)."""
    if total_area <= 0:
        return 0.0
    return min(100.0, max(0.0, used_area / total_area * 100))


def calculate_efficiency(
    placements: Sequence[PlacedPart],
    sheet: StockSheet,
    sheet_count: int,
) -> EfficiencyReport:
    """Efficiency of one material group.

    Args:
        placements: All placements of the group.
        sheet: The group's stock sheet.
        sheet_count: Number of sheets consumed.

    Returns:
        EfficiencyReport for the group.
    """
    used_area = sum(p.placed_length * p.placed_width for p in placements)
    total_area = sheet_count * sheet.length * sheet.width
    return EfficiencyReport(
        used_area=used_area,
        total_area=total_area,
        efficiency=efficiency_percentage(used_area, total_area),
        waste_area=total_area - used_area,
    )


def combine_efficiency(results: Iterable[NestingResult]) -> EfficiencyReport:
    """Overall efficiency across material groups."""
    used_area = 0.0
    total_area = 0.0
    for result in results:
        used_area += result.used_area
        total_area += result.total_area
    return EfficiencyReport(
        used_area=used_area,
        total_area=total_area,
        efficiency=efficiency_percentage(used_area, total_area),
        waste_area=total_area - used_area,
    )
