"""Assembly of packing outcomes into nesting results."""

from __future__ import annotations

import logging
from typing import Sequence

from panelnest.domain.errors import Diagnostic
from panelnest.domain.results import NestingReport, NestingResult
from panelnest.domain.services.efficiency import calculate_efficiency
from panelnest.domain.services.material_grouper import MaterialGroup
from panelnest.domain.services.shelf_packer import PackingOutcome

logger = logging.getLogger(__name__)


class ResultAssembler:
    """Packages per-group packing outcomes into the optimizer's output."""

    def assemble(self, group: MaterialGroup, outcome: PackingOutcome) -> NestingResult:
        """Build the NestingResult for one material group.

        The sheet count is derived from the placements themselves
        (highest sheet index + 1), not from allocator bookkeeping.
        """
        placements = outcome.placements
        sheet_count = max((p.sheet_index for p in placements), default=-1) + 1
        efficiency = calculate_efficiency(placements, group.stock_sheet, sheet_count)

        result = NestingResult(
            stock_sheet=group.stock_sheet,
            material_type=group.key.material_type,
            thickness=group.key.thickness,
            placements=placements,
            sheet_count=sheet_count,
            used_area=efficiency.used_area,
            total_area=efficiency.total_area,
            efficiency=efficiency.efficiency,
            unplaceable=tuple(s.unit.unit_id for s in outcome.skipped),
            pending=tuple(unit.unit_id for unit in outcome.pending),
            cancelled=outcome.cancelled,
        )

        logger.debug(
            "%s: %d parts on %d sheets, %.1f%% efficiency, %d unplaceable",
            group.key.describe(),
            len(placements),
            sheet_count,
            result.efficiency,
            len(result.unplaceable),
        )
        return result

    def report(
        self,
        results: Sequence[NestingResult],
        diagnostics: Sequence[Diagnostic],
        cancelled: bool = False,
    ) -> NestingReport:
        return NestingReport(
            results=tuple(results),
            diagnostics=tuple(diagnostics),
            cancelled=cancelled or any(r.cancelled for r in results),
        )
