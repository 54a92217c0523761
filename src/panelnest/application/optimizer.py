"""Nesting optimizer: the pipeline from cutting list to per-sheet layouts.

The optimizer is a pure function of its inputs. It takes a cutting list and
options, and returns a ``NestingReport`` holding one ``NestingResult`` per
material group plus the diagnostics for everything that was skipped. It
never aborts the whole call because of one bad part or group.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence

from panelnest.application.catalog import MaterialSheetCatalog
from panelnest.domain.cancellation import CancellationCheck
from panelnest.domain.errors import Diagnostic
from panelnest.domain.results import NestingReport, NestingResult
from panelnest.domain.services import (
    MaterialGroup,
    MaterialGrouper,
    ResultAssembler,
    ShelfPacker,
    StockSheetCatalog,
    UnitExpander,
    cancelled_diagnostic,
)
from panelnest.domain.value_objects import PartSpec, SheetSize

logger = logging.getLogger(__name__)

# Legacy clients send this instead of omitting the filter
ALL_MATERIALS = "all"

MAX_KERF = 20.0


@dataclass(frozen=True)
class NestingOptions:
    """Options for one optimization call.

    Attributes:
        stock_sheet: Sheet size overriding the catalog for every group.
        material_filter: Only parts of this material type are processed.
        kerf: Saw kerf in mm between neighbouring parts and rows.
        max_workers: Material groups nested in parallel (1 = sequential).
    """

    stock_sheet: SheetSize | None = None
    material_filter: str | None = None
    kerf: float = 0.0
    max_workers: int = 1

    def __post_init__(self) -> None:
        if not 0 <= self.kerf <= MAX_KERF:
            raise ValueError(f"Kerf must be between 0 and {MAX_KERF:g} mm")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

    @property
    def filters_material(self) -> bool:
        return bool(self.material_filter) and self.material_filter != ALL_MATERIALS


class NestingOptimizer:
    """Runs the nesting pipeline.

    Pipeline: filter by material, expand quantities, group by material and
    resolve sheets, pack each group, then assemble results. Groups share no
    state, so with ``max_workers > 1`` they are packed on a thread pool;
    results still come back in first-seen group order.

    Attributes:
        catalog: Stock sheet catalog used when no explicit size is given.
        options: Options applied to every call.
    """

    def __init__(
        self,
        catalog: StockSheetCatalog | None = None,
        options: NestingOptions | None = None,
    ) -> None:
        self.catalog = catalog
        self.options = options or NestingOptions()
        self.expander = UnitExpander()
        self.assembler = ResultAssembler()

    def optimize(
        self,
        cutting_list: Sequence[PartSpec],
        cancellation: CancellationCheck | None = None,
    ) -> NestingReport:
        """Nest a cutting list.

        Args:
            cutting_list: Cutting-list lines. An empty list gives an empty report.
            cancellation: Optional token polled between unit placements.

        Returns:
            NestingReport with results per material group and diagnostics.
        """
        parts = self._filter_parts(cutting_list)
        if not parts:
            return self.assembler.report((), ())

        expansion = self.expander.expand(parts)
        grouper = MaterialGrouper(self.catalog, self.options.stock_sheet)
        grouping = grouper.group(expansion.units)

        logger.info(
            "Nesting %d units across %d material groups",
            len(expansion.units),
            len(grouping.groups),
        )

        diagnostics: list[Diagnostic] = [*expansion.diagnostics, *grouping.diagnostics]
        nested = self._nest_groups(grouping.groups, cancellation)

        results: list[NestingResult] = []
        for group, (result, group_diagnostics) in zip(grouping.groups, nested):
            results.append(result)
            diagnostics.extend(group_diagnostics)

        report = self.assembler.report(results, diagnostics)
        logger.info(
            "Nesting finished: %d sheets, %.1f%% overall efficiency, %d diagnostics",
            report.total_sheets,
            report.overall.efficiency,
            len(report.diagnostics),
        )
        return report

    def _filter_parts(self, cutting_list: Sequence[PartSpec]) -> list[PartSpec]:
        if not self.options.filters_material:
            return list(cutting_list)
        wanted = self.options.material_filter
        kept = [part for part in cutting_list if part.material_type == wanted]
        logger.debug(
            "Material filter '%s' kept %d of %d lines",
            wanted,
            len(kept),
            len(cutting_list),
        )
        return kept

    def _nest_groups(
        self,
        groups: Sequence[MaterialGroup],
        cancellation: CancellationCheck | None,
    ) -> list[tuple[NestingResult, list[Diagnostic]]]:
        if self.options.max_workers == 1 or len(groups) < 2:
            return [self._nest_group(group, cancellation) for group in groups]

        workers = min(self.options.max_workers, len(groups))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # map() yields in submission order
            return list(pool.map(lambda g: self._nest_group(g, cancellation), groups))

    def _nest_group(
        self,
        group: MaterialGroup,
        cancellation: CancellationCheck | None,
    ) -> tuple[NestingResult, list[Diagnostic]]:
        packer = ShelfPacker(group.stock_sheet, kerf=self.options.kerf)
        outcome = packer.pack(group.units, cancellation)

        diagnostics = list(outcome.diagnostics)
        if outcome.cancelled:
            diagnostics.append(cancelled_diagnostic(outcome.pending, group.key))

        return self.assembler.assemble(group, outcome), diagnostics


def optimize_nesting(
    cutting_list: Sequence[PartSpec],
    stock_sheet: SheetSize | None = None,
    material_filter: str | None = None,
    *,
    catalog: StockSheetCatalog | None = None,
    kerf: float = 0.0,
    max_workers: int = 1,
    cancellation: CancellationCheck | None = None,
) -> NestingReport:
    """Nest a cutting list in one call.

    Uses the bundled material sheet catalog unless another one is given.

    Example:
        >>> report = optimize_nesting(parts, SheetSize(2440, 1220))
        >>> for result in report.results:
        ...     print(result.material_type, result.sheet_count, result.efficiency)
    """
    if catalog is None:
        catalog = MaterialSheetCatalog.default()

    options = NestingOptions(
        stock_sheet=stock_sheet,
        material_filter=material_filter,
        kerf=kerf,
        max_workers=max_workers,
    )
    return NestingOptimizer(catalog, options).optimize(cutting_list, cancellation)
