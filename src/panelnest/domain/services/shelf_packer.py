"""Shelf (row) packing of one material group onto sequential sheets.

The packer fills rows left to right along the sheet length, wraps to a new
row when the sheet length is exhausted, and moves to a new sheet when the
sheet width is exhausted. It is deterministic: the same units in the same
order always give the same placements, which makes the layout explainable
on the shop floor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

from panelnest.domain.cancellation import NEVER_CANCELLED, CancellationCheck
from panelnest.domain.errors import Cancelled, Diagnostic, UnplaceablePart
from panelnest.domain.services.orientation import Orientation, OrientationResolver
from panelnest.domain.services.sheet_allocator import SheetAllocator, SheetContext
from panelnest.domain.value_objects import (
    MaterialKey,
    PlaceableUnit,
    PlacedPart,
    StockSheet,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placed:
    """The unit was placed."""

    unit: PlaceableUnit
    placement: PlacedPart


@dataclass(frozen=True)
class Skipped:
    """The unit was not placed, with the reason why."""

    unit: PlaceableUnit
    reason: Diagnostic


PlacementOutcome = Union[Placed, Skipped]


@dataclass(frozen=True)
class PackingOutcome:
    """Everything the packer produced for one material group.

    Attributes:
        outcomes: One ``Placed`` or ``Skipped`` per attempted unit, in
            packing order.
        pending: Units never attempted because the run was cancelled.
        sheet_count: Number of sheets that received placements.
        cancelled: True if cancellation was observed.
    """

    outcomes: tuple[PlacementOutcome, ...]
    pending: tuple[PlaceableUnit, ...]
    sheet_count: int
    cancelled: bool = False

    @property
    def placements(self) -> tuple[PlacedPart, ...]:
        return tuple(o.placement for o in self.outcomes if isinstance(o, Placed))

    @property
    def skipped(self) -> tuple[Skipped, ...]:
        return tuple(o for o in self.outcomes if isinstance(o, Skipped))

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(o.reason for o in self.skipped)


class ShelfPacker:
    """Places units on sheets with a deterministic shelf heuristic.

    Units are sorted by area, largest first, using a stable sort so that
    equal areas keep their input order. Each unit is then placed at the
    cursor of the current sheet, wrapping rows and allocating sheets as
    needed. Earlier rows and sheets are never revisited.

    Attributes:
        sheet: Stock sheet of the material group.
        kerf: Saw kerf in mm left between neighbouring parts and rows.
        resolver: Orientation resolver for the sheet.
    """

    def __init__(self, sheet: StockSheet, kerf: float = 0.0) -> None:
        if kerf < 0:
            raise ValueError("Kerf must be non-negative")
        self.sheet = sheet
        self.kerf = kerf
        self.resolver = OrientationResolver(sheet)

    def pack(
        self,
        units: Sequence[PlaceableUnit],
        cancellation: CancellationCheck | None = None,
    ) -> PackingOutcome:
        """Pack all units of one material group.

        Args:
            units: Units of a single material group, in input order.
            cancellation: Polled before each unit; when it reports
                cancelled, packing stops and the rest is returned as pending.

        Returns:
            PackingOutcome with per-unit outcomes and the sheet count.
        """
        token = cancellation or NEVER_CANCELLED
        ordered = self.sort_units(units)
        allocator = SheetAllocator()
        outcomes: list[PlacementOutcome] = []

        logger.debug(
            "Packing %d units onto %gx%g sheets",
            len(ordered),
            self.sheet.length,
            self.sheet.width,
        )

        for position, unit in enumerate(ordered):
            if token.cancelled:
                pending = tuple(ordered[position:])
                logger.info(
                    "Packing cancelled with %d of %d units pending",
                    len(pending),
                    len(ordered),
                )
                return PackingOutcome(
                    outcomes=tuple(outcomes),
                    pending=pending,
                    sheet_count=allocator.sheet_count,
                    cancelled=True,
                )
            outcomes.append(self._place_unit(unit, allocator))

        return PackingOutcome(
            outcomes=tuple(outcomes),
            pending=(),
            sheet_count=allocator.sheet_count,
        )

    def sort_units(self, units: Sequence[PlaceableUnit]) -> list[PlaceableUnit]:
        """Largest area first; ``sorted`` is stable so ties keep input order."""
        return sorted(units, key=lambda u: u.area, reverse=True)

    def _place_unit(
        self,
        unit: PlaceableUnit,
        allocator: SheetAllocator,
    ) -> PlacementOutcome:
        if not self.resolver.can_place(unit):
            error = UnplaceablePart(
                f"Unit '{unit.unit_id}' ({unit.length:g}x{unit.width:g}) does not "
                f"fit a {self.sheet.length:g}x{self.sheet.width:g} sheet in any "
                f"permitted orientation",
                part_id=unit.parent_part_id,
                unit_id=unit.unit_id,
                material_type=unit.material_type,
                thickness=unit.thickness,
            )
            logger.warning("%s", error.message)
            return Skipped(unit=unit, reason=error.to_diagnostic())

        while True:
            context = allocator.current
            orientation = self.resolver.resolve(unit, context.cursor_x, context.cursor_y)
            # can_place() guarantees an orientation exists
            assert orientation is not None

            if context.cursor_x + orientation.placed_length > self.sheet.length:
                context.start_new_row(self.kerf)
                continue

            if context.cursor_y + orientation.placed_width > self.sheet.width:
                allocator.advance()
                continue

            return Placed(unit=unit, placement=self._emit(unit, orientation, context))

    def _emit(
        self,
        unit: PlaceableUnit,
        orientation: Orientation,
        context: SheetContext,
    ) -> PlacedPart:
        x, y = context.place(
            orientation.placed_length, orientation.placed_width, self.kerf
        )
        placement = PlacedPart(
            unit_id=unit.unit_id,
            parent_part_id=unit.parent_part_id,
            name=unit.name,
            sheet_index=context.index,
            x=x,
            y=y,
            rotated=orientation.rotated,
            placed_length=orientation.placed_length,
            placed_width=orientation.placed_width,
            grain=unit.grain,
        )
        if orientation.rotated:
            logger.debug(
                "Unit '%s' placed rotated at (%g, %g) on sheet %d, "
                "placed dimensions: %gx%g (original: %gx%g)",
                unit.unit_id,
                x,
                y,
                context.index,
                orientation.placed_length,
                orientation.placed_width,
                unit.length,
                unit.width,
            )
        return placement


def cancelled_diagnostic(
    pending: Sequence[PlaceableUnit], key: MaterialKey
) -> Diagnostic:
    """Summarize the units left unattempted by a cancelled run."""
    return Cancelled(
        f"Nesting of {key.describe()} cancelled "
        f"with {len(pending)} unit(s) not attempted",
        material_type=key.material_type,
        thickness=key.thickness,
    ).to_diagnostic()
