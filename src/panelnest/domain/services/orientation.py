"""Orientation decisions for units under grain constraints.

The sheet length runs along x and is the sheet's grain axis; the sheet
width runs along y. In the natural orientation a unit's length lies along
the sheet length. A ``length`` grain unit is aligned as it stands, while a
``width`` grain unit is turned so its width edge follows the sheet grain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from panelnest.domain.value_objects import GrainDirection, PlaceableUnit, StockSheet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Orientation:
    """Footprint of a unit as it would be placed.

    Attributes:
        placed_length: Extent along the sheet length (x).
        placed_width: Extent along the sheet width (y).
        rotated: True when the unit is turned 90 degrees.
    """

    placed_length: float
    placed_width: float
    rotated: bool = False

    @classmethod
    def natural(cls, unit: PlaceableUnit) -> "Orientation":
        return cls(unit.length, unit.width, rotated=False)

    @classmethod
    def turned(cls, unit: PlaceableUnit) -> "Orientation":
        return cls(unit.width, unit.length, rotated=True)


class OrientationResolver:
    """Chooses a unit's orientation at a given cursor position.

    Rules:
    - Grain-bearing units keep the orientation that puts their grain edge
      on the sheet length: natural for ``length``, turned for ``width``.
      The other orientation is only a fallback when the aligned form does
      not fit the sheet at all.
    - Units without grain may take either orientation that fits the sheet.
      Among those that fit at the cursor, the one leaving the least row
      length is chosen, ties going to the natural orientation.

    Attributes:
        sheet: Stock sheet the group is nested on.
    """

    def __init__(self, sheet: StockSheet) -> None:
        self.sheet = sheet

    def allowed_orientations(self, unit: PlaceableUnit) -> list[Orientation]:
        """Orientations that are legal for the unit and fit an empty sheet.

        An empty list means the unit cannot be placed on this sheet.
        """
        natural = Orientation.natural(unit)
        turned = Orientation.turned(unit)
        natural_fits = self._fits_sheet(natural)
        turned_fits = self._fits_sheet(turned)

        if unit.grain == GrainDirection.NONE:
            options: list[Orientation] = []
            if natural_fits:
                options.append(natural)
            # Rotating a square changes nothing
            if turned_fits and unit.length != unit.width:
                options.append(turned)
            return options

        if unit.grain == GrainDirection.WIDTH:
            aligned, aligned_fits = turned, turned_fits
            fallback, fallback_fits = natural, natural_fits
        else:
            aligned, aligned_fits = natural, natural_fits
            fallback, fallback_fits = turned, turned_fits

        if aligned_fits:
            return [aligned]
        if fallback_fits:
            logger.debug(
                "Unit '%s' (%s grain) only fits the sheet across the grain",
                unit.unit_id,
                unit.grain.value,
            )
            return [fallback]
        return []

    def can_place(self, unit: PlaceableUnit) -> bool:
        """Whether the unit fits an empty sheet in some legal orientation."""
        return bool(self.allowed_orientations(unit))

    def resolve(
        self,
        unit: PlaceableUnit,
        cursor_x: float,
        cursor_y: float,
    ) -> Orientation | None:
        """Pick the orientation to try at ``(cursor_x, cursor_y)``.

        The returned orientation does not necessarily fit at the cursor;
        the packer uses it to decide whether to wrap the row or start a new
        sheet, then asks again.

        Args:
            unit: Unit to place.
            cursor_x: Current x position on the sheet.
            cursor_y: Current y position of the row.

        Returns:
            The chosen orientation, or None if the unit fits no empty sheet.
        """
        options = self.allowed_orientations(unit)
        if not options:
            return None
        if len(options) == 1:
            return options[0]

        fitting = [o for o in options if self._fits_at(o, cursor_x, cursor_y)]
        if fitting:
            return min(fitting, key=lambda o: self._leftover_row_length(o, cursor_x))

        # Nothing fits here. Prefer an orientation that overflows the row,
        # since wrapping keeps the current sheet in play.
        for option in options:
            if cursor_x + option.placed_length > self.sheet.length:
                return option
        return options[0]

    def _fits_sheet(self, orientation: Orientation) -> bool:
        return self.sheet.fits(orientation.placed_length, orientation.placed_width)

    def _fits_at(self, orientation: Orientation, x: float, y: float) -> bool:
        return (
            x + orientation.placed_length <= self.sheet.length
            and y + orientation.placed_width <= self.sheet.width
        )

    def _leftover_row_length(self, orientation: Orientation, x: float) -> float:
        return self.sheet.length - (x + orientation.placed_length)
