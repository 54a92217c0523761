"""Quantity expansion of cutting-list lines into placeable units."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from panelnest.domain.errors import Diagnostic, InvalidDimension
from panelnest.domain.value_objects import PartSpec, PlaceableUnit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpansionResult:
    """Units produced from a cutting list plus the lines that were rejected.

    Attributes:
        units: Individual units in expansion order.
        diagnostics: One INVALID_DIMENSION diagnostic per rejected line.
        rejected_part_ids: Ids of the rejected lines, in input order.
    """

    units: tuple[PlaceableUnit, ...]
    diagnostics: tuple[Diagnostic, ...]
    rejected_part_ids: tuple[str, ...]


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def validate_part_spec(spec: PartSpec) -> None:
    """Check that a cutting-list line can be expanded.

    Raises:
        InvalidDimension: If length, width or thickness is not positive,
            or quantity is below 1.
    """
    problems: list[str] = []
    if not _is_positive(spec.length):
        problems.append(f"length {spec.length}")
    if not _is_positive(spec.width):
        problems.append(f"width {spec.width}")
    if not _is_positive(spec.thickness):
        problems.append(f"thickness {spec.thickness}")
    if spec.quantity < 1:
        problems.append(f"quantity {spec.quantity}")

    if problems:
        raise InvalidDimension(
            f"Part '{spec.name or spec.id}' has invalid {', '.join(problems)}",
            part_id=spec.id,
            material_type=spec.material_type,
            thickness=spec.thickness,
        )


class UnitExpander:
    """Expands each cutting-list line into one unit per physical piece.

    Expansion order is preserved: parts earlier in the input expand first,
    and unit ``n`` of a part precedes unit ``n + 1``.
    """

    def expand(self, specs: Sequence[PartSpec]) -> ExpansionResult:
        units: list[PlaceableUnit] = []
        diagnostics: list[Diagnostic] = []
        rejected: list[str] = []

        for spec in specs:
            try:
                validate_part_spec(spec)
            except InvalidDimension as e:
                logger.warning("Rejected cutting-list line: %s", e.message)
                diagnostics.append(e.to_diagnostic())
                rejected.append(spec.id)
                continue
            units.extend(self._expand_one(spec))

        logger.debug(
            "Expanded %d cutting-list lines into %d units (%d rejected)",
            len(specs),
            len(units),
            len(rejected),
        )
        return ExpansionResult(
            units=tuple(units),
            diagnostics=tuple(diagnostics),
            rejected_part_ids=tuple(rejected),
        )

    def _expand_one(self, spec: PartSpec) -> list[PlaceableUnit]:
        return [
            PlaceableUnit(
                unit_id=f"{spec.id}#{n}",
                parent_part_id=spec.id,
                name=spec.name,
                material_type=spec.material_type,
                thickness=spec.thickness,
                length=spec.length,
                width=spec.width,
                grain=spec.grain,
                priority=spec.priority,
            )
            for n in range(1, spec.quantity + 1)
        ]
