"""Nesting error taxonomy and structured diagnostics.

The optimizer never aborts a whole call because of one bad part or one
unresolvable material group. Each failure is raised as a ``NestingError``
at the point of detection, caught by the owning pipeline stage, and turned
into a ``Diagnostic`` that travels with the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DiagnosticKind(str, Enum):
    """Category of a nesting diagnostic."""

    INVALID_DIMENSION = "invalid_dimension"
    UNKNOWN_STOCK_SHEET = "unknown_stock_sheet"
    UNPLACEABLE_PART = "unplaceable_part"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Diagnostic:
    """A structured report of something the optimizer skipped.

    Attributes:
        kind: Category of the problem.
        message: Human-readable description.
        part_id: Cutting-list line involved, if any.
        unit_id: Expanded unit involved, if any.
        material_type: Material group involved, if any.
        thickness: Thickness of the material group involved, if any.
    """

    kind: DiagnosticKind
    message: str
    part_id: str | None = None
    unit_id: str | None = None
    material_type: str | None = None
    thickness: float | None = None


class NestingError(Exception):
    """Base class for recoverable nesting failures."""

    kind: DiagnosticKind

    def __init__(
        self,
        message: str,
        *,
        part_id: str | None = None,
        unit_id: str | None = None,
        material_type: str | None = None,
        thickness: float | None = None,
    ) -> None:
        self.message = message
        self.part_id = part_id
        self.unit_id = unit_id
        self.material_type = material_type
        self.thickness = thickness
        super().__init__(message)

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            kind=self.kind,
            message=self.message,
            part_id=self.part_id,
            unit_id=self.unit_id,
            material_type=self.material_type,
            thickness=self.thickness,
        )


class InvalidDimension(NestingError):
    """A cutting-list line has a non-positive dimension or quantity."""

    kind = DiagnosticKind.INVALID_DIMENSION


class UnknownStockSheet(NestingError):
    """No sheet definition could be resolved for a material group."""

    kind = DiagnosticKind.UNKNOWN_STOCK_SHEET

    def __init__(self, material_type: str, thickness: float) -> None:
        super().__init__(
            f"No stock sheet defined for {material_type} {thickness:g}mm",
            material_type=material_type,
            thickness=thickness,
        )


class UnplaceablePart(NestingError):
    """A unit does not fit an empty sheet in any permitted orientation."""

    kind = DiagnosticKind.UNPLACEABLE_PART


class Cancelled(NestingError):
    """Cooperative cancellation was observed while nesting a group."""

    kind = DiagnosticKind.CANCELLED
