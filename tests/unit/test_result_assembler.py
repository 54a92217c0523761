"""Tests for assembly of packing outcomes into results."""

from __future__ import annotations

from panelnest.domain import DiagnosticKind, GrainDirection, MaterialKey
from panelnest.domain.errors import Diagnostic
from panelnest.domain.services import MaterialGroup, ResultAssembler, ShelfPacker


def _group(sheet, units) -> MaterialGroup:
    return MaterialGroup(key=MaterialKey("Plywood", 18), stock_sheet=sheet, units=tuple(units))


class TestAssemble:
    def test_result_fields(self, standard_sheet, make_unit) -> None:
        units = [
            make_unit("p1#1", grain=GrainDirection.LENGTH),
            make_unit("p1#2", grain=GrainDirection.LENGTH),
            make_unit("big#1", 3000, 200),
        ]
        group = _group(standard_sheet, units)
        outcome = ShelfPacker(standard_sheet).pack(group.units)

        result = ResultAssembler().assemble(group, outcome)

        assert result.material_type == "Plywood"
        assert result.thickness == 18
        assert result.sheet_count == 1
        assert result.used_area == 960_000
        assert result.efficiency == 960_000 / 2_976_800 * 100
        assert result.unplaceable == ("big#1",)
        assert result.pending == ()
        assert not result.cancelled

    def test_sheet_count_from_placements(self, standard_sheet, make_unit) -> None:
        units = [make_unit(f"f#{n}", 2440, 1220) for n in (1, 2, 3)]
        group = _group(standard_sheet, units)
        result = ResultAssembler().assemble(group, ShelfPacker(standard_sheet).pack(units))

        assert result.sheet_count == 3
        assert result.efficiency == 100.0

    def test_nothing_placed(self, standard_sheet, make_unit) -> None:
        units = [make_unit("big#1", 3000, 200)]
        group = _group(standard_sheet, units)
        result = ResultAssembler().assemble(group, ShelfPacker(standard_sheet).pack(units))

        assert result.sheet_count == 0
        assert result.efficiency == 0.0


class TestReport:
    def test_cancelled_propagates_from_results(self, standard_sheet, make_unit) -> None:
        class Cancelled:
            cancelled = True

        units = [make_unit()]
        group = _group(standard_sheet, units)
        outcome = ShelfPacker(standard_sheet).pack(units, cancellation=Cancelled())
        result = ResultAssembler().assemble(group, outcome)

        report = ResultAssembler().report([result], [])

        assert report.cancelled
        assert result.pending == ("p1#1",)

    def test_diagnostics_kept(self) -> None:
        diagnostic = Diagnostic(DiagnosticKind.UNKNOWN_STOCK_SHEET, "no sheet")
        report = ResultAssembler().report([], [diagnostic])
        assert report.diagnostics == (diagnostic,)
        assert not report.cancelled
