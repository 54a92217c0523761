"""End-to-end nesting tests across the whole pipeline.

Each test drives ``optimize_nesting`` from cutting-list lines to the
final report and checks the layout properties every report must hold.
"""

from __future__ import annotations

import itertools

import pytest

from panelnest.application import MaterialSheetCatalog, optimize_nesting
from panelnest.application.config import config_to_part_specs, load_config_from_dict
from panelnest.domain import (
    CancellationToken,
    DiagnosticKind,
    GrainDirection,
    NestingReport,
    PartSpec,
    SheetSize,
)
from panelnest.infrastructure import report_to_dict

pytestmark = pytest.mark.integration


def _assert_layout_invariants(report: NestingReport, parts: list[PartSpec]) -> None:
    """Properties that hold for any report."""
    by_id = {part.id: part for part in parts}
    for result in report.results:
        sheet = result.stock_sheet
        assert 0 <= result.efficiency <= 100
        assert result.sheet_count == max(
            (p.sheet_index for p in result.placements), default=-1
        ) + 1

        for p in result.placements:
            # On the sheet
            assert p.x >= 0 and p.y >= 0
            assert p.right_edge <= sheet.length
            assert p.top_edge <= sheet.width

            # Footprint matches the part, turned only when allowed
            part = by_id[p.parent_part_id]
            expected = (part.width, part.length) if p.rotated else (part.length, part.width)
            assert (p.placed_length, p.placed_width) == expected
            # Grain follows the sheet length unless the aligned form cannot fit
            if part.grain == GrainDirection.LENGTH and p.rotated:
                assert not sheet.fits(part.length, part.width)
            if part.grain == GrainDirection.WIDTH and not p.rotated:
                assert not sheet.fits(part.width, part.length)

        for a, b in itertools.combinations(result.placements, 2):
            assert not a.overlaps(b), f"{a.unit_id} overlaps {b.unit_id}"

    # Every valid unit is accounted for exactly once
    rejected = {d.part_id for d in report.diagnostics_of(DiagnosticKind.INVALID_DIMENSION)}
    unknown = {
        (d.material_type, d.thickness)
        for d in report.diagnostics_of(DiagnosticKind.UNKNOWN_STOCK_SHEET)
    }
    expected_units = sum(
        part.quantity
        for part in parts
        if part.id not in rejected and (part.material_type, part.thickness) not in unknown
    )
    assert sum(r.unit_count for r in report.results) == expected_units
    seen = [
        unit_id
        for r in report.results
        for unit_id in itertools.chain(
            (p.unit_id for p in r.placements), r.unplaceable, r.pending
        )
    ]
    assert len(seen) == len(set(seen))


class TestWorkedExamples:
    def test_two_sides_share_a_sheet(self, make_part) -> None:
        parts = [make_part("p1", 800, 600, quantity=2, grain=GrainDirection.LENGTH)]
        report = optimize_nesting(parts, SheetSize(2440, 1220))

        result = report.results[0]
        assert [(p.x, p.y, p.rotated) for p in result.placements] == [
            (0, 0, False),
            (800, 0, False),
        ]
        assert result.sheet_count == 1
        assert result.efficiency == pytest.approx(32.25, abs=0.01)
        _assert_layout_invariants(report, parts)

    def test_oversized_part_is_unplaceable(self, make_part) -> None:
        parts = [make_part("long", 3000, 200, grain=GrainDirection.LENGTH)]
        report = optimize_nesting(parts, SheetSize(2440, 1220))

        result = report.results[0]
        assert result.placements == ()
        assert result.unplaceable == ("long#1",)
        assert result.sheet_count == 0
        assert result.efficiency == 0.0
        assert report.diagnostics[0].kind == DiagnosticKind.UNPLACEABLE_PART
        _assert_layout_invariants(report, parts)

    def test_grain_part_turned_only_when_it_must_be(self, make_part) -> None:
        parts = [
            make_part("long", 2500, 600, grain=GrainDirection.LENGTH),
            make_part("short", 1000, 600, grain=GrainDirection.LENGTH),
        ]
        report = optimize_nesting(parts, SheetSize(2100, 2800))

        placements = {p.unit_id: p for p in report.results[0].placements}
        assert placements["long#1"].rotated
        assert not placements["short#1"].rotated
        _assert_layout_invariants(report, parts)

    def test_width_grain_part_follows_sheet_grain(self, make_part) -> None:
        parts = [make_part("rail", 700, 400, quantity=2, grain=GrainDirection.WIDTH)]
        report = optimize_nesting(parts, SheetSize(2440, 1220))

        for p in report.results[0].placements:
            assert p.rotated
            assert (p.placed_length, p.placed_width) == (400, 700)
        assert report.results[0].placements[1].x == 400
        _assert_layout_invariants(report, parts)

    def test_kitchen_cutting_list(self, kitchen_cutting_list) -> None:
        report = optimize_nesting(kitchen_cutting_list)

        assert report.total_sheets == 3
        assert report.total_placed == 8
        assert report.diagnostics == ()
        _assert_layout_invariants(report, kitchen_cutting_list)


class TestMixedFailures:
    def test_bad_lines_do_not_stop_the_rest(self, make_part) -> None:
        parts = [
            make_part("ok", quantity=3),
            make_part("neg", length=-100),
            make_part("none", quantity=0),
            make_part("oak", material_type="Oak", thickness=25),
            make_part("huge", 5000, 5000),
            make_part("mdf", 500, 400, material_type="MDF", quantity=4),
        ]
        report = optimize_nesting(parts)

        assert [d.kind for d in report.diagnostics] == [
            DiagnosticKind.INVALID_DIMENSION,
            DiagnosticKind.INVALID_DIMENSION,
            DiagnosticKind.UNKNOWN_STOCK_SHEET,
            DiagnosticKind.UNPLACEABLE_PART,
        ]
        assert report.total_placed == 7
        assert report.has_errors
        _assert_layout_invariants(report, parts)


class TestManySheets:
    @pytest.mark.slow
    def test_large_mixed_list(self, make_part) -> None:
        parts = [
            make_part(
                f"part-{n}",
                length=150 + (n * 97) % 1400,
                width=100 + (n * 53) % 900,
                quantity=1 + n % 4,
                grain=list(GrainDirection)[n % 3],
                material_type=("Plywood", "MDF", "Melamine")[n % 3],
            )
            for n in range(60)
        ]
        report = optimize_nesting(parts, kerf=3.2)

        assert report.total_sheets > 3
        assert report.diagnostics == ()
        _assert_layout_invariants(report, parts)

    def test_deterministic(self, kitchen_cutting_list) -> None:
        first = optimize_nesting(kitchen_cutting_list, kerf=2)
        second = optimize_nesting(kitchen_cutting_list, kerf=2)
        assert first == second
        assert report_to_dict(first) == report_to_dict(second)

    def test_parallel_equals_sequential(self, make_part) -> None:
        parts = [
            make_part(f"p{n}", 300 + n * 40, 200 + n * 25, quantity=3,
                      material_type=("Plywood", "MDF", "Melamine")[n % 3])
            for n in range(12)
        ]
        sequential = optimize_nesting(parts)
        parallel = optimize_nesting(parts, max_workers=3)
        assert parallel == sequential


class TestCancellation:
    def test_cancelled_before_start(self, kitchen_cutting_list) -> None:
        token = CancellationToken()
        token.cancel()

        report = optimize_nesting(kitchen_cutting_list, cancellation=token)

        assert report.cancelled
        assert not report.has_errors
        assert report.total_placed == 0
        pending = [unit_id for r in report.results for unit_id in r.pending]
        assert sorted(pending) == sorted(
            f"{part.id}#{n}"
            for part in kitchen_cutting_list
            for n in range(1, part.quantity + 1)
        )
        _assert_layout_invariants(report, kitchen_cutting_list)

    def test_cancelled_parallel(self, kitchen_cutting_list) -> None:
        token = CancellationToken()
        token.cancel()
        report = optimize_nesting(kitchen_cutting_list, max_workers=3, cancellation=token)
        assert len(report.diagnostics_of(DiagnosticKind.CANCELLED)) == 3


class TestFromRequest:
    def test_legacy_request_payload(self) -> None:
        """A camelCase request from an existing cutting-list export nests end to end."""
        request = load_config_from_dict(
            {
                "cuttingList": [
                    {"id": 1, "partName": "Side", "materialType": "Plywood", "thickness": 18,
                     "length": 720, "width": 560, "quantity": 2, "grain": "With Length"},
                    {"id": 2, "partName": "Shelf", "materialType": "Plywood", "thickness": 18,
                     "length": 762, "width": 540, "grain": "No"},
                ],
                "sheetSize": "2440x1220",
                "materialType": "all",
            }
        )
        parts = config_to_part_specs(request)
        report = optimize_nesting(
            parts,
            SheetSize(request.stock_sheet.length, request.stock_sheet.width),
            request.material_filter,
            catalog=MaterialSheetCatalog.default(),
        )

        assert report.total_placed == 3
        assert {p.parent_part_id for p in report.results[0].placements} == {"1", "2"}
        _assert_layout_invariants(report, parts)
