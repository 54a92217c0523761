"""Tests for the shelf packing heuristic.

Tests cover:
- Row filling, row wrapping and sheet overflow
- Largest-first ordering with stable ties
- Kerf between parts and rows
- Unplaceable units and grain fallback rotation
- Cooperative cancellation
"""

from __future__ import annotations

import pytest

from panelnest.domain import (
    CancellationToken,
    DiagnosticKind,
    GrainDirection,
    MaterialKey,
    StockSheet,
)
from panelnest.domain.services import Placed, ShelfPacker, Skipped, cancelled_diagnostic


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def packer(standard_sheet: StockSheet) -> ShelfPacker:
    return ShelfPacker(standard_sheet)


def _positions(outcome) -> list[tuple[str, int, float, float]]:
    return [(p.unit_id, p.sheet_index, p.x, p.y) for p in outcome.placements]


# =============================================================================
# Construction
# =============================================================================


class TestShelfPackerInit:
    def test_negative_kerf_rejected(self, standard_sheet) -> None:
        with pytest.raises(ValueError, match="Kerf"):
            ShelfPacker(standard_sheet, kerf=-1)


# =============================================================================
# Placement
# =============================================================================


class TestRowPacking:
    """Tests for placement within rows and across sheets."""

    def test_two_parts_share_a_row(self, packer, make_unit) -> None:
        units = [
            make_unit("p1#1", grain=GrainDirection.LENGTH),
            make_unit("p1#2", grain=GrainDirection.LENGTH),
        ]
        outcome = packer.pack(units)

        assert _positions(outcome) == [("p1#1", 0, 0, 0), ("p1#2", 0, 800, 0)]
        assert all(not p.rotated for p in outcome.placements)
        assert outcome.sheet_count == 1

    def test_wraps_to_new_row(self, packer, make_unit) -> None:
        units = [make_unit(f"p#{n}", 1000, 500, grain=GrainDirection.LENGTH) for n in (1, 2, 3)]
        outcome = packer.pack(units)

        assert _positions(outcome) == [
            ("p#1", 0, 0, 0),
            ("p#2", 0, 1000, 0),
            ("p#3", 0, 0, 500),
        ]

    def test_overflows_to_new_sheet(self, packer, make_unit) -> None:
        units = [make_unit(f"full#{n}", 2440, 1220, grain=GrainDirection.LENGTH) for n in (1, 2)]
        outcome = packer.pack(units)

        assert _positions(outcome) == [("full#1", 0, 0, 0), ("full#2", 1, 0, 0)]
        assert outcome.sheet_count == 2

    def test_kerf_between_parts_and_rows(self, standard_sheet, make_unit) -> None:
        packer = ShelfPacker(standard_sheet, kerf=3)
        units = [make_unit(f"p#{n}", 1000, 500, grain=GrainDirection.LENGTH) for n in (1, 2, 3)]
        outcome = packer.pack(units)

        assert _positions(outcome) == [
            ("p#1", 0, 0, 0),
            ("p#2", 0, 1003, 0),
            ("p#3", 0, 0, 503),
        ]

    def test_placements_stay_on_sheet(self, packer, make_unit) -> None:
        units = [make_unit(f"u#{n}", 700, 450) for n in range(1, 13)]
        outcome = packer.pack(units)

        for part in outcome.placements:
            assert part.right_edge <= 2440
            assert part.top_edge <= 1220
        for i, a in enumerate(outcome.placements):
            for b in outcome.placements[i + 1:]:
                assert not a.overlaps(b)


class TestOrdering:
    def test_largest_area_first(self, packer, make_unit) -> None:
        small = make_unit("small#1", 100, 100)
        large = make_unit("large#1", 1000, 1000)
        assert [u.unit_id for u in packer.sort_units([small, large])] == ["large#1", "small#1"]

    def test_equal_areas_keep_input_order(self, packer, make_unit) -> None:
        units = [make_unit("b#1", 200, 100), make_unit("a#1", 100, 200), make_unit("c#1", 200, 100)]
        assert [u.unit_id for u in packer.sort_units(units)] == ["b#1", "a#1", "c#1"]

    def test_deterministic(self, packer, make_unit) -> None:
        units = [make_unit(f"u#{n}", 300 + n * 37, 200 + n * 11) for n in range(1, 20)]
        assert packer.pack(units) == packer.pack(units)


class TestUnplaceable:
    def test_oversized_unit_skipped(self, packer, make_unit) -> None:
        """A unit too big for an empty sheet is skipped, the rest still placed."""
        outcome = packer.pack([make_unit("big#1", 3000, 200), make_unit("ok#1")])

        assert [p.unit_id for p in outcome.placements] == ["ok#1"]
        assert len(outcome.skipped) == 1
        skipped = outcome.skipped[0]
        assert isinstance(skipped, Skipped)
        assert skipped.reason.kind == DiagnosticKind.UNPLACEABLE_PART
        assert skipped.reason.unit_id == "big#1"
        assert skipped.reason.part_id == "big"

    def test_outcomes_in_packing_order(self, packer, make_unit) -> None:
        outcome = packer.pack([make_unit("ok#1"), make_unit("big#1", 3000, 200)])
        assert isinstance(outcome.outcomes[0], Skipped)
        assert isinstance(outcome.outcomes[1], Placed)

    def test_grain_fallback_rotation(self, tall_sheet, make_unit) -> None:
        packer = ShelfPacker(tall_sheet)
        unit = make_unit("long#1", 2500, 600, grain=GrainDirection.LENGTH)

        placement = packer.pack([unit]).placements[0]

        assert placement.rotated
        assert (placement.placed_length, placement.placed_width) == (600, 2500)


class TestCancellation:
    def test_pre_cancelled_leaves_everything_pending(self, packer, make_unit) -> None:
        token = CancellationToken()
        token.cancel()
        units = [make_unit("a#1"), make_unit("b#1")]

        outcome = packer.pack(units, cancellation=token)

        assert outcome.cancelled
        assert outcome.outcomes == ()
        assert {u.unit_id for u in outcome.pending} == {"a#1", "b#1"}
        assert outcome.sheet_count == 0

    def test_cancel_mid_run(self, packer, make_unit) -> None:
        """Units already placed stay placed when cancellation is observed."""

        class CancelAfter:
            def __init__(self, polls: int) -> None:
                self.polls = polls

            @property
            def cancelled(self) -> bool:
                self.polls -= 1
                return self.polls < 0

        units = [make_unit(f"u#{n}", 500, 400) for n in (1, 2, 3)]
        outcome = packer.pack(units, cancellation=CancelAfter(2))

        assert [p.unit_id for p in outcome.placements] == ["u#1", "u#2"]
        assert [u.unit_id for u in outcome.pending] == ["u#3"]

    def test_cancelled_diagnostic(self, make_unit) -> None:
        diagnostic = cancelled_diagnostic([make_unit(), make_unit("p1#2")], MaterialKey("MDF", 18))
        assert diagnostic.kind == DiagnosticKind.CANCELLED
        assert diagnostic.material_type == "MDF"
        assert "2 unit(s)" in diagnostic.message
