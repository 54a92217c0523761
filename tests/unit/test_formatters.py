"""Tests for the text report formatters."""

from __future__ import annotations

from dataclasses import replace

from panelnest.application import optimize_nesting
from panelnest.domain import NestingReport, SheetSize
from panelnest.infrastructure import DiagnosticsFormatter, NestingSummaryFormatter


class TestNestingSummaryFormatter:
    def test_empty_report(self) -> None:
        assert NestingSummaryFormatter().format(NestingReport()) == "No parts to nest."

    def test_summary_table(self, simple_report) -> None:
        output = NestingSummaryFormatter().format(simple_report)

        assert output.startswith("NESTING SUMMARY")
        assert "Plywood 18mm" in output
        assert "2440x1220" in output
        assert "32.2%" in output
        assert "52.75" in output
        assert "TOTAL" in output
        assert "Used 0.96 m² of 2.98 m²" in output

    def test_unknown_cost_shown_as_dash(self, make_part) -> None:
        report = optimize_nesting([make_part()], SheetSize(1000, 1000))
        total_line = [
            line for line in NestingSummaryFormatter().format(report).split("\n")
            if line.startswith("TOTAL")
        ][0]
        assert total_line.rstrip().endswith("-")

    def test_placements_listed(self, simple_report) -> None:
        output = NestingSummaryFormatter(show_placements=True).format(simple_report)
        assert "PLYWOOD 18MM" in output
        assert "Side Panel" in output

    def test_cancelled_note(self, simple_report) -> None:
        cancelled = replace(simple_report, cancelled=True)
        assert "cancelled" in NestingSummaryFormatter().format(cancelled)


class TestDiagnosticsFormatter:
    def test_no_issues(self, simple_report) -> None:
        assert DiagnosticsFormatter().format(simple_report) == "No issues found."

    def test_grouped_by_kind(self, make_part) -> None:
        report = optimize_nesting(
            [
                make_part("big", 3000, 200),
                make_part("bad", width=0),
                make_part("oak", material_type="Oak"),
            ]
        )
        output = DiagnosticsFormatter().format(report)

        assert output.startswith("ISSUES (3)")
        assert "Invalid part dimensions:" in output
        assert "Missing stock sheets:" in output
        assert "Parts larger than the sheet:" in output
        assert "[big#1]" in output
        assert "[bad]" in output
        assert output.index("Invalid part dimensions") < output.index("Missing stock sheets")
