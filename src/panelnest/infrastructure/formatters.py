"""Text formatters for nesting reports."""

from __future__ import annotations

from panelnest.domain.errors import DiagnosticKind
from panelnest.domain.results import NestingReport, NestingResult


class NestingSummaryFormatter:
    """Formats a nesting report as a per-material summary table.

    Optionally lists every placement below the summary.
    """

    def __init__(self, show_placements: bool = False) -> None:
        self._show_placements = show_placements

    def format(self, report: NestingReport) -> str:
        if not report.results:
            return "No parts to nest."

        lines = [
            "NESTING SUMMARY",
            "=" * 78,
            f"{'Material':<22} {'Sheet (mm)':<13} {'Parts':>6} {'Sheets':>7} "
            f"{'Efficiency':>11} {'Cost':>10}",
            "-" * 78,
        ]

        total_cost = 0.0
        has_cost = False
        for result in report.results:
            cost = result.material_cost
            if cost is not None:
                total_cost += cost
                has_cost = True
            sheet = result.stock_sheet
            lines.append(
                f"{result.material_key.describe():<22} "
                f"{f'{sheet.length:g}x{sheet.width:g}':<13} "
                f"{len(result.placements):>6} {result.sheet_count:>7} "
                f"{result.efficiency:>10.1f}% "
                f"{self._format_cost(cost):>10}"
            )

        overall = report.overall
        lines.append("-" * 78)
        lines.append(
            f"{'TOTAL':<22} {'':<13} {report.total_placed:>6} "
            f"{report.total_sheets:>7} {overall.efficiency:>10.1f}% "
            f"{self._format_cost(total_cost if has_cost else None):>10}"
        )
        lines.append(
            f"Used {overall.used_area / 1e6:.2f} m² of {overall.total_area / 1e6:.2f} m² "
            f"({overall.waste_area / 1e6:.2f} m² waste)"
        )

        if report.cancelled:
            lines.append("")
            lines.append("Optimization was cancelled; results are partial.")

        if self._show_placements:
            for result in report.results:
                lines.append("")
                lines.extend(self._format_placements(result))

        return "\n".join(lines)

    def _format_placements(self, result: NestingResult) -> list[str]:
        lines = [
            result.material_key.describe().upper(),
            f"{'Sheet':<6} {'Part':<24} {'X':>7} {'Y':>7} {'Length':>7} {'Width':>7} {'Rot':>4}",
            "-" * 68,
        ]
        for p in result.placements:
            lines.append(
                f"{p.sheet_index + 1:<6} {p.name[:24]:<24} {p.x:>7g} {p.y:>7g} "
                f"{p.placed_length:>7g} {p.placed_width:>7g} {p.rotation:>4}"
            )
        return lines

    @staticmethod
    def _format_cost(cost: float | None) -> str:
        return "-" if cost is None else f"{cost:.2f}"


class DiagnosticsFormatter:
    """Formats the diagnostics of a report, grouped by kind."""

    HEADINGS: dict[DiagnosticKind, str] = {
        DiagnosticKind.INVALID_DIMENSION: "Invalid part dimensions",
        DiagnosticKind.UNKNOWN_STOCK_SHEET: "Missing stock sheets",
        DiagnosticKind.UNPLACEABLE_PART: "Parts larger than the sheet",
        DiagnosticKind.CANCELLED: "Cancelled",
    }

    def format(self, report: NestingReport) -> str:
        if not report.diagnostics:
            return "No issues found."

        lines = [f"ISSUES ({len(report.diagnostics)})", "=" * 60]
        for kind in DiagnosticKind:
            found = report.diagnostics_of(kind)
            if not found:
                continue
            lines.append(f"{self.HEADINGS[kind]}:")
            for diagnostic in found:
                subject = diagnostic.unit_id or diagnostic.part_id
                prefix = f"[{subject}] " if subject else ""
                lines.append(f"  - {prefix}{diagnostic.message}")
        return "\n".join(lines)
