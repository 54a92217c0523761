"""CSV exporter: one row per placed part, for the saw operator."""

from __future__ import annotations

import csv
from io import StringIO
from pathlib import Path
from typing import ClassVar

from panelnest.domain.results import NestingReport
from panelnest.infrastructure.exporters.base import ExporterRegistry

CSV_COLUMNS = (
    "material_type",
    "thickness",
    "sheet",
    "unit_id",
    "part_id",
    "name",
    "x",
    "y",
    "length",
    "width",
    "rotation",
    "grain",
)


@ExporterRegistry.register("csv")
class CsvReportExporter:
    """Writes placements as CSV rows, sheets numbered from 1."""

    format_name: ClassVar[str] = "csv"
    file_extension: ClassVar[str] = "csv"

    def export(self, report: NestingReport, path: Path) -> None:
        path.write_text(self.export_string(report), encoding="utf-8", newline="")

    def export_string(self, report: NestingReport) -> str:
        buffer = StringIO()
        writer = csv.writer(buffer)
        writer.writerow(CSV_COLUMNS)
        for result in report.results:
            for p in result.placements:
                writer.writerow(
                    [
                        result.material_type,
                        f"{result.thickness:g}",
                        p.sheet_index + 1,
                        p.unit_id,
                        p.parent_part_id,
                        p.name,
                        f"{p.x:g}",
                        f"{p.y:g}",
                        f"{p.placed_length:g}",
                        f"{p.placed_width:g}",
                        p.rotation,
                        p.grain.value,
                    ]
                )
        return buffer.getvalue()
