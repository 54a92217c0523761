"""JSON exporter for nesting reports.

The ``results`` list keeps the shape existing cutting-list tools already
read (``sheetSize``, ``materialType``, ``parts`` with ``rotation`` in
degrees, ``efficiency`` in percent). Diagnostics and the overall summary
are added alongside.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, ClassVar

from panelnest.domain.errors import Diagnostic
from panelnest.domain.results import NestingReport, NestingResult
from panelnest.domain.value_objects import PlacedPart
from panelnest.infrastructure.exporters.base import ExporterRegistry


def _number(value: float) -> float | int:
    """Whole millimetre values are written as integers."""
    return int(value) if float(value).is_integer() else round(value, 3)


def result_id(result: NestingResult) -> str:
    slug = result.material_type.lower().replace(" ", "-")
    return f"nesting-{slug}-{result.thickness:g}"


def placement_to_dict(placement: PlacedPart) -> dict[str, Any]:
    return {
        "id": placement.unit_id,
        "partId": placement.parent_part_id,
        "name": placement.name,
        "sheetIndex": placement.sheet_index,
        "x": _number(placement.x),
        "y": _number(placement.y),
        "rotation": placement.rotation,
        "length": _number(placement.placed_length),
        "width": _number(placement.placed_width),
        "grain": placement.grain.value,
    }


def result_to_dict(result: NestingResult) -> dict[str, Any]:
    sheet = result.stock_sheet
    return {
        "id": result_id(result),
        "sheetSize": {"length": _number(sheet.length), "width": _number(sheet.width)},
        "sheetName": sheet.name or None,
        "materialType": result.material_type,
        "thickness": _number(result.thickness),
        "parts": [placement_to_dict(p) for p in result.placements],
        "efficiency": round(result.efficiency, 2),
        "usedArea": _number(result.used_area),
        "wasteArea": _number(result.waste_area),
        "totalArea": _number(result.total_area),
        "sheetCount": result.sheet_count,
        "costPerSheet": sheet.cost_per_sheet,
        "materialCost": result.material_cost,
        "unplaceable": list(result.unplaceable),
        "pending": list(result.pending),
        "cancelled": result.cancelled,
    }


def diagnostic_to_dict(diagnostic: Diagnostic) -> dict[str, Any]:
    return {
        "kind": diagnostic.kind.value,
        "message": diagnostic.message,
        "partId": diagnostic.part_id,
        "unitId": diagnostic.unit_id,
        "materialType": diagnostic.material_type,
        "thickness": diagnostic.thickness,
    }


def report_to_dict(report: NestingReport) -> dict[str, Any]:
    """Convert a report to plain JSON-serializable data."""
    overall = report.overall
    return {
        "results": [result_to_dict(r) for r in report.results],
        "diagnostics": [diagnostic_to_dict(d) for d in report.diagnostics],
        "cancelled": report.cancelled,
        "summary": {
            "totalSheets": report.total_sheets,
            "totalParts": report.total_placed,
            "usedArea": _number(overall.used_area),
            "totalArea": _number(overall.total_area),
            "wasteArea": _number(overall.waste_area),
            "efficiency": round(overall.efficiency, 2),
        },
    }


@ExporterRegistry.register("json")
class JsonReportExporter:
    """Writes the report as an indented JSON document."""

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def export(self, report: NestingReport, path: Path) -> None:
        path.write_text(self.export_string(report), encoding="utf-8")

    def export_string(self, report: NestingReport) -> str:
        return json.dumps(report_to_dict(report), indent=self.indent)
