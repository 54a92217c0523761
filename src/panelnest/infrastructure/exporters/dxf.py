"""DXF exporter for nested sheets.

Generates 2D DXF files (R2010 format) for CNC saws and routers. Every
sheet is drawn at full size in millimetres, sheets laid out side by side
along the x axis with material groups stacked along y.
"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

import ezdxf
from ezdxf import units

from panelnest.domain.results import NestingReport, NestingResult
from panelnest.domain.value_objects import PlacedPart
from panelnest.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace


logger = logging.getLogger(__name__)


# Layer configuration for DXF output
LAYERS = {
    "SHEETS": {"color": 7},  # White - sheet outlines
    "PARTS": {"color": 3},  # Green - part outlines
    "LABELS": {"color": 5},  # Blue - text labels
}


@ExporterRegistry.register("dxf")
class DxfExporter:
    """Exports nested sheets to DXF.

    Attributes:
        format_name: "dxf"
        file_extension: "dxf"
        sheet_spacing: Gap between neighbouring sheets in mm.
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"

    def __init__(self, sheet_spacing: float = 100.0) -> None:
        if sheet_spacing < 0:
            raise ValueError("Sheet spacing must be non-negative")
        self.sheet_spacing = sheet_spacing

    def export(self, report: NestingReport, path: Path) -> None:
        doc = self._build_document(report)
        doc.saveas(path)
        logger.info("Exported DXF with %d sheets to %s", report.total_sheets, path)

    def export_string(self, report: NestingReport) -> str:
        doc = self._build_document(report)
        stream = StringIO()
        doc.write(stream)
        return stream.getvalue()

    def _build_document(self, report: NestingReport) -> Drawing:
        doc = ezdxf.new("R2010")
        doc.units = units.MM
        for name, props in LAYERS.items():
            doc.layers.add(name, color=props["color"])

        if report.total_sheets == 0:
            logger.warning("No placed parts to export")

        msp = doc.modelspace()
        offset_y = 0.0
        for result in report.results:
            if result.sheet_count == 0:
                continue
            self._draw_group(msp, result, offset_y)
            offset_y -= result.stock_sheet.width + self.sheet_spacing
        return doc

    def _draw_group(self, msp: Modelspace, result: NestingResult, offset_y: float) -> None:
        sheet = result.stock_sheet
        for index in range(result.sheet_count):
            offset_x = index * (sheet.length + self.sheet_spacing)
            self._draw_rect(msp, offset_x, offset_y, sheet.length, sheet.width, "SHEETS")
            msp.add_text(
                f"{result.material_key.describe()} - Sheet {index + 1}/{result.sheet_count}",
                dxfattribs={
                    "layer": "LABELS",
                    "height": 25.0,
                    "insert": (offset_x, offset_y + sheet.width + 20),
                },
            )
            for placement in result.placements_on(index):
                self._draw_part(msp, placement, offset_x, offset_y)

    def _draw_part(
        self, msp: Modelspace, placement: PlacedPart, offset_x: float, offset_y: float
    ) -> None:
        x = offset_x + placement.x
        y = offset_y + placement.y
        length = placement.placed_length
        width = placement.placed_width
        self._draw_rect(msp, x, y, length, width, "PARTS")

        dims = f"{length:g} x {width:g}"
        if placement.rotated:
            dims += " R"
        text_height = max(4.0, min(25.0, min(length, width) * 0.08))
        msp.add_mtext(
            f"{placement.name}\\P{dims}",
            dxfattribs={
                "layer": "LABELS",
                "char_height": text_height,
                "insert": (x + length / 2, y + width / 2),
                "attachment_point": 5,  # MIDDLE_CENTER
            },
        )

    @staticmethod
    def _draw_rect(
        msp: Modelspace, x: float, y: float, length: float, width: float, layer: str
    ) -> None:
        points = [
            (x, y),
            (x + length, y),
            (x + length, y + width),
            (x, y + width),
            (x, y),
        ]
        msp.add_lwpolyline(points, dxfattribs={"layer": layer})
