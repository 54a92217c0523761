"""Infrastructure layer - rendering, formatters and exporters."""

from .cut_diagram_renderer import GRAIN_COLORS, CutDiagramRenderer
from .formatters import DiagnosticsFormatter, NestingSummaryFormatter

# Exporter framework from exporters/ package
from .exporters import (
    CsvReportExporter,
    DxfExporter,
    Exporter,
    ExporterRegistry,
    ExportManager,
    JsonReportExporter,
    SvgExporter,
    report_to_dict,
)

__all__ = [
    "GRAIN_COLORS",
    "CsvReportExporter",
    "CutDiagramRenderer",
    "DiagnosticsFormatter",
    "DxfExporter",
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    "JsonReportExporter",
    "NestingSummaryFormatter",
    "SvgExporter",
    "report_to_dict",
]
