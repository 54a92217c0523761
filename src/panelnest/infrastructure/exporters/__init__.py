"""Exporter framework for nesting reports.

This package provides a unified exporter framework with:
- Exporter Protocol: Defines the interface for all exporters
- ExporterRegistry: Central registry for format discovery
- ExportManager: Coordinates multi-format export operations

Registered exporters:
- csv: One row per placed part
- dxf: DXF drawing of every sheet for CNC saws and routers
- json: Report data with per-material results and diagnostics
- svg: Cut diagrams coloured by grain direction

Usage:
    from panelnest.infrastructure.exporters import ExportManager, ExporterRegistry

    formats = ExporterRegistry.available_formats()

    manager = ExportManager(output_dir=Path("./output"))
    written = manager.export_all(["svg", "dxf"], report, project_name="kitchen")
"""

from panelnest.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)

# Import exporters to trigger registration
from panelnest.infrastructure.exporters.csv_report import CsvReportExporter
from panelnest.infrastructure.exporters.dxf import DxfExporter
from panelnest.infrastructure.exporters.json_report import (
    JsonReportExporter,
    report_to_dict,
)
from panelnest.infrastructure.exporters.svg import SvgExporter

__all__ = [
    "CsvReportExporter",
    "DxfExporter",
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    "JsonReportExporter",
    "SvgExporter",
    "report_to_dict",
]
