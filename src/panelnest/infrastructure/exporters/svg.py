"""SVG exporter for nested sheet diagrams."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from panelnest.domain.results import NestingReport
from panelnest.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from panelnest.infrastructure.exporters.base import ExporterRegistry


@ExporterRegistry.register("svg")
class SvgExporter:
    """SVG exporter for cut diagrams.

    ``export`` writes every sheet of every material group stacked in one
    document; ``export_individual_sheets`` writes one file per sheet.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for SVG files.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"

    def __init__(
        self,
        scale: float = 0.25,
        show_dimensions: bool = True,
        show_labels: bool = True,
        show_grain: bool = True,
    ) -> None:
        self.renderer = CutDiagramRenderer(
            scale=scale,
            show_dimensions=show_dimensions,
            show_labels=show_labels,
            show_grain=show_grain,
        )

    def export(self, report: NestingReport, path: Path) -> None:
        path.write_text(self.export_string(report), encoding="utf-8")

    def export_string(self, report: NestingReport) -> str:
        return self.renderer.render_combined_svg(report)

    def export_individual_sheets(self, report: NestingReport, base_path: Path) -> list[Path]:
        """Write one SVG per sheet, named ``{stem}_{material}-sheet-{n}.svg``.

        Returns:
            Paths of the written files, in report order.
        """
        created: list[Path] = []
        for name, svg_content in self.renderer.render_all_svg(report):
            file_path = base_path.parent / f"{base_path.stem}_{name}.svg"
            file_path.write_text(svg_content, encoding="utf-8")
            created.append(file_path)
        return created
