"""Cut diagram rendering for nesting results.

This module provides SVG and ASCII rendering of nested sheets showing part
placements, dimensions, rotation markers, grain arrows and the unused
strip of each sheet.

Sheet length runs left to right and sheet width top to bottom, matching
the placement coordinates.
"""

from __future__ import annotations

import math
from xml.sax.saxutils import escape

from panelnest.domain.results import NestingReport, NestingResult
from panelnest.domain.value_objects import GrainDirection, PlacedPart

# Fill and stroke per grain constraint, as on the workshop's printed layouts
GRAIN_COLORS: dict[GrainDirection, tuple[str, str]] = {
    GrainDirection.LENGTH: ("#BBDEFB", "#1E88E5"),  # Blue
    GrainDirection.WIDTH: ("#D1C4E9", "#673AB7"),  # Purple
    GrainDirection.NONE: ("#DDDDDD", "#555555"),  # Gray
}

GRAIN_LABELS: dict[GrainDirection, str] = {
    GrainDirection.LENGTH: "Grain with Length",
    GrainDirection.WIDTH: "Grain with Width",
    GrainDirection.NONE: "No Grain",
}

HEADER_HEIGHT = 30
LEGEND_HEIGHT = 40
SHEET_SPACING = 20


def sheet_used_area(result: NestingResult, sheet_index: int) -> float:
    return sum(p.area for p in result.placements_on(sheet_index))


def sheet_waste_percentage(result: NestingResult, sheet_index: int) -> float:
    """Unused share of one sheet, in percent."""
    sheet_area = result.stock_sheet.area
    return max(0.0, (1 - sheet_used_area(result, sheet_index) / sheet_area) * 100)


class CutDiagramRenderer:
    """Renders nested sheets as SVG or ASCII diagrams.

    Attributes:
        scale: Pixels per millimetre for SVG rendering.
        sheet_fill: Fill colour of the sheet.
        waste_fill: Fill colour of the unused strip below the last row.
        text_color: Colour for labels and dimensions.
        show_dimensions: Whether to print part dimensions.
        show_labels: Whether to print part names.
        show_grain: Whether to draw grain arrows on grain-bound parts.
        show_legend: Whether to add the grain colour legend.
    """

    def __init__(
        self,
        scale: float = 0.25,
        sheet_fill: str = "#FFFFFF",
        waste_fill: str = "#F0F0F0",
        text_color: str = "#000000",
        show_dimensions: bool = True,
        show_labels: bool = True,
        show_grain: bool = True,
        show_legend: bool = True,
    ) -> None:
        if scale <= 0:
            raise ValueError("Scale must be positive")
        self.scale = scale
        self.sheet_fill = sheet_fill
        self.waste_fill = waste_fill
        self.text_color = text_color
        self.show_dimensions = show_dimensions
        self.show_labels = show_labels
        self.show_grain = show_grain
        self.show_legend = show_legend

    def render_svg(self, result: NestingResult, sheet_index: int) -> str:
        """Generate the SVG diagram of one sheet of a material group.

        Args:
            result: Nesting result of the material group.
            sheet_index: Zero-based sheet index within the group.

        Returns:
            SVG document as a string.
        """
        if not 0 <= sheet_index < result.sheet_count:
            raise IndexError(
                f"Sheet {sheet_index} out of range for {result.sheet_count} sheets"
            )

        sheet = result.stock_sheet
        legend_height = LEGEND_HEIGHT if self.show_legend else 0
        svg_width = sheet.length * self.scale
        sheet_height = sheet.width * self.scale
        svg_height = sheet_height + HEADER_HEIGHT + legend_height

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'viewBox="0 0 {svg_width} {svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
            self._render_header(result, sheet_index, svg_width),
            "  <!-- Sheet outline -->",
            f'  <rect x="0" y="{HEADER_HEIGHT}" width="{svg_width}" '
            f'height="{sheet_height}" fill="{self.sheet_fill}" '
            f'stroke="#333333" stroke-width="2"/>',
        ]

        placements = result.placements_on(sheet_index)
        waste_svg = self._render_waste(placements, svg_width, sheet_height)
        if waste_svg:
            parts.append("  <!-- Unused strip -->")
            parts.append(waste_svg)

        parts.append("  <!-- Parts -->")
        for placement in placements:
            parts.append(self._render_part(placement))

        if self.show_legend:
            parts.append("  <!-- Legend -->")
            parts.append(self._render_legend(HEADER_HEIGHT + sheet_height))

        parts.append("</svg>")
        return "\n".join(parts)

    def render_all_svg(self, report: NestingReport) -> list[tuple[str, str]]:
        """Render every sheet of a report.

        Returns:
            (name, svg) pairs, named like ``plywood-18mm-sheet-1``.
        """
        rendered: list[tuple[str, str]] = []
        for result in report.results:
            slug = result.material_key.describe().lower().replace(" ", "-")
            for index in range(result.sheet_count):
                rendered.append(
                    (f"{slug}-sheet-{index + 1}", self.render_svg(result, index))
                )
        return rendered

    def render_combined_svg(self, report: NestingReport) -> str:
        """Generate a single SVG with every sheet stacked vertically."""
        sheets = [
            (result, index)
            for result in report.results
            for index in range(result.sheet_count)
        ]
        if not sheets:
            return (
                '<svg width="200" height="50" xmlns="http://www.w3.org/2000/svg">'
                '<text x="10" y="30">No sheets to display</text></svg>'
            )

        legend_height = LEGEND_HEIGHT if self.show_legend else 0
        svg_width = max(result.stock_sheet.length for result, _ in sheets) * self.scale
        svg_height = sum(
            result.stock_sheet.width * self.scale
            + HEADER_HEIGHT
            + legend_height
            + SHEET_SPACING
            for result, _ in sheets
        )

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
        ]

        y_offset = 0.0
        for result, index in sheets:
            parts.append(f'  <g transform="translate(0, {y_offset})">')
            sheet_svg = self.render_svg(result, index)
            # Keep only the content between <svg ...> and </svg>
            inner = sheet_svg[sheet_svg.find(">") + 1 : sheet_svg.rfind("</svg>")]
            for line in inner.strip().split("\n"):
                if line.strip():
                    parts.append(f"  {line}")
            parts.append("  </g>")
            y_offset += (
                result.stock_sheet.width * self.scale
                + HEADER_HEIGHT
                + legend_height
                + SHEET_SPACING
            )

        parts.append("</svg>")
        return "\n".join(parts)

    def _render_header(
        self, result: NestingResult, sheet_index: int, svg_width: float
    ) -> str:
        header_text = (
            f"{result.material_key.describe()} - Sheet {sheet_index + 1} of "
            f"{result.sheet_count} - {result.stock_sheet.length:g} x "
            f"{result.stock_sheet.width:g}mm - "
            f"{sheet_waste_percentage(result, sheet_index):.1f}% waste"
        )
        return (
            f"  <!-- Header -->\n"
            f'  <rect x="0" y="0" width="{svg_width}" height="{HEADER_HEIGHT}" '
            f'fill="#E0E0E0"/>\n'
            f'  <text x="10" y="{HEADER_HEIGHT - 10}" '
            f'font-family="Arial, sans-serif" font-size="14" '
            f'fill="{self.text_color}">{escape(header_text)}</text>'
        )

    def _render_part(self, placement: PlacedPart) -> str:
        x = placement.x * self.scale
        y = HEADER_HEIGHT + placement.y * self.scale
        w = placement.placed_length * self.scale
        h = placement.placed_width * self.scale
        fill, stroke = GRAIN_COLORS[placement.grain]

        svg_parts = [
            f'  <g id="{escape(placement.unit_id)}">',
            f'    <rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{fill}" stroke="{stroke}" stroke-width="1"/>',
        ]

        font_size = min(12, min(w, h) / 4)
        if font_size >= 5:
            text_x = x + w / 2
            text_y = y + h / 2
            if self.show_labels:
                svg_parts.append(
                    f'    <text x="{text_x}" y="{text_y - font_size / 2}" '
                    f'text-anchor="middle" font-family="Arial, sans-serif" '
                    f'font-size="{font_size}" fill="{self.text_color}">'
                    f"{escape(placement.name)}</text>"
                )
            if self.show_dimensions:
                dims = f"{placement.placed_length:g} x {placement.placed_width:g}"
                if placement.rotated:
                    dims += " (R)"
                dims_y = text_y + font_size / 2 + 2 if self.show_labels else text_y
                svg_parts.append(
                    f'    <text x="{text_x}" y="{dims_y}" '
                    f'text-anchor="middle" font-family="Arial, sans-serif" '
                    f'font-size="{font_size * 0.8}" fill="{self.text_color}">'
                    f"{dims}</text>"
                )

        if self.show_grain:
            arrow = self._render_grain_arrow(placement, x, y, w, h, stroke)
            if arrow:
                svg_parts.append(arrow)

        svg_parts.append("  </g>")
        return "\n".join(svg_parts)

    def _render_grain_arrow(
        self,
        placement: PlacedPart,
        x: float,
        y: float,
        w: float,
        h: float,
        color: str,
    ) -> str | None:
        """Arrow along the grain, in the lower right corner of the part.

        A part's grain follows its length for grain=length and its width for
        grain=width; rotation turns the arrow with the part.
        """
        if placement.grain == GrainDirection.NONE:
            return None

        arrow_length = min(20, min(w, h) / 3)
        if arrow_length < 4:
            return None
        margin = 4
        end_x = x + w - margin
        end_y = y + h - margin

        along_length = placement.grain == GrainDirection.LENGTH
        horizontal = along_length != placement.rotated
        if horizontal:
            return self._render_arrow(end_x - arrow_length, end_y, end_x, end_y, color)
        return self._render_arrow(end_x, end_y - arrow_length, end_x, end_y, color)

    def _render_arrow(
        self, x1: float, y1: float, x2: float, y2: float, color: str
    ) -> str:
        angle = math.atan2(y2 - y1, x2 - x1)
        head_length = 5
        head_angle = math.pi / 6

        lx = x2 - head_length * math.cos(angle - head_angle)
        ly = y2 - head_length * math.sin(angle - head_angle)
        rx = x2 - head_length * math.cos(angle + head_angle)
        ry = y2 - head_length * math.sin(angle + head_angle)

        return (
            f'    <line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
            f'stroke="{color}" stroke-width="1.5"/>\n'
            f'    <polygon points="{x2},{y2} {lx},{ly} {rx},{ry}" fill="{color}"/>'
        )

    def _render_waste(
        self,
        placements: tuple[PlacedPart, ...],
        svg_width: float,
        sheet_height: float,
    ) -> str:
        """Shade the strip below the last row, which is left as an offcut."""
        if not placements:
            return ""
        max_y = max(p.top_edge for p in placements) * self.scale
        if sheet_height - max_y <= 1:
            return ""
        return (
            f'  <rect x="0" y="{HEADER_HEIGHT + max_y}" width="{svg_width}" '
            f'height="{sheet_height - max_y}" fill="{self.waste_fill}" stroke="none"/>'
        )

    def _render_legend(self, y_offset: float) -> str:
        parts: list[str] = []
        x = 10.0
        swatch = 15
        for grain in (GrainDirection.LENGTH, GrainDirection.WIDTH, GrainDirection.NONE):
            fill, stroke = GRAIN_COLORS[grain]
            parts.append(
                f'  <rect x="{x}" y="{y_offset + 12}" width="{swatch}" '
                f'height="{swatch}" fill="{fill}" stroke="{stroke}"/>'
            )
            parts.append(
                f'  <text x="{x + swatch + 5}" y="{y_offset + 24}" '
                f'font-family="Arial, sans-serif" font-size="11" '
                f'fill="{self.text_color}">{GRAIN_LABELS[grain]}</text>'
            )
            x += 130
        return "\n".join(parts)

    def render_ascii(
        self, result: NestingResult, sheet_index: int, width: int = 80
    ) -> str:
        """Generate an ASCII diagram of one sheet for terminal display.

        Args:
            result: Nesting result of the material group.
            sheet_index: Zero-based sheet index within the group.
            width: Terminal width in characters.

        Returns:
            ASCII representation of the sheet.
        """
        sheet = result.stock_sheet
        usable_width = max(width - 2, 10)
        scale_x = usable_width / sheet.length
        # Terminal cells are roughly twice as tall as they are wide
        grid_height = max(int(usable_width * sheet.width / sheet.length * 0.5), 8)
        scale_y = grid_height / sheet.width

        grid = [[" " for _ in range(usable_width)] for _ in range(grid_height)]
        for placement in result.placements_on(sheet_index):
            self._draw_part_ascii(grid, placement, scale_x, scale_y)

        lines = [
            f"{result.material_key.describe()} - Sheet {sheet_index + 1} of "
            f"{result.sheet_count} - "
            f"{sheet_waste_percentage(result, sheet_index):.1f}% waste",
            "+" + "-" * usable_width + "+",
        ]
        lines.extend("|" + "".join(row) + "|" for row in grid)
        lines.append("+" + "-" * usable_width + "+")
        return "\n".join(lines)

    def _draw_part_ascii(
        self,
        grid: list[list[str]],
        placement: PlacedPart,
        scale_x: float,
        scale_y: float,
    ) -> None:
        grid_height = len(grid)
        grid_width = len(grid[0])

        def clamp(value: float, upper: int) -> int:
            return max(0, min(int(value), upper - 1))

        x1 = clamp(placement.x * scale_x, grid_width)
        x2 = clamp(placement.right_edge * scale_x, grid_width)
        y1 = clamp(placement.y * scale_y, grid_height)
        y2 = clamp(placement.top_edge * scale_y, grid_height)

        for x in range(x1, x2 + 1):
            grid[y1][x] = "-"
            grid[y2][x] = "-"
        for y in range(y1, y2 + 1):
            grid[y][x1] = "|"
            grid[y][x2] = "|"
        for cx, cy in ((x1, y1), (x2, y1), (x1, y2), (x2, y2)):
            grid[cy][cx] = "+"

        room = x2 - x1 - 1
        texts = [placement.name]
        dims = f"{placement.placed_length:.0f}x{placement.placed_width:.0f}"
        texts.append(dims + ("R" if placement.rotated else ""))
        for offset, text in enumerate(texts, start=1):
            row = y1 + offset
            if row >= y2 or room <= 0:
                break
            for i, char in enumerate(text[:room]):
                grid[row][x1 + 1 + i] = char

    def render_all_ascii(self, report: NestingReport, width: int = 80) -> str:
        """ASCII diagrams of every sheet followed by a summary line."""
        if not report.results or report.total_sheets == 0:
            return "No sheets to display."

        parts: list[str] = []
        for result in report.results:
            for index in range(result.sheet_count):
                parts.append(self.render_ascii(result, index, width))
                parts.append("")

        overall = report.overall
        total = report.total_sheets
        parts.append("=" * width)
        parts.append(
            f"SUMMARY: {total} sheet{'s' if total != 1 else ''}, "
            f"{overall.efficiency:.1f}% efficiency"
        )
        for result in report.results:
            count = result.sheet_count
            parts.append(
                f"  {result.material_key.describe()}: "
                f"{count} sheet{'s' if count != 1 else ''}"
            )
        return "\n".join(parts)
