"""Exporter protocol, registry and the manager that writes report files."""

from __future__ import annotations

import logging
from abc import abstractmethod
from pathlib import Path
from typing import ClassVar, Protocol, runtime_checkable

from panelnest.domain.results import NestingReport

logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """Protocol for all exporters.

    Exporters write a NestingReport in a specific format. Each exporter
    defines its format name and file extension and implements ``export``.

    Attributes:
        format_name: Name the format is registered under (e.g., "svg").
        file_extension: File extension without leading dot (e.g., "svg").
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    @abstractmethod
    def export(self, report: NestingReport, path: Path) -> None:
        """Write the report to a file."""
        ...

    def export_string(self, report: NestingReport) -> str:
        """Return the report as a string.

        Raises:
            NotImplementedError: If the format has no text form.
        """
        raise NotImplementedError(
            f"Format '{self.format_name}' does not support string export"
        )


class ExporterRegistry:
    """Registry for exporter classes.

    Exporters register themselves with the ``@ExporterRegistry.register``
    decorator when their module is imported.

    Example:
        @ExporterRegistry.register("csv")
        class CsvExporter:
            format_name = "csv"
            file_extension = "csv"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str):
        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning("Overwriting existing exporter for format '%s'", format_name)
            cls._exporters[format_name] = exporter_class
            logger.debug("Registered exporter '%s': %s", format_name, exporter_class.__name__)
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Get an exporter class by format name.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        if format_name not in cls._exporters:
            available = ", ".join(sorted(cls._exporters.keys()))
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {available or 'none'}"
            )
        return cls._exporters[format_name]

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters.keys())

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters


class ExportManager:
    """Exports a nesting report to one or more formats.

    Attributes:
        output_dir: Directory where exported files are saved. Created on
            first export if missing.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def export_all(
        self,
        formats: list[str],
        report: NestingReport,
        project_name: str = "nesting",
    ) -> dict[str, Path]:
        """Export the report to several formats.

        Files are named ``{project_name}_{format}.{ext}``.

        Returns:
            Mapping of format name to the written file.

        Raises:
            KeyError: If any format is not registered.
            OSError: If file operations fail.
        """
        # Resolve every format before writing anything
        exporter_classes = [(name, ExporterRegistry.get(name)) for name in formats]

        self.output_dir.mkdir(parents=True, exist_ok=True)
        written: dict[str, Path] = {}
        for format_name, exporter_class in exporter_classes:
            exporter = exporter_class()
            filepath = self.output_dir / f"{project_name}_{format_name}.{exporter.file_extension}"
            logger.info("Exporting to %s: %s", format_name, filepath)
            exporter.export(report, filepath)
            written[format_name] = filepath
        return written

    def export_single(
        self,
        format_name: str,
        report: NestingReport,
        project_name: str = "nesting",
    ) -> Path:
        return self.export_all([format_name], report, project_name)[format_name]
