"""Request and catalog file loading with error handling.

This module loads JSON nesting requests and material catalogs. File system
errors, JSON syntax errors and Pydantic validation errors are all raised as
``ConfigError`` with a message a user can act on.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from panelnest.application.catalog import MaterialSheetCatalog
from panelnest.application.config.adapter import config_to_catalog
from panelnest.application.config.schema import CatalogEntrySchema, NestingRequestSchema

logger = logging.getLogger(__name__)

_CATALOG_ADAPTER = TypeAdapter(list[CatalogEntrySchema])


class ConfigError(Exception):
    """Exception raised for request and catalog file errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the file (if applicable)
        details: Additional error details (line/column for JSON, validation errors, etc.)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("cutting_list", 2, "length"))
        'cutting_list[2].length'
        >>> _format_json_path((0, "thickness"))
        '[0].thickness'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(
    details: list[dict[str, Any]], subject: str = "Configuration"
) -> str:
    lines = [f"{subject} validation failed:"]
    for detail in details:
        path = detail["path"] or "(root)"
        value = detail.get("value")
        # Whole objects are too noisy to echo back
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {path}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {path}: {detail['message']}")
    return "\n".join(lines)


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise ConfigError(
            message=f"Config file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in config file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def load_config(path: Path) -> NestingRequestSchema:
    """Load and validate a nesting request from a JSON file.

    A bare JSON list is read as a cutting list with default options, which
    is the shape cutting-list exports are saved in.

    Args:
        path: Path to the JSON request file

    Returns:
        A validated NestingRequestSchema instance

    Raises:
        ConfigError: If the file cannot be loaded or validated.
            ``error_type`` is one of:
            - "file_not_found": File does not exist
            - "permission_denied" / "file_read_error": File could not be read
            - "json_parse": Invalid JSON syntax
            - "validation": Schema validation failed

    Example:
        >>> try:
        ...     request = load_config(Path("kitchen.json"))
        ... except ConfigError as e:
        ...     for detail in e.details:
        ...         print(f"{detail['path']}: {detail['message']}")
    """
    data = _read_json(path)
    logger.debug("Loaded request file %s", path)
    try:
        return load_config_from_dict(data)
    except ConfigError as e:
        e.path = path
        raise


def load_config_from_dict(data: Any) -> NestingRequestSchema:
    """Load and validate a nesting request from already parsed JSON data.

    Raises:
        ConfigError: If the data fails validation.
    """
    if isinstance(data, list):
        data = {"cutting_list": data}
    try:
        return NestingRequestSchema.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            details=details,
        )


def load_catalog(path: Path) -> MaterialSheetCatalog:
    """Load a material catalog from a JSON file.

    The file holds either a list of entries or an object with a
    ``materialSheets`` (or ``material_sheets``) list.

    Raises:
        ConfigError: If the file cannot be loaded or validated.
    """
    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get("materialSheets", data.get("material_sheets"))
        if data is None:
            raise ConfigError(
                message=f"Catalog file has no materialSheets list: {path}",
                error_type="validation",
                path=path,
            )

    try:
        entries = _CATALOG_ADAPTER.validate_python(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details, subject="Catalog"),
            error_type="validation",
            path=path,
            details=details,
        )

    catalog = config_to_catalog(entries)
    logger.info("Loaded %d catalog sheets from %s", len(catalog), path)
    return catalog
