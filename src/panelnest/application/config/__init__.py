"""Request schema and loading for nesting requests.

This package provides JSON-based request loading and validation. It
includes Pydantic models for the request schema, a loader with error
handling, and the adapter that turns validated requests into domain
objects.

Public API:
    - NestingRequestSchema: Root request model
    - PartSpecSchema: Cutting-list line model
    - SheetSizeSchema: Sheet size model, also parsed from "2440x1220"
    - CatalogEntrySchema: Catalog sheet model
    - load_config: Load a request from a JSON file
    - load_config_from_dict: Load a request from parsed JSON
    - load_catalog: Load a material catalog from a JSON file
    - ConfigError: Exception for request and catalog errors
    - config_to_part_specs / config_to_options / config_to_catalog: adapters

Example:
    >>> from pathlib import Path
    >>> from panelnest.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     request = load_config(Path("kitchen.json"))
    ...     print(f"{len(request.cutting_list)} cutting-list lines")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from panelnest.application.config.adapter import (
    config_to_catalog,
    config_to_options,
    config_to_part_spec,
    config_to_part_specs,
    config_to_sheet_size,
)
from panelnest.application.config.loader import (
    ConfigError,
    load_catalog,
    load_config,
    load_config_from_dict,
)
from panelnest.application.config.schema import (
    CURRENT_VERSION,
    SUPPORTED_VERSIONS,
    CatalogEntrySchema,
    EdgeBandingSchema,
    NestingRequestSchema,
    PartSpecSchema,
    SheetSizeSchema,
)

__all__ = [
    "CURRENT_VERSION",
    "SUPPORTED_VERSIONS",
    "CatalogEntrySchema",
    "ConfigError",
    "EdgeBandingSchema",
    "NestingRequestSchema",
    "PartSpecSchema",
    "SheetSizeSchema",
    "config_to_catalog",
    "config_to_options",
    "config_to_part_spec",
    "config_to_part_specs",
    "config_to_sheet_size",
    "load_catalog",
    "load_config",
    "load_config_from_dict",
]
