"""CLI command implementations for the panelnest application.

This package contains subcommands for the panelnest CLI, including:
- validate: Validate a nesting request file
- catalog: List the stock sheets available for nesting
"""

from panelnest.cli.commands.catalog import catalog_command, resolve_catalog
from panelnest.cli.commands.validate import display_load_error, validate_command

__all__ = ["catalog_command", "display_load_error", "resolve_catalog", "validate_command"]
