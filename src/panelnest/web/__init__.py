"""FastAPI REST API for panel nesting.

This module provides a REST API for nesting cutting lists, listing the
material catalog, and exporting nested layouts to files.

Usage:
    uvicorn panelnest.web:app --reload
"""

from panelnest.web.app import app, create_app

__all__ = ["app", "create_app"]
