"""API routers for the REST API."""

from panelnest.web.routers.catalog import router as catalog_router
from panelnest.web.routers.nesting import router as nesting_router

__all__ = [
    "catalog_router",
    "nesting_router",
]
