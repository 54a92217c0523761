"""FastAPI dependency injection for nesting services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from panelnest.application import MaterialSheetCatalog


@lru_cache(maxsize=1)
def get_catalog() -> MaterialSheetCatalog:
    """Get the cached bundled catalog."""
    return MaterialSheetCatalog.default()


# Type aliases for cleaner endpoint signatures
CatalogDep = Annotated[MaterialSheetCatalog, Depends(get_catalog)]
