"""Pydantic schemas for the REST API."""

from panelnest.web.schemas.responses import (
    CatalogEntryResponseSchema,
    CatalogResponseSchema,
    DiagnosticSchema,
    ErrorResponseSchema,
    ExportFormatsSchema,
    NestingPartSchema,
    NestingResponseSchema,
    NestingResultSchema,
    NestingSummarySchema,
    SheetSizeResponseSchema,
)

__all__ = [
    "CatalogEntryResponseSchema",
    "CatalogResponseSchema",
    "DiagnosticSchema",
    "ErrorResponseSchema",
    "ExportFormatsSchema",
    "NestingPartSchema",
    "NestingResponseSchema",
    "NestingResultSchema",
    "NestingSummarySchema",
    "SheetSizeResponseSchema",
]
