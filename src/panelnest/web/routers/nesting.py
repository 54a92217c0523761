"""Nesting endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Query
from fastapi.responses import Response

from panelnest.application import MaterialSheetCatalog, NestingOptimizer
from panelnest.application.config import (
    NestingRequestSchema,
    config_to_catalog,
    config_to_options,
    config_to_part_specs,
    load_config_from_dict,
)
from panelnest.domain import CancellationToken, NestingReport
from panelnest.infrastructure.exporters import ExporterRegistry, report_to_dict
from panelnest.web.dependencies import CatalogDep
from panelnest.web.exceptions import UnsupportedFormatError
from panelnest.web.schemas.responses import (
    ErrorResponseSchema,
    ExportFormatsSchema,
    NestingResponseSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/nesting", tags=["nesting"])

MEDIA_TYPES = {
    "csv": "text/csv",
    "dxf": "application/dxf",
    "json": "application/json",
    "svg": "image/svg+xml",
}

RequestBody = Annotated[
    dict[str, Any] | list[Any],
    Body(description="Nesting request, or a bare cutting list"),
]
TimeoutQuery = Annotated[
    float | None,
    Query(gt=0, le=300, description="Stop placing parts after this many seconds"),
]


def _run(
    payload: dict[str, Any] | list[Any],
    catalog: MaterialSheetCatalog,
    timeout: float | None,
) -> NestingReport:
    request: NestingRequestSchema = load_config_from_dict(payload)
    if request.catalog:
        catalog = config_to_catalog(request.catalog)

    optimizer = NestingOptimizer(catalog, config_to_options(request))
    token = CancellationToken.with_timeout(timeout) if timeout is not None else None
    report = optimizer.optimize(config_to_part_specs(request), token)
    if report.cancelled:
        logger.warning("Nesting request cut short after %ss", timeout)
    return report


# Plain def: nesting is CPU bound and runs in the threadpool
@router.post(
    "",
    response_model=NestingResponseSchema,
    responses={422: {"model": ErrorResponseSchema}},
)
def nest(
    payload: RequestBody,
    catalog: CatalogDep,
    timeout: TimeoutQuery = None,
) -> NestingResponseSchema:
    """Nest a cutting list onto stock sheets.

    Args:
        payload: Nesting request, snake_case or legacy camelCase.
        catalog: Injected bundled catalog, replaced by an inline one if given.
        timeout: Optional time limit; results are partial when it expires.

    Returns:
        Results per material group, diagnostics and an overall summary.
    """
    report = _run(payload, catalog, timeout)
    return NestingResponseSchema.model_validate(report_to_dict(report))


@router.get("/formats", response_model=ExportFormatsSchema)
async def list_export_formats() -> ExportFormatsSchema:
    return ExportFormatsSchema(formats=ExporterRegistry.available_formats())


@router.post(
    "/export/{format_name}",
    responses={400: {"model": ErrorResponseSchema}, 422: {"model": ErrorResponseSchema}},
)
def export_nesting(
    format_name: str,
    payload: RequestBody,
    catalog: CatalogDep,
    timeout: TimeoutQuery = None,
) -> Response:
    """Nest a cutting list and return the result as a downloadable file.

    Raises:
        UnsupportedFormatError: If no exporter is registered for the format.
    """
    if not ExporterRegistry.is_registered(format_name):
        raise UnsupportedFormatError(format_name, ExporterRegistry.available_formats())

    report = _run(payload, catalog, timeout)
    exporter = ExporterRegistry.get(format_name)()
    filename = f"nesting.{exporter.file_extension}"
    return Response(
        content=exporter.export_string(report),
        media_type=MEDIA_TYPES.get(format_name, "application/octet-stream"),
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
