"""API routes for the Column Reconciler.

This module defines the REST API endpoints:
- POST /map: Auto-map the headers of an uploaded Excel sheet
- POST /reconcile: Auto-map a list of headers sent as JSON
- POST /validate: Validate a (possibly user-edited) mapping
- GET /fields: List the default business field catalog
- GET /health: Health check endpoint
"""

import logging

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import JSONResponse

from app.core.catalog import DEFAULT_CATALOG
from app.core.config import settings
from app.core.models import (
    AutoMapResponse,
    BusinessField,
    ErrorResponse,
    ReconcileRequest,
    ReconcileResponse,
    ValidateRequest,
    ValidationReport,
)
from app.mapper.service import ColumnMappingService, MappingServiceConfig
from app.mapper.workbook import WorkbookLoadError, load_workbook_safe

# Create router instance
router = APIRouter()
logger = logging.getLogger(__name__)

# Create the mapping service at startup using app settings.
mapping_service = ColumnMappingService(config=MappingServiceConfig.from_settings(settings))


@router.get(
    "/health",
    summary="Health Check",
    description="Returns the health status of the API service.",
    response_description="Health status object",
    responses={
        200: {
            "description": "Service is healthy",
            "content": {
                "application/json": {
                    "example": {"status": "ok"}
                }
            }
        }
    }
)
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        dict: Health status with "status": "ok"
    """
    return {"status": "ok"}


@router.get(
    "/fields",
    response_model=list[BusinessField],
    summary="List Business Fields",
    description="Returns the default catalog of business fields, in priority order.",
)
async def list_fields() -> list[BusinessField]:
    return list(DEFAULT_CATALOG)


@router.post(
    "/map",
    response_model=AutoMapResponse,
    summary="Auto-map Excel Headers",
    description=(
        "Upload an Excel (.xlsx) file and map the headers of its first sheet "
        "onto the business field catalog. The response includes the detected "
        "columns, the mapping, a preview of the first data row and a "
        "validation report."
    ),
    response_description="Column mapping with preview and validation",
    responses={
        200: {
            "description": "Successfully mapped the sheet headers",
            "model": AutoMapResponse,
        },
        400: {
            "description": "Invalid file format or unreadable workbook",
            "model": ErrorResponse,
        },
        422: {
            "description": "Request validation error (e.g., missing required form field)",
            "model": ErrorResponse,
        },
    }
)
async def map_columns(
    file: UploadFile = File(
        ...,
        description="Excel file (.xlsx format)",
    )
) -> AutoMapResponse | JSONResponse:
    """Auto-map the headers of an uploaded Excel file.

    Args:
        file: Uploaded Excel file (.xlsx format)

    Returns:
        AutoMapResponse: Columns, mapping, preview and validation report
    """
    if not file.filename:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error="Invalid file",
                detail="No filename provided",
            ).model_dump(),
        )

    if not file.filename.lower().endswith(".xlsx"):
        extension = file.filename[file.filename.rfind(".") :] if "." in file.filename else "no extension"
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error="Invalid file format",
                detail=f"Expected .xlsx file, got '{extension}'",
            ).model_dump(),
        )

    try:
        file_bytes = await file.read()
    except OSError as e:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error="Failed to read upload",
                detail=f"{type(e).__name__}: {e}",
            ).model_dump(),
        )
    finally:
        await file.close()

    try:
        wb = load_workbook_safe(file_bytes)
        result = mapping_service.map_workbook(wb, filename=file.filename)
    except WorkbookLoadError as e:
        logger.warning("Rejected upload filename=%s error=%s", file.filename, e)
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error=e.message,
                detail=e.detail,
            ).model_dump(),
        )

    logger.info(
        "Mapped workbook filename=%s sheet=%s columns=%d mapped=%d missing=%d",
        file.filename,
        result.sheet_name,
        len(result.columns),
        len(result.mapping),
        len(result.validation.missing_fields),
    )

    return result


@router.post(
    "/reconcile",
    response_model=ReconcileResponse,
    summary="Auto-map Header List",
    description=(
        "Map a list of column headers onto a field catalog (the default "
        "catalog unless one is supplied) and validate the result."
    ),
)
async def reconcile_columns(request: ReconcileRequest) -> ReconcileResponse:
    return mapping_service.reconcile(request.columns, catalog=request.catalog)


@router.post(
    "/validate",
    response_model=ValidationReport,
    summary="Validate Mapping",
    description=(
        "Check a field-to-column mapping against the required fields and the "
        "current columns. Missing and invalid mappings are errors; columns "
        "shared by several fields are warnings."
    ),
)
async def validate_columns(request: ValidateRequest) -> ValidationReport:
    return mapping_service.validate(request.mapping, request.columns, catalog=request.catalog)
