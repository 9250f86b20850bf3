from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, File, Form, HTTPException, Query, Request, UploadFile, status

from legaldocs.config import settings
from legaldocs.core.exceptions import ExtractionError, InvalidDocumentError
from legaldocs.dependencies import get_extraction_source
from legaldocs.schemas.extraction import ExtractionRecord
from legaldocs.schemas.response import ApiResponse
from legaldocs.schemas.review import ReviewView
from legaldocs.services.extraction.document_validation import validate_file
from legaldocs.services.extraction.extraction_source import BaseExtractionSource, ExtractionRequest
from legaldocs.services.review.review_surface import ExtractionReviewSurface
from legaldocs.utils.localization import resolve_locale
from legaldocs.utils.logging import get_logger
from legaldocs.utils.responses import create_api_response, create_error_detail

LOGGER = get_logger(__name__)

router = APIRouter()


def _http_error(request: Request, title: str, status_code: int, detail: str) -> HTTPException:
    error_detail = create_error_detail(
        title=title,
        status=status_code,
        detail=detail,
        request=request,
    )
    return HTTPException(status_code=status_code, detail=error_detail.model_dump(mode="json"))


@router.post(
    "",
    response_model=ApiResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Extract a structured record from a document",
    operation_id="extract_document",
)
async def extract_document(
    request: Request,
    source: Annotated[BaseExtractionSource, Depends(get_extraction_source)],
    file: UploadFile = File(..., description="PDF, Word, image or text document"),
    language: str = Form("en"),
    purpose: str = Form("general"),
    document_type: Optional[str] = Form(None),
) -> ApiResponse:
    """Upload a document to the extraction source and return its record."""
    content = await file.read()
    file_name = file.filename or ""

    validation = validate_file(file_name, file.content_type, len(content), max_size=settings.max_upload_size)
    if not validation.valid:
        LOGGER.info("Rejected upload", extra={"file_name": file_name, "reason": validation.error})
        raise _http_error(request, "Invalid Document", status.HTTP_400_BAD_REQUEST, validation.error)

    extraction_request = ExtractionRequest(
        file_name=file_name,
        content_type=file.content_type,
        content=content,
        document_type=document_type,
        language=resolve_locale(language).value,
        purpose=purpose,
    )

    try:
        record = await source.extract(extraction_request)
    except InvalidDocumentError as e:
        raise _http_error(request, "Invalid Document", status.HTTP_400_BAD_REQUEST, e.message)
    except ExtractionError as e:
        LOGGER.error(
            f"Extraction failed: {e.message}",
            exc_info=True,
            extra={"upload_id": extraction_request.upload_id},
        )
        raise _http_error(request, "Extraction Failed", status.HTTP_502_BAD_GATEWAY, e.message)

    message = "Document extracted successfully"
    if record.is_failed:
        message = record.error or "Document extraction could not be parsed"

    return create_api_response(data=record, message=message, request=request)


@router.post(
    "/review",
    response_model=ApiResponse,
    summary="Render an extraction record for review",
    operation_id="review_extraction",
)
async def review_extraction(
    request: Request,
    record: Optional[ExtractionRecord] = Body(None),
    view: Optional[ReviewView] = Query(None, description="Single view to render, all views when omitted"),
    locale: Optional[str] = Query(None, description="Display locale (en or ar)"),
) -> ApiResponse:
    """Render one view, or every view, of an extraction record.

    A missing record renders every view in its empty state.
    """
    surface = ExtractionReviewSurface(record, locale=locale or settings.default_locale)

    if view is None:
        rendered = surface.render_all()
    else:
        surface.select_view(view)
        rendered = surface.render()

    return create_api_response(
        data=rendered,
        message="Extraction rendered successfully",
        request=request,
    )
