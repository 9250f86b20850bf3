"""Turn raw extraction model output into ExtractionRecord instances."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from pydantic import ValidationError as PydanticValidationError

from legaldocs.schemas.extraction import ExtractionRecord, ExtractionStatus, FileCategory
from legaldocs.utils.json_parser import parse_json_object
from legaldocs.utils.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_EXTRACTION_MODEL = "claude-sonnet-4"

PARSE_FAILURE_SUMMARY = "Failed to parse document extraction"
PARSE_FAILURE_WARNING = "Extraction parsing failed"
PARSE_FAILURE_ERROR = "Failed to parse AI response"


def _invalid_keys(error: PydanticValidationError) -> Set[str]:
    """Payload keys, under both field name and alias, that failed validation."""
    locations = {str(detail["loc"][0]) for detail in error.errors() if detail.get("loc")}
    keys = set()
    for name, field in ExtractionRecord.model_fields.items():
        if name in locations or field.alias in locations:
            keys.update({name, field.alias})
    return keys


def build_record(
    data: Dict[str, Any],
    upload_id: Optional[str],
    file_name: str,
    file_type: Optional[FileCategory],
    file_size: int,
    extraction_model: str = DEFAULT_EXTRACTION_MODEL,
) -> ExtractionRecord:
    """Validate an extraction payload and stamp it with upload provenance.

    Provenance fields come from the upload, never from the payload, so a
    model cannot rename or resize the document it was given. A top-level
    field whose value does not fit the schema is dropped and falls back to
    its default; every other category is kept.
    """
    payload = dict(data)
    payload.update(
        {
            "id": upload_id,
            "fileName": file_name,
            "fileType": file_type.value if file_type else None,
            "fileSize": file_size,
            "uploadedAt": datetime.now(timezone.utc),
            "status": ExtractionStatus.COMPLETED.value,
        }
    )
    payload.setdefault("extractionModel", extraction_model)

    try:
        return ExtractionRecord.model_validate(payload)
    except PydanticValidationError as e:
        invalid = _invalid_keys(e)
        LOGGER.warning(
            f"Dropping invalid extraction fields: {sorted(invalid)}",
            extra={"upload_id": upload_id, "file_name": file_name, "errors": e.error_count()},
        )
        for key in invalid:
            payload.pop(key, None)
        return ExtractionRecord.model_validate(payload)


def failure_record(
    response_text: str,
    upload_id: Optional[str],
    file_name: str,
    file_type: Optional[FileCategory],
    file_size: int,
    extraction_model: str = DEFAULT_EXTRACTION_MODEL,
) -> ExtractionRecord:
    """Record returned when the model output could not be understood."""
    return ExtractionRecord(
        id=upload_id,
        file_name=file_name,
        file_type=file_type,
        file_size=file_size,
        uploaded_at=datetime.now(timezone.utc),
        document_type="unknown",
        document_type_confidence=0.0,
        raw_text=response_text or "",
        summary=PARSE_FAILURE_SUMMARY,
        warnings=[PARSE_FAILURE_WARNING],
        extraction_model=extraction_model,
        status=ExtractionStatus.ERROR,
        error=PARSE_FAILURE_ERROR,
    )


def parse_extraction_response(
    response_text: str,
    upload_id: Optional[str],
    file_name: str,
    file_type: Optional[FileCategory],
    file_size: int,
    extraction_model: str = DEFAULT_EXTRACTION_MODEL,
) -> ExtractionRecord:
    """Parse the text returned by the extraction model.

    Never raises. Output without a recoverable JSON object yields a failure
    record carrying the raw text. A recovered object always yields a
    completed record, keeping whatever categories it carries even when some
    of their entries are malformed.

    Args:
        response_text: Raw model output
        upload_id: Id assigned to the upload
        file_name: Original file name
        file_type: File category of the upload
        file_size: Upload size in bytes
        extraction_model: Name of the model that produced the output

    Returns:
        ExtractionRecord: Parsed record, or a failure record
    """
    data = parse_json_object(response_text)
    if data is None:
        LOGGER.warning(
            "No JSON found in extraction response",
            extra={"upload_id": upload_id, "file_name": file_name},
        )
        return failure_record(response_text, upload_id, file_name, file_type, file_size, extraction_model)

    return build_record(data, upload_id, file_name, file_type, file_size, extraction_model)
