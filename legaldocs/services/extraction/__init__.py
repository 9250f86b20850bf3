"""Extraction source, upload validation and response parsing."""

from legaldocs.services.extraction.clause_types import ClauseTypeInfo, ClauseTypeMapper
from legaldocs.services.extraction.document_validation import (
    MAX_FILE_SIZE,
    FileValidationResult,
    format_file_size,
    generate_upload_id,
    get_file_category,
    validate_file,
)
from legaldocs.services.extraction.extraction_source import (
    BaseExtractionSource,
    ExtractionRequest,
    HttpExtractionSource,
)
from legaldocs.services.extraction.response_parser import (
    build_record,
    failure_record,
    parse_extraction_response,
)

__all__ = [
    "ClauseTypeInfo",
    "ClauseTypeMapper",
    "MAX_FILE_SIZE",
    "FileValidationResult",
    "format_file_size",
    "generate_upload_id",
    "get_file_category",
    "validate_file",
    "BaseExtractionSource",
    "ExtractionRequest",
    "HttpExtractionSource",
    "build_record",
    "failure_record",
    "parse_extraction_response",
]
