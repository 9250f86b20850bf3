"""Extraction source interface and the HTTP implementation.

The extraction source is the one asynchronous boundary of the review
workflow: it receives the raw document and answers with an ExtractionRecord.
The inference itself happens in an external service.
"""

import base64
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from legaldocs.config import settings
from legaldocs.core.exceptions import (
    APIClientError,
    APITimeoutError,
    ExtractionError,
    ExtractionRejectedError,
    ExtractionTimeoutError,
    InvalidDocumentError,
)
from legaldocs.core.extraction_client import ExtractionAPIClient
from legaldocs.schemas.extraction import ExtractionRecord
from legaldocs.services.extraction.document_validation import (
    generate_upload_id,
    get_file_category,
    validate_file,
)
from legaldocs.services.extraction.response_parser import (
    DEFAULT_EXTRACTION_MODEL,
    build_record,
    parse_extraction_response,
)
from legaldocs.utils.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass
class ExtractionRequest:
    """Raw document plus the hints sent to the extraction source."""
    file_name: str
    content_type: str
    content: bytes = field(repr=False)
    document_type: Optional[str] = None
    language: str = "en"
    purpose: str = "general"
    extract_clauses: bool = True
    extract_parties: bool = True
    extract_financials: bool = True
    upload_id: str = field(default_factory=generate_upload_id)

    @property
    def size(self) -> int:
        return len(self.content)


class BaseExtractionSource(ABC):
    """Abstract base class for extraction source implementations."""

    @abstractmethod
    async def extract(self, request: ExtractionRequest) -> ExtractionRecord:
        """Extract a structured record from a raw document.

        Args:
            request: Document bytes and extraction hints

        Returns:
            ExtractionRecord: The parsed document

        Raises:
            InvalidDocumentError: If the document is rejected before extraction
            ExtractionError: If the source returns no usable record
            ExtractionTimeoutError: If the source does not answer in time
        """
        pass

    @abstractmethod
    def get_source_name(self) -> str:
        pass


class HttpExtractionSource(BaseExtractionSource):
    """Extraction source backed by the remote upload/extract endpoint."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[int] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[int] = None,
        max_upload_size: Optional[int] = None,
    ):
        self.client = ExtractionAPIClient(
            api_key=settings.extraction_api_key if api_key is None else api_key,
            api_url=api_url or settings.extraction_api_url,
            timeout=timeout or settings.extraction_timeout,
            max_retries=max_retries or settings.max_retries,
            retry_delay=settings.retry_delay if retry_delay is None else retry_delay,
        )
        self.max_upload_size = max_upload_size or settings.max_upload_size

    def get_source_name(self) -> str:
        return "HTTP Extraction API"

    def build_payload(self, request: ExtractionRequest) -> Dict[str, Any]:
        """JSON body expected by the extract endpoint."""
        return {
            "fileName": request.file_name,
            "mimeType": request.content_type,
            "fileData": base64.b64encode(request.content).decode("ascii"),
            "purpose": request.purpose,
            "language": request.language,
            "extractClauses": request.extract_clauses,
            "extractParties": request.extract_parties,
            "extractFinancials": request.extract_financials,
            "documentType": request.document_type,
        }

    async def extract(self, request: ExtractionRequest) -> ExtractionRecord:
        validation = validate_file(
            request.file_name,
            request.content_type,
            request.size,
            max_size=self.max_upload_size,
        )
        if not validation.valid:
            raise InvalidDocumentError(validation.error)

        LOGGER.info(
            "Starting document extraction",
            extra={
                "upload_id": request.upload_id,
                "file_name": request.file_name,
                "file_size": request.size,
                "source": self.get_source_name(),
            },
        )
        started = time.monotonic()

        try:
            response = await self.client.submit(self.build_payload(request), upload_id=request.upload_id)
        except ExtractionRejectedError as e:
            raise ExtractionError(e.message, original_error=e) from e
        except APITimeoutError as e:
            LOGGER.error(
                f"Extraction timed out: {e.message}",
                exc_info=True,
                extra={"upload_id": request.upload_id},
            )
            raise ExtractionTimeoutError(
                f"Extraction timed out for {request.file_name}", original_error=e
            ) from e
        except APIClientError as e:
            LOGGER.error(
                f"Extraction request failed: {e.message}",
                exc_info=True,
                extra={"upload_id": request.upload_id},
            )
            raise ExtractionError(
                f"Extraction failed for {request.file_name}", original_error=e
            ) from e

        record = self._record_from_response(response, request)

        LOGGER.info(
            "Document extraction completed",
            extra={
                "upload_id": request.upload_id,
                "status": record.status.value,
                "parties": len(record.parties),
                "clauses": len(record.clauses),
                "elapsed": round(time.monotonic() - started, 3),
            },
        )
        return record

    def _record_from_response(
        self, response: Dict[str, Any], request: ExtractionRequest
    ) -> ExtractionRecord:
        extraction = response.get("extraction")
        file_type = get_file_category(request.content_type)
        model = response.get("extractionModel") or DEFAULT_EXTRACTION_MODEL

        if isinstance(extraction, str):
            return parse_extraction_response(
                extraction,
                request.upload_id,
                request.file_name,
                file_type,
                request.size,
                extraction_model=model,
            )

        if not isinstance(extraction, dict):
            raise ExtractionError("Extraction source returned no record")

        return build_record(
            extraction,
            request.upload_id,
            request.file_name,
            file_type,
            request.size,
            extraction_model=model,
        )
