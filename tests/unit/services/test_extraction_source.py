"""Tests for the HTTP extraction source."""

import base64
import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from legaldocs.core.exceptions import ExtractionError, ExtractionTimeoutError, InvalidDocumentError
from legaldocs.schemas.extraction import ExtractionStatus, FileCategory
from legaldocs.services.extraction.extraction_source import ExtractionRequest, HttpExtractionSource

API_URL = "https://extract.example.com/api/upload/extract"


def _response(status_code: int, payload=None, text: str = "") -> httpx.Response:
    request = httpx.Request("POST", API_URL)
    if payload is not None:
        return httpx.Response(status_code, json=payload, request=request)
    return httpx.Response(status_code, text=text, request=request)


@pytest.fixture
def source() -> HttpExtractionSource:
    return HttpExtractionSource(api_url=API_URL, api_key="secret", timeout=5, max_retries=3, retry_delay=0)


@pytest.fixture
def pdf_request() -> ExtractionRequest:
    return ExtractionRequest(
        file_name="lease.pdf",
        content_type="application/pdf",
        content=b"%PDF-1.4 lease",
        document_type="lease_agreement",
        language="ar",
        upload_id="upload_test",
    )


@pytest.mark.asyncio
async def test_extract_success(source, pdf_request, extraction_payload):
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _response(200, {"success": True, "extraction": extraction_payload})

        record = await source.extract(pdf_request)

    assert record.status is ExtractionStatus.COMPLETED
    assert record.id == "upload_test"
    assert record.file_name == "lease.pdf"
    assert record.file_type is FileCategory.PDF
    assert record.file_size == len(b"%PDF-1.4 lease")
    assert len(record.clauses) == 2

    mock_post.assert_called_once()
    assert mock_post.call_args.args[0] == API_URL
    body = mock_post.call_args.kwargs["json"]
    assert base64.b64decode(body["fileData"]) == b"%PDF-1.4 lease"
    assert body["mimeType"] == "application/pdf"
    assert body["documentType"] == "lease_agreement"
    assert body["language"] == "ar"
    assert body["extractClauses"] is True
    assert mock_post.call_args.kwargs["headers"]["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
async def test_extract_parses_text_payload(source, pdf_request, extraction_payload):
    text = f"```json\n{json.dumps(extraction_payload)}\n```"
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _response(200, {"extraction": text})

        record = await source.extract(pdf_request)

    assert record.document_type == "lease_agreement"
    assert record.id == "upload_test"


@pytest.mark.asyncio
async def test_unparseable_text_payload_returns_failure_record(source, pdf_request):
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _response(200, {"extraction": "sorry, unreadable"})

        record = await source.extract(pdf_request)

    assert record.is_failed
    assert record.raw_text == "sorry, unreadable"


@pytest.mark.asyncio
async def test_server_error_is_retried(source, pdf_request, extraction_payload):
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.side_effect = [
            _response(503, text="unavailable"),
            _response(200, {"extraction": extraction_payload}),
        ]

        record = await source.extract(pdf_request)

    assert mock_post.call_count == 2
    assert record.status is ExtractionStatus.COMPLETED


@pytest.mark.asyncio
async def test_client_error_is_not_retried(source, pdf_request):
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _response(400, text="bad file")

        with pytest.raises(ExtractionError):
            await source.extract(pdf_request)

    assert mock_post.call_count == 1


@pytest.mark.asyncio
async def test_timeout_raises_after_retries(source, pdf_request):
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(ExtractionTimeoutError):
            await source.extract(pdf_request)

    assert mock_post.call_count == 3


@pytest.mark.asyncio
async def test_unsuccessful_response_raises(source, pdf_request):
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _response(200, {"success": False, "error": "Could not read document"})

        with pytest.raises(ExtractionError, match="Could not read document"):
            await source.extract(pdf_request)

    assert mock_post.call_count == 1


@pytest.mark.asyncio
async def test_invalid_document_is_rejected_before_request(source):
    request = ExtractionRequest(file_name="tool.exe", content_type="application/x-msdownload", content=b"MZ")

    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        with pytest.raises(InvalidDocumentError, match="Unsupported file type"):
            await source.extract(request)

    mock_post.assert_not_called()


@pytest.mark.asyncio
async def test_malformed_entry_in_record_keeps_the_rest(source, pdf_request, extraction_payload):
    payload = dict(extraction_payload, clauses=[{"title": "Rent"}, {"id": "c2", "title": ["bad"]}])
    payload["financials"] = dict(extraction_payload["financials"], amounts=[{"value": "AED 5,000"}])
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _response(200, {"success": True, "extraction": payload})

        record = await source.extract(pdf_request)

    assert record.status is ExtractionStatus.COMPLETED
    assert len(record.parties) == len(extraction_payload["parties"])
    assert [c.id for c in record.clauses] == ["clause-1"]
    assert record.financials.amounts[0].value == 5000.0


@pytest.mark.asyncio
async def test_rate_limit_is_retried(source, pdf_request, extraction_payload):
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.side_effect = [
            _response(429, text="slow down"),
            _response(200, {"success": True, "extraction": extraction_payload}),
        ]

        record = await source.extract(pdf_request)

    assert mock_post.call_count == 2
    assert record.document_type == "lease_agreement"


@pytest.mark.asyncio
async def test_non_object_envelope_raises(source, pdf_request):
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _response(200, ["not", "an", "envelope"])

        with pytest.raises(ExtractionError):
            await source.extract(pdf_request)

    assert mock_post.call_count == 1
