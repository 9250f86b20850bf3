"""Tests for turning model output into extraction records."""

import json

import pytest

from legaldocs.schemas.extraction import ExtractionStatus, FileCategory
from legaldocs.services.extraction.response_parser import (
    DEFAULT_EXTRACTION_MODEL,
    PARSE_FAILURE_ERROR,
    PARSE_FAILURE_SUMMARY,
    PARSE_FAILURE_WARNING,
    build_record,
    parse_extraction_response,
)


def _parse(text):
    return parse_extraction_response(text, "upload_1", "lease.pdf", FileCategory.PDF, 2048)


def test_parses_fenced_json(extraction_payload):
    text = f"Here is the extraction:\n```json\n{json.dumps(extraction_payload)}\n```"

    record = _parse(text)

    assert record.status is ExtractionStatus.COMPLETED
    assert record.document_type == "lease_agreement"
    assert len(record.parties) == 2
    assert record.extraction_model == DEFAULT_EXTRACTION_MODEL


def test_provenance_comes_from_upload(extraction_payload):
    payload = dict(extraction_payload, fileName="other.docx", fileSize=1, id="spoofed")

    record = _parse(json.dumps(payload))

    assert record.id == "upload_1"
    assert record.file_name == "lease.pdf"
    assert record.file_size == 2048
    assert record.file_type is FileCategory.PDF
    assert record.uploaded_at is not None


def test_no_json_yields_failure_record():
    record = _parse("I could not read this document.")

    assert record.is_failed
    assert record.document_type == "unknown"
    assert record.document_type_confidence == 0.0
    assert record.raw_text == "I could not read this document."
    assert record.summary == PARSE_FAILURE_SUMMARY
    assert record.warnings == (PARSE_FAILURE_WARNING,)
    assert record.error == PARSE_FAILURE_ERROR
    assert record.parties == ()


PARTY = {"name": "Ahmed"}


@pytest.mark.parametrize(
    "bad_category",
    [
        {"clauses": [{"title": "no id"}]},
        {"financials": {"currency": "AED", "amounts": [{"value": "AED 5,000"}]}},
        {"dates": {"customDates": [{"label": "Handover", "date": None}]}},
        {"clauses": [{"id": "c1", "title": ["not", "text"]}]},
    ],
)
def test_malformed_entry_keeps_other_categories(bad_category):
    record = _parse(json.dumps({"parties": [PARTY], **bad_category}))

    assert record.status is ExtractionStatus.COMPLETED
    assert [p.name for p in record.parties] == ["Ahmed"]


def test_malformed_entries_are_repaired_or_dropped():
    payload = {
        "parties": [PARTY],
        "financials": {"currency": "AED", "amounts": [{"value": "AED 5,000", "description": "Rent"}]},
        "dates": {"startDate": "2025-01-01", "customDates": [{"label": "Handover", "date": None}]},
        "clauses": [{"title": "no id", "content": "Tenant pays rent"}, {"id": "c2", "title": {"bad": 1}}],
    }

    record = _parse(json.dumps(payload))

    assert record.financials.amounts[0].value == 5000.0
    assert record.dates.start_date == "2025-01-01"
    assert record.dates.custom_dates[0].date == ""
    assert [c.id for c in record.clauses] == ["clause-1"]


def test_invalid_scalar_field_falls_back_to_default():
    record = _parse(json.dumps({"parties": [PARTY], "pageCount": "many", "processingTime": "slow"}))

    assert record.status is ExtractionStatus.COMPLETED
    assert record.page_count is None
    assert record.processing_time == 0.0
    assert len(record.parties) == 1
    assert record.file_name == "lease.pdf"


def test_build_record_keeps_reported_model(extraction_payload):
    payload = dict(extraction_payload, extractionModel="gpt-4o")

    record = build_record(payload, "upload_2", "lease.pdf", None, 10)

    assert record.extraction_model == "gpt-4o"
    assert record.file_type is None
