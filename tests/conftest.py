"""Pytest configuration and shared fixtures."""

from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from legaldocs.dependencies import get_profile_store
from legaldocs.main import app
from legaldocs.schemas.extraction import ExtractionRecord
from legaldocs.services.profiles.profile_store import SavedProfileStore
from legaldocs.services.profiles.storage import InMemoryProfileStorage


@pytest.fixture
def test_client() -> TestClient:
    """Create FastAPI test client.

    Returns:
        TestClient: FastAPI test client instance
    """
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Ensure FastAPI dependency overrides are reset between tests."""
    app.dependency_overrides = {}
    yield
    app.dependency_overrides = {}


@pytest.fixture
def extraction_payload() -> Dict[str, Any]:
    """Lease agreement as returned by the extraction model (camelCase)."""
    return {
        "documentType": "lease_agreement",
        "documentTypeConfidence": 0.92,
        "language": "en",
        "jurisdiction": "Dubai, UAE",
        "parties": [
            {
                "name": "Ahmed Al Mansoori",
                "nameAr": "أحمد المنصوري",
                "type": "individual",
                "role": "landlord",
                "idNumber": "784-1985-1234567-1",
                "nationality": "UAE",
                "phone": "+971501234567",
                "confidence": 0.95,
            },
            {
                "name": "Gulf Trading LLC",
                "type": "company",
                "role": "tenant",
                "email": "info@gulftrading.ae",
                "confidence": 0.9,
            },
        ],
        "financials": {
            "currency": "AED",
            "amounts": [
                {
                    "value": 120000,
                    "description": "Annual rent",
                    "type": "rent",
                    "frequency": "yearly",
                    "confidence": 0.97,
                },
                {
                    "value": 5000,
                    "description": "Security deposit",
                    "type": "deposit",
                    "frequency": "one-time",
                    "confidence": 0.93,
                },
            ],
            "paymentTerms": "Four post-dated cheques",
        },
        "dates": {
            "startDate": "2025-01-01",
            "endDate": "2025-12-31",
            "signatureDate": "2024-12-15",
            "customDates": [{"label": "Handover", "date": "2024-12-28"}],
        },
        "clauses": [
            {
                "id": "clause-1",
                "title": "Termination",
                "titleAr": "الإنهاء",
                "content": "Either party may terminate with 60 days notice.",
                "type": "termination",
                "importance": "critical",
                "confidence": 0.88,
            },
            {
                "id": "clause-2",
                "title": "Maintenance",
                "content": "Tenant handles minor maintenance.",
                "type": "obligation",
                "importance": "standard",
                "confidence": 0.81,
            },
        ],
        "summary": "One year residential lease in Dubai Marina.",
        "summaryAr": "عقد إيجار سكني لمدة سنة في دبي مارينا.",
        "keyTerms": [
            {"term": "Rent", "value": "AED 120,000"},
            {"term": "Term", "value": "12 months"},
        ],
        "warnings": ["Ejari registration number missing"],
        "notes": ["Scanned copy, signatures partially legible"],
    }


@pytest.fixture
def sample_record(extraction_payload) -> ExtractionRecord:
    data = dict(extraction_payload)
    data.update({"fileName": "lease.pdf", "fileSize": 2 * 1024 * 1024, "fileType": "pdf"})
    return ExtractionRecord.model_validate(data)


@pytest.fixture
def empty_record() -> ExtractionRecord:
    return ExtractionRecord(file_name="blank.pdf", file_size=512)


@pytest.fixture
def profile_storage() -> InMemoryProfileStorage:
    return InMemoryProfileStorage()


@pytest.fixture
def profile_store(profile_storage) -> SavedProfileStore:
    return SavedProfileStore(profile_storage)


@pytest.fixture
def api_profile_store(profile_store) -> SavedProfileStore:
    """Profile store injected into the API through dependency overrides."""
    app.dependency_overrides[get_profile_store] = lambda: profile_store
    return profile_store
