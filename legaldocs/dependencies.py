"""Dependency providers for the FastAPI application.

Tests replace these through ``app.dependency_overrides``.
"""

from functools import lru_cache

from legaldocs.services.extraction.extraction_source import (
    BaseExtractionSource,
    HttpExtractionSource,
)
from legaldocs.services.profiles.profile_store import SavedProfileStore
from legaldocs.services.profiles.storage import JsonFileProfileStorage


@lru_cache()
def get_profile_store() -> SavedProfileStore:
    """Get the process-wide saved profile store.

    Returns:
        SavedProfileStore: Store backed by the keyed JSON storage entry
    """
    return SavedProfileStore(JsonFileProfileStorage())


def get_extraction_source() -> BaseExtractionSource:
    """Get the extraction source used for uploads.

    Returns:
        BaseExtractionSource: HTTP client for the external extraction API
    """
    return HttpExtractionSource()
