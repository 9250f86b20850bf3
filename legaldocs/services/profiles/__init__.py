"""Saved party profiles and their storage backends."""

from legaldocs.services.profiles.profile_store import SavedProfileStore, generate_profile_id
from legaldocs.services.profiles.storage import (
    InMemoryProfileStorage,
    JsonFileProfileStorage,
    ProfileStorage,
)

__all__ = [
    "SavedProfileStore",
    "generate_profile_id",
    "InMemoryProfileStorage",
    "JsonFileProfileStorage",
    "ProfileStorage",
]
