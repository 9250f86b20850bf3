"""Saved profile store.

Keeps the collection of reusable party identities in memory and persists the
full collection through a ProfileStorage backend after every mutation.

Invariant: a non-empty collection has exactly one default profile.
"""

import threading
import time
import uuid
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from legaldocs.core.exceptions import ProfileStorageError
from legaldocs.schemas.profiles import (
    ProfileCreate,
    ProfileUpdate,
    SavedProfile,
    utc_now_iso,
)
from legaldocs.services.profiles.storage import ProfileStorage
from legaldocs.utils.logging import get_logger

LOGGER = get_logger(__name__)


def generate_profile_id() -> str:
    return f"profile-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


class SavedProfileStore:
    """CRUD plus default/favorite bookkeeping for saved profiles."""

    def __init__(self, storage: ProfileStorage):
        self.storage = storage
        self._lock = threading.RLock()
        self._synced = True
        self._last_error: Optional[str] = None
        self._profiles: List[SavedProfile] = self._load()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> List[SavedProfile]:
        try:
            records = self.storage.load()
        except ProfileStorageError as e:
            LOGGER.error(
                f"Failed to load saved profiles, starting empty: {e.message}",
                exc_info=True,
            )
            return []

        profiles = []
        for record in records or []:
            if not isinstance(record, dict):
                LOGGER.warning("Skipping stored profile that is not an object")
                continue
            try:
                profiles.append(SavedProfile.model_validate(record))
            except PydanticValidationError as e:
                LOGGER.warning(
                    f"Skipping invalid stored profile: {e.error_count()} errors",
                    extra={"profile_id": record.get("id")},
                )

        if self._repair_default(profiles):
            LOGGER.warning("Stored profiles broke the default invariant, repaired")
            self._profiles = profiles
            self._persist()
        return profiles

    @staticmethod
    def _repair_default(profiles: List[SavedProfile]) -> bool:
        """Keep the first default (or promote the first profile). Returns True if anything changed."""
        if not profiles:
            return False

        defaults = [index for index, profile in enumerate(profiles) if profile.is_default]
        if len(defaults) == 1:
            return False

        keep = defaults[0] if defaults else 0
        for index, profile in enumerate(profiles):
            should_be_default = index == keep
            if profile.is_default != should_be_default:
                profiles[index] = profile.model_copy(update={"is_default": should_be_default})
        return True

    def _persist(self) -> None:
        records = [profile.to_storage() for profile in self._profiles]
        try:
            self.storage.save_all(records)
        except (ProfileStorageError, OSError) as e:
            self._synced = False
            self._last_error = getattr(e, "message", str(e))
            LOGGER.error(
                f"Failed to persist saved profiles: {self._last_error}",
                exc_info=True,
                extra={"count": len(records)},
            )
            return

        self._synced = True
        self._last_error = None

    @property
    def is_synced(self) -> bool:
        """False while the last write failed and no later write succeeded."""
        return self._synced

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def flush(self) -> bool:
        """Rewrite the full collection. Returns whether storage is in sync."""
        with self._lock:
            self._persist()
            return self._synced

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _index_of(self, profile_id: str) -> Optional[int]:
        for index, profile in enumerate(self._profiles):
            if profile.id == profile_id:
                return index
        return None

    def list(self) -> List[SavedProfile]:
        """All profiles, favorites first, then the default, then by label."""
        with self._lock:
            return sorted(
                self._profiles,
                key=lambda p: (not p.is_favorite, not p.is_default, p.label.casefold()),
            )

    def get(self, profile_id: str) -> Optional[SavedProfile]:
        with self._lock:
            index = self._index_of(profile_id)
            return self._profiles[index] if index is not None else None

    def get_default(self) -> Optional[SavedProfile]:
        with self._lock:
            return next((p for p in self._profiles if p.is_default), None)

    def favorites(self) -> List[SavedProfile]:
        """Favorite profiles other than the default, in display order."""
        return [p for p in self.list() if p.is_favorite and not p.is_default]

    def __len__(self) -> int:
        return len(self._profiles)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, profile: Optional[ProfileCreate] = None, **fields: Any) -> Optional[SavedProfile]:
        """Create a profile from a ProfileCreate or from keyword fields.

        Blank label or name makes this a no-op returning None. The first
        profile of an empty collection becomes the default.
        """
        if profile is None:
            profile = ProfileCreate.model_validate(fields)

        if not profile.label.strip() or not profile.data.name.strip():
            LOGGER.info("Ignoring profile create with blank label or name")
            return None

        with self._lock:
            now = utc_now_iso()
            saved = SavedProfile(
                id=generate_profile_id(),
                type=profile.type,
                label=profile.label,
                is_default=len(self._profiles) == 0,
                is_favorite=False,
                created_at=now,
                updated_at=now,
                data=profile.data.model_copy(),
            )
            self._profiles.append(saved)
            self._persist()

        LOGGER.info("Saved profile created", extra={"profile_id": saved.id, "is_default": saved.is_default})
        return saved

    def update(
        self,
        profile_id: str,
        patch: Union[ProfileUpdate, Dict[str, Any]],
    ) -> Optional[SavedProfile]:
        """Merge ``patch`` into a profile and bump ``updatedAt``.

        No-op returning None when the id is unknown or the result would have
        a blank label or name.
        """
        if isinstance(patch, dict):
            patch = ProfileUpdate.model_validate(patch)

        with self._lock:
            index = self._index_of(profile_id)
            if index is None:
                LOGGER.info("Ignoring update of unknown profile", extra={"profile_id": profile_id})
                return None

            existing = self._profiles[index]
            data = existing.data
            if patch.data is not None:
                data = data.model_copy(update=patch.data.model_dump(exclude_none=True))
            label = existing.label if patch.label is None else patch.label

            if not label.strip() or not data.name.strip():
                LOGGER.info("Ignoring profile update that blanks label or name", extra={"profile_id": profile_id})
                return None

            updated = existing.model_copy(
                update={
                    "type": patch.type or existing.type,
                    "label": label,
                    "data": data,
                    "updated_at": utc_now_iso(),
                }
            )
            self._profiles[index] = updated
            self._persist()
            return updated

    def delete(self, profile_id: str) -> bool:
        """Remove a profile. Deleting the default promotes the first remaining one."""
        with self._lock:
            index = self._index_of(profile_id)
            if index is None:
                return False

            removed = self._profiles.pop(index)
            if removed.is_default and self._profiles:
                self._profiles[0] = self._profiles[0].model_copy(update={"is_default": True})
                LOGGER.info(
                    "Promoted profile to default",
                    extra={"profile_id": self._profiles[0].id, "deleted_id": profile_id},
                )
            self._persist()
            return True

    def set_default(self, profile_id: str) -> Optional[SavedProfile]:
        """Make ``profile_id`` the only default. Unknown ids change nothing."""
        with self._lock:
            if self._index_of(profile_id) is None:
                return None
            self._profiles = [
                p if p.is_default == (p.id == profile_id) else p.model_copy(update={"is_default": p.id == profile_id})
                for p in self._profiles
            ]
            self._persist()
            return self._profiles[self._index_of(profile_id)]

    def toggle_favorite(self, profile_id: str) -> Optional[SavedProfile]:
        with self._lock:
            index = self._index_of(profile_id)
            if index is None:
                return None
            profile = self._profiles[index]
            self._profiles[index] = profile.model_copy(update={"is_favorite": not profile.is_favorite})
            self._persist()
            return self._profiles[index]
