"""Persistence backends for saved profiles.

A backend stores the whole profile collection under one key as a JSON array
and replaces it in full on every write.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union, runtime_checkable

from legaldocs.config import settings
from legaldocs.core.exceptions import ProfileStorageError
from legaldocs.utils.logging import get_logger

LOGGER = get_logger(__name__)

ProfileRecords = List[Dict[str, Any]]


@runtime_checkable
class ProfileStorage(Protocol):
    def load(self) -> ProfileRecords:
        """Return the stored collection (empty when nothing was stored)."""
        ...

    def save_all(self, profiles: ProfileRecords) -> None:
        """Replace the stored collection, raising ProfileStorageError on failure."""
        ...


class InMemoryProfileStorage:
    """Storage kept in process memory.

    ``fail_writes`` makes every ``save_all`` raise, to exercise write
    failure handling.
    """

    def __init__(self, initial: Optional[ProfileRecords] = None, fail_writes: bool = False):
        self._records: ProfileRecords = json.loads(json.dumps(initial or []))
        self.fail_writes = fail_writes
        self.write_count = 0

    def load(self) -> ProfileRecords:
        return json.loads(json.dumps(self._records))

    def save_all(self, profiles: ProfileRecords) -> None:
        if self.fail_writes:
            raise ProfileStorageError("Profile storage is not writable")
        self._records = json.loads(json.dumps(profiles))
        self.write_count += 1


class JsonFileProfileStorage:
    """Keyed local storage entry backed by a JSON file.

    Writes go to a temporary file in the same directory which is then
    renamed over the entry, so readers see either the old or the new
    collection and never a partial one.
    """

    def __init__(
        self,
        directory: Optional[Union[str, Path]] = None,
        key: Optional[str] = None,
    ):
        self.directory = Path(directory or settings.profile_storage_dir)
        self.key = key or settings.profile_storage_key

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def load(self) -> ProfileRecords:
        """Read the stored collection.

        Raises:
            ProfileStorageError: If the entry exists but cannot be read or parsed
        """
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ProfileStorageError(f"Failed to read profiles from {self.path}", original_error=e) from e

        if not isinstance(data, list):
            raise ProfileStorageError(f"Stored profiles at {self.path} are not a JSON array")
        return data

    def save_all(self, profiles: ProfileRecords) -> None:
        tmp_path = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.key}.", suffix=".tmp", dir=str(self.directory)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(profiles, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as e:
            raise ProfileStorageError(f"Failed to write profiles to {self.path}", original_error=e) from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        LOGGER.debug("Profiles written", extra={"path": str(self.path), "count": len(profiles)})
