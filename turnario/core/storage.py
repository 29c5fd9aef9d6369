# turnario/core/storage.py
"""
Persistence layer for the profile document.

The profile is one JSON file written atomically. Edits can be staged in a
PendingChanges object and written later with an explicit flush.
"""

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from turnario.core.config import DATA_DIR, PROFILE_FILE_NAME
from turnario.core.models import ProfileState

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """General error type for problems loading or saving data files."""

    pass


@dataclass(frozen=True)
class SaveResult:
    path: Path
    bytes_written: int


def _load_json(file_path: Path) -> Any:
    """
    Read and parse JSON with robust error handling.

    Raises:
        StorageError: If file cannot be read or JSON is invalid
    """
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.exception("Failed to read JSON file %s", file_path)
        raise StorageError(f"Could not read JSON file {file_path}: {e}") from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.exception("Invalid JSON in file %s", file_path)
        raise StorageError(f"Invalid JSON in file {file_path}: {e}") from e


class JsonProfileRepository:
    """Loads and saves a ProfileState as a JSON document."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else DATA_DIR / PROFILE_FILE_NAME

    def load_profile(self) -> ProfileState:
        """
        Load the profile, or a fresh default profile when no file exists yet.

        Raises:
            StorageError: If the file cannot be read or does not hold a valid profile
        """
        if not self.path.exists():
            logger.info("No profile at %s, starting with defaults", self.path)
            return ProfileState()

        data = _load_json(self.path)
        try:
            if not isinstance(data, dict):
                raise TypeError("Expected profile dict")
            profile = ProfileState.model_validate(data)
        except (TypeError, ValueError, ValidationError) as e:
            logger.exception("Failed to parse profile from %s", self.path)
            raise StorageError(f"Could not parse profile from {self.path}: {e}") from e
        return profile

    def save_profile(self, profile: ProfileState) -> SaveResult:
        """
        Write the profile atomically (temp file in the same directory + replace).

        Raises:
            StorageError: If the file cannot be written
        """
        payload = profile.model_dump_json(indent=2)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.exception("Failed to save profile to %s", self.path)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Could not save profile to {self.path}: {e}") from e

        size = len(payload.encode("utf-8"))
        logger.info("Saved profile to %s (%d bytes, %d entries)", self.path, size, len(profile.entries))
        return SaveResult(path=self.path, bytes_written=size)


class PendingHandle:
    """Cancels one staged value, unless a newer value was staged since."""

    def __init__(self, owner: "PendingChanges", token: int):
        self._owner = owner
        self._token = token

    def cancel(self) -> bool:
        return self._owner._cancel_token(self._token)


class PendingChanges:
    """
    Holds at most one profile waiting to be written.

    Staging replaces any earlier pending value. Nothing is written until the
    caller calls flush().
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._value: ProfileState | None = None
        self._token = 0

    @property
    def is_pending(self) -> bool:
        return self._value is not None

    @property
    def value(self) -> ProfileState | None:
        return self._value

    def stage(self, profile: ProfileState) -> PendingHandle:
        with self._lock:
            self._token += 1
            self._value = profile
            token = self._token
        logger.debug("Staged profile change (token=%d)", token)
        return PendingHandle(self, token)

    def flush(self, repository: JsonProfileRepository) -> SaveResult | None:
        """Write the pending value, if any. The value stays pending when saving fails."""
        with self._lock:
            profile = self._value
            token = self._token
        if profile is None:
            return None

        result = repository.save_profile(profile)

        with self._lock:
            # A newer stage during the save stays pending
            if self._token == token:
                self._value = None
        return result

    def cancel(self) -> bool:
        with self._lock:
            had_value = self._value is not None
            self._value = None
        if had_value:
            logger.info("Discarded pending profile change")
        return had_value

    def _cancel_token(self, token: int) -> bool:
        with self._lock:
            if self._token != token or self._value is None:
                return False
            self._value = None
        logger.info("Cancelled staged profile change (token=%d)", token)
        return True
