"""Namespaced key/value persistence: one JSON file per key under the state dir.

Stores are advisory. Readers must treat a missing or unreadable value as
absent; concurrent writers are not coordinated (last write wins).
"""

import json
import os
import re
import tempfile

STATE_DIR = os.environ.get(
    "CINEMATIC_DATA_DIR",
    os.path.join(os.path.dirname(os.path.dirname(__file__)), "assets", "state"),
)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class StoreError(Exception):
    """Raised when a stored value exists but cannot be read or written."""


class JsonFileStore:
    """Key/value store backed by ``<directory>/<key>.json`` files."""

    def __init__(self, directory: str | None = None):
        self.directory = directory or STATE_DIR

    def _path(self, key: str) -> str:
        return os.path.join(self.directory, _UNSAFE_CHARS.sub("_", key) + ".json")

    def get(self, key: str, default=None):
        path = self._path(key)
        if not os.path.isfile(path):
            return default
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise StoreError(f"Failed to read {key}: {e}") from e

    def set(self, key: str, value):
        tmp_path = None
        try:
            os.makedirs(self.directory, exist_ok=True)
            # Atomic replace: readers see the old file or the new one, never a partial
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, indent=2)
            os.replace(tmp_path, self._path(key))
        except (OSError, TypeError, ValueError) as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StoreError(f"Failed to write {key}: {e}") from e

    def remove(self, key: str):
        try:
            os.remove(self._path(key))
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StoreError(f"Failed to remove {key}: {e}") from e


class MemoryStore:
    """In-process store with the JsonFileStore interface. Values round-trip through JSON."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str, default=None):
        if key not in self._data:
            return default
        try:
            return json.loads(self._data[key])
        except ValueError as e:
            raise StoreError(f"Failed to read {key}: {e}") from e

    def set(self, key: str, value):
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Failed to write {key}: {e}") from e

    def set_raw(self, key: str, text: str):
        """Store text verbatim (used to simulate corrupt values)."""
        self._data[key] = text

    def remove(self, key: str):
        self._data.pop(key, None)
