# ABOUTME: Persistent key-value store holding the user's last chosen location.
# ABOUTME: Provides a JSON-file store, an in-memory store, and saved-location helpers.

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from elemental_weather.models import Location

logger = logging.getLogger(__name__)

LOCATION_KEY = "elemental_weather.location"


@runtime_checkable
class KeyValueStore(Protocol):
    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...


class MemoryStore:
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonFileStore:
    """Store backed by a single JSON object on disk.

    A missing, unreadable or corrupt file reads as an empty store. Writes replace
    the whole file through a temporary file in the same directory.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def get(self, key: str) -> Any | None:
        return self._read().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def _read(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning("Could not read store %s: %s", self.path, e)
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt store file %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: top level is not an object", self.path)
            return {}
        return data


def load_saved_location(store: KeyValueStore) -> Location | None:
    """Return the saved location, or None when absent or malformed."""
    record = store.get(LOCATION_KEY)
    if record is None:
        return None
    if not isinstance(record, dict) or "label" not in record:
        logger.debug("Discarding malformed saved location %r", record)
        return None
    try:
        # strict: numbers must be numbers (not bools or numeric strings), label must be a str
        return Location.model_validate(record, strict=True)
    except ValidationError as e:
        logger.debug("Discarding malformed saved location %r: %s", record, e)
        return None


def save_location(store: KeyValueStore, location: Location) -> None:
    store.set(LOCATION_KEY, location.model_dump())
