"""Key/value storage the emulator persists its state in.

The emulator keeps everything (settings, cartridge RAM, RTC data) as string
values under string keys, the same shape as browser local storage. Backup
import and export only go through the KeyValueStore interface so any medium
can be plugged in.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Optional

from ..logging_config import get_logger

logger = get_logger("storage")


class StorageError(Exception):
    """Exception raised when the storage medium cannot be read or written"""
    pass


def _require_str(key: object, value: object) -> None:
    if not isinstance(key, str):
        raise TypeError(f"Storage keys must be strings, got {type(key).__name__}")
    if not isinstance(value, str):
        raise TypeError(f"Storage values must be strings, got {type(value).__name__} for {key!r}")


class KeyValueStore(ABC):
    """String key/value storage with insertion-ordered enumeration."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Get the value stored under key, or None if absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any existing value."""

    def set_items(self, pairs: Iterable[tuple[str, str]]) -> None:
        """Store several key/value pairs as one write.

        Every pair is checked before anything is stored. Persistent stores
        override this to save all pairs together or none of them.
        """
        pairs = list(pairs)
        for key, value in pairs:
            _require_str(key, value)
        for key, value in pairs:
            self.set_item(key, value)

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove key if present."""

    @abstractmethod
    def keys(self) -> list[str]:
        """List every stored key."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""

    def items(self) -> list[tuple[str, str]]:
        """List every stored key/value pair."""
        pairs = []
        for key in self.keys():
            value = self.get_item(key)
            if value is not None:
                pairs.append((key, value))
        return pairs

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get_item(key) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.keys())


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store, used for tests and previews."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set_item(key, value)

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        _require_str(key, value)
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    def clear(self) -> None:
        self._data.clear()


class JsonFileStore(KeyValueStore):
    """Store persisted as a single JSON object file.

    The whole file is rewritten on every change. Writes go to a temporary
    file in the same directory which then replaces the original, so a crash
    never leaves a half-written store behind. If a write fails the in-memory
    contents are restored to match the file.
    """

    def __init__(self, path: Path):
        """Initialize the store and load existing data.

        Args:
            path: Location of the JSON storage file

        Raises:
            StorageError: If the file exists but is not a JSON object of strings
        """
        self.path = path
        self._data: dict[str, str] = {}
        self._load()

    def _load(self):
        """Load the store from disk."""
        if not self.path.exists():
            logger.debug(f"Storage file {self.path} does not exist yet, starting empty")
            return

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as e:
            raise StorageError(f"Could not read storage file {self.path}: {e}") from e

        if not isinstance(raw, dict):
            raise StorageError(f"Storage file {self.path} does not contain a JSON object")

        for key, value in raw.items():
            if not isinstance(value, str):
                raise StorageError(f"Storage file {self.path} has a non-string value for {key!r}")
            self._data[key] = value

        logger.debug(f"Loaded {len(self._data)} entries from {self.path}")

    def _save(self):
        """Write the store to disk atomically."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(self._data, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Failed to write storage file {self.path}: {e}")
            raise StorageError(f"Could not write storage file {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.set_items([(key, value)])

    def set_items(self, pairs: Iterable[tuple[str, str]]) -> None:
        pairs = list(pairs)
        for key, value in pairs:
            _require_str(key, value)

        previous = dict(self._data)
        self._data.update(pairs)
        self._commit(previous)

    def remove_item(self, key: str) -> None:
        if key in self._data:
            previous = dict(self._data)
            del self._data[key]
            self._commit(previous)

    def keys(self) -> list[str]:
        return list(self._data)

    def clear(self) -> None:
        previous = dict(self._data)
        self._data.clear()
        self._commit(previous)

    def _commit(self, previous: dict[str, str]):
        """Save the store, restoring the previous contents if the write fails."""
        try:
            self._save()
        except StorageError:
            self._data = previous
            raise
