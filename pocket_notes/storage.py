"""Key-value persistence for the note collection."""

import logging
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from .models import Note
from .schemas import NoteRecord, NoteRecordList

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised by a backend when a slot cannot be read or written."""


class KeyValueStore(ABC):
    """A set of named slots, each holding one string value."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the slot content, or None if the slot does not exist."""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Replace the slot content. Raises StorageError on failure."""


class MemoryStore(KeyValueStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._slots: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._slots.get(key)

    def write(self, key: str, value: str) -> None:
        self._slots[key] = value


class JsonFileStore(KeyValueStore):
    """
    One JSON file per slot inside a data directory.

    Writes go through a temporary file and ``os.replace`` so a slot is
    always either the old or the new content, never a partial write.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """Map a slot name to a safe file name ("pocket-notes:v1" -> "pocket-notes_v1.json")."""
        safe = re.sub(r"[^A-Za-z0-9._-]", "_", key)
        return self.directory / f"{safe}.json"

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

    def write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp_name = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.directory,
                prefix=f".{path.stem}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except (OSError, UnicodeEncodeError) as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Cannot write {path}: {e}") from e


class NotePersistence:
    """
    Loads and saves the note collection from a key-value backend.

    Durability problems never propagate: a missing or corrupt slot loads
    as an empty collection and a failed save is logged and reported
    through the return value.
    """

    def __init__(self, backend: KeyValueStore):
        self.backend = backend

    def load(self, key: str) -> list[Note]:
        """Read the collection stored under ``key``."""
        try:
            raw = self.backend.read(key)
        except StorageError as e:
            logger.warning(f"Could not read notes from '{key}', starting empty: {e}")
            return []

        if raw is None:
            logger.debug(f"No stored notes under '{key}'")
            return []

        try:
            records = NoteRecordList.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Discarding malformed notes in '{key}' ({e.error_count()} errors)"
            )
            return []

        notes = [record.to_note() for record in records]
        logger.info(f"Loaded {len(notes)} notes from '{key}'")
        return notes

    def save(self, key: str, notes: Iterable[Note]) -> bool:
        """
        Replace the slot with the full collection.

        Returns:
            True if the write succeeded, False if it failed
        """
        records = [NoteRecord.from_note(note) for note in notes]

        try:
            payload = NoteRecordList.dump_json(records, by_alias=True).decode("utf-8")
            self.backend.write(key, payload)
        except (StorageError, PydanticSerializationError) as e:
            logger.warning(f"Could not save {len(records)} notes to '{key}': {e}")
            return False

        logger.debug(f"Saved {len(records)} notes to '{key}'")
        return True
