"""In-memory note collection backed by a persistence slot."""

import logging
from typing import Optional

from .config import config
from .models import Note
from .storage import NotePersistence

logger = logging.getLogger(__name__)


class NoteStore:
    """
    Authoritative collection of notes, newest first.

    Every mutation is followed by a synchronous save. If a save fails the
    in-memory collection stays the source of truth for the session.
    """

    def __init__(self, persistence: NotePersistence, key: str | None = None):
        """
        Initialize the store from persisted data.

        Args:
            persistence: Adapter used to load and save the collection
            key: Slot name. Defaults to the configured storage key.
        """
        self.persistence = persistence
        self.key = key or config.storage_key
        self._notes: list[Note] = persistence.load(self.key)
        self.last_save_ok = True
        logger.info(f"NoteStore initialized with {len(self._notes)} notes")

    def add(self, note: Note) -> None:
        """Prepend a note and persist the collection."""
        self._notes.insert(0, note)
        logger.info(f"Added note {note.id}")
        self._save()

    def remove(self, note_id: str) -> bool:
        """
        Delete a note by ID.

        Unknown IDs are a no-op and do not trigger a save.

        Returns:
            True if a note was removed
        """
        remaining = [n for n in self._notes if n.id != note_id]
        if len(remaining) == len(self._notes):
            logger.debug(f"No note with id {note_id}, nothing to remove")
            return False

        self._notes = remaining
        logger.info(f"Removed note {note_id}")
        self._save()
        return True

    def all(self) -> tuple[Note, ...]:
        """Read-only snapshot of the collection."""
        return tuple(self._notes)

    def get(self, note_id: str) -> Optional[Note]:
        """Get a note by ID."""
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    def __len__(self) -> int:
        return len(self._notes)

    def _save(self) -> None:
        self.last_save_ok = self.persistence.save(self.key, self._notes)
