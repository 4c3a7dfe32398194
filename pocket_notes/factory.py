"""Construction of new notes from editor input."""

import itertools
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Sequence

from .models import Note
from .tags import normalize_tags

logger = logging.getLogger(__name__)

_fallback_counter = itertools.count()


def generate_id() -> str:
    """
    Generate a unique note ID.

    Uses a random UUID4 from the OS entropy source. Platforms without one
    get a clock-derived token, which is only unique within this process.
    """
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        logger.warning("No strong random source available, using time-derived note ID")
        return f"{time.time_ns()}-{next(_fallback_counter)}"


def create_note(
    title: str,
    body: str,
    raw_tags: str | Sequence[str] | None = None,
) -> Note:
    """
    Build a new note.

    The caller is expected to have checked ``can_submit`` first; the
    factory itself always succeeds.

    Args:
        title: Note title, trimmed
        body: Note text, trimmed
        raw_tags: Comma separated string or list of tags

    Returns:
        A new Note stamped with the current UTC time
    """
    return Note(
        id=generate_id(),
        title=(title or "").strip(),
        body=(body or "").strip(),
        tags=tuple(normalize_tags(raw_tags)),
        created_at=datetime.now(timezone.utc),
    )
