"""Derived views over the note collection: tag universe and filtered list."""

from typing import Iterable, Sequence

from .models import FilterState, Note


def all_tags(notes: Iterable[Note]) -> list[str]:
    """Every tag in use across the collection, sorted alphabetically."""
    tags: set[str] = set()
    for note in notes:
        tags.update(note.tags)
    return sorted(tags)


def matches_search(note: Note, term: str) -> bool:
    """Substring match of an already lowercased term against title, body or tags."""
    return any(term in field for field in note.search_text)


def filtered_notes(
    notes: Iterable[Note],
    search_term: str = "",
    active_tags: Sequence[str] = (),
) -> list[Note]:
    """
    Notes matching the search text and containing every active tag.

    Results are sorted newest first by creation time. The sort is stable,
    so notes created at the same instant keep their collection order.

    Args:
        notes: The collection, newest inserted first
        search_term: Free text; matched case-insensitively as a substring
        active_tags: Tags a note must all carry

    Returns:
        Matching notes, most recent first
    """
    term = (search_term or "").strip().lower()
    required = set(active_tags)

    result = [
        note for note in notes
        if (not term or matches_search(note, term))
        and required.issubset(note.tags)
    ]
    return sorted(result, key=lambda n: n.created_at, reverse=True)


def apply_filters(notes: Iterable[Note], state: FilterState) -> list[Note]:
    """Run ``filtered_notes`` with the values held by a FilterState."""
    return filtered_notes(notes, state.search_term, state.active_tags)
