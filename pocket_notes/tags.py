"""Tag parsing and tag suggestions for the note editor."""

from typing import Iterable, Sequence

from .config import config


def normalize_tags(source: str | Sequence[str] | None) -> list[str]:
    """
    Turn free-form tag input into canonical tags.

    Accepts either a comma separated string ("Work, ideas") or an already
    split sequence. Every token is trimmed and lowercased, empty tokens are
    dropped and duplicates collapse onto their first occurrence.

    Args:
        source: Raw tag input. ``None`` or empty input gives no tags.

    Returns:
        Ordered list of unique tags
    """
    if not source:
        return []

    items = source.split(",") if isinstance(source, str) else source

    seen: set[str] = set()
    tags: list[str] = []
    for item in items:
        tag = str(item if item is not None else "").strip().lower()
        if tag and tag not in seen:
            seen.add(tag)
            tags.append(tag)
    return tags


def suggest_tags(all_tags: Iterable[str], limit: int | None = None) -> list[str]:
    """Return the first ``limit`` tags of the tag universe as quick picks."""
    if limit is None:
        limit = config.suggestion_limit
    return list(all_tags)[:limit]


def toggle_tag_input(tag_input: str, tag: str) -> str:
    """
    Add or remove a single tag from the editor's tag field.

    The field is normalized first, so the result is always a clean
    ", " joined list.
    """
    tags = normalize_tags(tag_input)
    target = tag.strip().lower()

    if target in tags:
        tags.remove(target)
    elif target:
        tags.append(target)

    return ", ".join(tags)
