"""Data models for Pocket Notes."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from .tags import normalize_tags


@dataclass(frozen=True)
class Note:
    """A single user-authored note. Never mutated after creation."""

    id: str
    title: str
    body: str
    created_at: datetime
    tags: tuple[str, ...] = ()

    def __post_init__(self):
        # Naive instants are UTC so notes always compare by creation time
        if self.created_at.tzinfo is None:
            object.__setattr__(self, "created_at", self.created_at.replace(tzinfo=timezone.utc))

    @property
    def display_timestamp(self) -> str:
        """Creation time as a short human-readable string."""
        return format_timestamp(self.created_at)

    @property
    def search_text(self) -> tuple[str, str, str]:
        """Lowercased fields matched by free-text search."""
        return (
            self.title.lower(),
            self.body.lower(),
            " ".join(self.tags).lower(),
        )


@dataclass
class FilterState:
    """
    Current search text and conjunctive tag filter.

    Owned by the front end; consumed by the query functions. Any
    combination of values is valid.
    """

    search_term: str = ""
    active_tags: list[str] = field(default_factory=list)

    @property
    def has_active_filters(self) -> bool:
        """True when a search term or at least one tag is set."""
        return bool(self.active_tags) or bool(self.search_term.strip())

    def toggle_tag(self, tag: str) -> None:
        """Activate the tag, or deactivate it if already active."""
        if tag in self.active_tags:
            self.active_tags = [t for t in self.active_tags if t != tag]
        else:
            self.active_tags = [*self.active_tags, tag]

    def activate_tag(self, tag: str) -> None:
        """Activate the tag; no-op if already active."""
        if tag not in self.active_tags:
            self.active_tags = [*self.active_tags, tag]

    def set_tags(self, tags) -> None:
        """Replace the active tags with the normalized form of ``tags``."""
        self.active_tags = normalize_tags(tags)

    def clear(self) -> None:
        """Reset search term and tag filter."""
        self.search_term = ""
        self.active_tags = []


def can_submit(title: str, body: str) -> bool:
    """Check the note precondition: title or body must be non-empty."""
    return bool((title or "").strip()) or bool((body or "").strip())


def format_timestamp(value: datetime) -> str:
    """
    Format an instant as a medium date with a short time, in local time.

    Example: ``Oct 18, 2026, 9:05 AM``
    """
    local = value.astimezone() if value.tzinfo else value
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local:%b} {local.day}, {local.year}, {hour}:{local.minute:02d} {meridiem}"
