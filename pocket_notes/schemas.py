"""Persisted record shape for notes."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .models import Note
from .tags import normalize_tags


class NoteRecord(BaseModel):
    """One note as stored in the persistence slot."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    body: str
    tags: list[str]
    created_at: datetime = Field(alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # Instants written without an offset are UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_note(cls, note: Note) -> "NoteRecord":
        return cls(
            id=note.id,
            title=note.title,
            body=note.body,
            tags=list(note.tags),
            created_at=note.created_at,
        )

    def to_note(self) -> Note:
        return Note(
            id=self.id,
            title=self.title,
            body=self.body,
            tags=tuple(normalize_tags(self.tags)),
            created_at=self.created_at,
        )


NoteRecordList = TypeAdapter(list[NoteRecord])
