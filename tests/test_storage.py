import json
from datetime import datetime, timedelta, timezone

from pocket_notes.factory import create_note
from pocket_notes.models import Note
from pocket_notes.storage import JsonFileStore, MemoryStore, NotePersistence, StorageError

KEY = "pocket-notes:v1"


def _sample_notes() -> list[Note]:
    base = datetime(2026, 10, 18, 8, 0, tzinfo=timezone.utc)
    return [
        Note(id="b", title="Second", body="", tags=("home",), created_at=base + timedelta(minutes=5)),
        Note(id="a", title="", body="First body", tags=("work", "ideas"), created_at=base),
    ]


def test_round_trip_preserves_content_and_order() -> None:
    persistence = NotePersistence(MemoryStore())
    notes = _sample_notes() + [create_note("fresh", "note", "x, y")]

    assert persistence.save(KEY, notes)
    assert persistence.load(KEY) == notes


def test_saved_payload_uses_wire_field_names() -> None:
    backend = MemoryStore()
    NotePersistence(backend).save(KEY, _sample_notes())

    data = json.loads(backend.read(KEY))
    assert isinstance(data, list)
    assert set(data[0]) == {"id", "title", "body", "tags", "createdAt"}
    assert data[1]["tags"] == ["work", "ideas"]
    assert datetime.fromisoformat(data[0]["createdAt"].replace("Z", "+00:00")).minute == 5


def test_missing_slot_loads_empty() -> None:
    assert NotePersistence(MemoryStore()).load(KEY) == []


def test_single_object_instead_of_list_loads_empty() -> None:
    record = {"id": "a", "title": "t", "body": "", "tags": [], "createdAt": "2026-10-18T08:00:00Z"}
    backend = MemoryStore({KEY: json.dumps(record)})
    assert NotePersistence(backend).load(KEY) == []


def test_undecodable_and_wrong_shape_load_empty() -> None:
    payloads = [
        "{not json",
        "null",
        json.dumps([{"id": "a", "title": "t"}]),
        json.dumps([{"id": 1, "title": "t", "body": "", "tags": "work", "createdAt": "yesterday"}]),
    ]
    for payload in payloads:
        assert NotePersistence(MemoryStore({KEY: payload})).load(KEY) == []


def test_timestamp_without_offset_is_utc() -> None:
    record = {"id": "a", "title": "t", "body": "", "tags": [], "createdAt": "2026-10-18T08:00:00"}
    notes = NotePersistence(MemoryStore({KEY: json.dumps([record])})).load(KEY)
    assert notes[0].created_at == datetime(2026, 10, 18, 8, 0, tzinfo=timezone.utc)


class FailingStore(MemoryStore):
    def write(self, key: str, value: str) -> None:
        raise StorageError("quota exceeded")


def test_failed_save_reports_false_without_raising() -> None:
    assert NotePersistence(FailingStore()).save(KEY, _sample_notes()) is False


def test_json_file_store_round_trip(tmp_path) -> None:
    notes = _sample_notes()
    assert NotePersistence(JsonFileStore(tmp_path)).save(KEY, notes)

    # A fresh adapter on the same directory sees the whole write
    assert NotePersistence(JsonFileStore(tmp_path)).load(KEY) == notes
    assert (tmp_path / "pocket-notes_v1.json").exists()
    assert not list(tmp_path.glob("*.tmp"))


def test_json_file_store_replaces_content(tmp_path) -> None:
    persistence = NotePersistence(JsonFileStore(tmp_path))
    persistence.save(KEY, _sample_notes())
    persistence.save(KEY, [])
    assert persistence.load(KEY) == []


def test_json_file_store_corrupt_file_loads_empty(tmp_path) -> None:
    store = JsonFileStore(tmp_path)
    store.path_for(KEY).write_text("[{\"id\": ", encoding="utf-8")
    assert NotePersistence(store).load(KEY) == []


def test_json_file_store_unwritable_directory(tmp_path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    persistence = NotePersistence(JsonFileStore(blocker))
    assert persistence.save(KEY, _sample_notes()) is False
    assert persistence.load(KEY) == []


def test_unencodable_text_fails_save_without_raising() -> None:
    # Lone surrogate, as produced by undecodable command-line bytes
    note = create_note("caf\udce9", "", None)
    backend = MemoryStore()

    assert NotePersistence(backend).save(KEY, [note]) is False
    assert backend.read(KEY) is None


def test_store_survives_unencodable_note() -> None:
    from pocket_notes.store import NoteStore

    store = NoteStore(NotePersistence(MemoryStore()), KEY)
    note = create_note("caf\udce9", "", None)
    store.add(note)

    assert store.all() == (note,)
    assert store.last_save_ok is False


def test_json_file_store_permission_error_loads_empty(tmp_path, monkeypatch) -> None:
    def denied(*args, **kwargs):
        raise PermissionError("search permission denied")

    monkeypatch.setattr("pocket_notes.storage.open", denied, raising=False)

    assert NotePersistence(JsonFileStore(tmp_path)).load(KEY) == []


def test_loaded_tags_are_renormalized() -> None:
    record = {"id": "a", "title": "t", "body": "", "tags": ["Work", " work", ""], "createdAt": "2026-10-18T08:00:00Z"}
    notes = NotePersistence(MemoryStore({KEY: json.dumps([record])})).load(KEY)
    assert notes[0].tags == ("work",)
