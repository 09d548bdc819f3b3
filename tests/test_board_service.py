import json

from memo_board.core.exceptions import StorageError
from memo_board.infrastructure.storage.local_storage import LocalStorage, MemoryStorage
from memo_board.services.board_service import NoteBoard


class FailingWrites(MemoryStorage):
    def set_item(self, key, value):
        raise StorageError("disk full")


def _stored_ids(storage, key="memoNotes"):
    return [n["id"] for n in json.loads(storage.get_item(key))]


def test_open_seeds_and_add_is_written_through(storage):
    board = NoteBoard(storage).open()
    assert board.count_label == "5 notes"

    note = board.add_note("Groceries", "- milk", priority="high", category="Tasks")
    assert note is not None
    assert board.notes[0] == note
    assert _stored_ids(storage)[0] == note.id
    assert board.drain_notices()[-1].message == "Note added successfully"

    reopened = NoteBoard(LocalStorage(storage.path)).open()
    assert reopened.notes == board.notes


def test_add_blank_title_is_a_notice_not_a_note(memory_storage):
    board = NoteBoard(memory_storage).open()
    assert board.add_note("  ") is None
    assert len(board.notes) == 5
    assert memory_storage.get_item("memoNotes") is None
    notice = board.drain_notices()[0]
    assert notice.level == "error"


def test_edit_and_delete(memory_storage):
    board = NoteBoard(memory_storage).open()
    edited = board.find("2").model_copy(update={"title": "Ideas v2", "priority": "low"})
    assert board.edit_note(edited)
    assert board.find("2").title == "Ideas v2"

    assert not board.edit_note(edited.model_copy(update={"id": "nope"}))
    assert not board.edit_note(edited.model_copy(update={"title": ""}))
    assert board.find("2").title == "Ideas v2"

    assert board.delete_note("2")
    assert not board.delete_note("2")
    assert "2" not in _stored_ids(memory_storage)
    messages = [n.message for n in board.drain_notices()]
    assert "Note updated" in messages and "Note deleted" in messages


def test_drag_under_filter_uses_full_order(memory_storage):
    board = NoteBoard(memory_storage).open()
    board.set_filters(priority="low")
    assert [n.id for n in board.visible_notes] == ["3", "4", "5"]

    assert board.drag_end("5", "3")
    assert [n.id for n in board.notes] == ["1", "2", "5", "3", "4"]
    assert _stored_ids(memory_storage) == ["1", "2", "5", "3", "4"]
    assert not board.drag_end("5", "5")
    assert not board.drag_end("5", None)


def test_filters_view_and_count_label(memory_storage):
    board = NoteBoard(memory_storage).open()
    board.set_filters(category="Work")
    assert board.count_label == "1 note"
    board.set_filters(category="Ideas")
    assert board.count_label == "No notes found"
    board.clear_filters()
    assert board.count_label == "5 notes"

    board.set_view("list")
    assert board.view == "list"


def test_corrupt_storage_falls_back_to_memory(storage):
    storage.path.write_text("{broken", encoding="utf-8")
    board = NoteBoard(storage).open()

    assert board.degraded
    assert len(board.notes) == 5
    assert board.drain_notices()[0].level == "warning"

    board.add_note("still works")
    assert board.notes[0].title == "still works"
    assert storage.path.read_text(encoding="utf-8") == "{broken"


def test_write_failure_keeps_session_state():
    board = NoteBoard(FailingWrites()).open()
    note = board.add_note("kept in memory")
    assert board.notes[0] == note
    assert board.degraded
    levels = [n.level for n in board.drain_notices()]
    assert "warning" in levels and "success" in levels

    board.delete_note(note.id)
    assert board.find(note.id) is None


def test_key_scopes_boards(memory_storage):
    a = NoteBoard(memory_storage, key="memoNotes:alice").open()
    a.add_note("alice only")
    b = NoteBoard(memory_storage, key="memoNotes:bob").open()
    assert all(n.title != "alice only" for n in b.notes)


def test_invalid_filters_keep_previous_and_notify(memory_storage):
    board = NoteBoard(memory_storage).open()
    assert board.set_filters(category="Work") is not None

    assert board.set_filters(priority="urgent") is None
    assert board.set_filters(date="05/05/2023") is None
    assert board.filters.category == "Work"
    assert board.count_label == "1 note"

    notices = board.drain_notices()
    assert [n.level for n in notices] == ["error", "error"]
    assert "priority" in notices[0].message
    assert "date" in notices[1].message


def test_drag_write_failure_is_logged_and_kept_in_memory(caplog):
    board = NoteBoard(FailingWrites()).open()
    with caplog.at_level("WARNING", logger="memo_board.board"):
        assert board.drag_end("5", "1")

    assert [n.id for n in board.notes] == ["5", "1", "2", "3", "4"]
    assert board.degraded
    assert "disk full" in caplog.text
    assert board.drain_notices()[0].level == "warning"

    assert board.drag_end("1", "4")
    assert _stored_ids(board.storage) == ["5", "2", "3", "4", "1"]
