"""
Note Store: colección ordenada de notas guardada en el almacenamiento local.

- `load` / `persist` leen y reescriben la clave fija (por defecto `memoNotes`).
- `add` / `remove` / `update` son reductores puros: no mutan la lista recibida.
"""
import json
import time
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from memo_board.core.config import settings
from memo_board.core.exceptions import StorageError, ValidationError
from memo_board.domain.notes.schemas import Note

SEED_NOTES: tuple[dict, ...] = (
    {
        "id": "1",
        "title": "Welcome to Memo Board",
        "content": "This is a sample note. You can create, edit, and organize your notes here!",
        "priority": "medium",
        "category": "Personal",
        "date": "2023-05-15T00:00:00",
    },
    {
        "id": "2",
        "title": "Project Ideas",
        "content": "1. Create a mobile app\n2. Design a new website\n3. Learn a new programming language",
        "priority": "high",
        "category": "Work",
        "date": "2023-05-10T00:00:00",
    },
    {
        "id": "3",
        "title": "Shopping List",
        "content": "- Milk\n- Eggs\n- Bread\n- Fruits",
        "priority": "low",
        "category": "Personal",
        "date": "2023-05-05T00:00:00",
    },
    {
        "id": "4",
        "title": "Shopping List-2",
        "content": "- Milk\n- Eggs\n- Bread\n- Fruits",
        "priority": "low",
        "category": "Personal",
        "date": "2023-05-05T00:00:00",
    },
    {
        "id": "5",
        "title": "Shopping List-3",
        "content": "- Milk\n- Eggs\n- Bread\n- Fruits",
        "priority": "low",
        "category": "Personal",
        "date": "2023-05-05T00:00:00",
    },
)


def seed_notes() -> List[Note]:
    return [Note.model_validate(n) for n in SEED_NOTES]


def _require_title(note: Note) -> None:
    if not note.title or not note.title.strip():
        raise ValidationError("Title is required")


def new_note(
    title: str,
    content: str = "",
    priority: str = "medium",
    category: str = "Personal",
    *,
    existing_ids: Iterable[str] = (),
    now: Optional[datetime] = None,
) -> Note:
    """Construye una nota nueva con id de milisegundos y la hora actual (UTC)."""
    taken = set(existing_ids)
    stamp = int(time.time() * 1000)
    while str(stamp) in taken:
        stamp += 1
    try:
        return Note(
            id=str(stamp),
            title=title,
            content=content or "",
            priority=priority,
            category=category,
            created_at=now or datetime.now(timezone.utc),
        )
    except PydanticValidationError as e:
        raise ValidationError(str(e)) from e


def load(storage, key: Optional[str] = None) -> List[Note]:
    """Lee la secuencia guardada; si la clave no existe devuelve las notas semilla."""
    raw = storage.get_item(key or settings.board_storage_key)
    if raw is None:
        return seed_notes()
    try:
        items = json.loads(raw)
        if not isinstance(items, list):
            raise StorageError("El valor guardado no es una lista de notas")
        return [Note.model_validate(i) for i in items]
    except (ValueError, PydanticValidationError) as e:
        raise StorageError(f"Notas guardadas inválidas: {e}") from e


def persist(storage, notes: List[Note], key: Optional[str] = None) -> None:
    """Sobrescribe la secuencia guardada con `notes`."""
    payload = json.dumps([n.to_storage() for n in notes], ensure_ascii=False)
    storage.set_item(key or settings.board_storage_key, payload)


def add(notes: List[Note], note: Note) -> List[Note]:
    _require_title(note)
    if any(n.id == note.id for n in notes):
        raise ValidationError(f"Duplicate note id: {note.id}")
    return [note, *notes]


def remove(notes: List[Note], note_id: str) -> List[Note]:
    return [n for n in notes if n.id != note_id]


def update(notes: List[Note], note: Note) -> List[Note]:
    _require_title(note)
    return [note if n.id == note.id else n for n in notes]
