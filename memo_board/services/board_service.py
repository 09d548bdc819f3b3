"""
Controlador del board: único dueño del estado (notas, filtros, vista).

Cada mutación aplica un reductor puro del Note Store y persiste antes de la siguiente
lectura. Los errores de usuario y de almacenamiento se exponen como avisos (`notices`),
nunca tumban la sesión.
"""
import logging
from dataclasses import dataclass
from typing import List, Literal, Optional

from pydantic import ValidationError as PydanticValidationError

from memo_board.core.config import settings
from memo_board.core.exceptions import StorageError, ValidationError
from memo_board.domain.notes.schemas import FilterCriteria, Note, ViewMode
from memo_board.infrastructure.storage.local_storage import MemoryStorage
from memo_board.services import note_store
from memo_board.services.note_filter import visible
from memo_board.services.note_order import reorder

_log = logging.getLogger("memo_board.board")


@dataclass(frozen=True)
class Notice:
    level: Literal["success", "error", "warning"]
    message: str


class NoteBoard:
    def __init__(self, storage, key: Optional[str] = None):
        self.storage = storage
        self.key = key or settings.board_storage_key
        self.notes: List[Note] = []
        self.filters = FilterCriteria()
        self.view: ViewMode = "grid"
        self.notices: List[Notice] = []
        self.degraded = False

    # --- Sesión ---

    def open(self) -> "NoteBoard":
        """Carga una vez por sesión; si el almacenamiento falla, sigue en memoria."""
        try:
            self.notes = note_store.load(self.storage, self.key)
        except StorageError as e:
            _log.warning("board en memoria: %s", e)
            self.notes = note_store.seed_notes()
            self._degrade(f"Could not load saved notes: {e}")
        return self

    def _degrade(self, message: str) -> None:
        self.degraded = True
        self.storage = MemoryStorage()
        self._notify("warning", message)

    def _notify(self, level, message: str) -> None:
        self.notices.append(Notice(level, message))

    def _save(self, notes: List[Note]) -> None:
        self.notes = notes
        try:
            note_store.persist(self.storage, notes, self.key)
        except StorageError as e:
            _log.warning("no se pudo persistir: %s", e)
            self._degrade(f"Changes kept for this session only: {e}")

    def _commit(self, notes: List[Note], message: str) -> None:
        self._save(notes)
        self._notify("success", message)

    def drain_notices(self) -> List[Notice]:
        out, self.notices = self.notices, []
        return out

    # --- Mutaciones ---

    def add_note(
        self,
        title: str,
        content: str = "",
        priority: str = "medium",
        category: str = "Personal",
    ) -> Optional[Note]:
        try:
            note = note_store.new_note(
                title, content, priority, category, existing_ids=(n.id for n in self.notes)
            )
            notes = note_store.add(self.notes, note)
        except ValidationError as e:
            self._notify("error", f"Note not added: {e}")
            return None
        self._commit(notes, "Note added successfully")
        return note

    def edit_note(self, note: Note) -> bool:
        if self.find(note.id) is None:
            return False
        try:
            notes = note_store.update(self.notes, note)
        except ValidationError as e:
            self._notify("error", f"Note not updated: {e}")
            return False
        self._commit(notes, "Note updated")
        return True

    def delete_note(self, note_id: str) -> bool:
        if self.find(note_id) is None:
            return False
        self._commit(note_store.remove(self.notes, note_id), "Note deleted")
        return True

    def drag_end(self, active_id: str, over_id: Optional[str]) -> bool:
        notes = reorder(self.notes, active_id, over_id)
        if [n.id for n in notes] == [n.id for n in self.notes]:
            return False
        self._save(notes)
        return True

    # --- Filtros y vista ---

    def set_filters(self, **criteria) -> Optional[FilterCriteria]:
        """Aplica criterios nuevos; si son inválidos deja los anteriores y avisa."""
        try:
            self.filters = FilterCriteria(**criteria)
        except PydanticValidationError as e:
            msgs = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
            self._notify("error", f"Invalid filter: {msgs}")
            return None
        return self.filters

    def clear_filters(self) -> None:
        self.filters = FilterCriteria()

    def set_view(self, mode: ViewMode) -> None:
        if mode not in ("grid", "list"):
            raise ValueError(f"vista desconocida: {mode}")
        self.view = mode

    # --- Lecturas ---

    def find(self, note_id: str) -> Optional[Note]:
        return next((n for n in self.notes if n.id == note_id), None)

    @property
    def visible_notes(self) -> List[Note]:
        return visible(self.notes, self.filters)

    @property
    def count_label(self) -> str:
        n = len(self.visible_notes)
        if n == 0:
            return "No notes found"
        if n == 1:
            return "1 note"
        return f"{n} notes"
