"""
Reorder Engine: nuevo orden total tras un drag-and-drop.

Siempre opera sobre el orden completo (sin filtrar), para que reordenar con un filtro
activo no altere el orden relativo de las notas ocultas.
"""
from typing import List, Optional, TypeVar

from memo_board.domain.notes.schemas import Note

T = TypeVar("T")


def move(items: List[T], from_index: int, to_index: int) -> List[T]:
    """Saca el elemento en `from_index` y lo reinserta en `to_index` (array move)."""
    n = len(items)
    if not (0 <= from_index < n) or not (0 <= to_index < n):
        raise IndexError(f"move fuera de rango: {from_index} -> {to_index} (len={n})")
    out = list(items)
    out.insert(to_index, out.pop(from_index))
    return out


def _index_of(notes: List[Note], note_id: str) -> int:
    for i, n in enumerate(notes):
        if n.id == note_id:
            return i
    return -1


def reorder(notes: List[Note], active_id: str, over_id: Optional[str]) -> List[Note]:
    """Mueve `active_id` a la posición de `over_id`; sin cambios si son iguales o falta alguno."""
    if over_id is None or active_id == over_id:
        return list(notes)
    old_index = _index_of(notes, active_id)
    new_index = _index_of(notes, over_id)
    if old_index < 0 or new_index < 0:
        return list(notes)
    return move(notes, old_index, new_index)
