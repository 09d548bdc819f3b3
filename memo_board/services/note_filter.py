"""Filter Engine: subconjunto visible de notas según criterios opcionales."""
from typing import List, Optional

from memo_board.domain.notes.schemas import FilterCriteria, Note, calendar_day


def matches(note: Note, criteria: FilterCriteria) -> bool:
    if criteria.category is not None and note.category != criteria.category:
        return False
    if criteria.priority is not None and note.priority != criteria.priority:
        return False
    if criteria.date is not None and calendar_day(note.created_at) != criteria.date:
        return False
    return True


def visible(notes: List[Note], criteria: Optional[FilterCriteria] = None) -> List[Note]:
    """Conserva el orden de entrada; sin criterios devuelve todas las notas."""
    if criteria is None or criteria.is_empty:
        return list(notes)
    return [n for n in notes if matches(n, criteria)]
