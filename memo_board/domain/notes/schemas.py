"""
Esquemas Pydantic del board de notas (estado local del cliente).

Reglas clave:
- `title` no puede quedar vacío (tras quitar espacios).
- `priority` en {"low", "medium", "high"}; `category` en {"Work", "Personal", "Ideas", "Tasks"}.
- `created_at` se serializa como `date` (ISO-8601), igual que el formato guardado por el board.
"""
import datetime as dt
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

Priority = Literal["low", "medium", "high"]
Category = Literal["Work", "Personal", "Ideas", "Tasks"]
ViewMode = Literal["grid", "list"]

PRIORITIES: tuple[str, ...] = ("low", "medium", "high")
CATEGORIES: tuple[str, ...] = ("Work", "Personal", "Ideas", "Tasks")


def calendar_day(moment: dt.datetime) -> dt.date:
    """Día calendario en UTC; un datetime naive se asume ya en UTC."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(dt.timezone.utc)
    return moment.date()


class Note(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    title: str
    content: str = ""
    priority: Priority = "medium"
    category: Category = "Personal"
    created_at: dt.datetime = Field(
        validation_alias=AliasChoices("date", "createdAt", "created_at"),
        serialization_alias="date",
    )

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("title vacío")
        return v

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class FilterCriteria(BaseModel):
    """Criterios opcionales; None o "" significan "todos"."""
    model_config = ConfigDict(frozen=True)

    category: Optional[Category] = None
    priority: Optional[Priority] = None
    date: Optional[dt.date] = None

    @field_validator("category", "priority", "date", mode="before")
    @classmethod
    def _empty_is_unset(cls, v):
        if v == "":
            return None
        if isinstance(v, dt.datetime):
            return calendar_day(v)
        return v

    @property
    def is_empty(self) -> bool:
        return self.category is None and self.priority is None and self.date is None
