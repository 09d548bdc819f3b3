"""
Repositorio para la colección `user` (credenciales).
"""
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId

from memo_board.infrastructure.db.mongo import get_db

COLLECTION = "user"


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def find_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    """Busca usuario por email (email en minúsculas)."""
    return get_db()[COLLECTION].find_one({"email": str(email).lower()})


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    """Obtiene usuario por id (str); None si el id no es un ObjectId válido."""
    try:
        oid = ObjectId(user_id)
    except (InvalidId, TypeError):
        return None
    return get_db()[COLLECTION].find_one({"_id": oid})


def insert_user(doc: Dict[str, Any]) -> str:
    """
    Inserta un usuario y retorna el string del inserted_id.
    - Normaliza `email` a minúsculas.
    - Sella `created_at` y `updated_at` en ISO-8601 UTC.
    """
    data = dict(doc)
    if data.get("email"):
        data["email"] = str(data["email"]).lower()

    now = _now_iso()
    data.setdefault("created_at", now)
    data["updated_at"] = now

    res = get_db()[COLLECTION].insert_one(data)
    return str(res.inserted_id)
