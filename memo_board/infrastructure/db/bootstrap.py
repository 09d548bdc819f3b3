"""
Bootstrap de la base Mongo: define y aplica el validador (JSON Schema) e índices de `user`.
Se ejecuta al inicio de la app para asegurar la colección mínima y consistencia.
No tumba la app si algo falla; deja warnings en casos no críticos.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo.errors import PyMongoError
from memo_board.infrastructure.db.mongo import get_db
from memo_board.repositories.user_repo import COLLECTION as USER_COLL

_log = logging.getLogger("memo_board.mongo.bootstrap")


USER_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["username", "email", "password_hash", "created_at", "updated_at"],
    "properties": {
        "username": {"bsonType": "string", "minLength": 1},
        "email": {"bsonType": "string", "minLength": 3, "description": "lowercase"},
        "password_hash": {"bsonType": "string"},
        "created_at": {"bsonType": "string"},
        "updated_at": {"bsonType": "string"},
    },
}


def _collmod_or_create(name: str, validator: Dict[str, Any] | None) -> None:
    db = get_db()
    try:
        if name not in db.list_collection_names():
            if validator:
                db.create_collection(name, validator={"$jsonSchema": validator})
            else:
                db.create_collection(name)
        elif validator:
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
    except PyMongoError as e:
        # No aborta el arranque; solo deja sin validator estricto.
        _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        ix = dict(ix)
        keys = ix.pop("keys")
        try:
            coll.create_index(keys, **ix)
        except PyMongoError as e:
            # Ignora fallas de índice (e.g., datos no únicos previos)
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


def ensure_collections() -> None:
    """
    Garantiza la colección `user`, su validador y el índice único por email.
    """
    _collmod_or_create(USER_COLL, USER_VALIDATOR)
    _ensure_indexes(
        USER_COLL,
        [
            {"keys": [("email", 1)], "unique": True, "name": "uniq_email"},
        ],
    )
