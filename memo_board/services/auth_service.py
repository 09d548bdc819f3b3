"""
Lógica de autenticación: registro y login local.

Un único esquema de hashing (argon2) vive aquí; los repositorios solo guardan el hash.
"""
import logging
from typing import Any, Dict

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type
from pymongo.errors import DuplicateKeyError

from memo_board.api.schemas.auth import UserSummary
from memo_board.core.exceptions import DuplicateEmail, InvalidCredentials, NotFound
from memo_board.repositories import user_repo as repo
from memo_board.services.token_service import create_access_token

_log = logging.getLogger("memo_board.auth")

ph = PasswordHasher(time_cost=2, memory_cost=51200, parallelism=2, hash_len=32, salt_len=16, type=Type.ID)


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def to_summary(user: Dict[str, Any]) -> UserSummary:
    """Proyección pública del documento `user` (sin password_hash)."""
    return UserSummary(
        id=str(user["_id"]),
        username=user.get("username") or "",
        email=user["email"],
        created_at=user.get("created_at") or "",
    )


def register_user(*, username: str, email: str, password: str) -> UserSummary:
    """
    Registra un usuario local.

    - Falla con DuplicateEmail si el email ya existe (o si el índice único lo rechaza).
    - Guarda solo el hash argon2 de la contraseña.
    """
    email = email.lower()
    if repo.find_user_by_email(email):
        raise DuplicateEmail()

    try:
        inserted_id = repo.insert_user(
            {"username": username, "email": email, "password_hash": hash_password(password)}
        )
    except DuplicateKeyError as e:
        # Carrera entre el find y el insert: el índice uniq_email manda
        raise DuplicateEmail() from e

    _log.info("usuario registrado id=%s", inserted_id)
    return to_summary(repo.get_user_by_id(inserted_id))


def login_local(*, email: str, password: str) -> str:
    """Verifica credenciales y devuelve un access token firmado."""
    u = repo.find_user_by_email(email.lower())
    if not u:
        raise NotFound()
    if not u.get("password_hash") or not verify_password(password, u["password_hash"]):
        raise InvalidCredentials()
    return create_access_token(user_id=str(u["_id"]))
