"""
Dependencias reutilizables para routers (FastAPI Depends).

- Autenticación: extrae y valida el bearer token, devuelve el usuario actual.
- Mantener esta capa delgada: sin lógica de negocio pesada.
"""
from typing import Any, Dict, Optional
from fastapi import Header

from memo_board.core.exceptions import InvalidToken
from memo_board.repositories import user_repo as repo
from memo_board.services.token_service import verify_access_token


def get_current_user(authorization: Optional[str] = Header(default=None)) -> Dict[str, Any]:
    if not authorization or not authorization.startswith("Bearer "):
        raise InvalidToken("Missing token")
    payload = verify_access_token(authorization.split(" ", 1)[1])

    u = repo.get_user_by_id(payload["sub"])
    if not u:
        raise InvalidToken("User not found")
    return u
