"""
Creación y verificación de JWTs de acceso (bearer, 7 días por defecto).
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt as pyjwt

from memo_board.core.config import settings
from memo_board.core.exceptions import InvalidToken


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _secret() -> str:
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET no configurado; no se pueden firmar ni verificar tokens")
    return settings.jwt_secret


def create_access_token(*, user_id: str) -> str:
    """
    Genera un JWT firmado válido por `token_expire_days`.
    Claims: sub(user_id), iat, exp. El id es la única afirmación de identidad.
    """
    now = _now_utc()
    exp = now + timedelta(days=settings.token_expire_days)
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return pyjwt.encode(payload, _secret(), algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> Dict[str, Any]:
    """
    Decodifica y valida firma/expiración. Devuelve payload.
    """
    try:
        payload = pyjwt.decode(token, key=_secret(), algorithms=[settings.jwt_algorithm])
    except pyjwt.ExpiredSignatureError as e:
        raise InvalidToken("Token expired") from e
    except pyjwt.InvalidTokenError as e:
        raise InvalidToken() from e
    if not payload.get("sub"):
        raise InvalidToken()
    return payload
