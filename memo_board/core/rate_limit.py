"""
Límite de intentos de login por IP, en memoria del proceso.

`allow((ip, "/auth/login"), limit=settings.login_rate_per_min)` registra el intento y
dice si entra en la ventana deslizante. Las claves sin intentos vigentes se purgan
para que el bucket no crezca con cada IP vista.
"""
from time import time
from typing import Dict, Tuple

BUCKET: Dict[Tuple[str, str], list[float]] = {}


def _sweep(now: float, window_seconds: int) -> None:
    stale = [k for k, hits in BUCKET.items() if not hits or now - hits[-1] >= window_seconds]
    for k in stale:
        del BUCKET[k]


def allow(key: Tuple[str, str], limit: int = 5, window_seconds: int = 60) -> bool:
    """True si el intento `key=(ip, ruta)` cabe en `limit` por `window_seconds`."""
    now = time()
    _sweep(now, window_seconds)
    hits = [t for t in BUCKET.get(key, []) if now - t < window_seconds]
    if len(hits) >= limit:
        BUCKET[key] = hits
        return False
    hits.append(now)
    BUCKET[key] = hits
    return True


def reset() -> None:
    BUCKET.clear()
