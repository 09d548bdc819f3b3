"""
Logging de Memo Board: formato único para la API, el board local y Uvicorn.

Los loggers propios cuelgan de `memo_board` (startup, request, errors, mongo, auth,
board, storage), así que `LOG_LEVEL` los gobierna a todos.
"""
import logging

FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(level: str = "INFO") -> None:
    lvl = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logging.basicConfig(level=lvl, format=FORMAT)
    for name in ("memo_board", "uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(lvl)
