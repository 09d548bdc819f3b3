"""Almacenamiento local clave/valor (equivalente a `localStorage` del navegador).

Un único archivo JSON con `{clave: valor_serializado}`. Cada escritura reescribe el
archivo completo (write-through, sin caché) vía archivo temporal + `os.replace`.
Cualquier fallo de E/S o JSON se reporta como `StorageError`.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from memo_board.core.exceptions import StorageError

_log = logging.getLogger("memo_board.storage")


class LocalStorage:
    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as e:
            raise StorageError(f"No se pudo leer {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Formato inválido en {self.path}")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".storage-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False)
                os.replace(tmp, self.path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"No se pudo escribir {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if value is None else str(value)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
        _log.debug("set_item key=%s bytes=%s", key, len(value))

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)


class MemoryStorage:
    """Misma interfaz que LocalStorage, solo en memoria (fallback de sesión y tests)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)
