"""Almacenamiento key-value local para el cache de datasets.

Interfaz mínima get / set / remove por clave:
- MemoryStore: dict en memoria (tests, sesión de Streamlit)
- JsonFileStore: un archivo JSON en disco (persistencia entre sesiones)

Los errores de lectura se propagan; el servicio de cache decide tratarlos
como "sin cache". Escribir o borrar sobre un archivo corrupto lo reemplaza.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore:
    """Todas las claves en un único archivo JSON {clave: valor}."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        if not isinstance(data, dict):
            raise ValueError(f"Archivo de cache inválido: {self.path}")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self.path)
        logger.debug(f"Cache escrito en {self.path}")

    def _read_for_write(self) -> Dict[str, str]:
        # un archivo corrupto se reescribe desde cero
        try:
            return self._read_all()
        except ValueError as e:
            logger.warning(f"Cache corrupto en {self.path}, se reemplaza: {e}")
            return {}

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_for_write()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        try:
            data = self._read_all()
        except ValueError as e:
            logger.warning(f"Cache corrupto en {self.path}, se vacía: {e}")
            self._write_all({})
            return
        if key in data:
            del data[key]
            self._write_all(data)
