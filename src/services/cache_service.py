"""
Cache del dataset agregado de Precios.
Lectura/escritura "best effort": cualquier falla equivale a no tener cache.
"""

import json
from typing import List, Optional

from src.data.normalizer import CanonicalRecord, FieldNormalizer
from src.storage.cache_store import CacheStore
from src.utils import config
from src.utils.logger import Logger

_logger = Logger(name="gestock.cache")


def records_to_json(records: List[CanonicalRecord]) -> str:
    """Serializa el dataset como lista JSON de registros (forma del CSV)."""
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False, default=str)


def json_to_records(
    json_str: str, normalizer: FieldNormalizer | None = None
) -> List[CanonicalRecord]:
    """
    Reconstruye el dataset desde JSON.

    Raises:
        ValueError: si el payload no es una lista de objetos
    """
    normalizer = normalizer or FieldNormalizer()
    data = json.loads(json_str)
    if not isinstance(data, list) or not all(isinstance(d, dict) for d in data):
        raise ValueError("El cache no contiene una lista de registros")
    return [normalizer.from_cache(d) for d in data]


def load_cached_dataset(
    store: CacheStore,
    key: str = config.STORAGE_KEY,
    normalizer: FieldNormalizer | None = None,
) -> Optional[List[CanonicalRecord]]:
    """
    Lee el dataset cacheado.

    Returns:
        Lista de registros, o None si no hay cache o está corrupto
    """
    try:
        raw = store.get(key)
        if not raw:
            return None
        return json_to_records(raw, normalizer)
    except Exception as e:
        _logger.warn(f"Cache '{key}' ignorado: {e}")
        return None


def save_dataset_cache(
    store: CacheStore, records: List[CanonicalRecord], key: str = config.STORAGE_KEY
) -> bool:
    try:
        store.set(key, records_to_json(records))
        return True
    except Exception as e:
        _logger.warn(f"No se pudo guardar el cache '{key}': {e}")
        return False


def clear_dataset_cache(store: CacheStore, key: str = config.STORAGE_KEY) -> bool:
    try:
        store.remove(key)
        return True
    except Exception as e:
        _logger.warn(f"No se pudo borrar el cache '{key}': {e}")
        return False
