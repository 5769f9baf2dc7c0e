"""Feature Precios: búsqueda por tokens sobre el precio MÁXIMO por producto.

Al iniciar intenta el cache local; si no hay, carga el CSV por defecto.
Un CSV subido reemplaza el dataset y el cache.
"""

from __future__ import annotations

from typing import Dict, List

from src.data.normalizer import CanonicalRecord
from src.data.pipeline import PRICES_PROFILE, PipelineResult
from src.services.cache_service import (
    clear_dataset_cache,
    load_cached_dataset,
    save_dataset_cache,
)
from src.services.feature_base import SearchFeature
from src.storage.cache_store import CacheStore, MemoryStore
from src.utils import config
from src.utils.logger import Logger
from src.utils.text import format_currency

EMPTY_CELL = "—"


class PriceSearchService(SearchFeature):
    def __init__(
        self,
        store: CacheStore | None = None,
        source=None,
        logger: Logger | None = None,
        storage_key: str = config.STORAGE_KEY,
        **kwargs,
    ):
        super().__init__(PRICES_PROFILE, source=source, logger=logger, **kwargs)
        self.store = store if store is not None else MemoryStore()
        self.storage_key = storage_key

    def start(self) -> str:
        """Cache primero, luego CSV por defecto.

        Returns:
            "cache", "default" o "error" según de dónde salió el dataset
        """
        cached = load_cached_dataset(
            self.store, self.storage_key, normalizer=self.pipeline.normalizer
        )
        if cached is not None:
            self.logger.info(f"Precios desde cache: {len(cached)} productos")
            self.set_records(cached)
            return "cache"

        result = self._load_and_cache(self.source)
        return "default" if result.success else "error"

    def load_file(self, uploaded_file) -> PipelineResult:
        """CSV elegido por el usuario: reemplaza dataset y cache."""
        self.error = None
        return self._load_and_cache(uploaded_file)

    def clear(self) -> None:
        self.set_records([])
        self.set_query("")
        self.error = None
        clear_dataset_cache(self.store, self.storage_key)

    def _load_and_cache(self, source) -> PipelineResult:
        result = self.load(source)
        if result.success:
            save_dataset_cache(self.store, result.records, self.storage_key)
            self.error = None
        else:
            self.logger.warn(f"No se pudo cargar {source}: {result.error}")
            self.error = result.error
        return result

    # ==================== PRESENTACIÓN ====================

    def table_rows(self) -> List[Dict[str, str]]:
        return [display_row(r) for r in self.results.items]

    @property
    def summary(self) -> str:
        res = self.results
        return f"{res.total} productos (precio MÁXIMO por producto) — mostrando {len(res.items)}"


def display_row(record: CanonicalRecord) -> Dict[str, str]:
    return {
        "Nombre": record.name or EMPTY_CELL,
        "Precio": format_currency(record.price_value),
        "Última actualización": record.last_updated or EMPTY_CELL,
    }
