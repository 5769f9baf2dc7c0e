"""Estado compartido de los features de búsqueda (Precios y Etiquetas).

Mantiene:
- dataset canónico + cantidad cargada
- índice de búsqueda (se reconstruye cuando cambia el dataset)
- consulta inmediata (lo que se tipea) y consulta aplicada (diferida)
"""

from __future__ import annotations

from typing import List, Optional

from src.data.normalizer import CanonicalRecord
from src.data.pipeline import FeatureProfile, PipelineResult, ProductPipeline
from src.search.debounce import Debouncer
from src.search.index import SearchIndex, SearchResult
from src.utils import config
from src.utils.logger import Logger


class SearchFeature:
    def __init__(
        self,
        profile: FeatureProfile,
        source=None,
        logger: Logger | None = None,
        debounce_seconds: float = config.SEARCH_DEBOUNCE_SECONDS,
    ):
        self.profile = profile
        self.source = source if source is not None else config.PUBLIC_CSV
        self.logger = logger or Logger(name=f"gestock.{profile.name}")
        self.pipeline = ProductPipeline(profile, logger=self.logger)

        self.records: List[CanonicalRecord] = []
        self.loaded = 0
        self.error: Optional[str] = None

        self.query = ""
        self.applied_query = ""
        self._debouncer = Debouncer(self._apply_query, delay=debounce_seconds)

        self._index = SearchIndex([], profile.search, self.pipeline.normalizer.normalizer)
        self._result_cache: Optional[tuple] = None

    # ==================== DATASET ====================

    def set_records(self, records: List[CanonicalRecord]) -> None:
        """Reemplaza el dataset completo (sin merge incremental)."""
        self.records = list(records)
        self.loaded = len(self.records)
        self._index = SearchIndex(self.records, self.profile.search, self.pipeline.normalizer.normalizer)
        self._result_cache = None

    def load(self, source=None) -> PipelineResult:
        result = self.pipeline.run(self.source if source is None else source)
        if result.success:
            self.set_records(result.records)
        else:
            self.set_records([])
        return result

    # ==================== CONSULTA ====================

    def type_query(self, text: str) -> None:
        """Cada tecla actualiza la consulta; el filtrado espera al debounce."""
        self.query = text
        self._debouncer.trigger(text)

    def set_query(self, text: str) -> None:
        """Consulta aplicada de inmediato (sin debounce)."""
        self._debouncer.cancel()
        self.query = text
        self._apply_query(text)

    def flush_query(self) -> None:
        self._debouncer.flush()

    def _apply_query(self, text: str) -> None:
        self.applied_query = text

    @property
    def searching(self) -> bool:
        return self.query != self.applied_query

    @property
    def results(self) -> SearchResult:
        query = self.applied_query
        if self._result_cache is None or self._result_cache[0] != query:
            self._result_cache = (query, self._index.search(query))
        return self._result_cache[1]
