"""Pipeline de datos de productos.

Orquesta:
- carga del CSV (ruta, URL o archivo subido)
- normalización al registro canónico
- desduplicación / agregación según la política del feature

Un único pipeline parametrizado para Etiquetas y Precios, así ambos features
no se separan con el tiempo.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from src.data.data_loader import CsvLoader
from src.data.dedupe import DedupPolicy, dedupe
from src.data.normalizer import CanonicalRecord, FieldNormalizer, Normalizer
from src.search.index import SearchConfig
from src.utils import config
from src.utils.logger import Logger
from src.utils.text import normalize_text


@dataclass(frozen=True)
class FeatureProfile:
    name: str
    policy: DedupPolicy
    require_name: bool
    search: SearchConfig


LABELS_PROFILE = FeatureProfile(
    name="etiquetas",
    policy=DedupPolicy.MOST_RECENT_BY_NAME,
    require_name=True,
    search=SearchConfig(fuzzy=True, min_query_chars=config.MIN_QUERY_CHARS, browse_limit=config.BROWSE_LIMIT),
)

PRICES_PROFILE = FeatureProfile(
    name="precios",
    policy=DedupPolicy.MAX_PRICE,
    require_name=False,
    search=SearchConfig(fuzzy=False, min_query_chars=1, browse_limit=None),
)


@dataclass
class PipelineResult:
    records: List[CanonicalRecord] = field(default_factory=list)
    loaded: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


class ProductPipeline:
    def __init__(
        self,
        profile: FeatureProfile,
        logger: Logger | None = None,
        normalizer: Normalizer = normalize_text,
    ):
        self.profile = profile
        self.logger = logger or Logger(enabled=False)
        self.loader = CsvLoader(logger=self.logger)
        self.normalizer = FieldNormalizer(normalizer)

    def run(self, source) -> PipelineResult:
        self.logger.info(f"[{self.profile.name}] Cargando CSV...")
        loaded = self.loader.load(source)
        if not loaded.success:
            return PipelineResult(records=[], loaded=0, error=loaded.error)

        return self.build(loaded.rows)

    def build(self, rows) -> PipelineResult:
        self.logger.info(f"[{self.profile.name}] Normalizando {len(rows)} filas...")
        records = self.normalizer.to_canonical_many(rows, require_name=self.profile.require_name)

        self.logger.info(f"[{self.profile.name}] Desduplicando ({self.profile.policy.value})...")
        records = dedupe(records, self.profile.policy)

        return PipelineResult(records=records, loaded=len(records))
