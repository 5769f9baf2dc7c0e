"""Índice de búsqueda sobre el dataset canónico.

Dos niveles por consulta:

1) Difuso (rapidfuzz, partial_ratio): cada token debe parecerse a alguno de
   los campos name / itemCode / barcode (AND entre tokens, OR entre campos).
   No importa la posición ni el orden de las palabras.
2) Exacto: si el difuso no trae nada (o está deshabilitado), cada token debe
   ser substring literal del texto normalizado completo del registro.

Consultas normalizadas más cortas que min_query_chars devuelven una muestra
del dataset en orden de carga (modo "browse").
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from rapidfuzz import fuzz, process

from src.data.normalizer import CanonicalRecord, Normalizer
from src.utils import config
from src.utils.text import normalize_text


@dataclass(frozen=True)
class SearchConfig:
    fuzzy: bool = True
    threshold: float = config.FUZZY_THRESHOLD
    min_query_chars: int = config.MIN_QUERY_CHARS
    browse_limit: Optional[int] = config.BROWSE_LIMIT
    result_limit: int = config.RESULTS_LIMIT

    @property
    def score_cutoff(self) -> float:
        return (1.0 - self.threshold) * 100.0


@dataclass
class SearchResult:
    items: List[CanonicalRecord]
    total: int
    browsing: bool = False

    @property
    def truncated(self) -> bool:
        return self.total > len(self.items)


def tokenize(query: str, normalizer: Normalizer = normalize_text) -> List[str]:
    return [t for t in normalizer(query).split(" ") if t]


class SearchIndex:
    """Índice inmutable: se reconstruye cuando cambia el dataset."""

    def __init__(
        self,
        records: List[CanonicalRecord],
        search_config: SearchConfig | None = None,
        normalizer: Normalizer = normalize_text,
    ):
        self.records = list(records)
        self.config = search_config or SearchConfig()
        self.normalizer = normalizer
        self._fields = [
            [r.normalized_name for r in self.records],
            [r.normalized_code for r in self.records],
            [r.normalized_barcode for r in self.records],
        ]
        self._lengths = [np.array([len(c) for c in choices]) for choices in self._fields]

    def __len__(self) -> int:
        return len(self.records)

    def search(self, query: str) -> SearchResult:
        qn = self.normalizer(query)
        if len(qn) < self.config.min_query_chars:
            return self._browse()

        tokens = tokenize(query, self.normalizer)
        hits: List[CanonicalRecord] = []
        if self.config.fuzzy:
            hits = self.fuzzy_search(tokens)
        if not hits:
            hits = self.exact_search(tokens)

        return SearchResult(items=hits[: self.config.result_limit], total=len(hits))

    def fuzzy_search(self, tokens: List[str]) -> List[CanonicalRecord]:
        if not tokens or not self.records:
            return []

        # best[t, i] = mejor puntaje del token t contra cualquier campo del registro i
        best = np.zeros((len(tokens), len(self.records)), dtype=np.float64)
        token_len = np.array([len(t) for t in tokens])[:, None]
        for choices, choice_len in zip(self._fields, self._lengths):
            partial = process.cdist(tokens, choices, scorer=fuzz.partial_ratio, dtype=np.float64)
            # partial_ratio invierte los argumentos si el campo es más corto que
            # el token; en ese caso se compara el campo completo
            whole = process.cdist(tokens, choices, scorer=fuzz.ratio, dtype=np.float64)
            scores = np.where(choice_len[None, :] >= token_len, partial, whole)
            np.maximum(best, scores, out=best)

        matched = (best >= self.config.score_cutoff).all(axis=0)
        idx = np.flatnonzero(matched)
        if idx.size == 0:
            return []

        mean_score = best[:, idx].mean(axis=0)
        order = idx[np.argsort(-mean_score, kind="stable")]
        return [self.records[i] for i in order]

    def exact_search(self, tokens: List[str]) -> List[CanonicalRecord]:
        if not tokens:
            return list(self.records)
        return [r for r in self.records if all(t in r.normalized_all for t in tokens)]

    def _browse(self) -> SearchResult:
        limit = self.config.browse_limit
        if limit is None:
            items = self.records[: self.config.result_limit]
        else:
            items = self.records[:limit]
        return SearchResult(items=items, total=len(self.records), browsing=True)
