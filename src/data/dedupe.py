"""Desduplicación / agregación de registros canónicos.

Dos políticas, ambas en una sola pasada con un dict clave -> registro elegido:

1) MOST_RECENT_BY_NAME (Etiquetas)
   clave = nombre normalizado (las claves vacías se descartan).
   Un registro nuevo reemplaza al guardado solo si su fecha es válida y
   (la guardada no lo es, o la nueva es >= a la guardada).
   Entre duplicados sin fecha queda el primero que entró.

2) MAX_PRICE (Precios)
   clave = clave de negocio (itemCode, barcode o name; si no, "SIN-CLAVE").
   Queda el de precio estrictamente mayor; en empate, el primero.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

import pandas as pd

from src.data.normalizer import CanonicalRecord
from src.utils.text import parse_dates


class DedupPolicy(str, Enum):
    MOST_RECENT_BY_NAME = "most_recent_by_name"
    MAX_PRICE = "max_price"


def dedupe_most_recent_by_name(records: List[CanonicalRecord]) -> List[CanonicalRecord]:
    dates = parse_dates(r.last_updated for r in records)
    kept: Dict[str, Tuple[CanonicalRecord, Optional[pd.Timestamp]]] = {}

    for record, d_new in zip(records, dates):
        key = record.normalized_name
        if not key:
            continue
        prev = kept.get(key)
        if prev is None:
            kept[key] = (record, d_new)
            continue
        d_prev = prev[1]
        if d_new is not None and (d_prev is None or d_new >= d_prev):
            kept[key] = (record, d_new)

    return [record for record, _ in kept.values()]


def aggregate_max_price(records: List[CanonicalRecord]) -> List[CanonicalRecord]:
    kept: Dict[str, Tuple[CanonicalRecord, float]] = {}

    for record in records:
        key = record.business_key
        price = record.price_value
        prev = kept.get(key)
        if prev is None or price > prev[1]:
            kept[key] = (record, price)

    return [record for record, _ in kept.values()]


def dedupe(records: List[CanonicalRecord], policy: DedupPolicy) -> List[CanonicalRecord]:
    if policy == DedupPolicy.MOST_RECENT_BY_NAME:
        return dedupe_most_recent_by_name(records)
    if policy == DedupPolicy.MAX_PRICE:
        return aggregate_max_price(records)
    raise ValueError(f"Política de desduplicación no soportada: {policy}")
