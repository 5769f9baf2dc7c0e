"""Helpers de texto, precios y fechas.

normalize_text es la única fuente de claves de comparación: se usa igual
para indexar registros y para normalizar la consulta del usuario.
"""

from __future__ import annotations

import math
import re
import unicodedata
from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd

from src.utils import config

_COMBINING = re.compile("[\u0300-\u036f]")
_NON_WORD = re.compile(r"[^\w\s-]", flags=re.ASCII)
_SPACES = re.compile(r"\s+")
_PRICE_CHARS = re.compile(r"[^\d,.-]", flags=re.ASCII)
_FLOAT_PREFIX = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value)


def normalize_text(value: Any) -> str:
    """minúsculas, sin acentos, sin puntuación y con espacios colapsados."""
    s = _as_str(value).lower()
    s = unicodedata.normalize("NFD", s)
    s = _COMBINING.sub("", s)
    s = _NON_WORD.sub(" ", s)
    s = _SPACES.sub(" ", s)
    return s.strip()


def pick_name(record: Mapping[str, Any]) -> str:
    """Primer alias de nombre con valor (CSV en español o inglés)."""
    for col in config.COL_NAME:
        value = _as_str(record.get(col))
        if value:
            return value
    return ""


def parse_price(value: Any) -> float:
    """Convierte '1.234,56' -> 1234.56.

    Asume '.' como separador de miles y ',' como decimal (formato AR).
    Cualquier valor no parseable vale 0.
    """
    s = _PRICE_CHARS.sub("", _as_str(value))
    s = s.replace(".", "").replace(",", ".", 1)
    m = _FLOAT_PREFIX.match(s)
    if not m:
        return 0.0
    n = float(m.group(0))
    return n if math.isfinite(n) else 0.0


def parse_date(value: Any) -> Optional[pd.Timestamp]:
    """Fecha ISO-ish a Timestamp UTC, o None si no se puede interpretar."""
    s = _as_str(value).strip()
    if not s:
        return None
    try:
        ts = pd.to_datetime(s, errors="coerce", utc=True)
    except (ValueError, TypeError, OverflowError):
        return None
    return None if pd.isna(ts) else ts


def parse_dates(values: Iterable[Any]) -> List[Optional[pd.Timestamp]]:
    """Versión vectorizada de parse_date (una sola pasada de pandas)."""
    raw = [_as_str(v).strip() or None for v in values]
    if not raw:
        return []
    try:
        parsed = pd.to_datetime(pd.Series(raw, dtype=object), errors="coerce", utc=True, format="mixed")
    except (ValueError, TypeError, OverflowError):
        return [parse_date(v) for v in raw]
    return [None if pd.isna(ts) else ts for ts in parsed]


def format_currency(n: float) -> str:
    """Formato moneda es-AR: '$ 1.234,56'."""
    body = f"{abs(n):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    sign = "-" if n < 0 else ""
    return f"{sign}{config.CURRENCY_SYMBOL} {body}"
