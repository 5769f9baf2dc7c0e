"""Normalización de filas crudas al registro canónico.

Convierte el dict 'crudo' del CSV (cualquier forma, encabezados en español o
inglés) a un CanonicalRecord estable:

- item_code, name, barcode, price, last_updated
- claves normalizadas para comparar/buscar (normalized_*)
- columnas desconocidas en extra (no se usan en la lógica)

La función de normalización se inyecta (por defecto normalize_text) y es la
misma que usa el índice de búsqueda para normalizar la consulta.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping

from src.utils import config
from src.utils.text import normalize_text, parse_price, pick_name

Normalizer = Callable[[Any], str]

_CANONICAL_COLUMNS = {
    *config.COL_NAME,
    config.COL_ITEM_CODE,
    config.COL_BARCODE,
    config.COL_PRICE,
    config.COL_LAST_UPDATED,
}


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class CanonicalRecord:
    name: str
    item_code: str = ""
    barcode: str = ""
    price: str | float = "0"
    last_updated: str = ""
    normalized_name: str = ""
    normalized_code: str = ""
    normalized_barcode: str = ""
    normalized_all: str = ""
    extra: Dict[str, str] = field(default_factory=dict, compare=False)

    @property
    def price_value(self) -> float:
        return parse_price(self.price)

    @property
    def business_key(self) -> str:
        """Primer valor no vacío entre itemCode, barcode y name."""
        for value in (self.item_code, self.barcode, self.name):
            key = _clean(value).strip()
            if key:
                return key
        return config.NO_KEY

    def to_dict(self) -> Dict[str, Any]:
        """Forma persistida en cache (encabezados del CSV original)."""
        return {
            config.COL_ITEM_CODE: self.item_code,
            "name": self.name,
            config.COL_BARCODE: self.barcode,
            config.COL_PRICE: self.price,
            config.COL_LAST_UPDATED: self.last_updated,
            "_kName": self.normalized_name,
            "_kCode": self.normalized_code,
            "_kBarcode": self.normalized_barcode,
            "_kAll": self.normalized_all,
            **{k: v for k, v in self.extra.items() if k not in _CANONICAL_COLUMNS},
        }


class FieldNormalizer:
    def __init__(self, normalizer: Normalizer = normalize_text):
        self.normalizer = normalizer

    def to_canonical(self, raw: Mapping[str, Any]) -> CanonicalRecord:
        name = pick_name(raw)
        item_code = _clean(raw.get(config.COL_ITEM_CODE))
        barcode = _clean(raw.get(config.COL_BARCODE))
        price = raw.get(config.COL_PRICE)
        if price is None or price == "":
            price = "0"
        extra = {
            str(k): _clean(v) for k, v in raw.items() if k not in _CANONICAL_COLUMNS
        }
        return self._build(
            name=name,
            item_code=item_code,
            barcode=barcode,
            price=price,
            last_updated=_clean(raw.get(config.COL_LAST_UPDATED)),
            extra=extra,
        )

    def to_canonical_many(
        self, rows: Iterable[Mapping[str, Any]], require_name: bool = False
    ) -> List[CanonicalRecord]:
        records = [self.to_canonical(r) for r in rows]
        if require_name:
            records = [r for r in records if r.name]
        return records

    def from_cache(self, data: Mapping[str, Any]) -> CanonicalRecord:
        """Reconstruye un registro persistido.

        Las claves normalizadas guardadas se respetan; si faltan (cache de una
        versión anterior) se recalculan.
        """
        record = self.to_canonical(
            {k: v for k, v in data.items() if not str(k).startswith("_k")}
        )
        keys = {
            "normalized_name": data.get("_kName"),
            "normalized_code": data.get("_kCode"),
            "normalized_barcode": data.get("_kBarcode"),
            "normalized_all": data.get("_kAll"),
        }
        persisted = {k: v for k, v in keys.items() if isinstance(v, str)}
        if not persisted:
            return record
        return CanonicalRecord(
            name=record.name,
            item_code=record.item_code,
            barcode=record.barcode,
            price=record.price,
            last_updated=record.last_updated,
            normalized_name=persisted.get("normalized_name", record.normalized_name),
            normalized_code=persisted.get("normalized_code", record.normalized_code),
            normalized_barcode=persisted.get("normalized_barcode", record.normalized_barcode),
            normalized_all=persisted.get("normalized_all", record.normalized_all),
            extra=record.extra,
        )

    def _build(self, name, item_code, barcode, price, last_updated, extra) -> CanonicalRecord:
        norm = self.normalizer
        return CanonicalRecord(
            name=name,
            item_code=item_code,
            barcode=barcode,
            price=price,
            last_updated=last_updated,
            normalized_name=norm(name),
            normalized_code=norm(item_code),
            normalized_barcode=norm(barcode),
            normalized_all=norm(" ".join([name, item_code, barcode])),
            extra=extra,
        )
