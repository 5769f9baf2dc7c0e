"""Carga tolerante de CSV de productos.

Acepta:
- Ruta local (por defecto public/products.csv)
- URL http(s) (se descarga con requests)
- bytes o un archivo subido (Streamlit uploader: getvalue())
- Texto CSV ya leído

Siempre con fila de encabezados. Todas las celdas se leen como texto y las
celdas faltantes quedan en "". Nunca lanza: ante un error devuelve
LoadResult(success=False) y el llamador decide (dataset vacío, mensaje, etc.).
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
import requests

from src.utils import config
from src.utils.logger import Logger

KNOWN_COLUMNS = {
    *config.COL_NAME,
    config.COL_ITEM_CODE,
    config.COL_BARCODE,
    config.COL_PRICE,
    config.COL_LAST_UPDATED,
}

RawRecord = Dict[str, str]


@dataclass
class LoadResult:
    success: bool
    rows: List[RawRecord] = field(default_factory=list)
    error: Optional[str] = None
    source_name: str = ""


def _keep_row_with_extra_fields(fields: List[str]) -> List[str]:
    """Conserva filas con más celdas que el encabezado.

    Devolver la lista completa alcanza: pandas recorta las celdas que sobran
    (con un ParserWarning) en vez de descartar la fila entera.
    """
    return fields


class CsvLoader:
    def __init__(self, logger: Logger | None = None, timeout: int = 30):
        self.logger = logger or Logger(enabled=False)
        self.timeout = timeout

    # ==================== ENTRADAS ====================

    def load(self, source) -> LoadResult:
        """Despacha según el tipo de fuente (ruta, URL, bytes o archivo subido)."""
        if isinstance(source, (bytes, bytearray)):
            return self.load_bytes(bytes(source))
        if hasattr(source, "getvalue") or hasattr(source, "read"):
            name = getattr(source, "name", "uploaded.csv")
            try:
                content = source.getvalue() if hasattr(source, "getvalue") else source.read()
            except Exception as e:
                return self._failure(name, f"No se pudo leer el archivo '{name}': {e}")
            if isinstance(content, str):
                return self.load_text(content, name=name)
            return self.load_bytes(content, name=name)

        text = str(source)
        if text.startswith(("http://", "https://")):
            return self.load_url(text)
        return self.load_path(Path(text))

    def load_path(self, path: Path) -> LoadResult:
        path = Path(path).expanduser()
        try:
            content = path.read_bytes()
        except OSError as e:
            return self._failure(str(path), f"No se pudo leer '{path}': {e}")
        return self.load_bytes(content, name=str(path))

    def load_url(self, url: str) -> LoadResult:
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            return self._failure(url, f"No se pudo descargar '{url}': {e}")
        return self.load_bytes(response.content, name=url)

    def load_text(self, text: str, name: str = "texto.csv") -> LoadResult:
        return self.load_bytes(text.encode("utf-8"), name=name)

    def load_bytes(self, content: bytes, name: str = "uploaded.csv") -> LoadResult:
        try:
            df = self._read_csv(content)
        except Exception as e:
            return self._failure(name, f"No se pudo interpretar el CSV '{name}': {e}")

        rows = df.to_dict(orient="records")
        self.logger.info(f"CSV '{name}': {len(rows)} filas leídas")
        return LoadResult(success=True, rows=rows, source_name=name)

    # ==================== PARSEO ====================

    def _read_csv(self, content: bytes) -> pd.DataFrame:
        if not content or not content.strip():
            return pd.DataFrame()

        last_error: Optional[Exception] = None
        fallback: Optional[pd.DataFrame] = None

        for enc in config.CSV_ENCODINGS:
            for sep in config.CSV_SEPARATORS:
                try:
                    df = pd.read_csv(
                        io.BytesIO(content),
                        sep=sep,
                        encoding=enc,
                        dtype=str,
                        keep_default_na=False,
                        skip_blank_lines=True,
                        on_bad_lines=_keep_row_with_extra_fields,
                        engine="python",
                    )
                except Exception as e:
                    last_error = e
                    continue

                df.columns = self._dedupe_columns(df.columns)
                df = df.fillna("")

                if KNOWN_COLUMNS.intersection(df.columns):
                    return df.reset_index(drop=True)
                if fallback is None:
                    fallback = df

        if fallback is not None:
            return fallback.reset_index(drop=True)
        raise RuntimeError(f"Último error: {last_error}")

    def _dedupe_columns(self, cols) -> list:
        """Renombra columnas duplicadas agregando sufijo __2, __3, ..."""
        seen = {}
        new_cols = []
        for c in cols:
            name = str(c).strip()
            if name in seen:
                seen[name] += 1
                new_cols.append(f"{name}__{seen[name]}")
            else:
                seen[name] = 1
                new_cols.append(name)
        return new_cols

    def _failure(self, name: str, message: str) -> LoadResult:
        self.logger.warn(message)
        return LoadResult(success=False, rows=[], error=message, source_name=name)
