"""Exportación de la lista de etiquetas.

- export_csv: 3 columnas (name, $, price) con comillas forzadas y CRLF, para
  pegar en una planilla sin que las comas del nombre partan columnas.
- formatting_script: Apps Script fijo que da formato a la hoja en Google Sheets.
- export_results_csv: lista de precios (name, price, lastUpdated).
"""

from __future__ import annotations

import csv
from typing import Iterable

import pandas as pd

from src.data.normalizer import CanonicalRecord
from src.utils import config

CSV_MIME = "text/csv;charset=utf-8"
SCRIPT_MIME = "text/plain;charset=utf-8"

FORMATTING_SCRIPT = """function onOpen(){
  SpreadsheetApp.getUi().createMenu('Etiquetas')
    .addItem('Aplicar formato','applyFormat')
    .addToUi();
}
function applyFormat(){
  const sh = SpreadsheetApp.getActiveSheet();
  if (!sh) return;
  const lastRow = Math.max(sh.getLastRow(), 2);
  // Anchos: A=400px, B=15px, C=100px
  sh.setColumnWidths(1, 1, 400);
  sh.setColumnWidths(2, 1, 15);
  sh.setColumnWidths(3, 1, 100);
  // Encabezados
  sh.getRange(1,1,1,3).setBackground('#f0f0f0').setFontWeight('bold');
  // Columna A (desde fila 2): fondo negro, blanco, Roboto Mono 14
  const rangeA = sh.getRange(2,1,lastRow-1,1);
  rangeA.setBackground('#000000')
        .setFontColor('#ffffff')
        .setFontFamily('Roboto Mono')
        .setFontSize(14);
  // Columna B: centrado
  const rangeB = sh.getRange(2,2,lastRow-1,1);
  rangeB.setHorizontalAlignment('center');
  // Filas congeladas
  sh.setFrozenRows(1);
}"""


def _to_csv_bytes(df: pd.DataFrame) -> bytes:
    text = df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    return text.encode("utf-8")


def export_csv(names: Iterable[str]) -> bytes:
    rows = [{"name": n, "$": "$", "price": ""} for n in names]
    df = pd.DataFrame(rows, columns=config.EXPORT_COLUMNS, dtype=str)
    return _to_csv_bytes(df)


def export_results_csv(records: Iterable[CanonicalRecord]) -> bytes:
    rows = [
        {
            "name": r.name,
            config.COL_PRICE: f"{r.price_value:.2f}",
            config.COL_LAST_UPDATED: r.last_updated,
        }
        for r in records
    ]
    df = pd.DataFrame(rows, columns=["name", config.COL_PRICE, config.COL_LAST_UPDATED], dtype=str)
    return _to_csv_bytes(df)


def formatting_script() -> str:
    return FORMATTING_SCRIPT
