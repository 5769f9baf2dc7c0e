"""Configuración y constantes del proyecto.

Centraliza:
- Lectura de CSV (encodings)
- Candidatos de nombres de columnas (encabezados en español o inglés)
- Clave de cache y rutas por defecto
- Límites de búsqueda y exportación
"""

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Encodings típicos (utf-8 con BOM de Excel, luego latin-1)
CSV_ENCODINGS = ["utf-8-sig", "latin-1"]

# Separadores típicos; se prueban en orden
CSV_SEPARATORS = [",", ";", "\t", "|"]

# -----------------------------
# Fuente de datos por defecto
# -----------------------------
# Puede ser una ruta local o una URL http(s)
PUBLIC_CSV = os.getenv("GESTOCK_PRODUCTS_CSV", str(PROJECT_ROOT / "public" / "products.csv"))

# -----------------------------
# Cache local (key-value en archivo JSON)
# -----------------------------
CACHE_PATH = Path(os.getenv("GESTOCK_CACHE_PATH", str(PROJECT_ROOT / ".gestock_cache.json")))
STORAGE_KEY = "gestock:precios:v1"

# -----------------------------
# Candidatos de nombres de columnas
# -----------------------------
COL_NAME = ["name", "Nombre", "producto", "Producto"]
COL_ITEM_CODE = "itemCode"
COL_BARCODE = "barcode"
COL_PRICE = "price"
COL_LAST_UPDATED = "lastUpdated"

# Clave de negocio cuando no hay código, barcode ni nombre
NO_KEY = "SIN-CLAVE"

# -----------------------------
# Búsqueda
# -----------------------------
FUZZY_THRESHOLD = 0.4          # 0 = exacto, 1 = cualquier cosa
MIN_QUERY_CHARS = 2            # consultas más cortas muestran una muestra
BROWSE_LIMIT = 30
RESULTS_LIMIT = 50
SEARCH_DEBOUNCE_SECONDS = 0.25

# -----------------------------
# Exportación
# -----------------------------
EXPORT_COLUMNS = ["name", "$", "price"]
EXPORT_FILENAME = "etiquetas_nombres.csv"
SCRIPT_FILENAME = "formatear_hoja.gs"
PRICES_EXPORT_FILENAME = "precios.csv"

CURRENCY_SYMBOL = "$"
