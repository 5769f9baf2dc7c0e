"""Tests de cache, debounce y servicios de Precios / Etiquetas."""

import json
import time

from src.data.normalizer import FieldNormalizer
from src.search.debounce import Debouncer
from src.services import LabelMakerService, PriceSearchService
from src.services.cache_service import (
    clear_dataset_cache,
    load_cached_dataset,
    save_dataset_cache,
)
from src.storage import JsonFileStore, MemoryStore
from src.utils import config

CSV = (
    "itemCode,name,barcode,price,lastUpdated\n"
    'A1,Café Molido,779001,"9,00",2024-01-01\n'
    'A1,Café Molido,779001,"10,50",2024-06-01\n'
    'A2,Yerba Mate,779002,"3.980,00",2024-06-03\n'
    '\n'
    'A3,,779003,"100,00",\n'
)


def write_csv(tmp_path, content=CSV):
    path = tmp_path / "products.csv"
    path.write_text(content, encoding="utf-8")
    return path


# ==================== CACHE ====================


def test_cache_round_trip():
    fn = FieldNormalizer()
    store = MemoryStore()
    records = [fn.to_canonical({"itemCode": "A1", "name": "Café", "price": "10,50", "color": "rojo"})]
    assert save_dataset_cache(store, records)
    loaded = load_cached_dataset(store)
    assert loaded == records
    assert loaded[0].extra == {"color": "rojo"}


def test_cache_missing_or_corrupt_is_none():
    assert load_cached_dataset(MemoryStore()) is None
    assert load_cached_dataset(MemoryStore({config.STORAGE_KEY: "no es json"})) is None
    assert load_cached_dataset(MemoryStore({config.STORAGE_KEY: "{}"})) is None
    assert load_cached_dataset(MemoryStore({config.STORAGE_KEY: "[1, 2]"})) is None


def test_cache_rederives_missing_normalized_keys():
    store = MemoryStore({config.STORAGE_KEY: json.dumps([{"name": "Café Ñandú"}])})
    (record,) = load_cached_dataset(store)
    assert record.normalized_name == "cafe nandu"
    assert record.normalized_all == "cafe nandu"


def test_json_file_store(tmp_path):
    store = JsonFileStore(tmp_path / "cache.json")
    assert store.get("k") is None
    store.set("k", "v")
    assert JsonFileStore(tmp_path / "cache.json").get("k") == "v"
    store.remove("k")
    assert store.get("k") is None


def test_corrupt_cache_file_is_ignored(tmp_path):
    path = tmp_path / "cache.json"
    path.write_text("{roto", encoding="utf-8")
    store = JsonFileStore(path)
    assert load_cached_dataset(store) is None
    assert clear_dataset_cache(store)
    assert json.loads(path.read_text(encoding="utf-8")) == {}


def test_save_overwrites_corrupt_cache_file(tmp_path):
    fn = FieldNormalizer()
    records = [fn.to_canonical({"name": "Leche", "price": "10"})]
    for content in ("{roto", "[]"):
        path = tmp_path / "cache.json"
        path.write_text(content, encoding="utf-8")
        assert save_dataset_cache(JsonFileStore(path), records)
        assert load_cached_dataset(JsonFileStore(path)) == records


def test_upload_repairs_corrupt_cache_for_next_session(tmp_path):
    path = tmp_path / "cache.json"
    path.write_text("{roto", encoding="utf-8")
    svc = PriceSearchService(store=JsonFileStore(path), source=tmp_path / "no_existe.csv")
    assert svc.start() == "error"
    svc.load_file(b"name,price\nLeche,10\n")

    next_session = PriceSearchService(store=JsonFileStore(path), source=tmp_path / "no_existe.csv")
    assert next_session.start() == "cache"
    assert [r.name for r in next_session.records] == ["Leche"]


# ==================== DEBOUNCE ====================


def test_debouncer_only_fires_last_value():
    seen = []
    deb = Debouncer(seen.append, delay=0.05)
    for text in ("l", "le", "lec", "leche"):
        deb.trigger(text)
    time.sleep(0.4)
    assert seen == ["leche"]


def test_debouncer_flush_and_cancel():
    seen = []
    deb = Debouncer(seen.append, delay=10)
    deb.trigger("yerba")
    deb.flush()
    assert seen == ["yerba"]
    assert not deb.pending

    deb.trigger("cafe")
    deb.cancel()
    deb.flush()
    assert seen == ["yerba"]


# ==================== PRECIOS ====================


def test_price_service_loads_default_and_caches(tmp_path):
    store = MemoryStore()
    svc = PriceSearchService(store=store, source=write_csv(tmp_path))
    assert svc.start() == "default"
    assert svc.loaded == 3
    cafe = [r for r in svc.records if r.item_code == "A1"][0]
    assert cafe.price_value == 10.5
    assert config.STORAGE_KEY in store.data

    other = PriceSearchService(store=store, source=tmp_path / "no_existe.csv")
    assert other.start() == "cache"
    assert other.loaded == 3


def test_price_service_search_and_display(tmp_path):
    svc = PriceSearchService(source=write_csv(tmp_path))
    svc.start()
    svc.set_query("MATE")
    assert [r["Nombre"] for r in svc.table_rows()] == ["Yerba Mate"]
    assert svc.table_rows()[0]["Precio"] == "$ 3.980,00"

    svc.set_query("779003")
    row = svc.table_rows()[0]
    assert row["Nombre"] == "—"
    assert row["Última actualización"] == "—"


def test_price_service_load_failure_sets_error(tmp_path):
    svc = PriceSearchService(source=write_csv(tmp_path))
    svc.start()
    result = svc.load_file(tmp_path / "no_existe.csv")
    assert not result.success
    assert svc.error
    assert svc.records == []
    assert svc.loaded == 0


def test_price_service_upload_replaces_cache(tmp_path):
    store = MemoryStore()
    svc = PriceSearchService(store=store, source=write_csv(tmp_path))
    svc.start()
    svc.load_file(b"name,price\nLeche,\"1.000,00\"\n")
    assert [r.name for r in svc.records] == ["Leche"]
    assert [r.name for r in load_cached_dataset(store)] == ["Leche"]


def test_price_service_clear(tmp_path):
    store = MemoryStore()
    svc = PriceSearchService(store=store, source=write_csv(tmp_path))
    svc.start()
    svc.set_query("cafe")
    svc.clear()
    assert svc.records == []
    assert svc.query == ""
    assert config.STORAGE_KEY not in store.data


# ==================== ETIQUETAS ====================


def test_labels_service_flow(tmp_path):
    svc = LabelMakerService(source=write_csv(tmp_path))
    svc.start()
    assert svc.loaded == 2  # fila sin nombre descartada, Café desduplicado

    svc.set_query("cafe molido")
    hit = svc.results.items[0]
    assert hit.last_updated == "2024-06-01"

    svc.add(hit.name)
    svc.add("Yerba Mate")
    assert svc.can_export
    lines = svc.export_csv().decode("utf-8").split("\r\n")
    assert lines[1] == '"Café Molido","$",""'
    assert svc.status == "Cargados: 2 · Resultados: 1 · Lista: 2"


def test_labels_service_deferred_query(tmp_path):
    svc = LabelMakerService(source=write_csv(tmp_path), debounce_seconds=10)
    svc.start()
    svc.type_query("yerba")
    assert svc.searching
    assert svc.results.browsing
    svc.flush_query()
    assert not svc.searching
    assert svc.results.items[0].name == "Yerba Mate"


def test_labels_service_load_failure_is_silent(tmp_path):
    svc = LabelMakerService(source=tmp_path / "no_existe.csv")
    result = svc.start()
    assert not result.success
    assert svc.records == []
    assert svc.loaded == 0
    assert svc.error is None
