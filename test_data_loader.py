"""Tests del loader de CSV."""

import io

import requests

from src.data.data_loader import CsvLoader


def test_load_text_skips_blank_lines():
    res = CsvLoader().load_text("name,price\nLeche,10\n\nYerba,20\n")
    assert res.success
    assert [r["name"] for r in res.rows] == ["Leche", "Yerba"]


def test_missing_cells_become_empty_strings():
    res = CsvLoader().load_text("itemCode,name,barcode\nX1,Leche\n")
    assert res.success
    assert res.rows[0]["itemCode"] == "X1"
    assert res.rows[0]["barcode"] == ""


def test_extra_columns_are_kept():
    res = CsvLoader().load_text("name,color\nLeche,blanco\n")
    assert res.rows[0]["color"] == "blanco"


def test_semicolon_separated_file():
    res = CsvLoader().load_text("name;price\nLeche;10,50\n")
    assert res.success
    assert res.rows == [{"name": "Leche", "price": "10,50"}]


def test_latin1_bytes():
    res = CsvLoader().load_bytes("name\nCafé\n".encode("latin-1"))
    assert res.success
    assert res.rows[0]["name"] == "Café"


def test_uploaded_file_like_object():
    res = CsvLoader().load(io.BytesIO(b"name\nLeche\n"))
    assert res.success
    assert len(res.rows) == 1


def test_empty_content_is_an_empty_dataset():
    res = CsvLoader().load_bytes(b"")
    assert res.success
    assert res.rows == []


def test_missing_file_reports_error_without_raising(tmp_path):
    res = CsvLoader().load(tmp_path / "no_existe.csv")
    assert not res.success
    assert res.rows == []
    assert res.error


class _FakeResponse:
    content = b"name,price\nLeche,10\n"

    def raise_for_status(self):
        return None


def test_load_url(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, timeout: _FakeResponse())
    res = CsvLoader().load("https://example.com/products.csv")
    assert res.success
    assert res.rows[0]["name"] == "Leche"


def test_load_url_connection_error(monkeypatch):
    def boom(url, timeout):
        raise requests.exceptions.ConnectionError("sin red")

    monkeypatch.setattr(requests, "get", boom)
    res = CsvLoader().load("https://example.com/products.csv")
    assert not res.success
    assert "sin red" in res.error


def test_row_with_extra_cells_is_kept():
    res = CsvLoader().load_text("name,price\nYerba,20\nLeche,10,sobra\n")
    assert res.success
    assert [r["name"] for r in res.rows] == ["Yerba", "Leche"]
    assert res.rows[1]["price"] == "10"
