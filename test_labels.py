"""Tests de la lista de selección y la exportación de etiquetas."""

import pytest

from src.data.normalizer import FieldNormalizer
from src.labels.export import export_csv, export_results_csv, formatting_script
from src.labels.selection import SelectionList, apply_edit_key


def test_append_then_remove_is_empty():
    sel = SelectionList()
    sel.append("X")
    sel.remove_at(0)
    assert sel.items == []


def test_append_ignores_empty_values():
    sel = SelectionList()
    sel.append("")
    sel.append(None)
    assert len(sel) == 0


def test_update_trims_text():
    sel = SelectionList(["X"])
    sel.update_at(0, "  Y  ")
    assert sel.items == ["Y"]


def test_update_to_blank_keeps_entry():
    sel = SelectionList(["X"])
    sel.update_at(0, "   ")
    assert sel.items == [""]


def test_remove_shifts_later_entries():
    sel = SelectionList(["A", "B", "C"])
    sel.remove_at(1)
    assert sel.items == ["A", "C"]
    assert sel[1] == "C"


def test_duplicates_are_allowed_in_order():
    sel = SelectionList()
    for name in ("Leche", "Yerba", "Leche"):
        sel.append(name)
    assert list(sel) == ["Leche", "Yerba", "Leche"]


def test_clear_twice_is_same_as_once():
    sel = SelectionList(["A", "B"])
    sel.clear()
    sel.clear()
    assert sel.items == []


def test_out_of_range_index_raises():
    sel = SelectionList(["A"])
    with pytest.raises(IndexError):
        sel.remove_at(3)
    with pytest.raises(IndexError):
        sel.update_at(-1, "x")


def test_edit_keys():
    assert apply_edit_key("  Leche ", "Enter") == (True, "Leche")
    assert apply_edit_key("Leche", "Enter", shift=True) == (False, "Leche\n")
    assert apply_edit_key("Leche", "a") == (False, "Leche")


def test_export_csv_quotes_everything_with_crlf():
    data = export_csv(["Café Ñandú", "Agua"])
    expected = (
        '"name","$","price"\r\n'
        '"Café Ñandú","$",""\r\n'
        '"Agua","$",""\r\n'
    )
    assert data.decode("utf-8") == expected


def test_export_csv_escapes_quotes_and_commas():
    text = export_csv(['Vino "Tinto", 750ml']).decode("utf-8")
    assert text.splitlines()[1] == '"Vino ""Tinto"", 750ml","$",""'


def test_export_csv_empty_list_has_header_only():
    assert export_csv([]).decode("utf-8") == '"name","$","price"\r\n'


def test_export_results_csv():
    fn = FieldNormalizer()
    rows = [fn.to_canonical({"name": "Leche", "price": "1.234,50", "lastUpdated": "2024-06-01"})]
    text = export_results_csv(rows).decode("utf-8")
    assert text == '"name","price","lastUpdated"\r\n"Leche","1234.50","2024-06-01"\r\n'


def test_formatting_script_is_fixed():
    script = formatting_script()
    assert script == formatting_script()
    assert "function applyFormat()" in script
    assert "setFrozenRows(1)" in script
