"""Dashboard Streamlit (MVP) - GeStock.

Páginas (navegación lateral, equivalente a la barra inferior en móvil):
- Dashboard, Stock, Pedidos, Facturas, Tareas, Vencimientos: placeholders
- Precios: buscador por tokens sobre el precio máximo por producto
- Etiquetas: buscador difuso + lista editable + exportación CSV / Apps Script
"""

from __future__ import annotations

import logging
import os

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from src.labels.export import CSV_MIME, SCRIPT_MIME, export_results_csv
from src.services import LabelMakerService, PriceSearchService
from src.storage import JsonFileStore
from src.utils import config
from src.utils.logger import LOG_FORMAT

# Claves fijas de los buscadores en st.session_state
PRICES_QUERY_KEY = "precios-q"
LABELS_QUERY_KEY = "labels-q"

PAGES = [
    ("🏠", "Dashboard"),
    ("📦", "Stock"),
    ("🚚", "Pedidos"),
    ("🧾", "Facturas"),
    ("✅", "Tareas"),
    ("⏰", "Vtos"),
    ("💲", "Precios"),
    ("🏷️", "Etiquetas"),
]

PLACEHOLDERS = {
    "Stock": ("Ventas & Stock", "Lista de productos (placeholder)"),
    "Pedidos": ("Pedidos", "Pedidos (placeholder)"),
    "Facturas": ("Facturas", "Facturas (placeholder)"),
    "Tareas": ("Tareas", "Tareas (placeholder)"),
    "Vtos": ("Vencimientos", "Vencimientos (placeholder)"),
}


def _price_service() -> PriceSearchService:
    if "price_service" not in st.session_state:
        svc = PriceSearchService(store=JsonFileStore(config.CACHE_PATH))
        svc.start()
        st.session_state["price_service"] = svc
    return st.session_state["price_service"]


def _labels_service() -> LabelMakerService:
    if "labels_service" not in st.session_state:
        svc = LabelMakerService()
        svc.start()
        st.session_state["labels_service"] = svc
    return st.session_state["labels_service"]


class Dashboard:
    def render(self):
        st.set_page_config(page_title="GeStock", page_icon="📦", layout="centered")
        st.title("GeStock")

        labels = [f"{icon} {name}" for icon, name in PAGES]
        choice = st.sidebar.radio("Navegación", options=labels, index=0)
        page = choice.split(" ", 1)[1]

        if page == "Dashboard":
            self.render_home()
        elif page == "Precios":
            self.render_prices()
        elif page == "Etiquetas":
            self.render_labels()
        else:
            title, text = PLACEHOLDERS[page]
            st.header(title)
            st.write(text)

    # ==========================================================
    # DASHBOARD (placeholder)
    # ==========================================================
    def render_home(self):
        c1, c2 = st.columns(2)
        c1.metric("Ventas de hoy", "$0")
        c2.metric("Stock crítico", "0")
        c3, c4 = st.columns(2)
        c3.metric("Tareas", "0")
        c4.metric("Facturas próximas", "0")
        st.caption("Gráfico semanal (placeholder)")

    # ==========================================================
    # PRECIOS
    # ==========================================================
    def render_prices(self):
        svc = _price_service()
        st.subheader("Precios")

        st.session_state.setdefault(PRICES_QUERY_KEY, svc.query)
        st.text_input(
            "Buscar",
            key=PRICES_QUERY_KEY,
            placeholder="🔎 Buscar por nombre, código o barcode… (p. ej. 'keto bastoni' o '779…')",
            disabled=not svc.records,
            label_visibility="collapsed",
        )
        _sync_query(svc, st.session_state, PRICES_QUERY_KEY)

        uploaded = st.file_uploader(
            "Reemplazar CSV" if svc.records else "Subir CSV de precios",
            type=["csv"],
        )
        if uploaded is not None and st.session_state.get("price_upload_id") != uploaded.file_id:
            st.session_state["price_upload_id"] = uploaded.file_id
            with st.spinner("Procesando archivo..."):
                svc.load_file(uploaded)

        if svc.records:
            st.button("Limpiar", on_click=_clear_prices, args=(svc,))

        if svc.error:
            st.error(f"Error al leer el archivo: {svc.error}")

        if not svc.records:
            return

        st.caption(svc.summary)
        st.dataframe(pd.DataFrame(svc.table_rows()), use_container_width=True, hide_index=True)

        res = svc.results
        if res.truncated:
            st.caption(f"Mostrando {len(res.items)} de {res.total}. Usa la búsqueda para afinar.")

        st.download_button(
            "Exportar resultados",
            data=export_results_csv(res.items),
            file_name=config.PRICES_EXPORT_FILENAME,
            mime=CSV_MIME,
        )

    # ==========================================================
    # ETIQUETAS
    # ==========================================================
    def render_labels(self):
        svc = _labels_service()
        st.subheader("Generador de etiquetas")

        st.session_state.setdefault(LABELS_QUERY_KEY, svc.query)
        st.text_input(
            "Buscar producto",
            key=LABELS_QUERY_KEY,
            placeholder="Buscar por nombre (también por código o barcode si existen)…",
            label_visibility="collapsed",
        )
        _sync_query(svc, st.session_state, LABELS_QUERY_KEY)
        st.caption(svc.status)

        b1, b2, b3, b4 = st.columns(4)
        if b1.button("Limpiar lista", use_container_width=True):
            svc.selection.clear()
            st.rerun()
        b2.download_button(
            "Exportar CSV",
            data=svc.export_csv(),
            file_name=config.EXPORT_FILENAME,
            mime=CSV_MIME,
            disabled=not svc.can_export,
            use_container_width=True,
        )
        b3.download_button(
            "Script Sheets",
            data=svc.formatting_script(),
            file_name=config.SCRIPT_FILENAME,
            mime=SCRIPT_MIME,
            use_container_width=True,
        )
        if b4.button("Imprimir", type="primary", disabled=not svc.can_export, use_container_width=True):
            components.html("<script>window.parent.print();</script>", height=0)

        results = svc.results.items
        with st.container(height=260):
            if not results:
                st.caption("No hay coincidencias. Probá con menos palabras o sin acentos.")
            for i, r in enumerate(results):
                c_name, c_add = st.columns([5, 1])
                detail = " · ".join(x for x in (r.item_code, r.barcode) if x)
                c_name.markdown(f"**{r.name}**" + (f"  \n{detail}" if detail else ""))
                if c_add.button("Agregar", key=f"add-{i}-{r.normalized_name}"):
                    svc.add(r.name)
                    st.rerun()

        st.caption(f"Lista ({len(svc.selection)}) · Se imprime en una sola columna hacia abajo")
        if not len(svc.selection):
            st.caption("Sin elementos. Agregá desde el buscador.")

        for idx, name in enumerate(svc.selection):
            c_num, c_text, c_del = st.columns([1, 8, 1])
            c_num.write(f"{idx + 1}.")
            c_text.text_area(
                f"Etiqueta {idx + 1}",
                value=name,
                key=f"sel-{idx}-{name}",
                height=68,
                label_visibility="collapsed",
                on_change=_commit_edit,
                args=(svc, idx, f"sel-{idx}-{name}"),
            )
            if c_del.button("×", key=f"del-{idx}", help="Quitar"):
                svc.selection.remove_at(idx)
                st.rerun()


def _sync_query(svc, state, key: str) -> None:
    """Aplica al servicio el texto del buscador guardado bajo `key`."""
    query = state.get(key, "")
    if query != svc.applied_query:
        svc.set_query(query)


def _clear_prices(svc: PriceSearchService) -> None:
    svc.clear()
    st.session_state[PRICES_QUERY_KEY] = ""


def _commit_edit(svc: LabelMakerService, idx: int, widget_key: str) -> None:
    svc.selection.update_at(idx, st.session_state.get(widget_key, ""))


if __name__ == "__main__":
    logging.basicConfig(
        level=os.getenv("GESTOCK_LOG_LEVEL", "INFO"),
        format=LOG_FORMAT,
    )
    Dashboard().render()
