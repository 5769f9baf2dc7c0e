"""Feature Etiquetas: buscador difuso + lista editable + exportación."""

from __future__ import annotations

from src.data.pipeline import LABELS_PROFILE, PipelineResult
from src.labels.export import export_csv, formatting_script
from src.labels.selection import SelectionList
from src.services.feature_base import SearchFeature
from src.utils.logger import Logger


class LabelMakerService(SearchFeature):
    def __init__(self, source=None, logger: Logger | None = None, **kwargs):
        super().__init__(LABELS_PROFILE, source=source, logger=logger, **kwargs)
        self.selection = SelectionList()

    def start(self) -> PipelineResult:
        # Etiquetas no muestra errores de carga: si falla queda vacío
        return self.load()

    def add(self, name) -> None:
        self.selection.append(name)

    def export_csv(self) -> bytes:
        return export_csv(self.selection.items)

    def formatting_script(self) -> str:
        return formatting_script()

    @property
    def can_export(self) -> bool:
        return len(self.selection) > 0

    @property
    def status(self) -> str:
        found = "Buscando…" if self.searching else f"Resultados: {len(self.results.items)}"
        return f"Cargados: {self.loaded} · {found} · Lista: {len(self.selection)}"
