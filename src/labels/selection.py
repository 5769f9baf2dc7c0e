"""Lista editable de nombres elegidos para imprimir etiquetas.

Cada entrada es un string plano (sin vínculo con el registro de origen) y su
posición es el orden de impresión.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

CONFIRM_KEY = "Enter"


class SelectionList:
    def __init__(self, items: Optional[List[str]] = None):
        self._items: List[str] = list(items or [])

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> str:
        return self._items[index]

    @property
    def items(self) -> List[str]:
        return list(self._items)

    def append(self, name: Optional[str]) -> None:
        if not name:
            return
        self._items.append(str(name))

    def remove_at(self, index: int) -> None:
        self._check(index)
        del self._items[index]

    def update_at(self, index: int, new_text: str) -> None:
        """Reemplaza el texto; puede quedar vacío (no se elimina)."""
        self._check(index)
        self._items[index] = (new_text or "").strip()

    def clear(self) -> None:
        self._items.clear()

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise IndexError(f"Índice fuera de rango: {index} (lista de {len(self._items)})")


def apply_edit_key(text: str, key: str, shift: bool = False):
    """Resuelve una tecla durante la edición de una entrada.

    Enter confirma la edición -> (True, texto recortado).
    Shift+Enter agrega un salto de línea -> (False, texto + "\\n").
    Cualquier otra tecla no cambia nada -> (False, texto).
    """
    if key == CONFIRM_KEY and not shift:
        return True, text.strip()
    if key == CONFIRM_KEY:
        return False, text + "\n"
    return False, text
