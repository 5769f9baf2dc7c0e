"""Debounce explícito para re-filtrar recién cuando el usuario deja de tipear.

Cada trigger() reinicia el temporizador; solo el último valor dentro de la
ventana `delay` llega al callback.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional

from src.utils import config

_PENDING = object()


class Debouncer:
    def __init__(self, callback: Callable[[Any], None], delay: float = config.SEARCH_DEBOUNCE_SECONDS):
        self.callback = callback
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._value: Any = _PENDING
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._value is not _PENDING

    def trigger(self, value: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._value = value
            self._timer = threading.Timer(self.delay, self._fire, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> None:
        """Ejecuta ya el valor pendiente (si hay)."""
        with self._lock:
            generation = self._generation
        self._fire(generation)

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._value = _PENDING
            self._generation += 1

    def _fire(self, generation: int) -> None:
        with self._lock:
            # un timer viejo que ya había arrancado no pisa al nuevo
            if generation != self._generation:
                return
            if self._timer is not None:
                self._timer.cancel()
            value, self._value = self._value, _PENDING
            self._timer = None
        if value is not _PENDING:
            self.callback(value)
