"""Logger sencillo (opcional).

Envuelve el módulo logging estándar con la misma interfaz info/warn/error
que usan el pipeline y los servicios. Con enabled=False no emite nada.
"""

import logging
from dataclasses import dataclass

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


@dataclass
class Logger:
    enabled: bool = True
    name: str = "gestock"

    @property
    def _log(self) -> logging.Logger:
        return logging.getLogger(self.name)

    def info(self, msg: str):
        if self.enabled:
            self._log.info(msg)

    def warn(self, msg: str):
        if self.enabled:
            self._log.warning(msg)

    def error(self, msg: str):
        if self.enabled:
            self._log.error(msg)
