"""
Configuración de logging.

Un único handler a stdout con timestamp; el contexto (run, registro) se pasa
explícitamente con bind_context en lugar de loggers globales por componente.
"""

import logging
import sys
from typing import Any, MutableMapping


def configure_logging(level: str = "INFO") -> None:
    """Configura el logger raíz. Llamar una sola vez al arrancar."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(level.upper())
    root_logger.addHandler(handler)

    # Ruido de librerías
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class ContextAdapter(logging.LoggerAdapter):
    """Añade los valores de contexto al final de cada mensaje: `msg [run_id=... record_id=...]`."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]):
        if not self.extra:
            return msg, kwargs
        context = " ".join(f"{key}={value}" for key, value in self.extra.items())
        return f"{msg} [{context}]", kwargs


def bind_context(logger: logging.Logger | ContextAdapter, **context: Any) -> ContextAdapter:
    """
    Devuelve un adapter con el contexto dado.

    Si `logger` ya es un ContextAdapter, el contexto nuevo se suma al existente.
    """
    if isinstance(logger, ContextAdapter):
        merged = {**logger.extra, **context}
        return ContextAdapter(logger.logger, merged)
    return ContextAdapter(logger, context)
