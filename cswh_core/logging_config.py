# --------------------------------------------------------------
# File: logging_config.py
# Description: Configuración de logging estructurado con structlog.
# --------------------------------------------------------------
"""Logging estructurado para la emisión y validación de tokens."""

import logging
import sys
from typing import Any, Dict, Protocol

import structlog

# Claves que nunca deben llegar a un log aunque alguien las pase como contexto.
SENSITIVE_FIELDS = frozenset({"secret", "key", "derived_key", "token", "auth_token"})


class TokenLogger(Protocol):
    """Interfaz del logger ya adaptado por :func:`as_token_logger`."""

    def warning(self, event: str, **kw: Any) -> Any: ...

    def error(self, event: str, **kw: Any) -> Any: ...


def drop_sensitive_fields(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Elimina del evento cualquier campo con material secreto."""

    for field in SENSITIVE_FIELDS.intersection(event_dict):
        event_dict[field] = "[REDACTED]"
    return event_dict


def configure_logging(service_name: str = "cswh-token", log_level: str = "info") -> None:
    """Configura structlog sobre el logging estándar con salida JSON.

    Args:
        service_name (str): Nombre que se añade a cada evento.
        log_level (str): Nivel mínimo (``debug``, ``info``, ``warning``...).

    """

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            drop_sensitive_fields,
            structlog.processors.EventRenamer("message"),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )
    structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: str = "cswh_token") -> Any:
    """Devuelve un logger estructurado."""

    return structlog.get_logger(name)


class _MessageLogger:
    """Expone ``warning``/``error`` sobre loggers que solo aceptan un mensaje.

    Sirve tanto para loggers con ``warn(msg)`` como con ``warning(msg)``.
    """

    def __init__(self, logger: Any) -> None:
        self._logger = logger

    def warning(self, message: str) -> None:
        method = getattr(self._logger, "warning", None) or self._logger.warn
        method(message)

    def error(self, message: str) -> None:
        self._logger.error(message)


def _message_processors() -> list:
    return [
        drop_sensitive_fields,
        structlog.processors.KeyValueRenderer(key_order=["event"]),
    ]


def as_token_logger(logger: Any = None) -> Any:
    """Adapta el logger recibido a la interfaz estructurada ``warning``/``error``.

    Los loggers de structlog se usan tal cual. Un `logging.Logger` estándar o
    cualquier objeto con ``warn(msg)``/``error(msg)`` no acepta contexto como
    argumentos con nombre, así que se envuelve con structlog y el contexto se
    renderiza como ``clave=valor`` dentro de un único mensaje.
    """

    if logger is None:
        return get_logger()
    if hasattr(logger, "bind"):
        return logger
    if isinstance(logger, logging.Logger):
        return structlog.wrap_logger(
            logger,
            processors=_message_processors(),
            wrapper_class=structlog.stdlib.BoundLogger,
        )
    return structlog.wrap_logger(
        _MessageLogger(logger),
        processors=_message_processors(),
        wrapper_class=structlog.BoundLogger,
    )
