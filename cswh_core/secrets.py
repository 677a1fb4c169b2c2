# --------------------------------------------------------------
# File: secrets.py
# Description: Proveedores del secreto del servidor y generación del fichero.
# --------------------------------------------------------------
"""Acceso al material secreto con el que se derivan las claves de token."""

from __future__ import annotations

import os
from typing import Any, Optional, Protocol

from cswh_core.logging_config import TokenLogger, as_token_logger

__all__ = [
    "FileSecretProvider",
    "SecretProvider",
    "StaticSecretProvider",
    "write_secret_key",
]


class SecretProvider(Protocol):
    """Fuente del secreto: devuelve bytes, vacíos si no se pudo leer."""

    def load_secret(self, logger: TokenLogger) -> bytes: ...


class StaticSecretProvider:
    """Proveedor en memoria, útil para pruebas o para incrustar el servicio."""

    def __init__(self, secret: bytes) -> None:
        self._secret = bytes(secret)

    def load_secret(self, logger: TokenLogger) -> bytes:
        return self._secret


class FileSecretProvider:
    """Lee el secreto de un fichero en cada operación.

    Nunca lanza excepciones: una ruta sin configurar o un fichero ilegible
    se registran y se sustituyen por un secreto vacío.
    """

    def __init__(self, path: Optional[str]) -> None:
        self.path = path

    def load_secret(self, logger: Any) -> bytes:
        """Devuelve el contenido del fichero de secreto.

        Args:
            logger (Any): Logger con ``warn``/``warning`` y ``error``; se adapta
                con :func:`as_token_logger`.

        Returns:
            bytes: Secreto leído, o ``b""`` si no estaba disponible.

        """

        logger = as_token_logger(logger)
        if not self.path:
            logger.warning(
                "Secret key missing. This is required to generate a strong time-based token to prevent cswh"
            )
            logger.error("Error in generating key for cswh: secret key path is not configured")
            return b""
        try:
            with open(self.path, "rb") as handler:
                return handler.read()
        except OSError as exc:
            logger.error(
                "Error in generating key for cswh",
                path=self.path,
                error=exc.__class__.__name__,
                reason=exc.strerror,
            )
            return b""


def _ensure_parent_dir(path: str) -> None:
    """Garantiza que exista el directorio padre del archivo de destino."""

    parent = os.path.dirname(path) or "."
    os.makedirs(parent, exist_ok=True)


def write_secret_key(path: str, size: int = 32, overwrite: bool = False) -> bool:
    """Genera un secreto aleatorio y lo guarda con escritura atómica.

    Args:
        path (str): Ruta del fichero de secreto.
        size (int): Número de bytes aleatorios.
        overwrite (bool): Reemplaza un secreto existente si es ``True``.

    Returns:
        bool: ``True`` si se escribió un secreto nuevo, ``False`` si ya existía.

    """

    if size < 16:
        raise ValueError("el secreto debe tener al menos 16 bytes")
    if os.path.exists(path) and not overwrite:
        return False

    _ensure_parent_dir(path)
    tmp_path = f"{path}.tmp"
    fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "wb") as handler:
        handler.write(os.urandom(size))
    os.replace(tmp_path, path)
    return True
