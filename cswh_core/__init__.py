# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública de las primitivas del token de sesión.
# --------------------------------------------------------------
"""Inicializa el paquete `cswh_core` y documenta sus módulos principales."""

__all__ = [
    "binding",
    "codec",
    "config",
    "crypto_kdf",
    "crypto_sym",
    "errors",
    "logging_config",
    "models",
    "secrets",
]
