# --------------------------------------------------------------
# File: __init__.py
# Description: Fachada pública del paquete de servicios de tokens.
# --------------------------------------------------------------
"""Fachada pública para emitir y validar tokens de sesión."""

from cswh_api.services import TokenService, generate_token, validate_token

__all__ = ["TokenService", "generate_token", "validate_token"]
