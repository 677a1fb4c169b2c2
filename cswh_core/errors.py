# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de errores internos del ciclo de vida del token.
# --------------------------------------------------------------
"""Excepciones que clasifican por qué un token no es aceptable.

Solo circulan dentro del paquete: la fachada de servicios las captura y
las convierte en un único resultado booleano para no filtrar información
útil a quien sondea la validez de tokens.
"""


class TokenError(Exception):
    """Error base de cualquier fallo relacionado con el token."""


class SecretProviderError(TokenError):
    """El secreto no se pudo localizar o leer."""


class SecretUnavailable(SecretProviderError):
    """El secreto está vacío y la configuración exige fallar en cerrado."""


class TokenFormatError(TokenError):
    """El token o su carga útil no respetan el formato de transporte."""


class AuthFailure(TokenError):
    """AES-GCM rechazó el mensaje: tag, nonce, clave o datos alterados."""


class BindingMismatch(TokenError):
    """El hash de vinculación no coincide con el contexto del servidor."""


class TokenExpired(TokenError):
    """El token supera la ventana de frescura."""


class KeyDerivationError(TokenError):
    """La función de derivación rechazó sus parámetros o entradas."""
