# --------------------------------------------------------------
# File: codec.py
# Description: Formato de transporte del token y de su carga útil en claro.
# --------------------------------------------------------------
"""Serialización del token ``base64(salt)-base64(nonce || ct || tag)``.

La separación se hace en la primera aparición del delimitador, de modo que
el análisis no depende de que el alfabeto Base64 excluya ``-``.
"""

import base64
import binascii
import re

from cswh_core.errors import TokenFormatError
from cswh_core.models import (
    AUTH_TAG_BYTE_LEN,
    IV_BYTE_LEN,
    SALT_BYTE_LEN,
    SealedPayload,
    TokenClaims,
    TokenParts,
)

DELIMITER = "-"

_HEX = re.compile(r"[0-9a-f]+")


def _b64(data: bytes) -> str:
    """Codifica datos binarios en Base64 estándar con relleno."""

    return base64.b64encode(data).decode("ascii")


def _unb64(value: str, component: str) -> bytes:
    """Decodifica Base64 estándar de forma estricta.

    Raises:
        TokenFormatError: Si el valor contiene caracteres fuera del alfabeto
            o un relleno incorrecto.

    """

    try:
        return base64.b64decode(value.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise TokenFormatError(f"{component} no es Base64 válido") from exc


def encode_token(parts: TokenParts) -> str:
    """Serializa las piezas binarias del token en una cadena apta para transporte.

    Args:
        parts (TokenParts): Salt y carga sellada con AES-GCM.

    Returns:
        str: Token opaco ``base64(salt)-base64(nonce || ciphertext || tag)``.

    """

    sealed = parts.sealed
    blob = sealed.nonce + sealed.ciphertext + sealed.tag
    return f"{_b64(parts.salt)}{DELIMITER}{_b64(blob)}"


def decode_token(token: str) -> TokenParts:
    """Analiza un token recibido y separa salt, nonce, ciphertext y tag.

    Args:
        token (str): Token opaco recibido del cliente.

    Returns:
        TokenParts: Componentes binarios listos para descifrar.

    Raises:
        TokenFormatError: Si falta el delimitador, algún componente está vacío
            o no es Base64, o las longitudes no cuadran.

    """

    salt_b64, sep, blob_b64 = token.partition(DELIMITER)
    if not sep:
        raise TokenFormatError("falta el delimitador del token")
    if not salt_b64 or not blob_b64:
        raise TokenFormatError("componente del token vacío")

    salt = _unb64(salt_b64, "salt")
    blob = _unb64(blob_b64, "carga cifrada")
    if len(salt) != SALT_BYTE_LEN:
        raise TokenFormatError(f"longitud de salt inválida: {len(salt)}")
    if len(blob) < IV_BYTE_LEN + AUTH_TAG_BYTE_LEN:
        raise TokenFormatError(f"carga cifrada demasiado corta: {len(blob)}")

    sealed = SealedPayload(
        nonce=blob[:IV_BYTE_LEN],
        ciphertext=blob[IV_BYTE_LEN:-AUTH_TAG_BYTE_LEN],
        tag=blob[-AUTH_TAG_BYTE_LEN:],
    )
    return TokenParts(salt=salt, sealed=sealed)


def encode_claims(claims: TokenClaims) -> bytes:
    """Serializa las afirmaciones como ``"{creation_time en hex} {binding_hash}"``."""

    return f"{claims.creation_time:x} {claims.binding_hash}".encode("utf-8")


def decode_claims(payload: bytes) -> TokenClaims:
    """Recupera las afirmaciones de la carga útil descifrada.

    Args:
        payload (bytes): Texto en claro devuelto por AES-GCM.

    Returns:
        TokenClaims: Instante de creación y hash de vinculación.

    Raises:
        TokenFormatError: Si la carga no tiene la forma ``"<hex> <hex>"``.

    """

    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TokenFormatError("carga útil no es UTF-8") from exc

    timestamp_hex, sep, binding_hash = text.partition(" ")
    if not sep or not _HEX.fullmatch(timestamp_hex) or not _HEX.fullmatch(binding_hash):
        raise TokenFormatError("carga útil con formato inesperado")
    return TokenClaims(creation_time=int(timestamp_hex, 16), binding_hash=binding_hash)
