# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-GCM para sellar y abrir la carga útil del token.
# --------------------------------------------------------------
"""Rutinas de cifrado autenticado para las afirmaciones del token."""

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from cswh_core.errors import AuthFailure
from cswh_core.models import AUTH_TAG_BYTE_LEN, IV_BYTE_LEN, KEY_BYTE_LEN, SealedPayload


def seal(plaintext: bytes, key: bytes) -> SealedPayload:
    """Cifra datos con AES-256-GCM usando un nonce aleatorio nuevo.

    Args:
        plaintext (bytes): Datos en claro que se cifrarán.
        key (bytes): Clave simétrica de 256 bits.

    Returns:
        SealedPayload: Resultado con `nonce`, `ciphertext` y `tag`.

    """

    nonce = os.urandom(IV_BYTE_LEN)
    aes = AESGCM(key)
    ct_full = aes.encrypt(nonce, plaintext, None)
    tag = ct_full[-AUTH_TAG_BYTE_LEN:]
    ciphertext = ct_full[:-AUTH_TAG_BYTE_LEN]
    return SealedPayload(nonce=nonce, ciphertext=ciphertext, tag=tag)


def open_sealed(
    nonce: bytes,
    ciphertext: bytes,
    tag: bytes,
    key: bytes,
) -> bytes:
    """Descifra y autentica datos sellados con :func:`seal`.

    Args:
        nonce (bytes): Vector de inicialización de 96 bits.
        ciphertext (bytes): Datos cifrados sin etiqueta.
        tag (bytes): Etiqueta de autenticación de 128 bits.
        key (bytes): Clave simétrica de 256 bits.

    Returns:
        bytes: Mensaje original en claro.

    Raises:
        AuthFailure: Si el tag no coincide o alguna longitud es incorrecta.

    """

    if len(key) != KEY_BYTE_LEN:
        raise AuthFailure(f"longitud de clave inválida: {len(key)}")
    if len(nonce) != IV_BYTE_LEN:
        raise AuthFailure(f"longitud de nonce inválida: {len(nonce)}")
    if len(tag) != AUTH_TAG_BYTE_LEN:
        raise AuthFailure(f"longitud de tag inválida: {len(tag)}")

    aes = AESGCM(key)
    try:
        return aes.decrypt(nonce, ciphertext + tag, None)
    except InvalidTag as exc:
        raise AuthFailure("tag de autenticación no válido") from exc
