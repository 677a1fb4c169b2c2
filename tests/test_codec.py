# --------------------------------------------------------------
# File: test_codec.py
# Description: Pruebas del formato de transporte del token y de su carga útil.
# --------------------------------------------------------------

import base64
import os

import pytest

from cswh_core.codec import decode_claims, decode_token, encode_claims, encode_token
from cswh_core.errors import TokenFormatError
from cswh_core.models import SealedPayload, TokenClaims, TokenParts


def _parts(ciphertext: bytes = b"ciphertext") -> TokenParts:
    sealed = SealedPayload(nonce=os.urandom(12), ciphertext=ciphertext, tag=os.urandom(16))
    return TokenParts(salt=os.urandom(16), sealed=sealed)


def test_token_layout():
    """El token es ``base64(salt)-base64(nonce || ciphertext || tag)``.

    Returns:
        None: Se decodifica manualmente cada componente.
    """
    parts = _parts()
    token = encode_token(parts)
    salt_b64, blob_b64 = token.split("-")
    assert base64.b64decode(salt_b64) == parts.salt
    blob = base64.b64decode(blob_b64)
    assert blob[:12] == parts.sealed.nonce
    assert blob[12:-16] == b"ciphertext"
    assert blob[-16:] == parts.sealed.tag


def test_decode_recovers_parts():
    parts = _parts()
    assert decode_token(encode_token(parts)) == parts


def test_decode_allows_empty_ciphertext():
    parts = _parts(ciphertext=b"")
    assert decode_token(encode_token(parts)).sealed.ciphertext == b""


@pytest.mark.parametrize(
    "token",
    [
        "onlyonepart",
        "not-base64!!!",
        "-" + base64.b64encode(b"x" * 40).decode(),
        base64.b64encode(b"s" * 16).decode() + "-",
        base64.b64encode(b"s" * 16).decode() + "-" + base64.b64encode(b"x" * 27).decode(),
        base64.b64encode(b"s" * 15).decode() + "-" + base64.b64encode(b"x" * 40).decode(),
        base64.b64encode(b"s" * 16).decode() + "-" + base64.b64encode(b"x" * 40).decode() + "-extra",
        "ñandú-ñandú",
    ],
)
def test_decode_rejects_malformed(token):
    """Entradas mal formadas producen `TokenFormatError`.

    Args:
        token (str): Token inválido a analizar.

    Returns:
        None: Se espera la excepción de formato.
    """
    with pytest.raises(TokenFormatError):
        decode_token(token)


def test_claims_payload_format():
    claims = TokenClaims(creation_time=255, binding_hash="abc123")
    assert encode_claims(claims) == b"ff abc123"
    assert decode_claims(b"ff abc123") == claims


@pytest.mark.parametrize(
    "payload",
    [b"", b"ff", b"ff ", b"zz abc", b"0xff abc", b"ff abc def", b"\xff\xfe abc", b" ff abc"],
)
def test_claims_payload_rejects_garbage(payload):
    with pytest.raises(TokenFormatError):
        decode_claims(payload)
