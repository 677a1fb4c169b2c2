# --------------------------------------------------------------
# File: binding.py
# Description: Hash que vincula el token a su correlación y a la instancia.
# --------------------------------------------------------------
"""Construcción y comparación del hash de vinculación del token."""

import hashlib
import hmac

DEFAULT_BINDING_ALGORITHM = "sha1"


def bind(
    creation_time: int,
    auth_token: str,
    instance_id: str,
    algorithm: str = DEFAULT_BINDING_ALGORITHM,
) -> str:
    """Calcula el digest hexadecimal de ``"{creation_time}-{auth_token}-{instance_id}"``.

    Args:
        creation_time (int): Milisegundos epoch de emisión del token.
        auth_token (str): Valor de correlación proporcionado por el llamante.
        instance_id (str): Identificador de la instancia del servidor.
        algorithm (str): Nombre de un algoritmo de `hashlib`.

    Returns:
        str: Digest en hexadecimal.

    """

    digest = hashlib.new(algorithm)
    digest.update(f"{creation_time}-{auth_token}-{instance_id}".encode("utf-8"))
    return digest.hexdigest()


def binding_matches(expected: str, actual: str) -> bool:
    """Compara dos digests en tiempo constante."""

    return hmac.compare_digest(expected.encode("ascii", "replace"), actual.encode("ascii", "replace"))
