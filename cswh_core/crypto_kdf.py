# --------------------------------------------------------------
# File: crypto_kdf.py
# Description: Derivación de la clave del token mediante scrypt o Argon2id.
# --------------------------------------------------------------
"""Funciones de derivación de claves a partir del secreto del servidor."""

from typing import Optional

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from cswh_core.errors import KeyDerivationError
from cswh_core.models import KdfParams

DEFAULT_KDF_PARAMS = KdfParams()


def derive_token_key(
    secret: bytes, salt: bytes, params: Optional[KdfParams] = None
) -> bytes:
    """Deriva la clave simétrica de un token a partir del secreto y su salt.

    La derivación es deliberadamente costosa en CPU y memoria. Un secreto
    vacío (proveedor degradado) se acepta y produce una clave débil.

    Args:
        secret (bytes): Material secreto del servidor, posiblemente vacío.
        salt (bytes): Salt aleatoria del token, viaja en claro.
        params (Optional[KdfParams]): Algoritmo y costes de la derivación.

    Returns:
        bytes: Clave derivada de ``params.length`` bytes, determinista para
        el mismo par (secreto, salt).

    Raises:
        KeyDerivationError: Si Argon2id rechaza los parámetros.

    """

    params = params or DEFAULT_KDF_PARAMS
    if params.algorithm == "argon2id":
        try:
            return hash_secret_raw(
                secret,
                salt,
                time_cost=params.argon2_time_cost,
                memory_cost=params.argon2_memory_cost,
                parallelism=params.argon2_parallelism,
                hash_len=params.length,
                type=Type.ID,
            )
        except HashingError as exc:
            raise KeyDerivationError(f"argon2id: {exc}") from exc

    kdf = Scrypt(
        salt=salt,
        length=params.length,
        n=params.scrypt_n,
        r=params.scrypt_r,
        p=params.scrypt_p,
    )
    return kdf.derive(secret)
