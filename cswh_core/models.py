# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes utilizados por la capa criptográfica.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan las piezas del token de sesión."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SALT_BYTE_LEN = 16
IV_BYTE_LEN = 12
AUTH_TAG_BYTE_LEN = 16
KEY_BYTE_LEN = 32


class KdfParams(BaseModel):
    """Parámetros de la derivación de la clave del token.

    Attributes:
        algorithm (str): ``scrypt`` (compatible con los tokens del servidor de la UI) o
            ``argon2id``.
        length (int): Longitud en bytes de la clave derivada.
        scrypt_n (int): Coste CPU/memoria de scrypt, potencia de dos.
        scrypt_r (int): Tamaño de bloque de scrypt.
        scrypt_p (int): Paralelismo de scrypt.
        argon2_time_cost (int): Iteraciones Argon2id.
        argon2_memory_cost (int): Memoria Argon2id en KiB.
        argon2_parallelism (int): Paralelismo Argon2id.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    algorithm: Literal["scrypt", "argon2id"] = "scrypt"
    length: int = Field(default=KEY_BYTE_LEN, ge=16)
    scrypt_n: int = Field(default=2**14, gt=1)
    scrypt_r: int = Field(default=8, ge=1)
    scrypt_p: int = Field(default=1, ge=1)
    argon2_time_cost: int = Field(default=3, ge=1)
    argon2_memory_cost: int = Field(default=64 * 1024, ge=8)
    argon2_parallelism: int = Field(default=1, ge=1)

    @field_validator("scrypt_n")
    @classmethod
    def _power_of_two(cls, value: int) -> int:
        if value & (value - 1):
            raise ValueError("scrypt_n debe ser potencia de dos")
        return value

    @model_validator(mode="after")
    def _argon2_memory_per_lane(self) -> "KdfParams":
        # Argon2 exige al menos 8 KiB de memoria por carril de paralelismo.
        if self.argon2_memory_cost < 8 * self.argon2_parallelism:
            raise ValueError("argon2_memory_cost debe ser >= 8 * argon2_parallelism")
        return self


class SealedPayload(BaseModel):
    """Representa el resultado de una operación AES-GCM.

    Attributes:
        nonce (bytes): Vector de inicialización de 96 bits.
        ciphertext (bytes): Datos cifrados sin etiqueta.
        tag (bytes): Etiqueta de autenticación de 128 bits.

    """

    model_config = ConfigDict(frozen=True)

    nonce: bytes
    ciphertext: bytes
    tag: bytes


class TokenParts(BaseModel):
    """Componentes binarios que viajan dentro del token."""

    model_config = ConfigDict(frozen=True)

    salt: bytes
    sealed: SealedPayload


class TokenClaims(BaseModel):
    """Afirmaciones cifradas dentro del token.

    Attributes:
        creation_time (int): Instante de emisión en milisegundos epoch.
        binding_hash (str): Digest hexadecimal que vincula el token a su contexto.

    """

    model_config = ConfigDict(frozen=True)

    creation_time: int = Field(ge=0)
    binding_hash: str = Field(min_length=1)
