# --------------------------------------------------------------
# File: config.py
# Description: Configuración del emisor de tokens desde entorno o diccionario.
# --------------------------------------------------------------
"""Configuración tipada para la emisión y validación de tokens."""

from __future__ import annotations

import hashlib
import os
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from cswh_core.binding import DEFAULT_BINDING_ALGORITHM
from cswh_core.models import KdfParams

ONE_HOUR_MILLIS = 60 * 60 * 1000

# Claves utilizadas por la configuración del servidor de la UI.
SECRET_PATH_KEY = "session.secret.key.path"
INSTANCE_ID_KEY = "instance.metadata.id"


def _env_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


class TokenConfig(BaseModel):
    """Parámetros que comparten emisor y verificador.

    Attributes:
        secret_key_path (Optional[str]): Ruta del fichero con el secreto.
        instance_id (str): Identificador de la instancia del servidor.
        freshness_window_ms (int): Edad máxima aceptada en milisegundos.
        binding_algorithm (str): Algoritmo `hashlib` del hash de vinculación.
        kdf (KdfParams): Parámetros de derivación de la clave.
        require_secret (bool): Si es ``True`` un secreto vacío impide emitir y
            validar tokens en lugar de degradar a una clave débil.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    secret_key_path: Optional[str] = None
    instance_id: str = ""
    freshness_window_ms: int = Field(default=ONE_HOUR_MILLIS, gt=0)
    binding_algorithm: str = DEFAULT_BINDING_ALGORITHM
    kdf: KdfParams = Field(default_factory=KdfParams)
    require_secret: bool = False

    @field_validator("binding_algorithm")
    @classmethod
    def _known_algorithm(cls, value: str) -> str:
        if value not in hashlib.algorithms_available:
            raise ValueError(f"algoritmo de hash desconocido: {value}")
        return value

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "TokenConfig":
        """Construye la configuración a partir del diccionario del servidor.

        Acepta tanto las claves con puntos del servidor de la UI
        (``session.secret.key.path``, ``instance.metadata.id``) como los
        nombres de campo de este modelo.
        """

        data = {k: v for k, v in mapping.items() if k in cls.model_fields}
        if SECRET_PATH_KEY in mapping:
            data.setdefault("secret_key_path", mapping[SECRET_PATH_KEY] or None)
        if INSTANCE_ID_KEY in mapping:
            data.setdefault("instance_id", str(mapping[INSTANCE_ID_KEY] or ""))
        return cls(**data)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "TokenConfig":
        """Carga la configuración desde variables ``CSWH_*`` (y un `.env`)."""

        load_dotenv(dotenv_path)
        data: dict = {
            "secret_key_path": os.getenv("CSWH_SECRET_KEY_PATH") or None,
            "instance_id": os.getenv("CSWH_INSTANCE_ID", ""),
            "require_secret": _env_flag(os.getenv("CSWH_REQUIRE_SECRET")),
        }
        window = os.getenv("CSWH_FRESHNESS_WINDOW_MS")
        if window:
            data["freshness_window_ms"] = window
        algorithm = os.getenv("CSWH_BINDING_ALGORITHM")
        if algorithm:
            data["binding_algorithm"] = algorithm
        kdf_algorithm = os.getenv("CSWH_KDF_ALGORITHM")
        if kdf_algorithm:
            data["kdf"] = {"algorithm": kdf_algorithm}
        return cls(**data)
