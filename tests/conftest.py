# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas: secreto temporal, configuración y logger.
# --------------------------------------------------------------

from typing import List, Tuple

import pytest

from cswh_api.services import TokenService
from cswh_core.config import TokenConfig
from cswh_core.models import KdfParams
from cswh_core.secrets import write_secret_key

# scrypt con coste reducido para que las pruebas no tarden; el algoritmo es el mismo.
FAST_KDF = KdfParams(scrypt_n=2**10)


class RecordingLogger:
    """Logger mínimo con ``warn(msg)`` y ``error(msg)`` que guarda cada llamada."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str]] = []

    def warn(self, message: str) -> None:
        self.records.append(("warn", message))

    def error(self, message: str) -> None:
        self.records.append(("error", message))

    def levels(self) -> List[str]:
        return [level for level, _ in self.records]

    def last(self) -> str:
        return self.records[-1][1]


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def secret_path(tmp_path) -> str:
    """Crea un fichero de secreto aleatorio dentro de la carpeta temporal.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.

    Returns:
        str: Ruta del fichero generado.
    """
    path = tmp_path / "config" / "session_secret.key"
    write_secret_key(str(path))
    return str(path)


@pytest.fixture
def config(secret_path) -> TokenConfig:
    return TokenConfig(secret_key_path=secret_path, instance_id="instance-a", kdf=FAST_KDF)


@pytest.fixture
def service(config, logger) -> TokenService:
    return TokenService(config, logger=logger)


@pytest.fixture
def fast_kdf() -> KdfParams:
    return FAST_KDF
