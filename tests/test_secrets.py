# --------------------------------------------------------------
# File: test_secrets.py
# Description: Pruebas de los proveedores de secreto y del fichero de secreto.
# --------------------------------------------------------------

import os
import stat
import sys

import pytest

from cswh_core.secrets import FileSecretProvider, StaticSecretProvider, write_secret_key


def test_write_secret_key_creates_file(tmp_path):
    """Genera un secreto nuevo sin dejar ficheros temporales.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.

    Returns:
        None: Las aserciones revisan contenido y residuos.
    """
    path = tmp_path / "nested" / "session_secret.key"
    assert write_secret_key(str(path)) is True
    assert len(path.read_bytes()) == 32
    assert not (tmp_path / "nested" / "session_secret.key.tmp").exists()


@pytest.mark.skipif(sys.platform.startswith("win"), reason="permisos POSIX")
def test_write_secret_key_is_private(tmp_path):
    path = tmp_path / "session_secret.key"
    write_secret_key(str(path))
    assert stat.S_IMODE(os.stat(path).st_mode) & 0o077 == 0


def test_write_secret_key_keeps_existing(tmp_path):
    path = tmp_path / "session_secret.key"
    path.write_bytes(b"existing-secret-material")
    assert write_secret_key(str(path)) is False
    assert path.read_bytes() == b"existing-secret-material"

    assert write_secret_key(str(path), size=48, overwrite=True) is True
    assert len(path.read_bytes()) == 48


def test_write_secret_key_rejects_short_size(tmp_path):
    with pytest.raises(ValueError):
        write_secret_key(str(tmp_path / "k"), size=8)


def test_file_provider_reads_bytes(tmp_path, logger):
    path = tmp_path / "session_secret.key"
    path.write_bytes(b"s3cr3t\n")
    assert FileSecretProvider(str(path)).load_secret(logger) == b"s3cr3t\n"
    assert logger.records == []


def test_file_provider_missing_file_degrades(tmp_path, logger):
    """Un fichero inexistente se registra y se sustituye por bytes vacíos.

    Returns:
        None: Se valida el valor devuelto y el registro del error.
    """
    missing = str(tmp_path / "nope.key")
    assert FileSecretProvider(missing).load_secret(logger) == b""
    assert logger.levels() == ["error"]
    assert missing in logger.last()
    assert "error='FileNotFoundError'" in logger.last()


def test_file_provider_unset_path_warns(logger):
    assert FileSecretProvider(None).load_secret(logger) == b""
    assert logger.levels() == ["warn", "error"]
    assert "Secret key missing" in logger.records[0][1]


def test_static_provider(logger):
    assert StaticSecretProvider(b"abc").load_secret(logger) == b"abc"
