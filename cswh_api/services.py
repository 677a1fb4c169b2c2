# --------------------------------------------------------------
# File: services.py
# Description: Emisión y validación de tokens de sesión sin estado.
# --------------------------------------------------------------
"""Servicio que convierte afirmaciones en un token opaco y viceversa.

Pasos de la emisión:

1. Obtener el secreto del proveedor y el identificador de instancia.
2. Calcular el hash de ``creation_time-auth_token-instance_id``.
3. Derivar una clave con una salt nueva para evitar tablas precalculadas.
4. Cifrar ``"<creation_time en hex> <hash>"`` con AES-256-GCM.
5. Devolver ``base64(salt)-base64(nonce || ciphertext || tag)``.

La validación recorre los pasos al revés y exige que el hash recalculado
coincida y que el token tenga menos edad que la ventana de frescura.
"""

from __future__ import annotations

import asyncio
import os
import time
from typing import Any, Callable, Mapping, Optional, Union

from cswh_core.binding import bind, binding_matches
from cswh_core.codec import decode_claims, decode_token, encode_claims, encode_token
from cswh_core.config import TokenConfig
from cswh_core.crypto_kdf import derive_token_key
from cswh_core.crypto_sym import open_sealed, seal
from cswh_core.errors import BindingMismatch, SecretUnavailable, TokenError, TokenExpired
from cswh_core.logging_config import as_token_logger
from cswh_core.models import SALT_BYTE_LEN, TokenClaims, TokenParts
from cswh_core.secrets import FileSecretProvider, SecretProvider

ConfigLike = Union[TokenConfig, Mapping[str, Any]]


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


class TokenService:
    """Emite y valida tokens ligados a una correlación y a una instancia.

    Cada llamada es independiente: secreto, salt, clave y afirmaciones son
    locales a la operación, por lo que el servicio puede compartirse entre
    hilos sin bloqueos.

    Args:
        config (TokenConfig): Identificador de instancia, ventana y KDF.
        secret_provider (Optional[SecretProvider]): Fuente del secreto; por
            defecto lee ``config.secret_key_path``.
        logger (Any): Logger con ``warning`` y ``error``; structlog por defecto.
        clock (Optional[Callable[[], int]]): Reloj en milisegundos epoch.

    """

    def __init__(
        self,
        config: TokenConfig,
        secret_provider: Optional[SecretProvider] = None,
        logger: Any = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.config = config
        self.secret_provider = secret_provider or FileSecretProvider(config.secret_key_path)
        self.logger = as_token_logger(logger)
        self._clock = clock or _now_millis

    def _load_secret(self) -> bytes:
        secret = self.secret_provider.load_secret(self.logger)
        if not secret:
            if self.config.require_secret:
                raise SecretUnavailable("secret key is empty and require_secret is enabled")
            self.logger.warning("Deriving cswh token key from an empty secret")
        return secret

    def issue(self, auth_token: str = "") -> str:
        """Emite un token nuevo para ``auth_token``.

        Args:
            auth_token (str): Valor de correlación que el cliente presentará.

        Returns:
            str: Token opaco, distinto en cada llamada.

        Raises:
            SecretUnavailable: Solo si ``require_secret`` está activo y el
                secreto está vacío.

        """

        secret = self._load_secret()
        salt = os.urandom(SALT_BYTE_LEN)
        key = derive_token_key(secret, salt, self.config.kdf)

        creation_time = self._clock()
        claims = TokenClaims(
            creation_time=creation_time,
            binding_hash=bind(
                creation_time,
                auth_token,
                self.config.instance_id,
                self.config.binding_algorithm,
            ),
        )
        sealed = seal(encode_claims(claims), key)
        return encode_token(TokenParts(salt=salt, sealed=sealed))

    def _check(self, token: str, auth_token: str) -> TokenClaims:
        parts = decode_token(token)
        secret = self._load_secret()
        key = derive_token_key(secret, parts.salt, self.config.kdf)
        sealed = parts.sealed
        claims = decode_claims(open_sealed(sealed.nonce, sealed.ciphertext, sealed.tag, key))

        # creation_time sale del token; auth_token e instance_id del contexto de confianza.
        expected = bind(
            claims.creation_time,
            auth_token,
            self.config.instance_id,
            self.config.binding_algorithm,
        )
        if not binding_matches(expected, claims.binding_hash):
            raise BindingMismatch("binding hash does not match this context")

        age = self._clock() - claims.creation_time
        if age >= self.config.freshness_window_ms:
            raise TokenExpired(f"token age {age} ms exceeds {self.config.freshness_window_ms} ms")
        return claims

    def verify(self, token: Optional[str], auth_token: str = "") -> bool:
        """Valida un token sin revelar el motivo de un rechazo.

        Args:
            token (Optional[str]): Token recibido del cliente.
            auth_token (str): Valor de correlación esperado.

        Returns:
            bool: ``True`` si el token es auténtico, está ligado a este
            contexto y no ha caducado; ``False`` en cualquier otro caso.

        """

        if not token or not isinstance(token, str):
            return False
        try:
            self._check(token, auth_token)
        except TokenError as exc:
            self.logger.error(
                "Validating token failed",
                error=exc.__class__.__name__,
                reason=str(exc),
            )
            return False
        except (ValueError, TypeError) as exc:
            self.logger.error("Validating token failed", error=exc.__class__.__name__)
            return False
        return True

    async def issue_async(self, auth_token: str = "") -> str:
        """Variante de :meth:`issue` que ejecuta la KDF en un hilo aparte."""

        return await asyncio.to_thread(self.issue, auth_token)

    async def verify_async(self, token: Optional[str], auth_token: str = "") -> bool:
        """Variante de :meth:`verify` que no bloquea el bucle de eventos."""

        return await asyncio.to_thread(self.verify, token, auth_token)


def _coerce_config(config: ConfigLike) -> TokenConfig:
    if isinstance(config, TokenConfig):
        return config
    return TokenConfig.from_mapping(config)


def generate_token(config: ConfigLike, logger: Any = None, auth_token: str = "") -> str:
    """Emite un token a partir de la configuración del servidor.

    Args:
        config (ConfigLike): `TokenConfig` o diccionario con
            ``session.secret.key.path`` e ``instance.metadata.id``.
        logger (Any): Logger con ``warning`` y ``error``.
        auth_token (str): Valor de correlación del cliente.

    Returns:
        str: Token opaco.

    """

    return TokenService(_coerce_config(config), logger=logger).issue(auth_token)


def validate_token(
    token: Optional[str], config: ConfigLike, logger: Any = None, auth_token: str = ""
) -> bool:
    """Valida un token emitido con :func:`generate_token`."""

    return TokenService(_coerce_config(config), logger=logger).verify(token, auth_token)
