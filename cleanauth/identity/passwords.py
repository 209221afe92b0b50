"""
===============================================================================
TARJETA CRC — identity/passwords.py
===============================================================================

Módulo:
    Hashing de passwords (Argon2)

Responsabilidades:
    - Hashear passwords con un digest autodescriptivo (PHC string: algoritmo,
      parámetros de costo y salt embebidos).
    - Verificar password vs digest sin lanzar nunca.
    - Igualar el costo de "email desconocido" y "password incorrecto".

Colaboradores:
    - domain.services.PasswordHasher (puerto que implementa)
    - application/usecases/auth/login.py
    - application/usecases/users/create_user.py

Decisiones:
    - La criptografía vive en el borde de identidad, NO en dominio.
    - No loguear passwords ni digests.
===============================================================================
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import Argon2Error

from ..crosscutting.logger import logger
from ..domain.errors import InvalidPasswordInput

# R: señuelo fijo para dummy_verify (nunca coincide con un password real).
_DECOY_PASSWORD = "decoy-password-never-matches"


class Argon2PasswordHasher:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      Argon2PasswordHasher

    Responsabilidades:
      - hash(): PHC string argon2id
      - verify(): bool, False ante cualquier error
      - needs_rehash(): parámetros desactualizados
      - dummy_verify(): verificación señuelo para igualar tiempos

    Colaboradores:
      - argon2.PasswordHasher
    ----------------------------------------------------------------------------
    """

    def __init__(self, hasher: PasswordHasher | None = None):
        self._hasher = hasher or PasswordHasher()
        self._decoy_digest = self._hasher.hash(_DECOY_PASSWORD)

    def hash(self, plaintext: str) -> str:
        if plaintext is None or not plaintext.strip():
            raise InvalidPasswordInput()
        return self._hasher.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        if not plaintext or not digest:
            return False
        try:
            return self._hasher.verify(digest, plaintext)
        except (Argon2Error, ValueError, TypeError) as exc:
            # Mismatch, digest corrupto o de otro algoritmo: siempre False.
            logger.debug(
                "Verificación de password fallida",
                extra={"reason": type(exc).__name__},
            )
            return False

    def needs_rehash(self, digest: str) -> bool:
        return self._hasher.check_needs_rehash(digest)

    def dummy_verify(self, plaintext: str) -> None:
        self.verify(plaintext or "-", self._decoy_digest)
