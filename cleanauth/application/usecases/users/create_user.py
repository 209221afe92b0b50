"""
===============================================================================
USE CASE: Create User
===============================================================================

Business Goal:
    Registrar un usuario nuevo con password hasheado y encolar el email de
    bienvenida.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateUserUseCase

Responsibilities:
    - Validar input acumulando errores por campo.
    - Rechazar emails ya registrados.
    - Hashear el password y construir el agregado User.
    - Persistir y encolar el email de bienvenida.

Collaborators:
    - UserRepository: email_exists, add
    - PasswordHasher: hash
    - EmailQueue: enqueue

-------------------------------------------------------------------------------
INPUTS / OUTPUTS
-------------------------------------------------------------------------------
Inputs:
    - CreateUserInput: email, first_name, last_name, password

Outputs:
    - UserResult (read model, nunca con hash ni refresh token)

Error Mapping:
    - VALIDATION_ERROR: uno o más campos inválidos (errors por campo)
    - EMAIL_EXISTS: email ya registrado
===============================================================================
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from typing import Callable

from ....crosscutting.logger import logger
from ....domain.entities import User, UserReadModel, utcnow
from ....domain.errors import EmailAlreadyExistsError
from ....domain.repositories import UserRepository
from ....domain.services import EmailMessage, EmailQueue, PasswordHasher
from .user_results import UserError, UserErrorCode, UserResult

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 8

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")

VALIDATION_MESSAGE = "One or more validation errors occurred"


@dataclass(frozen=True)
class CreateUserInput:
    email: str
    first_name: str
    last_name: str
    password: str


def validate_name(value: str, label: str) -> list[str]:
    if not (value or "").strip():
        return [f"{label} is required"]
    if not NAME_MIN_LENGTH <= len(value.strip()) <= NAME_MAX_LENGTH:
        return [
            f"{label} must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
        ]
    return []


def validate_password(value: str) -> list[str]:
    if not value:
        return ["Password is required"]
    messages = []
    if len(value) < PASSWORD_MIN_LENGTH:
        messages.append(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
        )
    if not re.search(r"[A-Z]", value):
        messages.append("Password must contain uppercase letter")
    if not re.search(r"[a-z]", value):
        messages.append("Password must contain lowercase letter")
    if not re.search(r"[0-9]", value):
        messages.append("Password must contain digit")
    return messages


def validate_create_user(input_data: CreateUserInput) -> dict[str, list[str]]:
    """Devuelve {campo: [mensajes]}; vacío si el input es válido."""
    errors: dict[str, list[str]] = {}

    email = (input_data.email or "").strip()
    if not email:
        errors["email"] = ["Email is required"]
    elif not _EMAIL_RE.match(email):
        errors["email"] = ["Email must be valid"]

    if messages := validate_name(input_data.first_name, "First name"):
        errors["firstName"] = messages
    if messages := validate_name(input_data.last_name, "Last name"):
        errors["lastName"] = messages
    if messages := validate_password(input_data.password):
        errors["password"] = messages

    return errors


def welcome_email(user: User) -> EmailMessage:
    return EmailMessage(
        to=user.email,
        subject="Welcome!",
        body=f"Hello {user.first_name}, your account has been created.",
    )


class CreateUserUseCase:
    def __init__(
        self,
        repository: UserRepository,
        hasher: PasswordHasher,
        outbox: EmailQueue,
        clock: Callable = utcnow,
    ) -> None:
        self._users = repository
        self._hasher = hasher
        self._outbox = outbox
        self._clock = clock

    async def execute(self, input_data: CreateUserInput) -> UserResult:
        errors = validate_create_user(input_data)
        if errors:
            return UserResult(
                error=UserError(
                    code=UserErrorCode.VALIDATION_ERROR,
                    message=VALIDATION_MESSAGE,
                    errors=errors,
                )
            )

        email = input_data.email.strip()
        if await self._users.email_exists(email):
            return self._email_exists(email)

        password_hash = await asyncio.to_thread(self._hasher.hash, input_data.password)
        user = User.create(
            email=email,
            first_name=input_data.first_name,
            last_name=input_data.last_name,
            password_hash=password_hash,
            now=self._clock(),
        )

        try:
            await self._users.add(user)
        except EmailAlreadyExistsError:
            # R: carrera entre email_exists y add; el índice único decide.
            return self._email_exists(email)

        self._outbox.enqueue(welcome_email(user))
        logger.info("Usuario creado", extra={"user_id": str(user.id)})
        return UserResult(user=UserReadModel.from_user(user))

    @staticmethod
    def _email_exists(email: str) -> UserResult:
        return UserResult(
            error=UserError(
                code=UserErrorCode.EMAIL_EXISTS,
                message=EmailAlreadyExistsError(email).message,
            )
        )
