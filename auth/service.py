"""
Auth service — registration, login and session-token issuance.
"""

from __future__ import annotations

import asyncio
import logging

from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from auth.jwt import create_token
from auth.models import AuthResult, PublicIdentity, Role
from auth.password import (
    MAX_PASSWORD_BYTES,
    dummy_hash,
    hash_password_async,
    password_too_long,
    verify_password_async,
)
from auth.store import CredentialStore
from config.settings import config
from core.exceptions import (
    DuplicateCredentialError,
    InvalidCredentialsError,
    InvalidInputError,
)
from database.models import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def public_identity(user: User) -> PublicIdentity:
    return PublicIdentity(
        id=str(user.user_id),
        full_name=user.full_name,
        email=user.email,
        role=Role(user.role),
    )


class AuthService:
    """
    Orchestrates the credential store, bcrypt and JWT signing.

    Secret, token lifetime and bcrypt cost default to the process config
    but can be injected (tests use a low cost factor).
    """

    def __init__(
        self,
        store: CredentialStore,
        *,
        secret: str | None = None,
        expires_in: str | int | None = None,
        bcrypt_rounds: int | None = None,
    ):
        self.store = store
        self.secret = secret or config.jwt_secret
        self.expires_in = expires_in if expires_in is not None else config.jwt_expires_in
        self.bcrypt_rounds = bcrypt_rounds or config.bcrypt_rounds

    async def register(self, full_name: str, email: str, password: str) -> AuthResult:
        """Create a user and return a session token for it."""
        full_name = full_name.strip()
        email = normalize_email(email)
        if not full_name:
            raise InvalidInputError("full_name must not be empty")
        if not password:
            raise InvalidInputError("password must not be empty")
        if password_too_long(password):
            raise InvalidInputError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        try:
            validate_email(email)
        except PydanticCustomError:
            raise InvalidInputError("email is not a valid address")

        if await self.store.find_by_email(email) is not None:
            raise DuplicateCredentialError()

        password_hash = await hash_password_async(password, self.bcrypt_rounds)
        user = await self.store.insert(
            full_name=full_name,
            email=email,
            password_hash=password_hash,
            role=Role.USER.value,
        )
        logger.info("Registered user %s", user.user_id)
        return self.issue_token(user)

    async def login(self, email: str, password: str) -> AuthResult:
        """Verify credentials and return a fresh session token."""
        user = await self.store.find_by_email(normalize_email(email))
        if user is not None:
            password_hash = user.password_hash
        else:
            password_hash = await asyncio.to_thread(dummy_hash, self.bcrypt_rounds)
        password_ok = await verify_password_async(password, password_hash)

        if user is None or not password_ok:
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()

        logger.info("Login: %s", user.user_id)
        return self.issue_token(user)

    def issue_token(self, user: User) -> AuthResult:
        identity = public_identity(user)
        token = create_token(
            {"sub": identity.id, "email": identity.email, "role": identity.role.value},
            secret=self.secret,
            expires_in=self.expires_in,
        )
        return AuthResult(access_token=token, user=identity)
