"""
Credential store — persistence of identity records.

``CredentialStore`` is the interface the auth service depends on;
``SqlCredentialStore`` implements it over an ``AsyncSession``.
"""

from __future__ import annotations

from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateCredentialError
from database.models import User


class CredentialStore(Protocol):
    async def find_by_email(self, email: str) -> Optional[User]:
        """Return the user with this (already normalized) email, or None."""
        ...

    async def insert(
        self,
        *,
        full_name: str,
        email: str,
        password_hash: str,
        role: str = "user",
    ) -> User:
        """Persist a new user; the store assigns id and timestamps."""
        ...


class SqlCredentialStore:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self._session.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def insert(
        self,
        *,
        full_name: str,
        email: str,
        password_hash: str,
        role: str = "user",
    ) -> User:
        user = User(
            full_name=full_name,
            email=email,
            password_hash=password_hash,
            role=role,
        )
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            # lost a race with a concurrent registration for the same email
            raise DuplicateCredentialError() from exc
        return user
