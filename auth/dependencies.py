"""
FastAPI dependencies for authentication.

``authenticate`` is the access gate proper: header in, ``TokenClaims`` out.
``get_current_identity`` wires it into routes so protected handlers receive
the claims as an ordinary parameter.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import verify_token
from auth.models import TokenClaims
from auth.service import AuthService
from auth.store import CredentialStore, SqlCredentialStore
from core.exceptions import MissingTokenError
from database.session import get_db_session

_BEARER_PREFIX = "bearer "


def authenticate(authorization: Optional[str]) -> TokenClaims:
    """
    Verify a ``Bearer <token>`` header value and return its claims.

    Raises ``MissingTokenError`` when there is no bearer token and
    ``InvalidOrExpiredTokenError`` when verification fails. The credential
    store is not consulted: a token stays valid until it expires.
    """
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        raise MissingTokenError()
    token = authorization[len(_BEARER_PREFIX):].strip()
    if not token:
        raise MissingTokenError()
    return verify_token(token)


async def get_current_identity(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> TokenClaims:
    return authenticate(authorization)


async def get_credential_store(
    session: AsyncSession = Depends(get_db_session),
) -> CredentialStore:
    return SqlCredentialStore(session)


async def get_auth_service(
    store: CredentialStore = Depends(get_credential_store),
) -> AuthService:
    return AuthService(store)
