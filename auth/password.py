"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor (``config.bcrypt_rounds``).

bcrypt only looks at the first 72 bytes of input (and recent releases
refuse anything longer), so callers must reject longer passwords up front
with ``password_too_long``.

bcrypt is deliberately slow, so the ``*_async`` variants push the work
onto a worker thread with ``asyncio.to_thread()`` to keep the event loop
responsive.
"""

from __future__ import annotations

import asyncio
from functools import lru_cache

import bcrypt

from config.settings import config

MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    salt = bcrypt.gensalt(rounds=rounds or config.bcrypt_rounds)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=None)
def dummy_hash(rounds: int) -> str:
    """Hash checked when the account does not exist, so both paths cost one bcrypt round-trip."""
    return hash_password("no-such-account", rounds)


async def hash_password_async(password: str, rounds: int | None = None) -> str:
    return await asyncio.to_thread(hash_password, password, rounds)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, password, password_hash)
