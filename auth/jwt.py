"""
JWT creation and verification.

Tokens are HS256-signed JWTs (PyJWT) carrying ``sub``, ``email``, ``role``,
``iat`` and ``exp``. Secret, algorithm and lifetime default to
``config.jwt_secret`` / ``config.jwt_algorithm`` / ``config.jwt_expires_in``.
"""

from __future__ import annotations

import re
import time
from typing import Any, Dict

import jwt
from pydantic import ValidationError

from auth.models import TokenClaims
from config.settings import config
from core.exceptions import InvalidOrExpiredTokenError

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str | int) -> int:
    """Convert ``"1d"``, ``"12h"``, ``"30m"``, ``"90s"`` or ``"3600"`` to seconds."""
    if isinstance(value, int):
        seconds = value
    else:
        match = _DURATION_RE.match(value.lower())
        if match is None:
            raise ValueError(f"Unrecognised duration: {value!r}")
        seconds = int(match.group(1)) * _UNIT_SECONDS[match.group(2)]
    if seconds <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")
    return seconds


def create_token(
    claims: Dict[str, Any],
    *,
    secret: str | None = None,
    expires_in: str | int | None = None,
    algorithm: str | None = None,
    now: int | None = None,
) -> str:
    """Sign ``claims`` with an ``iat``/``exp`` window and return the JWT."""
    issued_at = int(time.time()) if now is None else now
    lifetime = parse_duration(expires_in if expires_in is not None else config.jwt_expires_in)
    payload = {**claims, "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(
        payload,
        secret or config.jwt_secret,
        algorithm=algorithm or config.jwt_algorithm,
    )


def verify_token(
    token: str,
    *,
    secret: str | None = None,
    algorithm: str | None = None,
) -> TokenClaims:
    """
    Verify signature and expiry, returning the decoded claims.

    Raises ``InvalidOrExpiredTokenError`` on any failure (malformed,
    bad signature, expired, missing claims).
    """
    try:
        payload = jwt.decode(
            token,
            secret or config.jwt_secret,
            algorithms=[algorithm or config.jwt_algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
        return TokenClaims(**payload)
    except jwt.ExpiredSignatureError:
        raise InvalidOrExpiredTokenError("Token has expired")
    except (jwt.InvalidTokenError, ValidationError):
        raise InvalidOrExpiredTokenError()
