"""
Domain exceptions raised by the service layer.

Each carries the HTTP status and client-facing ``detail`` it maps to;
``api.middleware`` turns them into JSON responses.
"""

from __future__ import annotations

from typing import Dict, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class DuplicateCredentialError(AppError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Email already registered"


class InvalidCredentialsError(AppError):
    """Unknown email *or* wrong password — deliberately indistinguishable."""

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid email or password"


class MissingTokenError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Missing Bearer token"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidOrExpiredTokenError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid or expired token"
    headers = {"WWW-Authenticate": "Bearer"}


class ProductNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Product not found"


class InvalidInputError(AppError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    detail = "Invalid input"
