"""Request / response schemas for the auth module."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, EmailStr, Field, field_validator

from auth.password import MAX_PASSWORD_BYTES, password_too_long


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class RegisterRequest(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=128, examples=["Ann Lee"])
    email: EmailStr = Field(..., examples=["user@email.com"])
    password: str = Field(..., min_length=6)

    @field_validator("full_name")
    @classmethod
    def _full_name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("full_name must not be blank")
        return value

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        if password_too_long(value):
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class PublicIdentity(BaseModel):
    """Outward view of a user record — never includes the password hash."""

    id: str
    full_name: str
    email: str
    role: Role


class AuthResult(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: PublicIdentity


class TokenClaims(BaseModel):
    """Decoded session-token payload handed to protected handlers."""

    sub: str
    email: str
    role: Role
    iat: int
    exp: int
