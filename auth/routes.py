"""
Auth API routes — register, login, me.

Route prefix: /api/auth
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from api.schemas import Envelope
from auth.dependencies import get_auth_service, get_current_identity
from auth.models import AuthResult, LoginRequest, RegisterRequest, TokenClaims
from auth.service import AuthService

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=Envelope[AuthResult],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Register a new user and return a session token."""
    result = await service.register(req.full_name, req.email, req.password)
    return {"data": result}


@router.post("/login", response_model=Envelope[AuthResult])
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Login with email + password."""
    result = await service.login(req.email, req.password)
    return {"data": result}


@router.get("/me", response_model=Envelope[TokenClaims])
async def me(identity: TokenClaims = Depends(get_current_identity)) -> Dict[str, Any]:
    return {"data": identity}
