"""
Auth API routes — register, login.

Route prefix: /api/auth
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth.dependencies import get_auth_service
from auth.schemas import LoginRequest, LoginResponse, PublicUser, RegisterRequest
from auth.service import AuthService

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=PublicUser,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> PublicUser:
    """Register a new user."""
    return await service.register(req)


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Login with email + password."""
    return await service.login(req)
