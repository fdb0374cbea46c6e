"""
FastAPI dependencies for authentication.

Collaborators (hasher, token signer, session factory) are built once by
``create_app`` and read from ``app.state``.
"""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.service import AuthService
from database.session import get_db_session
from database.user_store import UserStore


async def get_auth_service(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
) -> AuthService:
    """Build an ``AuthService`` bound to the request's DB session."""
    state = request.app.state
    return AuthService(
        store=UserStore(session),
        hasher=state.password_hasher,
        signer=state.token_signer,
    )
