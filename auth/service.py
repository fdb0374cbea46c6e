"""
Auth service — registration and login against the credential store.

Validation runs before any store access. Store failures are logged and
re-raised as ``InternalError`` so no driver detail reaches the client.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from auth.errors import Conflict, InternalError, InvalidCredentials, InvalidInput
from auth.password import PasswordHasher, is_encodable
from auth.schemas import LoginRequest, LoginResponse, PublicUser, RegisterRequest
from auth.tokens import TokenSigner
from database.user_store import DuplicateEmailError, UserStore, normalize_email

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def _clean(value: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace; blank becomes ``None``."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class AuthService:
    def __init__(
        self,
        store: UserStore,
        hasher: PasswordHasher,
        signer: TokenSigner,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.signer = signer

    async def register(self, req: RegisterRequest) -> PublicUser:
        email = _clean(req.email)
        # passwords are taken verbatim, only emptiness is checked
        if not email or not req.password:
            raise InvalidInput("Email and password are required")
        if len(req.password) < MIN_PASSWORD_LENGTH:
            raise InvalidInput(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if not is_encodable(req.password):
            raise InvalidInput("Password contains invalid characters")
        email = normalize_email(email)

        try:
            if await self.store.find_by_email(email) is not None:
                raise Conflict()
            user = await self.store.create(
                email=email,
                password_hash=self.hasher.hash(req.password),
                name=_clean(req.name),
                phone=_clean(req.phone),
            )
        except DuplicateEmailError:
            raise Conflict()
        except SQLAlchemyError as exc:
            logger.exception("Store failure during registration")
            raise InternalError() from exc

        logger.info("Registered user %s", user.id)
        return PublicUser.model_validate(user)

    async def login(self, req: LoginRequest) -> LoginResponse:
        email = _clean(req.email)
        if not email or not req.password:
            raise InvalidInput("Email and password are required")

        try:
            user = await self.store.find_by_email(email)
        except SQLAlchemyError as exc:
            logger.exception("Store failure during login")
            raise InternalError() from exc

        if user is None:
            # keep response time independent of whether the email exists
            self.hasher.verify_dummy(req.password)
            raise InvalidCredentials()
        if not self.hasher.verify(req.password, user.password_hash):
            raise InvalidCredentials()

        token = self.signer.sign(str(user.id))
        logger.info("Login: %s", user.id)
        return LoginResponse(token=token, user=PublicUser.model_validate(user))
