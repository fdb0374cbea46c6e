"""
Credential store — create and look up ``User`` rows by email.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User

logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """Raised when the unique email constraint rejects an insert."""


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self._session.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        *,
        email: str,
        password_hash: str,
        name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> User:
        """
        Insert and commit a new user.

        The unique index on ``email`` is the final word on duplicates: a
        concurrent insert that slipped past ``find_by_email`` surfaces here
        as ``DuplicateEmailError``.
        """
        user = User(
            email=normalize_email(email),
            password_hash=password_hash,
            name=name,
            phone=phone,
            is_email_verified=False,
            is_phone_verified=False,
        )
        self._session.add(user)
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            logger.info("Insert rejected by unique email constraint")
            raise DuplicateEmailError(normalize_email(email)) from exc
        await self._session.refresh(user)
        return user
