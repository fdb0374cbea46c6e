"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

from typing import Optional

import bcrypt

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode()[:_BCRYPT_MAX_BYTES]


def is_encodable(password: str) -> bool:
    """False for strings holding lone surrogates, which have no UTF-8 form."""
    try:
        password.encode()
    except UnicodeEncodeError:
        return False
    return True


class PasswordHasher:
    """bcrypt hasher with a fixed work factor."""

    def __init__(self, rounds: int = 10) -> None:
        self.rounds = rounds
        self._dummy_hash: Optional[str] = None

    def hash(self, password: str) -> str:
        """Hash a password (auto-salted)."""
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash."""
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode())
        except (ValueError, TypeError):
            return False

    def verify_dummy(self, password: str) -> bool:
        """
        Spend the same bcrypt work as ``verify`` when there is no stored
        hash to compare against. Always returns False.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("no-such-account")
        self.verify(password, self._dummy_hash)
        return False
