"""
Signed session token creation and verification.

Tokens are urlsafe-base64 JSON payloads followed by a hex HMAC-SHA256
signature. This is not a JWT: there is no header segment. The payload
carries the user id as ``sub`` plus ``iat``/``exp`` timestamps. There is
no server-side session table; a token stays valid until ``exp``.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Any, Callable, Dict


class InvalidTokenError(Exception):
    """Token is malformed, forged or expired."""


class TokenSigner:
    def __init__(
        self,
        secret: str,
        expiry_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret.encode()
        self.expiry_seconds = expiry_seconds
        self._clock = clock

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def sign(self, user_id: str) -> str:
        """Create a signed token whose subject is ``user_id``."""
        now = int(self._clock())
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + self.expiry_seconds,
        }
        raw = json.dumps(payload, separators=(",", ":")).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._sign(raw)

    def decode(self, token: str) -> Dict[str, Any]:
        """Verify signature and expiry, returning the payload."""
        parts = token.split(".", 1)
        if len(parts) != 2:
            raise InvalidTokenError("bad format")
        try:
            raw = urlsafe_b64decode(parts[0])
        except (binascii.Error, ValueError) as exc:
            raise InvalidTokenError("bad encoding") from exc
        if not hmac.compare_digest(parts[1].encode(), self._sign(raw).encode()):
            raise InvalidTokenError("bad signature")
        payload = json.loads(raw)
        if payload.get("exp", 0) < self._clock():
            raise InvalidTokenError("token expired")
        return payload

    def verify(self, token: str) -> str:
        """Return the ``sub`` claim of a valid token."""
        return self.decode(token)["sub"]
