"""
Request / response schemas for the auth routes.

Request fields are all optional at the parsing layer so that presence and
length checks happen in ``AuthService`` in a fixed order and produce the
same messages whether the call comes over HTTP or not.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RegisterRequest(BaseModel):
    """Registration contract v1: email + password required, name/phone optional."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class PublicUser(BaseModel):
    """The client-visible view of a user. Never carries the password hash."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: uuid.UUID
    name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    created_at: datetime
    is_email_verified: bool = False
    is_phone_verified: bool = False


class LoginResponse(BaseModel):
    token: str
    user: PublicUser
