"""
Unit tests for AuthService with a mocked credential store.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from auth.errors import Conflict, InternalError, InvalidCredentials, InvalidInput
from auth.password import PasswordHasher
from auth.schemas import LoginRequest, RegisterRequest
from auth.service import AuthService
from auth.tokens import TokenSigner
from database.models import User
from database.user_store import DuplicateEmailError

HASHER = PasswordHasher(rounds=4)


def _user(email="a@b.com", password="12345678", **overrides) -> User:
    fields = dict(
        id=uuid.uuid4(),
        name=None,
        email=email,
        password_hash=HASHER.hash(password),
        phone="5512345678",
        is_email_verified=False,
        is_phone_verified=False,
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )
    fields.update(overrides)
    return User(**fields)


def _service(existing: User | None = None) -> tuple[AuthService, MagicMock]:
    store = MagicMock()
    store.find_by_email = AsyncMock(return_value=existing)
    store.create = AsyncMock(side_effect=lambda **kw: _user(
        email=kw["email"], name=kw["name"], phone=kw["phone"],
        password_hash=kw["password_hash"],
    ))
    service = AuthService(store, HASHER, TokenSigner("test-secret", 3600))
    return service, store


class TestRegister:
    @pytest.mark.asyncio
    async def test_creates_user_with_hashed_password(self):
        service, store = _service()
        user = await service.register(
            RegisterRequest(email=" A@B.com ", password="12345678", phone="5512345678")
        )
        kwargs = store.create.await_args.kwargs
        assert kwargs["email"] == "a@b.com"
        assert kwargs["password_hash"] != "12345678"
        assert HASHER.verify("12345678", kwargs["password_hash"])
        assert user.phone == "5512345678"
        assert "password_hash" not in user.model_dump()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"password": "12345678"},
            {"email": "a@b.com"},
            {"email": "   ", "password": "12345678"},
            {"email": "a@b.com", "password": ""},
        ],
    )
    async def test_missing_fields_rejected_before_store(self, payload):
        service, store = _service()
        with pytest.raises(InvalidInput, match="required"):
            await service.register(RegisterRequest(**payload))
        store.find_by_email.assert_not_awaited()
        store.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_short_password_rejected_before_store(self):
        service, store = _service()
        with pytest.raises(InvalidInput, match="at least 8"):
            await service.register(RegisterRequest(email="a@b.com", password="1234567"))
        store.find_by_email.assert_not_awaited()
        store.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unencodable_password_rejected_before_store(self):
        service, store = _service()
        with pytest.raises(InvalidInput, match="invalid characters"):
            await service.register(RegisterRequest(email="s@b.com", password="\ud800abcdefgh"))
        store.find_by_email.assert_not_awaited()
        store.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_existing_email_conflicts(self):
        service, store = _service(existing=_user())
        with pytest.raises(Conflict):
            await service.register(RegisterRequest(email="a@b.com", password="12345678"))
        store.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unique_constraint_race_maps_to_conflict(self):
        service, store = _service()
        store.create = AsyncMock(side_effect=DuplicateEmailError("a@b.com"))
        with pytest.raises(Conflict):
            await service.register(RegisterRequest(email="a@b.com", password="12345678"))

    @pytest.mark.asyncio
    async def test_store_failure_is_internal_error(self):
        service, store = _service()
        store.find_by_email = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )
        with pytest.raises(InternalError) as excinfo:
            await service.register(RegisterRequest(email="a@b.com", password="12345678"))
        assert "connection refused" not in excinfo.value.message

    @pytest.mark.asyncio
    async def test_blank_optional_fields_stored_as_none(self):
        service, store = _service()
        await service.register(
            RegisterRequest(name="  ", email="a@b.com", password="12345678", phone="")
        )
        kwargs = store.create.await_args.kwargs
        assert kwargs["name"] is None
        assert kwargs["phone"] is None


class TestLogin:
    @pytest.mark.asyncio
    async def test_success_returns_token_for_user(self):
        user = _user()
        service, _ = _service(existing=user)
        result = await service.login(LoginRequest(email="a@b.com", password="12345678"))
        assert service.signer.verify(result.token) == str(user.id)
        assert result.user.email == "a@b.com"

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_look_identical(self):
        missing, _ = _service(existing=None)
        wrong, _ = _service(existing=_user())

        with pytest.raises(InvalidCredentials) as miss:
            await missing.login(LoginRequest(email="x@b.com", password="12345678"))
        with pytest.raises(InvalidCredentials) as bad:
            await wrong.login(LoginRequest(email="a@b.com", password="wrongpass"))

        assert miss.value.message == bad.value.message
        assert miss.value.status_code == bad.value.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"email": "a@b.com"}, {"password": "x"}])
    async def test_missing_fields_rejected(self, payload):
        service, store = _service()
        with pytest.raises(InvalidInput):
            await service.login(LoginRequest(**payload))
        store.find_by_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_is_internal_error(self):
        service, store = _service()
        store.find_by_email = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("boom"))
        )
        with pytest.raises(InternalError):
            await service.login(LoginRequest(email="a@b.com", password="12345678"))

    @pytest.mark.asyncio
    async def test_unknown_email_still_runs_bcrypt(self):
        service, _ = _service(existing=None)
        with patch.object(HASHER, "verify", wraps=HASHER.verify) as verify:
            with pytest.raises(InvalidCredentials):
                await service.login(LoginRequest(email="ghost@b.com", password="12345678"))
        verify.assert_called_once()
        assert verify.call_args.args[0] == "12345678"
