"""Unit tests for token issuance and the auth guard."""

import time

import jwt
import pytest

from tourtrek.core.config import settings
from tourtrek.core.dependencies import ensure_owner, get_current_user
from tourtrek.core.exceptions import AuthenticationError, AuthorizationError
from tourtrek.core.security import create_access_token, decode_access_token


def test_token_carries_identity():
    token = create_access_token({"email": "a@x.com", "name": "Ayesha"})

    claims = jwt.decode(token, settings.access_token_secret, algorithms=["HS256"])
    assert claims["email"] == "a@x.com"
    assert claims["name"] == "Ayesha"

    assert jwt.get_unverified_header(token)["alg"] == "HS256"


def test_token_expires_after_one_hour():
    token = create_access_token({"email": "a@x.com"})
    claims = decode_access_token(token)

    remaining = claims["exp"] - time.time()
    assert 3590 <= remaining <= 3600


def test_decode_rejects_other_secret():
    token = jwt.encode({"email": "a@x.com"}, "some-other-secret", algorithm="HS256")
    with pytest.raises(jwt.InvalidSignatureError):
        decode_access_token(token)


@pytest.mark.asyncio
async def test_missing_header_is_unauthorized():
    with pytest.raises(AuthenticationError) as exc_info:
        await get_current_user(None)
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("header", ["Bearer", "Basic abc", "Bearer a b", "token-without-scheme"])
async def test_malformed_header_is_unauthorized(header):
    with pytest.raises(AuthenticationError):
        await get_current_user(header)


@pytest.mark.asyncio
async def test_expired_token_is_unauthorized():
    token = create_access_token({"email": "a@x.com"}, expires_in=-30)
    with pytest.raises(AuthenticationError):
        await get_current_user(f"Bearer {token}")


@pytest.mark.asyncio
async def test_valid_token_returns_claims():
    token = create_access_token({"email": "a@x.com", "role": "guide"})
    claims = await get_current_user(f"Bearer {token}")
    assert claims["email"] == "a@x.com"
    assert claims["role"] == "guide"


def test_ensure_owner_matching_email():
    ensure_owner({"email": "a@x.com"}, "a@x.com")


def test_ensure_owner_mismatch_is_forbidden():
    with pytest.raises(AuthorizationError) as exc_info:
        ensure_owner({"email": "a@x.com"}, "b@x.com")
    assert exc_info.value.status_code == 403


def test_admin_role_does_not_bypass_ownership():
    with pytest.raises(AuthorizationError):
        ensure_owner({"email": "admin@x.com", "role": "admin"}, "b@x.com")
