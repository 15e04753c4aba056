"""Unit tests for user service."""

import pytest

from tourtrek.core.database import ensure_indexes
from tourtrek.core.exceptions import NotFoundError
from tourtrek.schemas.results import InsertResult
from tourtrek.schemas.user import UserExistsResponse
from tourtrek.services.user_service import UserService


@pytest.mark.asyncio
async def test_create_user(test_db):
    """Test creating a user."""
    service = UserService(test_db)

    result = await service.create_user({"email": "a@x.com", "name": "Ayesha"})

    assert isinstance(result, InsertResult)
    assert result.inserted_id is not None
    user = await service.get_user_by_email("a@x.com")
    assert user["name"] == "Ayesha"
    assert user["role"] == "user"


@pytest.mark.asyncio
async def test_create_user_ignores_supplied_role(test_db):
    service = UserService(test_db)

    await service.create_user({"email": "a@x.com", "role": "admin"})

    assert await service.get_role("a@x.com") == "user"


@pytest.mark.asyncio
async def test_create_user_duplicate_email(test_db):
    """Test creating a user twice keeps the first record untouched."""
    service = UserService(test_db)
    await service.create_user({"email": "a@x.com", "name": "First"})

    result = await service.create_user({"email": "a@x.com", "name": "Second"})

    assert isinstance(result, UserExistsResponse)
    assert result.model_dump(by_alias=True) == {"message": "user already exists", "insertedId": None}
    assert await test_db["users"].count_documents({"email": "a@x.com"}) == 1
    user = await service.get_user_by_email("a@x.com")
    assert user["name"] == "First"


@pytest.mark.asyncio
async def test_get_role_not_found(test_db):
    service = UserService(test_db)

    with pytest.raises(NotFoundError):
        await service.get_role("nobody@x.com")


@pytest.mark.asyncio
async def test_get_role_guide(test_db):
    await test_db["users"].insert_one({"email": "g@x.com", "role": "guide"})

    assert await UserService(test_db).get_role("g@x.com") == "guide"


@pytest.mark.asyncio
async def test_create_user_lost_race_reports_existing(test_db, monkeypatch):
    """An insert rejected by the unique email index counts as an existing user."""
    await ensure_indexes(test_db)
    await test_db["users"].insert_one({"email": "a@x.com", "role": "user"})
    service = UserService(test_db)

    async def not_found_yet(email):
        return None

    # The other request inserts between our lookup and our insert
    monkeypatch.setattr(service, "get_user_by_email", not_found_yet)

    result = await service.create_user({"email": "a@x.com", "name": "Second"})

    assert isinstance(result, UserExistsResponse)
    assert await test_db["users"].count_documents({"email": "a@x.com"}) == 1
