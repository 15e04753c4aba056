"""User service for business logic operations."""

import logging
from typing import Any, Optional, Union

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from ..core.database import USERS_COLLECTION
from ..core.exceptions import NotFoundError
from ..core.observability import metrics_collector
from ..schemas.results import InsertResult
from ..schemas.user import UserExistsResponse, UserRole

logger = logging.getLogger(__name__)


class UserService:
    """Service for user-related operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[USERS_COLLECTION]

    async def get_user_by_email(self, email: str) -> Optional[dict[str, Any]]:
        """
        Get user by email.

        Args:
            email: Email to search for

        Returns:
            User document if found, None otherwise
        """
        return await self.collection.find_one({"email": email})

    async def create_user(self, user: dict[str, Any]) -> Union[InsertResult, UserExistsResponse]:
        """
        Find-or-create a user by email.

        An existing record is left untouched. New users always get the
        ``user`` role, whatever the payload says. A concurrent insert of the
        same email loses on the unique index and reports the user as existing.

        Args:
            user: Profile fields, including ``email``

        Returns:
            Insert result for a new user, or the already-exists marker
        """
        existing_user = await self.get_user_by_email(user["email"])
        if existing_user:
            logger.info(
                "User already exists",
                extra={"email": user["email"], "user_id": str(existing_user["_id"])}
            )
            return UserExistsResponse()

        document = {**user, "role": UserRole.USER.value}
        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError:
            logger.info("User already exists", extra={"email": user["email"]})
            return UserExistsResponse()
        metrics_collector.record_user_registered()

        logger.info(
            "User created successfully",
            extra={"email": user["email"], "user_id": str(result.inserted_id)}
        )
        return InsertResult.from_pymongo(result)

    async def get_role(self, email: str) -> Optional[str]:
        """
        Get the stored role of a user.

        Raises:
            NotFoundError: If no user has this email
        """
        user = await self.get_user_by_email(email)
        if not user:
            logger.warning("User not found", extra={"email": email})
            raise NotFoundError(resource_type="user", resource_id=email)
        return user.get("role")
