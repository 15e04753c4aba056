"""Tour package service for business logic operations."""

import logging
import re
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.database import PACKAGES_COLLECTION, parse_object_id
from ..core.observability import metrics_collector
from ..schemas.package import FEATURED_PACKAGE_LIMIT, PACKAGE_UPDATE_FIELDS
from ..schemas.results import DeleteResult, InsertResult, UpdateResult

logger = logging.getLogger(__name__)


def build_search_filter(search: Optional[str]) -> dict[str, Any]:
    """
    Build the package list filter.

    A non-empty ``search`` becomes a case-insensitive substring match on
    ``tour_name``. The text is escaped, so regex metacharacters match literally.
    """
    if not search:
        return {}
    return {"tour_name": {"$regex": re.escape(search), "$options": "i"}}


def build_update_document(data: dict[str, Any]) -> dict[str, Any]:
    """Overwrite every whitelisted field; fields missing from ``data`` become null."""
    return {"$set": {field: data.get(field) for field in PACKAGE_UPDATE_FIELDS}}


class PackageService:
    """Service for tour package operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[PACKAGES_COLLECTION]

    async def list_packages(self, search: Optional[str] = None) -> list[dict[str, Any]]:
        """List packages, optionally filtered by tour name. No ordering is applied."""
        query = build_search_filter(search)
        return await self.collection.find(query).to_list(length=None)

    async def list_featured_packages(self) -> list[dict[str, Any]]:
        """Return at most six packages in natural order."""
        return await self.collection.find().limit(FEATURED_PACKAGE_LIMIT).to_list(length=None)

    async def get_package(self, package_id: str) -> Optional[dict[str, Any]]:
        """
        Get package by ID.

        Returns:
            Package document if found, None otherwise

        Raises:
            bson.errors.InvalidId: If ``package_id`` is not an ObjectId
        """
        return await self.collection.find_one({"_id": parse_object_id(package_id)})

    async def list_guide_packages(self, guide_email: str) -> list[dict[str, Any]]:
        """List packages created by the given guide."""
        return await self.collection.find({"guide_email": guide_email}).to_list(length=None)

    async def create_package(self, data: dict[str, Any]) -> InsertResult:
        """Insert a package as sent; the booking count always starts at zero."""
        document = dict(data)
        document["bookingCount"] = 0
        result = await self.collection.insert_one(document)
        metrics_collector.record_package_created()

        logger.info(
            "Package created successfully",
            extra={
                "package_id": str(result.inserted_id),
                "tour_name": document.get("tour_name"),
                "guide_email": document.get("guide_email"),
            }
        )
        return InsertResult.from_pymongo(result)

    async def update_package(self, package_id: str, data: dict[str, Any]) -> UpdateResult:
        """Overwrite the whitelisted fields of a package."""
        result = await self.collection.update_one(
            {"_id": parse_object_id(package_id)},
            build_update_document(data),
        )
        logger.info(
            "Package updated",
            extra={"package_id": package_id, "matched_count": result.matched_count}
        )
        return UpdateResult.from_pymongo(result)

    async def delete_package(self, package_id: str) -> DeleteResult:
        result = await self.collection.delete_one({"_id": parse_object_id(package_id)})
        logger.info(
            "Package deleted",
            extra={"package_id": package_id, "deleted_count": result.deleted_count}
        )
        return DeleteResult.from_pymongo(result)

    async def increment_booking_count(self, package_id: str) -> UpdateResult:
        """Atomically add one to ``bookingCount`` of the package."""
        result = await self.collection.update_one(
            {"_id": parse_object_id(package_id)},
            {"$inc": {"bookingCount": 1}},
        )
        return UpdateResult.from_pymongo(result)
