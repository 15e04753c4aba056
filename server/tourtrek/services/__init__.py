"""Service layer package."""

from .booking_service import BookingService
from .package_service import PackageService
from .user_service import UserService

__all__ = [
    "BookingService",
    "PackageService",
    "UserService",
]
