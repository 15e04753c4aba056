"""User-related Pydantic schemas."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """User role enumeration."""
    USER = "user"
    GUIDE = "guide"
    ADMIN = "admin"


class CreateUserRequest(BaseModel):
    """Profile posted on first sign-in. Unknown profile fields are stored as sent."""

    model_config = ConfigDict(extra="allow")

    email: str = Field(..., description="Unique user email")
    name: Optional[str] = Field(None, description="Display name")


class UserExistsResponse(BaseModel):
    """Returned instead of an insert result when the email is already registered."""

    message: str = Field("user already exists")
    inserted_id: None = Field(None, serialization_alias="insertedId")


class UserRoleResponse(BaseModel):
    role: Optional[str] = Field(None, description="Stored role of the user")
