"""Common Pydantic schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field


class Violation(BaseModel):
    """Validation error violation."""

    path: str = Field(..., description="Location of the invalid field")
    message: str = Field(..., description="Validation error message")


class Problem(BaseModel):
    """RFC 9457 Problem Details response."""

    type: Optional[str] = Field(None, description="Problem type URI")
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: Optional[str] = Field(None, description="Human-readable explanation")
    instance: Optional[str] = Field(None, description="URI reference for this occurrence")
    error_id: Optional[str] = Field(None, description="Correlation id for internal errors")
    violations: Optional[List[Violation]] = Field(None, description="Validation errors")


# OpenAPI error documentation shared by the resource routers
PROBLEM_RESPONSES = {
    401: {"model": Problem, "description": "Missing, expired or invalid bearer token"},
    403: {"model": Problem, "description": "Token email does not match the addressed email"},
    500: {"model": Problem, "description": "Unexpected database or runtime failure"},
}
