"""User router for registration and role lookup."""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.database import get_db
from ..core.dependencies import ensure_owner, get_current_user
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..schemas.common import PROBLEM_RESPONSES
from ..schemas.user import CreateUserRequest, UserRoleResponse
from ..services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], responses=PROBLEM_RESPONSES)

DB_DEPENDENCY = Depends(get_db)
AUTH_DEPENDENCY = Depends(get_current_user)


@router.post("")
async def create_user(
    request: CreateUserRequest,
    db: AsyncIOMotorDatabase = DB_DEPENDENCY
) -> JSONResponse:
    """
    Register a user on first sign-in.

    Posting an email that already exists returns
    ``{"message": "user already exists", "insertedId": null}``.
    """
    user_service = UserService(db)

    try:
        result = await user_service.create_user(request.model_dump(exclude_unset=True))
        return JSONResponse(status_code=200, content=result.model_dump(by_alias=True))

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in user creation",
            extra={"email": request.email, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail=str(e)) from e


@router.get("/role/{email}", response_model=UserRoleResponse)
async def get_user_role(
    email: str,
    current_user: dict[str, Any] = AUTH_DEPENDENCY,
    db: AsyncIOMotorDatabase = DB_DEPENDENCY
) -> JSONResponse:
    """Return the caller's own role. 404 when the user was never registered."""
    ensure_owner(current_user, email)
    user_service = UserService(db)

    try:
        role = await user_service.get_role(email)
        return JSONResponse(status_code=200, content=UserRoleResponse(role=role).model_dump())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in role lookup",
            extra={"email": email, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail=str(e)) from e
