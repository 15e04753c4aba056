"""Tour package router."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.database import encode_document, get_db
from ..core.dependencies import ensure_owner, get_current_user
from ..core.exceptions import InternalServerError
from ..schemas.common import PROBLEM_RESPONSES
from ..schemas.results import DeleteResult, InsertResult, UpdateResult
from ..services.package_service import PackageService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["packages"], responses=PROBLEM_RESPONSES)

DB_DEPENDENCY = Depends(get_db)
AUTH_DEPENDENCY = Depends(get_current_user)
PACKAGE_BODY = Body(..., description="Tour package fields")


def _internal_error(message: str, error: Exception, **context: Any) -> InternalServerError:
    logger.error(message, extra={**context, "error": str(error)}, exc_info=True)
    return InternalServerError(detail=str(error))


@router.get("/packages")
async def list_packages(
    search: Optional[str] = Query(None, description="Case-insensitive tour name fragment"),
    db: AsyncIOMotorDatabase = DB_DEPENDENCY
) -> JSONResponse:
    """List all packages, or those whose tour name contains ``search``."""
    try:
        packages = await PackageService(db).list_packages(search)
        return JSONResponse(status_code=200, content=encode_document(packages))
    except Exception as e:
        raise _internal_error("Unexpected error listing packages", e, search=search) from e


@router.get("/packages-featured")
async def list_featured_packages(db: AsyncIOMotorDatabase = DB_DEPENDENCY) -> JSONResponse:
    """Packages for the home page, at most six."""
    try:
        packages = await PackageService(db).list_featured_packages()
        return JSONResponse(status_code=200, content=encode_document(packages))
    except Exception as e:
        raise _internal_error("Unexpected error fetching featured packages", e) from e


@router.get("/packages/{package_id}")
async def get_package(
    package_id: str,
    db: AsyncIOMotorDatabase = DB_DEPENDENCY
) -> JSONResponse:
    """Return one package, or ``null`` if the id matches nothing."""
    try:
        package = await PackageService(db).get_package(package_id)
        return JSONResponse(status_code=200, content=encode_document(package))
    except Exception as e:
        raise _internal_error("Unexpected error fetching package", e, package_id=package_id) from e


@router.get("/my-packages/{email}")
async def list_my_packages(
    email: str,
    current_user: dict[str, Any] = AUTH_DEPENDENCY,
    db: AsyncIOMotorDatabase = DB_DEPENDENCY
) -> JSONResponse:
    """Packages created by the calling guide."""
    ensure_owner(current_user, email)
    try:
        packages = await PackageService(db).list_guide_packages(email)
        return JSONResponse(status_code=200, content=encode_document(packages))
    except Exception as e:
        raise _internal_error("Unexpected error listing guide packages", e, guide_email=email) from e


@router.post("/packages", response_model=InsertResult)
async def create_package(
    data: dict[str, Any] = PACKAGE_BODY,
    current_user: dict[str, Any] = AUTH_DEPENDENCY,
    db: AsyncIOMotorDatabase = DB_DEPENDENCY
) -> JSONResponse:
    """Create a package. The body is stored as sent."""
    try:
        result = await PackageService(db).create_package(data)
        return JSONResponse(status_code=200, content=result.model_dump(by_alias=True))
    except Exception as e:
        raise _internal_error(
            "Unexpected error creating package", e, caller=current_user.get("email")
        ) from e


@router.put("/packages/{package_id}", response_model=UpdateResult)
async def update_package(
    package_id: str,
    data: dict[str, Any] = PACKAGE_BODY,
    current_user: dict[str, Any] = AUTH_DEPENDENCY,
    db: AsyncIOMotorDatabase = DB_DEPENDENCY
) -> JSONResponse:
    """Overwrite the editable package fields."""
    try:
        result = await PackageService(db).update_package(package_id, data)
        return JSONResponse(status_code=200, content=result.model_dump(by_alias=True))
    except Exception as e:
        raise _internal_error("Unexpected error updating package", e, package_id=package_id) from e


@router.delete("/packages/{package_id}", response_model=DeleteResult)
async def delete_package(
    package_id: str,
    current_user: dict[str, Any] = AUTH_DEPENDENCY,
    db: AsyncIOMotorDatabase = DB_DEPENDENCY
) -> JSONResponse:
    try:
        result = await PackageService(db).delete_package(package_id)
        return JSONResponse(status_code=200, content=result.model_dump(by_alias=True))
    except Exception as e:
        raise _internal_error("Unexpected error deleting package", e, package_id=package_id) from e
