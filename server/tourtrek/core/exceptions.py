"""RFC 9457 Problem Details errors and their exception handlers."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..schemas.common import Violation

logger = logging.getLogger(__name__)

PROBLEM_BASE_URI = "https://tourtrek.example/problems"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


def _internal_error_fields() -> Dict[str, str]:
    return {"error_id": str(uuid.uuid4()), "timestamp": _utc_timestamp()}


class ProblemDetailsException(HTTPException):
    """
    HTTP error rendered as an ``application/problem+json`` style body.

    ``problem_details`` holds the ready-to-send body: ``type``, ``title`` and
    ``status`` always, ``detail`` and ``instance`` when given, plus any
    extension members.

    https://tools.ietf.org/rfc/rfc9457.txt
    """

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: Optional[str] = None,
        problem_type: Optional[str] = None,
        instance: Optional[str] = None,
        extensions: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        body: Dict[str, Any] = {
            "type": f"{PROBLEM_BASE_URI}/{problem_type}" if problem_type else "about:blank",
            "title": title,
            "status": status_code,
        }
        if detail:
            body["detail"] = detail
        if instance:
            body["instance"] = instance
        body.update(extensions or {})

        self.title = title
        self.problem_details = body
        super().__init__(status_code=status_code, detail=body, headers=headers)


class AuthenticationError(ProblemDetailsException):
    """Missing, malformed, expired or tampered bearer token."""

    def __init__(self, detail: str = "unauthorized access"):
        super().__init__(
            401,
            "Unauthorized",
            detail=detail,
            problem_type="unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(ProblemDetailsException):
    """Authenticated identity does not own the addressed resource."""

    def __init__(self, detail: str = "forbidden access"):
        super().__init__(403, "Forbidden", detail=detail, problem_type="forbidden")


class NotFoundError(ProblemDetailsException):
    def __init__(self, resource_type: str = "resource", resource_id: Optional[str] = None):
        label = f"{resource_type} '{resource_id}'" if resource_id else resource_type
        extensions = {"resource_type": resource_type}
        if resource_id:
            extensions["resource_id"] = resource_id

        super().__init__(
            404,
            "Resource Not Found",
            detail=f"The requested {label} could not be found",
            problem_type="resource-not-found",
            extensions=extensions,
        )


class InternalServerError(ProblemDetailsException):
    """
    Unexpected database or runtime failure inside a handler.

    The underlying failure message is passed through as ``detail``.
    """

    def __init__(self, detail: str = "An unexpected error occurred while processing the request"):
        super().__init__(
            500,
            "Internal Server Error",
            detail=detail,
            problem_type="internal-server-error",
            extensions=_internal_error_fields(),
        )


async def problem_details_handler(request: Request, exc: ProblemDetailsException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.problem_details, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """422 with one violation per failed field, e.g. ``body.email``."""
    violations = [
        Violation(
            path=".".join(str(part) for part in error.get("loc", ())),
            message=error.get("msg", ""),
        ).model_dump()
        for error in exc.errors()
    ]

    return JSONResponse(
        status_code=422,
        content={
            "type": f"{PROBLEM_BASE_URI}/validation-error",
            "title": "Validation Error",
            "status": 422,
            "detail": "The request data failed validation",
            "instance": str(request.url),
            "violations": violations,
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort 500 that hides the failure message from the caller."""
    fields = _internal_error_fields()
    logger.error(
        "Unhandled exception",
        extra={"error_id": fields["error_id"], "path": request.url.path, "error": str(exc)},
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content={
            "type": f"{PROBLEM_BASE_URI}/internal-server-error",
            "title": "Internal Server Error",
            "status": 500,
            "detail": "An unexpected error occurred while processing the request",
            "instance": str(request.url),
            **fields,
        },
    )
