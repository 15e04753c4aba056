"""Token issuance router."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.security import create_access_token
from ..schemas.auth import TokenRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/jwt", response_model=TokenResponse)
async def issue_token(request: TokenRequest) -> JSONResponse:
    """
    Issue a bearer token for the posted identity.

    The identity is trusted as sent; no credential is checked.
    """
    token = create_access_token(request.model_dump())

    logger.info("Token issued", extra={"email": request.email})

    return JSONResponse(
        status_code=200,
        content=TokenResponse(token=token).model_dump()
    )
