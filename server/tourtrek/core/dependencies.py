"""FastAPI dependencies for authentication and ownership checks."""

import logging
from typing import Any, Optional

from fastapi import Header
from jwt import PyJWTError

from .exceptions import AuthenticationError, AuthorizationError
from .observability import metrics_collector
from .security import decode_access_token

logger = logging.getLogger(__name__)


async def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization")
) -> dict[str, Any]:
    """
    Authentication dependency that validates Bearer tokens.

    Args:
        authorization: Authorization header with Bearer token

    Returns:
        dict: Decoded token claims, the authenticated identity

    Raises:
        AuthenticationError: If the header is missing or the token is invalid
    """
    if not authorization:
        metrics_collector.record_auth_failure("missing_header")
        raise AuthenticationError()

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        metrics_collector.record_auth_failure("malformed_header")
        logger.warning("Rejected malformed authorization header")
        raise AuthenticationError()

    try:
        claims = decode_access_token(parts[1])
    except PyJWTError as e:
        metrics_collector.record_auth_failure("invalid_token")
        logger.warning("Token verification failed", extra={"error": str(e)})
        raise AuthenticationError() from e

    logger.debug("Token verified", extra={"email": claims.get("email")})
    return claims


def ensure_owner(identity: dict[str, Any], email: str) -> None:
    """
    Ownership check: the caller may only address resources under their own email.

    Raises:
        AuthorizationError: If the token email differs from ``email``
    """
    if identity.get("email") != email:
        logger.warning(
            "Ownership check failed",
            extra={"token_email": identity.get("email"), "path_email": email},
        )
        raise AuthorizationError()

