"""Bearer token issuance and verification."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from .config import settings


def create_access_token(identity: dict[str, Any], expires_in: Optional[int] = None) -> str:
    """
    Sign a bearer token carrying the caller-supplied identity.

    No credential check is made: whatever identity is posted gets signed.

    Args:
        identity: Claims to embed, at least ``email``
        expires_in: Lifetime in seconds, defaults to the configured value

    Returns:
        str: Encoded JWT
    """
    lifetime = expires_in if expires_in is not None else settings.access_token_expires_seconds
    payload = dict(identity)
    payload["exp"] = datetime.now(timezone.utc) + timedelta(seconds=lifetime)
    return jwt.encode(payload, settings.access_token_secret, algorithm=settings.token_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry and return the token claims.

    Raises:
        jwt.PyJWTError: If the token is malformed, tampered or expired
    """
    return jwt.decode(
        token,
        settings.access_token_secret,
        algorithms=[settings.token_algorithm],
    )
