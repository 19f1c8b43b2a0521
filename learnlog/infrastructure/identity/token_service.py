"""Access token creation and verification (HS256 JWT)."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from jwt import InvalidTokenError

DEFAULT_TOKEN_LIFETIME = timedelta(hours=12)


def create_access_token(
    owner_id: UUID,
    secret_key: str,
    algorithm: str = "HS256",
    expires_in: timedelta = DEFAULT_TOKEN_LIFETIME,
) -> str:
    """Create an access token whose subject is the owner id."""
    expire = datetime.now(UTC) + expires_in
    to_encode = {"sub": str(owner_id), "exp": expire, "type": "access"}
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def verify_access_token(token: str, secret_key: str, algorithm: str = "HS256") -> UUID | None:
    """Verify an access token and return the owner id if valid."""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
        if payload.get("type", "access") != "access":
            return None
        subject = payload.get("sub")
        if not isinstance(subject, str):
            return None
        return UUID(subject)
    except (InvalidTokenError, ValueError):
        return None
