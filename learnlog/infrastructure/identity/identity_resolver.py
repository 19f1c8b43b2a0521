"""
Strategies that turn an incoming request into an owner id.

The strategy is picked once at startup from ``AUTH_MODE``:

- ``mock``: every request belongs to ``MOCK_USER_ID`` (never in production)
- ``jwt``: ``Authorization: Bearer <token>`` signed with ``SECRET_KEY``
- ``disabled``: no request is authenticated
"""

from typing import Protocol
from uuid import UUID

import structlog
from fastapi import Request
from fastapi.security.utils import get_authorization_scheme_param

from learnlog.config import Settings
from learnlog.infrastructure.identity.token_service import verify_access_token

logger = structlog.get_logger(__name__)


class IdentityResolver(Protocol):
    """Resolve the owner of a request, or None when unauthenticated."""

    def resolve(self, request: Request) -> UUID | None: ...


class MockIdentityResolver:
    def __init__(self, owner_id: UUID) -> None:
        self.owner_id = owner_id

    def resolve(self, request: Request) -> UUID | None:
        return self.owner_id


class JwtIdentityResolver:
    def __init__(self, secret_key: str, algorithm: str = "HS256") -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm

    def resolve(self, request: Request) -> UUID | None:
        scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
        if scheme.lower() != "bearer" or not token:
            return None
        return verify_access_token(token, self.secret_key, self.algorithm)


class DisabledIdentityResolver:
    def resolve(self, request: Request) -> UUID | None:
        return None


def build_identity_resolver(settings: Settings) -> IdentityResolver:
    """Build the resolver selected by ``settings.AUTH_MODE``."""
    if settings.AUTH_MODE == "mock":
        logger.warning("mock_authentication_enabled", owner_id=str(settings.MOCK_USER_ID))
        return MockIdentityResolver(settings.MOCK_USER_ID)
    if settings.AUTH_MODE == "jwt":
        return JwtIdentityResolver(settings.SECRET_KEY, settings.JWT_ALGORITHM)
    return DisabledIdentityResolver()
