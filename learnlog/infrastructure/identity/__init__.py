from .dependencies import CurrentOwnerId, get_current_owner_id, get_identity_resolver
from .identity_resolver import (
    DisabledIdentityResolver,
    IdentityResolver,
    JwtIdentityResolver,
    MockIdentityResolver,
    build_identity_resolver,
)
from .token_service import create_access_token, verify_access_token

__all__ = [
    "CurrentOwnerId",
    "DisabledIdentityResolver",
    "IdentityResolver",
    "JwtIdentityResolver",
    "MockIdentityResolver",
    "build_identity_resolver",
    "create_access_token",
    "get_current_owner_id",
    "get_identity_resolver",
    "verify_access_token",
]
