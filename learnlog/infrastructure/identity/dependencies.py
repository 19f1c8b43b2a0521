"""FastAPI dependencies for request authentication."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request

from learnlog.config import get_settings
from learnlog.exceptions import UnauthorizedError
from learnlog.infrastructure.identity.identity_resolver import (
    IdentityResolver,
    build_identity_resolver,
)


def get_identity_resolver(request: Request) -> IdentityResolver:
    """Return the resolver built at startup, building one on first use otherwise."""
    resolver: IdentityResolver | None = getattr(request.app.state, "identity_resolver", None)
    if resolver is None:
        resolver = build_identity_resolver(get_settings())
        request.app.state.identity_resolver = resolver
    return resolver


def get_current_owner_id(
    request: Request,
    resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
) -> UUID:
    """
    Get the id of the authenticated owner.

    Raises:
        UnauthorizedError: If the request carries no resolvable identity
    """
    owner_id = resolver.resolve(request)
    if owner_id is None:
        raise UnauthorizedError
    return owner_id


CurrentOwnerId = Annotated[UUID, Depends(get_current_owner_id)]
