from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from learnlog.core import container
from learnlog.database import DatabaseSession

T = TypeVar("T")


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Create a FastAPI dependency that builds a use case for one request.

    The container's ``db`` dependency is bound to the request session while
    the provider runs, so every repository of the use case shares it.
    """

    def dependency(db: DatabaseSession) -> T:
        with container.db.override(db):
            return provider()

    return dependency
