from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from chatterly.core import container
from chatterly.database import DatabaseSession

T = TypeVar("T")


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Build a FastAPI dependency that resolves ``provider`` from the container.

    Repositories created for the use case are bound to the request's session.
    """

    def resolve(db: DatabaseSession) -> T:
        with container.db.override(db):
            return provider()

    return resolve
