"""Helpers shared by SQLAlchemy repositories."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from chatterly.exceptions import StoreError

logger = structlog.get_logger(__name__)


@contextmanager
def store_operation(db: Session, operation: str) -> Iterator[None]:
    """Roll back and raise StoreError when the wrapped database work fails."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("store_operation_failed", operation=operation, error=str(e))
        raise StoreError(operation, str(e)) from e


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from backends without timezone support."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)
