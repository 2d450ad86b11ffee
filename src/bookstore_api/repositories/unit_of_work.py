from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookstore_api.errors import PersistenceError


@contextmanager
def committing(session: Session, action: str) -> Iterator[None]:
    """
    Runs one write against the store and commits it.

    Any failure inside the block rolls the session back. Driver errors are
    re-raised as PersistenceError so callers only deal with the domain taxonomy.
    """
    try:
        yield
        session.commit()
    except PersistenceError:
        session.rollback()
        raise
    except SQLAlchemyError as exc:
        session.rollback()
        raise PersistenceError(f"{action} failed: {exc}") from exc
