import argparse
import logging
from collections.abc import Callable
from contextlib import AbstractContextManager

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookstore_api.database import SessionLocal
from bookstore_api.models import Author, Book

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def rebuild_author_ledger(
    session_factory: Callable[[], AbstractContextManager[Session]] = SessionLocal,
    dry_run: bool = False,
) -> dict[str, tuple[int, int]]:
    """
    Recounts every author's books and repairs drifted ledger counts.

    Books without a ledger link are attached to the entry with the same name,
    creating it when missing. Returns name -> (old_count, new_count) for every
    entry that changed.
    """
    logger.info("Rebuilding author ledger...")

    changes: dict[str, tuple[int, int]] = {}
    with session_factory() as session:
        authors = {author.name: author for author in session.scalars(select(Author)).all()}

        unlinked = session.scalars(select(Book).where(Book.author_id.is_(None))).all()
        for book in unlinked:
            author = authors.get(book.author)
            if author is None:
                author = Author(name=book.author, book_count=0)
                session.add(author)
                session.flush()
                authors[author.name] = author
            book.author_id = author.id
        session.flush()

        counts_stmt = select(Book.author_id, func.count(Book.id)).group_by(Book.author_id)
        actual = {
            author_id: count
            for author_id, count in session.execute(counts_stmt).all()
            if author_id is not None
        }

        for author in authors.values():
            expected = actual.get(author.id, 0)
            if author.book_count != expected:
                changes[author.name] = (author.book_count, expected)
                author.book_count = expected

        if dry_run:
            session.rollback()
            logger.info("Dry run: %s ledger entries would change.", len(changes))
        else:
            session.commit()
            logger.info("Repaired %s ledger entries.", len(changes))

    return changes


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Recount author book counts from the catalog.")
    parser.add_argument("--dry-run", action="store_true", help="Report without writing.")
    args = parser.parse_args()
    rebuild_author_ledger(dry_run=args.dry_run)
