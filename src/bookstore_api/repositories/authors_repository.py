from sqlalchemy import case, exists, select, update
from sqlalchemy.orm import Session

from bookstore_api.domain import AuthorId
from bookstore_api.models import Author
from bookstore_api.repositories.unit_of_work import committing


class AuthorsRepository:
    """
    Denormalized per-author ledger: one row per author name with the number of
    catalog books currently linked to it.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(self, name: str) -> bool:
        return bool(self.session.scalar(select(exists().where(Author.name == name))))

    def get_by_name(self, name: str) -> Author | None:
        stmt = select(Author).where(Author.name == name)
        return self.session.scalars(stmt).first()

    def create(self, name: str) -> Author:
        """
        Inserts a new entry with a count of one. Not an upsert: a second call
        for the same name violates the unique constraint and raises
        PersistenceError.
        """
        author = Author(name=name, book_count=1)
        with committing(self.session, "Creating author"):
            self.session.add(author)

        self.session.refresh(author)
        return author

    def increment(self, author_id: AuthorId) -> bool:
        stmt = (
            update(Author)
            .where(Author.id == author_id)
            .values(book_count=Author.book_count + 1)
            .execution_options(synchronize_session=False)
        )
        with committing(self.session, "Incrementing author book count"):
            result = self.session.execute(stmt)

        return getattr(result, "rowcount", 0) > 0

    def decrement(self, author_id: AuthorId) -> bool:
        """
        Decreases the book count by one, never below zero.

        Returns False when no ledger entry matched the id.
        """
        stmt = (
            update(Author)
            .where(Author.id == author_id)
            .values(
                book_count=case((Author.book_count > 0, Author.book_count - 1), else_=0)
            )
            .execution_options(synchronize_session=False)
        )
        with committing(self.session, "Decrementing author book count"):
            result = self.session.execute(stmt)

        return getattr(result, "rowcount", 0) > 0
