from collections.abc import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from bookstore_api.domain import AuthorId, BookId
from bookstore_api.errors import PersistenceError
from bookstore_api.models import Book
from bookstore_api.repositories.unit_of_work import committing


class BooksRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_books(self) -> Sequence[Book]:
        """
        Returns every book ordered by title. Unpaginated.
        """
        stmt = select(Book).order_by(Book.title.asc(), Book.id.asc())
        return self.session.scalars(stmt).all()

    def get_by_id(self, book_id: BookId) -> Book | None:
        return self.session.get(Book, book_id)

    def list_by_author(
        self, author_id: AuthorId, exclude_id: BookId | None = None, limit: int = 3
    ) -> list[BookId]:
        """
        Ids of other books linked to the same ledger entry, in insertion order.
        """
        if limit <= 0:
            return []

        stmt = select(Book.id).where(Book.author_id == author_id)
        if exclude_id is not None:
            stmt = stmt.where(Book.id != exclude_id)
        stmt = stmt.order_by(Book.id.asc()).limit(limit)

        return [BookId(book_id) for book_id in self.session.scalars(stmt).all()]

    def create(
        self,
        *,
        title: str,
        author: str,
        author_id: AuthorId | None,
        price: float,
        isbn: str,
        internal_code: str,
    ) -> Book:
        book = Book(
            title=title,
            author=author,
            author_id=author_id,
            price=price,
            isbn=isbn,
            internal_code=internal_code,
            view_count=0,
        )
        with committing(self.session, "Creating book"):
            self.session.add(book)
            self.session.flush()
            if book.id is None:
                raise PersistenceError("Creating book failed, no rows affected.")

        self.session.refresh(book)
        return book

    def update(
        self,
        book_id: BookId,
        *,
        title: str,
        author: str,
        author_id: AuthorId | None,
        price: float,
    ) -> Book:
        stmt = (
            update(Book)
            .where(Book.id == book_id)
            .values(title=title, author=author, author_id=author_id, price=price)
            .execution_options(synchronize_session=False)
        )
        with committing(self.session, "Updating book"):
            result = self.session.execute(stmt)
            if getattr(result, "rowcount", 0) == 0:
                raise PersistenceError("Updating book failed, no rows affected.")

        book = self.session.get(Book, book_id)
        if book is None:
            raise PersistenceError(f"Book {book_id} vanished after update.")
        self.session.refresh(book)
        return book

    def delete(self, book_id: BookId) -> None:
        stmt = delete(Book).where(Book.id == book_id)
        with committing(self.session, "Deleting book"):
            result = self.session.execute(stmt)
            if getattr(result, "rowcount", 0) == 0:
                raise PersistenceError("Deleting book failed, no rows affected.")

    def increment_view_count(self, book_id: BookId) -> bool:
        stmt = (
            update(Book)
            .where(Book.id == book_id)
            .values(view_count=Book.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        with committing(self.session, "Incrementing view count"):
            result = self.session.execute(stmt)

        return getattr(result, "rowcount", 0) > 0
