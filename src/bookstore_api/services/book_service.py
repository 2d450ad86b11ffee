import logging
import math
from collections.abc import Callable, Sequence

from bookstore_api.domain import AuthorId, BookId
from bookstore_api.errors import BookNotFoundError, BookValidationError, PersistenceError
from bookstore_api.identifiers import current_millis, generate_internal_code, generate_isbn
from bookstore_api.repositories.authors_repository import AuthorsRepository
from bookstore_api.repositories.books_repository import BooksRepository
from bookstore_api.schemas.book import BookCreate, BookRead, BookUpdate
from bookstore_api.services.enrichment import Enricher
from bookstore_api.services.side_effects import BookEventSink

logger = logging.getLogger(__name__)


class BookService:
    """
    Book lifecycle workflow: validation, author ledger bookkeeping, persistence,
    then best-effort notification of the registered sinks.
    """

    def __init__(
        self,
        books: BooksRepository,
        authors: AuthorsRepository,
        enricher: Enricher,
        sinks: Sequence[BookEventSink] = (),
        clock: Callable[[], int] = current_millis,
        related_limit: int = 3,
        count_views_on_delete: bool = True,
    ) -> None:
        self.books = books
        self.authors = authors
        self.enricher = enricher
        self.sinks = list(sinks)
        self.clock = clock
        self.related_limit = related_limit
        self.count_views_on_delete = count_views_on_delete

    def list_books(self) -> list[BookRead]:
        snapshot = [BookRead.model_validate(row) for row in self.books.list_books()]
        self._dispatch("catalog_listed", snapshot)
        return [self.enricher.enrich(book) for book in snapshot]

    def get_book(self, book_id: BookId | None) -> BookRead | None:
        """
        Returns the enriched book and counts the read. The returned view count
        is the value before this read.
        """
        book = self._find(book_id)
        if book is None:
            return None

        book = self.enricher.enrich(book)
        self._record_view(book.id)
        return book

    def create_book(self, payload: BookCreate) -> BookRead:
        title, author, price = self._validate(payload.title, payload.author, payload.price)

        author_id = self._link_author(author)

        now_ms = self.clock()
        row = self.books.create(
            title=title,
            author=author,
            author_id=author_id,
            price=price,
            isbn=generate_isbn(now_ms),
            internal_code=generate_internal_code(author, title, now_ms),
        )
        book = BookRead.model_validate(row)
        logger.info("Book created", extra={"book_id": book.id, "internal_code": book.internal_code})

        self._dispatch("book_created", book, self._related_books(book))
        return book

    def update_book(self, book_id: BookId, changes: BookUpdate) -> BookRead:
        current = self._find(book_id)
        if current is None:
            raise BookNotFoundError(book_id)

        title = changes.title if changes.title is not None else current.title
        author = changes.author if changes.author is not None else current.author
        if changes.price is not None and not math.isfinite(changes.price):
            raise BookValidationError("price", "Price must be positive")
        price = changes.price if changes.price is not None and changes.price > 0 else current.price
        title, author, price = self._validate(title, author, price)

        author_id = current.author_id
        if author != current.author:
            author_id = self._relink_author(current, author)

        row = self.books.update(
            current.id, title=title, author=author, author_id=author_id, price=price
        )
        book = self.enricher.enrich(BookRead.model_validate(row))

        self._dispatch("book_updated", book)
        return book

    def delete_book(self, book_id: BookId) -> None:
        # The read path counts a view even though the book is about to go away.
        book = self.get_book(book_id) if self.count_views_on_delete else self._find(book_id)
        if book is None:
            raise BookNotFoundError(book_id)

        self._release_author(book)
        self.books.delete(book.id)
        logger.info("Book deleted", extra={"book_id": book.id})

        self._dispatch("book_deleted", book)

    def _find(self, book_id: BookId | None) -> BookRead | None:
        if book_id is None or book_id <= 0:
            return None

        row = self.books.get_by_id(book_id)
        if row is None:
            return None
        return BookRead.model_validate(row)

    @staticmethod
    def _validate(
        title: str | None, author: str | None, price: float | None
    ) -> tuple[str, str, float]:
        if title is None or not title.strip():
            raise BookValidationError("title", "Title is required")
        if author is None or not author.strip():
            raise BookValidationError("author", "Author is required")
        if price is None or not math.isfinite(price) or price <= 0:
            raise BookValidationError("price", "Price must be positive")
        return title.strip(), author.strip(), price

    def _link_author(self, name: str) -> AuthorId:
        if not self.authors.exists(name):
            try:
                return AuthorId(self.authors.create(name).id)
            except PersistenceError:
                # Lost a race with a concurrent create for the same name.
                if not self.authors.exists(name):
                    raise
                logger.info("Author %r created concurrently; reusing entry", name)

        entry = self.authors.get_by_name(name)
        if entry is None:
            raise PersistenceError(f"Author ledger entry for {name!r} disappeared")
        self.authors.increment(AuthorId(entry.id))
        return AuthorId(entry.id)

    def _release_author(self, book: BookRead) -> None:
        if book.author_id is None:
            logger.warning(
                "Book %s has no author ledger entry; count left unchanged",
                book.id,
                extra={"author": book.author},
            )
            return

        if not self.authors.decrement(book.author_id):
            logger.warning(
                "Author ledger entry %s not found while releasing book %s",
                book.author_id,
                book.id,
            )

    def _relink_author(self, current: BookRead, new_author: str) -> AuthorId:
        self._release_author(current)
        return self._link_author(new_author)

    def _related_books(self, book: BookRead) -> list[BookId]:
        if book.author_id is None:
            return []
        try:
            return self.books.list_by_author(
                book.author_id, exclude_id=book.id, limit=self.related_limit
            )
        except Exception:
            logger.exception("Failed to look up related books for book %s", book.id)
            return []

    def _record_view(self, book_id: BookId) -> None:
        try:
            self.books.increment_view_count(book_id)
        except Exception:
            logger.exception("Failed to update view count for book %s", book_id)

    def _dispatch(self, hook: str, *args: object) -> None:
        for sink in self.sinks:
            try:
                getattr(sink, hook)(*args)
            except Exception:
                logger.exception("Side effect %s.%s failed", sink.name, hook)
