"""
Best-effort reactions to book lifecycle events.

BookService calls every registered sink after the primary store operation has
succeeded. A sink may raise; the service logs the failure and carries on, so
nothing here can change the outcome of a request.
"""

import csv
import logging
from collections.abc import Sequence
from pathlib import Path

from bookstore_api.domain import BookId
from bookstore_api.repositories.inventory_repository import InventoryRepository
from bookstore_api.schemas.book import BookRead

logger = logging.getLogger(__name__)


class BookEventSink:
    """Base sink; every hook is a no-op so subclasses override only what they need."""

    name = "sink"

    def catalog_listed(self, books: Sequence[BookRead]) -> None:
        pass

    def book_created(self, book: BookRead, related_ids: Sequence[BookId]) -> None:
        pass

    def book_updated(self, book: BookRead) -> None:
        pass

    def book_deleted(self, book: BookRead) -> None:
        pass


class SnapshotCache(BookEventSink):
    """
    Flat `id,title,author` snapshot of the catalog, overwritten on every list
    and dropped whenever the catalog changes. Nothing reads it back.
    """

    name = "snapshot_cache"

    def __init__(self, path: Path) -> None:
        self.path = path

    def catalog_listed(self, books: Sequence[BookRead]) -> None:
        with self.path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            for book in books:
                writer.writerow([book.id, book.title, book.author])

    def book_updated(self, book: BookRead) -> None:
        self.invalidate()

    def book_deleted(self, book: BookRead) -> None:
        self.invalidate()

    def invalidate(self) -> None:
        self.path.unlink(missing_ok=True)


class RecommendationIndex(BookEventSink):
    """
    Line-oriented index `<book_id>:<id>,<id>,...` of other books by the same
    author. A placeholder, not a ranking: entries are first-found and bounded
    by the caller.
    """

    name = "recommendation_index"

    def __init__(self, path: Path) -> None:
        self.path = path

    def book_created(self, book: BookRead, related_ids: Sequence[BookId]) -> None:
        line = f"{book.id}:{','.join(str(related_id) for related_id in related_ids)}\n"
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line)

    def book_deleted(self, book: BookRead) -> None:
        if not self.path.exists():
            return

        prefix = f"{book.id}:"
        with self.path.open("r", encoding="utf-8") as f:
            kept = [line for line in f if not line.startswith(prefix)]

        with self.path.open("w", encoding="utf-8") as f:
            f.writelines(kept)


class InventoryRecorder(BookEventSink):
    name = "inventory"

    def __init__(self, repo: InventoryRepository, quantity: int) -> None:
        self.repo = repo
        self.quantity = quantity

    def book_created(self, book: BookRead, related_ids: Sequence[BookId]) -> None:
        self.repo.add(book_id=book.id, quantity=self.quantity)


class CreationNotifier(BookEventSink):
    # Delivery is out of scope; the notification is only logged.
    name = "creation_notifier"

    def __init__(self, notification_logger: logging.Logger | None = None) -> None:
        self.logger = notification_logger or logging.getLogger("bookstore_api.notifications")

    def book_created(self, book: BookRead, related_ids: Sequence[BookId]) -> None:
        self.logger.info(
            "New book added: %s",
            book.title,
            extra={"book_id": book.id, "author": book.author},
        )


class DeletionAuditLog(BookEventSink):
    name = "deletion_audit"

    def __init__(self, audit_logger: logging.Logger | None = None) -> None:
        self.logger = audit_logger or logging.getLogger("bookstore_api.audit")

    def book_deleted(self, book: BookRead) -> None:
        self.logger.info(
            "Book deleted: %s",
            book.title,
            extra={"book_id": book.id, "author": book.author},
        )
