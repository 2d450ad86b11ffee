from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from bookstore_api.config import settings
from bookstore_api.dependencies.sessions import get_db_session, get_inventory_session
from bookstore_api.repositories.authors_repository import AuthorsRepository
from bookstore_api.repositories.books_repository import BooksRepository
from bookstore_api.repositories.inventory_repository import InventoryRepository
from bookstore_api.services.book_service import BookService
from bookstore_api.services.enrichment import Enricher, StubMetadataClient
from bookstore_api.services.side_effects import (
    BookEventSink,
    CreationNotifier,
    DeletionAuditLog,
    InventoryRecorder,
    RecommendationIndex,
    SnapshotCache,
)


def get_books_repository(session: Annotated[Session, Depends(get_db_session)]) -> BooksRepository:
    return BooksRepository(session=session)


def get_authors_repository(
    session: Annotated[Session, Depends(get_db_session)],
) -> AuthorsRepository:
    return AuthorsRepository(session=session)


def get_inventory_repository(
    session: Annotated[Session, Depends(get_inventory_session)],
) -> InventoryRepository:
    return InventoryRepository(session=session)


def get_enricher() -> Enricher:
    return Enricher(client=StubMetadataClient())


def get_book_event_sinks(
    inventory: Annotated[InventoryRepository, Depends(get_inventory_repository)],
) -> list[BookEventSink]:
    return [
        SnapshotCache(path=settings.cache_path),
        RecommendationIndex(path=settings.recommendations_path),
        InventoryRecorder(repo=inventory, quantity=settings.inventory_default_quantity),
        CreationNotifier(),
        DeletionAuditLog(),
    ]


def get_book_service(
    books: Annotated[BooksRepository, Depends(get_books_repository)],
    authors: Annotated[AuthorsRepository, Depends(get_authors_repository)],
    enricher: Annotated[Enricher, Depends(get_enricher)],
    sinks: Annotated[list[BookEventSink], Depends(get_book_event_sinks)],
) -> BookService:
    return BookService(
        books=books,
        authors=authors,
        enricher=enricher,
        sinks=sinks,
        related_limit=settings.related_books_limit,
        count_views_on_delete=settings.count_views_on_delete,
    )
