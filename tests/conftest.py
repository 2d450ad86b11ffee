from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookstore_api.database import Base, InventoryBase
from bookstore_api.dependencies.books import get_book_event_sinks
from bookstore_api.dependencies.sessions import get_db_session, get_inventory_session
from bookstore_api.main import app
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


def _memory_engine() -> Engine:
    return create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture(autouse=True)
def clear_dependency_overrides() -> Iterator[None]:
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db_engine() -> Iterator[Engine]:
    # Fresh database per test: repositories commit their own writes.
    engine = _memory_engine()
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def inventory_engine() -> Iterator[Engine]:
    engine = _memory_engine()
    InventoryBase.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine: Engine) -> Iterator[Session]:
    session = sessionmaker(bind=db_engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def inventory_session(inventory_engine: Engine) -> Iterator[Session]:
    session = sessionmaker(bind=inventory_engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def books_repo(db_session: Session) -> BooksRepository:
    return BooksRepository(session=db_session)


@pytest.fixture
def authors_repo(db_session: Session) -> AuthorsRepository:
    return AuthorsRepository(session=db_session)


@pytest.fixture
def inventory_repo(inventory_session: Session) -> InventoryRepository:
    return InventoryRepository(session=inventory_session)


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "book_cache.txt"


@pytest.fixture
def recommendations_path(tmp_path: Path) -> Path:
    return tmp_path / "recommendations.txt"


@pytest.fixture
def sinks(
    cache_path: Path, recommendations_path: Path, inventory_repo: InventoryRepository
) -> list[BookEventSink]:
    return [
        SnapshotCache(path=cache_path),
        RecommendationIndex(path=recommendations_path),
        InventoryRecorder(repo=inventory_repo, quantity=10),
        CreationNotifier(),
        DeletionAuditLog(),
    ]


@pytest.fixture
def book_service(
    books_repo: BooksRepository,
    authors_repo: AuthorsRepository,
    sinks: list[BookEventSink],
) -> BookService:
    return BookService(
        books=books_repo,
        authors=authors_repo,
        enricher=Enricher(client=StubMetadataClient()),
        sinks=sinks,
        clock=lambda: 1_700_000_012_345,
    )


@pytest.fixture
def client(
    db_session: Session, inventory_session: Session, sinks: list[BookEventSink]
) -> Iterator[TestClient]:
    def override_get_db_session() -> Iterator[Session]:
        yield db_session

    def override_get_inventory_session() -> Iterator[Session]:
        yield inventory_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_inventory_session] = override_get_inventory_session
    app.dependency_overrides[get_book_event_sinks] = lambda: sinks

    with TestClient(app) as test_client:
        yield test_client
