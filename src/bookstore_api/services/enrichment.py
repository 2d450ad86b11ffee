import logging
from typing import Protocol

from bookstore_api.domain import DEFAULT_DESCRIPTION, DEFAULT_GENRE
from bookstore_api.schemas.book import BookRead

logger = logging.getLogger(__name__)


class MetadataClient(Protocol):
    def fetch_genre(self, isbn: str | None) -> str: ...

    def fetch_description(self, isbn: str | None) -> str: ...


class StubMetadataClient:
    """
    Placeholder for an external catalog metadata provider. Returns fixed values.
    """

    def fetch_genre(self, isbn: str | None) -> str:
        _ = isbn
        return "Fiction"

    def fetch_description(self, isbn: str | None) -> str:
        _ = isbn
        return "A fascinating book about..."


class Enricher:
    def __init__(self, client: MetadataClient) -> None:
        self.client = client

    def enrich(self, book: BookRead) -> BookRead:
        try:
            genre = self.client.fetch_genre(book.isbn)
            description = self.client.fetch_description(book.isbn)
        except Exception:
            logger.warning(
                "Metadata lookup failed for book %s; using defaults", book.id, exc_info=True
            )
            genre, description = DEFAULT_GENRE, DEFAULT_DESCRIPTION

        return book.model_copy(update={"genre": genre, "description": description})
