from bookstore_api.domain import BookId
from bookstore_api.schemas.book import BookRead
from bookstore_api.services.enrichment import Enricher, StubMetadataClient


class BrokenClient:
    def fetch_genre(self, isbn: str | None) -> str:
        raise TimeoutError("metadata provider timed out")

    def fetch_description(self, isbn: str | None) -> str:
        return "never reached"


def make_book() -> BookRead:
    return BookRead(id=BookId(1), title="Dune", author="Frank Herbert", price=10.0, isbn="ISBN-1")


def test_enrich_uses_client_values() -> None:
    book = make_book()

    enriched = Enricher(client=StubMetadataClient()).enrich(book)

    assert enriched.genre == "Fiction"
    assert enriched.description == "A fascinating book about..."
    assert book.genre is None


def test_enrich_falls_back_on_failure() -> None:
    enriched = Enricher(client=BrokenClient()).enrich(make_book())

    assert enriched.genre == "Unknown"
    assert enriched.description == "No description available"
