import pytest

from bookstore_api.domain import BookId
from bookstore_api.schemas.book import BookRead
from bookstore_api.services.catalog_views import (
    apply_display_discount,
    build_sales_report,
    search_books,
)


def make_book(
    book_id: int, title: str, author: str, price: float = 10.0, view_count: int = 0
) -> BookRead:
    return BookRead(
        id=BookId(book_id), title=title, author=author, price=price, view_count=view_count
    )


@pytest.mark.parametrize(
    ("price", "applied", "discounted"),
    [
        pytest.param(50.0, False, None, id="threshold-not-discounted"),
        pytest.param(50.01, True, 45.009, id="just-above-threshold"),
        pytest.param(100.0, True, 90.0, id="expensive"),
        pytest.param(9.99, False, None, id="cheap"),
    ],
)
def test_apply_display_discount(price: float, applied: bool, discounted: float | None) -> None:
    [item] = apply_display_discount([make_book(1, "T", "A", price=price)])

    assert item.discount_applied is applied
    if discounted is None:
        assert item.discounted_price is None
    else:
        assert item.discounted_price == pytest.approx(discounted)
    assert item.price == price


def test_apply_display_discount_leaves_source_books_untouched() -> None:
    book = make_book(1, "T", "A", price=80.0)

    apply_display_discount([book])

    assert not hasattr(book, "discount_applied")


def test_search_books_matches_title_or_author() -> None:
    books = [
        make_book(1, "Science Fiction Primer", "Ada Writer"),
        make_book(2, "Dune", "Frank Herbert"),
        make_book(3, "Poems", "Fiction Collective"),
    ]

    assert [b.id for b in search_books(books, "fic")] == [1, 3]
    assert [b.id for b in search_books(books, "HERB")] == [2]
    assert search_books(books, "zzz") == []


def test_search_books_limit() -> None:
    books = [make_book(i, f"Dune {i}", "Frank Herbert") for i in range(1, 6)]

    assert [b.id for b in search_books(books, "dune", limit=2)] == [1, 2]


def test_build_sales_report() -> None:
    books = [
        make_book(1, "Cheap", "Author One", price=20, view_count=10),
        make_book(2, "Pricey", "Author Two", price=100, view_count=5),
    ]

    report = build_sales_report(books)

    assert report.total_revenue == pytest.approx(70.0)
    assert report.total_books == 2
    assert report.average_price == pytest.approx(35.0)
    assert report.top_authors == {"Author One": 1, "Author Two": 1}


def test_build_sales_report_empty_catalog() -> None:
    report = build_sales_report([])

    assert report.total_books == 0
    assert report.total_revenue == 0.0
    assert report.average_price == 0.0
    assert report.top_authors == {}


def test_sales_report_serializes_camel_case() -> None:
    report = build_sales_report([make_book(1, "T", "A", price=10, view_count=1)])

    assert set(report.model_dump(by_alias=True)) == {
        "totalRevenue",
        "totalBooks",
        "averagePrice",
        "topAuthors",
    }
