"""
Presentation-time views over the catalog: the display discount, substring
search and the sales report. All of them work on an already fetched list.
"""

from collections import Counter
from collections.abc import Sequence

from bookstore_api.domain import DISCOUNT_RATE, DISCOUNT_THRESHOLD, VIEW_CONVERSION_RATE
from bookstore_api.schemas.book import BookListItem, BookRead
from bookstore_api.schemas.report import SalesReport


def apply_display_discount(books: Sequence[BookRead]) -> list[BookListItem]:
    """
    Marks books priced above the threshold with a discounted price. Never persisted.
    """
    items = []
    for book in books:
        item = BookListItem(**book.model_dump())
        if book.price > DISCOUNT_THRESHOLD:
            item.discount_applied = True
            item.discounted_price = book.price * (1 - DISCOUNT_RATE)
        items.append(item)
    return items


def search_books(books: Sequence[BookRead], query: str, limit: int | None = None) -> list[BookRead]:
    # Linear scan; no index behind it.
    needle = query.lower()
    results = []
    for book in books:
        if needle in book.title.lower() or needle in book.author.lower():
            results.append(book)
            if limit is not None and len(results) >= limit:
                break
    return results


def build_sales_report(books: Sequence[BookRead]) -> SalesReport:
    total_revenue = sum(book.price * book.view_count * VIEW_CONVERSION_RATE for book in books)
    total_books = len(books)
    average_price = total_revenue / total_books if total_books else 0.0

    return SalesReport(
        total_revenue=total_revenue,
        total_books=total_books,
        average_price=average_price,
        top_authors=dict(Counter(book.author for book in books)),
    )
