from bookstore_api.schemas.book import (
    BookCreate,
    BookListItem,
    BookRead,
    BookUpdate,
)
from bookstore_api.schemas.report import SalesReport

__all__ = [
    "BookCreate",
    "BookListItem",
    "BookRead",
    "BookUpdate",
    "SalesReport",
]
