from pydantic import Field

from bookstore_api.schemas.book import CamelModel


class SalesReport(CamelModel):
    total_revenue: float = Field(description="Sum of price * view count * conversion rate")
    total_books: int
    average_price: float = Field(description="Total revenue divided by the number of books")
    top_authors: dict[str, int] = Field(
        default_factory=dict, description="Author name to number of books in the catalog"
    )
