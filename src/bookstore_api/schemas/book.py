from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bookstore_api.domain import AuthorId, BookId


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookCreate(CamelModel):
    """Client-supplied fields; identifiers and counters are server-generated."""

    title: str | None = Field(default=None, examples=["Dune"])
    author: str | None = Field(default=None, examples=["Frank Herbert"])
    price: float | None = Field(default=None, examples=[19.99])


class BookUpdate(CamelModel):
    title: str | None = Field(default=None, description="New title; omitted keeps the current one")
    author: str | None = Field(
        default=None, description="New author; omitted keeps the current one"
    )
    price: float | None = Field(
        default=None, description="New price; only applied when greater than zero"
    )


class BookRead(CamelModel):
    id: BookId
    title: str
    author: str
    author_id: AuthorId | None = None
    price: float
    isbn: str | None = None
    internal_code: str | None = None
    view_count: int = 0
    genre: str | None = None
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


class BookListItem(BookRead):
    discount_applied: bool = False
    discounted_price: float | None = None
