import typing

BookId = typing.NewType("BookId", int)
AuthorId = typing.NewType("AuthorId", int)

DISCOUNT_THRESHOLD = 50.0
DISCOUNT_RATE = 0.10
# Assumed view-to-sale conversion rate used by the sales report.
VIEW_CONVERSION_RATE = 0.1

DEFAULT_GENRE = "Unknown"
DEFAULT_DESCRIPTION = "No description available"
