class CatalogError(Exception):
    """Base exception for catalog domain errors."""

    pass


class BookValidationError(CatalogError, ValueError):
    """Raised when a book payload is missing a required field or carries an invalid value."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class BookNotFoundError(CatalogError, LookupError):
    """Raised when a book id does not exist in the store."""

    def __init__(self, book_id: int) -> None:
        super().__init__(f"Book with id {book_id} not found")
        self.book_id = book_id


class PersistenceError(CatalogError):
    """Raised when a store operation affected no rows or the database call failed."""

    pass
