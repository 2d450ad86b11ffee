from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from bookstore_api.config import settings
from bookstore_api.dependencies.books import get_book_service
from bookstore_api.domain import BookId
from bookstore_api.schemas.book import BookCreate, BookListItem, BookRead, BookUpdate
from bookstore_api.schemas.report import SalesReport
from bookstore_api.services.book_service import BookService
from bookstore_api.services.catalog_views import (
    apply_display_discount,
    build_sales_report,
    search_books,
)

router = APIRouter(prefix="/api/books", tags=["books"])

_ERROR_RESPONSES = {
    400: {"description": "Invalid book payload"},
    404: {"description": "Book not found"},
    500: {"description": "Store operation failed"},
}


@router.get("", response_model=list[BookListItem])
def list_books(svc: Annotated[BookService, Depends(get_book_service)]) -> list[BookListItem]:
    """List the whole catalog ordered by title, with the display discount applied."""
    return apply_display_discount(svc.list_books())


@router.get("/search", response_model=list[BookRead])
def search_catalog(
    svc: Annotated[BookService, Depends(get_book_service)],
    query: str = Query(..., description="Case-insensitive substring of the title or author"),
    limit: int = Query(
        settings.search_result_limit, ge=1, le=500, description="Max number of matches"
    ),
) -> list[BookRead]:
    return search_books(svc.list_books(), query, limit=limit)


@router.get("/reports/sales", response_model=SalesReport)
def get_sales_report(svc: Annotated[BookService, Depends(get_book_service)]) -> SalesReport:
    """Aggregate revenue estimate and per-author counts over the current catalog."""
    return build_sales_report(svc.list_books())


@router.get("/{book_id}", response_model=BookRead, responses={404: _ERROR_RESPONSES[404]})
def get_book_by_id(
    book_id: BookId,
    svc: Annotated[BookService, Depends(get_book_service)],
) -> BookRead:
    """Retrieve a single book. Each call counts as one view."""
    book = svc.get_book(book_id)
    if not book:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Book with id {book_id} not found",
        )
    return book


@router.post(
    "",
    response_model=BookRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: _ERROR_RESPONSES[400], 500: _ERROR_RESPONSES[500]},
)
def create_book(
    payload: BookCreate,
    svc: Annotated[BookService, Depends(get_book_service)],
) -> BookRead:
    """Add a book. Id, ISBN and internal code are generated by the server."""
    return svc.create_book(payload)


@router.put("/{book_id}", response_model=BookRead, responses=_ERROR_RESPONSES)
def update_book(
    book_id: BookId,
    payload: BookUpdate,
    svc: Annotated[BookService, Depends(get_book_service)],
) -> BookRead:
    """Partially update title, author or price. Omitted fields keep their values."""
    return svc.update_book(book_id, payload)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: _ERROR_RESPONSES[404], 500: _ERROR_RESPONSES[500]},
)
def delete_book(
    book_id: BookId,
    svc: Annotated[BookService, Depends(get_book_service)],
) -> Response:
    svc.delete_book(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
