from sqlalchemy.orm import Session

from bookstore_api.domain import BookId
from bookstore_api.models import InventoryItem
from bookstore_api.repositories.unit_of_work import committing


class InventoryRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, book_id: BookId, quantity: int) -> InventoryItem:
        item = InventoryItem(book_id=book_id, quantity=quantity)
        with committing(self.session, "Recording inventory"):
            self.session.add(item)

        self.session.refresh(item)
        return item

