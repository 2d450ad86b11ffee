import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from bookstore_api.models import Author, Book


class DataFactory:
    def __init__(self, session: Session):
        self.session = session

    def create_author(self, name: str, book_count: int = 1) -> Author:
        a = Author(name=name, book_count=book_count)
        self.session.add(a)
        self.session.flush()
        return a

    def create_book(
        self,
        title: str,
        author: Author | str,
        price: float = 10.0,
        view_count: int = 0,
        **kwargs,
    ) -> Book:
        if isinstance(author, str):
            author = self.get_author(author) or self.create_author(author, book_count=0)
            author.book_count += 1
        b = Book(
            title=title,
            author=author.name,
            author_id=author.id,
            price=price,
            view_count=view_count,
            **kwargs,
        )
        self.session.add(b)
        self.session.flush()
        return b

    def get_author(self, name: str) -> Author | None:
        return self.session.scalars(select(Author).where(Author.name == name)).first()

    def get_book(self, book_id: int) -> Book | None:
        self.session.expire_all()
        return self.session.get(Book, book_id)

    def commit(self):
        self.session.commit()


@pytest.fixture
def test_data(db_session: Session) -> DataFactory:
    return DataFactory(db_session)


@pytest.fixture
def sample_books(test_data: DataFactory) -> list[Book]:
    books = [
        test_data.create_book("Dune", "Frank Herbert", price=19.99, view_count=4),
        test_data.create_book("Children of Dune", "Frank Herbert", price=75.0, view_count=2),
        test_data.create_book("Science Fiction Primer", "Ada Writer", price=50.0),
        test_data.create_book("Foundation", "Isaac Asimov", price=120.0, view_count=1),
    ]
    test_data.commit()
    return books
