from collections.abc import Iterator

from sqlalchemy.orm import Session

from bookstore_api.database import InventorySessionLocal, SessionLocal


def get_db_session() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_inventory_session() -> Iterator[Session]:
    session = InventorySessionLocal()
    try:
        yield session
    finally:
        session.close()
