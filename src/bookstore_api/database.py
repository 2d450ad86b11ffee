from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from bookstore_api.config import settings

engine = create_engine(settings.database_url, echo=False)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Inventory lives in its own database.
inventory_engine = create_engine(settings.inventory_database_url, echo=False)
InventorySessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=inventory_engine)


class Base(DeclarativeBase):
    pass


class InventoryBase(DeclarativeBase):
    pass
