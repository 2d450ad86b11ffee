import argparse
import logging

from sqlalchemy import Engine

from bookstore_api import models  # noqa: F401  (registers mapped tables)
from bookstore_api.database import Base, InventoryBase, engine, inventory_engine

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_schema(
    catalog_engine: Engine = engine,
    stock_engine: Engine = inventory_engine,
    include_catalog: bool = True,
) -> None:
    """
    Creates missing tables. The catalog tables are normally owned by the Alembic
    revisions; the inventory database has no migrations of its own.
    """
    if include_catalog:
        logger.info("Creating catalog tables...")
        Base.metadata.create_all(catalog_engine)

    logger.info("Creating inventory tables...")
    InventoryBase.metadata.create_all(stock_engine)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create bookstore database tables.")
    parser.add_argument(
        "--inventory-only",
        action="store_true",
        help="Only create the inventory tables (catalog managed by Alembic).",
    )
    args = parser.parse_args()
    create_schema(include_catalog=not args.inventory_only)
