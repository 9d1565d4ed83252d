"""Schema management for the catalog database."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel


def register_tables() -> None:
    """Import every table module so its models land in ``SQLModel.metadata``."""
    from src.catalog.entities.product import table  # noqa: F401


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all catalog tables that do not exist yet."""
        register_tables()
        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables: {}", ", ".join(sorted(SQLModel.metadata.tables)))

    def drop_all(self) -> None:
        register_tables()
        SQLModel.metadata.drop_all(self._engine)
        logger.warning("Dropped all catalog tables")
