"""Schema management for the application database."""

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import SQLModel, create_engine

from src.books_api.runtime.context import get_config


class DbManageService:
    def __init__(self, engine: Engine | None = None):
        if engine is None:
            engine = create_engine(get_config().database.connection_string, echo=False)
        self._engine = engine

    def create_all(self) -> None:
        """Create all database tables."""
        from src.books_api.entities.service.book import BookTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        """Drop all database tables."""
        from src.books_api.entities.service.book import BookTable  # noqa: F401

        SQLModel.metadata.drop_all(self._engine)
        logger.warning("Database tables dropped.")
