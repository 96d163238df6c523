"""Repository: Book."""

from collections.abc import Mapping
from typing import Any

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from src.books_api.core.errors import Conflict, NotFound

from .entity import Book, BookCreate, BookUpdate
from .table import BookTable


class BookRepository:
    """Data-access layer for books.

    Each public method performs one unit of work and commits it before
    returning.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _get_row(self, isbn: str) -> BookTable:
        row = self._session.get(BookTable, isbn)
        if row is None:
            raise NotFound(f"There is no book with an isbn '{isbn}'")
        return row

    def find_all(self, filters: Mapping[str, Any] | None = None) -> list[Book]:
        statement = select(BookTable)
        for column, value in (filters or {}).items():
            statement = statement.where(getattr(BookTable, column) == value)
        statement = statement.order_by(BookTable.title)
        rows = self._session.exec(statement).all()
        return [Book.model_validate(row, from_attributes=True) for row in rows]

    def find_one(self, isbn: str) -> Book:
        return Book.model_validate(self._get_row(isbn), from_attributes=True)

    def create(self, data: BookCreate) -> Book:
        message = f"Book with isbn '{data.isbn}' already exists"
        # an instance already in the identity map would fail the flush, not the insert
        if self._session.get(BookTable, data.isbn) is not None:
            raise Conflict(message)

        row = BookTable(**data.model_dump())
        self._session.add(row)
        try:
            self._session.commit()
        except IntegrityError as exc:
            # another session inserted the same isbn first
            self._session.rollback()
            logger.warning("Duplicate isbn rejected: {}", data.isbn)
            raise Conflict(message) from exc
        self._session.refresh(row)
        return Book.model_validate(row, from_attributes=True)

    def update(self, isbn: str, data: BookUpdate) -> Book:
        row = self._get_row(isbn)
        changes = data.changes()
        if changes:
            for field, value in changes.items():
                setattr(row, field, value)
            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)
        return Book.model_validate(row, from_attributes=True)

    def remove(self, isbn: str) -> None:
        row = self._get_row(isbn)
        self._session.delete(row)
        self._session.commit()
