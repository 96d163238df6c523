"""Book API router with CRUD operations."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status
from loguru import logger
from pydantic import BaseModel

from src.books_api.api.http.deps import get_book_repository
from src.books_api.core.errors import BadRequest
from src.books_api.core.validation import validate_payload
from src.books_api.entities.service.book import (
    FILTERABLE_COLUMNS,
    MAX_INTEGER,
    Book,
    BookCreate,
    BookRepository,
    BookUpdate,
)

router = APIRouter(prefix="/books", tags=["books"])


class BookEnvelope(BaseModel):
    book: Book


class BookListEnvelope(BaseModel):
    books: list[Book]


class MessageEnvelope(BaseModel):
    message: str


def parse_filters(request: Request) -> dict[str, Any]:
    """Turn query parameters into equality filters on allowed columns."""
    unknown = sorted(set(request.query_params) - FILTERABLE_COLUMNS.keys())
    if unknown:
        raise BadRequest(f"Cannot filter books by: {', '.join(unknown)}")

    filters: dict[str, Any] = {}
    for column, raw_value in request.query_params.items():
        if FILTERABLE_COLUMNS[column] is int:
            try:
                value = int(raw_value)
            except ValueError:
                raise BadRequest(f"{column} must be an integer") from None
            if abs(value) > MAX_INTEGER:
                raise BadRequest(f"{column} is out of range")
            filters[column] = value
        else:
            filters[column] = raw_value
    return filters


@router.get("", response_model=BookListEnvelope)
def list_books(
    filters: dict[str, Any] = Depends(parse_filters),
    repository: BookRepository = Depends(get_book_repository),
) -> BookListEnvelope:
    """GET /books => {books: [book, ...]}"""
    return BookListEnvelope(books=repository.find_all(filters))


@router.get("/{isbn}", response_model=BookEnvelope)
def get_book(
    isbn: str,
    repository: BookRepository = Depends(get_book_repository),
) -> BookEnvelope:
    """GET /books/{isbn} => {book: book}"""
    return BookEnvelope(book=repository.find_one(isbn))


@router.post("", response_model=BookEnvelope, status_code=status.HTTP_201_CREATED)
def create_book(
    payload: Any = Body(...),
    repository: BookRepository = Depends(get_book_repository),
) -> BookEnvelope:
    """POST /books bookData => {book: newBook}"""
    data = validate_payload(payload, BookCreate)
    book = repository.create(data)
    logger.info("Book created", isbn=book.isbn)
    return BookEnvelope(book=book)


@router.put("/{isbn}", response_model=BookEnvelope)
def update_book(
    isbn: str,
    payload: Any = Body(...),
    repository: BookRepository = Depends(get_book_repository),
) -> BookEnvelope:
    """PUT /books/{isbn} bookData => {book: updatedBook}

    The isbn identifies the book and cannot be changed through the body.
    """
    if isinstance(payload, dict) and "isbn" in payload:
        raise BadRequest("Not allowed")

    data = validate_payload(payload, BookUpdate)
    book = repository.update(isbn, data)
    logger.info("Book updated", isbn=isbn, fields=sorted(data.changes()))
    return BookEnvelope(book=book)


@router.delete("/{isbn}", response_model=MessageEnvelope)
def delete_book(
    isbn: str,
    repository: BookRepository = Depends(get_book_repository),
) -> MessageEnvelope:
    """DELETE /books/{isbn} => {message: "Book deleted"}"""
    repository.remove(isbn)
    logger.info("Book deleted", isbn=isbn)
    return MessageEnvelope(message="Book deleted")
