"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.books_api.api.http.app_data import ApplicationDependencies
from src.books_api.core.services import DbSessionService
from src.books_api.entities.service.book import BookRepository


def get_database_service(request: Request) -> DbSessionService:
    """Get the database session service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a request-scoped database session and close it afterwards."""
    session = database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_book_repository(session: Session = Depends(get_db_session)) -> BookRepository:
    """Get a book repository bound to the request session."""
    return BookRepository(session)
