"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: API-facing models and validation schemas
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .service.book import Book, BookCreate, BookRepository, BookTable, BookUpdate

__all__ = [
    "Book",
    "BookCreate",
    "BookUpdate",
    "BookRepository",
    "BookTable",
]
