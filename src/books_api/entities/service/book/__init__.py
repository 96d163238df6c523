"""Entity package: Book."""

from .entity import MAX_INTEGER, Book, BookCreate, BookUpdate
from .repository import BookRepository
from .table import FILTERABLE_COLUMNS, BookTable

__all__ = [
    "Book",
    "BookCreate",
    "BookUpdate",
    "BookRepository",
    "BookTable",
    "FILTERABLE_COLUMNS",
    "MAX_INTEGER",
]
