"""Book database table model."""

from sqlmodel import Field, SQLModel


class BookTable(SQLModel, table=True):
    """Database persistence model for books.

    This represents how the Book entity is stored in the database.
    It's separate from the domain entity to keep the API shape independent
    of the storage layer.
    """

    __tablename__ = "books"

    isbn: str = Field(primary_key=True)
    amazon_url: str
    author: str
    language: str
    pages: int
    publisher: str
    title: str = Field(index=True)
    year: int


# Columns clients may filter on with ``GET /books?<column>=<value>``
FILTERABLE_COLUMNS: dict[str, type] = {
    "isbn": str,
    "author": str,
    "language": str,
    "publisher": str,
    "title": str,
    "pages": int,
    "year": int,
}
