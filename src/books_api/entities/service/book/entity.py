"""Entity: Book."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# largest value a signed 64-bit INTEGER column holds
MAX_INTEGER = 2**63 - 1


class Book(BaseModel):
    """Book entity as returned by the API.

    ``isbn`` is the identifier; it is set once at creation and never changes.
    """

    isbn: str = Field(description="ISBN, unique identifier of the book")
    amazon_url: str = Field(description="Amazon product page")
    author: str = Field(description="Author")
    language: str = Field(description="Language the book is written in")
    pages: int = Field(description="Number of pages")
    publisher: str = Field(description="Publisher")
    title: str = Field(description="Title")
    year: int = Field(description="Publication year")

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Book):
            return False
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash(self.isbn)


class BookCreate(BaseModel):
    """Creation schema: every field is required and strictly typed."""

    model_config = ConfigDict(strict=True, extra="forbid")

    isbn: str = Field(min_length=1)
    amazon_url: str
    author: str
    language: str
    pages: int = Field(ge=0, le=MAX_INTEGER)
    publisher: str
    title: str
    year: int = Field(ge=0, le=MAX_INTEGER)


class BookUpdate(BaseModel):
    """Partial update schema.

    Any subset of the updatable fields; ``isbn`` is not a member, so the
    forbidden-extras rule rejects it.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    amazon_url: str | None = None
    author: str | None = None
    language: str | None = None
    pages: int | None = Field(default=None, ge=0, le=MAX_INTEGER)
    publisher: str | None = None
    title: str | None = None
    year: int | None = Field(default=None, ge=0, le=MAX_INTEGER)

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        # defaults are not validated, so only an explicit null reaches here
        if value is None:
            raise ValueError("Input should not be null")
        return value

    def changes(self) -> dict[str, Any]:
        """Return only the fields the client supplied."""
        return self.model_dump(exclude_unset=True)
