"""Error taxonomy shared by the validator, repositories and routers.

Every error carries the HTTP status it should be answered with; the central
responder in ``api.http.app`` turns them into ``{"error": {...}}`` bodies.
"""

from typing import Any


class BooksApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: Any = None, status_code: int | None = None) -> None:
        self.message = message if message is not None else self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(BooksApiError):
    """Payload does not conform to its schema; ``message`` is the violation list."""

    status_code = 400
    default_message = "Invalid payload"

    def __init__(self, violations: list[str]) -> None:
        self.violations = list(violations)
        super().__init__(self.violations)


class BadRequest(BooksApiError):
    status_code = 400
    default_message = "Bad Request"


class NotFound(BooksApiError):
    status_code = 404
    default_message = "Not Found"


class Conflict(BooksApiError):
    status_code = 409
    default_message = "Conflict"


class InternalError(BooksApiError):
    pass
