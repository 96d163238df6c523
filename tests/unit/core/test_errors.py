"""Unit tests for the error taxonomy."""

import pytest

from src.books_api.core.errors import (
    BadRequest,
    BooksApiError,
    Conflict,
    InternalError,
    NotFound,
    ValidationError,
)


@pytest.mark.parametrize(
    ("error_class", "status_code"),
    [
        (ValidationError, 400),
        (BadRequest, 400),
        (NotFound, 404),
        (Conflict, 409),
        (InternalError, 500),
    ],
)
def test_status_codes(error_class, status_code):
    error = error_class(["x"]) if error_class is ValidationError else error_class()

    assert isinstance(error, BooksApiError)
    assert error.status_code == status_code


def test_default_message_is_used_when_none_given():
    assert InternalError().message == "Internal Server Error"
    assert NotFound().message == "Not Found"


def test_status_code_can_be_overridden():
    error = BooksApiError("Teapot", status_code=418)

    assert error.status_code == 418
    assert error.message == "Teapot"


def test_validation_error_message_is_the_violation_list():
    error = ValidationError(["isbn: Field required", "year: Field required"])

    assert error.status_code == 400
    assert error.message == ["isbn: Field required", "year: Field required"]
    assert error.violations == error.message
