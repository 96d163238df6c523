"""Unit tests for payload schema validation."""

import pytest

from src.books_api.core.errors import ValidationError
from src.books_api.core.validation import format_violation, validate_payload
from src.books_api.entities.service.book import BookCreate, BookUpdate


def _violations(payload, schema) -> list[str]:
    try:
        validate_payload(payload, schema)
    except ValidationError as exc:
        return exc.violations
    return []


class TestCreationSchema:
    """Validation against the creation schema (all fields required)."""

    def test_valid_payload_has_no_violations(self, book_payload):
        assert _violations(book_payload, BookCreate) == []

    def test_valid_payload_is_parsed(self, book_payload):
        data = validate_payload(book_payload, BookCreate)

        assert isinstance(data, BookCreate)
        assert data.model_dump() == book_payload

    @pytest.mark.parametrize(
        "missing",
        ["isbn", "amazon_url", "author", "language", "pages", "publisher", "title", "year"],
    )
    def test_each_missing_field_is_reported(self, book_payload, missing):
        del book_payload[missing]

        violations = _violations(book_payload, BookCreate)

        assert violations == [f"{missing}: Field required"]

    def test_all_missing_fields_reported_in_order(self):
        violations = _violations({}, BookCreate)

        assert [v.split(":")[0] for v in violations] == [
            "isbn",
            "amazon_url",
            "author",
            "language",
            "pages",
            "publisher",
            "title",
            "year",
        ]

    def test_numeric_string_is_not_an_integer(self, make_book_payload):
        violations = _violations(make_book_payload(pages="10"), BookCreate)

        assert len(violations) == 1
        assert violations[0].startswith("pages: ")

    def test_boolean_is_not_an_integer(self, make_book_payload):
        violations = _violations(make_book_payload(year=True), BookCreate)

        assert len(violations) == 1
        assert violations[0].startswith("year: ")

    def test_integer_is_not_a_string(self, make_book_payload):
        violations = _violations(make_book_payload(isbn=123), BookCreate)

        assert len(violations) == 1
        assert violations[0].startswith("isbn: ")

    def test_largest_storable_integer_accepted(self, make_book_payload):
        assert _violations(make_book_payload(pages=2**63 - 1), BookCreate) == []

    def test_integer_beyond_storage_range_rejected(self, make_book_payload):
        violations = _violations(make_book_payload(year=2**63), BookCreate)

        assert len(violations) == 1
        assert violations[0].startswith("year: ")

    def test_empty_isbn_rejected(self, make_book_payload):
        violations = _violations(make_book_payload(isbn=""), BookCreate)

        assert len(violations) == 1
        assert violations[0].startswith("isbn: ")

    def test_unknown_field_rejected(self, make_book_payload):
        violations = _violations(make_book_payload(rating=5), BookCreate)

        assert violations == ["rating: Extra inputs are not permitted"]

    def test_non_object_payload_reported_against_body(self):
        violations = _violations(["not", "a", "book"], BookCreate)

        assert len(violations) == 1
        assert violations[0].startswith("body: ")

    def test_validate_payload_raises_with_violation_list(self, book_payload):
        del book_payload["title"]

        with pytest.raises(ValidationError) as exc_info:
            validate_payload(book_payload, BookCreate)

        assert exc_info.value.status_code == 400
        assert exc_info.value.violations == ["title: Field required"]
        assert exc_info.value.message == ["title: Field required"]


class TestUpdateSchema:
    """Validation against the partial update schema."""

    def test_empty_payload_is_valid(self):
        data = validate_payload({}, BookUpdate)

        assert data.changes() == {}

    def test_subset_of_fields_is_valid(self):
        data = validate_payload({"title": "New", "pages": 20}, BookUpdate)

        assert data.changes() == {"title": "New", "pages": 20}

    def test_isbn_is_rejected(self):
        violations = _violations({"isbn": "999", "title": "X"}, BookUpdate)

        assert violations == ["isbn: Extra inputs are not permitted"]

    def test_explicit_null_rejected(self):
        violations = _violations({"author": None}, BookUpdate)

        assert len(violations) == 1
        assert violations[0].startswith("author: ")
        assert "null" in violations[0]

    def test_wrong_type_rejected(self):
        violations = _violations({"year": "2020"}, BookUpdate)

        assert len(violations) == 1
        assert violations[0].startswith("year: ")


class TestFormatViolation:
    def test_joins_nested_location(self):
        assert format_violation(("book", 0, "title"), "bad") == "book.0.title: bad"

    def test_empty_location_means_body(self):
        assert format_violation((), "bad") == "body: bad"
