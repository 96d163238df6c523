"""Unit tests for the central error responder and request middleware."""

from sqlalchemy.exc import OperationalError

from src.books_api.api.http.deps import get_book_repository
from src.books_api.core.errors import BooksApiError


class ExplodingRepository:
    def __init__(self, exc: Exception):
        self._exc = exc

    def find_all(self, filters=None):
        raise self._exc

    def find_one(self, isbn):
        raise self._exc


def _override_repository(exc: Exception) -> None:
    from src.books_api.api.http.app import app

    app.dependency_overrides[get_book_repository] = lambda: ExplodingRepository(exc)


class TestErrorEnvelope:
    def test_unexpected_exception_returns_500(self, client):
        _override_repository(RuntimeError("boom"))

        response = client.get("/books")

        assert response.status_code == 500
        assert response.json() == {
            "error": {"message": "Internal Server Error", "status": 500}
        }

    def test_unexpected_exception_keeps_security_headers(self, client):
        _override_repository(RuntimeError("boom"))

        response = client.get("/books", headers={"X-Request-ID": "req-500"})

        assert response.status_code == 500
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Request-ID"] == "req-500"

    def test_storage_failure_falls_through_to_500(self, client):
        _override_repository(OperationalError("SELECT 1", {}, Exception("db down")))

        response = client.get("/books/123")

        assert response.status_code == 500
        assert response.json()["error"]["status"] == 500

    def test_error_without_explicit_status_defaults_to_500(self, client):
        _override_repository(BooksApiError("Something odd"))

        response = client.get("/books")

        assert response.status_code == 500
        assert response.json() == {"error": {"message": "Something odd", "status": 500}}

    def test_unknown_route_uses_error_envelope(self, client):
        response = client.get("/authors")

        assert response.status_code == 404
        assert response.json() == {"error": {"message": "Not Found", "status": 404}}

    def test_unsupported_method_uses_error_envelope(self, client):
        response = client.patch("/books/123", json={})

        assert response.status_code == 405
        assert response.json()["error"]["status"] == 405


class TestRequestMiddleware:
    def test_request_id_is_generated(self, client):
        response = client.get("/health")

        assert response.headers["X-Request-ID"]

    def test_request_id_is_propagated(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"

    def test_error_responses_carry_request_id(self, client):
        response = client.get("/books/999", headers={"X-Request-ID": "req-43"})

        assert response.status_code == 404
        assert response.headers["X-Request-ID"] == "req-43"

    def test_security_headers_present(self, client):
        response = client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
