"""Tests for the books-api command line interface."""

from sqlalchemy import inspect
from sqlmodel import create_engine
from typer.testing import CliRunner

from src.cli import app
from src.books_api.runtime.config.config_data import ConfigData
from src.books_api.runtime.context import with_context

runner = CliRunner()


def _sqlite_override(tmp_path) -> tuple[ConfigData, str]:
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    return ConfigData.model_validate({"database": {"url": url}}), url


def test_init_db_creates_books_table(tmp_path):
    override, url = _sqlite_override(tmp_path)

    with with_context(override):
        result = runner.invoke(app, ["init-db"])

    assert result.exit_code == 0, result.output
    assert "books" in inspect(create_engine(url)).get_table_names()


def test_init_db_drop_requires_confirmation(tmp_path):
    override, _ = _sqlite_override(tmp_path)

    with with_context(override):
        result = runner.invoke(app, ["init-db", "--drop"], input="n\n")

    assert result.exit_code != 0


def test_serve_runs_uvicorn_with_app(monkeypatch):
    calls = {}

    def fake_run(target, **kwargs):
        calls["target"] = target
        calls.update(kwargs)

    monkeypatch.setattr("src.cli.commands.uvicorn.run", fake_run)

    result = runner.invoke(app, ["serve", "--port", "9001", "--host", "127.0.0.1"])

    assert result.exit_code == 0, result.output
    assert calls["target"] == "src.books_api.api.http.app:app"
    assert calls["port"] == 9001
    assert calls["host"] == "127.0.0.1"
    assert calls["reload"] is False


def test_no_arguments_shows_help():
    result = runner.invoke(app, [])

    assert "init-db" in result.output
    assert "serve" in result.output
