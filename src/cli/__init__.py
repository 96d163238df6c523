"""Main CLI application module."""

import typer

from .commands import console, init_db, serve

# Create the main CLI application
app = typer.Typer(
    help="📚 Books API CLI - database and server commands",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="init-db")(init_db)
app.command(name="serve")(serve)


def main() -> None:
    """Main entry point for the CLI."""
    app()


__all__ = ["app", "console", "main"]


if __name__ == "__main__":
    main()
