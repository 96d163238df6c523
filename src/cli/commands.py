"""Database and server CLI commands."""

import typer
import uvicorn
from rich.console import Console
from rich.panel import Panel

console = Console()


def init_db(
    drop: bool = typer.Option(
        False, "--drop", help="Drop existing tables before creating them"
    ),
) -> None:
    """
    🗄️  Create the database tables.

    Uses the database URL from config.yaml (or DATABASE_URL).
    """
    from src.books_api.core.services import DbManageService
    from src.books_api.runtime.context import get_config

    db_manage_service = DbManageService()
    if drop:
        if not typer.confirm("Drop all tables? Existing books will be lost"):
            raise typer.Abort()
        db_manage_service.drop_all()

    db_manage_service.create_all()
    console.print(
        f"[green]✅ Tables ready at[/green] {get_config().database.url}"
    )


def serve(
    host: str = typer.Option("0.0.0.0", help="Host to bind the server to"),
    port: int = typer.Option(8000, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    🚀 Start the Books API server.
    """
    console.print(
        Panel.fit(
            "[bold green]Starting Books API Server[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        "src.books_api.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        reload_dirs=["src"] if reload else None,
        log_level=log_level,
    )
