"""Command-line interface for running and inspecting the books service."""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.bookshelf.core.services import DbManageService, DbSessionService
from src.bookshelf.entities.book import BookRepository
from src.bookshelf.runtime.context import get_config

console = Console()

app = typer.Typer(
    name="bookshelf",
    help="Books API - run the server and manage the database",
    rich_markup_mode="rich",
)


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind (defaults to config)"),
    port: int | None = typer.Option(None, help="Port to bind (defaults to config)"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """Start the API server with uvicorn."""
    import uvicorn

    config = get_config()
    host = host or config.app.host
    port = port or config.app.port

    console.print(
        Panel.fit("[bold green]Starting Books API[/bold green]", border_style="green")
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    uvicorn.run(
        "src.bookshelf.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        access_log=False,
    )


@app.command(name="init-db")
def init_db() -> None:
    """Create the database tables."""
    database_service = DbSessionService()
    try:
        DbManageService(database_service.engine).create_all()
    finally:
        database_service.dispose()
    console.print("[green]Database tables created[/green]")


@app.command(name="list-books")
def list_books() -> None:
    """Print every stored book."""
    database_service = DbSessionService()
    try:
        with database_service.session_scope() as session:
            books = BookRepository(session).list_all()
    finally:
        database_service.dispose()

    if not books:
        console.print("[yellow]No books stored[/yellow]")
        return

    table = Table(title="Books")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title")
    for book in books:
        table.add_row(str(book.id), book.title)
    console.print(table)


if __name__ == "__main__":
    app()
