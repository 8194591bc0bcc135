"""Main CLI application module."""

import typer
from rich.console import Console

from src.user_api.runtime.context import get_config

from .user_commands import users_app

console = Console()

# Create the main CLI application
app = typer.Typer(
    help="🛠️  User API CLI - server and user administration",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.add_typer(users_app, name="users")


@app.command("serve")
def serve(
    host: str = typer.Option(None, help="Host to bind to (defaults to config)"),
    port: int = typer.Option(None, help="Port to bind to (defaults to config)"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """🚀 Start the API server with uvicorn."""
    import uvicorn

    config = get_config()
    host = host or config.app.host
    port = port or config.app.port
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")

    uvicorn.run(
        "src.user_api.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        access_log=False,  # Request logging middleware covers this
    )


@app.command("init-db")
def init_db_command() -> None:
    """Create the indexes the user collection relies on."""
    from src.user_api.runtime.init_db import init_db

    init_db()
    console.print("[green]✅ User collection indexes are in place[/green]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
