"""User administration CLI commands working directly against MongoDB."""

from collections.abc import Iterator
from contextlib import contextmanager

import typer
from pymongo.errors import PyMongoError
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from src.user_api.core.exceptions import DuplicateUsernameError
from src.user_api.core.services import MongoService
from src.user_api.entities.core.user import CreateUserRequest, User, UserRepository

console = Console()

# Create the users subcommand app
users_app = typer.Typer(help="Manage users stored in MongoDB")


@contextmanager
def user_repository() -> Iterator[UserRepository]:
    """Repository on the configured collection; the client is closed on exit."""
    service = MongoService()
    try:
        yield UserRepository(service.get_collection())
    finally:
        service.close()


def _describe(user: User) -> str:
    full_name = f"{user.first_name or ''} {user.last_name or ''}".strip()
    return f"{user.username} ({full_name})" if full_name else user.username


@users_app.command("list")
def list_users(
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number (1-based)"),
    page_size: int = typer.Option(
        10, "--page-size", "-s", min=1, max=100, help="Users per page"
    ),
) -> None:
    """List users, most recently created first."""
    try:
        with user_repository() as repository:
            result = repository.list_paged(page, page_size)
    except PyMongoError as e:
        console.print(f"[red]❌ Failed to list users: {e}[/red]")
        raise typer.Exit(code=1) from e

    if not result.data:
        console.print(f"[yellow]No users on page {page}[/yellow]")
        return

    table = Table(title=f"Users (page {result.page})")
    table.add_column("ID", style="cyan")
    table.add_column("Username", style="green")
    table.add_column("Email", style="blue")
    table.add_column("First Name", style="magenta")
    table.add_column("Last Name", style="magenta")
    table.add_column("Created", style="yellow")

    for user in result.data:
        table.add_row(
            user.id,
            user.username,
            user.email or "",
            user.first_name or "",
            user.last_name or "",
            user.created_at.isoformat(),
        )

    console.print(table)
    console.print(f"\n[green]Showing {len(result.data)} of {result.total_count} users[/green]")


@users_app.command("show")
def show_user(
    username: str = typer.Argument(..., help="Exact username"),
) -> None:
    """Show a single user by username."""
    with user_repository() as repository:
        user = repository.get_by_username(username)
    if user is None:
        console.print(f"[red]❌ User '{username}' not found[/red]")
        raise typer.Exit(code=1)

    console.print_json(data=user.model_dump(mode="json"))


@users_app.command("add")
def add_user(
    username: str = typer.Argument(..., help="Username for the new user"),
    email: str = typer.Option(None, "--email", "-e", help="Email address"),
    first_name: str = typer.Option(None, "--first-name", "-f", help="First name"),
    last_name: str = typer.Option(None, "--last-name", "-l", help="Last name"),
) -> None:
    """Add a new user."""
    if not username.strip():
        console.print("[red]❌ Username is required[/red]")
        raise typer.Exit(code=1)

    request = CreateUserRequest(
        username=username, email=email, first_name=first_name, last_name=last_name
    )
    try:
        with user_repository() as repository:
            user = repository.create(request)
    except DuplicateUsernameError as e:
        console.print(f"[red]❌ User '{e.username}' already exists[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Created user '{user.username}' with id {user.id}[/green]")


@users_app.command("delete")
def delete_user(
    user_id: str = typer.Argument(..., help="Id of the user to delete"),
    force: bool = typer.Option(False, "--force", help="Skip confirmation prompt"),
) -> None:
    """Delete a user by id."""
    with user_repository() as repository:
        user = repository.get_by_id(user_id)
        if user is None:
            console.print(f"[red]❌ User with id '{user_id}' not found[/red]")
            raise typer.Exit(code=1)

        prompt = f"Are you sure you want to delete user '{_describe(user)}'?"
        if not force and not Confirm.ask(prompt):
            console.print("[yellow]Deletion cancelled[/yellow]")
            return

        if repository.delete(user_id):
            console.print(f"[green]✅ Deleted user '{user.username}'[/green]")
        else:
            console.print(f"[yellow]User '{user.username}' was already gone[/yellow]")
