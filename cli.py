"""CLI commands for event lifecycle management."""

import asyncio
from datetime import UTC, datetime, timedelta
from uuid import UUID

import typer
import uvicorn

from src.config.database import upgrade_db
from src.config.settings import settings
from src.events.dependencies import get_event_controller, get_event_store
from src.events.dtos import EventDTO, EventFieldsDTO, EventServiceError, Notifications, Reminder

app = typer.Typer(help="CLI commands for event lifecycle management")


def _controller():
    return get_event_controller(get_event_store())


def _print_event(event: EventDTO) -> None:
    typer.secho(f"  ID: {event.id}", fg=typer.colors.CYAN)
    typer.secho(f"  Title: {event.title}", fg=typer.colors.BLUE)
    typer.secho(f"  Starts: {event.start_date.isoformat()}", fg=typer.colors.BLUE)
    if event.deleted_at:
        typer.secho(f"  Deleted at: {event.deleted_at.isoformat()}", fg=typer.colors.MAGENTA)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the API server."""
    uvicorn.run("src.main:app", host=settings.app_host, port=settings.app_port, reload=reload)


@app.command()
def migrate():
    """Upgrade the database schema to the latest revision."""
    asyncio.run(upgrade_db())
    typer.secho("Database upgraded!", fg=typer.colors.GREEN)


@app.command()
def create_event(
    title: str = typer.Option("Daily standup", "--title", "-t", help="Event title"),
    team: str = typer.Option(None, "--team", help="Owning team id"),
):
    """Create a demo event starting in one hour."""
    start = datetime.now(UTC).replace(microsecond=0) + timedelta(hours=1)
    data = EventFieldsDTO(
        title=title,
        description="Created from the command line",
        start_date=start,
        end_date=start + timedelta(minutes=15),
        timezone="UTC",
        team=team,
        notifications=Notifications(email=True, reminder=Reminder.FIFTEEN_MINUTES),
    )
    try:
        event = asyncio.run(_controller().create_event(data))
    except EventServiceError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=1) from e

    typer.secho("Event created!", fg=typer.colors.GREEN)
    _print_event(event)


@app.command()
def list_deleted():
    """Show soft-deleted events that can still be recovered."""
    events = asyncio.run(_controller().list_deleted_events())
    if not events:
        typer.secho("No recoverable events", fg=typer.colors.YELLOW)
        return

    for event in events:
        _print_event(event)
        typer.echo()


@app.command()
def recover(
    event_id: str = typer.Argument(..., help="ID of the deleted event"),
):
    """Recover a soft-deleted event inside the retention window."""
    try:
        event = asyncio.run(_controller().recover_event(UUID(event_id)))
    except ValueError as e:
        typer.secho(f"Invalid event ID: {event_id}", fg=typer.colors.RED)
        raise typer.Exit(code=1) from e
    except EventServiceError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=1) from e

    typer.secho("Event recovered!", fg=typer.colors.GREEN)
    _print_event(event)


@app.command()
def purge():
    """Permanently remove events deleted more than 24 hours ago."""
    removed = asyncio.run(_controller().purge_sweep())
    typer.secho(f"Purged {removed} event(s)", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
