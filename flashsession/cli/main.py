"""flashsession CLI - Inspect and maintain SQLite session stores."""
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from flashsession.core.exceptions import SessionError, SessionNotFoundError
from flashsession.core.session import Session, SQLiteSessionStore

app = typer.Typer(
    name="flashsession",
    help="Inspect and maintain flashsession stores",
    add_completion=False
)
console = Console()


# Store path: ~/.config/flashsession/sessions.session
def get_store_path() -> Path:
    config_dir = Path.home() / ".config" / "flashsession"
    return config_dir / f"sessions{SQLiteSessionStore.EXTENSION}"


DB_OPTION = typer.Option(
    None, "--db", "-d",
    envvar="FLASHSESSION_DB",
    help="Session store file (default: ~/.config/flashsession/sessions.session)"
)


def open_store(db: Optional[Path]) -> SQLiteSessionStore:
    """Open the store, refusing to create one that is not there."""
    path = db or get_store_path()
    if not path.exists():
        console.print(f"[red]No session store at {path}[/red]")
        raise typer.Exit(1)
    return SQLiteSessionStore(path)


def format_value(value) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


@app.command("list")
def list_sessions(db: Optional[Path] = DB_OPTION):
    """List stored sessions."""
    with open_store(db) as store:
        table = Table()
        table.add_column("ID", style="cyan")
        table.add_column("Entries", justify="right")
        table.add_column("Expire")
        table.add_column("State")

        for session_id in store.ids():
            try:
                session = Session.load(store, session_id)
            except SessionError as e:
                table.add_row(session_id, "-", "-", f"[red]corrupt: {e}[/red]")
                continue
            obj = session.get_session_object()
            state = "[red]expired[/red]" if session.is_expired() else "[green]live[/green]"
            table.add_row(session_id, str(len(obj.data)), obj.expire or "never", state)

        console.print(table)


@app.command()
def show(
    session_id: str = typer.Argument(..., help="Session identifier"),
    db: Optional[Path] = DB_OPTION,
):
    """Show the entries of one session without consuming flash values."""
    with open_store(db) as store:
        try:
            obj = store.require(session_id)
        except SessionNotFoundError:
            console.print(f"[red]Session not found: {session_id}[/red]")
            raise typer.Exit(1)
        except SessionError as e:
            console.print(f"[red]Cannot read session {session_id}: {e}[/red]")
            raise typer.Exit(1)

        session = Session(obj)
        status = "expired" if session.is_expired() else "live"
        console.print(f"Session: {session_id}")
        console.print(f"Expire: {obj.expire or 'never'} ({status})")

        table = Table()
        table.add_column("Key", style="cyan")
        table.add_column("Flash")
        table.add_column("Value")
        for key in sorted(obj.data):
            entry = obj.data[key]
            table.add_row(key, "yes" if entry.flash else "no", format_value(entry.value))
        console.print(table)


@app.command()
def delete(
    session_id: str = typer.Argument(..., help="Session identifier"),
    db: Optional[Path] = DB_OPTION,
):
    """Delete one session."""
    with open_store(db) as store:
        if not store.exists(session_id):
            console.print(f"[yellow]No session {session_id}[/yellow]")
            return
        store.delete(session_id)
        console.print(f"[green]Deleted {session_id}[/green]")


@app.command()
def purge(db: Optional[Path] = DB_OPTION):
    """Delete every expired session."""
    removed = 0
    with open_store(db) as store:
        for session_id in store.ids():
            try:
                session = Session.load(store, session_id)
            except SessionError as e:
                console.print(f"[yellow]Skipping {session_id}: {e}[/yellow]")
                continue
            if session.is_expired():
                store.delete(session_id)
                removed += 1
    console.print(f"Purged {removed} expired session(s)")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
