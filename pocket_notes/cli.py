"""Command-line interface for Pocket Notes."""

import logging
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from .config import config
from .factory import create_note
from .models import FilterState, can_submit
from .query import all_tags, apply_filters
from .storage import JsonFileStore, NotePersistence
from .store import NoteStore
from .tags import normalize_tags, suggest_tags, toggle_tag_input

app = typer.Typer(
    name="pocket-notes",
    help="A lightweight notebook with instant search and tag filters."
)
console = Console()


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, config.log_level, logging.WARNING),
        stream=sys.stderr,
    )


def open_store() -> NoteStore:
    """Open the note store on the configured data directory."""
    backend = JsonFileStore(config.data_dir)
    return NoteStore(NotePersistence(backend), config.storage_key)


def _warn_if_unsaved(store: NoteStore) -> None:
    if not store.last_save_ok:
        console.print(
            "[yellow]! Could not save notes to disk. "
            "Changes are kept for this session only.[/yellow]"
        )


def _store_note(store: NoteStore, title: str, body: str, tags) -> None:
    note = create_note(title, body, tags)
    store.add(note)
    console.print(f"[green]✓[/green] Saved note [dim]{note.id}[/dim]")
    _warn_if_unsaved(store)


@app.command()
def add(
    title: str = typer.Argument("", help="Note title"),
    body: str = typer.Option("", "--body", "-b", help="Note text"),
    tags: str = typer.Option("", "--tags", "-t", help="Comma separated e.g. work, ideas, errands"),
):
    """Create a note. Needs a title or a body."""
    if not can_submit(title, body):
        console.print("[red]A note needs a title or a body.[/red]")
        raise typer.Exit(1)

    _store_note(open_store(), title, body, tags)


@app.command()
def compose():
    """
    Write a note interactively.

    Suggested tags from existing notes can be toggled by number.
    """
    store = open_store()
    suggestions = suggest_tags(all_tags(store.all()))

    console.print(Panel(
        "[bold]New note[/bold]\n\n"
        "Capture ideas quickly. Add tags to group related thoughts.",
        border_style="blue"
    ))

    title = Prompt.ask("Title", default="", show_default=False)
    body = Prompt.ask("Note", default="", show_default=False)
    tag_input = Prompt.ask("Tags", default="", show_default=False)

    while suggestions:
        current = normalize_tags(tag_input)
        row = "  ".join(
            f"[cyan]{i}[/cyan] " + (f"[green]#{tag}[/green]" if tag in current else f"#{tag}")
            for i, tag in enumerate(suggestions, 1)
        )
        console.print(f"\n{row}")
        console.print(f"[dim]Tags: {tag_input or '(none)'}[/dim]")

        choice = Prompt.ask("Toggle a tag by number (Enter to finish)", default="", show_default=False)
        if not choice:
            break
        try:
            idx = int(choice) - 1
        except ValueError:
            console.print("[red]Invalid option.[/red]")
            continue
        if 0 <= idx < len(suggestions):
            tag_input = toggle_tag_input(tag_input, suggestions[idx])
        else:
            console.print("[red]Invalid option.[/red]")

    if not can_submit(title, body):
        console.print("[red]A note needs a title or a body. Nothing saved.[/red]")
        raise typer.Exit(1)

    _store_note(store, title, body, tag_input)


@app.command("list")
def list_notes(
    search: str = typer.Option("", "--search", "-s", help="Search title, text and tags"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Only notes with this tag (repeatable)"),
):
    """Show notes, newest first, filtered by search text and tags."""
    store = open_store()
    state = FilterState(search_term=search)
    state.set_tags(tag or [])

    notes = apply_filters(store.all(), state)

    if not notes:
        if state.has_active_filters:
            console.print("[yellow]No notes match the current filters.[/yellow]")
        else:
            console.print("[dim]No notes yet. Create your first note with 'add'.[/dim]")
        return

    title = "Notes"
    if state.has_active_filters:
        parts = []
        if state.search_term.strip():
            parts.append(f"'{state.search_term.strip()}'")
        parts.extend(f"#{t}" for t in state.active_tags)
        title = f"Notes matching {' '.join(parts)}"

    table = Table(title=title, show_header=True)
    table.add_column("ID", style="dim", max_width=12)
    table.add_column("Created", style="cyan")
    table.add_column("Title", style="bold", max_width=30)
    table.add_column("Note", max_width=50)
    table.add_column("Tags", style="green")

    for note in notes:
        table.add_row(
            note.id[:8],
            note.display_timestamp,
            note.title,
            note.body[:200] + "..." if len(note.body) > 200 else note.body,
            " ".join(f"#{t}" for t in note.tags),
        )

    console.print(table)
    console.print(f"[dim]{len(notes)} of {len(store)} notes[/dim]")


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="Full note ID, or a unique prefix"),
):
    """Delete a note."""
    store = open_store()

    target = note_id
    if store.get(note_id) is None:
        matches = [n for n in store.all() if n.id.startswith(note_id)]
        if len(matches) > 1:
            console.print(f"[red]'{note_id}' matches {len(matches)} notes. Use a longer ID.[/red]")
            raise typer.Exit(1)
        if matches:
            target = matches[0].id

    if store.remove(target):
        console.print(f"[green]✓[/green] Deleted note [dim]{target}[/dim]")
        _warn_if_unsaved(store)
    else:
        console.print(f"[yellow]No note with id {note_id}.[/yellow]")


@app.command()
def tags(
    suggest: bool = typer.Option(False, "--suggest", help="Only show the quick-pick suggestions"),
):
    """List every tag in use."""
    store = open_store()
    universe = all_tags(store.all())
    shown = suggest_tags(universe) if suggest else universe

    if not shown:
        console.print("[dim]Add tags to your notes to filter them here.[/dim]")
        return

    console.print("  ".join(f"[green]#{t}[/green]" for t in shown))


@app.command()
def status():
    """Show configuration and storage state."""
    store = open_store()
    path = JsonFileStore(config.data_dir).path_for(config.storage_key)

    console.print(Panel("[bold]Pocket Notes - Status[/bold]", border_style="blue"))

    console.print(f"\n[bold]Configuration:[/bold]")
    console.print(f"  Data directory: {config.data_dir}")
    console.print(f"  Storage key: {config.storage_key}")
    console.print(f"  Suggested tags: {config.suggestion_limit}")

    console.print(f"\n[bold]Storage:[/bold]")
    if path.exists():
        console.print(f"  [green]✓[/green] File: {path}")
    else:
        console.print(f"  [red]✗[/red] File: not created yet")
    console.print(f"  Notes: {len(store)}")
    console.print(f"  Tags: {len(all_tags(store.all()))}")


if __name__ == "__main__":
    app()
