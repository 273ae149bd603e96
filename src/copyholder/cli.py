"""
Command line interface for copyholder.

Commands:
    watch    Track the clipboard and show the live two-pane history view. Type a
             row number to view an entry, `c <row>` to copy it back.
    history  Print the stored history, newest first.
    show     Print one entry in full.
    copy     Put a stored entry back on the clipboard.
    prune    Delete entries older than the retention window now.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.live import Live

from .app import CopyHolderApp, build_app
from .clipboard import MemoryClipboard
from .config import AppSettings, HistorySettings, get_settings
from .controls import ConsoleControls
from .errors import CopyHolderError
from .logger import logger as package_logger
from .logger import setup_logging
from .models import HistoryEntry
from .utils import format_timestamp
from .view import history_table, render

console = Console(
    record=True,
    width=120,
    color_system="auto",
)

app = typer.Typer(name="copyholder", help="Clipboard history tracker.")


def _build(console_logging: bool = True, memory_clipboard: bool = False) -> CopyHolderApp:
    setup_logging(get_settings(AppSettings), console=console_logging)
    clipboard = MemoryClipboard() if memory_clipboard else None
    return build_app(clipboard=clipboard)


def _resolve_entry(instance: CopyHolderApp, token: str) -> HistoryEntry:
    """Accept a row number, a full id, or the unique short prefix shown by `history`."""
    found = instance.binding.matches(token)
    if len(found) == 1:
        return found[0]
    if not found:
        console.print(f"[bold red]No entry matches[/bold red] {token}")
    else:
        console.print(f"[bold red]Ambiguous id prefix[/bold red] {token}")
    raise typer.Exit(code=1)


@app.command(name="watch", help="Track the clipboard and show the live history view.")
def watch(
    memory_clipboard: bool = typer.Option(
        False, "--memory-clipboard", help="Use an in-process clipboard (headless runs)."
    ),
):
    instance = _build(console_logging=False, memory_clipboard=memory_clipboard)
    preview_width = get_settings(HistorySettings).preview_width
    binding = instance.binding
    controls = ConsoleControls(binding, instance.scheduler, package_logger)
    rendered = {"key": None}

    with Live(render(binding, preview_width, controls.status), console=console, screen=True) as live:

        def redraw() -> None:
            key = (binding.version, controls.status)
            if rendered["key"] != key:
                rendered["key"] = key
                live.update(render(binding, preview_width, controls.status))

        instance.scheduler.call_every(0.25, redraw, name="redraw")
        controls.start()
        try:
            instance.run()
        except KeyboardInterrupt:
            pass
        finally:
            controls.stop()
    console.print("[bold green]Stopped watching the clipboard.[/bold green]")


@app.command(name="history", help="Print the stored history, newest first.")
def history(
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Show at most N entries."),
):
    instance = _build()
    entries = instance.store.list_all()
    if limit is not None:
        entries = entries[:limit]
    if not entries:
        console.print("[dim]No clipboard content[/dim]")
        return
    console.print(history_table(entries, get_settings(HistorySettings).preview_width))


@app.command(name="show", help="Print one entry in full.")
def show(entry_id: str = typer.Argument(..., help="Row number, entry id, or unique id prefix.")):
    instance = _build()
    entry = _resolve_entry(instance, entry_id)
    console.print(f"[bold cyan]{entry.id}[/bold cyan] [magenta]{format_timestamp(entry.created_at)}[/magenta]")
    console.print(entry.content, markup=False, highlight=False)


@app.command(name="copy", help="Put a stored entry back on the clipboard.")
def copy(entry_id: str = typer.Argument(..., help="Row number, entry id, or unique id prefix.")):
    instance = _build()
    copied = {}
    instance.engine.on_toast(lambda toast: copied.setdefault("message", toast.message))
    if not instance.engine.manual_copy(_resolve_entry(instance, entry_id).id):
        console.print("[bold red]Copy failed.[/bold red]")
        raise typer.Exit(code=1)
    console.print(f"[bold green]{copied.get('message', 'Copied')}[/bold green]")


@app.command(name="prune", help="Delete entries older than the retention window now.")
def prune():
    instance = _build()
    removed = instance.engine.sweep()
    console.print(f"[bold green]Pruned {removed} entries.[/bold green]")


def entry():
    """Entry point for the copyholder console script."""
    try:
        app()
    except CopyHolderError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise SystemExit(1) from e


if __name__ == "__main__":
    entry()
