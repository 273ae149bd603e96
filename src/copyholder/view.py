"""
Console rendering of the two-pane history view with rich.

The left pane lists entries newest first, the right pane shows the detail
entry in full, and the footer carries the confirmation toast when one is
visible.
"""

from rich.console import Group
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .binding import HistoryBinding
from .models import HistoryEntry
from .utils import format_timestamp, preview


def history_table(
    entries: list[HistoryEntry],
    preview_width: int = 80,
    selected_id: str | None = None,
    title: str | None = "Clipboard",
) -> Table:
    """Table of numbered entries with a short id, capture time, and one-line preview."""
    table = Table(title=title, expand=True, show_lines=False)
    table.add_column("#", style="dim", justify="right", no_wrap=True)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Captured", style="magenta", no_wrap=True)
    table.add_column("Content", overflow="ellipsis", no_wrap=True)
    for row, entry in enumerate(entries, start=1):
        style = "reverse" if entry.id == selected_id else None
        table.add_row(
            str(row),
            entry.id[:8],
            format_timestamp(entry.created_at),
            preview(entry.content, preview_width),
            style=style,
        )
    return table


def detail_panel(entry: HistoryEntry | None) -> Panel:
    """Full content of the detail entry, or a placeholder when history is empty."""
    if entry is None:
        body = Text("No clipboard content", style="dim")
        subtitle = None
    else:
        body = Text(entry.content)
        subtitle = f"{entry.id} · {format_timestamp(entry.created_at)}"
    return Panel(body, title="Latest Copied Item", subtitle=subtitle, expand=True)


def render(
    binding: HistoryBinding, preview_width: int = 80, status: str | None = None
) -> Layout:
    """Layout for the live `watch` view. `status` replaces the default footer text."""
    layout = Layout()
    layout.split_column(Layout(name="main", ratio=1), Layout(name="footer", size=3))
    layout["main"].split_row(
        Layout(
            history_table(binding.entries, preview_width, binding.selected_entry_id),
            name="list",
            ratio=2,
        ),
        Layout(detail_panel(binding.detail_entry), name="detail", ratio=3),
    )
    toast = binding.toast_message
    footer = (
        Text(toast, style="bold white on grey23", justify="center")
        if toast
        else Text(status or f"{len(binding.entries)} entries · Ctrl+C to quit", style="dim")
    )
    layout["footer"].update(Panel(Group(footer)))
    return layout
