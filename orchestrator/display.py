"""Rich rendering helpers for the command line."""
import json
import typing as t

from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table

from planner.formatting import SOURCE_ICONS, format_datetime, truncate_title
from planner.models import ScheduleBlock

console = Console()

SOURCE_STYLES = {"canvas": "cyan", "personal": "green", "ai": "magenta"}


def create_schedule_table(blocks: t.Sequence[ScheduleBlock], tz_name: t.Optional[str] = None) -> Table:
    """Create a table with one row per block."""
    table = Table(title="🗓️ Today's Plan", show_header=True, header_style="bold magenta")
    table.add_column("", width=3)
    table.add_column("Block", style="white")
    table.add_column("Time", style="yellow")
    table.add_column("Source")
    table.add_column("Note", style="dim")

    for block in blocks:
        style = SOURCE_STYLES.get(block.source, "white")
        table.add_row(
            SOURCE_ICONS.get(block.source, "•"),
            truncate_title(block.label),
            f"{format_datetime(block.start, tz_name)} → {format_datetime(block.end, tz_name)}",
            f"[{style}]{block.source}[/{style}]",
            block.note or "",
        )
    return table


def display_verbose_json(title: str, data: t.Any) -> None:
    """Display JSON data in a panel."""
    console.print(Panel(JSON(json.dumps(data, indent=2)), title=f"📄 {title}", expand=True, border_style="blue"))
