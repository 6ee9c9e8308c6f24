from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.table import Table

from wager_history.desk import Notice
from wager_history.domain.filtering import TypeBucket
from wager_history.domain.groups import Group
from wager_history.domain.models import HistoryRecord
from wager_history.domain.selection import SelectionSet

_NOTICE_STYLES = {"success": "green", "error": "bold red", "info": "cyan"}


def format_time(value: Optional[datetime]) -> str:
    """Clock time as shown in the tables, e.g. `9:05 PM`; `N/A` when missing."""
    if value is None:
        return "N/A"
    if value.tzinfo is not None:
        value = value.astimezone()
    hour = value.hour % 12 or 12
    return f"{hour}:{value.minute:02d} {'AM' if value.hour < 12 else 'PM'}"


def build_table(
    bucket: TypeBucket,
    records: Sequence[HistoryRecord],
    selection: Optional[SelectionSet] = None,
) -> Table:
    table = Table(title=bucket.label, box=box.ROUNDED, title_justify="left")
    table.add_column("", width=1)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Number", style="cyan", no_wrap=True)
    table.add_column("Amount", justify="right", style="bold green")
    table.add_column("Created At", justify="right")
    table.add_column("Modified At", justify="right", style="yellow")

    for record in records:
        mark = "x" if selection is not None and selection.is_selected(record.id) else ""
        table.add_row(
            mark,
            str(record.id),
            record.number,
            f"{record.amount:,}",
            format_time(record.created_at),
            format_time(record.modified_at),
        )
    if not records:
        table.caption = "[dim]No records[/dim]"
    return table


def render_tables(
    partitions: Iterable[Tuple[TypeBucket, List[HistoryRecord]]],
    selection: Optional[SelectionSet] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Print one table per bet-type bucket, in bucket order, empty ones included.
    """
    console = console or Console()
    for bucket, records in partitions:
        console.print(build_table(bucket, records, selection))


def render_groups(groups: Sequence[Group], console: Optional[Console] = None) -> None:
    console = console or Console()
    if not groups:
        console.print("[yellow]No groups to display.[/yellow]")
        return
    table = Table(title="Groups", box=box.ROUNDED)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Group Name", style="cyan")
    table.add_column("Commission", justify="right")
    table.add_column("Non-Pana Payable", justify="right")
    table.add_column("Pana Payable", justify="right")
    for group in groups:
        table.add_row(
            str(group.id),
            group.groupname,
            str(group.commission),
            str(group.nonpana_payable),
            str(group.pana_payable),
        )
    console.print(table)


def render_notices(notices: Iterable[Notice], console: Optional[Console] = None) -> None:
    console = console or Console()
    for notice in notices:
        style = _NOTICE_STYLES.get(notice.level, "")
        console.print(f"[{style}]{notice.message}[/{style}]" if style else notice.message)


def render_errors(errors: dict, console: Optional[Console] = None) -> None:
    console = console or Console()
    for field_name, message in errors.items():
        if message:
            console.print(f"[red]{field_name}[/red]: {message}")


__all__ = [
    "format_time",
    "build_table",
    "render_tables",
    "render_groups",
    "render_notices",
    "render_errors",
]
