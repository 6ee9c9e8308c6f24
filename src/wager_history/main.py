from __future__ import annotations

import sys
from contextlib import contextmanager
from datetime import date, datetime
from typing import Dict, Iterator, List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from wager_history.config import build_context, get_settings
from wager_history.desk import HistoryDesk
from wager_history.directory import GroupDirectory
from wager_history.domain.edit_session import SubmitStatus
from wager_history.domain.groups import GroupDraft
from wager_history.gateway.http_gateway import HttpLedgerGateway
from wager_history.reporter import render_errors, render_groups, render_notices, render_tables
from wager_history.utils.logging import configure_logging

app = typer.Typer(help="Review and correct numbers-game history records.")
console = Console()

GAME_OPTION = typer.Option(..., "--game", "-g", help="Game id to show.")
GROUP_OPTION = typer.Option(..., "--group", "-G", help="Group id to show.")
DATE_OPTION = typer.Option(
    None, "--date", "-d", formats=["%Y-%m-%d"], help="Business date (default: today)."
)


@contextmanager
def _open_desk(game: int, business_date: Optional[datetime], group: int) -> Iterator[HistoryDesk]:
    """Build a desk over the HTTP gateway and load the requested scope."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    with HttpLedgerGateway(settings) as gateway:
        desk = HistoryDesk(gateway, build_context(settings))
        if not desk.load_reference_data():
            console.print("[yellow]Session is not authenticated.[/yellow]")
            raise typer.Exit(code=1)
        chosen_date: date = business_date.date() if business_date else date.today()
        desk.select(game_id=game, business_date=chosen_date, group_id=group)
        if desk.game is None or desk.group is None:
            render_notices(desk.drain_notices(), console)
            console.print(f"[red]Unknown game {game} or group {group}.[/red]")
            raise typer.Exit(code=1)
        try:
            yield desk
        finally:
            render_notices(desk.drain_notices(), console)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    token = "set" if settings.api_token else "unset"
    typer.echo(
        f"API={settings.api_base_url} (timeout={settings.api_timeout}s, token={token}) | "
        f"user={settings.user_id} env={settings.app_env} log={settings.log_level}"
    )


@app.command()
def history(
    game: int = GAME_OPTION,
    group: int = GROUP_OPTION,
    business_date: Optional[datetime] = DATE_OPTION,
    number: str = typer.Option("", "--number", "-n", help="Number substring to search for."),
    amount: str = typer.Option("", "--amount", "-a", help="Exact amount to search for."),
) -> None:
    """
    Show the history tables for one game, date and group.
    """
    with _open_desk(game, business_date, group) as desk:
        desk.set_filters(number_query=number, amount_query=amount)
        render_tables(desk.tables, desk.selection, console)


@app.command()
def edit(
    record_id: int = typer.Argument(..., help="Id of the history record to correct."),
    game: int = GAME_OPTION,
    group: int = GROUP_OPTION,
    business_date: Optional[datetime] = DATE_OPTION,
    new_number: Optional[str] = typer.Option(None, "--set-number", help="New number."),
    new_amount: Optional[str] = typer.Option(None, "--set-amount", help="New amount."),
    new_type: Optional[int] = typer.Option(None, "--set-type", help="New bet type id."),
    new_game: Optional[int] = typer.Option(None, "--set-game", help="Move to another game id."),
) -> None:
    """
    Correct a single record and submit the change.
    """
    with _open_desk(game, business_date, group) as desk:
        try:
            session = desk.begin_edit(record_id)
        except KeyError:
            console.print(f"[red]Record {record_id} not found in this view.[/red]")
            raise typer.Exit(code=1)

        if new_number is not None:
            session.change_field("number", new_number)
        if new_amount is not None:
            session.change_field("amount", new_amount)
        if new_game is not None:
            target = next((g for g in desk.games if g.id == new_game), None)
            if target is None:
                console.print(f"[red]Unknown game {new_game}.[/red]")
                raise typer.Exit(code=1)
            session.change_field("game", target)
        if new_type is not None:
            option = next((t for t in session.type_options if t.id == new_type), None)
            if option is None:
                allowed = ", ".join(f"{t.id}={t.label}" for t in session.type_options) or "none"
                console.print(f"[red]Type {new_type} is not allowed here ({allowed}).[/red]")
                raise typer.Exit(code=1)
            session.change_field("type", option)

        result = desk.submit_edit(session)
        if result.status is SubmitStatus.INVALID:
            render_errors(result.errors, console)
        if not result.ok:
            raise typer.Exit(code=1)


@app.command()
def delete(
    record_ids: List[int] = typer.Argument(..., help="Ids of the records to delete."),
    game: int = GAME_OPTION,
    group: int = GROUP_OPTION,
    business_date: Optional[datetime] = DATE_OPTION,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """
    Delete one or more records from the current view.
    """
    with _open_desk(game, business_date, group) as desk:
        for record_id in record_ids:
            desk.selection.mark(record_id, True)
        if not yes:
            typer.confirm(
                f"Are you sure you want to delete {len(record_ids)} record(s)?", abort=True
            )
        if len(record_ids) == 1:
            ok = desk.delete_record(record_ids[0])
        else:
            ok = desk.delete_selected()
        if not ok:
            raise typer.Exit(code=1)


groups_app = typer.Typer(help="List and manage the group directory.")
app.add_typer(groups_app, name="groups")


@contextmanager
def _open_directory() -> Iterator[GroupDirectory]:
    """Build the group directory over the HTTP gateway and load it."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    with HttpLedgerGateway(settings) as gateway:
        directory = GroupDirectory(gateway)
        if not directory.load():
            notices = directory.drain_notices()
            if notices:
                render_notices(notices, console)
            else:
                console.print("[yellow]Session is not authenticated.[/yellow]")
            raise typer.Exit(code=1)
        try:
            yield directory
        finally:
            render_notices(directory.drain_notices(), console)


def _field_errors(exc: ValidationError) -> Dict[str, str]:
    return {".".join(str(p) for p in err["loc"]) or "group": err["msg"] for err in exc.errors()}


@groups_app.command("list")
def list_groups(
    search: str = typer.Option("", "--search", "-s", help="Group name substring."),
) -> None:
    """
    List the group directory.
    """
    with _open_directory() as directory:
        directory.search = search
        render_groups(directory.visible, console)


@groups_app.command("add")
def add_group(
    name: str = typer.Argument(..., help="Name of the new group."),
    commission: float = typer.Option(..., "--commission", "-c", help="Commission, below 100."),
    pana_payable: float = typer.Option(0, "--pana-payable", "-p", help="Pana payable."),
) -> None:
    """
    Add a group. Non-pana payable is derived as 100 - commission.
    """
    try:
        draft = GroupDraft(groupname=name, commission=commission, pana_payable=pana_payable)
    except ValidationError as exc:
        render_errors(_field_errors(exc), console)
        raise typer.Exit(code=1)
    with _open_directory() as directory:
        if not directory.add(draft):
            raise typer.Exit(code=1)


@groups_app.command("update")
def update_group(
    group_id: int = typer.Argument(..., help="Id of the group to change."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New group name."),
    commission: Optional[float] = typer.Option(None, "--commission", "-c", help="New commission."),
    pana_payable: Optional[float] = typer.Option(
        None, "--pana-payable", "-p", help="New pana payable."
    ),
) -> None:
    """
    Change a group's name or rates; omitted values are kept.
    """
    with _open_directory() as directory:
        group = directory.find(group_id)
        if group is None:
            console.print(f"[red]Group {group_id} not found.[/red]")
            raise typer.Exit(code=1)
        try:
            draft = group.draft(groupname=name, commission=commission, pana_payable=pana_payable)
        except ValidationError as exc:
            render_errors(_field_errors(exc), console)
            raise typer.Exit(code=1)
        if not directory.update(group_id, draft):
            raise typer.Exit(code=1)


@groups_app.command("delete")
def delete_group(
    group_id: int = typer.Argument(..., help="Id of the group to delete."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """
    Delete a group.
    """
    with _open_directory() as directory:
        if not yes:
            typer.confirm(f"Are you sure you want to delete group {group_id}?", abort=True)
        if not directory.delete(group_id):
            raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
