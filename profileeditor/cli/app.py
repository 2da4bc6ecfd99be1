"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, List, Optional, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..adapters.json_profile_store import JsonProfileStore
from ..config import AppConfig
from ..domain.calendar_dates import parse_month
from ..domain.date_set import DateSetEngine
from ..domain.exceptions import IncompleteServicesError, ProfileEditorError
from ..domain.service_catalog import CatalogCommit
from ..domain.service_models import Category, ServiceRecord
from ..services.profile_edit_session import ProfileEditSession

app = typer.Typer(
    name="profileeditor",
    help="Edit the availability calendar and service catalog of marketplace profiles",
    add_completion=False
)
availability_app = typer.Typer(help="Manage available dates.", add_completion=False)
services_app = typer.Typer(help="Manage offered services.", add_completion=False)
app.add_typer(availability_app, name="availability")
app.add_typer(services_app, name="services")

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
StoreOption = Annotated[Optional[Path], typer.Option("--store", "-s", help="Profile JSON file. Overrides the config.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")]

EDIT_OPERATIONS = ("toggle", "week", "month", "clear")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _open_session(
    user_id: str,
    config_file: Optional[Path],
    store_file: Optional[Path],
    verbose: bool,
) -> Tuple[AppConfig, ProfileEditSession]:
    config = AppConfig.load(config_file)
    _configure_logging("DEBUG" if verbose else config.log_level)

    store = JsonProfileStore(store_file or config.store.path)
    session = ProfileEditSession.from_config(store, user_id, config)
    session.load()
    return config, session


def _fail(message: object) -> typer.Exit:
    console.print(f"[bold red]Erreur:[/bold red] {escape(str(message))}")
    return typer.Exit(1)


def parse_edit_operation(raw: str) -> Tuple[str, Optional[str]]:
    """
    Split ``kind:value`` into its parts.

    Raises:
        typer.BadParameter: If the operation kind is unknown or lacks a value
    """
    kind, _, value = raw.partition(":")
    kind = kind.strip().lower()
    if kind not in EDIT_OPERATIONS:
        raise typer.BadParameter(
            f"Unknown operation '{raw}'. Use toggle:YYYY-MM-DD, week:YYYY-MM-DD, month:YYYY-MM or clear."
        )
    if kind == "clear":
        return kind, None
    if not value.strip():
        raise typer.BadParameter(f"Operation '{kind}' needs a date, e.g. {kind}:2024-03-04")
    return kind, value.strip()


def apply_edit_operation(editor: DateSetEngine, kind: str, value: Optional[str]) -> str:
    """Apply one parsed operation and describe what changed."""
    if kind == "clear":
        editor.clear()
        return "toutes les dates effacées"
    if kind == "toggle":
        selected = editor.toggle_date(value)
        return f"{value} {'ajoutée' if selected else 'retirée'}"
    if kind == "week":
        added = editor.select_week(value)
        return f"semaine du {value}: {len(added)} date(s) ajoutée(s)"
    added = editor.select_month(parse_month(value, editor.timezone))
    return f"mois {value}: {len(added)} date(s) ajoutée(s)"


def _print_availability(editor: DateSetEngine, config: AppConfig) -> None:
    shown, remaining = editor.preview(config.availability.preview_limit)
    console.print(f"[bold]Dates sélectionnées : {editor.count}[/bold]")
    if not shown:
        console.print("[dim]Aucune date sélectionnée.[/dim]")
        return
    labels = [d.format("D MMM YYYY", locale=config.locale) for d in shown]
    console.print("  " + ", ".join(labels))
    if remaining:
        console.print(f"  [dim]... et {remaining} autres dates[/dim]")


def _format_amount(value: Optional[float], suffix: str) -> str:
    if not value:
        return "-"
    return f"{value:g} {suffix}"


def _service_status(record: ServiceRecord) -> str:
    reasons = record.validation_reasons()
    if not reasons:
        return "[green]✓[/green]"
    return "[yellow]" + ", ".join(reason.value for reason in reasons) + "[/yellow]"


def _print_rejections(result: CatalogCommit) -> None:
    console.print("[yellow]⚠ Services incomplets:[/yellow]")
    for outcome in result.rejected:
        name = outcome.record.name.strip() or "(sans nom)"
        console.print(f"  #{outcome.index + 1} {escape(name)}")
        for reason in outcome.reasons:
            console.print(f"     - {reason.message}")


@availability_app.command("show")
def availability_show(
    user_id: Annotated[str, typer.Argument(help="Profile user id")],
    config_file: ConfigOption = None,
    store_file: StoreOption = None,
    verbose: VerboseOption = False,
):
    """
    Show the available dates of a profile.
    """
    try:
        config, session = _open_session(user_id, config_file, store_file, verbose)
        _print_availability(session.open_availability_editor(), config)
    except (ProfileEditorError, FileNotFoundError, ValueError) as e:
        raise _fail(e)


@availability_app.command("edit")
def availability_edit(
    user_id: Annotated[str, typer.Argument(help="Profile user id")],
    operations: Annotated[List[str], typer.Argument(help="Operations applied in order: toggle:DATE, week:DATE, month:YYYY-MM, clear")],
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show the result without saving.")] = False,
    config_file: ConfigOption = None,
    store_file: StoreOption = None,
    verbose: VerboseOption = False,
):
    """
    Edit available dates with single-day and bulk operations.

    Examples:

        profileeditor availability edit pro-1 week:2024-03-04 toggle:2024-03-04

        profileeditor availability edit pro-1 clear month:2024-03 --dry-run
    """
    parsed = [parse_edit_operation(raw) for raw in operations]

    try:
        config, session = _open_session(user_id, config_file, store_file, verbose)
        editor = session.open_availability_editor()

        for kind, value in parsed:
            console.print(f"  • {apply_edit_operation(editor, kind, value)}")

        console.print()
        _print_availability(editor, config)

        if dry_run:
            console.print("\n[yellow]⊘ Non enregistré (--dry-run)[/yellow]")
            return

        session.save_availability(editor)
        console.print("\n[green]✓ Disponibilités mises à jour[/green]")
    except (ProfileEditorError, FileNotFoundError, ValueError) as e:
        raise _fail(e)


@services_app.command("list")
def services_list(
    user_id: Annotated[str, typer.Argument(help="Profile user id")],
    config_file: ConfigOption = None,
    store_file: StoreOption = None,
    verbose: VerboseOption = False,
):
    """
    List the services of a profile.
    """
    try:
        _, session = _open_session(user_id, config_file, store_file, verbose)
        records = session.services
    except (ProfileEditorError, FileNotFoundError, ValueError) as e:
        raise _fail(e)

    if not records:
        console.print("[yellow]Aucun service.[/yellow]")
        return

    table = Table(title="Services proposés", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Nom", style="bold yellow")
    table.add_column("Catégorie")
    table.add_column("Prix")
    table.add_column("Tarif horaire")
    table.add_column("Disponibilité")
    table.add_column("Statut")

    for idx, record in enumerate(records, 1):
        pricing = record.category_class.shows_pricing
        table.add_row(
            str(idx),
            escape(record.name),
            record.category.label if record.category else "-",
            _format_amount(record.price, "€") if pricing else "-",
            _format_amount(record.hourly_rate, "€/h") if pricing else "-",
            (record.availability or "-") if record.category_class.shows_availability else "-",
            _service_status(record),
        )

    console.print()
    console.print(table)
    console.print()


@services_app.command("add")
def services_add(
    user_id: Annotated[str, typer.Argument(help="Profile user id")],
    name: Annotated[str, typer.Option("--name", "-n", help="Service name")],
    description: Annotated[str, typer.Option("--description", help="Service description")] = "",
    price: Annotated[Optional[str], typer.Option("--price", help="Fixed fee in €")] = None,
    hourly_rate: Annotated[Optional[str], typer.Option("--hourly-rate", help="Hourly rate in €/h")] = None,
    category: Annotated[Optional[str], typer.Option("--category", help="Category, see 'profileeditor categories'")] = None,
    availability: Annotated[Optional[str], typer.Option("--availability", help="Availability text for evenementiel/media postings")] = None,
    features: Annotated[Optional[List[str]], typer.Option("--feature", "-f", help="Included feature (repeatable)")] = None,
    force: Annotated[bool, typer.Option("--force", help="Save even if incomplete services get dropped.")] = False,
    config_file: ConfigOption = None,
    store_file: StoreOption = None,
    verbose: VerboseOption = False,
):
    """
    Add a service to a profile.
    """
    try:
        _, session = _open_session(user_id, config_file, store_file, verbose)
        editor = session.open_service_editor()

        # An empty catalog opens with one blank template; fill that one in.
        if session.services:
            editor.add_record()
        index = len(editor) - 1

        editor.set_name(index, name)
        editor.set_description(index, description)
        editor.set_category(index, category)
        editor.set_price(index, price)
        editor.set_hourly_rate(index, hourly_rate)
        editor.set_availability(index, availability)
        for position, feature in enumerate(features or []):
            if position > 0:
                editor.add_feature(index)
            editor.update_feature(index, position, feature)

        result = session.save_services(editor, drop_incomplete=force or None)
    except IncompleteServicesError as e:
        _print_rejections(e.result)
        console.print("Rien n'a été enregistré. Utilisez --force pour enregistrer sans ces services.")
        raise typer.Exit(1)
    except (ProfileEditorError, FileNotFoundError, ValueError) as e:
        raise _fail(e)

    if result.rejected:
        _print_rejections(result)
    console.print(f"[green]✓ {len(result.records)} service(s) enregistré(s)[/green]")


@services_app.command("remove")
def services_remove(
    user_id: Annotated[str, typer.Argument(help="Profile user id")],
    position: Annotated[int, typer.Argument(help="Service number as shown by 'services list'", min=1)],
    config_file: ConfigOption = None,
    store_file: StoreOption = None,
    verbose: VerboseOption = False,
):
    """
    Remove a service from a profile.
    """
    try:
        _, session = _open_session(user_id, config_file, store_file, verbose)
        stored = session.services
        if position > len(stored):
            raise _fail(f"Service #{position} introuvable ({len(stored)} service(s)).")

        editor = session.open_service_editor()
        removed = editor.remove_record(position - 1)
        session.save_services(editor)
    except IncompleteServicesError as e:
        _print_rejections(e.result)
        raise typer.Exit(1)
    except (ProfileEditorError, FileNotFoundError, ValueError) as e:
        raise _fail(e)

    console.print(f"[green]✓ Service '{removed.name}' supprimé[/green]")


@app.command()
def categories():
    """
    List service categories.
    """
    table = Table(title="Catégories de service", show_header=True, header_style="bold cyan")
    table.add_column("Valeur", style="bold yellow")
    table.add_column("Libellé")
    table.add_column("Type")

    for category in Category:
        kind = "candidature" if category.category_class.shows_availability else "tarifé"
        table.add_row(category.value, category.label, kind)

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]profileeditor[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
